import pytest

from mediai.services.layout import PAGE_TOP_MARGIN, RenderCursor, wrap_text


def measure(text: str) -> float:
    return float(len(text))


# ---------------------------------------------------------------------------
# wrap_text
# ---------------------------------------------------------------------------

def test_wrap_empty_string_is_one_empty_line():
    assert wrap_text("", 10, measure) == [""]


def test_wrap_text_that_fits_is_unchanged():
    text = "Iron  studies "
    assert wrap_text(text, 40, measure) == [text]


def test_wrap_breaks_at_whitespace_into_fewest_lines():
    assert wrap_text("aaa bbb ccc", 7, measure) == ["aaa bbb", "ccc"]


def test_wrap_never_splits_a_word():
    text = "Repeat complete blood count after four weeks of supplementation"
    lines = wrap_text(text, 20, measure)

    assert len(lines) > 1
    assert all(measure(line) <= 20 for line in lines)
    assert " ".join(lines).split() == text.split()


def test_wrap_keeps_oversized_word_whole():
    assert wrap_text("see Thrombocytopenia now", 10, measure) == ["see", "Thrombocytopenia", "now"]


def test_wrap_honours_explicit_newlines():
    assert wrap_text("first\nsecond", 50, measure) == ["first", "second"]


@pytest.mark.parametrize("width", [8, 15, 30])
def test_wrap_is_idempotent(width):
    text = "Mild microcytic anemia with raised leukocyte count suggests infection"
    lines = wrap_text(text, width, measure)

    assert [wrapped for line in lines for wrapped in wrap_text(line, width, measure)] == lines


# ---------------------------------------------------------------------------
# RenderCursor
# ---------------------------------------------------------------------------

def test_cursor_advance_and_move_to(sink):
    cursor = RenderCursor(sink)
    assert cursor.position() == 20

    cursor.advance(25)
    assert cursor.position() == 45

    cursor.move_to(130.5)
    assert cursor.position() == 130.5


def test_ensure_room_keeps_page_at_threshold(sink):
    cursor = RenderCursor(sink, start=250)

    assert cursor.ensure_room(250) is False
    assert cursor.position() == 250
    assert sink.page == 1


def test_ensure_room_breaks_past_threshold(sink):
    cursor = RenderCursor(sink, start=251)

    assert cursor.ensure_room(250) is True
    assert cursor.position() == PAGE_TOP_MARGIN
    assert cursor.page_breaks == 1
    assert sink.page == 2
