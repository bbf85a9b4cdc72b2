"""Page geometry and layout primitives for the report PDF export.

Coordinates are millimetres on an A4 portrait page, measured from the top
edge, with ``y`` giving the text baseline. The numbers below are part of the
export's visual contract: section page-break thresholds in particular decide
where a new page starts and are pinned by tests.
"""

from collections.abc import Callable, Sequence
from dataclasses import dataclass
from typing import Protocol

Color = tuple[int, int, int]

# ---------------------------------------------------------------------------
# Page geometry
# ---------------------------------------------------------------------------
PAGE_WIDTH = 210
PAGE_CENTER_X = 105
LEFT_MARGIN = 15
RIGHT_EDGE = 195
RIGHT_COLUMN_X = 110
BULLET_INDENT_X = 20
PAGE_TOP_MARGIN = 20
PAGE_BOTTOM_MARGIN = 20

# Header block
TITLE_Y = 20
SUBTITLE_OFFSET = 8
RULE_OFFSET = 15
HEADER_HEIGHT = 25

# Patient / report details block
INFO_FIELD_OFFSET = 6
INFO_LINE_SPACING = 5
INFO_BLOCK_HEIGHT = 25

# Tables
TABLE_TITLE_GAP = 5
TABLE_TRAILING_MARGIN = 15
TABLE_LINE_HEIGHT = 5

# Page-break thresholds, checked once before a section starts
INTERPRETATION_BREAK_AFTER = 250
ANALYSIS_BREAK_AFTER = 240
MEDICINE_BREAK_AFTER = 240

# Text sections
SECTION_TITLE_GAP = 8
LIST_LABEL_GAP = 5
FINDING_WRAP_WIDTH = 180
FINDING_LINE_HEIGHT = 5
FINDING_LIST_GAP = 5
ANALYSIS_WRAP_WIDTH = 175
ANALYSIS_LINE_HEIGHT = 4
ANALYSIS_ITEM_GAP = 2
ANALYSIS_SECTION_GAP = 3

# Font sizes (pt)
TITLE_SIZE = 20
SECTION_SIZE = 12
BODY_SIZE = 10
DETAIL_SIZE = 9
TABLE_SIZE = 8
FOOTER_SIZE = 7

# Colours
BLACK: Color = (0, 0, 0)
BRAND_BLUE: Color = (30, 64, 175)
TABLE_HEAD_BLUE: Color = (37, 99, 235)
MEDICINE_GREEN: Color = (16, 185, 129)
ALERT_RED: Color = (220, 38, 38)
SUBTITLE_GREY: Color = (100, 100, 100)
DETAIL_GREY: Color = (80, 80, 80)
RULE_GREY: Color = (200, 200, 200)
STRIPE_FILL: Color = (245, 245, 245)
FOOTER_GREY: Color = (128, 128, 128)


@dataclass(frozen=True)
class TableStyle:
    head_fill: Color
    striped: bool = False
    grid: bool = False
    font_size: float = TABLE_SIZE
    line_height: float = TABLE_LINE_HEIGHT


class DocumentSink(Protocol):
    """Drawing surface the section renderers write to."""

    def write_text(
        self,
        x: float,
        y: float,
        content: str,
        *,
        size: float,
        color: Color = BLACK,
        bold: bool = False,
        align: str = "left",
    ) -> None: ...

    def draw_rule(self, x1: float, x2: float, y: float, color: Color = RULE_GREY) -> None: ...

    def measure(self, content: str, *, size: float, bold: bool = False) -> float: ...

    def add_page(self) -> None: ...

    def draw_table(
        self,
        start_y: float,
        headings: Sequence[str],
        rows: Sequence[Sequence[str]],
        style: TableStyle,
    ) -> float:
        """Draw a self-paginating table and return the offset below its last row."""
        ...


def wrap_text(text: str, max_width: float, measure: Callable[[str], float]) -> list[str]:
    """
    Split ``text`` into the fewest lines whose measured width fits ``max_width``.

    Lines break only at whitespace; a single word wider than ``max_width`` is
    kept whole on its own line. Explicit newlines always start a new line.
    Text that already fits comes back unchanged as a one-element list.
    """
    lines: list[str] = []
    for paragraph in text.split("\n"):
        if measure(paragraph) <= max_width:
            lines.append(paragraph)
            continue
        current = ""
        for word in paragraph.split():
            candidate = f"{current} {word}" if current else word
            if current and measure(candidate) > max_width:
                lines.append(current)
                current = word
            else:
                current = candidate
        lines.append(current)
    return lines


class RenderCursor:
    """Running vertical write position for a single render."""

    def __init__(self, sink: DocumentSink, start: float = TITLE_Y, top_margin: float = PAGE_TOP_MARGIN):
        self._sink = sink
        self._y = float(start)
        self.top_margin = float(top_margin)
        self.page_breaks = 0

    def position(self) -> float:
        return self._y

    def advance(self, amount: float) -> None:
        self._y += amount

    def move_to(self, y: float) -> None:
        # Tables paginate themselves and may finish on a later page.
        self._y = float(y)

    def ensure_room(self, threshold: float) -> bool:
        """Start a new page when the cursor is already past ``threshold``."""
        if self._y <= threshold:
            return False
        self._sink.add_page()
        self._y = self.top_margin
        self.page_breaks += 1
        return True
