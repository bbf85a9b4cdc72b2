"""FPDF2 drawing surface for the report export."""

from collections.abc import Sequence

from fpdf import FPDF
from fpdf.enums import TableBordersLayout, TableCellFillMode
from fpdf.fonts import FontFace

from mediai.services.layout import (
    BLACK,
    FOOTER_GREY,
    FOOTER_SIZE,
    LEFT_MARGIN,
    PAGE_BOTTOM_MARGIN,
    PAGE_TOP_MARGIN,
    PAGE_WIDTH,
    RIGHT_EDGE,
    RULE_GREY,
    STRIPE_FILL,
    Color,
    TableStyle,
)

DISCLAIMER = (
    "This analysis is generated by AI and is not a substitute for professional medical advice. "
    "Always consult with a qualified healthcare provider."
)


class ReportPDF(FPDF):
    """A4 millimetre document drawn with absolute coordinates."""

    FONT = "Helvetica"
    # Core fonts only cover a single-byte code page; cp1252 keeps the bullet glyph.
    ENCODING = "windows-1252"

    def __init__(self):
        super().__init__(orientation="P", unit="mm", format="A4")
        self.core_fonts_encoding = self.ENCODING
        self.set_margins(LEFT_MARGIN, PAGE_TOP_MARGIN, PAGE_WIDTH - RIGHT_EDGE)
        self.set_auto_page_break(auto=True, margin=PAGE_BOTTOM_MARGIN)

    @classmethod
    def normalize(cls, content: object) -> str:
        """Replace characters the core fonts cannot encode instead of raising."""
        text = "" if content is None else str(content)
        return text.encode(cls.ENCODING, errors="replace").decode(cls.ENCODING)

    def footer(self):
        self.set_y(-12)
        self.set_font(self.FONT, "I", FOOTER_SIZE)
        self.set_text_color(*FOOTER_GREY)
        self.cell(0, 4, self.normalize(DISCLAIMER), align="C", new_x="LMARGIN", new_y="NEXT")
        self.cell(0, 4, f"Page {self.page_no()}", align="C")

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
    ) -> None:
        text = self.normalize(content)
        self.set_font(self.FONT, "B" if bold else "", size)
        self.set_text_color(*color)
        if align == "center":
            x -= self.get_string_width(text) / 2
        self.text(x, y, text)

    def draw_rule(self, x1: float, x2: float, y: float, color: Color = RULE_GREY) -> None:
        self.set_draw_color(*color)
        self.line(x1, y, x2, y)

    def measure(self, content: str, *, size: float, bold: bool = False) -> float:
        self.set_font(self.FONT, "B" if bold else "", size)
        return self.get_string_width(self.normalize(content))

    def draw_table(
        self,
        start_y: float,
        headings: Sequence[str],
        rows: Sequence[Sequence[str]],
        style: TableStyle,
    ) -> float:
        self.set_y(start_y)
        self.set_font(self.FONT, "", style.font_size)
        self.set_text_color(*BLACK)
        self.set_draw_color(*RULE_GREY)
        with self.table(
            headings_style=FontFace(emphasis="BOLD", color=(255, 255, 255), fill_color=style.head_fill),
            cell_fill_color=STRIPE_FILL if style.striped else None,
            cell_fill_mode=TableCellFillMode.ROWS if style.striped else TableCellFillMode.NONE,
            borders_layout=TableBordersLayout.ALL if style.grid else TableBordersLayout.NONE,
            line_height=style.line_height,
            text_align="LEFT",
        ) as table:
            for values in (headings, *rows):
                row = table.row()
                for value in values:
                    row.cell(self.normalize(value))
        return self.get_y()
