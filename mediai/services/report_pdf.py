"""
Paginated PDF export of a structured lab report.

Sections are drawn in a fixed order against one document sink:
header, patient/report details, test results, interpretation, pathologist
analysis, medicine suggestions. Every section except the header draws
nothing and consumes no space when its data is missing.
"""

import logging
from collections.abc import Sequence
from dataclasses import dataclass
from datetime import date, datetime

from mediai.schemas import (
    InterpretationSummary,
    MedicineSuggestion,
    PathologistAnalysis,
    PatientInformation,
    ReportDetails,
    ReportDocument,
    StoredReport,
    TestResult,
)
from mediai.services.layout import (
    ALERT_RED,
    ANALYSIS_BREAK_AFTER,
    ANALYSIS_ITEM_GAP,
    ANALYSIS_LINE_HEIGHT,
    ANALYSIS_SECTION_GAP,
    ANALYSIS_WRAP_WIDTH,
    BLACK,
    BODY_SIZE,
    BRAND_BLUE,
    BULLET_INDENT_X,
    DETAIL_GREY,
    DETAIL_SIZE,
    FINDING_LINE_HEIGHT,
    FINDING_LIST_GAP,
    FINDING_WRAP_WIDTH,
    HEADER_HEIGHT,
    INFO_BLOCK_HEIGHT,
    INFO_FIELD_OFFSET,
    INFO_LINE_SPACING,
    INTERPRETATION_BREAK_AFTER,
    LEFT_MARGIN,
    LIST_LABEL_GAP,
    MEDICINE_BREAK_AFTER,
    MEDICINE_GREEN,
    PAGE_CENTER_X,
    RIGHT_COLUMN_X,
    RIGHT_EDGE,
    RULE_OFFSET,
    SECTION_SIZE,
    SECTION_TITLE_GAP,
    SUBTITLE_GREY,
    SUBTITLE_OFFSET,
    TABLE_HEAD_BLUE,
    TABLE_TITLE_GAP,
    TABLE_TRAILING_MARGIN,
    TITLE_SIZE,
    Color,
    DocumentSink,
    RenderCursor,
    TableStyle,
    wrap_text,
)
from mediai.services.pdf_document import ReportPDF
from mediai.services.report_view import display, format_date
from mediai.services.results import RESULT_COLUMNS, result_row

logger = logging.getLogger(__name__)

FALLBACK_TITLE = "Medical Report Analysis"
FALLBACK_PATIENT = "Patient"
BULLET = "•"

MEDICINE_COLUMNS = ["Medicine", "Formula", "Purpose"]
RESULTS_TABLE = TableStyle(head_fill=TABLE_HEAD_BLUE, striped=True)
MEDICINE_TABLE = TableStyle(head_fill=MEDICINE_GREEN, grid=True)


def _draw_wrapped(
    sink: DocumentSink,
    cursor: RenderCursor,
    content: str,
    *,
    width: float,
    size: float,
    line_height: float,
    color: Color = BLACK,
) -> int:
    """Draw ``content`` wrapped at the bullet indent; returns the number of lines."""
    lines = wrap_text(content, width, lambda text: sink.measure(text, size=size))
    top = cursor.position()
    for index, line in enumerate(lines):
        sink.write_text(BULLET_INDENT_X, top + index * line_height, line, size=size, color=color)
    return len(lines)


def render_header(
    document: ReportDocument,
    cursor: RenderCursor,
    sink: DocumentSink,
    *,
    generated_for: str | None = None,
    generated_on: date | datetime | None = None,
) -> None:
    y = cursor.position()
    sink.write_text(
        PAGE_CENTER_X, y, document.report_type or FALLBACK_TITLE, size=TITLE_SIZE, color=BRAND_BLUE, align="center"
    )
    subtitle = f"Generated for {generated_for or FALLBACK_PATIENT} | {format_date(generated_on)}"
    sink.write_text(PAGE_CENTER_X, y + SUBTITLE_OFFSET, subtitle, size=BODY_SIZE, color=SUBTITLE_GREY, align="center")
    sink.draw_rule(LEFT_MARGIN, RIGHT_EDGE, y + RULE_OFFSET)
    cursor.advance(HEADER_HEIGHT)


def render_patient_info(
    patient: PatientInformation | None,
    details: ReportDetails | None,
    cursor: RenderCursor,
    sink: DocumentSink,
) -> None:
    if patient is None and details is None:
        return
    patient = patient or PatientInformation()
    details = details or ReportDetails()

    y = cursor.position()
    sink.write_text(LEFT_MARGIN, y, "Patient Details", size=SECTION_SIZE)
    sink.write_text(RIGHT_COLUMN_X, y, "Report Details", size=SECTION_SIZE)

    left = [
        f"Name: {display(patient.name)}",
        f"Age/Sex: {display(patient.age)} / {display(patient.sex)}",
        f"Ref By: {display(patient.referred_by)}",
    ]
    right = [
        f"Lab: {display(details.lab_name)}",
        f"Collected: {display(details.collected_on)}",
        f"Reported: {display(details.reported_on)}",
    ]
    for index, (left_line, right_line) in enumerate(zip(left, right)):
        line_y = y + INFO_FIELD_OFFSET + index * INFO_LINE_SPACING
        sink.write_text(LEFT_MARGIN, line_y, left_line, size=DETAIL_SIZE, color=DETAIL_GREY)
        sink.write_text(RIGHT_COLUMN_X, line_y, right_line, size=DETAIL_SIZE, color=DETAIL_GREY)
    cursor.advance(INFO_BLOCK_HEIGHT)


def render_test_results(results: Sequence[TestResult], cursor: RenderCursor, sink: DocumentSink) -> None:
    if not results:
        return
    y = cursor.position()
    sink.write_text(LEFT_MARGIN, y, "Test Results", size=SECTION_SIZE, color=BRAND_BLUE)
    final_y = sink.draw_table(y + TABLE_TITLE_GAP, RESULT_COLUMNS, [result_row(r) for r in results], RESULTS_TABLE)
    cursor.move_to(final_y + TABLE_TRAILING_MARGIN)


def render_interpretation(summary: InterpretationSummary | None, cursor: RenderCursor, sink: DocumentSink) -> None:
    if summary is None:
        return
    cursor.ensure_room(INTERPRETATION_BREAK_AFTER)

    sink.write_text(LEFT_MARGIN, cursor.position(), "Interpretation & Analysis", size=SECTION_SIZE, color=BRAND_BLUE)
    cursor.advance(SECTION_TITLE_GAP)
    sink.write_text(LEFT_MARGIN, cursor.position(), f"Overall Status: {display(summary.overall_status)}", size=BODY_SIZE)
    cursor.advance(SECTION_TITLE_GAP)

    if not summary.abnormal_findings:
        return
    sink.write_text(LEFT_MARGIN, cursor.position(), "Abnormal Findings:", size=DETAIL_SIZE, color=ALERT_RED)
    cursor.advance(LIST_LABEL_GAP)
    for finding in summary.abnormal_findings:
        entry = f"{BULLET} {display(finding.parameter)}: {display(finding.clinical_significance)}"
        lines = _draw_wrapped(
            sink,
            cursor,
            entry,
            width=FINDING_WRAP_WIDTH,
            size=DETAIL_SIZE,
            line_height=FINDING_LINE_HEIGHT,
            color=ALERT_RED,
        )
        cursor.advance(lines * FINDING_LINE_HEIGHT)
    cursor.advance(FINDING_LIST_GAP)


def _render_bullets(title: str, items: Sequence[str], cursor: RenderCursor, sink: DocumentSink) -> None:
    if not items:
        return
    sink.write_text(LEFT_MARGIN, cursor.position(), title, size=DETAIL_SIZE, bold=True)
    cursor.advance(LIST_LABEL_GAP)
    for item in items:
        lines = _draw_wrapped(
            sink,
            cursor,
            f"{BULLET} {item}",
            width=ANALYSIS_WRAP_WIDTH,
            size=DETAIL_SIZE,
            line_height=ANALYSIS_LINE_HEIGHT,
        )
        cursor.advance(lines * ANALYSIS_LINE_HEIGHT + ANALYSIS_ITEM_GAP)
    cursor.advance(ANALYSIS_SECTION_GAP)


def render_pathologist_analysis(
    analysis: PathologistAnalysis | None,
    cursor: RenderCursor,
    sink: DocumentSink,
) -> None:
    if analysis is None:
        return
    cursor.ensure_room(ANALYSIS_BREAK_AFTER)

    sink.write_text(LEFT_MARGIN, cursor.position(), "Pathologist Analysis", size=SECTION_SIZE, color=BRAND_BLUE)
    cursor.advance(SECTION_TITLE_GAP)
    _render_bullets("Key Findings:", analysis.key_findings, cursor, sink)
    _render_bullets("Recommendations:", analysis.recommendations, cursor, sink)


def render_medicine_suggestions(
    suggestions: Sequence[MedicineSuggestion],
    cursor: RenderCursor,
    sink: DocumentSink,
) -> None:
    if not suggestions:
        return
    cursor.ensure_room(MEDICINE_BREAK_AFTER)

    y = cursor.position()
    sink.write_text(LEFT_MARGIN, y, "Suggested Medicines", size=SECTION_SIZE, color=BRAND_BLUE)
    rows = [[display(m.name), display(m.formula), display(m.purpose)] for m in suggestions]
    cursor.move_to(sink.draw_table(y + TABLE_TITLE_GAP, MEDICINE_COLUMNS, rows, MEDICINE_TABLE))


def render_report(
    document: ReportDocument | None,
    sink: DocumentSink,
    *,
    generated_for: str | None = None,
    generated_on: date | datetime | None = None,
) -> RenderCursor:
    """Draw every section of ``document`` onto ``sink`` and return the final cursor."""
    document = document or ReportDocument()
    cursor = RenderCursor(sink)
    render_header(document, cursor, sink, generated_for=generated_for, generated_on=generated_on)
    render_patient_info(document.patient_information, document.report_details, cursor, sink)
    render_test_results(document.test_results, cursor, sink)
    render_interpretation(document.interpretation_summary, cursor, sink)
    render_pathologist_analysis(document.diagnostic_pathologist_analysis, cursor, sink)
    render_medicine_suggestions(document.medicine_suggestions, cursor, sink)
    return cursor


def build_report_pdf(
    document: ReportDocument | None,
    *,
    generated_for: str | None = None,
    generated_on: date | datetime | None = None,
) -> bytes:
    pdf = ReportPDF()
    pdf.add_page()
    render_report(document, pdf, generated_for=generated_for, generated_on=generated_on)
    content = bytes(pdf.output())
    logger.info("Rendered report PDF: %d page(s), %d bytes", pdf.page_no(), len(content))
    return content


@dataclass(frozen=True)
class ReportExport:
    filename: str
    content: bytes
    mime: str = "application/pdf"


def report_filename(report_id: str, detailed: bool = False) -> str:
    prefix = "MediAI_Detailed_Report" if detailed else "MediAI_Report"
    return f"{prefix}_{report_id}.pdf"


def export_report(
    report: StoredReport | None,
    *,
    detailed: bool = False,
    generated_for: str | None = None,
    generated_on: date | datetime | None = None,
) -> ReportExport | None:
    """Build the downloadable PDF for ``report``; None when there is nothing to export."""
    if report is None:
        logger.debug("Export requested before any report was loaded")
        return None
    content = build_report_pdf(report.structured_data, generated_for=generated_for, generated_on=generated_on)
    return ReportExport(filename=report_filename(report.id, detailed=detailed), content=content)
