from datetime import date

import pytest

from mediai.schemas import (
    AbnormalFinding,
    InterpretationSummary,
    MedicineSuggestion,
    PathologistAnalysis,
    ReportDocument,
    StoredReport,
)
from mediai.schemas import TestResult as LabResult
from mediai.services.layout import RenderCursor
from mediai.services.pdf_document import ReportPDF
from mediai.services.report_pdf import (
    MEDICINE_TABLE,
    RESULTS_TABLE,
    build_report_pdf,
    export_report,
    render_interpretation,
    render_medicine_suggestions,
    render_pathologist_analysis,
    render_report,
    report_filename,
)

SECTION_TITLES = [
    "Patient Details",
    "Test Results",
    "Interpretation & Analysis",
    "Pathologist Analysis",
    "Suggested Medicines",
]


# ---------------------------------------------------------------------------
# Whole-document rendering
# ---------------------------------------------------------------------------

def test_empty_document_draws_only_header(sink):
    cursor = render_report(ReportDocument(), sink, generated_on=date(2025, 1, 2))

    assert sink.texts == ["Medical Report Analysis", "Generated for Patient | 01/02/2025"]
    assert [op[0] for op in sink.ops] == ["text", "text", "rule"]
    assert cursor.position() == 45
    assert cursor.page_breaks == 0


def test_missing_document_renders_like_empty(sink):
    render_report(None, sink, generated_for="Asha", generated_on=date(2025, 3, 9))

    assert sink.texts == ["Medical Report Analysis", "Generated for Asha | 03/09/2025"]


def test_header_uses_report_type(sink, full_document):
    render_report(full_document, sink, generated_for="Asha Verma", generated_on=date(2025, 1, 2))

    assert sink.find("Complete Blood Count")[3] == 20
    assert sink.find("Generated for Asha Verma | 01/02/2025")[3] == 28
    assert ("rule", 1, 15, 195, 35) in sink.ops


def test_sections_are_drawn_in_order(sink, full_document):
    render_report(full_document, sink)

    drawn = [text for text in sink.texts if text in SECTION_TITLES]
    assert drawn == SECTION_TITLES


def test_full_document_vertical_layout(sink, full_document):
    cursor = render_report(full_document, sink)

    assert sink.find("Patient Details")[3] == 45
    assert sink.find("Name: Asha Verma")[3] == 51
    assert sink.find("Reported: 2025-01-02")[3] == 61
    assert sink.find("Test Results")[3] == 70
    assert sink.find("Interpretation & Analysis")[3] == 110
    assert sink.find("Overall Status: Needs Attention")[3] == 118
    assert sink.find("• Hemoglobin: Mild anemia")[3] == 131
    assert sink.find("Pathologist Analysis")[3] == 141
    assert sink.find("Recommendations:")[3] == 163
    assert sink.find("• Iron studies")[3] == 174
    assert sink.find("Suggested Medicines")[3] == 183
    assert cursor.position() == 198
    assert sink.page == 1


def test_results_table_rows(sink):
    doc = ReportDocument(
        test_results=[
            LabResult(test_name="Hemoglobin", value="13.5", unit="g/dL", reference_range="13-17", status="normal"),
            LabResult(test_name="ESR"),
        ]
    )
    cursor = render_report(doc, sink)

    (table,) = sink.tables
    _, _, start_y, headings, rows, style = table
    assert start_y == 50
    assert headings == ["Test Name", "Value", "Unit", "Reference Range", "Status"]
    assert rows == [
        ["Hemoglobin", "13.5", "g/dL", "13-17", "normal"],
        ["ESR", "-", "-", "-", "-"],
    ]
    assert style == RESULTS_TABLE
    assert cursor.position() == 50 + 15 + 15


def test_partial_patient_block_uses_placeholders(sink):
    render_report(ReportDocument(patient_information={"name": "Ravi"}), sink)

    assert "Name: Ravi" in sink.texts
    assert "Age/Sex: - / -" in sink.texts
    assert "Lab: -" in sink.texts


def test_empty_medicine_list_draws_nothing(sink, full_document):
    doc = full_document.model_copy(update={"medicine_suggestions": []})
    render_report(doc, sink)

    assert "Suggested Medicines" not in sink.texts
    assert all(table[5] != MEDICINE_TABLE for table in sink.tables)


def test_medicine_table_rows(sink, full_document):
    render_report(full_document, sink)

    medicine = [table for table in sink.tables if table[5] == MEDICINE_TABLE]
    assert medicine[0][3] == ["Medicine", "Formula", "Purpose"]
    assert medicine[0][4] == [["Ferrous Sulfate", "FeSO4", "Iron supplementation"]]


# ---------------------------------------------------------------------------
# Section renderers
# ---------------------------------------------------------------------------

def test_interpretation_breaks_page_past_threshold(sink):
    cursor = RenderCursor(sink, start=251)
    render_interpretation(InterpretationSummary(overall_status="Normal"), cursor, sink)

    assert sink.ops[0] == ("page", 2)
    assert sink.find("Interpretation & Analysis")[1:4] == (2, 15, 20)


def test_interpretation_stays_on_page_at_threshold(sink):
    cursor = RenderCursor(sink, start=250)
    render_interpretation(InterpretationSummary(overall_status="Normal"), cursor, sink)

    assert sink.page == 1
    assert sink.find("Interpretation & Analysis")[3] == 250
    assert cursor.position() == 266


def test_interpretation_without_status_shows_placeholder(sink):
    cursor = RenderCursor(sink, start=100)
    render_interpretation(InterpretationSummary(), cursor, sink)

    assert sink.texts == ["Interpretation & Analysis", "Overall Status: -"]


def test_long_finding_wraps_and_advances_per_line(sink):
    significance = " ".join(["significant"] * 40)
    summary = InterpretationSummary(
        abnormal_findings=[AbnormalFinding(parameter="WBC", clinical_significance=significance)]
    )
    cursor = RenderCursor(sink, start=100)
    render_interpretation(summary, cursor, sink)

    finding_lines = [op for op in sink.ops if op[0] == "text" and op[3] >= 121]
    assert len(finding_lines) == 3
    assert [op[3] for op in finding_lines] == [121, 126, 131]
    assert all(op[2] == 20 for op in finding_lines)
    assert cursor.position() == 121 + 3 * 5 + 5


def test_pathologist_with_only_recommendations(sink):
    cursor = RenderCursor(sink, start=100)
    render_pathologist_analysis(PathologistAnalysis(recommendations=["Hydrate"]), cursor, sink)

    assert sink.texts == ["Pathologist Analysis", "Recommendations:", "• Hydrate"]
    assert cursor.position() == 100 + 8 + 5 + 4 + 2 + 3


@pytest.mark.parametrize(("start", "breaks"), [(240, False), (241, True)])
def test_pathologist_page_break_threshold(sink, start, breaks):
    cursor = RenderCursor(sink, start=start)
    render_pathologist_analysis(PathologistAnalysis(key_findings=["Anemia"]), cursor, sink)

    assert (sink.page == 2) is breaks


@pytest.mark.parametrize(("start", "page", "title_y"), [(240, 1, 240), (241, 2, 20)])
def test_medicine_page_break_threshold(sink, start, page, title_y):
    cursor = RenderCursor(sink, start=start)
    render_medicine_suggestions([MedicineSuggestion(name="ORS")], cursor, sink)

    assert sink.page == page
    assert sink.find("Suggested Medicines")[1:4] == (page, 15, title_y)
    assert sink.tables[0][2] == title_y + 5


# ---------------------------------------------------------------------------
# FPDF output and export
# ---------------------------------------------------------------------------

def test_build_report_pdf_produces_pdf_bytes(full_document):
    content = build_report_pdf(full_document, generated_for="Asha Verma", generated_on=date(2025, 1, 2))

    assert content.startswith(b"%PDF")


def test_pdf_handles_characters_outside_core_fonts():
    doc = ReportDocument(
        report_type="Lipid Profile",
        diagnostic_pathologist_analysis={"key_findings": ["LDL ≥ 160 mg/dL", "Vitamin D 12 µg ✓"]},
    )

    assert build_report_pdf(doc).startswith(b"%PDF")


def test_long_results_table_spans_pages():
    doc = ReportDocument(
        test_results=[LabResult(test_name=f"Marker {i}", value=str(i), status="Normal") for i in range(80)],
        interpretation_summary={"overall_status": "Normal"},
    )
    pdf = ReportPDF()
    pdf.add_page()
    render_report(doc, pdf)

    assert pdf.page_no() > 1


def test_export_without_report_is_none():
    assert export_report(None) is None


def test_export_report_names_file_by_id(report_payload):
    report = StoredReport.model_validate(report_payload)

    export = export_report(report, detailed=True, generated_for="Asha Verma")

    assert export.filename == "MediAI_Detailed_Report_65f1c0ffee.pdf"
    assert export.mime == "application/pdf"
    assert export.content.startswith(b"%PDF")


def test_report_filename_variants():
    assert report_filename("abc") == "MediAI_Report_abc.pdf"
    assert report_filename("abc", detailed=True) == "MediAI_Detailed_Report_abc.pdf"
