from collections.abc import Generator

import pytest

from mediai.schemas import ReportDocument

TABLE_ROW_HEIGHT = 5


class RecordingSink:
    """Document sink that records drawing calls; one unit of width per character."""

    def __init__(self):
        self.ops: list[tuple] = []
        self.page = 1

    def write_text(self, x, y, content, *, size, color=(0, 0, 0), bold=False, align="left"):
        self.ops.append(("text", self.page, x, y, content))

    def draw_rule(self, x1, x2, y, color=(200, 200, 200)):
        self.ops.append(("rule", self.page, x1, x2, y))

    def measure(self, content, *, size, bold=False):
        return float(len(content))

    def add_page(self):
        self.page += 1
        self.ops.append(("page", self.page))

    def draw_table(self, start_y, headings, rows, style):
        self.ops.append(("table", self.page, start_y, list(headings), [list(row) for row in rows], style))
        return start_y + TABLE_ROW_HEIGHT * (len(rows) + 1)

    @property
    def texts(self) -> list[str]:
        return [op[4] for op in self.ops if op[0] == "text"]

    @property
    def tables(self) -> list[tuple]:
        return [op for op in self.ops if op[0] == "table"]

    def find(self, content: str) -> tuple:
        for op in self.ops:
            if op[0] == "text" and op[4] == content:
                return op
        raise AssertionError(f"{content!r} was not drawn; drawn: {self.texts}")


@pytest.fixture()
def sink() -> Generator[RecordingSink, None, None]:
    yield RecordingSink()


@pytest.fixture()
def report_payload() -> dict:
    """Stored report as the backend returns it from GET /reports/{id}."""
    return {
        "_id": "65f1c0ffee",
        "reportDate": "2025-01-02T00:00:00.000Z",
        "reportType": "CBC / Blood",
        "userId": {"_id": "u-1", "name": "Asha Verma"},
        "structuredData": {
            "report_type": "Complete Blood Count",
            "patient_information": {"name": "Asha Verma", "age": "34", "sex": "F", "referred_by": "Dr. Rao"},
            "report_details": {"lab_name": "City Diagnostics", "collected_on": "2025-01-01", "reported_on": "2025-01-02"},
            "test_results": [
                {
                    "test_name": "Hemoglobin",
                    "value": "11.2",
                    "unit": "g/dL",
                    "reference_range": "12-15",
                    "status": "Low",
                    "numeric_value": 11.2,
                },
                {
                    "test_name": "Total Leukocyte Count",
                    "value": "12500",
                    "unit": "/cumm",
                    "reference_range": "4000-11000",
                    "status": "High",
                    "numeric_value": 12500,
                },
                {
                    "test_name": "Peripheral Smear",
                    "value": "Normocytic",
                    "unit": "",
                    "reference_range": "",
                    "status": "Normal",
                    "numeric_value": None,
                },
            ],
            "interpretation_summary": {
                "overall_status": "Needs Attention",
                "abnormal_findings": [
                    {"parameter": "Hemoglobin", "value": "11.2", "clinical_significance": "Mild anemia"},
                ],
            },
            "diagnostic_pathologist_analysis": {
                "key_findings": ["Mild anemia with leukocytosis"],
                "recommendations": ["Repeat CBC in 4 weeks", "Iron studies"],
            },
            "medicineSuggestions": [
                {"name": "Ferrous Sulfate", "formula": "FeSO4", "purpose": "Iron supplementation", "link": None},
            ],
        },
    }


@pytest.fixture()
def full_document(report_payload) -> ReportDocument:
    return ReportDocument.model_validate(report_payload["structuredData"])
