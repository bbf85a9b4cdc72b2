"""Structured lab report as returned by the analysis service.

Every field is optional and every validator degrades instead of failing:
the payload is produced by an LLM upstream and its shape is not guaranteed.
"""

import math
from datetime import date, datetime
from enum import Enum
from typing import Annotated, Any

from pydantic import BaseModel, BeforeValidator, ConfigDict, Field


def _text(value: Any) -> str | None:
    if value is None or isinstance(value, str):
        return value
    if isinstance(value, (int, float)):
        return str(value)
    return None


def _number(value: Any) -> float | None:
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, str):
        try:
            value = float(value.strip())
        except ValueError:
            return None
    if not isinstance(value, (int, float)):
        return None
    value = float(value)
    return value if math.isfinite(value) else None


def _text_list(value: Any) -> list[str]:
    if isinstance(value, str):
        value = [value]
    if not isinstance(value, (list, tuple)):
        return []
    return [text for text in (_text(item) for item in value) if text is not None]


def _record(value: Any) -> Any:
    return value if isinstance(value, (dict, BaseModel)) else None


def _record_list(value: Any) -> list:
    if not isinstance(value, (list, tuple)):
        return []
    return [item for item in value if isinstance(item, (dict, BaseModel))]


def _timestamp(value: Any) -> datetime | None:
    if isinstance(value, datetime):
        return value
    if isinstance(value, date):
        return datetime(value.year, value.month, value.day)
    if not isinstance(value, str) or not value.strip():
        return None
    raw = value.strip()
    if raw.endswith("Z"):
        raw = raw[:-1] + "+00:00"
    try:
        return datetime.fromisoformat(raw)
    except ValueError:
        return None


Text = Annotated[str | None, BeforeValidator(_text)]
Number = Annotated[float | None, BeforeValidator(_number)]
TextList = Annotated[list[str], BeforeValidator(_text_list)]


class ReportType(str, Enum):
    """Report categories offered on the upload form."""

    CBC_BLOOD = "CBC / Blood"
    URINE_ANALYSIS = "Urine Analysis"
    RADIOLOGY = "Radiology"
    OTHER = "Other"


class PatientInformation(BaseModel):
    name: Text = None
    age: Text = None
    sex: Text = None
    referred_by: Text = None


class ReportDetails(BaseModel):
    lab_name: Text = None
    collected_on: Text = None
    reported_on: Text = None


class TestResult(BaseModel):
    """Single measured parameter. Only results with a numeric value are charted."""

    test_name: Text = Field(default=None, description="Name of the lab test")
    value: Text = Field(default=None, description="Result value as printed on the report")
    unit: Text = Field(default=None, description="Unit of measurement")
    reference_range: Text = Field(default=None, description="Normal/reference range for the test")
    status: Text = Field(default=None, description="Free-text status such as Normal, High or Low")
    numeric_value: Number = Field(default=None, description="Parsed numeric value used for charting")


class AbnormalFinding(BaseModel):
    parameter: Text = None
    value: Text = None
    clinical_significance: Text = None


class InterpretationSummary(BaseModel):
    overall_status: Text = None
    abnormal_findings: Annotated[list[AbnormalFinding], BeforeValidator(_record_list)] = Field(default_factory=list)


class PathologistAnalysis(BaseModel):
    key_findings: TextList = Field(default_factory=list)
    recommendations: TextList = Field(default_factory=list)


class MedicineSuggestion(BaseModel):
    name: Text = None
    formula: Text = None
    purpose: Text = None
    link: Text = None


class ReportDocument(BaseModel):
    """AI-structured representation of one lab report."""

    model_config = ConfigDict(populate_by_name=True)

    report_type: Text = None
    patient_information: Annotated[PatientInformation | None, BeforeValidator(_record)] = None
    report_details: Annotated[ReportDetails | None, BeforeValidator(_record)] = None
    test_results: Annotated[list[TestResult], BeforeValidator(_record_list)] = Field(default_factory=list)
    interpretation_summary: Annotated[InterpretationSummary | None, BeforeValidator(_record)] = None
    diagnostic_pathologist_analysis: Annotated[PathologistAnalysis | None, BeforeValidator(_record)] = None
    medicine_suggestions: Annotated[list[MedicineSuggestion], BeforeValidator(_record_list)] = Field(
        default_factory=list,
        alias="medicineSuggestions",
    )


class ReportOwner(BaseModel):
    name: Text = None


class StoredReport(BaseModel):
    """Report envelope returned by the backend for uploads and lookups."""

    model_config = ConfigDict(populate_by_name=True)

    id: Annotated[str, BeforeValidator(_text)] = Field(alias="_id")
    report_date: Annotated[datetime | None, BeforeValidator(_timestamp)] = Field(default=None, alias="reportDate")
    report_type: Text = Field(default=None, alias="reportType")
    owner: Annotated[ReportOwner | None, BeforeValidator(_record)] = Field(default=None, alias="userId")
    structured_data: Annotated[
        ReportDocument,
        BeforeValidator(lambda value: value if isinstance(value, (dict, BaseModel)) else {}),
    ] = Field(default_factory=ReportDocument, alias="structuredData")


class UserProfile(BaseModel):
    name: Text = None
    email: Text = None
    country: Text = None
    language: Text = None
