"""Presentation helpers shared by the dashboard pages and the PDF export."""

import logging
from datetime import date, datetime

from pydantic import ValidationError

from mediai.config import settings
from mediai.schemas import ReportDocument, ReportType, StoredReport
from mediai.services.results import chart_points

logger = logging.getLogger(__name__)

PLACEHOLDER = "-"
PENDING_STATUS = "Pending Review"
DATE_FORMAT = "%m/%d/%Y"


def display(value: str | None, placeholder: str = PLACEHOLDER) -> str:
    return value if value else placeholder


def format_date(value: date | datetime | None = None) -> str:
    """Render a report date the way the dashboard shows it; today when missing."""
    return (value or date.today()).strftime(DATE_FORMAT)


def owner_name(report: StoredReport | None) -> str | None:
    if report is None or report.owner is None:
        return None
    return report.owner.name


def report_title(report: StoredReport) -> str:
    return report.structured_data.report_type or report.report_type or PLACEHOLDER


def overall_status(document: ReportDocument) -> str:
    summary = document.interpretation_summary
    if summary is None or not summary.overall_status:
        return PENDING_STATUS
    return summary.overall_status


def validate_upload(
    file_name: str | None,
    report_date: date | str | None,
    report_type: ReportType | str | None,
    file_size: int | None = None,
) -> str | None:
    """Return the first problem with the upload form, or None when it can be sent."""
    if not file_name:
        return "Please select a file"
    if file_size is not None and file_size > settings.max_upload_size_mb * 1024 * 1024:
        return f"File too large. Max size is {settings.max_upload_size_mb}MB"
    if not report_date:
        return "Select report date"
    allowed = {item.value for item in ReportType}
    value = report_type.value if isinstance(report_type, ReportType) else report_type
    if value not in allowed:
        return "Select report type"
    return None


def visible_sections(document: ReportDocument) -> list[str]:
    """Ordered dashboard blocks to render for ``document``."""
    sections = ["header"]
    if chart_points(document.test_results):
        sections.append("chart")
    sections.extend(["results", "insights"])
    if document.medicine_suggestions:
        sections.append("medicines")
    sections.append("disclaimer")
    return sections


def parse_report(payload: object) -> StoredReport | None:
    """Validate a backend report payload; None when it is unusable."""
    if not isinstance(payload, dict):
        logger.warning("Report payload is %s, expected an object", type(payload).__name__)
        return None
    try:
        return StoredReport.model_validate(payload)
    except ValidationError:
        logger.exception("Report payload failed validation")
        return None
