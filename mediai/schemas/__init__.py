from mediai.schemas.report import (
    AbnormalFinding,
    InterpretationSummary,
    MedicineSuggestion,
    PathologistAnalysis,
    PatientInformation,
    ReportDetails,
    ReportDocument,
    ReportOwner,
    ReportType,
    StoredReport,
    TestResult,
    UserProfile,
)

__all__ = [
    "AbnormalFinding",
    "InterpretationSummary",
    "MedicineSuggestion",
    "PathologistAnalysis",
    "PatientInformation",
    "ReportDetails",
    "ReportDocument",
    "ReportOwner",
    "ReportType",
    "StoredReport",
    "TestResult",
    "UserProfile",
]
