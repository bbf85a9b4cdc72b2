"""Test-result views: status colouring, chart dataset and tabular export."""

from collections.abc import Sequence
from dataclasses import dataclass

import pandas as pd
import plotly.graph_objects as go

from mediai.schemas import TestResult

RESULT_COLUMNS = ["Test Name", "Value", "Unit", "Reference Range", "Status"]

# Bar colours per status tone; "normal" covers every unrecognised status.
STATUS_COLORS = {
    "high": "#ef4444",
    "low": "#f97316",
    "normal": "#3b82f6",
}

LABEL_LIMIT = 10
LABEL_KEEP = 8


def status_tone(status: str | None) -> str:
    """
    Classify a free-text status by case-insensitive substring.

    "high" is checked before "low", so a status mentioning both reads as high.
    """
    key = (status or "").lower()
    if "high" in key:
        return "high"
    if "low" in key:
        return "low"
    return "normal"


def status_color(status: str | None) -> str:
    return STATUS_COLORS[status_tone(status)]


def result_row(result: TestResult) -> list[str]:
    return [
        result.test_name or "-",
        result.value or "-",
        result.unit or "-",
        result.reference_range or "-",
        result.status or "-",
    ]


def short_label(name: str | None) -> str:
    name = name or ""
    return name[:LABEL_KEEP] + "..." if len(name) > LABEL_LIMIT else name


@dataclass(frozen=True)
class ChartPoint:
    test_name: str
    label: str
    value: float
    status: str | None
    color: str


def chart_points(results: Sequence[TestResult]) -> list[ChartPoint]:
    """Results that carry a numeric value, in report order."""
    return [
        ChartPoint(
            test_name=result.test_name or "",
            label=short_label(result.test_name),
            value=result.numeric_value,
            status=result.status,
            color=status_color(result.status),
        )
        for result in results
        if result.numeric_value is not None
    ]


def build_results_chart(results: Sequence[TestResult], layout: dict | None = None) -> go.Figure | None:
    points = chart_points(results)
    if not points:
        return None
    fig = go.Figure(
        go.Bar(
            x=[point.label for point in points],
            y=[point.value for point in points],
            marker=dict(color=[point.color for point in points]),
            hovertext=[f"{point.test_name}: {point.value:g} ({point.status or 'n/a'})" for point in points],
            hoverinfo="text",
        )
    )
    fig.update_layout(**(layout or {}))
    fig.update_yaxes(visible=False)
    fig.update_xaxes(tickangle=0, tickfont=dict(size=9))
    return fig


def results_frame(results: Sequence[TestResult]) -> pd.DataFrame:
    return pd.DataFrame([result_row(result) for result in results], columns=RESULT_COLUMNS)


def results_csv(results: Sequence[TestResult]) -> str:
    return results_frame(results).to_csv(index=False)
