"""Streamlit rendering of one analyzed report, shared by the upload and detail pages."""

from html import escape

import streamlit as st

from mediai.schemas import ReportDocument, StoredReport
from mediai.services.report_pdf import ReportExport
from mediai.services.report_view import display, overall_status, report_title, visible_sections
from mediai.services.results import build_results_chart
from utils.theme import get_colors, info_block, plotly_layout_defaults, status_badge

DISCLAIMER = (
    "Disclaimer: This analysis is generated by AI and is not a substitute for professional medical advice. "
    "Always consult with a qualified healthcare provider."
)


def _header(report: StoredReport, subtitle: str, export: ReportExport | None) -> None:
    data = report.structured_data
    patient = data.patient_information
    details = data.report_details
    patient_rows = [
        ("Name:", display(patient.name if patient else None)),
        ("Age / Sex:", f"{display(patient.age if patient else None)} / {display(patient.sex if patient else None)}"),
        ("Ref. By:", display(patient.referred_by if patient else None)),
    ]
    detail_rows = [
        ("Lab Name:", display(details.lab_name if details else None)),
        ("Collected:", display(details.collected_on if details else None)),
        ("Reported:", display(details.reported_on if details else None)),
    ]

    title_col, action_col = st.columns([4, 1])
    with title_col:
        st.markdown(
            f'<div class="card-title">{escape(report_title(report))}</div>'
            f'<div class="card-muted">{escape(subtitle)}</div>',
            unsafe_allow_html=True,
        )
    with action_col:
        if export is not None:
            st.download_button(
                "⬇️ Download PDF",
                data=export.content,
                file_name=export.filename,
                mime=export.mime,
                use_container_width=True,
            )
    st.markdown(
        f'<div class="info-grid">{info_block("Patient Details", patient_rows)}'
        f'{info_block("Report Details", detail_rows)}</div>',
        unsafe_allow_html=True,
    )


def _chart(data: ReportDocument) -> None:
    fig = build_results_chart(data.test_results, layout=plotly_layout_defaults("Visual Trends"))
    if fig is not None:
        st.plotly_chart(fig, use_container_width=True)


def _results_table(data: ReportDocument) -> None:
    c = get_colors()
    rows_html = "".join(
        f"""
        <tr style="border-bottom:1px solid {c['border']};">
            <td style="padding:10px 14px;font-weight:700;">{escape(t.test_name or '')}</td>
            <td style="padding:10px 14px;">
                <b>{escape(t.value or '')}</b>
                <span style="color:{c['text_muted']};font-size:0.75rem;">{escape(t.unit or '')}</span>
            </td>
            <td style="padding:10px 14px;color:{c['text_muted']};font-size:0.8rem;">{escape(t.reference_range or '')}</td>
            <td style="padding:10px 14px;text-align:right;">{status_badge(t.status)}</td>
        </tr>
        """
        for t in data.test_results
    )
    header_style = f"padding:8px 14px;color:{c['text_muted']};font-size:0.72rem;text-transform:uppercase;"
    st.markdown(
        f"""
        <div class="card">
            <div style="font-weight:700;margin-bottom:8px;">📄 Test Results</div>
            <div style="overflow-x:auto;">
            <table style="width:100%;border-collapse:collapse;font-size:0.88rem;">
                <thead>
                    <tr style="border-bottom:2px solid {c['border']};text-align:left;">
                        <th style="{header_style}">Test Name</th>
                        <th style="{header_style}">Value</th>
                        <th style="{header_style}">Reference Range</th>
                        <th style="{header_style}text-align:right;">Status</th>
                    </tr>
                </thead>
                <tbody>{rows_html}</tbody>
            </table>
            </div>
        </div>
        """,
        unsafe_allow_html=True,
    )


def _insights(data: ReportDocument) -> None:
    interpretation_col, analysis_col = st.columns(2)

    with interpretation_col:
        summary = data.interpretation_summary
        findings = summary.abnormal_findings if summary else []
        findings_html = "".join(
            f'<div class="finding">'
            f'<div class="finding-title">⚠️ {escape(display(f.parameter))} ({escape(display(f.value))})</div>'
            f'<div class="finding-body">{escape(f.clinical_significance or "")}</div>'
            f'</div>'
            for f in findings
        )
        if findings_html:
            findings_html = f'<div class="info-heading">Abnormal Findings</div>{findings_html}'
        st.markdown(
            f"""
            <div class="card">
                <div style="font-weight:700;margin-bottom:12px;">🤖 Interpretation</div>
                <div class="status-box">
                    <div class="info-heading">Overall Status</div>
                    <div class="status-value">{escape(overall_status(data))}</div>
                </div>
                {findings_html}
            </div>
            """,
            unsafe_allow_html=True,
        )

    with analysis_col:
        analysis = data.diagnostic_pathologist_analysis
        key_findings = analysis.key_findings if analysis else []
        recommendations = analysis.recommendations if analysis else []
        findings_list = "".join(f"<li>{escape(item)}</li>" for item in key_findings)
        recommendations_html = ""
        if recommendations:
            items = "".join(f"<li>{escape(item)}</li>" for item in recommendations)
            recommendations_html = f'<div class="info-heading" style="margin-top:12px;">Recommendations</div><ul>{items}</ul>'
        st.markdown(
            f"""
            <div class="card">
                <div style="font-weight:700;margin-bottom:12px;">🩺 Pathologist Analysis</div>
                <div class="info-heading">Key Findings</div>
                <ul>{findings_list}</ul>
                {recommendations_html}
            </div>
            """,
            unsafe_allow_html=True,
        )


def _medicines(data: ReportDocument) -> None:
    c = get_colors()
    st.markdown(
        f'<div style="font-weight:700;color:{c["medicine"]};margin:8px 0;">💊 Regional Medicine Suggestions</div>',
        unsafe_allow_html=True,
    )
    cols = st.columns(2)
    for index, med in enumerate(data.medicine_suggestions):
        link = f' <a href="{escape(med.link)}" target="_blank">🔗</a>' if med.link else ""
        cols[index % 2].markdown(
            f'<div class="medicine-card">'
            f'<div class="medicine-name">{escape(med.name or "")}{link}</div>'
            f'<div class="medicine-formula">{escape(med.formula or "")}</div>'
            f'<div class="medicine-purpose">{escape(med.purpose or "")}</div>'
            f'</div>',
            unsafe_allow_html=True,
        )


def render_report(report: StoredReport, subtitle: str, export: ReportExport | None = None) -> None:
    """Render every visible block of ``report``; ``export`` backs the download button."""
    data = report.structured_data
    for section in visible_sections(data):
        if section == "header":
            _header(report, subtitle, export)
        elif section == "chart":
            _chart(data)
        elif section == "results":
            _results_table(data)
        elif section == "insights":
            _insights(data)
        elif section == "medicines":
            _medicines(data)
        elif section == "disclaimer":
            st.markdown(f'<p class="disclaimer">{escape(DISCLAIMER)}</p>', unsafe_allow_html=True)
