import sys
from pathlib import Path

APP_DIR = Path(__file__).resolve().parent.parent
for path in (APP_DIR, APP_DIR.parent):
    if str(path) not in sys.path:
        sys.path.insert(0, str(path))

import logging
from datetime import date
from html import escape

import requests
import streamlit as st

from mediai.schemas import ReportType
from mediai.services.report_pdf import export_report
from mediai.services.report_view import format_date, parse_report, validate_upload
from utils.api_client import ApiClient, cached_current_user, error_message
from utils.report_panel import render_report
from utils.theme import apply_theme, get_colors, render_sidebar_profile

logger = logging.getLogger(__name__)

st.set_page_config(page_title="New Analysis", page_icon="📤", layout="wide")
apply_theme()
COLORS = get_colors()

token = st.session_state.get("token")
client = ApiClient(token=token)
u_ok, user = cached_current_user(token)
user = user if u_ok else {}
render_sidebar_profile(user)

if "upload_result" not in st.session_state:
    st.session_state.upload_result = None
    st.session_state.upload_export = None

form_col, result_col = st.columns([1, 2], gap="large")

# ── Upload form ───────────────────────────────────────────────────────────
with form_col:
    st.markdown(
        f"""
        <div style="margin-bottom:4px;">
            <span style="font-size:1.5rem;font-weight:800;color:{COLORS['text']};">📤 New Analysis</span>
        </div>
        <p class="card-muted">
            AI configured for <b>{escape(user.get('country') or 'your region')}</b> ({escape(user.get('language') or 'default language')}).
            Upload a clear image or PDF of your lab report.
        </p>
        """,
        unsafe_allow_html=True,
    )
    with st.form("upload_form"):
        file = st.file_uploader("Report File", type=["pdf", "png", "jpg", "jpeg"])
        date_col, type_col = st.columns(2)
        report_date = date_col.date_input("Date", value=None)
        report_type = type_col.selectbox(
            "Type",
            options=[item.value for item in ReportType],
            index=None,
            placeholder="Select",
        )
        submitted = st.form_submit_button("Analyze Report", use_container_width=True, type="primary")

if submitted:
    problem = validate_upload(
        file.name if file else None,
        report_date,
        report_type,
        file_size=file.size if file else None,
    )
    if problem:
        st.toast(problem, icon="⚠️")
    else:
        res = None
        with st.spinner("Processing..."):
            try:
                res = client.upload_report((file.name, file.getvalue(), file.type), report_date.isoformat(), report_type)
            except requests.RequestException:
                logger.exception("Upload of %s failed", file.name)

        report = None
        if res is not None and res.ok:
            try:
                report = parse_report(res.json().get("report"))
            except (ValueError, AttributeError):
                logger.exception("Upload response was not a report object")

        if report is not None:
            st.session_state.upload_result = report
            st.session_state.upload_export = export_report(
                report,
                detailed=True,
                generated_for=user.get("name"),
                generated_on=date.today(),
            )
            st.toast("Analysis complete! ✅")
        else:
            message = error_message(res, "Analysis failed") if res is not None else "Analysis failed"
            st.toast(f"{message} ❌")

# ── Results ───────────────────────────────────────────────────────────────
with result_col:
    report = st.session_state.upload_result
    if report is None:
        st.markdown(
            f"""
            <div class="card" style="min-height:420px;display:flex;flex-direction:column;
                align-items:center;justify-content:center;border-style:dashed;">
                <div style="font-size:2.5rem;opacity:0.5;">🧪</div>
                <p style="color:{COLORS['text_muted']};font-weight:500;">Analysis results will appear here</p>
            </div>
            """,
            unsafe_allow_html=True,
        )
    else:
        render_report(
            report,
            subtitle=f"Uploaded on {format_date()} • AI Analysis",
            export=st.session_state.upload_export,
        )
