import sys
from pathlib import Path

APP_DIR = Path(__file__).resolve().parent.parent
for path in (APP_DIR, APP_DIR.parent):
    if str(path) not in sys.path:
        sys.path.insert(0, str(path))

import streamlit as st

from mediai.services.report_pdf import export_report
from mediai.services.report_view import format_date, owner_name, parse_report
from mediai.services.results import results_csv
from utils.api_client import cached_current_user, cached_report_detail
from utils.report_panel import render_report
from utils.theme import apply_theme, render_sidebar_profile

st.set_page_config(page_title="Report Detail", page_icon="📋", layout="wide")
apply_theme()

token = st.session_state.get("token")
u_ok, user = cached_current_user(token)
render_sidebar_profile(user if u_ok else {})

st.page_link("app.py", label="Back to Dashboard", icon="⬅️")

# ── Report lookup ─────────────────────────────────────────────────────────
report_id = st.query_params.get("id") or st.text_input("Report ID", placeholder="Paste a report identifier")
if not report_id:
    st.info("Open a report from the dashboard or paste its identifier above.")
    st.stop()

with st.spinner("Accessing Records..."):
    ok, payload = cached_report_detail(token, report_id)
report = parse_report(payload) if ok else None

if report is None:
    st.toast("Failed to fetch report ❌")
    st.error("Report Not Found")
    st.stop()

# ── Report ────────────────────────────────────────────────────────────────
export = export_report(report, generated_for=owner_name(report), generated_on=report.report_date)
render_report(report, subtitle=f"Reported on {format_date(report.report_date)}", export=export)

tests = report.structured_data.test_results
if tests:
    st.download_button(
        "⬇️ Download Results CSV",
        data=results_csv(tests),
        file_name=f"MediAI_Results_{report.id}.csv",
        mime="text/csv",
    )
