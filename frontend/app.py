import sys
from pathlib import Path

APP_DIR = Path(__file__).resolve().parent
for path in (APP_DIR, APP_DIR.parent):
    if str(path) not in sys.path:
        sys.path.insert(0, str(path))

from html import escape

import streamlit as st

from mediai.config import settings
from utils.api_client import cached_current_user
from utils.theme import apply_theme, get_colors, render_sidebar_profile

st.set_page_config(
    page_title="MediAI Reports",
    page_icon="🧬",
    layout="wide",
    initial_sidebar_state="expanded",
)
apply_theme()
COLORS = get_colors()

# ── Session defaults ──────────────────────────────────────────────────────
if "token" not in st.session_state:
    st.session_state.token = settings.api_token

u_ok, user = cached_current_user(st.session_state.token)
user = user if u_ok else {}
render_sidebar_profile(user)

name = escape(user.get("name") or "there")
st.markdown(
    f"""
    <div style="margin-bottom:8px;">
        <span style="font-size:1.8rem;font-weight:800;color:{COLORS['text']};">
            Welcome, {name}
        </span>
        <span style="font-size:1.8rem;">👋</span>
    </div>
    <p style="color:{COLORS['text_muted']};margin-top:0;">
        Upload a lab report to get an AI breakdown of your results, or reopen a saved analysis.
    </p>
    """,
    unsafe_allow_html=True,
)
if not u_ok:
    st.caption("Could not load your profile; analyses will use the default locale.")

# ── Navigation cards ──────────────────────────────────────────────────────
nav_items = [
    ("📤", "New Analysis", "Upload a PDF or photo of a lab report for AI analysis.", "pages/1_upload.py"),
    ("📋", "Report Detail", "Review a saved analysis and download it as a PDF.", "pages/2_report_detail.py"),
]

nav_cols = st.columns(len(nav_items))
for col, (icon, title, desc, page) in zip(nav_cols, nav_items):
    col.markdown(
        f"""
        <div class="nav-card">
            <div class="nav-icon">{icon}</div>
            <div class="nav-title">{title}</div>
            <div class="nav-desc">{desc}</div>
        </div>
        """,
        unsafe_allow_html=True,
    )
    col.page_link(page, label=f"Open {title}", use_container_width=True)
