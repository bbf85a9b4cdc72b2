"""
Shared theme, CSS injection, color palette, and UI helper functions
for the MediAI report dashboard.
"""

from __future__ import annotations

from html import escape

import streamlit as st

from mediai.config import configure_logging
from mediai.services.results import status_tone

# ---------------------------------------------------------------------------
# Color palettes (light + dark)
# ---------------------------------------------------------------------------
COLORS_LIGHT: dict[str, str] = {
    "primary": "#2563EB",       # blue-600
    "brand": "#1E40AF",         # blue-800
    "accent": "#7C3AED",        # violet-600
    "danger": "#DC2626",        # red-600
    "danger_light": "#FEF2F2",  # red-50
    "warning": "#EA580C",       # orange-600
    "warning_light": "#FFF7ED", # orange-50
    "success": "#16A34A",       # green-600
    "success_light": "#F0FDF4", # green-50
    "medicine": "#059669",      # emerald-600
    "medicine_light": "#ECFDF5", # emerald-50
    "text": "#1E293B",          # slate-800
    "text_muted": "#64748B",    # slate-500
    "bg_card": "#FFFFFF",
    "bg_page": "#F8FAFC",       # slate-50
    "border": "#E2E8F0",        # slate-200
}

COLORS_DARK: dict[str, str] = {
    "primary": "#60A5FA",       # blue-400
    "brand": "#93C5FD",         # blue-300
    "accent": "#A78BFA",        # violet-400
    "danger": "#F87171",        # red-400
    "danger_light": "#450A0A",  # red-950
    "warning": "#FB923C",       # orange-400
    "warning_light": "#431407", # orange-950
    "success": "#4ADE80",       # green-400
    "success_light": "#052E16", # green-950
    "medicine": "#34D399",      # emerald-400
    "medicine_light": "#022C22", # emerald-950
    "text": "#F1F5F9",          # slate-100
    "text_muted": "#94A3B8",    # slate-400
    "bg_card": "#1E293B",       # slate-800
    "bg_page": "#0F172A",       # slate-900
    "border": "#334155",        # slate-700
}


def get_colors() -> dict[str, str]:
    """Return the active palette based on ``st.session_state.dark_mode``."""
    if st.session_state.get("dark_mode", False):
        return COLORS_DARK
    return COLORS_LIGHT


def plotly_layout_defaults(title: str = "", height: int = 250) -> dict:
    """Return a dict of common Plotly layout kwargs for consistent styling."""
    c = get_colors()
    return dict(
        title=dict(text=title, font=dict(size=15, color=c["text"])),
        template="plotly_dark" if st.session_state.get("dark_mode") else "plotly_white",
        height=height,
        margin=dict(l=20, r=20, t=40 if title else 10, b=40),
        font=dict(family="Inter, system-ui, sans-serif", size=12, color=c["text"]),
        plot_bgcolor="rgba(0,0,0,0)",
        paper_bgcolor="rgba(0,0,0,0)",
        bargap=0.35,
        showlegend=False,
    )


# ---------------------------------------------------------------------------
# CSS injection (built dynamically for active palette)
# ---------------------------------------------------------------------------
_CSS_TEMPLATE = """
<style>
[data-testid="stAppViewContainer"] { background-color: %(bg_page)s; }

.card {
    background: %(bg_card)s;
    border: 1px solid %(border)s;
    border-radius: 20px;
    padding: 24px;
    margin-bottom: 16px;
    box-shadow: 0 4px 12px rgba(0,0,0,0.05);
    color: %(text)s;
}
.card-title { font-weight: 800; font-size: 1.4rem; color: %(text)s; margin-bottom: 2px; }
.card-muted { color: %(text_muted)s; font-size: 0.85rem; }

.info-grid { display: grid; grid-template-columns: 1fr 1fr; gap: 16px; margin-top: 16px; }
.info-block { background: %(bg_page)s; border: 1px solid %(border)s; border-radius: 14px; padding: 14px 18px; }
.info-heading { color: %(text_muted)s; font-size: 0.72rem; font-weight: 700; text-transform: uppercase; letter-spacing: 0.06em; margin-bottom: 6px; }
.info-row { display: flex; justify-content: space-between; font-size: 0.9rem; padding: 2px 0; }
.info-label { color: %(text_muted)s; }
.info-value { color: %(text)s; font-weight: 700; text-align: right; }

.status-badge {
    display: inline-block;
    padding: 2px 10px;
    border-radius: 9999px;
    font-size: 0.75rem;
    font-weight: 700;
    text-transform: capitalize;
}
.status-high   { background: %(danger_light)s;  color: %(danger)s; }
.status-low    { background: %(warning_light)s; color: %(warning)s; }
.status-normal { background: %(success_light)s; color: %(success)s; }

.finding { background: %(danger_light)s; border-radius: 12px; padding: 10px 14px; margin-bottom: 8px; }
.finding-title { color: %(danger)s; font-weight: 700; font-size: 0.8rem; }
.finding-body { color: %(danger)s; font-size: 0.8rem; opacity: 0.85; }

.status-box { background: %(bg_page)s; border: 1px solid %(border)s; border-radius: 12px; padding: 12px 16px; margin-bottom: 12px; }
.status-box .info-heading { color: %(accent)s; }
.status-value { color: %(text)s; font-weight: 700; font-size: 1.1rem; }

.medicine-card { background: %(bg_card)s; border: 1px solid %(border)s; border-radius: 12px; padding: 14px; margin-bottom: 10px; }
.medicine-name { color: %(text)s; font-weight: 700; }
.medicine-formula { color: %(medicine)s; font-size: 0.72rem; font-weight: 700; text-transform: uppercase; letter-spacing: 0.05em; }
.medicine-purpose { color: %(text_muted)s; font-size: 0.8rem; }

.nav-card {
    background: %(bg_card)s;
    border: 1px solid %(border)s;
    border-radius: 16px;
    padding: 24px;
    text-align: center;
}
.nav-icon { font-size: 2rem; margin-bottom: 8px; }
.nav-title { font-weight: 700; font-size: 1rem; color: %(text)s; }
.nav-desc { color: %(text_muted)s; font-size: 0.82rem; margin-top: 4px; }

.disclaimer { color: %(text_muted)s; font-size: 0.7rem; font-style: italic; text-align: center; margin-top: 16px; }

[data-testid="stMain"] table td { color: %(text)s; }
[data-testid="stMain"] table th { color: %(text_muted)s !important; }
</style>
"""


def apply_theme() -> None:
    """Configure logging and inject global CSS. Call once at the top of every page."""
    configure_logging()
    if "dark_mode" not in st.session_state:
        st.session_state.dark_mode = False
    st.markdown(_CSS_TEMPLATE % get_colors(), unsafe_allow_html=True)


def render_sidebar_profile(user: dict | None = None) -> None:
    """Render the signed-in user's name, AI locale, and the dark-mode toggle."""
    user = user or {}
    name = user.get("name") or "Guest"
    locale = " · ".join(part for part in (user.get("country"), user.get("language")) if part)
    initials = "".join(w[0].upper() for w in name.split()[:2]) or "?"
    c = get_colors()

    with st.sidebar:
        st.markdown(
            f"""
            <div style="text-align:center; padding: 16px 0 8px 0;">
                <div style="width:56px;height:56px;border-radius:50%;background:{c['primary']};
                    color:white;font-size:1.3rem;font-weight:700;display:inline-flex;
                    align-items:center;justify-content:center;margin-bottom:6px;">
                    {escape(initials)}
                </div>
                <div style="font-weight:600;color:{c['text']};font-size:0.95rem;">{escape(name)}</div>
                <div style="color:{c['text_muted']};font-size:0.8rem;">{escape(locale)}</div>
            </div>
            """,
            unsafe_allow_html=True,
        )
        st.divider()

        dark = st.toggle(
            "🌙 Dark mode",
            value=st.session_state.get("dark_mode", False),
            key="dark_mode_toggle",
        )
        if dark != st.session_state.get("dark_mode", False):
            st.session_state.dark_mode = dark
            st.rerun()


# ---------------------------------------------------------------------------
# Reusable HTML helpers
# ---------------------------------------------------------------------------
def status_badge(status: str | None) -> str:
    """Return an HTML badge coloured by the status' high/low/normal tone."""
    return f'<span class="status-badge status-{status_tone(status)}">{escape(status or "")}</span>'


def info_block(heading: str, rows: list[tuple[str, str]]) -> str:
    """Return HTML for a labelled block of label/value rows."""
    body = "".join(
        f'<div class="info-row"><span class="info-label">{escape(label)}</span>'
        f'<span class="info-value">{escape(value)}</span></div>'
        for label, value in rows
    )
    return f'<div class="info-block"><div class="info-heading">{escape(heading)}</div>{body}</div>'
