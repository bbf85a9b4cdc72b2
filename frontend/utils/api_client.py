import logging

import requests
import streamlit as st

from mediai.config import settings
from mediai.schemas import UserProfile

logger = logging.getLogger(__name__)

BASE_URL = settings.api_base_url.rstrip("/")


def _auth_headers(token: str | None) -> dict:
    token = token or settings.api_token
    return {"Authorization": f"Bearer {token}"} if token else {}


class ApiClient:
    def __init__(self, token: str | None = None):
        self.token = token

    @property
    def headers(self):
        return _auth_headers(self.token)

    def upload_report(self, file_obj, report_date: str, report_type: str):
        return requests.post(
            f"{BASE_URL}/reports/upload",
            files={"file": file_obj},
            data={"reportDate": report_date, "reportType": report_type},
            headers=self.headers,
            timeout=settings.upload_timeout_seconds,
        )


def error_message(res, fallback: str) -> str:
    """Pull the backend's ``error`` field out of a failed response."""
    try:
        payload = res.json()
    except ValueError:
        return fallback
    if isinstance(payload, dict) and payload.get("error"):
        return str(payload["error"])
    return fallback


def _fetch_json(url: str, token: str | None) -> tuple[bool, dict]:
    try:
        res = requests.get(url, headers=_auth_headers(token), timeout=settings.request_timeout_seconds)
    except requests.RequestException as exc:
        logger.warning("Request to %s failed: %s", url, exc)
        return False, {}
    if not res.ok:
        logger.warning("Request to %s returned %s", url, res.status_code)
        return False, {}
    try:
        payload = res.json()
    except ValueError:
        logger.warning("Request to %s returned a non-JSON body", url)
        return False, {}
    return isinstance(payload, dict), payload if isinstance(payload, dict) else {}


# ---------------------------------------------------------------------------
# Cached data fetchers: return parsed JSON, cached for ``cache_ttl_seconds``.
# These are standalone functions so @st.cache_data can hash the arguments.
# ---------------------------------------------------------------------------

@st.cache_data(ttl=settings.cache_ttl_seconds, show_spinner=False)
def cached_report_detail(token: str | None, report_id: str) -> tuple[bool, dict]:
    return _fetch_json(f"{BASE_URL}/reports/{report_id}", token)


@st.cache_data(ttl=settings.cache_ttl_seconds, show_spinner=False)
def cached_current_user(token: str | None) -> tuple[bool, dict]:
    ok, payload = _fetch_json(f"{BASE_URL}/users/dashboard", token)
    user = payload.get("user") if ok else None
    if not isinstance(user, dict):
        return False, {}
    return True, UserProfile.model_validate(user).model_dump()
