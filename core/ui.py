# core/ui.py
"""
Console chrome (header, sidebar) and the shared error helpers.
"""
from __future__ import annotations
import logging
from typing import Iterable, Optional, Sequence

import pandas as pd
import streamlit as st

from core.api import ApiError, UnauthorizedError, error_message, GENERIC_ERROR
from core.forms import failure, flash
from core.nav_registry import SECTIONS
from core.session import AdminSession
from core.settings import load_settings

logger = logging.getLogger(__name__)

_HIDE_SIDEBAR_CSS = """
<style>
    section[data-testid="stSidebar"],
    [data-testid="collapsedControl"] {
        display: none;
    }
</style>
"""


def hide_sidebar():
    st.markdown(_HIDE_SIDEBAR_CSS, unsafe_allow_html=True)


def df_or_empty(rows, columns) -> pd.DataFrame:
    try:
        return pd.DataFrame(rows, columns=columns)
    except (ValueError, TypeError):
        return pd.DataFrame(columns=columns)


def handle_error(e: Exception, user_message: str = "An error occurred."):
    """
    Log the full exception server-side and show a friendly or
    detailed error in Streamlit based on the debug setting.
    """
    settings = load_settings()
    logger.error(f"Admin console error: {e}", exc_info=True)

    if getattr(settings, "debug", False):
        st.error(f"{user_message}\n\n**Debug Info:**\n```\n{e}\n```")
    else:
        st.error(user_message)


def api_failed(e: ApiError, fallback: str = GENERIC_ERROR) -> str:
    """Toast the server's message for a failed call; a 401 goes back to login.

    Returns the message shown so screens can also render it inline.
    """
    msg = error_message(e, fallback)
    if isinstance(e, UnauthorizedError):
        from core.navigation import navigate_to_login

        flash(msg, "warning")
        navigate_to_login()
        st.stop()
    logger.warning("%s (%s)", fallback, e.message)
    failure(msg)
    return msg


def page_title(title: str, caption: Optional[str] = None):
    st.title(title)
    if caption:
        st.caption(caption)


def render_header(session: AdminSession, app_name: str):
    toggle, name, who, out = st.columns([0.06, 0.54, 0.25, 0.15])
    with toggle:
        if st.button("☰", key="shell__toggle_sidebar", help="Show / hide menu"):
            session.toggle_sidebar()
            st.rerun()
    with name:
        st.markdown(f"**{app_name}**")
    with who:
        st.caption(f"Signed in as **{session.admin_name}**")
    with out:
        if st.button("Logout", key="shell__logout"):
            from screens.logout import confirm_logout
            confirm_logout()


def render_sidebar(session: AdminSession, current_key: Optional[str]):
    if not session.sidebar_open:
        hide_sidebar()
        return
    with st.sidebar:
        for section in SECTIONS:
            if section.single:
                r = section.routes[0]
                st.page_link(r.script, label=r.label, icon=r.icon)
                continue
            opened = session.expanded_section == section.title
            with st.expander(f"{section.icon} {section.title}", expanded=opened):
                for r in section.routes:
                    st.page_link(r.script, label=r.label, icon=r.icon, disabled=(r.key == current_key))


def record_table(rows: Iterable[dict], columns: Sequence[str], labels: Optional[Sequence[str]] = None):
    """Read-only table for small detail lists."""
    df = df_or_empty(list(rows), list(columns))
    if labels:
        df.columns = list(labels)
    if df.empty:
        st.info("No records found.")
        return
    st.dataframe(df, use_container_width=True, hide_index=True)
