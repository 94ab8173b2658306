# core/navigation.py
import streamlit as st

from core.nav_registry import DEFAULT_ROUTE_KEY, LOGIN_ROUTE_KEY, ROUTE_INDEX
from core.session import AdminSession, current_session


def navigate_to(route_key: str):
    """Switch to the page registered under ``route_key``."""
    st.switch_page(ROUTE_INDEX[route_key].script)


def navigate_to_login():
    """Navigate to login page"""
    navigate_to(LOGIN_ROUTE_KEY)


def navigate_to_app():
    """Navigate to the landing page after sign-in"""
    navigate_to(DEFAULT_ROUTE_KEY)


def open_detail(route_key: str, record_id: str, session: AdminSession = None):
    """Remember which record a detail page shows, then go there."""
    session = session or current_session()
    session.set_detail_id(route_key, str(record_id))
    navigate_to(route_key)
