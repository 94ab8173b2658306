# screens/logout.py
from __future__ import annotations

import logging

import streamlit as st

from core.forms import flash
from core.navigation import navigate_to_login
from core.session import AdminSession, current_session

log = logging.getLogger(__name__)


def sign_out(session: AdminSession) -> None:
    name = session.admin_name
    session.logout()
    log.info("Admin %s logged out", name)


@st.dialog("Log out?")
def confirm_logout():
    st.write("You will need to sign in again to use the console.")
    yes, no = st.columns(2)
    if yes.button("Yes, log out", type="primary", use_container_width=True):
        sign_out(current_session())
        flash("You have been logged out successfully.", "info")
        navigate_to_login()
    if no.button("Cancel", use_container_width=True):
        st.rerun()
