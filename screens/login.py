# screens/login.py
from __future__ import annotations

import logging
import re
from typing import Any, Dict, Mapping, Optional, Tuple

import streamlit as st

from core.api import ApiClient, ApiError, error_message, get_client
from core.form_builder import render_form
from core.form_schema import EMAIL, EMAIL_RE, PASSWORD, FieldSpec, FormInvalid, FormSchema, is_empty
from core.forms import flash
from core.navigation import navigate_to, navigate_to_app
from core.policy import public_target
from core.session import AdminSession, current_session
from core.settings import load_settings
from core.ui import hide_sidebar

log = logging.getLogger(__name__)

LOGIN_PATH = "/auth/admin-login"
LOGIN_FAILED = "Login failed. Please check your credentials."


def _valid_email(values: Mapping[str, Any]) -> Dict[str, str]:
    email = values.get("email")
    if not is_empty(email) and not re.fullmatch(EMAIL_RE, str(email)):
        return {"email": "Please enter a valid email"}
    return {}


LOGIN_FORM = FormSchema(
    (
        FieldSpec("email", "Email", EMAIL, required=True, placeholder="admin@school.edu"),
        FieldSpec("password", "Password", PASSWORD, required=True, min_length=6),
    ),
    checks=(_valid_email,),
)


def authenticate(client: ApiClient, email: str, password: str) -> Tuple[Dict[str, Any], Optional[str]]:
    """POST the credentials; returns ``(admin, token)``."""
    values = {"email": email, "password": password}
    errors = LOGIN_FORM.validate(values)
    if errors:
        raise FormInvalid(errors)
    res = client.post(LOGIN_PATH, json=values)
    if not isinstance(res, Mapping) or not res.get("admin"):
        raise ApiError(LOGIN_FAILED, payload=res)
    return dict(res["admin"]), res.get("token")


def sign_in(session: AdminSession, client: ApiClient, email: str, password: str) -> Dict[str, Any]:
    admin, token = authenticate(client, email, password)
    session.login(admin, token)
    return admin


def render():
    settings = load_settings()
    session = current_session(settings)
    target = public_target(session)
    if target:
        navigate_to(target)
        st.stop()

    hide_sidebar()
    _, mid, _ = st.columns([0.3, 0.4, 0.3])
    with mid:
        st.title(f"🔐 {settings.app.name}")
        st.caption("Sign in with your admin account")
        errors_key = "login__errors"
        with st.form("login__form"):
            values = render_form(LOGIN_FORM, LOGIN_FORM.blank(), key_prefix="login__form",
                                 errors=st.session_state.get(errors_key), columns=1)
            submitted = st.form_submit_button("Login", type="primary", use_container_width=True)

    if not submitted:
        return
    try:
        with st.spinner("Signing in..."):
            sign_in(session, get_client(settings, session), values["email"], values["password"])
    except FormInvalid as e:
        st.session_state[errors_key] = e.errors
        st.rerun()
    except ApiError as e:
        log.warning("Admin login failed for %s: %s", values["email"], e.message)
        st.error(error_message(e, LOGIN_FAILED))
    else:
        st.session_state.pop(errors_key, None)
        flash("Login successful!")
        navigate_to_app()


if __name__ == "__main__":
    render()
