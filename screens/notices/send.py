# screens/notices/send.py
"""
Send notice
- Title, description, optional image
- Recipients picked from the student list, or "send to all"
"""
from __future__ import annotations

import logging
from typing import Any, Dict, Iterable, List, Mapping, Sequence

import streamlit as st

from core.api import ApiError, error_message, get_client, server_message
from core.form_builder import render_form
from core.form_schema import FormInvalid
from core.forms import FIX_ERRORS, failure, flash
from core.policy import require_admin
from core.resources import ResourceService
from core.settings import load_settings
from core.ui import api_failed, page_title
from schemas.notices_schema import NOTICE_SEND_FORM, NOTICES
from schemas.students_schema import STUDENTS

log = logging.getLogger(__name__)

NO_RECIPIENTS = "Please select at least one student"


def recipients(students: Iterable[Mapping[str, Any]], selected: Sequence[str], send_to_all: bool) -> List[str]:
    if send_to_all:
        return [str(s["_id"]) for s in students if s.get("_id")]
    return [str(i) for i in selected]


def search_students(students: Iterable[Mapping[str, Any]], term: str) -> List[Mapping[str, Any]]:
    term = (term or "").strip().lower()
    if not term:
        return list(students)
    return [s for s in students
            if term in str(s.get("name") or "").lower() or term in str(s.get("id") or "").lower()]


def send_notice(service: ResourceService, values: Mapping[str, Any], student_ids: Sequence[str]) -> Any:
    """Validate and POST; multipart only when an image is attached."""
    errors = NOTICE_SEND_FORM.validate(values)
    if not student_ids:
        errors["student_ids"] = NO_RECIPIENTS
    if errors:
        raise FormInvalid(errors)
    body, files = NOTICE_SEND_FORM.payload(values)
    body["student_ids"] = list(student_ids)
    return service.create(body, files)


def _students(client) -> List[Dict[str, Any]]:
    key = "send_notice__students"
    if key not in st.session_state:
        try:
            st.session_state[key] = ResourceService(client, STUDENTS).fetch()
        except ApiError as e:
            failure(error_message(e, "Failed to fetch students"))
            return []
    return st.session_state[key]


@require_admin
def render():
    settings = load_settings()
    client = get_client(settings)
    service = ResourceService(client, NOTICES)
    errors_key = "send_notice__errors"
    nonce_key = "send_notice__nonce"
    form_id = f"send_notice__form_{st.session_state.get(nonce_key, 0)}"

    page_title("📢 Send Notice", "Notices are delivered to the selected students")
    students = _students(client)
    by_id = {str(s["_id"]): s for s in students if s.get("_id")}

    send_to_all = st.checkbox("Send to all students", key=f"{form_id}__all")
    selected: List[str] = []
    if not send_to_all:
        term = st.text_input("Search students by name or ID", key=f"{form_id}__search")
        shown = [str(s["_id"]) for s in search_students(students, term) if s.get("_id")]
        picked = st.session_state.get(f"{form_id}__picked", [])
        selected = st.multiselect(
            "Students", sorted(set(shown) | set(picked), key=lambda i: (by_id.get(i, {}).get("name") or "")),
            format_func=lambda i: f"{by_id.get(i, {}).get('name', i)} ({by_id.get(i, {}).get('id', '')})",
            key=f"{form_id}__picked",
        )
    st.caption(f"{len(recipients(students, selected, send_to_all))} recipient(s)")

    errors = st.session_state.get(errors_key) or {}
    if errors.get("student_ids"):
        st.caption(f":red[{errors['student_ids']}]")

    with st.form(form_id):
        values = render_form(NOTICE_SEND_FORM, NOTICE_SEND_FORM.blank(), key_prefix=form_id,
                             errors=errors, options=None, columns=1)
        submitted = st.form_submit_button("Send Notice", type="primary")

    if submitted:
        ids = recipients(students, selected, send_to_all)
        try:
            payload = send_notice(service, values, ids)
        except FormInvalid as e:
            st.session_state[errors_key] = e.errors
            failure(FIX_ERRORS)
            st.rerun()
        except ApiError as e:
            api_failed(e, "Failed to send notice")
        else:
            log.info("Notice sent to %d students", len(ids))
            st.session_state.pop(errors_key, None)
            st.session_state[nonce_key] = st.session_state.get(nonce_key, 0) + 1
            flash(server_message(payload) or f"Notice sent successfully to {len(ids)} students!")
            st.rerun()


if __name__ == "__main__":
    render()
