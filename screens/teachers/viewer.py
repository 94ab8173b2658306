# screens/teachers/viewer.py
from __future__ import annotations

from typing import Any, Dict, Optional

import streamlit as st

from core.api import ApiError, get_client, unwrap
from core.images import image_url
from core.navigation import navigate_to
from core.policy import require_admin
from core.session import current_session
from core.settings import load_settings
from core.ui import api_failed
from schemas.teachers_schema import TEACHER_DETAIL_PATH

ROUTE_KEY = "view-teacher"

PERSONAL = [
    ("fatherName", "Father's Name"),
    ("motherName", "Mother's Name"),
    ("gender", "Gender"),
    ("email", "Email"),
    ("mobile", "Mobile"),
    ("emergencyContact", "Emergency Contact"),
    ("address", "Address"),
]

PROFESSIONAL = [
    ("subject", "Subject"),
    ("education", "Education"),
    ("createdAt", "Joined"),
    ("updatedAt", "Last Updated"),
]


def field_value(teacher: Dict[str, Any], field: str) -> str:
    val = teacher.get(field)
    if val is None or val == "":
        return "N/A"
    if field in ("createdAt", "updatedAt"):
        return str(val)[:10]
    return str(val)


def _load_teacher(teacher_id: str) -> Optional[Dict[str, Any]]:
    try:
        data = unwrap(get_client().get(TEACHER_DETAIL_PATH.format(id=teacher_id)))
    except ApiError as e:
        api_failed(e, "Failed to load teacher")
        return None
    return data if isinstance(data, dict) else None


def _facts(teacher: Dict[str, Any], fields):
    for field, label in fields:
        st.markdown(f"**{label}:** {field_value(teacher, field)}")


@require_admin
def render():
    settings = load_settings()
    session = current_session(settings)
    teacher_id = session.detail_id(ROUTE_KEY)

    if st.button("← Back to teachers"):
        navigate_to("teachers")
    if not teacher_id:
        st.warning("No teacher selected.")
        return

    teacher = _load_teacher(teacher_id)
    if teacher is None:
        st.info("Teacher not found.")
        return

    pic, head = st.columns([0.25, 0.75])
    with pic:
        st.image(image_url(settings.api.base_url, teacher.get("profilePic"), settings.api.image_path,
                           settings.auth.placeholder_avatar), width=160)
    with head:
        st.title(teacher.get("name") or "Teacher")
        st.caption(f"{field_value(teacher, 'subject')} Teacher · ID: {field_value(teacher, 'id')}")

    st.divider()
    left, right = st.columns(2)
    with left:
        st.subheader("Personal Information")
        _facts(teacher, PERSONAL)
    with right:
        st.subheader("Professional Information")
        _facts(teacher, PROFESSIONAL)

        st.subheader("Identification")
        st.markdown(f"**NID Number:** {field_value(teacher, 'nidNumber')}")
        nid = image_url(settings.api.base_url, teacher.get("nidPhoto"), settings.api.image_path)
        if nid:
            st.image(nid, caption="NID Photo", width=280)


if __name__ == "__main__":
    render()
