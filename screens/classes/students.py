# screens/classes/students.py
from __future__ import annotations

import dataclasses

import streamlit as st

from core.listing import FilterSpec
from core.navigation import navigate_to
from core.policy import require_admin
from core.resource_table import render_resource_list
from core.resources import ResourceSpec
from core.session import current_session
from schemas.classes_schema import CLASS_STUDENTS_PATH
from schemas.students_schema import STUDENTS

ROUTE_KEY = "class-students"

SEARCH = FilterSpec(
    "search", "Search",
    ("id", "name", "mobile", "email", "studentClass", "section", "classRoll"),
    placeholder="Search students in this class",
)


def class_students_spec(class_name: str) -> ResourceSpec:
    """The student resource narrowed to one class; no bulk actions."""
    return dataclasses.replace(
        STUDENTS,
        key="class_students",
        list_path=CLASS_STUDENTS_PATH.format(id=class_name),
        filters=(SEARCH,),
        bulk=None,
        new_route=None,
    )


@require_admin
def render():
    class_name = current_session().detail_id(ROUTE_KEY)
    if st.button("← Back to classes"):
        navigate_to("classes")
    if not class_name:
        st.warning("No class selected.")
        return
    render_resource_list(
        class_students_spec(class_name),
        title=f"Class {class_name} Students",
        page_size_key="class_students",
    )


if __name__ == "__main__":
    render()
