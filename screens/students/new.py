# screens/students/new.py
from __future__ import annotations

import streamlit as st

from core.policy import require_admin
from core.resource_table import render_create_page
from schemas.students_schema import STUDENTS


@require_admin
def render():
    render_create_page(STUDENTS, title="🎓 Admit New Student")
    st.caption("Fields marked * are required. The profile picture is uploaded with the form.")


if __name__ == "__main__":
    render()
