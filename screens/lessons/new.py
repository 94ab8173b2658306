# screens/lessons/new.py
from __future__ import annotations

import streamlit as st

from core.policy import require_admin
from core.resource_table import render_entry_create_page
from schemas.lessons_schema import LESSONS


@require_admin
def render():
    render_entry_create_page(LESSONS, entry_label="Diary Entry", title="📓 Daily Lesson Diary")
    st.caption("Homework and notes are optional.")


if __name__ == "__main__":
    render()
