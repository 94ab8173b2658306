# screens/exam_names/new.py
from __future__ import annotations

from core.policy import require_admin
from core.resource_table import render_create_page
from schemas.exam_names_schema import EXAM_NAMES


@require_admin
def render():
    render_create_page(EXAM_NAMES, title="🏷️ Add Exam Name")


if __name__ == "__main__":
    render()
