# screens/exam_routines/new.py
from __future__ import annotations

from core.policy import require_admin
from core.resource_table import render_entry_create_page
from schemas.exam_routines_schema import EXAM_ROUTINES


@require_admin
def render():
    render_entry_create_page(EXAM_ROUTINES, entry_label="Exam", title="📝 Create Exam Routine")


if __name__ == "__main__":
    render()
