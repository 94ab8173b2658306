# screens/exam_routines/page.py
from __future__ import annotations

from core.policy import require_admin
from core.resource_table import render_resource_list
from schemas.exam_routines_schema import EXAM_ROUTINES


@require_admin
def render():
    render_resource_list(EXAM_ROUTINES, title="Exam Routine")


if __name__ == "__main__":
    render()
