# screens/exam_names/page.py
from __future__ import annotations

from core.policy import require_admin
from core.resource_table import render_resource_list
from schemas.exam_names_schema import EXAM_NAMES


@require_admin
def render():
    render_resource_list(EXAM_NAMES)


if __name__ == "__main__":
    render()
