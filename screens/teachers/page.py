# screens/teachers/page.py
from __future__ import annotations

from core.policy import require_admin
from core.resource_table import render_resource_list
from schemas.teachers_schema import TEACHERS


@require_admin
def render():
    render_resource_list(TEACHERS, title="All Teachers")


if __name__ == "__main__":
    render()
