# screens/teachers/new.py
from __future__ import annotations

from core.policy import require_admin
from core.resource_table import render_create_page
from schemas.teachers_schema import TEACHERS


@require_admin
def render():
    render_create_page(TEACHERS, title="👨‍🏫 Add New Teacher")


if __name__ == "__main__":
    render()
