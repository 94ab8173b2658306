# screens/students/page.py
from __future__ import annotations

from core.policy import require_admin
from core.resource_table import render_resource_list
from schemas.students_schema import STUDENTS


@require_admin
def render():
    render_resource_list(STUDENTS, title="All Students")


# Wrap the call to prevent side-effects when imported by other modules
if __name__ == "__main__":
    render()
