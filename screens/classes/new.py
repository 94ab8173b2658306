# screens/classes/new.py
from __future__ import annotations

from core.policy import require_admin
from core.resource_table import render_create_page
from schemas.classes_schema import CLASSES


@require_admin
def render():
    render_create_page(CLASSES, title="🏫 Add New Class")


if __name__ == "__main__":
    render()
