# screens/sections/new.py
from __future__ import annotations

from core.policy import require_admin
from core.resource_table import render_create_page
from schemas.sections_schema import SECTIONS


@require_admin
def render():
    render_create_page(SECTIONS, title="🔤 Add New Section")


if __name__ == "__main__":
    render()
