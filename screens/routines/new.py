# screens/routines/new.py
from __future__ import annotations

from core.policy import require_admin
from core.resource_table import render_entry_create_page
from schemas.routines_schema import ROUTINES


@require_admin
def render():
    render_entry_create_page(ROUTINES, entry_label="Period", title="🗓️ Create Class Routine")


if __name__ == "__main__":
    render()
