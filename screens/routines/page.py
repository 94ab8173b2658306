# screens/routines/page.py
from __future__ import annotations

from core.policy import require_admin
from core.resource_table import render_resource_list
from schemas.routines_schema import ROUTINES


@require_admin
def render():
    render_resource_list(ROUTINES)


if __name__ == "__main__":
    render()
