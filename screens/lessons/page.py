# screens/lessons/page.py
from __future__ import annotations

from core.policy import require_admin
from core.resource_table import render_resource_list
from schemas.lessons_schema import LESSONS


@require_admin
def render():
    render_resource_list(LESSONS)


if __name__ == "__main__":
    render()
