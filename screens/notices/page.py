# screens/notices/page.py
from __future__ import annotations

from core.policy import require_admin
from core.resource_table import render_resource_list
from schemas.notices_schema import NOTICES


@require_admin
def render():
    render_resource_list(NOTICES, title="All Notices")


if __name__ == "__main__":
    render()
