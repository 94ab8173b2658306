# screens/classes/page.py
from __future__ import annotations

from core.policy import require_admin
from core.resource_table import render_resource_list
from schemas.classes_schema import CLASSES


@require_admin
def render():
    render_resource_list(CLASSES)


if __name__ == "__main__":
    render()
