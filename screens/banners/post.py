# screens/banners/post.py
from __future__ import annotations

from core.policy import require_admin
from core.resource_table import render_create_page
from schemas.banners_schema import BANNERS


@require_admin
def render():
    render_create_page(BANNERS, title="🖼️ Post Banner")


if __name__ == "__main__":
    render()
