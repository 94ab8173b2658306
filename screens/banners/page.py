# screens/banners/page.py
"""Banner gallery: image cards in a grid, delete per card."""
from __future__ import annotations

import streamlit as st

from core.api import get_client
from core.images import image_url
from core.navigation import navigate_to
from core.policy import require_admin
from core.resource_table import cell_text, mark_stale, refresh, screen_state
from core.resources import ResourceService
from core.settings import load_settings
from core.ui import api_failed, page_title
from core.universal_delete import show_delete_dialog
from schemas.banners_schema import BANNERS

PREFIX = "banners"
COLUMNS = 3


@require_admin
def render():
    settings = load_settings()
    service = ResourceService(get_client(settings), BANNERS)
    state = screen_state(PREFIX, settings.ui.page_size(BANNERS.key, BANNERS.page_size), BANNERS)

    head, add = st.columns([0.8, 0.2])
    with head:
        page_title("🖼️ All Banners")
    if add.button("➕ Post Banner", use_container_width=True, key="banners__new"):
        navigate_to("post-banner")

    if not state.loaded or st.session_state.pop("banners__stale", False):
        with st.spinner("Loading banners..."):
            err = refresh(service, state)
        if err is not None:
            api_failed(err, "Failed to fetch banners")

    if not state.filtered:
        st.info("No banners found.")
        return

    rows = state.page_rows
    for start in range(0, len(rows), COLUMNS):
        cols = st.columns(COLUMNS)
        for col, row in zip(cols, rows[start:start + COLUMNS]):
            with col, st.container(border=True):
                url = image_url(settings.api.base_url, row.get("image"), settings.api.image_path)
                if url:
                    st.image(url, use_container_width=True)
                st.markdown(f"**{row.get('title') or 'Untitled'}**")
                st.caption(row.get("description") or "")
                st.caption(f"Posted {cell_text(row, 'createdAt', 'date')}")
                if st.button("🗑️ Delete", key=f"banners__delete_{state.record_id(row)}"):
                    show_delete_dialog(service, state, rows=[row], on_done=lambda: mark_stale(PREFIX))

    first, last, total = state.showing()
    st.caption(f"Showing {first} to {last} of {total} entries")
    if state.page_count > 1:
        p1, p2, p3 = st.columns([0.2, 0.6, 0.2])
        if p1.button("‹ Previous", disabled=state.page == 1, key="banners__prev"):
            state.go_to(state.page - 1)
            st.rerun()
        p2.caption(f"Page {state.page} of {state.page_count}")
        if p3.button("Next ›", disabled=state.page >= state.page_count, key="banners__next"):
            state.go_to(state.page + 1)
            st.rerun()


if __name__ == "__main__":
    render()
