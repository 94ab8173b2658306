# app.py
from __future__ import annotations
import logging
from pathlib import Path

import streamlit as st

from core.forms import show_flashes
from core.nav_registry import ROUTE_INDEX, DEFAULT_ROUTE_KEY, section_of
from core.schema_registry import all_specs, auto_discover
from core.session import current_session
from core.settings import configure_logging, load_settings
from core.ui import handle_error, hide_sidebar, render_header, render_sidebar

APP_DIR = Path(__file__).resolve().parent

logger = logging.getLogger(__name__)


def _build_pages():
    """One st.Page per route; the sidebar is drawn by render_sidebar."""
    pages = {}
    for key, route in ROUTE_INDEX.items():
        script = APP_DIR / route.script
        if not script.exists():
            logger.warning("Route %s points at missing page %s", key, route.script)
            continue
        pages[key] = st.Page(
            route.script,
            title=route.label,
            icon=route.icon,
            url_path=key,
            default=(key == DEFAULT_ROUTE_KEY),
        )
    return pages


def main():
    settings = load_settings()
    configure_logging(settings)
    st.set_page_config(page_title=settings.app.name, page_icon="🏫", layout="wide",
                       initial_sidebar_state="expanded")

    # registers every ResourceSpec under schemas/
    auto_discover()
    logger.debug("%d resources registered", len(all_specs()))

    pages = _build_pages()
    nav = st.navigation(list(pages.values()), position="hidden")
    route_key = next((k for k, p in pages.items() if p == nav), None)
    route = ROUTE_INDEX.get(route_key) if route_key else None

    session = current_session(settings)
    if route_key:
        session.enter_route(route_key, section_of(route_key))

    if route is None or route.public or not session.is_authenticated:
        hide_sidebar()
    else:
        render_header(session, settings.app.name)
        render_sidebar(session, route_key)
        st.divider()

    show_flashes()
    try:
        nav.run()
    except Exception as e:
        # st.stop, st.rerun and st.switch_page unwind through here
        if type(e).__module__.startswith("streamlit."):
            raise
        handle_error(e, "Something went wrong on this page.")


main()
