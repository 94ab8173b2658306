# core/session.py
"""
Typed access to the signed-in admin and the shell flags.

Everything the console remembers between reruns lives in one mapping
(``st.session_state`` at runtime, a plain dict in tests). Screens never read
raw keys; they go through ``AdminSession``.
"""
from __future__ import annotations

import logging
from typing import Any, Dict, MutableMapping, Optional

log = logging.getLogger(__name__)

ADMIN_KEY = "genius_admin"
TOKEN_KEY = "token"
SIDEBAR_OPEN_KEY = "shell__sidebar_open"
EXPANDED_SECTION_KEY = "shell__expanded_section"
ROUTE_KEY = "shell__route"

# Screen-local keys are namespaced "<screen>__<name>" and dropped on route change
SCREEN_KEY_SEP = "__"
_SHELL_PREFIX = "shell__"


def _default_store() -> MutableMapping[str, Any]:
    import streamlit as st
    return st.session_state


class AdminSession:
    def __init__(
        self,
        store: Optional[MutableMapping[str, Any]] = None,
        admin_key: str = ADMIN_KEY,
        token_key: str = TOKEN_KEY,
    ):
        self.store = store if store is not None else _default_store()
        self.admin_key = admin_key
        self.token_key = token_key

    # ── auth ────────────────────────────────────────────────────────────────
    @property
    def admin(self) -> Dict[str, Any]:
        return self.store.get(self.admin_key) or {}

    @property
    def token(self) -> Optional[str]:
        return self.store.get(self.token_key) or None

    @property
    def is_authenticated(self) -> bool:
        return bool(self.store.get(self.admin_key))

    @property
    def admin_id(self) -> Optional[str]:
        return self.admin.get("_id")

    @property
    def admin_name(self) -> str:
        a = self.admin
        return (a.get("name") or a.get("email") or "").strip() or "Admin"

    def creator_metadata(self) -> Dict[str, Any]:
        """Fields stamped onto every new routine/exam/diary entry."""
        return {"createdBy": self.admin.get("name"), "teacher_id": self.admin_id}

    def login(self, admin: Dict[str, Any], token: Optional[str]) -> None:
        self.store[self.admin_key] = dict(admin or {"name": "Admin"})
        if token:
            self.store[self.token_key] = token
        log.info("Admin session started for %s", self.admin_name)

    def logout(self) -> None:
        for key in list(self.store.keys()):
            del self.store[key]
        log.info("Admin session cleared")

    # ── shell ───────────────────────────────────────────────────────────────
    @property
    def sidebar_open(self) -> bool:
        return bool(self.store.get(SIDEBAR_OPEN_KEY, True))

    def toggle_sidebar(self) -> None:
        self.store[SIDEBAR_OPEN_KEY] = not self.sidebar_open

    @property
    def expanded_section(self) -> Optional[str]:
        return self.store.get(EXPANDED_SECTION_KEY)

    def expand_section(self, title: Optional[str]) -> None:
        self.store[EXPANDED_SECTION_KEY] = title

    @property
    def route(self) -> Optional[str]:
        return self.store.get(ROUTE_KEY)

    def enter_route(self, route_key: str, section: Optional[str] = None) -> bool:
        """Record the active route; returns True when it changed.

        A change resets the shell flags and drops every screen-local key so
        the next screen mounts fresh.
        """
        if self.store.get(ROUTE_KEY) == route_key:
            return False
        for key in list(self.store.keys()):
            if SCREEN_KEY_SEP in key and not key.startswith(_SHELL_PREFIX) and not key.startswith("detail__"):
                del self.store[key]
        self.store[ROUTE_KEY] = route_key
        self.store[SIDEBAR_OPEN_KEY] = True
        self.store[EXPANDED_SECTION_KEY] = section
        log.debug("Route changed to %s", route_key)
        return True

    # ── detail routes ───────────────────────────────────────────────────────
    def set_detail_id(self, route_key: str, record_id: str) -> None:
        self.store[f"detail__{route_key}"] = record_id

    def detail_id(self, route_key: str) -> Optional[str]:
        return self.store.get(f"detail__{route_key}")


def current_session(settings=None) -> AdminSession:
    """Session bound to ``st.session_state`` with the configured storage keys."""
    from core.settings import load_settings

    settings = settings or load_settings()
    return AdminSession(admin_key=settings.auth.admin_key, token_key=settings.auth.token_key)
