# core/policy.py
"""
Page access for the admin console.

There is one role: a signed-in admin. Presence of the admin record in the
session is the whole check; there is no expiry or refresh.
"""
from __future__ import annotations
from typing import Callable, Optional
import functools
import logging

import streamlit as st

from core.nav_registry import LOGIN_ROUTE_KEY, DEFAULT_ROUTE_KEY
from core.session import AdminSession, current_session

log = logging.getLogger(__name__)


def guard_target(session: AdminSession) -> Optional[str]:
    """Route to redirect to, or None when the page may render."""
    return None if session.is_authenticated else LOGIN_ROUTE_KEY


def public_target(session: AdminSession) -> Optional[str]:
    """Signed-in admins skip the login page."""
    return DEFAULT_ROUTE_KEY if session.is_authenticated else None


def require_admin(fn: Callable):
    """Render ``fn`` only for a signed-in admin; everyone else goes to login."""
    @functools.wraps(fn)
    def _inner(*args, **kwargs):
        from core.navigation import navigate_to

        target = guard_target(current_session())
        if target:
            log.info("No admin session; redirecting %s to %s", fn.__module__, target)
            navigate_to(target)
            st.stop()
        return fn(*args, **kwargs)
    return _inner
