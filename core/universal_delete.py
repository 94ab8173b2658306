# core/universal_delete.py
"""
Universal Delete Handler

ONE confirmation flow for every resource screen, single row or bulk.

Usage:
    # single row
    show_delete_dialog(service, state, rows=[row])

    # selected rows on the current list
    show_delete_dialog(service, state, ids=state.selected)
"""
from __future__ import annotations

import logging
from typing import Any, Callable, Dict, List, Mapping, Optional, Sequence

import streamlit as st

from core.api import ApiError, server_message
from core.forms import flash
from core.listing import ListState
from core.resources import ResourceService

log = logging.getLogger(__name__)


# ============================================================================
# CONFIGURATION: Define behavior for each resource
# ============================================================================

DELETE_CONFIG: Dict[str, Dict[str, Any]] = {
    "students": {
        "warning_message": "This will permanently delete the student, including attendance history.",
        "confirmation_required": True,
    },
    "teachers": {
        "warning_message": "This will permanently delete the teacher's profile and login.",
        "confirmation_required": True,
    },
    "classes": {
        "warning_message": "Students assigned to this class keep their records but lose the class link.",
        "confirmation_required": True,
    },
    "sections": {
        "warning_message": "Students assigned to this section keep their records but lose the section link.",
        "confirmation_required": True,
    },
    "exam_names": {
        "warning_message": "Exam routines that use this name are not changed.",
        "confirmation_required": False,
    },
}

DEFAULT_WARNING = "You won't be able to revert this!"


def delete_config(resource_key: str) -> Dict[str, Any]:
    cfg = {"warning_message": DEFAULT_WARNING, "confirmation_required": False}
    cfg.update(DELETE_CONFIG.get(resource_key, {}))
    return cfg


# ============================================================================
# ACTIONS (no Streamlit; screens and tests share these)
# ============================================================================

def delete_rows(service: ResourceService, state: ListState, rows: Sequence[Mapping[str, Any]]) -> str:
    """Delete rows one by one; stops at the first failure.

    Rows already deleted are dropped from ``state`` even when a later one fails.
    """
    spec = service.spec
    done: List[str] = []
    payload: Any = None
    try:
        for row in rows:
            payload = service.delete(row)
            done.append(state.record_id(row))
    finally:
        if done:
            state.remove_ids(done)
    return server_message(payload) or f"{spec.singular} deleted successfully"


def bulk_delete(service: ResourceService, state: ListState, ids: Sequence[str]) -> str:
    spec = service.spec
    payload = service.bulk_delete(ids)
    state.remove_ids(ids)
    return server_message(payload) or f"{len(ids)} {spec.title.lower()} deleted successfully"


# ============================================================================
# CONFIRMATION DIALOG
# ============================================================================

@st.dialog("Are you sure?")
def _confirm(
    service: ResourceService,
    state: ListState,
    rows: Sequence[Mapping[str, Any]],
    ids: Sequence[str],
    on_done: Optional[Callable[[], None]],
):
    spec = service.spec
    cfg = delete_config(spec.key)
    count = len(ids) if ids else len(rows)
    noun = spec.singular if count == 1 else spec.title
    st.warning(f"Delete {count} {noun.lower()}? {cfg['warning_message']}")

    confirmed = True
    if cfg.get("confirmation_required"):
        confirmed = st.checkbox("I understand this cannot be undone", key="delete_dialog__ack")

    yes, no = st.columns(2)
    if yes.button("Yes, delete it!", type="primary", disabled=not confirmed, use_container_width=True):
        try:
            if ids:
                msg = bulk_delete(service, state, ids)
            else:
                msg = delete_rows(service, state, rows)
        except ApiError as e:
            log.warning("Delete of %s failed: %s", spec.key, e.message)
            flash(server_message(e.payload) or f"Failed to delete {noun.lower()}", "error")
        else:
            flash(msg, "success")
            if on_done:
                on_done()
        st.rerun()
    if no.button("Cancel", use_container_width=True):
        st.rerun()


def show_delete_dialog(
    service: ResourceService,
    state: ListState,
    rows: Sequence[Mapping[str, Any]] = (),
    ids: Sequence[str] = (),
    on_done: Optional[Callable[[], None]] = None,
):
    """Open the confirmation dialog for ``rows`` (single) or ``ids`` (bulk)."""
    if not rows and not ids:
        st.warning("No records selected for deletion")
        return
    _confirm(service, state, list(rows), list(ids), on_done)
