from __future__ import annotations
from typing import List, Tuple
import streamlit as st

FIX_ERRORS = "Please fix the errors in the form"

_FLASH_KEY = "shell__flash"
_ICONS = {"success": "✅", "error": "❌", "warning": "⚠️", "info": "ℹ️"}


def flash(msg: str, kind: str = "success"):
    """Queue a toast that survives the next ``st.rerun()``."""
    queue: List[Tuple[str, str]] = st.session_state.setdefault(_FLASH_KEY, [])
    queue.append((kind, msg))


def show_flashes():
    for kind, msg in st.session_state.pop(_FLASH_KEY, []):
        st.toast(msg, icon=_ICONS.get(kind))


def failure(msg: str): st.toast(msg, icon=_ICONS["error"])
