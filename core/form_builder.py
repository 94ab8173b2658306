# core/form_builder.py
"""
Streamlit rendering for ``FormSchema`` / ``EntryListForm``.

Widgets are drawn from the field kind; values come back as plain strings
(dates as ``YYYY-MM-DD``, times as ``HH:MM``) so validation and payloads
never see widget types.
"""
from __future__ import annotations

import datetime as dt
from typing import Any, Dict, List, Mapping, Optional, Sequence

import streamlit as st

from core.form_schema import (
    CHECKBOX, DATE, EMAIL, FILE, MULTISELECT, PASSWORD, SELECT, TEXTAREA, TIME,
    EntryListForm, FieldSpec, FormSchema,
)
from core.images import data_url_preview

Options = Mapping[str, Sequence[str]]


def _as_date(value: Any) -> Optional[dt.date]:
    if isinstance(value, dt.date):
        return value
    if not value:
        return None
    try:
        return dt.date.fromisoformat(str(value)[:10])
    except ValueError:
        return None


def _as_time(value: Any) -> Optional[dt.time]:
    if isinstance(value, dt.time):
        return value
    if not value:
        return None
    try:
        return dt.time.fromisoformat(str(value)[:5])
    except ValueError:
        return None


def field_options(spec: FieldSpec, options: Optional[Options] = None, current: Any = None) -> List[str]:
    opts = list((options or {}).get(spec.options_key or spec.name, ()) or spec.options)
    extra = current if isinstance(current, (list, tuple)) else [current]
    for val in extra:
        if val not in (None, "") and str(val) not in opts:
            opts.append(str(val))
    return opts


def field_error(message: Optional[str]) -> None:
    if message:
        st.caption(f":red[{message}]")


def render_field(
    spec: FieldSpec,
    value: Any,
    *,
    key: str,
    error: Optional[str] = None,
    options: Optional[Options] = None,
    disabled: bool = False,
) -> Any:
    """Draw one input and return its value."""
    label = f"{spec.label} *" if spec.required else spec.label
    kind = spec.kind

    if kind == SELECT:
        opts = [""] + field_options(spec, options, value)
        current = "" if value is None else str(value)
        out = st.selectbox(
            label, opts,
            index=opts.index(current) if current in opts else 0,
            format_func=lambda v: f"Select {spec.label}" if v == "" else v,
            key=key, disabled=disabled, help=spec.help,
        )
    elif kind == MULTISELECT:
        opts = field_options(spec, options, value)
        out = st.multiselect(label, opts, default=[str(v) for v in (value or [])],
                             key=key, disabled=disabled, help=spec.help)
    elif kind == DATE:
        picked = st.date_input(label, value=_as_date(value), key=key, disabled=disabled, help=spec.help)
        out = picked.isoformat() if isinstance(picked, dt.date) else ""
    elif kind == TIME:
        picked = st.time_input(label, value=_as_time(value), key=key, disabled=disabled, help=spec.help)
        out = picked.strftime("%H:%M") if isinstance(picked, dt.time) else ""
    elif kind == CHECKBOX:
        out = st.checkbox(label, value=bool(value), key=key, disabled=disabled, help=spec.help)
    elif kind == TEXTAREA:
        out = st.text_area(label, value=value or "", key=key, disabled=disabled,
                           placeholder=spec.placeholder, help=spec.help)
    elif kind == FILE:
        out = st.file_uploader(label, type=list(spec.accept) or None, key=key,
                               disabled=disabled, help=spec.help)
        if out is not None:
            preview = data_url_preview(out.getvalue())
            if preview:
                st.image(preview, width=120)
    else:
        out = st.text_input(
            label, value="" if value is None else str(value),
            type="password" if kind == PASSWORD else "default",
            key=key, disabled=disabled, placeholder=spec.placeholder, help=spec.help,
            autocomplete="email" if kind == EMAIL else None,
        )
    field_error(error)
    return out


def render_form(
    schema: FormSchema,
    values: Mapping[str, Any],
    *,
    key_prefix: str,
    errors: Optional[Mapping[str, str]] = None,
    options: Optional[Options] = None,
    columns: int = 2,
) -> Dict[str, Any]:
    """Draw every field of ``schema`` in a grid; returns the current values."""
    errors = errors or {}
    out: Dict[str, Any] = dict(values)
    wide = [f for f in schema if f.kind in (TEXTAREA, FILE)]
    narrow = [f for f in schema if f not in wide]
    cols = st.columns(columns) if columns > 1 else [st.container()]
    for i, spec in enumerate(narrow):
        with cols[i % len(cols)]:
            out[spec.name] = render_field(spec, values.get(spec.name), key=f"{key_prefix}__{spec.name}",
                                          error=errors.get(spec.name), options=options)
    for spec in wide:
        out[spec.name] = render_field(spec, values.get(spec.name), key=f"{key_prefix}__{spec.name}",
                                      error=errors.get(spec.name), options=options)
    for name, msg in errors.items():
        if name not in out:
            field_error(msg)
    return out


def clear_widgets(key_prefix: str) -> None:
    """Forget widget state so inputs re-initialise from form values."""
    for key in list(st.session_state.keys()):
        if str(key).startswith(f"{key_prefix}__"):
            del st.session_state[key]


def render_entry_list(
    form: EntryListForm,
    *,
    key_prefix: str,
    entry_label: str = "Entry",
    options: Optional[Options] = None,
) -> None:
    """Draw each entry with its remove button plus an "Add" button.

    Runs outside ``st.form`` because add/remove must rerun immediately.
    """
    for idx, entry in enumerate(list(form.entries)):
        with st.container(border=True):
            head, rm = st.columns([0.85, 0.15])
            head.markdown(f"**{entry_label} #{idx + 1}**")
            if len(form) > 1 and rm.button("Remove", key=f"{key_prefix}__rm_{idx}"):
                form.remove_entry(idx)
                clear_widgets(key_prefix)
                st.rerun()

            cols = st.columns(3)
            for j, spec in enumerate(form.schema):
                target = st.container() if spec.kind == TEXTAREA else cols[j % 3]
                with target:
                    val = render_field(
                        spec, entry.get(spec.name),
                        key=f"{key_prefix}__{idx}_{spec.name}",
                        error=form.error_for(idx, spec.name),
                        options=options,
                    )
                if val != entry.get(spec.name):
                    form.set_value(idx, spec.name, val)
            range_error = form.error_for(idx, "timeRange")
            field_error(range_error)

    if st.button(f"➕ Add {entry_label}", key=f"{key_prefix}__add"):
        form.add_entry()
        st.rerun()
