# core/resource_table.py
"""
Generic list / create screens driven by a ``ResourceSpec``.

Every resource screen is a thin wrapper around ``render_resource_list`` or
one of the create pages below. Screen state lives in ``st.session_state``
under keys prefixed with the resource key, so it is dropped on route change.
"""
from __future__ import annotations

import logging
from typing import Any, Dict, List, Mapping, Optional, Sequence

import streamlit as st

from core.api import ApiClient, ApiError, error_message, get_client, server_message
from core.form_builder import clear_widgets, render_entry_list, render_form
from core.form_schema import EntryListForm, FormInvalid, FormSchema
from core.forms import FIX_ERRORS, failure, flash
from core.images import image_url
from core.listing import EQUALS, ListState, filter_options
from core.navigation import navigate_to, open_detail
from core.resources import ResourceService, ResourceSpec, submit, submit_entries
from core.session import current_session
from core.settings import load_settings, Settings
from core.ui import api_failed, page_title
from core.universal_delete import show_delete_dialog

log = logging.getLogger(__name__)

EMPTY = "—"


def _k(prefix: str, name: str) -> str:
    """Per-screen key namespace."""
    return f"{prefix}__{name}"


# ────────────────────────────────────────────────────────────────────────────
# Fetch
# ────────────────────────────────────────────────────────────────────────────

def refresh(service: ResourceService, state: ListState) -> Optional[ApiError]:
    """Re-fetch the canonical list; on failure the list empties and the error is kept."""
    try:
        state.load(service.fetch())
    except ApiError as e:
        log.warning("Loading %s failed: %s", service.spec.key, e.message)
        state.fail(error_message(e, f"Failed to load {service.spec.title.lower()}"))
        return e
    return None


def screen_state(prefix: str, page_size: int, spec: ResourceSpec) -> ListState:
    key = _k(prefix, "state")
    if key not in st.session_state:
        st.session_state[key] = ListState(page_size=page_size, filters=spec.filters, id_field=spec.id_field)
    return st.session_state[key]


def mark_stale(prefix: str):
    st.session_state[_k(prefix, "stale")] = True


def lookup_options(client: ApiClient, prefix: str, schemas: Sequence[Optional[FormSchema]]) -> Dict[str, List[str]]:
    """Class/section/exam-name choices, fetched once per screen mount."""
    from schemas._lookups import load_lookups, lookup_keys

    key = _k(prefix, "options")
    if key not in st.session_state:
        st.session_state[key] = load_lookups(
            client, lookup_keys(schemas),
            on_error=lambda name, e: failure(error_message(e, f"Failed to load {name.replace('_', ' ')}")),
        )
    return st.session_state[key]


# ────────────────────────────────────────────────────────────────────────────
# Cells
# ────────────────────────────────────────────────────────────────────────────

def cell_text(row: Mapping[str, Any], field: str, kind: str) -> str:
    val = row.get(field)
    if kind == "time_range":
        start, end = row.get("timeStart"), row.get("timeEnd")
        return f"{start or '?'} - {end or '?'}" if (start or end) else EMPTY
    if val is None or val == "":
        return EMPTY
    if kind == "date":
        return str(val)[:10]
    if kind == "badge" and isinstance(val, bool):
        return "Active" if val else "Inactive"
    return str(val)


def _render_cell(row, col, settings: Settings):
    if col.kind == "image":
        url = image_url(settings.api.base_url, row.get(col.field), settings.api.image_path,
                        settings.auth.placeholder_avatar)
        if url:
            st.image(url, width=40)
        return
    text = cell_text(row, col.field, col.kind)
    if col.kind == "badge":
        st.markdown(f"`{text}`")
    else:
        st.write(text)


# ────────────────────────────────────────────────────────────────────────────
# Edit dialog
# ────────────────────────────────────────────────────────────────────────────

@st.dialog("Edit record", width="large")
def _edit_dialog(service: ResourceService, prefix: str, row: Mapping[str, Any], options: Mapping[str, List[str]]):
    spec = service.spec
    schema = spec.edit_form
    settings = load_settings()
    form_key = _k(prefix, "edit")
    errors_key = _k(prefix, "edit_errors")
    st.subheader(f"Edit {spec.singular}")

    if any(f.is_file for f in schema) and row.get("profilePic"):
        st.image(image_url(settings.api.base_url, row.get("profilePic"), settings.api.image_path,
                           settings.auth.placeholder_avatar), width=96, caption="Current photo")

    with st.form(form_key):
        values = render_form(schema, schema.from_record(row), key_prefix=form_key,
                             errors=st.session_state.get(errors_key), options=options)
        submitted = st.form_submit_button("Update", type="primary")

    if submitted:
        try:
            payload = submit(service, schema, values, row=row)
        except FormInvalid as e:
            st.session_state[errors_key] = e.errors
            failure(FIX_ERRORS)
            st.rerun(scope="fragment")
        except ApiError as e:
            api_failed(e, f"Failed to update {spec.singular.lower()}")
        else:
            st.session_state.pop(errors_key, None)
            clear_widgets(form_key)
            flash(server_message(payload) or f"{spec.singular} updated successfully")
            mark_stale(prefix)
            st.rerun()


# ────────────────────────────────────────────────────────────────────────────
# List screen
# ────────────────────────────────────────────────────────────────────────────

def _render_filters(state: ListState, prefix: str):
    if not state.filters:
        return
    cols = st.columns(len(state.filters) + 1)
    for col, spec in zip(cols, state.filters):
        with col:
            wkey = _k(prefix, f"filter_{spec.key}")
            if spec.mode == EQUALS:
                opts = [""] + filter_options(state.records, spec)
                value = st.selectbox(spec.label, opts, key=wkey,
                                     format_func=lambda v, s=spec: f"All {s.label.lower()}" if v == "" else v)
            else:
                value = st.text_input(spec.label, key=wkey, placeholder=spec.placeholder)
            state.set_filter(spec.key, value)
    with cols[-1]:
        st.write("")
        st.write("")
        if st.button("Reset", key=_k(prefix, "reset_filters")):
            for spec in state.filters:
                st.session_state.pop(_k(prefix, f"filter_{spec.key}"), None)
            state.reset_filters()
            st.rerun()


def _toggle_row(state: ListState, rid: str, wkey: str):
    state.toggle(rid, bool(st.session_state.get(wkey)))


def _toggle_page(state: ListState, wkey: str):
    state.select_page(bool(st.session_state.get(wkey)))


def _render_pagination(state: ListState, prefix: str):
    first, last, total = state.showing()
    st.caption(f"Showing {first} to {last} of {total} entries")
    if state.page_count <= 1:
        return
    buttons = st.columns(min(state.page_count, 12) + 2)
    if buttons[0].button("‹", key=_k(prefix, "prev"), disabled=state.page == 1):
        state.go_to(state.page - 1)
        st.rerun()
    for i, page in enumerate(range(1, state.page_count + 1)):
        col = buttons[1 + i % (len(buttons) - 2)]
        kind = "primary" if page == state.page else "secondary"
        if col.button(str(page), key=_k(prefix, f"page_{page}"), type=kind):
            state.go_to(page)
            st.rerun()
    if buttons[-1].button("›", key=_k(prefix, "next"), disabled=state.page >= state.page_count):
        state.go_to(state.page + 1)
        st.rerun()


def render_resource_list(
    spec: ResourceSpec,
    *,
    prefix: Optional[str] = None,
    title: Optional[str] = None,
    client: Optional[ApiClient] = None,
    page_size_key: Optional[str] = None,
):
    """Fetch, filter, paginate and act on the rows of ``spec``."""
    settings = load_settings()
    client = client or get_client(settings)
    service = ResourceService(client, spec)
    prefix = prefix or spec.key
    state = screen_state(prefix, settings.ui.page_size(page_size_key or spec.key, spec.page_size), spec)

    head, actions = st.columns([0.7, 0.3])
    with head:
        page_title(f"{spec.icon} {title or spec.title}".strip())
    with actions:
        a1, a2 = st.columns(2)
        if spec.new_route and a1.button("➕ Add New", key=_k(prefix, "new"), use_container_width=True):
            navigate_to(spec.new_route)
        if a2.button("🔄 Reload", key=_k(prefix, "reload"), use_container_width=True):
            mark_stale(prefix)

    if not state.loaded or st.session_state.pop(_k(prefix, "stale"), False):
        with st.spinner(f"Loading {spec.title.lower()}..."):
            err = refresh(service, state)
        if err is not None:
            api_failed(err, f"Failed to load {spec.title.lower()}")

    _render_filters(state, prefix)

    if state.error:
        st.error(state.error)
    if not state.filtered:
        st.info(f"No {spec.title.lower()} found.")
        return

    bulk = spec.bulk is not None
    if bulk:
        b1, b2 = st.columns([0.7, 0.3])
        with b1:
            pkey = _k(prefix, f"select_page_{state.page}")
            st.session_state[pkey] = state.all_page_selected
            st.checkbox("Select all on this page", key=pkey, on_change=_toggle_page, args=(state, pkey))
        with b2:
            if st.button(f"🗑️ Delete selected ({len(state.selected)})", key=_k(prefix, "bulk_delete"),
                         disabled=not state.selected, use_container_width=True):
                show_delete_dialog(service, state, ids=list(state.selected), on_done=lambda: mark_stale(prefix))

    has_view = bool(spec.view_route)
    has_edit = spec.edit_form is not None and bool(spec.update_path)
    has_delete = bool(spec.delete_path)
    widths = ([0.4] if bulk else []) + [0.4] + [c.width for c in spec.columns] + [1.6]

    header = st.columns(widths)
    offset = 1 if bulk else 0
    header[offset].markdown("**#**")
    for i, c in enumerate(spec.columns):
        header[offset + 1 + i].markdown(f"**{c.label}**")
    header[-1].markdown("**Actions**")

    for idx, row in enumerate(state.page_rows):
        rid = state.record_id(row)
        cells = st.columns(widths)
        if bulk:
            ckey = _k(prefix, f"sel_{rid}")
            st.session_state[ckey] = state.is_selected(rid)
            cells[0].checkbox("select", key=ckey, on_change=_toggle_row, args=(state, rid, ckey),
                              label_visibility="collapsed")
        cells[offset].write(state.row_number(idx))
        for i, c in enumerate(spec.columns):
            with cells[offset + 1 + i]:
                _render_cell(row, c, settings)
        with cells[-1]:
            v, e, d = st.columns(3)
            if has_view and v.button("👁", key=_k(prefix, f"view_{rid}"), help="View"):
                open_detail(spec.view_route, row.get(spec.view_field or spec.id_field))
            if has_edit and e.button("✏️", key=_k(prefix, f"edit_{rid}"), help="Edit"):
                st.session_state.pop(_k(prefix, "edit_errors"), None)
                clear_widgets(_k(prefix, "edit"))
                _edit_dialog(service, prefix, row, lookup_options(client, prefix, [spec.edit_form]))
            if has_delete and d.button("🗑️", key=_k(prefix, f"delete_{rid}"), help="Delete"):
                show_delete_dialog(service, state, rows=[row], on_done=lambda: mark_stale(prefix))

    _render_pagination(state, prefix)


# ────────────────────────────────────────────────────────────────────────────
# Create pages
# ────────────────────────────────────────────────────────────────────────────

def render_create_page(spec: ResourceSpec, *, title: Optional[str] = None):
    """Single-record create form (class, section, student, teacher, ...)."""
    settings = load_settings()
    client = get_client(settings)
    service = ResourceService(client, spec)
    schema = spec.create_form
    prefix = f"new_{spec.key}"
    form_key = _k(prefix, "form")
    errors_key = _k(prefix, "errors")
    nonce_key = _k(prefix, "nonce")

    page_title(title or f"Add New {spec.singular}")
    options = lookup_options(client, prefix, [schema])
    # a fresh form key empties every widget after a successful submit
    form_id = f"{form_key}_{st.session_state.get(nonce_key, 0)}"

    with st.form(form_id):
        values = render_form(schema, schema.blank(), key_prefix=form_id,
                             errors=st.session_state.get(errors_key), options=options)
        s1, s2, _ = st.columns([0.2, 0.2, 0.6])
        submitted = s1.form_submit_button("Submit", type="primary", use_container_width=True)
        reset = s2.form_submit_button("Reset", use_container_width=True)

    if reset:
        st.session_state.pop(errors_key, None)
        st.session_state[nonce_key] = st.session_state.get(nonce_key, 0) + 1
        st.rerun()

    if submitted:
        try:
            payload = submit(service, schema, values)
        except FormInvalid as e:
            st.session_state[errors_key] = e.errors
            failure(FIX_ERRORS)
            st.rerun()
        except ApiError as e:
            api_failed(e, f"Failed to create {spec.singular.lower()}")
        else:
            st.session_state.pop(errors_key, None)
            st.session_state[nonce_key] = st.session_state.get(nonce_key, 0) + 1
            flash(server_message(payload) or f"{spec.singular} created successfully")
            st.rerun()


def render_entry_create_page(spec: ResourceSpec, *, entry_label: str, title: Optional[str] = None):
    """Multi-entry create page (routine periods, exam entries, diary entries)."""
    settings = load_settings()
    client = get_client(settings)
    service = ResourceService(client, spec)
    session = current_session(settings)
    prefix = f"new_{spec.key}"
    form_key = _k(prefix, "entries")

    page_title(title or f"Add New {spec.singular}")
    if form_key not in st.session_state:
        st.session_state[form_key] = EntryListForm(spec.create_form, session.creator_metadata())
    form: EntryListForm = st.session_state[form_key]
    options = lookup_options(client, prefix, [spec.create_form])

    render_entry_list(form, key_prefix=_k(prefix, "entry"), entry_label=entry_label, options=options)

    st.divider()
    if st.button(f"Save {len(form)} {entry_label.lower()}(s)", type="primary", key=_k(prefix, "save")):
        try:
            payload = submit_entries(service, form)
        except FormInvalid:
            failure(FIX_ERRORS)
            st.rerun()
        except ApiError as e:
            if form.errors:
                failure("Please correct the highlighted fields")
                st.rerun()
            api_failed(e, f"Failed to save {spec.title.lower()}")
        else:
            form.reset()
            clear_widgets(_k(prefix, "entry"))
            flash(server_message(payload) or f"{spec.title} saved successfully")
            st.rerun()
