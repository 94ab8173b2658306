# screens/attendance/page.py
from __future__ import annotations

import datetime as dt

import streamlit as st

from core.api import ApiError, error_message, get_client, server_message
from core.forms import failure, flash
from core.policy import require_admin
from core.resources import ResourceService
from core.session import current_session
from core.settings import load_settings
from core.ui import api_failed, page_title
from schemas.classes_schema import CLASSES
from schemas.sections_schema import SECTIONS
from screens.attendance.roster import (
    STATUSES, STUDENTS_LOADED, Roster, RosterError, fetch_roster, status_of, submit_attendance,
)


ROSTER_KEY = "attendance__roster"
CHOICES_KEY = "attendance__choices"


def _roster() -> Roster:
    if ROSTER_KEY not in st.session_state:
        st.session_state[ROSTER_KEY] = Roster()
    return st.session_state[ROSTER_KEY]


def _choices(client):
    """Classes and sections as ``{_id: name}``, fetched once per visit."""
    if CHOICES_KEY not in st.session_state:
        out = {}
        for spec, field_name, label in ((CLASSES, "className", "classes"), (SECTIONS, "sectionName", "sections")):
            try:
                rows = ResourceService(client, spec).fetch()
            except ApiError as e:
                failure(error_message(e, f"Failed to load {label}"))
                rows = []
            out[label] = {r["_id"]: str(r.get(field_name) or "") for r in rows if r.get("_id")}
        st.session_state[CHOICES_KEY] = out
    return st.session_state[CHOICES_KEY]


def _on_status(roster: Roster, student_id: str, status: str, wkey: str):
    if st.session_state.get(wkey):
        roster.set_status(student_id, status)


def _on_remarks(roster: Roster, student_id: str, wkey: str):
    roster.set_remarks(student_id, st.session_state.get(wkey, ""))


def _render_roster(roster: Roster):
    counts = roster.counts()
    m1, m2, m3, m4 = st.columns(4)
    m1.metric("Students", len(roster.students))
    m2.metric("Present", counts["present"])
    m3.metric("Absent", counts["absent"])
    m4.metric("Late", counts["late"])

    roster.search = st.text_input("Search by name or ID", value=roster.search, key="attendance__search")

    a1, a2, a3, _ = st.columns([0.2, 0.2, 0.2, 0.4])
    for col, status in zip((a1, a2, a3), STATUSES):
        if col.button(f"Mark all {status}", key=f"attendance__all_{status}", use_container_width=True):
            roster.mark_all(status)
            st.rerun()

    header = st.columns([0.5, 1, 2, 0.8, 0.8, 0.8, 2])
    for col, label in zip(header, ("#", "ID", "Name", "Present", "Absent", "Late", "Remarks")):
        col.markdown(f"**{label}**")

    visible = roster.visible
    if not visible:
        st.info("No students match your search.")
    for i, student in enumerate(visible, start=1):
        sid = student["_id"]
        entry = roster.attendance.get(sid, {})
        current = status_of(entry)
        cells = st.columns([0.5, 1, 2, 0.8, 0.8, 0.8, 2])
        cells[0].write(i)
        cells[1].write(student.get("id") or "—")
        cells[2].write(student.get("name") or "—")
        for col, status in zip(cells[3:6], STATUSES):
            wkey = f"attendance__{status}_{sid}"
            st.session_state[wkey] = current == status
            col.checkbox(status, key=wkey, label_visibility="collapsed",
                         on_change=_on_status, args=(roster, sid, status, wkey))
        rkey = f"attendance__remarks_{sid}"
        st.session_state[rkey] = entry.get("remarks", "")
        cells[6].text_input("remarks", key=rkey, label_visibility="collapsed", placeholder="Remarks",
                            on_change=_on_remarks, args=(roster, sid, rkey))


@require_admin
def render():
    settings = load_settings()
    client = get_client(settings)
    session = current_session(settings)
    roster = _roster()

    page_title("📝 Attendance", "Select a class, load students and mark attendance")
    choices = _choices(client)
    classes, sections = choices["classes"], choices["sections"]

    c1, c2, c3, c4 = st.columns([0.3, 0.3, 0.2, 0.2])
    class_ids = [""] + list(classes)
    class_id = c1.selectbox(
        "Class", class_ids, index=class_ids.index(roster.class_id) if roster.class_id in class_ids else 0,
        format_func=lambda v: classes.get(v, "Select class"), key="attendance__class",
    )
    roster.select_class(class_id or None, classes.get(class_id, ""))

    section_ids = [""] + list(sections)
    section_id = c2.selectbox(
        "Section", section_ids,
        index=section_ids.index(roster.section_id) if roster.section_id in section_ids else 0,
        format_func=lambda v: sections.get(v, "All sections"), key="attendance__section",
        disabled=not roster.class_id,
    )
    roster.select_section(section_id or None, sections.get(section_id, ""))

    roster.set_date(c3.date_input("Date", value=dt.date.fromisoformat(roster.date), key="attendance__date"))

    with c4:
        st.write("")
        st.write("")
        if st.button("Show students", type="primary", use_container_width=True, key="attendance__load"):
            try:
                with st.spinner("Loading students..."):
                    students = fetch_roster(client, roster)
            except RosterError as e:
                failure(str(e))
            except ApiError as e:
                api_failed(e, "Failed to fetch students for this class/section")
            else:
                if not students:
                    st.info("No students found for this class/section.")

    if roster.state != STUDENTS_LOADED:
        return

    st.divider()
    _render_roster(roster)

    st.divider()
    if st.button("Submit attendance", type="primary", key="attendance__submit"):
        try:
            created_by = session.admin_id or (session.admin_name if session.is_authenticated else None)
            payload = submit_attendance(client, roster, created_by)
        except RosterError as e:
            failure(str(e))
        except ApiError as e:
            api_failed(e, "Failed to submit attendance")
        else:
            flash(server_message(payload) or "Attendance submitted successfully!")
            st.rerun()


if __name__ == "__main__":
    render()
