# screens/students/viewer.py
"""
Student profile
- Profile fields and photo
- Attendance summary (present / absent / late, present %) over a date range
- Attendance records inside the range
"""
from __future__ import annotations

import calendar
import datetime as dt
import math
from typing import Any, Dict, Iterable, List, Mapping, Optional

import streamlit as st

from core.api import ApiError, get_client, unwrap
from core.images import image_url
from core.navigation import navigate_to
from core.policy import require_admin
from core.session import current_session
from core.settings import load_settings
from core.ui import api_failed, record_table
from schemas.students_schema import STUDENT_DETAIL_PATH


ROUTE_KEY = "view-student"

PROFILE_FIELDS = [
    ("id", "Student ID"),
    ("studentClass", "Class"),
    ("section", "Section"),
    ("classRoll", "Roll"),
    ("group", "Group"),
    ("gender", "Gender"),
    ("birthdate", "Birth Date"),
    ("religion", "Religion"),
    ("fatherName", "Father's Name"),
    ("motherName", "Mother's Name"),
    ("mobile", "Mobile"),
    ("email", "Email"),
    ("address", "Address"),
]


def month_bounds(today: Optional[dt.date] = None) -> tuple[dt.date, dt.date]:
    today = today or dt.date.today()
    last = calendar.monthrange(today.year, today.month)[1]
    return today.replace(day=1), today.replace(day=last)


def _record_date(record: Mapping[str, Any]) -> Optional[dt.date]:
    raw = record.get("date")
    if not raw:
        return None
    try:
        return dt.date.fromisoformat(str(raw)[:10])
    except ValueError:
        return None


def records_in_range(records: Iterable[Mapping[str, Any]], start: dt.date, end: dt.date) -> List[Dict[str, Any]]:
    """Records dated within [start, end], both days inclusive, oldest first."""
    out = []
    for r in records:
        d = _record_date(r)
        if d is not None and start <= d <= end:
            out.append({**r, "date": d.isoformat()})
    return sorted(out, key=lambda r: r["date"])


def attendance_summary(records: Iterable[Mapping[str, Any]], start: dt.date, end: dt.date) -> Dict[str, int]:
    rows = records_in_range(records, start, end)
    total = len(rows)
    present = sum(1 for r in rows if r.get("status") == "present")
    absent = sum(1 for r in rows if r.get("status") == "absent")
    late = sum(1 for r in rows if r.get("status") == "late")
    # half-up, so 2/3 -> 67 and 1/8 -> 13
    percent = math.floor(present * 100 / total + 0.5) if total else 0
    return {"total": total, "present": present, "absent": absent, "late": late, "present_percent": percent}


def _load_student(student_id: str) -> Optional[Dict[str, Any]]:
    try:
        data = unwrap(get_client().get(STUDENT_DETAIL_PATH.format(id=student_id)))
    except ApiError as e:
        api_failed(e, "Failed to load student")
        return None
    return data if isinstance(data, dict) else None


@require_admin
def render():
    settings = load_settings()
    session = current_session(settings)
    student_id = session.detail_id(ROUTE_KEY)

    if st.button("← Back to students"):
        navigate_to("students")
    if not student_id:
        st.warning("No student selected.")
        return

    student = _load_student(student_id)
    if student is None:
        st.info("Student not found.")
        return

    st.title(f"🎓 {student.get('name') or 'Student'}")
    pic, info = st.columns([0.25, 0.75])
    with pic:
        st.image(image_url(settings.api.base_url, student.get("profilePic"), settings.api.image_path,
                           settings.auth.placeholder_avatar), width=160)
    with info:
        left, right = st.columns(2)
        for i, (field, label) in enumerate(PROFILE_FIELDS):
            target = left if i % 2 == 0 else right
            target.markdown(f"**{label}:** {student.get(field) or '—'}")

    st.divider()
    st.subheader("Attendance")
    first, last = month_bounds()
    c1, c2 = st.columns(2)
    start = c1.date_input("From", value=first, key="view_student__from")
    end = c2.date_input("To", value=last, key="view_student__to")
    if start > end:
        st.error("Start date must be before end date.")
        return

    records = student.get("attendance") or []
    summary = attendance_summary(records, start, end)
    m1, m2, m3, m4 = st.columns(4)
    m1.metric("Present", f"{summary['present']} days")
    m2.metric("Absent", f"{summary['absent']} days")
    m3.metric("Late", f"{summary['late']} days")
    m4.metric("Attendance", f"{summary['present_percent']}%")

    rows = records_in_range(records, start, end)
    if not rows:
        st.info("No attendance records found for the selected date range")
        return
    record_table(rows, ["date", "status", "remarks"], ["Date", "Status", "Remarks"])


if __name__ == "__main__":
    render()
