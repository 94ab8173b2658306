# screens/attendance/roster.py
"""
Attendance roster
- Pick class (required), section and date
- Load the roster: every student starts as present
- Per-student tri-state status plus remarks, "mark all" over the visible rows
- Submit the whole roster keyed by student ``_id``

No Streamlit here; ``page.py`` drives a ``Roster`` kept in session state.
"""
from __future__ import annotations

import datetime as dt
import logging
from dataclasses import dataclass, field
from typing import Any, Dict, List, Mapping, Optional

from core.api import ApiClient, unwrap_list

log = logging.getLogger(__name__)

ROSTER_PATH = "/api/admin/search-students"
SUBMIT_PATH = "/api/admin/attendance"

NO_CLASS = "no_class"
CLASS_SELECTED = "class_selected"
STUDENTS_LOADED = "students_loaded"

STATUSES = ("present", "absent", "late")

SELECT_CLASS_FIRST = "Please select a class first"
LOGIN_AGAIN = "User information not found. Please login again."
MARK_ALL_STUDENTS = "Please mark attendance for all students"


class RosterError(Exception):
    """A roster action the current state does not allow; the message is shown as is."""


def mark(status: str, remarks: str = "") -> Dict[str, Any]:
    if status not in STATUSES:
        raise ValueError(f"Unknown attendance status: {status}")
    return {"present": status == "present", "absent": status == "absent",
            "late": status == "late", "remarks": remarks}


def status_of(entry: Optional[Mapping[str, Any]]) -> Optional[str]:
    for s in STATUSES:
        if entry and entry.get(s):
            return s
    return None


@dataclass
class Roster:
    class_id: Optional[str] = None
    class_name: str = ""
    section_id: Optional[str] = None
    section_name: str = ""
    date: str = field(default_factory=lambda: dt.date.today().isoformat())
    students: List[Dict[str, Any]] = field(default_factory=list)
    attendance: Dict[str, Dict[str, Any]] = field(default_factory=dict)
    search: str = ""

    @property
    def state(self) -> str:
        if not self.class_id:
            return NO_CLASS
        return STUDENTS_LOADED if self.students else CLASS_SELECTED

    # ── selection ───────────────────────────────────────────────────────────
    def _clear(self) -> None:
        self.students = []
        self.attendance = {}

    def select_class(self, class_id: Optional[str], class_name: str = "") -> None:
        """Changing class also drops the section and the loaded roster."""
        if class_id == self.class_id:
            return
        self.class_id = class_id or None
        self.class_name = class_name if class_id else ""
        self.section_id = None
        self.section_name = ""
        self._clear()

    def select_section(self, section_id: Optional[str], section_name: str = "") -> None:
        if section_id == self.section_id:
            return
        self.section_id = section_id or None
        self.section_name = section_name if section_id else ""
        self._clear()

    def set_date(self, value: Any) -> None:
        self.date = value.isoformat() if isinstance(value, dt.date) else str(value)

    # ── roster ──────────────────────────────────────────────────────────────
    def roster_params(self) -> Dict[str, Any]:
        if not self.class_id:
            raise RosterError(SELECT_CLASS_FIRST)
        # the search endpoint filters sections by name
        return {"classId": self.class_id, "sectionId": self.section_name or None}

    def load(self, students: List[Dict[str, Any]]) -> None:
        self.students = list(students)
        self.attendance = {s["_id"]: mark("present") for s in self.students}
        self.search = ""

    def set_status(self, student_id: str, status: str) -> None:
        remarks = self.attendance.get(student_id, {}).get("remarks", "")
        self.attendance[student_id] = mark(status, remarks)

    def set_remarks(self, student_id: str, remarks: str) -> None:
        entry = self.attendance.get(student_id)
        if entry is None:
            entry = {"present": False, "absent": False, "late": False, "remarks": ""}
            self.attendance[student_id] = entry
        entry["remarks"] = remarks

    @property
    def visible(self) -> List[Dict[str, Any]]:
        term = self.search.strip().lower()
        if not term:
            return list(self.students)
        return [
            s for s in self.students
            if term in str(s.get("name") or "").lower() or term in str(s.get("id") or "").lower()
        ]

    def mark_all(self, status: str) -> None:
        for s in self.visible:
            self.set_status(s["_id"], status)

    def counts(self) -> Dict[str, int]:
        out = {s: 0 for s in STATUSES}
        for entry in self.attendance.values():
            s = status_of(entry)
            if s:
                out[s] += 1
        return out

    # ── submit ──────────────────────────────────────────────────────────────
    def payload(self, created_by: Optional[str]) -> Dict[str, Any]:
        if not self.class_id:
            raise RosterError(SELECT_CLASS_FIRST)
        if not created_by:
            raise RosterError(LOGIN_AGAIN)
        if any(status_of(self.attendance.get(s["_id"])) is None for s in self.students):
            raise RosterError(MARK_ALL_STUDENTS)
        return {
            "classId": self.class_id,
            "sectionId": self.section_id,
            "date": self.date,
            "attendance": {sid: dict(entry) for sid, entry in self.attendance.items()},
            "createdBy": created_by,
        }

    def submitted(self) -> None:
        """Back to CLASS_SELECTED with the same class, section and date."""
        self._clear()
        self.search = ""


def fetch_roster(client: ApiClient, roster: Roster) -> List[Dict[str, Any]]:
    students = unwrap_list(client.get(ROSTER_PATH, params=roster.roster_params()))
    log.info("Loaded %d students for class %s", len(students), roster.class_name or roster.class_id)
    roster.load(students)
    return students


def submit_attendance(client: ApiClient, roster: Roster, created_by: Optional[str]) -> Any:
    body = roster.payload(created_by)
    result = client.post(SUBMIT_PATH, json=body)
    log.info("Submitted attendance for %d students on %s", len(body["attendance"]), roster.date)
    roster.submitted()
    return result
