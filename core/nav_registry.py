# core/nav_registry.py
from __future__ import annotations
from dataclasses import dataclass
from typing import Optional, List, Dict


@dataclass(frozen=True)
class Route:
    key: str                  # stable id, also the page url_path
    label: str                # UI label
    icon: str                 # emoji or short string
    script: str               # page file, relative to app.py
    public: bool = False      # reachable without a session (login only)
    hidden: bool = False      # not listed in the sidebar (detail pages)


@dataclass
class Section:
    title: str
    icon: str
    routes: List[Route]

    @property
    def single(self) -> bool:
        return len(self.routes) == 1


SECTIONS: List[Section] = [
    Section("Dashboard", "🏠", [
        Route("dashboard",      "Dashboard",       "🏠", "screens/dashboard.py"),
    ]),
    Section("Class & Section", "🏫", [
        Route("new-class",      "New Class",       "➕", "screens/classes/new.py"),
        Route("classes",        "Class List",      "🏫", "screens/classes/page.py"),
        Route("new-section",    "New Section",     "➕", "screens/sections/new.py"),
        Route("sections",       "Section List",    "🔤", "screens/sections/page.py"),
        Route("new-exam-name",  "New Exam Name",   "➕", "screens/exam_names/new.py"),
        Route("exam-names",     "Exam Name List",  "🏷️", "screens/exam_names/page.py"),
    ]),
    Section("Teachers", "👨‍🏫", [
        Route("new-teacher",    "New Teacher",     "➕", "screens/teachers/new.py"),
        Route("teachers",       "All Teachers",    "👨‍🏫", "screens/teachers/page.py"),
    ]),
    Section("Students", "🎓", [
        Route("new-student",    "New Student",     "➕", "screens/students/new.py"),
        Route("students",       "All Students",    "🎓", "screens/students/page.py"),
    ]),
    Section("Routine", "🗓️", [
        Route("new-routine",    "New Routine",     "➕", "screens/routines/new.py"),
        Route("routines",       "Class Routine",   "🗓️", "screens/routines/page.py"),
        Route("new-exam",       "New Exam",        "➕", "screens/exam_routines/new.py"),
        Route("exams",          "Exam Routine",    "📝", "screens/exam_routines/page.py"),
    ]),
    Section("Lesson", "📓", [
        Route("new-lesson",     "New Lesson",      "➕", "screens/lessons/new.py"),
        Route("lessons",        "Lesson Diary",    "📓", "screens/lessons/page.py"),
    ]),
    Section("Attendance", "✅", [
        Route("attendance",     "Attendance",      "✅", "screens/attendance/page.py"),
    ]),
    Section("Banners", "🖼️", [
        Route("post-banner",    "Post Banner",     "➕", "screens/banners/post.py"),
        Route("banners",        "All Banners",     "🖼️", "screens/banners/page.py"),
    ]),
    Section("Notices", "📢", [
        Route("send-notice",    "Send Notice",     "✉️", "screens/notices/send.py"),
        Route("notices",        "All Notices",     "📢", "screens/notices/page.py"),
    ]),
]

# Routes outside the sidebar
HIDDEN_ROUTES: List[Route] = [
    Route("login",          "Login",           "🔐", "screens/login.py", public=True, hidden=True),
    Route("view-student",   "Student Profile", "🎓", "screens/students/viewer.py", hidden=True),
    Route("view-teacher",   "Teacher Profile", "👨‍🏫", "screens/teachers/viewer.py", hidden=True),
    Route("class-students", "Class Students",  "🏫", "screens/classes/students.py", hidden=True),
]

# Index for quick lookup (used by router)
ROUTE_INDEX: Dict[str, Route] = {r.key: r for s in SECTIONS for r in s.routes}
ROUTE_INDEX.update({r.key: r for r in HIDDEN_ROUTES})
DEFAULT_ROUTE_KEY = "dashboard"  # after login, where to land
LOGIN_ROUTE_KEY = "login"

# Detail routes open under their list's section
_DETAIL_PARENTS = {"view-student": "students", "view-teacher": "teachers", "class-students": "classes"}


def section_of(route_key: str) -> Optional[str]:
    """Title of the sidebar section that should be expanded for ``route_key``."""
    route_key = _DETAIL_PARENTS.get(route_key, route_key)
    for s in SECTIONS:
        if any(r.key == route_key for r in s.routes):
            return s.title
    return None
