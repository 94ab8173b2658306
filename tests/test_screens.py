"""Pure helpers behind the Streamlit screens."""
import pytest

from core.api import ApiError
from core.form_schema import FormInvalid
from core.resources import ResourceService
from core.session import AdminSession
from schemas.notices_schema import NOTICES
from screens.classes.students import class_students_spec
from screens.dashboard import load_dashboard, recent_activities, stat_cards
from screens.login import LOGIN_FORM, authenticate, sign_in
from screens.notices.send import NO_RECIPIENTS, recipients, search_students, send_notice
from screens.teachers.viewer import field_value


# ── login ───────────────────────────────────────────────────────────────────

@pytest.mark.parametrize("email, password, errors", [
    ("", "", {"email": "Email is required", "password": "Password is required"}),
    ("admin@school", "secret1", {"email": "Please enter a valid email"}),
    ("admin@school.test", "12345", {"password": "Password must be at least 6 characters"}),
    ("admin@school.test", "123456", {}),
])
def test_login_validation(email, password, errors):
    assert LOGIN_FORM.validate({"email": email, "password": password}) == errors


def test_login_stores_admin_and_token(client, backend):
    backend.on("POST", "/auth/admin-login", payload={
        "success": True, "token": "jwt-1", "admin": {"_id": "adm9", "name": "Principal"},
    })
    fresh = AdminSession({})
    admin = sign_in(fresh, client, "principal@school.test", "secret1")
    assert admin["name"] == "Principal"
    assert fresh.token == "jwt-1"
    assert backend.last("POST")["json"] == {"email": "principal@school.test", "password": "secret1"}


def test_login_rejected_by_server(client, backend):
    backend.on("POST", "/auth/admin-login", status=401, payload={"success": False, "message": "Invalid credentials"})
    with pytest.raises(ApiError, match="Invalid credentials"):
        authenticate(client, "a@b.co", "secret1")


def test_invalid_login_sends_nothing(client, backend):
    with pytest.raises(FormInvalid):
        authenticate(client, "", "")
    assert backend.calls == []


# ── notices ─────────────────────────────────────────────────────────────────

STUDENTS = [{"_id": "a1", "id": "S-1", "name": "Ayesha"}, {"_id": "a2", "id": "S-2", "name": "Rafi"}]


def test_recipients():
    assert recipients(STUDENTS, [], True) == ["a1", "a2"]
    assert recipients(STUDENTS, ["a2"], False) == ["a2"]
    assert [s["_id"] for s in search_students(STUDENTS, "s-2")] == ["a2"]


def test_notice_without_image_is_json(client, backend):
    backend.on("POST", "/api/admin/notices", payload={"success": True})
    send_notice(ResourceService(client, NOTICES), {"title": "Eid", "content": "Closed", "image": None}, ["a1"])
    call = backend.last("POST")
    assert call["json"] == {"title": "Eid", "content": "Closed", "student_ids": ["a1"]}


def test_notice_with_image_repeats_student_ids(client, backend):
    backend.on("POST", "/api/admin/notices", payload={"success": True})
    image = ("eid.png", b"png", "image/png")
    send_notice(ResourceService(client, NOTICES), {"title": "Eid", "content": "Closed", "image": image},
                ["a1", "a2"])
    call = backend.last("POST")
    assert [v for k, v in call["data"] if k == "student_ids"] == ["a1", "a2"]
    assert call["files"] == [("image", image)]


def test_notice_needs_recipients(client, backend):
    with pytest.raises(FormInvalid) as exc:
        send_notice(ResourceService(client, NOTICES), {"title": "", "content": "x"}, [])
    assert exc.value.errors == {"title": "Title is required", "student_ids": NO_RECIPIENTS}
    assert backend.calls == []


# ── dashboard ───────────────────────────────────────────────────────────────

def test_stat_cards_show_server_values():
    cards = stat_cards({"totalStudents": 1250, "studentGrowthPercent": 4.5, "totalTeachers": 48,
                        "teacherGrowthPercent": -2, "attendanceRate": 91, "examsToday": 0})
    assert [(c["label"], c["value"], c["delta"]) for c in cards] == [
        ("Total Students", "1,250", "+4.5%"),
        ("Total Teachers", "48", "-2%"),
        ("Attendance Rate", "91%", None),
        ("Exams Today", "0", None),
    ]


def test_recent_activities_top_five(client, backend):
    backend.on("GET", "/api/admin/dashboard/stats", payload={"success": True, "data": {"totalStudents": 3}})
    backend.on("GET", "/api/admin/recent-activities", payload={
        "success": True, "activities": [{"message": f"event {i}", "time": "now"} for i in range(8)],
    })
    data = load_dashboard(client)
    assert data["stats"] == {"totalStudents": 3}
    assert [a["message"] for a in data["activities"]] == [f"event {i}" for i in range(5)]
    assert recent_activities(None) == []


# ── detail screens ──────────────────────────────────────────────────────────

def test_class_students_spec():
    spec = class_students_spec("6")
    assert spec.list_path == "/api/admin/class-student/6"
    assert spec.bulk is None
    assert spec.delete_path == "/api/admin/delete-student/{id}"
    assert len(spec.filters) == 1 and "classRoll" in spec.filters[0].fields


def test_teacher_field_value():
    teacher = {"subject": "Math", "createdAt": "2024-01-09T10:00:00Z", "nidNumber": ""}
    assert field_value(teacher, "subject") == "Math"
    assert field_value(teacher, "createdAt") == "2024-01-09"
    assert field_value(teacher, "nidNumber") == "N/A"
