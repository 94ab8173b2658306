from core.policy import guard_target, public_target
from core.session import AdminSession


def test_login_and_accessors(store):
    s = AdminSession(store)
    assert not s.is_authenticated
    s.login({"_id": "adm1", "name": "Head Admin"}, "tok")
    assert store["genius_admin"]["name"] == "Head Admin"
    assert store["token"] == "tok"
    assert s.admin_id == "adm1"
    assert s.creator_metadata() == {"createdBy": "Head Admin", "teacher_id": "adm1"}


def test_admin_name_falls_back(store):
    s = AdminSession(store)
    s.login({"email": "boss@school.test"}, None)
    assert s.admin_name == "boss@school.test"
    assert s.token is None


def test_logout_clears_everything(session):
    session.set_detail_id("view-student", "s1")
    session.logout()
    assert session.store == {}
    assert not session.is_authenticated


def test_route_change_drops_screen_keys(session):
    session.enter_route("students", "Students")
    session.store["students__state"] = object()
    session.store["shell__flash"] = [("success", "hi")]
    session.set_detail_id("view-student", "s1")
    session.toggle_sidebar()
    assert not session.sidebar_open

    assert session.enter_route("view-student", "Students") is True
    assert "students__state" not in session.store
    assert session.store["shell__flash"] == [("success", "hi")]
    assert session.detail_id("view-student") == "s1"
    assert session.sidebar_open
    assert session.expanded_section == "Students"


def test_same_route_keeps_state(session):
    session.enter_route("classes", "Class & Section")
    session.store["classes__state"] = "kept"
    assert session.enter_route("classes", "Class & Section") is False
    assert session.store["classes__state"] == "kept"


def test_custom_storage_keys(store):
    s = AdminSession(store, admin_key="admin", token_key="jwt")
    s.login({"name": "A"}, "t")
    assert set(store) == {"admin", "jwt"}


def test_guard_targets(store, session):
    assert guard_target(session) is None
    assert public_target(session) == "dashboard"
    anonymous = AdminSession({})
    assert guard_target(anonymous) == "login"
    assert public_target(anonymous) is None
