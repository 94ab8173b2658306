import pytest

from core.api import ApiError
from core.listing import ListState
from core.resources import ResourceService
from core.universal_delete import bulk_delete, delete_config, delete_rows
from schemas.classes_schema import CLASSES
from schemas.students_schema import STUDENTS

ROWS = [{"_id": f"s{i}", "name": f"Student {i}"} for i in range(1, 6)]


@pytest.fixture
def students(backend, memory_collection):
    coll = memory_collection(backend, STUDENTS.list_path, rows=ROWS)
    for r in ROWS:
        backend.on("DELETE", f"/api/admin/delete-student/{r['_id']}", handler=coll.delete_one(r["_id"]))
    backend.on("DELETE", STUDENTS.bulk.path, handler=coll.delete_many("studentIds"))
    return coll


def loaded_state(service):
    state = ListState(page_size=10, filters=STUDENTS.filters)
    state.load(service.fetch())
    return state


def test_single_delete_removes_row_now_and_after_refetch(client, students):
    service = ResourceService(client, STUDENTS)
    state = loaded_state(service)

    msg = delete_rows(service, state, [ROWS[1]])
    assert msg == "Deleted"
    assert "s2" not in {r["_id"] for r in state.records}
    assert "s2" not in {r["_id"] for r in state.filtered}

    state.load(service.fetch())
    assert [r["_id"] for r in state.records] == ["s1", "s3", "s4", "s5"]


def test_bulk_delete_removes_exactly_selected(client, backend, students):
    service = ResourceService(client, STUDENTS)
    state = loaded_state(service)
    state.toggle("s1")
    state.toggle("s4")

    bulk_delete(service, state, list(state.selected))
    assert backend.last("DELETE")["json"] == {"studentIds": ["s1", "s4"]}
    assert [r["_id"] for r in state.filtered] == ["s2", "s3", "s5"]
    assert state.selected == []

    state.load(service.fetch())
    assert [r["_id"] for r in state.records] == ["s2", "s3", "s5"]


def test_failed_delete_keeps_rows_already_removed(client, backend, students):
    service = ResourceService(client, STUDENTS)
    state = loaded_state(service)
    backend.on("DELETE", "/api/admin/delete-student/s3", status=500, payload={"message": "Cannot delete"})

    with pytest.raises(ApiError, match="Cannot delete"):
        delete_rows(service, state, [ROWS[0], ROWS[2]])
    ids = [r["_id"] for r in state.records]
    assert "s1" not in ids and "s3" in ids


def test_fallback_message_without_server_text(client, backend):
    backend.on("DELETE", "/api/admin/class/c1", payload=None)
    state = ListState(page_size=20)
    state.load([{"_id": "c1"}])
    assert delete_rows(ResourceService(client, CLASSES), state, [{"_id": "c1"}]) == "Class deleted successfully"


def test_delete_config_defaults():
    assert delete_config("students")["confirmation_required"] is True
    cfg = delete_config("banners")
    assert cfg["confirmation_required"] is False
    assert cfg["warning_message"] == "You won't be able to revert this!"
