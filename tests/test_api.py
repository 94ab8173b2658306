import pytest
import requests

from core.api import (
    GENERIC_ERROR, NETWORK_ERROR, TIMEOUT_ERROR, ApiError, UnauthorizedError,
    error_message, unwrap, unwrap_list,
)


def test_bearer_token_and_timeout_on_every_request(client, backend):
    backend.on("GET", "/auth/all-classes", payload={"success": True, "data": []})
    client.get("/auth/all-classes")
    call = backend.last()
    assert call["headers"]["Authorization"] == "Bearer tok-123"
    assert call["timeout"] == 7


def test_no_authorization_header_without_token(client, backend, session):
    session.store.pop(session.token_key)
    backend.on("GET", "/auth/sections", payload=[])
    client.get("/auth/sections")
    assert "Authorization" not in backend.last()["headers"]


def test_json_body_without_files(client, backend):
    backend.on("POST", "/api/admin/new-class", payload={"success": True})
    client.post("/api/admin/new-class", json={"className": "6", "classTeacher": "Ms. Rahman"})
    call = backend.last()
    assert call["json"] == {"className": "6", "classTeacher": "Ms. Rahman"}
    assert "files" not in call


def test_multipart_when_files_attached(client, backend):
    backend.on("POST", "/api/admin/notices", payload={"success": True})
    files = [("image", ("n.png", b"\x89PNG", "image/png"))]
    client.post("/api/admin/notices", json={"title": "Eid", "student_ids": ["s1", "s2"], "urgent": True},
                files=files)
    call = backend.last()
    assert "json" not in call
    assert call["files"] == files
    assert ("student_ids", "s1") in call["data"] and ("student_ids", "s2") in call["data"]
    assert ("urgent", "true") in call["data"]


def test_server_message_is_surfaced(client, backend):
    backend.on("POST", "/api/admin/sections", status=409, payload={"message": "Section already exists"})
    with pytest.raises(ApiError) as exc:
        client.post("/api/admin/sections", json={})
    assert exc.value.status == 409
    assert error_message(exc.value, "Failed") == "Section already exists"


def test_generic_message_without_server_text(client, backend):
    backend.on("GET", "/auth/routines", status=500, payload=None)
    with pytest.raises(ApiError) as exc:
        client.get("/auth/routines")
    assert exc.value.message == GENERIC_ERROR
    assert error_message(exc.value, "Failed to load routines") == "Failed to load routines"


def test_success_false_envelope_is_an_error(client, backend):
    backend.on("GET", "/api/admin/students", payload={"success": False, "message": "Nope"})
    with pytest.raises(ApiError, match="Nope"):
        client.get("/api/admin/students")


def test_unauthorized_clears_session(client, backend, session):
    backend.on("GET", "/api/admin/students", status=401, payload={"message": "jwt expired"})
    with pytest.raises(UnauthorizedError):
        client.get("/api/admin/students")
    assert not session.is_authenticated
    assert session.token is None


@pytest.mark.parametrize("exc, message", [
    (requests.Timeout(), TIMEOUT_ERROR),
    (requests.ConnectionError(), NETWORK_ERROR),
])
def test_transport_failures(client, backend, exc, message):
    backend.raise_error = exc
    with pytest.raises(ApiError) as err:
        client.get("/auth/sections")
    assert err.value.status is None
    assert error_message(err.value) == message


def test_unwrap_helpers():
    assert unwrap({"success": True, "data": [1]}) == [1]
    assert unwrap([{"a": 1}]) == [{"a": 1}]
    assert unwrap_list({"data": None}) == []
    assert unwrap_list([{"a": 1}, "junk"]) == [{"a": 1}]
    with pytest.raises(ApiError):
        unwrap_list({"data": {"not": "a list"}})
