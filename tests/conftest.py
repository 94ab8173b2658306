# tests/conftest.py
from __future__ import annotations

import json as jsonlib
from typing import Any, Callable, Dict, List, Optional, Tuple

import pytest

from core.api import ApiClient
from core.session import AdminSession

BASE_URL = "http://school.test"


class FakeResponse:
    def __init__(self, status_code: int = 200, payload: Any = None, text: Optional[str] = None):
        self.status_code = status_code
        self._payload = payload
        if text is not None:
            self.text = text
        else:
            self.text = "" if payload is None else jsonlib.dumps(payload)
        self.content = self.text.encode("utf-8")

    def json(self):
        if self._payload is None:
            raise ValueError("no json body")
        return self._payload


class FakeBackend:
    """Stands in for ``requests.Session``; routes by (METHOD, path)."""

    def __init__(self):
        self.routes: Dict[Tuple[str, str], Callable[[Dict[str, Any]], FakeResponse]] = {}
        self.calls: List[Dict[str, Any]] = []
        self.raise_error: Optional[Exception] = None

    def on(self, method: str, path: str, status: int = 200, payload: Any = None, handler=None):
        if handler is None:
            handler = lambda call: FakeResponse(status, payload)  # noqa: E731
        self.routes[(method.upper(), path)] = handler

    def request(self, method, url, **kwargs):
        path = url[len(BASE_URL):] if url.startswith(BASE_URL) else url
        call = {"method": method, "path": path, **kwargs}
        self.calls.append(call)
        if self.raise_error is not None:
            raise self.raise_error
        handler = self.routes.get((method, path))
        if handler is None:
            return FakeResponse(404, {"success": False, "message": f"No route {method} {path}"})
        return handler(call)

    def last(self, method: Optional[str] = None) -> Dict[str, Any]:
        calls = [c for c in self.calls if method is None or c["method"] == method]
        return calls[-1]


@pytest.fixture
def store() -> Dict[str, Any]:
    return {}


@pytest.fixture
def session(store) -> AdminSession:
    s = AdminSession(store)
    s.login({"_id": "adm1", "name": "Head Admin", "email": "admin@school.test"}, "tok-123")
    return s


@pytest.fixture
def backend() -> FakeBackend:
    return FakeBackend()


@pytest.fixture
def client(backend, session) -> ApiClient:
    return ApiClient(
        BASE_URL,
        timeout=7,
        token_provider=lambda: session.token,
        on_unauthorized=session.logout,
        session=backend,
    )


class MemoryCollection:
    """Tiny in-memory resource: list, create, delete, bulk delete."""

    def __init__(self, backend: FakeBackend, list_path: str, rows=None, envelope: bool = True):
        self.rows: List[Dict[str, Any]] = [dict(r) for r in rows or []]
        self.envelope = envelope
        self._next = len(self.rows) + 1
        backend.on("GET", list_path, handler=self._list)

    def _list(self, call):
        data = [dict(r) for r in self.rows]
        return FakeResponse(200, {"success": True, "data": data} if self.envelope else data)

    def create(self, call):
        body = dict(call.get("json") or {})
        body["_id"] = f"id{self._next}"
        self._next += 1
        self.rows.append(body)
        return FakeResponse(201, {"success": True, "message": "Created", "data": body})

    def delete_one(self, rid: str):
        def _handler(call):
            self.rows = [r for r in self.rows if r["_id"] != rid]
            return FakeResponse(200, {"success": True, "message": "Deleted"})
        return _handler

    def delete_many(self, key: str):
        def _handler(call):
            ids = set((call.get("json") or {}).get(key) or [])
            self.rows = [r for r in self.rows if r["_id"] not in ids]
            return FakeResponse(200, {"success": True, "message": f"{len(ids)} deleted"})
        return _handler


@pytest.fixture
def memory_collection():
    return MemoryCollection
