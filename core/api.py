# core/api.py
"""
Authenticated HTTP client for the school backend.

Every request goes through ``ApiClient._request`` which:
  * prefixes the configured base URL,
  * attaches ``Authorization: Bearer <token>`` when the session has one,
  * applies the configured timeout,
  * encodes JSON bodies, or multipart form data when files are attached,
  * turns transport failures, non-2xx statuses and ``success: false``
    envelopes into ``ApiError``.

A 401 clears the session (forced logout) before ``UnauthorizedError`` is raised.
"""
from __future__ import annotations

import logging
from typing import Any, Callable, Dict, Iterable, List, Mapping, Optional, Tuple

import requests

log = logging.getLogger(__name__)

GENERIC_ERROR = "Something went wrong. Please try again."
NETWORK_ERROR = "Network error. Please try again."
TIMEOUT_ERROR = "The server took too long to respond. Please try again."

# (field name, (file name, bytes, mime type))
FilePart = Tuple[str, Tuple[str, bytes, str]]


class ApiError(Exception):
    """Any failed backend call; ``message`` is safe to show to the user."""

    def __init__(self, message: str, status: Optional[int] = None, payload: Any = None):
        super().__init__(message)
        self.message = message
        self.status = status
        self.payload = payload


class UnauthorizedError(ApiError):
    pass


def server_message(payload: Any) -> Optional[str]:
    if isinstance(payload, Mapping):
        for key in ("message", "error"):
            val = payload.get(key)
            if isinstance(val, str) and val.strip():
                return val.strip()
    return None


def error_message(exc: BaseException, fallback: str = GENERIC_ERROR) -> str:
    """Server-provided message when there is one, else ``fallback``."""
    if isinstance(exc, ApiError) and exc.payload is not None:
        return server_message(exc.payload) or fallback
    if isinstance(exc, ApiError) and exc.status is None:
        return exc.message or fallback
    return fallback


def unwrap(payload: Any) -> Any:
    """``{"success": .., "data": X}`` -> X; bare payloads pass through."""
    if isinstance(payload, Mapping) and "data" in payload:
        return payload["data"]
    return payload


def unwrap_list(payload: Any) -> List[Dict[str, Any]]:
    data = unwrap(payload)
    if data is None:
        return []
    if isinstance(data, list):
        return [r for r in data if isinstance(r, Mapping)]
    raise ApiError("Unexpected response from server", payload=payload)


class ApiClient:
    def __init__(
        self,
        base_url: str,
        timeout: float = 15,
        token_provider: Optional[Callable[[], Optional[str]]] = None,
        on_unauthorized: Optional[Callable[[], None]] = None,
        session: Optional[requests.Session] = None,
    ):
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self.token_provider = token_provider or (lambda: None)
        self.on_unauthorized = on_unauthorized
        self.http = session or requests.Session()

    def url(self, path: str) -> str:
        if path.startswith("http://") or path.startswith("https://"):
            return path
        return f"{self.base_url}/{path.lstrip('/')}"

    def _headers(self) -> Dict[str, str]:
        headers = {"Accept": "application/json"}
        token = self.token_provider()
        if token:
            headers["Authorization"] = f"Bearer {token}"
        return headers

    def _request(
        self,
        method: str,
        path: str,
        *,
        params: Optional[Mapping[str, Any]] = None,
        json: Any = None,
        data: Optional[Mapping[str, Any]] = None,
        files: Optional[Iterable[FilePart]] = None,
    ) -> Any:
        kwargs: Dict[str, Any] = {"headers": self._headers(), "timeout": self.timeout}
        if params:
            kwargs["params"] = {k: v for k, v in params.items() if v is not None}
        files = list(files or [])
        if files:
            # requests sets the multipart boundary itself
            kwargs["data"] = _form_fields(data or json or {})
            kwargs["files"] = files
        elif data is not None:
            kwargs["data"] = _form_fields(data)
        elif json is not None:
            kwargs["json"] = json

        url = self.url(path)
        try:
            resp = self.http.request(method, url, **kwargs)
        except requests.Timeout as e:
            log.warning("%s %s timed out after %ss", method, path, self.timeout)
            raise ApiError(TIMEOUT_ERROR) from e
        except requests.RequestException as e:
            log.warning("%s %s failed: %s", method, path, e)
            raise ApiError(NETWORK_ERROR) from e

        payload = _decode(resp)
        log.debug("%s %s -> %s", method, path, resp.status_code)

        if resp.status_code == 401:
            log.warning("%s %s rejected as unauthorized; ending session", method, path)
            if self.on_unauthorized:
                self.on_unauthorized()
            raise UnauthorizedError(
                server_message(payload) or "Your session has expired. Please log in again.",
                status=401,
                payload=payload,
            )
        if resp.status_code >= 400:
            log.warning("%s %s -> %s %s", method, path, resp.status_code, server_message(payload) or "")
            raise ApiError(server_message(payload) or GENERIC_ERROR, status=resp.status_code, payload=payload)
        if isinstance(payload, Mapping) and payload.get("success") is False:
            raise ApiError(server_message(payload) or GENERIC_ERROR, status=resp.status_code, payload=payload)
        return payload

    def get(self, path: str, params: Optional[Mapping[str, Any]] = None) -> Any:
        return self._request("GET", path, params=params)

    def post(self, path: str, json: Any = None, files: Optional[Iterable[FilePart]] = None) -> Any:
        return self._request("POST", path, json=json, files=files)

    def put(self, path: str, json: Any = None, files: Optional[Iterable[FilePart]] = None) -> Any:
        return self._request("PUT", path, json=json, files=files)

    def delete(self, path: str, json: Any = None) -> Any:
        return self._request("DELETE", path, json=json)

    def send(self, method: str, path: str, json: Any = None, files: Optional[Iterable[FilePart]] = None) -> Any:
        return self._request(method.upper(), path, json=json, files=files)


def _form_fields(values: Mapping[str, Any]) -> List[Tuple[str, str]]:
    """Flatten a dict into multipart text fields; lists repeat the key."""
    out: List[Tuple[str, str]] = []
    for key, val in values.items():
        if val is None:
            continue
        if isinstance(val, (list, tuple)):
            out.extend((key, _as_text(v)) for v in val)
        else:
            out.append((key, _as_text(val)))
    return out


def _as_text(val: Any) -> str:
    if isinstance(val, bool):
        return "true" if val else "false"
    return str(val)


def _decode(resp: requests.Response) -> Any:
    if not resp.content:
        return None
    try:
        return resp.json()
    except ValueError:
        return {"message": resp.text[:200]} if resp.status_code >= 400 else None


def get_client(settings=None, session=None) -> ApiClient:
    """Client bound to the configured backend and the current admin session."""
    from core.settings import load_settings
    from core.session import current_session

    settings = settings or load_settings()
    session = session or current_session(settings)
    return ApiClient(
        base_url=settings.api.base_url,
        timeout=settings.api.timeout_seconds,
        token_provider=lambda: session.token,
        on_unauthorized=session.logout,
    )
