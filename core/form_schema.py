# core/form_schema.py
"""
Field schemas that drive both form rendering and validation.

A ``FormSchema`` is a tuple of ``FieldSpec`` plus optional cross-field
checks. Validation only runs on submit and returns an error map keyed by
field name; an empty map means the request may be sent.

``EntryListForm`` wraps a schema for forms that collect several entries at
once (routines, exam routines, lesson diaries). Its errors are keyed
``<field>_<index>``.
"""
from __future__ import annotations

import re
from dataclasses import dataclass, replace
from typing import Any, Callable, Dict, Iterable, List, Mapping, Optional, Tuple

from core.api import FilePart

TEXT = "text"
TEXTAREA = "textarea"
EMAIL = "email"
PASSWORD = "password"
SELECT = "select"
MULTISELECT = "multiselect"
DATE = "date"
TIME = "time"
CHECKBOX = "checkbox"
FILE = "file"

IMAGE_TYPES = ("png", "jpg", "jpeg", "webp", "gif")

MOBILE_RE = r"\d{11}"
EMAIL_RE = r"[^\s@]+@[^\s@]+\.[^\s@]+"
NID_RE = r"[0-9]{10,17}"

Check = Callable[[Mapping[str, Any]], Dict[str, str]]


@dataclass(frozen=True)
class FieldSpec:
    name: str
    label: str
    kind: str = TEXT
    required: bool = False
    pattern: Optional[str] = None       # full-match regex
    message: Optional[str] = None       # shown for missing/invalid values
    min_length: Optional[int] = None
    must_match: Optional[str] = None    # name of the field this one must equal
    accept: Tuple[str, ...] = ()        # file extensions
    options: Tuple[str, ...] = ()
    options_key: Optional[str] = None   # options supplied at render time
    default: Any = ""
    send: bool = True                   # False for confirm-only fields
    placeholder: str = ""
    help: Optional[str] = None

    @property
    def is_file(self) -> bool:
        return self.kind == FILE

    def blank(self) -> Any:
        if self.kind == FILE:
            return None
        if self.kind == MULTISELECT:
            return list(self.default or [])
        if self.kind == CHECKBOX:
            return bool(self.default)
        return self.default


def is_empty(value: Any) -> bool:
    if value is None:
        return True
    if isinstance(value, str):
        return value.strip() == ""
    if isinstance(value, (list, tuple, set, dict)):
        return len(value) == 0
    return False


def check_field(spec: FieldSpec, value: Any, values: Mapping[str, Any]) -> Optional[str]:
    if is_empty(value):
        if spec.required:
            return spec.message or f"{spec.label} is required"
        if spec.must_match and not is_empty(values.get(spec.must_match)):
            return spec.message or f"{spec.label} does not match"
        return None
    text = "" if value is None else str(value)
    if spec.pattern and not re.fullmatch(spec.pattern, text):
        return spec.message or f"{spec.label} is invalid"
    if spec.min_length is not None and len(text) < spec.min_length:
        return spec.message or f"{spec.label} must be at least {spec.min_length} characters"
    if spec.must_match is not None and text != str(values.get(spec.must_match) or ""):
        return spec.message or f"{spec.label} does not match"
    return None


def time_range(start: str = "timeStart", end: str = "timeEnd", key: str = "timeRange") -> Check:
    def _check(values: Mapping[str, Any]) -> Dict[str, str]:
        a, b = values.get(start), values.get(end)
        if a and b and str(a) >= str(b):
            return {key: "End time must be after start time"}
        return {}
    return _check


def file_part(field_name: str, value: Any) -> Optional[FilePart]:
    """Upload widget value (or a ``(name, bytes, mime)`` tuple) -> multipart part."""
    if value is None:
        return None
    if isinstance(value, tuple):
        name, raw, mime = value
        return field_name, (name, raw, mime)
    raw = value.getvalue() if hasattr(value, "getvalue") else value.read()
    mime = getattr(value, "type", None) or "application/octet-stream"
    return field_name, (getattr(value, "name", field_name), raw, mime)


@dataclass(frozen=True)
class FormSchema:
    fields: Tuple[FieldSpec, ...]
    checks: Tuple[Check, ...] = ()

    def __iter__(self):
        return iter(self.fields)

    def get(self, name: str) -> FieldSpec:
        for f in self.fields:
            if f.name == name:
                return f
        raise KeyError(name)

    @property
    def names(self) -> List[str]:
        return [f.name for f in self.fields]

    def blank(self) -> Dict[str, Any]:
        return {f.name: f.blank() for f in self.fields}

    def from_record(self, record: Mapping[str, Any]) -> Dict[str, Any]:
        """Pre-fill an edit form; file inputs always start empty."""
        values = self.blank()
        for f in self.fields:
            if f.is_file or not f.send:
                continue
            val = record.get(f.name)
            if val is not None:
                values[f.name] = val
        return values

    def only(self, *names: str, optional_files: bool = True) -> "FormSchema":
        """Narrower schema for edit modals."""
        picked = []
        for name in names:
            spec = self.get(name)
            if optional_files and spec.is_file:
                spec = replace(spec, required=False)
            picked.append(spec)
        return FormSchema(tuple(picked), self.checks)

    def validate(self, values: Mapping[str, Any]) -> Dict[str, str]:
        errors: Dict[str, str] = {}
        for f in self.fields:
            msg = check_field(f, values.get(f.name), values)
            if msg:
                errors[f.name] = msg
        for check in self.checks:
            errors.update(check(values))
        return errors

    def payload(self, values: Mapping[str, Any]) -> Tuple[Dict[str, Any], List[FilePart]]:
        """Split values into sendable fields and multipart file parts."""
        body: Dict[str, Any] = {}
        files: List[FilePart] = []
        for f in self.fields:
            if not f.send:
                continue
            val = values.get(f.name)
            if f.is_file:
                part = file_part(f.name, val)
                if part:
                    files.append(part)
            elif val is not None:
                body[f.name] = val
        return body, files


class EntryListForm:
    """Several entries of one schema submitted together."""

    def __init__(self, schema: FormSchema, metadata: Optional[Mapping[str, Any]] = None):
        self.schema = schema
        self.metadata = dict(metadata or {})
        self.entries: List[Dict[str, Any]] = [self._blank()]
        self.errors: Dict[str, str] = {}

    def _blank(self) -> Dict[str, Any]:
        entry = self.schema.blank()
        entry.update(self.metadata)
        return entry

    def __len__(self) -> int:
        return len(self.entries)

    def add_entry(self) -> None:
        self.entries.append(self._blank())

    def remove_entry(self, index: int) -> bool:
        if len(self.entries) <= 1 or not 0 <= index < len(self.entries):
            return False
        self.entries.pop(index)
        shifted: Dict[str, str] = {}
        for key, msg in self.errors.items():
            name, idx = split_error_key(key)
            if idx is None:
                shifted[key] = msg
            elif idx < index:
                shifted[key] = msg
            elif idx > index:
                shifted[f"{name}_{idx - 1}"] = msg
        self.errors = shifted
        return True

    def set_value(self, index: int, name: str, value: Any) -> None:
        self.entries[index][name] = value
        self.errors.pop(f"{name}_{index}", None)

    def error_for(self, index: int, name: str) -> Optional[str]:
        return self.errors.get(f"{name}_{index}")

    def validate(self) -> bool:
        errors: Dict[str, str] = {}
        for i, entry in enumerate(self.entries):
            for name, msg in self.schema.validate(entry).items():
                errors[f"{name}_{i}"] = msg
        self.errors = errors
        return not errors

    def apply_server_errors(self, items: Iterable[Mapping[str, Any]]) -> None:
        """Map ``[{index, errors: {field: message}}]`` from a 400 response."""
        errors: Dict[str, str] = {}
        for item in items or []:
            idx = item.get("index")
            for name, msg in (item.get("errors") or {}).items():
                errors[f"{name}_{idx}"] = str(msg)
        self.errors = errors

    def payload(self) -> List[Dict[str, Any]]:
        out = []
        for entry in self.entries:
            body, _ = self.schema.payload(entry)
            for key, val in self.metadata.items():
                body.setdefault(key, entry.get(key, val))
            out.append(body)
        return out

    def reset(self) -> None:
        self.entries = [self._blank()]
        self.errors = {}


def split_error_key(key: str) -> Tuple[str, Optional[int]]:
    name, _, idx = key.rpartition("_")
    if name and idx.isdigit():
        return name, int(idx)
    return key, None


class FormInvalid(Exception):
    """Client-side validation failed; nothing was sent."""

    def __init__(self, errors: Mapping[str, str]):
        super().__init__(f"{len(errors)} invalid field(s)")
        self.errors = dict(errors)
