# core/resources.py
"""
Declarative description of one backend entity and the REST calls behind it.

A ``ResourceSpec`` names the list/create/update/delete endpoints, the table
columns, the filters and the form schemas of a resource screen.
``ResourceService`` turns a spec into HTTP calls through ``ApiClient``.

Entities nested inside a parent document (routine periods, exam entries,
diary entries) are flattened into rows that carry ``parentId`` and
``childId``; every edit/delete on such a row is addressed by both.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any, Dict, Iterable, List, Mapping, Optional, Sequence, Tuple

from core.api import ApiClient, ApiError, FilePart, unwrap_list
from core.form_schema import EntryListForm, FormInvalid, FormSchema
from core.listing import FilterSpec

log = logging.getLogger(__name__)

PARENT_ID = "parentId"
CHILD_ID = "childId"

# update/delete body shapes
FLAT = "flat"
ROUTINE_ITEM = "routine_item"
DIARY_ENTRY = "diary_entry"


@dataclass(frozen=True)
class Column:
    field: str
    label: str
    kind: str = "text"      # text | image | date | time_range | badge
    width: float = 1.0


@dataclass(frozen=True)
class BulkDelete:
    path: str
    key: str                # body key carrying the id array
    method: str = "DELETE"


@dataclass(frozen=True)
class ResourceSpec:
    key: str
    title: str
    singular: str
    list_path: str
    columns: Tuple[Column, ...] = ()
    filters: Tuple[FilterSpec, ...] = ()
    page_size: int = 10
    create_path: Optional[str] = None
    create_wrap: Optional[str] = None     # body key for multi-entry creates
    create_form: Optional[FormSchema] = None
    update_path: Optional[str] = None     # "{id}", "{parent}", "{child}" placeholders
    update_method: str = "PUT"
    update_body: str = FLAT
    edit_form: Optional[FormSchema] = None
    delete_path: Optional[str] = None
    delete_body: str = FLAT
    bulk: Optional[BulkDelete] = None
    nested: Optional[str] = None          # child array key on the parent document
    parent_field: Optional[str] = None    # flat rows that name their parent
    view_route: Optional[str] = None
    view_field: Optional[str] = None      # detail screens keyed by something other than id_field
    new_route: Optional[str] = None
    id_field: str = "_id"
    icon: str = ""
    list_params: Mapping[str, Any] = field(default_factory=dict)

    @property
    def addressed_by_parent(self) -> bool:
        return bool(self.nested or self.parent_field)


def flatten(spec: ResourceSpec, records: Iterable[Mapping[str, Any]]) -> List[Dict[str, Any]]:
    """Expand parent documents into one row per nested child."""
    rows: List[Dict[str, Any]] = []
    if spec.nested:
        for parent in records:
            pid = str(parent.get("_id", ""))
            for child in parent.get(spec.nested) or []:
                cid = str(child.get("_id", ""))
                row = dict(child)
                row.setdefault("createdAt", parent.get("createdAt"))
                row[PARENT_ID] = pid
                row[CHILD_ID] = cid
                row[spec.id_field] = f"{pid}:{cid}"
                rows.append(row)
        return rows
    for rec in records:
        row = dict(rec)
        if spec.parent_field:
            row[PARENT_ID] = str(rec.get(spec.parent_field, ""))
            row[CHILD_ID] = str(rec.get("_id", ""))
        rows.append(row)
    return rows


def address(spec: ResourceSpec, row: Mapping[str, Any]) -> Dict[str, str]:
    """Placeholders for the path templates of ``row``."""
    if spec.addressed_by_parent:
        parent, child = row.get(PARENT_ID), row.get(CHILD_ID)
        if not parent or not child:
            raise ValueError(f"{spec.singular} row is missing its parent/child id")
        return {"id": str(child), "parent": str(parent), "child": str(child)}
    rid = row.get(spec.id_field)
    if not rid:
        raise ValueError(f"{spec.singular} row has no id")
    return {"id": str(rid), "parent": str(rid), "child": str(rid)}


def _update_body(style: str, values: Dict[str, Any], addr: Mapping[str, str]) -> Dict[str, Any]:
    if style == ROUTINE_ITEM:
        return {"routineItemId": addr["child"], "updatedData": values}
    if style == DIARY_ENTRY:
        return {**values, "diaryId": addr["parent"]}
    return values


def _delete_body(style: str, addr: Mapping[str, str]) -> Optional[Dict[str, Any]]:
    if style == ROUTINE_ITEM:
        return {"routineItemId": addr["child"]}
    if style == DIARY_ENTRY:
        return {"diaryId": addr["parent"]}
    return None


class ResourceService:
    def __init__(self, client: ApiClient, spec: ResourceSpec):
        self.client = client
        self.spec = spec

    def fetch(self, params: Optional[Mapping[str, Any]] = None) -> List[Dict[str, Any]]:
        query = {**self.spec.list_params, **(params or {})}
        payload = self.client.get(self.spec.list_path, params=query or None)
        rows = flatten(self.spec, unwrap_list(payload))
        log.debug("Fetched %d %s", len(rows), self.spec.key)
        return rows

    def create(self, values: Mapping[str, Any], files: Sequence[FilePart] = ()) -> Any:
        if not self.spec.create_path:
            raise ValueError(f"{self.spec.title} cannot be created")
        log.info("Creating %s", self.spec.singular)
        return self.client.post(self.spec.create_path, json=dict(values), files=list(files))

    def create_entries(self, entries: Sequence[Mapping[str, Any]]) -> Any:
        if not self.spec.create_path or not self.spec.create_wrap:
            raise ValueError(f"{self.spec.title} does not take multiple entries")
        log.info("Creating %d %s entries", len(entries), self.spec.singular)
        return self.client.post(self.spec.create_path, json={self.spec.create_wrap: [dict(e) for e in entries]})

    def update(self, row: Mapping[str, Any], values: Mapping[str, Any], files: Sequence[FilePart] = ()) -> Any:
        if not self.spec.update_path:
            raise ValueError(f"{self.spec.title} cannot be edited")
        addr = address(self.spec, row)
        path = self.spec.update_path.format(**addr)
        body = _update_body(self.spec.update_body, dict(values), addr)
        log.info("Updating %s %s", self.spec.singular, addr["id"])
        return self.client.send(self.spec.update_method, path, json=body, files=list(files))

    def delete(self, row: Mapping[str, Any]) -> Any:
        if not self.spec.delete_path:
            raise ValueError(f"{self.spec.title} cannot be deleted")
        addr = address(self.spec, row)
        path = self.spec.delete_path.format(**addr)
        log.info("Deleting %s %s", self.spec.singular, addr["id"])
        return self.client.delete(path, json=_delete_body(self.spec.delete_body, addr))

    def bulk_delete(self, ids: Sequence[str]) -> Any:
        bulk = self.spec.bulk
        if bulk is None:
            raise ValueError(f"{self.spec.title} has no bulk delete")
        ids = [str(i) for i in ids]
        if not ids:
            raise ValueError("No records selected")
        log.info("Bulk deleting %d %s", len(ids), self.spec.key)
        return self.client.send(bulk.method, bulk.path, json={bulk.key: ids})


def option_values(rows: Iterable[Mapping[str, Any]], field_name: str) -> List[str]:
    """Distinct non-empty values of ``field_name`` in server order."""
    seen: List[str] = []
    for r in rows:
        val = r.get(field_name)
        if val not in (None, "") and str(val) not in seen:
            seen.append(str(val))
    return seen


def load_options(client: ApiClient, spec: ResourceSpec, field_name: str) -> List[str]:
    """Choices for a select input drawn from another resource's list."""
    return option_values(ResourceService(client, spec).fetch(), field_name)


def submit(
    service: ResourceService,
    schema: FormSchema,
    values: Mapping[str, Any],
    row: Optional[Mapping[str, Any]] = None,
) -> Any:
    """Validate, then create (``row`` is None) or update ``row``.

    Multipart is used only when a file field holds an upload.
    """
    errors = schema.validate(values)
    if errors:
        raise FormInvalid(errors)
    body, files = schema.payload(values)
    if row is None:
        return service.create(body, files)
    return service.update(row, body, files)

def submit_entries(service: ResourceService, form: EntryListForm) -> Any:
    """Validate every entry, then POST them together.

    A 400 carrying ``errors: [{index, errors}]`` is mapped back onto ``form``
    before the ``ApiError`` propagates.
    """
    if not form.validate():
        raise FormInvalid(form.errors)
    try:
        return service.create_entries(form.payload())
    except ApiError as e:
        items = e.payload.get("errors") if isinstance(e.payload, Mapping) else None
        if e.status == 400 and isinstance(items, list):
            form.apply_server_errors(items)
        raise
