# core/listing.py
"""
Client-side list state shared by every resource screen.

A screen fetches its records once, then all searching, paging and row
selection happen here over the in-memory list. Nothing in this module talks
to Streamlit or the network.
"""
from __future__ import annotations

import math
from dataclasses import dataclass, field
from typing import Any, Dict, Iterable, List, Mapping, Optional, Sequence, Tuple

CONTAINS = "contains"
EQUALS = "equals"


@dataclass(frozen=True)
class FilterSpec:
    key: str
    label: str
    fields: Tuple[str, ...]
    mode: str = CONTAINS          # "contains" (text input) | "equals" (select box)
    placeholder: str = ""
    options: Tuple[str, ...] = ()  # fixed choices for select filters
    options_field: Optional[str] = None  # or draw choices from this record field


def field_text(record: Mapping[str, Any], name: str) -> str:
    val = record.get(name)
    if val is None:
        return ""
    return str(val)


def matches(record: Mapping[str, Any], spec: FilterSpec, term: Any) -> bool:
    if term is None or term == "":
        return True
    if spec.mode == EQUALS:
        return any(field_text(record, f) == str(term) for f in spec.fields)
    needle = str(term).lower()
    return any(needle in field_text(record, f).lower() for f in spec.fields)


def apply_filters(
    records: Iterable[Mapping[str, Any]],
    specs: Sequence[FilterSpec],
    values: Mapping[str, Any],
) -> List[Mapping[str, Any]]:
    return [r for r in records if all(matches(r, s, values.get(s.key)) for s in specs)]


def filter_options(records: Iterable[Mapping[str, Any]], spec: FilterSpec) -> List[str]:
    if spec.options:
        return list(spec.options)
    if not spec.options_field:
        return []
    seen = {field_text(r, spec.options_field) for r in records}
    return sorted(v for v in seen if v)


@dataclass
class ListState:
    page_size: int
    filters: Sequence[FilterSpec] = ()
    id_field: str = "_id"
    records: List[Dict[str, Any]] = field(default_factory=list)
    filtered: List[Dict[str, Any]] = field(default_factory=list)
    filter_values: Dict[str, Any] = field(default_factory=dict)
    page: int = 1
    selected: List[str] = field(default_factory=list)
    loaded: bool = False
    error: Optional[str] = None

    def __post_init__(self):
        if self.page_size < 1:
            raise ValueError("page_size must be positive")

    # ── data ────────────────────────────────────────────────────────────────
    def load(self, records: Iterable[Mapping[str, Any]]) -> None:
        self.records = [dict(r) for r in records]
        self.error = None
        self.loaded = True
        self._refilter()
        known = {self.record_id(r) for r in self.records}
        self.selected = [i for i in self.selected if i in known]
        self._clamp_page()

    def fail(self, message: str) -> None:
        self.records = []
        self.filtered = []
        self.selected = []
        self.page = 1
        self.error = message
        self.loaded = True

    def record_id(self, record: Mapping[str, Any]) -> str:
        return str(record.get(self.id_field, ""))

    def remove_ids(self, ids: Iterable[str]) -> None:
        gone = {str(i) for i in ids}
        self.records = [r for r in self.records if self.record_id(r) not in gone]
        self.filtered = [r for r in self.filtered if self.record_id(r) not in gone]
        self.selected = [i for i in self.selected if i not in gone]
        self._clamp_page()

    # ── filtering ───────────────────────────────────────────────────────────
    def set_filter(self, key: str, value: Any) -> None:
        if self.filter_values.get(key) == value:
            return
        self.filter_values[key] = value
        self._refilter()
        self.page = 1
        self.selected = []

    def reset_filters(self) -> None:
        self.filter_values = {}
        self._refilter()
        self.page = 1
        self.selected = []

    def _refilter(self) -> None:
        self.filtered = [dict(r) for r in apply_filters(self.records, self.filters, self.filter_values)]

    # ── paging ──────────────────────────────────────────────────────────────
    @property
    def page_count(self) -> int:
        return math.ceil(len(self.filtered) / self.page_size)

    def go_to(self, page: int) -> None:
        self.page = int(page)
        self._clamp_page()

    def _clamp_page(self) -> None:
        self.page = min(max(1, self.page), max(1, self.page_count))

    @property
    def page_rows(self) -> List[Dict[str, Any]]:
        start = (self.page - 1) * self.page_size
        return self.filtered[start:start + self.page_size]

    @property
    def displayed_count(self) -> int:
        return len(self.page_rows)

    def showing(self) -> Tuple[int, int, int]:
        """(first, last, total) for the "Showing X to Y of Z" caption."""
        total = len(self.filtered)
        if not total:
            return 0, 0, 0
        first = (self.page - 1) * self.page_size + 1
        return first, min(self.page * self.page_size, total), total

    def row_number(self, index_on_page: int) -> int:
        return (self.page - 1) * self.page_size + index_on_page + 1

    # ── selection ───────────────────────────────────────────────────────────
    def is_selected(self, record_id: str) -> bool:
        return record_id in self.selected

    def toggle(self, record_id: str, checked: Optional[bool] = None) -> None:
        on = (record_id not in self.selected) if checked is None else checked
        if on and record_id not in self.selected:
            self.selected.append(record_id)
        elif not on and record_id in self.selected:
            self.selected.remove(record_id)

    @property
    def all_page_selected(self) -> bool:
        ids = [self.record_id(r) for r in self.page_rows]
        return bool(ids) and all(i in self.selected for i in ids)

    def select_page(self, checked: bool) -> None:
        if checked:
            self.selected = [self.record_id(r) for r in self.page_rows]
        else:
            self.selected = []
