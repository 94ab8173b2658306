# schemas/routines_schema.py
"""
Class routines
- A routine document holds an array of periods (``routine``)
- Periods are edited/deleted through the parent id plus ``routineItemId``
"""
from __future__ import annotations

from core.form_schema import SELECT, TIME, FieldSpec, FormSchema, time_range
from core.listing import FilterSpec
from core.resources import ROUTINE_ITEM, Column, ResourceSpec
from core.schema_registry import register
from schemas._choices import CLASS_NAMES, DAYS, PERIODS

ROUTINE_ENTRY = FormSchema(
    (
        FieldSpec("day", "Day", SELECT, required=True, options=DAYS),
        FieldSpec("period", "Period", SELECT, required=True, options=PERIODS),
        FieldSpec("className", "Class", SELECT, required=True, options_key=CLASS_NAMES),
        FieldSpec("subjectName", "Subject name", required=True),
        FieldSpec("teacherName", "Teacher name", required=True),
        FieldSpec("timeStart", "Start time", TIME, required=True),
        FieldSpec("timeEnd", "End time", TIME, required=True),
    ),
    checks=(time_range(),),
)

ROUTINE_EDIT = ROUTINE_ENTRY.only("day", "className", "subjectName", "teacherName", "timeStart", "timeEnd")

ROUTINES = register(ResourceSpec(
    key="routines",
    title="Class Routines",
    singular="Routine",
    icon="🗓️",
    list_path="/auth/routines",
    page_size=5,
    nested="routine",
    columns=(
        Column("day", "Day"),
        Column("period", "Period"),
        Column("className", "Class", width=0.8),
        Column("subjectName", "Subject", width=1.4),
        Column("teacherName", "Teacher", width=1.4),
        Column("timeStart", "Time", "time_range", 1.2),
    ),
    filters=(
        FilterSpec("search", "Day", ("day",), placeholder="Search by day"),
        FilterSpec("class", "Class", ("className",), placeholder="Filter by class"),
    ),
    create_path="/api/admin/new-routine",
    create_wrap="routine",
    create_form=ROUTINE_ENTRY,
    update_path="/api/admin/routines/{parent}",
    update_body=ROUTINE_ITEM,
    edit_form=ROUTINE_EDIT,
    delete_path="/api/admin/routines/{parent}",
    delete_body=ROUTINE_ITEM,
    new_route="new-routine",
))
