# schemas/exam_routines_schema.py
"""
Exam routines
- One document per submission, entries under ``examRoutine``
- Entries addressed as /exam-routine/<parent>/entry/<child>
"""
from __future__ import annotations

from core.form_schema import DATE, SELECT, TIME, FieldSpec, FormSchema, time_range
from core.listing import FilterSpec
from core.resources import Column, ResourceSpec
from core.schema_registry import register
from schemas._choices import CLASS_NAMES, DAYS, EXAM_NAMES

EXAM_ENTRY = FormSchema(
    (
        FieldSpec("examType", "Exam type", SELECT, required=True, options_key=EXAM_NAMES),
        FieldSpec("day", "Day", SELECT, required=True, options=DAYS),
        FieldSpec("date", "Date", DATE, required=True),
        FieldSpec("className", "Class", SELECT, required=True, options_key=CLASS_NAMES),
        FieldSpec("subjectName", "Subject", required=True),
        FieldSpec("timeStart", "Start time", TIME, required=True),
        FieldSpec("timeEnd", "End time", TIME, required=True),
        FieldSpec("roomNumber", "Room number", required=True),
        FieldSpec("supervisor", "Supervisor", required=True),
    ),
    checks=(time_range(),),
)

EXAM_ROUTINES = register(ResourceSpec(
    key="exam_routines",
    title="Exam Routines",
    singular="Exam",
    icon="📝",
    list_path="/auth/all-exam-routines",
    page_size=5,
    nested="examRoutine",
    columns=(
        Column("examType", "Exam", width=1.2),
        Column("className", "Class", width=0.7),
        Column("subjectName", "Subject", width=1.3),
        Column("day", "Day"),
        Column("date", "Date", "date"),
        Column("timeStart", "Time", "time_range", 1.2),
        Column("roomNumber", "Room", width=0.7),
    ),
    filters=(
        FilterSpec("search", "Day", ("day",), placeholder="Search by day"),
        FilterSpec("class", "Class", ("className",), placeholder="Filter by class"),
        FilterSpec("exam_type", "Exam type", ("examType",), placeholder="Filter by exam type"),
    ),
    create_path="/api/admin/new-exam-routine",
    create_wrap="examRoutine",
    create_form=EXAM_ENTRY,
    update_path="/api/admin/exam-routine/{parent}/entry/{child}",
    edit_form=EXAM_ENTRY,
    delete_path="/api/admin/exam-routine/{parent}/entry/{child}",
    new_route="new-exam",
))
