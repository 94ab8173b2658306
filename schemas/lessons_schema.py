# schemas/lessons_schema.py
"""
Daily lesson diary
- Listed as flat entries that name their parent diary in ``diaryId``
"""
from __future__ import annotations

from core.form_schema import DATE, SELECT, TEXTAREA, FieldSpec, FormSchema
from core.listing import FilterSpec, EQUALS
from core.resources import DIARY_ENTRY, Column, ResourceSpec
from core.schema_registry import register
from schemas._choices import CLASS_NAMES, DAYS

DIARY_ENTRY_FORM = FormSchema((
    FieldSpec("day", "Day", SELECT, required=True, options=DAYS),
    FieldSpec("date", "Date", DATE, required=True),
    FieldSpec("className", "Class", SELECT, required=True, options_key=CLASS_NAMES),
    FieldSpec("subjectName", "Subject", required=True),
    FieldSpec("teacherName", "Teacher", required=True),
    FieldSpec("topicCovered", "Topic covered", TEXTAREA, required=True),
    FieldSpec("homework", "Homework", TEXTAREA),
    FieldSpec("note", "Note", TEXTAREA),
))

LESSONS = register(ResourceSpec(
    key="lessons",
    title="Lesson Diary",
    singular="Lesson",
    icon="📓",
    list_path="/auth/daily-diary",
    page_size=5,
    parent_field="diaryId",
    columns=(
        Column("date", "Date", "date"),
        Column("day", "Day"),
        Column("className", "Class", width=0.7),
        Column("subjectName", "Subject", width=1.2),
        Column("teacherName", "Teacher", width=1.2),
        Column("topicCovered", "Topic", width=1.6),
    ),
    filters=(
        FilterSpec("search", "Search", ("day", "subjectName", "topicCovered"),
                   placeholder="Search by day, subject or topic"),
        FilterSpec("class", "Class", ("className",), placeholder="Filter by class"),
        FilterSpec("day", "Day", ("day",), EQUALS, options=DAYS),
    ),
    create_path="/api/admin/daily-diary",
    create_wrap="entries",
    create_form=DIARY_ENTRY_FORM,
    update_path="/api/admin/daily-diary/entry/{child}",
    update_body=DIARY_ENTRY,
    edit_form=DIARY_ENTRY_FORM,
    delete_path="/api/admin/daily-diary/entry/{child}",
    delete_body=DIARY_ENTRY,
    new_route="new-lesson",
))
