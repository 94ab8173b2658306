# schemas/exam_names_schema.py
from __future__ import annotations

from core.form_schema import FieldSpec, FormSchema
from core.listing import FilterSpec
from core.resources import BulkDelete, Column, ResourceSpec
from core.schema_registry import register

EXAM_NAME_FORM = FormSchema((
    FieldSpec("name", "Exam Name", required=True, placeholder="e.g. Half Yearly"),
    FieldSpec("title", "Exam Title", required=True),
))

EXAM_NAMES = register(ResourceSpec(
    key="exam_names",
    title="Exam Names",
    singular="Exam Name",
    icon="🏷️",
    list_path="/api/admin/exam-name",
    page_size=5,
    columns=(
        Column("name", "Exam Name", width=1.5),
        Column("title", "Exam Title", width=2),
    ),
    filters=(
        FilterSpec("search", "Search", ("name", "title"), placeholder="Search by name or title"),
    ),
    create_path="/api/admin/exam-name",
    create_form=EXAM_NAME_FORM,
    update_path="/api/admin/exam-name/{id}",
    edit_form=EXAM_NAME_FORM,
    delete_path="/api/admin/exam-name/{id}",
    bulk=BulkDelete("/api/admin/exam-name", "examIds"),
    new_route="new-exam-name",
))
