# schemas/notices_schema.py
from __future__ import annotations

from core.form_schema import CHECKBOX, FILE, IMAGE_TYPES, MULTISELECT, SELECT, TEXTAREA, FieldSpec, FormSchema
from core.listing import EQUALS, FilterSpec
from core.resources import Column, ResourceSpec
from core.schema_registry import register
from schemas._choices import PRIORITIES

NOTICE_SEND_FORM = FormSchema((
    FieldSpec("title", "Title", required=True),
    FieldSpec("content", "Description", TEXTAREA, required=True),
    FieldSpec("image", "Image", FILE, accept=IMAGE_TYPES),
))

NOTICE_EDIT_FORM = FormSchema((
    FieldSpec("title", "Title", required=True),
    FieldSpec("content", "Content", TEXTAREA, required=True),
    FieldSpec("student_ids", "Student IDs", MULTISELECT, default=()),
    FieldSpec("priority", "Priority", SELECT, options=PRIORITIES, default="medium"),
    FieldSpec("is_active", "Active", CHECKBOX, default=True),
))

NOTICES = register(ResourceSpec(
    key="notices",
    title="Notices",
    singular="Notice",
    icon="📢",
    list_path="/api/admin/notices",
    page_size=10,
    columns=(
        Column("title", "Title", width=1.6),
        Column("content", "Content", width=2.4),
        Column("priority", "Priority", "badge", 0.8),
        Column("is_active", "Status", "badge", 0.8),
        Column("createdAt", "Created", "date"),
    ),
    filters=(
        FilterSpec("search", "Search", ("title", "content"), placeholder="Search notices"),
        FilterSpec("priority", "Priority", ("priority",), EQUALS, options=PRIORITIES),
    ),
    create_path="/api/admin/notices",
    create_form=NOTICE_SEND_FORM,
    update_path="/api/admin/notices/{id}",
    edit_form=NOTICE_EDIT_FORM,
    delete_path="/api/admin/delete-notices/{id}",
    new_route="send-notice",
))
