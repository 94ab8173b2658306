# schemas/classes_schema.py
from __future__ import annotations

from core.form_schema import FieldSpec, FormSchema
from core.listing import FilterSpec
from core.resources import BulkDelete, Column, ResourceSpec
from core.schema_registry import register

CLASS_FORM = FormSchema((
    FieldSpec("className", "Class Name", required=True, placeholder="e.g. 6"),
    FieldSpec("classTeacher", "Class Teacher", required=True,
              message="Class Teacher Name is required"),
))

CLASSES = register(ResourceSpec(
    key="classes",
    title="Classes",
    singular="Class",
    icon="🏫",
    list_path="/auth/all-classes",
    page_size=20,
    columns=(
        Column("className", "Class Name", width=1.5),
        Column("classTeacher", "Class Teacher", width=2),
    ),
    filters=(
        FilterSpec("search", "Search", ("className", "classTeacher"),
                   placeholder="Search by class or teacher"),
    ),
    create_path="/api/admin/new-class",
    create_form=CLASS_FORM,
    update_path="/api/admin/class/{id}",
    edit_form=CLASS_FORM,
    delete_path="/api/admin/class/{id}",
    bulk=BulkDelete("/api/admin/delete-all-classes", "classIds"),
    view_route="class-students",
    view_field="className",
    new_route="new-class",
))

# Students enrolled in one class, addressed by class name
CLASS_STUDENTS_PATH = "/api/admin/class-student/{id}"
