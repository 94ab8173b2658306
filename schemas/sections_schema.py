# schemas/sections_schema.py
from __future__ import annotations

from core.form_schema import FieldSpec, FormSchema
from core.listing import FilterSpec
from core.resources import BulkDelete, Column, ResourceSpec
from core.schema_registry import register

SECTION_FORM = FormSchema((
    FieldSpec("sectionName", "Section Name", required=True, placeholder="e.g. A"),
    FieldSpec("sectionType", "Section Type", required=True, placeholder="e.g. Morning"),
))

SECTIONS = register(ResourceSpec(
    key="sections",
    title="Sections",
    singular="Section",
    icon="🔤",
    list_path="/auth/sections",
    page_size=10,
    columns=(
        Column("sectionName", "Section Name", width=1.5),
        Column("sectionType", "Section Type", width=1.5),
    ),
    filters=(
        FilterSpec("search", "Search", ("sectionName", "sectionType"),
                   placeholder="Search by name or type"),
    ),
    create_path="/api/admin/sections",
    create_form=SECTION_FORM,
    update_path="/api/admin/sections/{id}",
    edit_form=SECTION_FORM,
    delete_path="/api/admin/sections/{id}",
    # the backend only accepts bulk deletes as a POST here
    bulk=BulkDelete("/api/admin/sections/delete-multiple", "sectionIds", method="POST"),
    new_route="new-section",
))
