# schemas/banners_schema.py
from __future__ import annotations

from core.form_schema import FILE, IMAGE_TYPES, TEXTAREA, FieldSpec, FormSchema
from core.resources import Column, ResourceSpec
from core.schema_registry import register

BANNER_FORM = FormSchema((
    FieldSpec("title", "Title", required=True),
    FieldSpec("description", "Description", TEXTAREA, required=True),
    FieldSpec("image", "Banner Image", FILE, required=True, accept=IMAGE_TYPES,
              message="Please select an image"),
))

BANNERS = register(ResourceSpec(
    key="banners",
    title="Banners",
    singular="Banner",
    icon="🖼️",
    list_path="/api/admin/all-banners",
    page_size=12,
    columns=(
        Column("image", "Image", "image"),
        Column("title", "Title"),
        Column("description", "Description", width=2),
        Column("createdAt", "Created", "date"),
    ),
    create_path="/api/admin/banner",
    create_form=BANNER_FORM,
    delete_path="/api/admin/delete-banner/{id}",
    new_route="post-banner",
))
