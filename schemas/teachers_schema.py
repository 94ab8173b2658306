# schemas/teachers_schema.py
"""
Teachers resource
- Multipart create/update (profile picture, NID photo)
- Bulk delete by ``teacherIds``
"""
from __future__ import annotations

from core.form_schema import (
    EMAIL, EMAIL_RE, FILE, IMAGE_TYPES, MOBILE_RE, NID_RE, PASSWORD, SELECT, TEXTAREA,
    FieldSpec, FormSchema,
)
from core.listing import FilterSpec
from core.resources import BulkDelete, Column, ResourceSpec
from core.schema_registry import register
from schemas._choices import TEACHER_GENDERS

TEACHER_FORM = FormSchema((
    FieldSpec("id", "Teacher ID", required=True, message="ID is required"),
    FieldSpec("name", "Name", required=True),
    FieldSpec("fatherName", "Father's Name", required=True),
    FieldSpec("motherName", "Mother's Name", required=True),
    FieldSpec("address", "Address", TEXTAREA, required=True),
    FieldSpec("gender", "Gender", SELECT, required=True, options=TEACHER_GENDERS),
    FieldSpec("education", "Education", required=True),
    FieldSpec("subject", "Subject", required=True),
    FieldSpec("mobile", "Mobile", required=True, pattern=MOBILE_RE,
              message="Valid 11-digit mobile number required", placeholder="01XXXXXXXXX"),
    FieldSpec("email", "Email", EMAIL, required=True, pattern=EMAIL_RE, message="Valid email required"),
    FieldSpec("password", "Password", PASSWORD, required=True, min_length=6,
              message="Password must be at least 6 characters"),
    FieldSpec("nidNumber", "NID Number", required=True, pattern=NID_RE,
              message="Valid NID number required"),
    FieldSpec("emergencyContact", "Emergency Contact", required=True, pattern=MOBILE_RE,
              message="Valid 11-digit emergency contact required"),
    FieldSpec("profilePic", "Profile Picture", FILE, required=True, accept=IMAGE_TYPES,
              message="Profile picture is required"),
    FieldSpec("nidPhoto", "NID Photo", FILE, required=True, accept=IMAGE_TYPES,
              message="NID photo is required"),
))

TEACHER_EDIT_FORM = TEACHER_FORM.only(
    "name", "fatherName", "motherName", "address", "gender",
    "education", "subject", "mobile", "email", "profilePic",
)

TEACHERS = register(ResourceSpec(
    key="teachers",
    title="Teachers",
    singular="Teacher",
    icon="👨‍🏫",
    list_path="/api/admin/all-teachers",
    page_size=5,
    columns=(
        Column("profilePic", "Photo", "image", 0.6),
        Column("id", "ID"),
        Column("name", "Name", width=1.6),
        Column("subject", "Subject"),
        Column("mobile", "Mobile", width=1.2),
        Column("email", "Email", width=1.6),
    ),
    filters=(
        FilterSpec("id", "ID", ("id",), placeholder="Search by ID"),
        FilterSpec("name", "Name", ("name",), placeholder="Search by name"),
        FilterSpec("phone", "Phone", ("mobile",), placeholder="Search by phone"),
    ),
    create_path="/api/admin/create-teacher",
    create_form=TEACHER_FORM,
    update_path="/api/admin/teacher/{id}",
    edit_form=TEACHER_EDIT_FORM,
    delete_path="/api/admin/delete-teacher/{id}",
    bulk=BulkDelete("/api/admin/delete-all-teachers", "teacherIds"),
    view_route="view-teacher",
    new_route="new-teacher",
))

TEACHER_DETAIL_PATH = "/api/admin/teacher/{id}"
