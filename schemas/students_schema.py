# schemas/students_schema.py
"""
Students resource
- Multipart create/update (profile picture)
- Bulk delete by ``studentIds``
"""
from __future__ import annotations

from core.form_schema import (
    DATE, EMAIL, FILE, IMAGE_TYPES, MOBILE_RE, PASSWORD, SELECT, TEXTAREA,
    FieldSpec, FormSchema,
)
from core.listing import EQUALS, FilterSpec
from core.resources import BulkDelete, Column, ResourceSpec
from core.schema_registry import register
from schemas._choices import CLASS_NAMES, GROUPS, RELIGIONS, SECTION_NAMES, STUDENT_GENDERS

STUDENT_FORM = FormSchema((
    FieldSpec("id", "Student ID", required=True, message="ID is required"),
    FieldSpec("name", "Name", required=True),
    FieldSpec("fatherName", "Father's Name", required=True),
    FieldSpec("motherName", "Mother's Name", required=True),
    FieldSpec("gender", "Gender", SELECT, required=True, options=STUDENT_GENDERS),
    FieldSpec("birthdate", "Birth Date", DATE, required=True),
    FieldSpec("mobile", "Mobile", required=True, pattern=MOBILE_RE,
              message="Valid 11-digit mobile number required", placeholder="01XXXXXXXXX"),
    FieldSpec("email", "Email", EMAIL, required=True, pattern=r".*@.*", message="Valid email required"),
    FieldSpec("password", "Password", PASSWORD, required=True, min_length=6,
              message="Password must be at least 6 characters"),
    FieldSpec("confirmPassword", "Confirm Password", PASSWORD, must_match="password",
              message="Passwords do not match", send=False),
    FieldSpec("classRoll", "Class Roll", required=True, message="Class roll is required"),
    FieldSpec("studentClass", "Class", SELECT, required=True, options_key=CLASS_NAMES),
    FieldSpec("section", "Section", SELECT, required=True, options_key=SECTION_NAMES),
    FieldSpec("group", "Group", SELECT, options=GROUPS),
    FieldSpec("religion", "Religion", SELECT, required=True, options=RELIGIONS),
    FieldSpec("address", "Address", TEXTAREA, required=True),
    FieldSpec("profilePic", "Profile Picture", FILE, required=True, accept=IMAGE_TYPES,
              message="Profile picture is required"),
))

STUDENT_EDIT_FORM = STUDENT_FORM.only(
    "name", "gender", "studentClass", "section", "classRoll",
    "address", "mobile", "email", "profilePic",
)

STUDENTS = register(ResourceSpec(
    key="students",
    title="Students",
    singular="Student",
    icon="🎓",
    list_path="/api/admin/students",
    page_size=10,
    columns=(
        Column("profilePic", "Photo", "image", 0.6),
        Column("id", "ID"),
        Column("name", "Name", width=1.6),
        Column("studentClass", "Class", width=0.8),
        Column("section", "Section", width=0.8),
        Column("classRoll", "Roll", width=0.6),
        Column("mobile", "Mobile", width=1.2),
    ),
    filters=(
        FilterSpec("search", "Search", ("id", "name", "mobile", "email"),
                   placeholder="Search by ID, name, mobile or email"),
        FilterSpec("class", "Class", ("studentClass",), EQUALS, options_field="studentClass"),
        FilterSpec("section", "Section", ("section",), EQUALS, options_field="section"),
        FilterSpec("gender", "Gender", ("gender",), EQUALS, options=STUDENT_GENDERS),
    ),
    create_path="/api/admin/create-student",
    create_form=STUDENT_FORM,
    update_path="/api/admin/update-student/{id}",
    edit_form=STUDENT_EDIT_FORM,
    delete_path="/api/admin/delete-student/{id}",
    bulk=BulkDelete("/api/admin/delete-students", "studentIds"),
    view_route="view-student",
    new_route="new-student",
))

# Per-student lookup used by the profile screen
STUDENT_DETAIL_PATH = "/api/admin/student/{id}"
