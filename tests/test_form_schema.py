from core.form_schema import EntryListForm, FormInvalid, check_field, file_part
from schemas.exam_routines_schema import EXAM_ENTRY
from schemas.routines_schema import ROUTINE_ENTRY
from schemas.students_schema import STUDENT_EDIT_FORM, STUDENT_FORM
from schemas.teachers_schema import TEACHER_FORM

PNG = ("me.png", b"\x89PNG", "image/png")


def student(**overrides):
    values = {
        "id": "S-101", "name": "Ayesha Khan", "fatherName": "Karim Khan", "motherName": "Rina Khan",
        "gender": "female", "birthdate": "2012-03-04", "mobile": "01712345678",
        "email": "ayesha@example.com", "password": "secret1", "confirmPassword": "secret1",
        "classRoll": "7", "studentClass": "5", "section": "A", "group": "", "religion": "Islam",
        "address": "Dhaka", "profilePic": PNG,
    }
    values.update(overrides)
    return values


def test_valid_student_has_no_errors():
    assert STUDENT_FORM.validate(student()) == {}


def test_required_field_reports_its_message():
    errors = STUDENT_FORM.validate(student(id="", classRoll="  "))
    assert errors["id"] == "ID is required"
    assert errors["classRoll"] == "Class roll is required"


def test_mobile_must_be_eleven_digits():
    assert STUDENT_FORM.validate(student(mobile="0171234567"))["mobile"] == "Valid 11-digit mobile number required"
    assert "mobile" not in STUDENT_FORM.validate(student(mobile="01812345678"))


def test_password_rules():
    errors = STUDENT_FORM.validate(student(password="abc", confirmPassword="abd"))
    assert errors["password"] == "Password must be at least 6 characters"
    assert errors["confirmPassword"] == "Passwords do not match"
    errors = STUDENT_FORM.validate(student(confirmPassword=""))
    assert errors["confirmPassword"] == "Passwords do not match"


def test_required_file():
    assert STUDENT_FORM.validate(student(profilePic=None))["profilePic"] == "Profile picture is required"


def test_teacher_nid_and_emergency_contact():
    spec = TEACHER_FORM.get("nidNumber")
    assert check_field(spec, "123456789", {}) == "Valid NID number required"
    assert check_field(spec, "1234567890", {}) is None
    assert check_field(TEACHER_FORM.get("emergencyContact"), "0171-234567", {}) \
        == "Valid 11-digit emergency contact required"


def test_payload_splits_files_and_drops_confirmation():
    body, files = STUDENT_FORM.payload(student())
    assert "confirmPassword" not in body
    assert "profilePic" not in body
    assert files == [("profilePic", PNG)]


def test_edit_form_makes_photo_optional():
    values = STUDENT_EDIT_FORM.from_record({"name": "A", "gender": "female", "studentClass": "5",
                                            "section": "A", "classRoll": "1", "address": "x",
                                            "mobile": "01712345678", "email": "a@b.co",
                                            "profilePic": "old.png"})
    assert values["profilePic"] is None
    assert STUDENT_EDIT_FORM.validate(values) == {}
    body, files = STUDENT_EDIT_FORM.payload(values)
    assert files == []
    assert "password" not in body


def test_file_part_accepts_upload_like_objects():
    class Upload:
        name = "nid.jpg"
        type = "image/jpeg"

        def getvalue(self):
            return b"jpeg"

    assert file_part("nidPhoto", Upload()) == ("nidPhoto", ("nid.jpg", b"jpeg", "image/jpeg"))
    assert file_part("nidPhoto", None) is None


def test_routine_time_range_check():
    entry = {"day": "Sunday", "period": "1st Period", "className": "5", "subjectName": "Math",
             "teacherName": "Mr. Alam", "timeStart": "10:00", "timeEnd": "09:15"}
    assert ROUTINE_ENTRY.validate(entry) == {"timeRange": "End time must be after start time"}
    entry["timeEnd"] = "10:45"
    assert ROUTINE_ENTRY.validate(entry) == {}


def test_exam_routine_entries_add_and_remove():
    form = EntryListForm(EXAM_ENTRY, {"createdBy": "Head Admin", "teacher_id": "adm1"})
    assert len(form) == 1
    form.add_entry()
    assert len(form) == 2

    form.set_value(1, "subjectName", "Physics")
    assert not form.validate()
    assert form.error_for(0, "subjectName") == "Subject is required"
    assert form.error_for(1, "subjectName") is None

    assert form.remove_entry(0)
    assert len(form) == 1
    assert form.entries[0]["subjectName"] == "Physics"
    assert form.error_for(0, "subjectName") is None
    assert form.error_for(0, "roomNumber") == "Room number is required"
    assert not any(key.endswith("_1") for key in form.errors)


def test_last_entry_cannot_be_removed():
    form = EntryListForm(EXAM_ENTRY)
    assert not form.remove_entry(0)
    assert len(form) == 1


def test_entries_carry_creator_metadata():
    form = EntryListForm(ROUTINE_ENTRY, {"createdBy": "Head Admin", "teacher_id": "adm1"})
    form.add_entry()
    for body in form.payload():
        assert body["createdBy"] == "Head Admin"
        assert body["teacher_id"] == "adm1"


def test_server_errors_map_to_indexed_keys():
    form = EntryListForm(EXAM_ENTRY)
    form.add_entry()
    form.apply_server_errors([{"index": 1, "errors": {"roomNumber": "Room is taken"}}])
    assert form.errors == {"roomNumber_1": "Room is taken"}
    form.set_value(1, "roomNumber", "204")
    assert form.errors == {}


def test_form_invalid_carries_errors():
    err = FormInvalid({"name": "Name is required"})
    assert err.errors == {"name": "Name is required"}
