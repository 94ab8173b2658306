import pytest

from screens.attendance.roster import (
    CLASS_SELECTED, MARK_ALL_STUDENTS, NO_CLASS, SELECT_CLASS_FIRST, STUDENTS_LOADED,
    Roster, RosterError, fetch_roster, mark, status_of, submit_attendance,
)

ROSTER = [
    {"_id": "a1", "id": "S-1", "name": "Ayesha Khan"},
    {"_id": "a2", "id": "S-2", "name": "Rafi Ahmed"},
    {"_id": "a3", "id": "S-3", "name": "Nusrat Jahan"},
]


def loaded():
    r = Roster(date="2024-05-01")
    r.select_class("cls5", "5")
    r.select_section("secA", "A")
    r.load(ROSTER)
    return r


def test_state_transitions():
    r = Roster()
    assert r.state == NO_CLASS
    r.select_class("cls5", "5")
    assert r.state == CLASS_SELECTED
    r.load(ROSTER)
    assert r.state == STUDENTS_LOADED
    r.select_section("secA", "A")
    assert r.state == CLASS_SELECTED
    assert r.attendance == {}


def test_changing_class_drops_section_and_roster():
    r = loaded()
    r.select_class("cls6", "6")
    assert r.section_id is None and r.students == []


def test_everyone_starts_present():
    r = loaded()
    assert {sid: status_of(e) for sid, e in r.attendance.items()} == {"a1": "present", "a2": "present",
                                                                      "a3": "present"}


def test_statuses_are_mutually_exclusive_and_keep_remarks():
    r = loaded()
    r.set_remarks("a2", "sick")
    r.set_status("a2", "late")
    assert r.attendance["a2"] == {"present": False, "absent": False, "late": True, "remarks": "sick"}
    r.set_status("a2", "present")
    assert r.attendance["a2"] == mark("present", "sick")


def test_mark_all_applies_to_visible_students():
    r = loaded()
    r.search = "rafi"
    r.mark_all("absent")
    assert status_of(r.attendance["a2"]) == "absent"
    assert status_of(r.attendance["a1"]) == "present"
    r.search = ""
    r.mark_all("present")
    assert r.counts() == {"present": 3, "absent": 0, "late": 0}


def test_search_by_name_or_id():
    r = loaded()
    r.search = "s-3"
    assert [s["_id"] for s in r.visible] == ["a3"]


def test_loading_needs_a_class():
    with pytest.raises(RosterError, match=SELECT_CLASS_FIRST):
        Roster().roster_params()


def test_submit_blocked_when_a_status_is_missing():
    r = loaded()
    r.attendance.pop("a3")
    with pytest.raises(RosterError, match=MARK_ALL_STUDENTS):
        r.payload("adm1")
    r.set_remarks("a3", "late bus")
    with pytest.raises(RosterError, match=MARK_ALL_STUDENTS):
        r.payload("adm1")


def test_class_five_section_a_end_to_end(client, backend):
    backend.on("GET", "/api/admin/search-students", payload={"success": True, "data": ROSTER})
    backend.on("POST", "/api/admin/attendance", payload={"success": True, "message": "Saved"})

    r = Roster(date="2024-05-01")
    r.select_class("cls5", "5")
    r.select_section("secA", "A")
    fetch_roster(client, r)
    assert backend.last("GET")["params"] == {"classId": "cls5", "sectionId": "A"}
    assert r.state == STUDENTS_LOADED

    r.set_status("a2", "absent")
    submit_attendance(client, r, "adm1")

    body = backend.last("POST")["json"]
    assert body["classId"] == "cls5"
    assert body["sectionId"] == "secA"
    assert body["date"] == "2024-05-01"
    assert body["createdBy"] == "adm1"
    assert len(body["attendance"]) == 3
    assert {sid: status_of(e) for sid, e in body["attendance"].items()} == {
        "a1": "present", "a2": "absent", "a3": "present",
    }
    assert r.state == CLASS_SELECTED
