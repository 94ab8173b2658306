import pytest

from core.listing import EQUALS, FilterSpec, ListState, apply_filters, filter_options

STUDENTS = [
    {"_id": f"s{i}", "name": name, "studentClass": cls}
    for i, (name, cls) in enumerate([
        ("Ayesha Khan", "5"), ("Rafi Ahmed", "5"), ("Nusrat Jahan", "6"),
        ("Tanvir Hasan", "6"), ("Karim Ullah", "7"), ("Sadia Akter", "7"),
        ("Imran Hossain", "8"),
    ], start=1)
]

SEARCH = FilterSpec("search", "Search", ("name",))
CLASS = FilterSpec("class", "Class", ("studentClass",), EQUALS, options_field="studentClass")


def make_state(page_size=3):
    state = ListState(page_size=page_size, filters=(SEARCH, CLASS))
    state.load(STUDENTS)
    return state


def test_empty_filters_keep_everything():
    state = make_state()
    assert state.filtered == STUDENTS
    assert apply_filters(STUDENTS, (SEARCH, CLASS), {}) == STUDENTS


def test_search_is_case_insensitive_and_resets_page():
    state = make_state()
    state.go_to(3)
    state.set_filter("search", "HOSS")
    assert [r["name"] for r in state.filtered] == ["Imran Hossain"]
    assert state.page == 1


def test_equals_filter_matches_whole_value():
    state = make_state()
    state.set_filter("class", "5")
    assert {r["_id"] for r in state.filtered} == {"s1", "s2"}
    assert filter_options(STUDENTS, CLASS) == ["5", "6", "7", "8"]


@pytest.mark.parametrize("page, expected", [(1, 3), (2, 3), (3, 1)])
def test_displayed_count(page, expected):
    state = make_state()
    state.go_to(page)
    assert state.displayed_count == expected == min(3, len(state.filtered) - (page - 1) * 3)


def test_last_page_never_empty_after_shrink():
    state = make_state()
    state.go_to(3)
    state.remove_ids(["s7"])
    assert state.page == 2
    assert state.displayed_count == 3
    assert state.showing() == (4, 6, 6)


def test_showing_caption_values():
    state = make_state()
    assert state.showing() == (1, 3, 7)
    state.set_filter("search", "zzz")
    assert state.showing() == (0, 0, 0)
    assert state.page_count == 0


def test_remove_ids_drops_exactly_those_rows():
    state = make_state()
    state.toggle("s2")
    state.toggle("s3")
    state.remove_ids(["s2", "s3"])
    ids = {r["_id"] for r in state.records}
    assert ids == {"s1", "s4", "s5", "s6", "s7"}
    assert {r["_id"] for r in state.filtered} == ids
    assert state.selected == []


def test_select_page_covers_visible_rows_only():
    state = make_state()
    state.go_to(2)
    state.select_page(True)
    assert state.selected == ["s4", "s5", "s6"]
    assert state.all_page_selected
    state.select_page(False)
    assert state.selected == []


def test_reload_keeps_only_known_selection():
    state = make_state()
    state.toggle("s1")
    state.toggle("s2")
    state.load([r for r in STUDENTS if r["_id"] != "s2"])
    assert state.selected == ["s1"]


def test_fail_empties_the_list():
    state = make_state()
    state.fail("Failed to load students")
    assert state.records == [] and state.filtered == []
    assert state.error == "Failed to load students"
    assert state.loaded


def test_row_numbers_continue_across_pages():
    state = make_state()
    state.go_to(2)
    assert state.row_number(0) == 4
