import os

import pytest

from core import schema_registry
from core.nav_registry import HIDDEN_ROUTES, ROUTE_INDEX, SECTIONS, section_of

ROOT = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))


def test_every_route_has_a_page_script():
    for route in ROUTE_INDEX.values():
        assert os.path.isfile(os.path.join(ROOT, route.script)), route.script


def test_only_login_is_public():
    assert [r.key for r in ROUTE_INDEX.values() if r.public] == ["login"]
    assert all(r.hidden for r in HIDDEN_ROUTES)


def test_detail_routes_open_their_list_section():
    assert section_of("view-student") == "Students"
    assert section_of("view-teacher") == "Teachers"
    assert section_of("class-students") == "Class & Section"
    assert section_of("login") is None


def test_single_route_sections_render_as_links():
    singles = {s.title for s in SECTIONS if s.single}
    assert singles == {"Dashboard", "Attendance"}


def test_auto_discover_registers_every_resource():
    schema_registry.auto_discover()
    keys = {spec.key for spec in schema_registry.all_specs()}
    assert {"students", "teachers", "classes", "sections", "exam_names", "routines",
            "exam_routines", "lessons", "notices", "banners"} <= keys


def test_resource_routes_exist():
    schema_registry.auto_discover()
    for spec in schema_registry.all_specs():
        for route in (spec.view_route, spec.new_route):
            if route:
                assert route in ROUTE_INDEX, f"{spec.key} -> {route}"


def test_get_unknown_resource():
    with pytest.raises(KeyError, match="nope"):
        schema_registry.get("nope")
