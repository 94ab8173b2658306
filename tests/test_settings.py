import logging

from core.settings import configure_logging, load_settings

YAML = """
app:
  name: "Test Console"
api:
  base_url: "http://api.test/"
  timeout_seconds: 3
auth: {}
ui:
  page_sizes:
    students: 25
logging:
  level: "warning"
"""


def write(tmp_path, text=YAML):
    path = tmp_path / "settings.yaml"
    path.write_text(text, encoding="utf-8")
    return path


def test_defaults_ship_with_repo(monkeypatch):
    for var in ("SCHOOL_ADMIN_SETTINGS", "SCHOOL_ADMIN_API_BASE_URL", "SCHOOL_ADMIN_DEBUG"):
        monkeypatch.delenv(var, raising=False)
    s = load_settings()
    assert s.api.base_url == "http://localhost:5000"
    assert s.api.timeout_seconds == 15
    assert s.auth.admin_key == "genius_admin"
    assert s.ui.page_size("teachers") == 5
    assert s.ui.page_size("classes") == 20


def test_file_values_and_trailing_slash(tmp_path, monkeypatch):
    monkeypatch.delenv("SCHOOL_ADMIN_API_BASE_URL", raising=False)
    monkeypatch.delenv("SCHOOL_ADMIN_DEBUG", raising=False)
    s = load_settings(write(tmp_path))
    assert s.app.name == "Test Console"
    assert s.api.base_url == "http://api.test"
    assert s.api.image_path == "/images/"
    assert s.ui.page_size("students") == 25
    assert s.ui.page_size("banners", 12) == 12
    assert s.ui.page_size("unknown") == 10
    assert not s.debug


def test_environment_overrides(tmp_path, monkeypatch):
    monkeypatch.setenv("SCHOOL_ADMIN_SETTINGS", str(write(tmp_path)))
    monkeypatch.setenv("SCHOOL_ADMIN_API_BASE_URL", "https://school.example.org/")
    monkeypatch.setenv("SCHOOL_ADMIN_DEBUG", "yes")
    s = load_settings()
    assert s.app.name == "Test Console"
    assert s.api.base_url == "https://school.example.org"
    assert s.debug


def test_configure_logging_level(tmp_path, monkeypatch):
    monkeypatch.delenv("SCHOOL_ADMIN_DEBUG", raising=False)
    calls = {}
    monkeypatch.setattr(logging, "basicConfig", lambda **kw: calls.update(kw))
    configure_logging(load_settings(write(tmp_path)))
    assert calls["level"] == logging.WARNING
