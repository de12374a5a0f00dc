import pytest

from healthcounters.config import settings
from healthcounters.api.app import app


@pytest.fixture
def static_dir(tmp_path, monkeypatch):
    """Empty static dir holding only a copy of the real script, so /avatar starts with nothing to find."""
    d = tmp_path / "static"
    d.mkdir()
    (d / "script.js").write_text((settings.PROJECT_ROOT / "static" / "script.js").read_text(encoding="utf-8"),
                                 encoding="utf-8")
    monkeypatch.setattr(settings, "STATIC_DIR", str(d))
    return d


@pytest.fixture
def client(static_dir, monkeypatch):
    monkeypatch.setattr(settings, "PERSON_NAME", "Jan Kowalski")
    monkeypatch.setattr(settings, "HEALTHY_START_DATE", "2024-01-01")
    monkeypatch.setattr(settings, "DOCTOR_START_DATE", "2024-01-15")
    monkeypatch.setattr(settings, "IS_HEALTHY", True)
    monkeypatch.setattr(settings, "TEMPLATE_DIR", str(settings.PROJECT_ROOT / "templates"))
    app.config["TESTING"] = True
    with app.test_client() as c:
        yield c
