import pytest
from pydantic import ValidationError

from docmapper import MapperSettings
from docmapper.core.config import load_settings


def test_defaults():
    s = load_settings()
    assert s.temp_id_prefix == "@"
    assert s.metrics_enabled is True


def test_from_env(monkeypatch):
    monkeypatch.setenv("DOCMAPPER_TEMP_ID_PREFIX", "tmp-")
    monkeypatch.setenv("DOCMAPPER_METRICS_ENABLED", "false")

    s = MapperSettings.from_env()
    assert s.temp_id_prefix == "tmp-"
    assert s.metrics_enabled is False


def test_empty_prefix_is_rejected():
    with pytest.raises(ValidationError):
        MapperSettings(temp_id_prefix="")
