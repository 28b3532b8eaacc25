"""Tests for caravan.config module."""

import pytest
from pydantic import ValidationError

from caravan.config import CaravanSettings


def test_defaults(monkeypatch):
    for name in ("CARAVAN_TABLE_MAX_WIDTH", "CARAVAN_LOG_LEVEL", "CARAVAN_COLOR", "CARAVAN_MAX_EXIT_STATUS"):
        monkeypatch.delenv(name, raising=False)

    settings = CaravanSettings()

    assert settings.table_max_width == 300
    assert settings.log_level == "WARNING"
    assert settings.color is True
    assert settings.max_exit_status == 255


def test_loads_from_environment(monkeypatch):
    monkeypatch.setenv("CARAVAN_TABLE_MAX_WIDTH", "120")
    monkeypatch.setenv("CARAVAN_LOG_LEVEL", "DEBUG")
    monkeypatch.setenv("CARAVAN_COLOR", "false")

    settings = CaravanSettings()

    assert settings.table_max_width == 120
    assert settings.log_level == "DEBUG"
    assert settings.color is False


def test_explicit_values_override_environment(monkeypatch):
    monkeypatch.setenv("CARAVAN_TABLE_MAX_WIDTH", "120")

    assert CaravanSettings(table_max_width=80).table_max_width == 80


@pytest.mark.parametrize(
    "kwargs",
    [
        {"table_max_width": 0},
        {"max_exit_status": 0},
        {"max_exit_status": 256},
        {"log_level": "TRACE"},
    ],
)
def test_rejects_invalid_values(kwargs):
    with pytest.raises(ValidationError):
        CaravanSettings(**kwargs)
