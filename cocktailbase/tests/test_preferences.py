from __future__ import annotations

import json

import pytest

from cocktailbase.measurements.converter import MeasurementSystem
from cocktailbase.preferences.config import PreferencesConfig
from cocktailbase.preferences.models import Language, PreferencesUpdate
from cocktailbase.preferences.store import (
    format_for_user,
    get_preferences,
    reset_preferences,
    update_preferences,
)


@pytest.fixture
def config(tmp_path) -> PreferencesConfig:
    return PreferencesConfig(preferences_path=tmp_path / "prefs" / "preferences.json")


def test_defaults_when_no_file(config):
    prefs = get_preferences(config)
    assert prefs.measurement_system == MeasurementSystem.metric
    assert prefs.language == Language.en


def test_update_persists(config):
    update_preferences(PreferencesUpdate(measurement_system=MeasurementSystem.imperial), config)
    reset_preferences()

    prefs = get_preferences(config)

    assert prefs.measurement_system == MeasurementSystem.imperial
    assert prefs.language == Language.en
    stored = json.loads(config.preferences_path.read_text(encoding="utf-8"))
    assert stored == {"measurement_system": "imperial", "language": "en"}


def test_partial_update_keeps_other_fields(config):
    update_preferences(PreferencesUpdate(language=Language.nl), config)
    prefs = update_preferences(PreferencesUpdate(measurement_system=MeasurementSystem.imperial), config)
    assert prefs.language == Language.nl


def test_unreadable_file_falls_back_to_defaults(config):
    config.preferences_path.parent.mkdir(parents=True)
    config.preferences_path.write_text('{"measurement_system": "furlongs"}', encoding="utf-8")

    assert get_preferences(config).measurement_system == MeasurementSystem.metric


def test_format_for_user_follows_preference(config):
    assert format_for_user("1 oz", config=config) == "29.6 ml"

    update_preferences(PreferencesUpdate(measurement_system=MeasurementSystem.imperial), config)

    assert format_for_user("45 ml", config=config) == "1.52 oz"
    assert format_for_user("45 ml", MeasurementSystem.metric, config) == "45 ml"
    assert format_for_user(None, config=config) == ""


def test_failed_write_keeps_previous_preferences(tmp_path):
    blocker = tmp_path / "blocker"
    blocker.write_text("", encoding="utf-8")
    config = PreferencesConfig(preferences_path=blocker / "preferences.json")

    with pytest.raises(OSError):
        update_preferences(PreferencesUpdate(measurement_system=MeasurementSystem.imperial), config)

    assert get_preferences(config).measurement_system == MeasurementSystem.metric
