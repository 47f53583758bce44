from __future__ import annotations

import json
import logging

from pydantic import ValidationError

from ..measurements.converter import MeasurementSystem, format_measurement
from .config import DEFAULT_PREFERENCES_CONFIG, PreferencesConfig
from .models import PreferencesUpdate, UserPreferences

logger = logging.getLogger(__name__)

_preferences: UserPreferences | None = None


def _load(config: PreferencesConfig) -> UserPreferences:
    path = config.preferences_path
    if not path.exists():
        return UserPreferences()
    try:
        return UserPreferences.model_validate(json.loads(path.read_text(encoding="utf-8")))
    except (OSError, ValueError, ValidationError):
        logger.warning("Unreadable preferences at %s, using defaults", path, exc_info=True)
        return UserPreferences()


def get_preferences(config: PreferencesConfig = DEFAULT_PREFERENCES_CONFIG) -> UserPreferences:
    """Return the stored preferences, reading the file on first call."""
    global _preferences
    if _preferences is None:
        _preferences = _load(config)
    return _preferences


def update_preferences(
    update: PreferencesUpdate,
    config: PreferencesConfig = DEFAULT_PREFERENCES_CONFIG,
) -> UserPreferences:
    """Apply the non-null fields of ``update`` and write the result to disk."""
    global _preferences
    current = get_preferences(config)
    changes = update.model_dump(exclude_none=True)
    updated = current.model_copy(update=changes)

    path = config.preferences_path
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(updated.model_dump_json(indent=2), encoding="utf-8")
    _preferences = updated
    logger.info("Saved preferences %s", changes)
    return _preferences


def format_for_user(
    raw: str | None,
    system: MeasurementSystem | None = None,
    config: PreferencesConfig = DEFAULT_PREFERENCES_CONFIG,
) -> str:
    """Format a measure in ``system``, or in the stored preference when omitted."""
    return format_measurement(raw, system or get_preferences(config).measurement_system)


def reset_preferences() -> None:
    """Forget the in-memory copy so the next read goes back to disk."""
    global _preferences
    _preferences = None
