from __future__ import annotations

from enum import Enum

from pydantic import BaseModel

from ..measurements.converter import MeasurementSystem


class Language(str, Enum):
    en = "en"
    nl = "nl"


class UserPreferences(BaseModel):
    measurement_system: MeasurementSystem = MeasurementSystem.metric
    language: Language = Language.en


class PreferencesUpdate(BaseModel):
    measurement_system: MeasurementSystem | None = None
    language: Language | None = None
