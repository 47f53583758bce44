from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path

from dotenv import load_dotenv

# Load .env from project root
load_dotenv(Path(__file__).resolve().parent.parent.parent / ".env")

_DATA_DIR = Path(__file__).resolve().parent.parent / "data"


@dataclass(frozen=True)
class PreferencesConfig:
    preferences_path: Path = Path(os.getenv("PREFERENCES_PATH", str(_DATA_DIR / "preferences.json")))


DEFAULT_PREFERENCES_CONFIG = PreferencesConfig()
