from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path

from dotenv import load_dotenv

# Load .env from project root
load_dotenv(Path(__file__).resolve().parent.parent.parent / ".env")


@dataclass(frozen=True)
class TeamConfig:
    # Stands in for the signed-in user; added as admin when missing.
    owner_email: str | None = os.getenv("TEAM_OWNER_EMAIL") or None


DEFAULT_TEAM_CONFIG = TeamConfig()
