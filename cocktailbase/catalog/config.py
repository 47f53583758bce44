from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path

from dotenv import load_dotenv

# Load .env from project root
load_dotenv(Path(__file__).resolve().parent.parent.parent / ".env")

_DATA_DIR = Path(__file__).resolve().parent.parent / "data"

LETTER_BUCKETS: tuple[str, ...] = ("a", "b", "c", "d", "e", "f", "g", "m", "n", "o", "p", "r", "s", "t")


@dataclass(frozen=True)
class CatalogConfig:
    """
    Configuration for the Explore catalog download and cache.

    Bump ``cache_version`` whenever classification logic changes so that
    catalogs persisted with the old derived fields are discarded.
    """

    api_base_url: str = os.getenv("COCKTAILDB_API_URL", "https://www.thecocktaildb.com/api/json/v1/1")
    letter_buckets: tuple[str, ...] = LETTER_BUCKETS
    request_timeout: float = 10.0
    cache_path: Path = Path(os.getenv("CATALOG_CACHE_PATH", str(_DATA_DIR / "explore_catalog.json")))
    cache_ttl_seconds: int = 60 * 60 * 4
    cache_version: int = 2
    source: str = "TheCocktailDB"

    @property
    def cache_ttl_ms(self) -> int:
        return self.cache_ttl_seconds * 1000


DEFAULT_CATALOG_CONFIG = CatalogConfig()
