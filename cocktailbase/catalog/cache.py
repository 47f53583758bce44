"""
Persisted Explore catalog cache.

The catalog is written to disk as a ``CachedCatalog`` envelope. A read is
either a full hit or a full miss: a missing file, broken JSON, a schema
mismatch, another ``version`` or an envelope older than the TTL all count
as a miss and the caller falls through to a fresh download.
"""
from __future__ import annotations

import json
import logging
import time

from pydantic import ValidationError

from .config import DEFAULT_CATALOG_CONFIG, CatalogConfig
from .models import CachedCatalog, ExplorePayload

logger = logging.getLogger(__name__)

_hits: int = 0
_misses: int = 0


def _now_ms() -> int:
    return int(time.time() * 1000)


def is_fresh(envelope: CachedCatalog, config: CatalogConfig = DEFAULT_CATALOG_CONFIG, now_ms: int | None = None) -> bool:
    if not envelope.stored_at:
        return False
    if envelope.version != config.cache_version:
        return False
    now = _now_ms() if now_ms is None else now_ms
    return now - envelope.stored_at <= config.cache_ttl_ms


def _read_envelope(config: CatalogConfig) -> CachedCatalog | None:
    path = config.cache_path
    if not path.exists():
        return None
    try:
        return CachedCatalog.model_validate(json.loads(path.read_text(encoding="utf-8")))
    except (OSError, ValueError, ValidationError):
        logger.warning("Ignoring unreadable catalog cache at %s", path, exc_info=True)
        return None


def read_cached_catalog(
    config: CatalogConfig = DEFAULT_CATALOG_CONFIG,
    now_ms: int | None = None,
) -> CachedCatalog | None:
    global _hits, _misses
    envelope = _read_envelope(config)
    if envelope is not None and is_fresh(envelope, config, now_ms):
        _hits += 1
        return envelope
    _misses += 1
    return None


def build_envelope(
    payload: ExplorePayload,
    config: CatalogConfig = DEFAULT_CATALOG_CONFIG,
    now_ms: int | None = None,
) -> CachedCatalog:
    return CachedCatalog(
        **payload.model_dump(include={"cocktails", "fetched_at", "source"}),
        stored_at=_now_ms() if now_ms is None else now_ms,
        version=config.cache_version,
    )


def write_cached_catalog(
    payload: ExplorePayload,
    config: CatalogConfig = DEFAULT_CATALOG_CONFIG,
    now_ms: int | None = None,
) -> CachedCatalog:
    """Persist ``payload``; raises ``OSError`` when the file cannot be written."""
    envelope = build_envelope(payload, config, now_ms)
    path = config.cache_path
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(envelope.model_dump_json(), encoding="utf-8")
    logger.info("Stored %d cocktails in catalog cache %s", len(envelope.cocktails), path)
    return envelope


def get_cache_stats() -> dict:
    total = _hits + _misses
    return {
        "hits": _hits,
        "misses": _misses,
        "hit_rate": round(_hits / total * 100, 1) if total > 0 else 0.0,
    }


def clear_cache(config: CatalogConfig = DEFAULT_CATALOG_CONFIG) -> None:
    global _hits, _misses
    config.cache_path.unlink(missing_ok=True)
    _hits = 0
    _misses = 0
