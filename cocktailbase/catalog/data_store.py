from __future__ import annotations

import logging

from .cache import build_envelope, is_fresh, read_cached_catalog, write_cached_catalog
from .config import DEFAULT_CATALOG_CONFIG, CatalogConfig
from .ingest import run_ingestion
from .models import CachedCatalog, ExploreCocktail

logger = logging.getLogger(__name__)

_catalog: CachedCatalog | None = None


def get_catalog(
    bypass_cache: bool = False,
    config: CatalogConfig = DEFAULT_CATALOG_CONFIG,
) -> CachedCatalog:
    """Return the Explore catalog, loading it on first call.

    Order: in-memory copy, persisted envelope, fresh download. With
    ``bypass_cache`` both caches are skipped and the download replaces them.
    """
    global _catalog
    if not bypass_cache:
        if _catalog is not None and is_fresh(_catalog, config):
            return _catalog
        cached = read_cached_catalog(config)
        if cached is not None:
            _catalog = cached
            return _catalog

    logger.info("Downloading Explore catalog from %s", config.source)
    payload = run_ingestion(config)
    try:
        _catalog = write_cached_catalog(payload, config)
    except OSError:
        logger.warning(
            "Could not persist catalog cache at %s, keeping it in memory",
            config.cache_path, exc_info=True,
        )
        _catalog = build_envelope(payload, config)
    return _catalog


def get_cocktail(cocktail_id: str, config: CatalogConfig = DEFAULT_CATALOG_CONFIG) -> ExploreCocktail | None:
    for cocktail in get_catalog(config=config).cocktails:
        if cocktail.id == cocktail_id:
            return cocktail
    return None


def reset_catalog() -> None:
    global _catalog
    _catalog = None
