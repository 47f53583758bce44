from __future__ import annotations

import json
from unittest.mock import patch

import pytest

from cocktailbase.catalog import data_store
from cocktailbase.catalog.cache import (
    clear_cache,
    get_cache_stats,
    is_fresh,
    read_cached_catalog,
    write_cached_catalog,
)
from cocktailbase.catalog.config import CatalogConfig
from cocktailbase.catalog.ingest import CatalogFetchError, normalize_drink
from cocktailbase.catalog.models import CachedCatalog, ExplorePayload

NOW_MS = 1_700_000_000_000


@pytest.fixture
def config(tmp_path) -> CatalogConfig:
    return CatalogConfig(cache_path=tmp_path / "cache" / "catalog.json")


@pytest.fixture
def payload(sample_drinks) -> ExplorePayload:
    cocktails = [normalize_drink(d) for d in sample_drinks[:3]]
    return ExplorePayload(cocktails=cocktails, fetched_at="2024-01-01T00:00:00+00:00", source="TheCocktailDB")


class TestEnvelope:
    def test_write_then_read_is_a_hit(self, config, payload):
        write_cached_catalog(payload, config, now_ms=NOW_MS)

        cached = read_cached_catalog(config, now_ms=NOW_MS + 1000)

        assert cached is not None
        assert cached.version == config.cache_version
        assert cached.stored_at == NOW_MS
        assert [c.id for c in cached.cocktails] == [c.id for c in payload.cocktails]
        assert get_cache_stats()["hits"] == 1

    def test_envelope_fields_on_disk(self, config, payload):
        write_cached_catalog(payload, config, now_ms=NOW_MS)
        raw = json.loads(config.cache_path.read_text(encoding="utf-8"))
        assert set(raw) == {"cocktails", "fetched_at", "source", "stored_at", "version"}

    def test_missing_file_is_a_miss(self, config):
        assert read_cached_catalog(config) is None
        assert get_cache_stats() == {"hits": 0, "misses": 1, "hit_rate": 0.0}

    def test_expired_envelope_is_a_miss(self, config, payload):
        write_cached_catalog(payload, config, now_ms=NOW_MS)
        assert read_cached_catalog(config, now_ms=NOW_MS + config.cache_ttl_ms + 1) is None

    def test_envelope_at_ttl_is_still_fresh(self, config, payload):
        write_cached_catalog(payload, config, now_ms=NOW_MS)
        assert read_cached_catalog(config, now_ms=NOW_MS + config.cache_ttl_ms) is not None

    def test_old_version_is_a_miss_even_when_fresh(self, config, payload):
        write_cached_catalog(payload, config, now_ms=NOW_MS)
        raw = json.loads(config.cache_path.read_text(encoding="utf-8"))
        raw["version"] = config.cache_version - 1
        config.cache_path.write_text(json.dumps(raw), encoding="utf-8")

        assert read_cached_catalog(config, now_ms=NOW_MS) is None

    def test_corrupt_file_is_a_miss(self, config):
        config.cache_path.parent.mkdir(parents=True)
        config.cache_path.write_text("{not json", encoding="utf-8")
        assert read_cached_catalog(config) is None

    def test_missing_stored_at_is_not_fresh(self, config, payload):
        envelope = CachedCatalog(**payload.model_dump(), version=config.cache_version)
        assert is_fresh(envelope, config, now_ms=NOW_MS) is False

    def test_hit_rate(self, config, payload):
        read_cached_catalog(config)
        write_cached_catalog(payload, config)
        read_cached_catalog(config)
        read_cached_catalog(config)
        assert get_cache_stats() == {"hits": 2, "misses": 1, "hit_rate": 66.7}

    def test_clear_cache_removes_file_and_counters(self, config, payload):
        write_cached_catalog(payload, config)
        read_cached_catalog(config)

        clear_cache(config)

        assert not config.cache_path.exists()
        assert get_cache_stats()["hits"] == 0


class TestGetCatalog:
    @patch("cocktailbase.catalog.data_store.run_ingestion")
    def test_downloads_once_then_serves_memory(self, mock_ingest, config, payload):
        mock_ingest.return_value = payload

        first = data_store.get_catalog(config=config)
        second = data_store.get_catalog(config=config)

        assert mock_ingest.call_count == 1
        assert first is second
        assert config.cache_path.exists()

    @patch("cocktailbase.catalog.data_store.run_ingestion")
    def test_uses_persisted_envelope(self, mock_ingest, config, payload):
        write_cached_catalog(payload, config)

        catalog = data_store.get_catalog(config=config)

        mock_ingest.assert_not_called()
        assert len(catalog.cocktails) == 3

    @patch("cocktailbase.catalog.data_store.run_ingestion")
    def test_bypass_cache_downloads_again(self, mock_ingest, config, payload):
        mock_ingest.return_value = payload
        data_store.get_catalog(config=config)

        data_store.get_catalog(bypass_cache=True, config=config)

        assert mock_ingest.call_count == 2

    @patch("cocktailbase.catalog.data_store.run_ingestion")
    def test_fetch_error_propagates(self, mock_ingest, config):
        mock_ingest.side_effect = CatalogFetchError("offline")
        with pytest.raises(CatalogFetchError):
            data_store.get_catalog(config=config)

    @patch("cocktailbase.catalog.data_store.run_ingestion")
    def test_get_cocktail(self, mock_ingest, config, payload):
        mock_ingest.return_value = payload

        assert data_store.get_cocktail("11007", config=config).name == "Margarita"
        assert data_store.get_cocktail("nope", config=config) is None

    @patch("cocktailbase.catalog.data_store.run_ingestion")
    def test_unwritable_cache_keeps_download_in_memory(self, mock_ingest, tmp_path, payload):
        blocker = tmp_path / "blocker"
        blocker.write_text("", encoding="utf-8")
        config = CatalogConfig(cache_path=blocker / "catalog.json")
        mock_ingest.return_value = payload

        catalog = data_store.get_catalog(config=config)

        assert [c.id for c in catalog.cocktails] == [c.id for c in payload.cocktails]
        assert catalog.version == config.cache_version
        assert catalog.stored_at is not None
        assert data_store.get_catalog(config=config) is catalog
        assert mock_ingest.call_count == 1
