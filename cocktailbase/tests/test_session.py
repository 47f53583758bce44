from __future__ import annotations

import threading

import pytest

from cocktailbase.classification.spirits import BaseSpirit
from cocktailbase.explore.debounce import Debouncer
from cocktailbase.explore.models import FilterState, SortMode, UserProfile
from cocktailbase.explore.session import ExploreSession


@pytest.fixture
def catalog(make_cocktail):
    return [
        make_cocktail("1", "Gimlet", ["Gin", "Lime"], base_spirits=[BaseSpirit.gin], popularity_score=6,
                      category="Cocktail", glass="Coupe"),
        make_cocktail("2", "Daiquiri", ["Rum", "Lime", "Sugar"], base_spirits=[BaseSpirit.rum], popularity_score=8,
                      category="Ordinary Drink", glass="Coupe"),
        make_cocktail("3", "Shirley Temple", ["Ginger ale", "Grenadine"], popularity_score=5,
                      category="Soft Drink", glass="Highball glass"),
    ]


class TestDebouncer:
    def test_flush_delivers_last_value_once(self):
        received = []
        debouncer = Debouncer(received.append, delay=60)

        for text in ("g", "gi", "gin"):
            debouncer.submit(text)
        assert debouncer.pending is True
        debouncer.flush()
        debouncer.flush()

        assert received == ["gin"]
        assert debouncer.pending is False

    def test_cancel_drops_pending_value(self):
        received = []
        debouncer = Debouncer(received.append, delay=60)
        debouncer.submit("x")
        debouncer.cancel()
        debouncer.flush()
        assert received == []

    def test_fires_after_quiet_period(self):
        fired = threading.Event()
        received = []

        def callback(value):
            received.append(value)
            fired.set()

        debouncer = Debouncer(callback, delay=0.2)
        debouncer.submit("a")
        debouncer.submit("ab")

        assert fired.wait(timeout=5)
        assert received == ["ab"]


class TestExploreSession:
    def test_initial_results(self, catalog):
        session = ExploreSession(catalog)
        assert [r.cocktail.name for r in session.results] == ["Daiquiri", "Gimlet", "Shirley Temple"]
        assert session.derived_filters.glasses == ["Coupe", "Highball glass"]

    def test_update_filters_recomputes_immediately(self, catalog):
        session = ExploreSession(catalog)
        session.update_filters(glasses={"Coupe"}, sort_mode=SortMode.popular)

        assert [r.cocktail.name for r in session.results] == ["Daiquiri", "Gimlet"]
        assert session.filters.sort_mode == SortMode.popular

    def test_update_filters_rejects_search(self, catalog):
        session = ExploreSession(catalog)
        with pytest.raises(ValueError):
            session.update_filters(search="gin")

    def test_invalid_update_keeps_previous_filters(self, catalog):
        session = ExploreSession(catalog)
        with pytest.raises(ValueError):
            session.update_filters(ingredient_range=(4, 1))
        assert session.filters == FilterState()

    def test_search_is_debounced(self, catalog):
        calls = []
        session = ExploreSession(catalog, debounce_seconds=60, on_results=calls.append)
        calls.clear()

        session.set_search("g")
        session.set_search("gi")
        session.set_search("gimlet")
        assert calls == []
        assert session.filters.search == ""

        session.flush_search()

        assert len(calls) == 1
        assert session.filters.search == "gimlet"
        assert [r.cocktail.name for r in session.results] == ["Gimlet"]

    def test_clear_filters_drops_pending_search(self, catalog):
        session = ExploreSession(catalog, debounce_seconds=60, filters=FilterState(glasses={"Coupe"}))
        session.set_search("rum")

        session.clear_filters()
        session.flush_search()

        assert session.filters == FilterState()
        assert len(session.results) == 3

    def test_profile_change_reorders(self, catalog):
        session = ExploreSession(catalog)
        session.set_profile(UserProfile(favorite_spirits={BaseSpirit.gin}, top_ingredients={"gin", "lime"}))
        assert session.results[0].cocktail.name == "Gimlet"

    def test_state_reads_wait_for_recompute(self, catalog):
        session = ExploreSession(catalog)
        holding = threading.Event()
        release = threading.Event()
        read_done = threading.Event()
        snapshot = []

        def hold_lock():
            with session._lock:
                holding.set()
                release.wait(timeout=5)

        def read_state():
            snapshot.extend([session.results, session.filters])
            read_done.set()

        holder = threading.Thread(target=hold_lock)
        holder.start()
        assert holding.wait(timeout=5)
        reader = threading.Thread(target=read_state)
        reader.start()

        assert not read_done.wait(timeout=0.1)
        release.set()
        assert read_done.wait(timeout=5)
        holder.join()
        reader.join()
        assert snapshot[1] == FilterState()

    def test_set_catalog_updates_options(self, catalog):
        session = ExploreSession([])
        assert session.results == []

        session.set_catalog(catalog)

        assert len(session.results) == 3
        assert session.derived_filters.categories == ["Cocktail", "Ordinary Drink", "Soft Drink"]
