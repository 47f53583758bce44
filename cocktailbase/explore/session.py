from __future__ import annotations

import logging
import threading
from typing import Any, Callable

from ..catalog.models import ExploreCocktail
from .debounce import SEARCH_DEBOUNCE_SECONDS, Debouncer
from .filters import derive_filter_options
from .models import DerivedFilters, FilterState, RankedCocktail, UserProfile
from .ranking import rank_catalog

logger = logging.getLogger(__name__)


class ExploreSession:
    """Explore state for one user session.

    Results are recomputed whenever the catalog, the profile or a filter
    changes. Search text goes through a debouncer so a burst of keystrokes
    triggers a single recomputation with the last text typed.
    """

    def __init__(
        self,
        catalog: list[ExploreCocktail] | None = None,
        profile: UserProfile | None = None,
        filters: FilterState | None = None,
        debounce_seconds: float = SEARCH_DEBOUNCE_SECONDS,
        on_results: Callable[[list[RankedCocktail]], None] | None = None,
    ) -> None:
        self._lock = threading.RLock()
        self._catalog = list(catalog or [])
        self._profile = profile or UserProfile()
        self._filters = filters or FilterState()
        self._on_results = on_results
        self._search_debouncer = Debouncer(self._apply_search, debounce_seconds)
        self._derived = derive_filter_options(self._catalog)
        self._results: list[RankedCocktail] = []
        self.recompute()

    @property
    def filters(self) -> FilterState:
        with self._lock:
            return self._filters

    @property
    def results(self) -> list[RankedCocktail]:
        with self._lock:
            return self._results

    @property
    def derived_filters(self) -> DerivedFilters:
        with self._lock:
            return self._derived

    def recompute(self) -> list[RankedCocktail]:
        with self._lock:
            self._results = rank_catalog(self._catalog, self._filters, self._profile)
            results = self._results
            total = len(self._catalog)
        logger.debug("Explore recomputed: %d of %d cocktails", len(results), total)
        if self._on_results is not None:
            self._on_results(results)
        return results

    def set_catalog(self, catalog: list[ExploreCocktail]) -> None:
        with self._lock:
            self._catalog = list(catalog)
            self._derived = derive_filter_options(self._catalog)
        self.recompute()

    def set_profile(self, profile: UserProfile) -> None:
        with self._lock:
            self._profile = profile
        self.recompute()

    def update_filters(self, **changes: Any) -> None:
        """Apply filter changes other than search text and recompute immediately."""
        if "search" in changes:
            raise ValueError("use set_search() for search text")
        with self._lock:
            self._filters = FilterState.model_validate({**self._filters.model_dump(), **changes})
        self.recompute()

    def set_search(self, text: str) -> None:
        self._search_debouncer.submit(text)

    def flush_search(self) -> None:
        self._search_debouncer.flush()

    def clear_filters(self) -> None:
        self._search_debouncer.cancel()
        with self._lock:
            self._filters = self._filters.cleared()
        self.recompute()

    def _apply_search(self, text: str) -> None:
        with self._lock:
            self._filters = FilterState.model_validate({**self._filters.model_dump(), "search": text})
        self.recompute()
