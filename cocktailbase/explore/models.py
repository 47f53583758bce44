from __future__ import annotations

from enum import Enum

from pydantic import BaseModel, Field, model_validator

from ..catalog.models import ExploreCocktail
from ..classification.cocktail_types import CocktailType
from ..classification.spirits import BaseSpirit

DEFAULT_INGREDIENT_RANGE: tuple[int, int] = (1, 12)


class AlcoholFilter(str, Enum):
    all = "all"
    alcoholic = "alcoholic"
    non_alcoholic = "non_alcoholic"
    optional = "optional"


class FocusMode(str, Enum):
    recommended = "recommended"
    classics = "classics"
    adventurous = "adventurous"


class SortMode(str, Enum):
    match = "match"
    popular = "popular"
    recent = "recent"


class FilterState(BaseModel):
    search: str = Field(default="", max_length=200)
    alcohol_filter: AlcoholFilter = AlcoholFilter.all
    spirits: set[BaseSpirit] = Field(default_factory=set)
    categories: set[str] = Field(default_factory=set)
    glasses: set[str] = Field(default_factory=set)
    flavors: set[str] = Field(default_factory=set)
    ingredient_range: tuple[int, int] = DEFAULT_INGREDIENT_RANGE
    focus_mode: FocusMode = FocusMode.recommended
    sort_mode: SortMode = SortMode.match

    @model_validator(mode="after")
    def _check_range(self) -> FilterState:
        low, high = self.ingredient_range
        if low < 0 or high < low:
            raise ValueError("ingredient_range must be (min, max) with 0 <= min <= max")
        return self

    @property
    def normalized_search(self) -> str:
        return self.search.strip().lower()

    @property
    def filters_active(self) -> bool:
        """True when anything but the sort mode differs from the defaults."""
        return bool(
            self.normalized_search
            or self.spirits
            or self.categories
            or self.glasses
            or self.flavors
            or self.alcohol_filter != AlcoholFilter.all
            or self.focus_mode != FocusMode.recommended
            or self.ingredient_range != DEFAULT_INGREDIENT_RANGE
        )

    def cleared(self) -> FilterState:
        return FilterState()


class UserProfile(BaseModel):
    top_ingredients: set[str] = Field(default_factory=set)
    top_types: set[CocktailType] = Field(default_factory=set)
    favorite_spirits: set[BaseSpirit] = Field(default_factory=set)
    owned_names: set[str] = Field(default_factory=set)


class DerivedFilters(BaseModel):
    categories: list[str] = Field(default_factory=list)
    glasses: list[str] = Field(default_factory=list)
    flavors: list[str] = Field(default_factory=list)


class RankedCocktail(BaseModel):
    cocktail: ExploreCocktail
    relevance: float
    sort_value: float
    already_saved: bool = False


class ExploreResponse(BaseModel):
    cocktails: list[RankedCocktail]
    total_candidates: int
    total_catalog: int
    filters: FilterState
    filters_active: bool
    fetched_at: str | None = None
    source: str | None = None
