from __future__ import annotations

import pandas as pd

from ..catalog.models import ExploreCocktail
from .models import AlcoholFilter, DerivedFilters, FilterState


def _search_fields(cocktail: ExploreCocktail) -> list[str]:
    fields = [
        cocktail.name,
        cocktail.description or "",
        cocktail.instructions,
        cocktail.category or "",
        cocktail.glass or "",
        *cocktail.tags,
        *cocktail.ingredient_names,
    ]
    return [f.lower() for f in fields]


def matches_search(cocktail: ExploreCocktail, term: str) -> bool:
    """Case-insensitive substring match over every descriptive field."""
    needle = term.strip().lower()
    return any(needle in field for field in _search_fields(cocktail))


def catalog_frame(cocktails: list[ExploreCocktail]) -> pd.DataFrame:
    """One row per cocktail with the columns the filters need.

    ``position`` points back into ``cocktails``.
    """
    return pd.DataFrame({
        "position": range(len(cocktails)),
        "alcoholic_lower": [(c.alcoholic or "").lower() for c in cocktails],
        "ingredient_count": [len(c.ingredients) for c in cocktails],
        "category": [c.category for c in cocktails],
        "glass": [c.glass for c in cocktails],
        "base_spirits": [list(c.base_spirits) for c in cocktails],
        "flavor_profile": [list(c.flavor_profile) for c in cocktails],
        "search_fields": [_search_fields(c) for c in cocktails],
    })


def filter_mask(frame: pd.DataFrame, filters: FilterState) -> pd.Series:
    """Boolean mask of rows passing every active filter."""
    mask = pd.Series(True, index=frame.index)

    alcohol = frame["alcoholic_lower"]
    if filters.alcohol_filter == AlcoholFilter.alcoholic:
        mask &= alcohol == "alcoholic"
    elif filters.alcohol_filter == AlcoholFilter.non_alcoholic:
        mask &= alcohol.str.contains("non", regex=False)
    elif filters.alcohol_filter == AlcoholFilter.optional:
        mask &= alcohol.str.contains("optional", regex=False)

    low, high = filters.ingredient_range
    mask &= frame["ingredient_count"].between(low, high)

    if filters.spirits:
        wanted = set(filters.spirits)
        mask &= frame["base_spirits"].apply(lambda spirits: bool(wanted & set(spirits)))

    if filters.categories:
        mask &= frame["category"].isin(filters.categories)

    if filters.glasses:
        mask &= frame["glass"].isin(filters.glasses)

    if filters.flavors:
        wanted_flavors = set(filters.flavors)
        mask &= frame["flavor_profile"].apply(lambda profile: bool(wanted_flavors & set(profile)))

    term = filters.normalized_search
    if term:
        mask &= frame["search_fields"].apply(lambda fields: any(term in f for f in fields))

    return mask.astype(bool)


def filter_catalog(cocktails: list[ExploreCocktail], filters: FilterState) -> list[ExploreCocktail]:
    if not cocktails:
        return []
    frame = catalog_frame(cocktails)
    kept = frame.loc[filter_mask(frame, filters), "position"]
    return [cocktails[int(p)] for p in kept]


def derive_filter_options(cocktails: list[ExploreCocktail]) -> DerivedFilters:
    """Distinct categories, glasses and flavor labels present in the catalog."""
    categories: set[str] = set()
    glasses: set[str] = set()
    flavors: set[str] = set()
    for cocktail in cocktails:
        if cocktail.category:
            categories.add(cocktail.category)
        if cocktail.glass:
            glasses.add(cocktail.glass)
        flavors.update(cocktail.flavor_profile)
    return DerivedFilters(
        categories=sorted(categories),
        glasses=sorted(glasses),
        flavors=sorted(flavors),
    )
