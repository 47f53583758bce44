from __future__ import annotations

from collections import Counter

from ..classification.cocktail_types import CocktailType
from ..classification.spirits import BaseSpirit, detect_base_spirits
from ..recipes.models import SavedCocktail
from .models import UserProfile

TOP_INGREDIENTS = 8
TOP_TYPES = 4
TOP_SPIRITS = 5


def build_user_profile(saved: list[SavedCocktail]) -> UserProfile:
    """Aggregate the team's saved recipes into ranking preferences.

    Ties in frequency keep the order in which values were first seen.
    """
    ingredient_counts: Counter[str] = Counter()
    type_counts: Counter[CocktailType] = Counter()
    spirit_counts: Counter[BaseSpirit] = Counter()
    owned_names: set[str] = set()

    for recipe in saved:
        owned_names.add(recipe.name.lower())
        names = [n for n in recipe.ingredient_names if n]
        for name in names:
            ingredient_counts[name.lower()] += 1
        for spirit in detect_base_spirits(names):
            spirit_counts[spirit] += 1
        if recipe.cocktail_type:
            type_counts[recipe.cocktail_type] += 1

    return UserProfile(
        top_ingredients={n for n, _ in ingredient_counts.most_common(TOP_INGREDIENTS)},
        top_types={t for t, _ in type_counts.most_common(TOP_TYPES)},
        favorite_spirits={s for s, _ in spirit_counts.most_common(TOP_SPIRITS)},
        owned_names=owned_names,
    )
