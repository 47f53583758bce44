"""
Explore ranking.

Each candidate that survives the filters gets a relevance score:

* ``popularity + 1.5 x ingredient matches + 1.2 x spirit matches + 1.3 type bonus``
  against the user profile,
* ``-5`` when the team already saved a cocktail with the same name,
* search boosts (``+3`` name prefix, else ``+1.5`` name substring; ``+1``
  when an ingredient contains the term),
* focus-mode adjustments (classics / adventurous),
* a stable per-id offset in ``[0, 0.8)`` so equal scores do not tie.

The sort key is the relevance for ``match``, the raw popularity for
``popular`` and the numeric id for ``recent``. A non-numeric id falls back
to relevance, which mixes two scales in one sort and is kept on purpose.
"""
from __future__ import annotations

import math
import re

import pandas as pd

from ..catalog.models import ExploreCocktail
from .filters import catalog_frame, filter_mask
from .models import FilterState, FocusMode, RankedCocktail, SortMode, UserProfile

INGREDIENT_MATCH_WEIGHT = 1.5
SPIRIT_MATCH_WEIGHT = 1.2
TYPE_BONUS = 1.3
OWNED_PENALTY = 5.0
TIE_BREAK_SPAN = 0.8

_CLASSIC_TAG_RE = re.compile(r"classic|iba|signature", re.IGNORECASE)


def pseudo_random_from_string(value: str) -> float:
    """Deterministic value in [0, 1) from a 32-bit rolling hash of ``value``.

    Hashes UTF-16 code units with ``h = h * 31 + c`` wrapped to a signed
    32-bit integer, so the same id always lands on the same offset.
    """
    h = 0
    data = value.encode("utf-16-le")
    for i in range(0, len(data), 2):
        code_unit = data[i] | (data[i + 1] << 8)
        h = ((h << 5) - h + code_unit) & 0xFFFFFFFF
    if h >= 0x80000000:
        h -= 0x100000000
    return (abs(h) % 1000) / 1000


def compute_relevance_score(
    cocktail: ExploreCocktail,
    profile: UserProfile,
    focus_mode: FocusMode = FocusMode.recommended,
    search_term: str = "",
) -> float:
    term = search_term.strip().lower()
    ingredient_matches = sum(
        1 for i in cocktail.ingredients if i.name.lower() in profile.top_ingredients
    )
    spirit_matches = sum(1 for s in cocktail.base_spirits if s in profile.favorite_spirits)
    type_bonus = TYPE_BONUS if cocktail.suggested_type in profile.top_types else 0

    score = (
        cocktail.popularity_score
        + ingredient_matches * INGREDIENT_MATCH_WEIGHT
        + spirit_matches * SPIRIT_MATCH_WEIGHT
        + type_bonus
    )

    name = cocktail.name.lower()
    if name in profile.owned_names:
        score -= OWNED_PENALTY

    if term:
        if name.startswith(term):
            score += 3
        elif term in name:
            score += 1.5
        if any(term in i.name.lower() for i in cocktail.ingredients):
            score += 1

    if focus_mode == FocusMode.classics:
        score += 3 if cocktail.iba else 0
        if any(_CLASSIC_TAG_RE.search(tag) for tag in cocktail.tags):
            score += 1
    elif focus_mode == FocusMode.adventurous:
        score += max(0, 3 - ingredient_matches)
        if not cocktail.base_spirits:
            score += 1

    score += pseudo_random_from_string(cocktail.id) * TIE_BREAK_SPAN
    return score


def compute_sort_value(cocktail: ExploreCocktail, sort_mode: SortMode, relevance: float) -> float:
    if sort_mode == SortMode.popular:
        return cocktail.popularity_score
    if sort_mode == SortMode.recent:
        try:
            numeric_id = float(cocktail.id)
        except ValueError:
            return relevance
        return relevance if math.isnan(numeric_id) else numeric_id
    return relevance


def _score_row(
    row: pd.Series,
    cocktails: list[ExploreCocktail],
    profile: UserProfile,
    filters: FilterState,
) -> float:
    cocktail = cocktails[int(row["position"])]
    return compute_relevance_score(cocktail, profile, filters.focus_mode, filters.normalized_search)


def rank_catalog(
    cocktails: list[ExploreCocktail],
    filters: FilterState,
    profile: UserProfile | None = None,
) -> list[RankedCocktail]:
    """Filter, score and sort ``cocktails``; highest sort value first.

    Filtering always runs before scoring, so a high score never rescues a
    cocktail that fails a filter. Equal sort values keep catalog order.
    """
    if not cocktails:
        return []
    profile = profile or UserProfile()

    frame = catalog_frame(cocktails)
    candidates = frame.loc[filter_mask(frame, filters)].copy()
    if candidates.empty:
        return []

    candidates["_relevance"] = candidates.apply(
        _score_row, axis=1, cocktails=cocktails, profile=profile, filters=filters,
    )
    candidates["_sort"] = [
        compute_sort_value(cocktails[int(p)], filters.sort_mode, r)
        for p, r in zip(candidates["position"], candidates["_relevance"])
    ]
    ordered = candidates.sort_values("_sort", ascending=False, kind="stable")

    ranked: list[RankedCocktail] = []
    for _, row in ordered.iterrows():
        cocktail = cocktails[int(row["position"])]
        ranked.append(RankedCocktail(
            cocktail=cocktail,
            relevance=round(float(row["_relevance"]), 4),
            sort_value=round(float(row["_sort"]), 4),
            already_saved=cocktail.name.lower() in profile.owned_names,
        ))
    return ranked
