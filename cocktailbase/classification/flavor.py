from __future__ import annotations

import re

DEFAULT_FLAVOR = "Signature"

# Output order follows this table.
FLAVOR_RULES: tuple[tuple[str, re.Pattern[str]], ...] = (
    ("Fruity", re.compile(r"(juice|syrup|grenadine|puree|fruit)", re.IGNORECASE)),
    ("Refreshing", re.compile(r"(mint|soda|tonic|lime|lemon)", re.IGNORECASE)),
    ("Creamy", re.compile(r"(cream|milk|coconut cream|irish cream|yoghurt)", re.IGNORECASE)),
    ("Herbal", re.compile(r"(vermouth|chartreuse|basil|sage|thyme|rosemary)", re.IGNORECASE)),
    ("Spicy", re.compile(r"(spice|ginger|pepper|tabasco|cinnamon|nutmeg)", re.IGNORECASE)),
    ("Bubbly", re.compile(r"(champagne|prosecco|soda|sparkling)", re.IGNORECASE)),
    ("Dessert", re.compile(r"(chocolate|coffee|cream|vanilla|cacao)", re.IGNORECASE)),
    ("Smoky", re.compile(r"(mezcal|scotch|islay|peated)", re.IGNORECASE)),
    ("Tropical", re.compile(r"(coconut|pineapple|passion|mango)", re.IGNORECASE)),
)

FLAVOR_OPTIONS: list[str] = [label for label, _ in FLAVOR_RULES] + [DEFAULT_FLAVOR]


def derive_flavor_profile(tags: list[str], ingredient_names: list[str]) -> list[str]:
    """Return the flavor labels matched by any tag or ingredient name.

    Never empty: a drink nothing matches is tagged ``"Signature"``.
    """
    combined = [t.lower() for t in tags] + [n.lower() for n in ingredient_names]

    matched = [
        label
        for label, pattern in FLAVOR_RULES
        if any(pattern.search(value) for value in combined)
    ]
    return matched or [DEFAULT_FLAVOR]


def compute_popularity_score(
    iba: str | None,
    tag_count: int,
    ingredient_count: int,
    glass: str | None,
) -> float:
    """Heuristic popularity from metadata richness.

    ``4 + 3 (IBA official) + 0.4/tag + 0.3/ingredient (max 8) + 0.4 (coupe glass)``
    """
    score = 4.0
    if iba:
        score += 3
    score += tag_count * 0.4
    score += min(ingredient_count, 8) * 0.3
    if glass and "coupe" in glass.lower():
        score += 0.4
    return score
