from __future__ import annotations

import logging
from datetime import datetime, timezone
from typing import Any

import requests

from ..classification.cocktail_types import map_category_to_cocktail_type
from ..classification.flavor import compute_popularity_score, derive_flavor_profile
from ..classification.spirits import detect_base_spirits
from .config import DEFAULT_CATALOG_CONFIG, CatalogConfig
from .models import ExploreCocktail, ExplorePayload, Ingredient

logger = logging.getLogger(__name__)

CocktailDbDrink = dict[str, Any]

MAX_INGREDIENT_SLOTS = 15


class CatalogFetchError(RuntimeError):
    """Raised when no letter bucket of the catalog could be downloaded."""


def fetch_by_letter(letter: str, config: CatalogConfig = DEFAULT_CATALOG_CONFIG) -> list[CocktailDbDrink]:
    response = requests.get(
        f"{config.api_base_url}/search.php",
        params={"f": letter},
        timeout=config.request_timeout,
    )
    response.raise_for_status()
    return response.json().get("drinks") or []


def _clean(value: Any) -> str | None:
    if value is None:
        return None
    text = str(value).strip()
    return text or None


def build_ingredients(drink: CocktailDbDrink) -> list[Ingredient]:
    items: list[Ingredient] = []
    for index in range(1, MAX_INGREDIENT_SLOTS + 1):
        name = drink.get(f"strIngredient{index}")
        if not name:
            continue
        measure = drink.get(f"strMeasure{index}")
        items.append(Ingredient(
            name=str(name).strip(),
            measure=str(measure).strip() if measure is not None else None,
        ))
    return items


def _split_tags(raw: str | None) -> list[str]:
    if not raw:
        return []
    return [tag.strip() for tag in raw.split(",") if tag.strip()]


def normalize_drink(drink: CocktailDbDrink) -> ExploreCocktail | None:
    """Map a raw API drink to an ``ExploreCocktail``; ``None`` if it is unusable."""
    name = _clean(drink.get("strDrink"))
    drink_id = _clean(drink.get("idDrink"))
    instructions = _clean(drink.get("strInstructions"))
    if not name or not drink_id or not instructions:
        return None

    ingredients = build_ingredients(drink)
    if not ingredients:
        return None

    tags = _split_tags(drink.get("strTags"))
    ingredient_names = [i.name for i in ingredients]
    category = drink.get("strCategory")
    glass = drink.get("strGlass")
    iba = drink.get("strIBA")

    description_parts = [
        part for part in (_clean(category), _clean(iba), _clean(drink.get("strAlcoholic"))) if part
    ]

    return ExploreCocktail(
        id=drink_id,
        name=name,
        category=category,
        alcoholic=drink.get("strAlcoholic"),
        iba=iba,
        glass=glass,
        tags=tags,
        description=" • ".join(description_parts),
        instructions=instructions.replace("\r\n", "\n"),
        image=drink.get("strDrinkThumb"),
        ingredients=ingredients,
        base_spirits=detect_base_spirits(ingredient_names),
        flavor_profile=derive_flavor_profile(tags, ingredient_names),
        popularity_score=compute_popularity_score(iba, len(tags), len(ingredients), glass),
        suggested_type=map_category_to_cocktail_type(category, drink.get("strDrink"), ingredient_names),
    )


def dedupe_and_sort(cocktails: list[ExploreCocktail]) -> list[ExploreCocktail]:
    """Drop duplicate ids (the later record wins) and order by popularity."""
    by_id: dict[str, ExploreCocktail] = {}
    for cocktail in cocktails:
        by_id[cocktail.id] = cocktail
    return sorted(by_id.values(), key=lambda c: c.popularity_score, reverse=True)


def run_ingestion(config: CatalogConfig = DEFAULT_CATALOG_CONFIG) -> ExplorePayload:
    """
    Download and normalise the full Explore catalog.

    Steps:
    - Fetch every letter bucket; a failing bucket is logged and skipped.
    - Normalise drinks, discarding incomplete records.
    - De-duplicate by id and sort by popularity, highest first.
    """
    drinks: list[CocktailDbDrink] = []
    failed: list[str] = []
    for letter in config.letter_buckets:
        try:
            drinks.extend(fetch_by_letter(letter, config))
        except (requests.RequestException, ValueError):
            logger.warning("CocktailDB request failed for letter %s", letter, exc_info=True)
            failed.append(letter)

    if config.letter_buckets and len(failed) == len(config.letter_buckets):
        raise CatalogFetchError(f"All {len(failed)} CocktailDB letter requests failed")

    parsed = [c for c in (normalize_drink(d) for d in drinks) if c is not None]
    cocktails = dedupe_and_sort(parsed)
    logger.info(
        "Ingested %d cocktails from %d drinks (%d buckets failed)",
        len(cocktails), len(drinks), len(failed),
    )

    return ExplorePayload(
        cocktails=cocktails,
        fetched_at=datetime.now(timezone.utc).isoformat(),
        source=config.source,
    )
