from __future__ import annotations

import os
import tempfile
from pathlib import Path

# Keep caches and preferences out of the package data directory.
_TMP_DIR = Path(tempfile.mkdtemp(prefix="cocktailbase-tests-"))
os.environ["CATALOG_CACHE_PATH"] = str(_TMP_DIR / "explore_catalog.json")
os.environ["PREFERENCES_PATH"] = str(_TMP_DIR / "preferences.json")
os.environ.pop("TEAM_OWNER_EMAIL", None)

import pytest  # noqa: E402

from cocktailbase.catalog.cache import clear_cache  # noqa: E402
from cocktailbase.catalog.data_store import reset_catalog  # noqa: E402
from cocktailbase.catalog.models import ExploreCocktail, Ingredient  # noqa: E402
from cocktailbase.preferences.config import DEFAULT_PREFERENCES_CONFIG  # noqa: E402
from cocktailbase.preferences.store import reset_preferences  # noqa: E402
from cocktailbase.recipes.store import clear_recipes  # noqa: E402
from cocktailbase.teams.store import clear_members  # noqa: E402


def _drink(drink_id: str, name: str, **fields) -> dict:
    drink = {
        "idDrink": drink_id,
        "strDrink": name,
        "strCategory": "Cocktail",
        "strAlcoholic": "Alcoholic",
        "strIBA": None,
        "strGlass": "Cocktail glass",
        "strTags": None,
        "strInstructions": "Shake with ice.\r\nStrain.",
        "strDrinkThumb": f"https://example.test/{drink_id}.jpg",
    }
    ingredients = fields.pop("ingredients", [])
    for index, (ingredient, measure) in enumerate(ingredients, start=1):
        drink[f"strIngredient{index}"] = ingredient
        drink[f"strMeasure{index}"] = measure
    for index in range(len(ingredients) + 1, 16):
        drink[f"strIngredient{index}"] = None
        drink[f"strMeasure{index}"] = None
    drink.update(fields)
    return drink


SAMPLE_DRINKS: list[dict] = [
    _drink(
        "11007", "Margarita",
        strIBA="Contemporary Classics",
        strTags="IBA,ContemporaryClassic",
        strGlass="Cocktail glass",
        ingredients=[("Tequila", "1 1/2 oz "), ("Triple sec", "1/2 oz "), ("Lime juice", "1 oz "), ("Salt", None)],
    ),
    _drink(
        "11001", "Old Fashioned",
        strIBA="Unforgettables",
        strTags="IBA,Classic,Alcoholic",
        strGlass="Old-fashioned glass",
        ingredients=[("Bourbon", "4.5 cL"), ("Angostura bitters", "2 dashes"), ("Sugar", "1 cube"), ("Water", "dash")],
    ),
    _drink(
        "12560", "Afterglow",
        strCategory="Cocktail",
        strAlcoholic="Non alcoholic",
        strGlass="Highball Glass",
        ingredients=[("Grenadine", "1 part"), ("Orange juice", "4 parts"), ("Pineapple juice", "4 parts")],
    ),
    _drink(
        "17222", "A1",
        strGlass="Cocktail glass",
        ingredients=[("Gin", "1 3/4 shot "), ("Grand Marnier", "1 Shot "), ("Lemon Juice", "1/4 Shot"), ("Grenadine", "1/8 Shot")],
    ),
    _drink("99999", "Broken Drink", strInstructions=None, ingredients=[("Gin", "1 oz")]),
]


@pytest.fixture(autouse=True)
def _isolated_state():
    reset_catalog()
    clear_cache()
    clear_recipes()
    clear_members()
    reset_preferences()
    DEFAULT_PREFERENCES_CONFIG.preferences_path.unlink(missing_ok=True)
    yield
    reset_catalog()
    clear_recipes()
    clear_members()
    reset_preferences()


@pytest.fixture
def sample_drinks() -> list[dict]:
    return [dict(d) for d in SAMPLE_DRINKS]


@pytest.fixture
def make_cocktail():
    def _make(
        cocktail_id: str = "1",
        name: str = "Test Cocktail",
        ingredients: list[str] | None = None,
        **fields,
    ) -> ExploreCocktail:
        return ExploreCocktail(
            id=cocktail_id,
            name=name,
            ingredients=[Ingredient(name=n, measure=None) for n in (ingredients or ["Water"])],
            **fields,
        )

    return _make
