from __future__ import annotations

import uuid
from datetime import datetime, timezone

from ..catalog.models import ExploreCocktail
from .models import CocktailInput, SavedCocktail, SavedIngredient

_recipes: dict[str, SavedCocktail] = {}


class RecipeNotFoundError(KeyError):
    """No saved cocktail with the requested id."""


class DuplicateRecipeError(ValueError):
    """A saved cocktail with the same name (case-insensitive) already exists."""


def _sort_key(recipe: SavedCocktail) -> tuple:
    # Typed recipes first, grouped by type, then alphabetical.
    if recipe.cocktail_type is None:
        return (1, "", recipe.name.lower())
    return (0, recipe.cocktail_type.value, recipe.name.lower())


def get_recipes() -> list[SavedCocktail]:
    return sorted(_recipes.values(), key=_sort_key)


def get_recipe(recipe_id: str) -> SavedCocktail:
    try:
        return _recipes[recipe_id]
    except KeyError:
        raise RecipeNotFoundError(recipe_id) from None


def owned_names() -> set[str]:
    return {r.name.lower() for r in _recipes.values()}


def create_recipe(data: CocktailInput) -> SavedCocktail:
    recipe = SavedCocktail(
        **data.model_dump(),
        id=uuid.uuid4().hex,
        created_at=datetime.now(timezone.utc),
    )
    _recipes[recipe.id] = recipe
    return recipe


def update_recipe(recipe_id: str, data: CocktailInput) -> SavedCocktail:
    existing = get_recipe(recipe_id)
    updated = SavedCocktail(**data.model_dump(), id=existing.id, created_at=existing.created_at)
    _recipes[recipe_id] = updated
    return updated


def delete_recipe(recipe_id: str) -> None:
    get_recipe(recipe_id)
    del _recipes[recipe_id]


def search_recipes(term: str) -> list[SavedCocktail]:
    """Match on name, description or any ingredient name; blank term returns all."""
    needle = term.strip().lower()
    if not needle:
        return get_recipes()
    return [
        r for r in get_recipes()
        if needle in r.name.lower()
        or needle in (r.description or "").lower()
        or any(needle in name.lower() for name in r.ingredient_names)
    ]


def save_from_explore(cocktail: ExploreCocktail) -> SavedCocktail:
    """Copy an Explore cocktail into the saved recipes."""
    if cocktail.name.lower() in owned_names():
        raise DuplicateRecipeError(cocktail.name)

    return create_recipe(CocktailInput(
        name=cocktail.name,
        description=cocktail.description or None,
        recipe=cocktail.instructions,
        image_url=cocktail.image,
        cocktail_type=cocktail.suggested_type,
        ingredients=[
            SavedIngredient(name=i.name.strip(), detail=i.measure)
            for i in cocktail.ingredients
            if i.name.strip()
        ],
    ))


def clear_recipes() -> None:
    _recipes.clear()
