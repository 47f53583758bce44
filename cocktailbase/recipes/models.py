from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, Field

from ..classification.cocktail_types import CocktailType


class SavedIngredient(BaseModel):
    name: str = Field(..., min_length=1)
    detail: str | None = None


class CocktailInput(BaseModel):
    name: str = Field(..., min_length=1, max_length=200)
    description: str | None = None
    recipe: str | None = None
    image_url: str | None = None
    cocktail_type: CocktailType | None = CocktailType.other
    ingredients: list[SavedIngredient] = Field(default_factory=list)


class SavedCocktail(CocktailInput):
    id: str
    created_at: datetime

    @property
    def ingredient_names(self) -> list[str]:
        return [i.name for i in self.ingredients]
