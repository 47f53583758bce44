from __future__ import annotations

from pydantic import BaseModel, Field

from ..classification.cocktail_types import CocktailType
from ..classification.spirits import BaseSpirit


class Ingredient(BaseModel):
    name: str
    measure: str | None = None


class ExploreCocktail(BaseModel):
    id: str
    name: str
    category: str | None = None
    alcoholic: str | None = None
    iba: str | None = None
    glass: str | None = None
    tags: list[str] = Field(default_factory=list)
    description: str = ""
    instructions: str = ""
    image: str | None = None
    ingredients: list[Ingredient] = Field(..., min_length=1)
    base_spirits: list[BaseSpirit] = Field(default_factory=list)
    flavor_profile: list[str] = Field(default_factory=list)
    popularity_score: float = 0.0
    suggested_type: CocktailType = CocktailType.other

    @property
    def ingredient_names(self) -> list[str]:
        return [i.name for i in self.ingredients]


class ExplorePayload(BaseModel):
    cocktails: list[ExploreCocktail]
    fetched_at: str = Field(..., description="ISO-8601 timestamp of the download")
    source: str


class CachedCatalog(ExplorePayload):
    stored_at: int | None = Field(default=None, description="Epoch milliseconds when persisted")
    version: int | None = None
