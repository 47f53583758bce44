from __future__ import annotations

import logging
import os

from fastapi import FastAPI, HTTPException, Request
from pydantic import BaseModel, Field
from starlette.middleware.sessions import SessionMiddleware

from .catalog.cache import get_cache_stats
from .catalog.data_store import get_catalog, get_cocktail
from .catalog.ingest import CatalogFetchError
from .catalog.models import CachedCatalog, ExploreCocktail, Ingredient
from .classification.flavor import FLAVOR_OPTIONS
from .classification.spirits import BASE_SPIRIT_OPTIONS
from .explore.filters import derive_filter_options
from .explore.models import ExploreResponse, FilterState
from .explore.profile import build_user_profile
from .explore.ranking import rank_catalog
from .measurements.converter import MeasurementSystem
from .preferences.models import PreferencesUpdate, UserPreferences
from .preferences.store import format_for_user, get_preferences, update_preferences
from .recipes.models import CocktailInput, SavedCocktail
from .recipes.store import (
    DuplicateRecipeError,
    RecipeNotFoundError,
    create_recipe,
    delete_recipe,
    get_recipe,
    get_recipes,
    save_from_explore,
    search_recipes,
    update_recipe,
)
from .teams.models import RoleUpdate, TeamMember, TeamMemberInput
from .teams.store import TeamMemberNotFoundError, add_member, get_members, remove_member, update_member_role

logger = logging.getLogger(__name__)

app = FastAPI(title="Cocktail Base API", version="1.0.0")
app.add_middleware(
    SessionMiddleware,
    secret_key=os.environ.get("SESSION_SECRET", "cocktailbase-secret-change-in-production"),
)

_FILTERS_KEY = "explore_filters"


class FormatRequest(BaseModel):
    values: list[str] = Field(default_factory=list, max_length=100)
    system: MeasurementSystem | None = None


class FormatResponse(BaseModel):
    system: MeasurementSystem
    values: list[str]


def _load_catalog(bypass_cache: bool = False) -> CachedCatalog:
    try:
        return get_catalog(bypass_cache=bypass_cache)
    except CatalogFetchError as exc:
        logger.error("Explore catalog unavailable: %s", exc)
        raise HTTPException(status_code=502, detail="Failed to fetch explore cocktails") from exc


def _session_filters(request: Request) -> FilterState:
    raw = request.session.get(_FILTERS_KEY)
    if not raw:
        return FilterState()
    try:
        return FilterState.model_validate(raw)
    except ValueError:
        logger.warning("Discarding invalid filter state from session", exc_info=True)
        return FilterState()


def _explore(filters: FilterState) -> ExploreResponse:
    catalog = _load_catalog()
    profile = build_user_profile(get_recipes())
    ranked = rank_catalog(catalog.cocktails, filters, profile)
    return ExploreResponse(
        cocktails=ranked,
        total_candidates=len(ranked),
        total_catalog=len(catalog.cocktails),
        filters=filters,
        filters_active=filters.filters_active,
        fetched_at=catalog.fetched_at,
        source=catalog.source,
    )


# ── Public endpoints ─────────────────────────────────────────────────────


@app.get("/health")
def health() -> dict[str, str]:
    return {"status": "ok"}


# ── Explore ──────────────────────────────────────────────────────────────


@app.get("/explore", response_model=ExploreResponse)
def explore(request: Request) -> ExploreResponse:
    return _explore(_session_filters(request))


@app.post("/explore", response_model=ExploreResponse)
def explore_with_filters(body: FilterState, request: Request) -> ExploreResponse:
    request.session[_FILTERS_KEY] = body.model_dump(mode="json")
    return _explore(body)


@app.delete("/explore/filters", response_model=FilterState)
def clear_explore_filters(request: Request) -> FilterState:
    request.session.pop(_FILTERS_KEY, None)
    return FilterState()


@app.get("/explore/metadata")
def explore_metadata() -> dict:
    catalog = _load_catalog()
    derived = derive_filter_options(catalog.cocktails)
    return {
        "spirits": [s.value for s in BASE_SPIRIT_OPTIONS],
        "flavor_options": FLAVOR_OPTIONS,
        **derived.model_dump(),
        "fetched_at": catalog.fetched_at,
        "source": catalog.source,
    }


@app.post("/explore/refresh")
def refresh_explore() -> dict:
    catalog = _load_catalog(bypass_cache=True)
    return {"status": "refreshed", "total": len(catalog.cocktails), "fetched_at": catalog.fetched_at}


@app.get("/explore/{cocktail_id}", response_model=ExploreCocktail)
def explore_detail(cocktail_id: str) -> ExploreCocktail:
    _load_catalog()
    cocktail = get_cocktail(cocktail_id)
    if cocktail is None:
        raise HTTPException(status_code=404, detail="Cocktail not found")
    return cocktail.model_copy(update={
        "ingredients": [
            Ingredient(name=i.name, measure=format_for_user(i.measure) if i.measure else i.measure)
            for i in cocktail.ingredients
        ],
    })


@app.post("/explore/{cocktail_id}/save", response_model=SavedCocktail, status_code=201)
def save_explore_cocktail(cocktail_id: str) -> SavedCocktail:
    _load_catalog()
    cocktail = get_cocktail(cocktail_id)
    if cocktail is None:
        raise HTTPException(status_code=404, detail="Cocktail not found")
    try:
        return save_from_explore(cocktail)
    except DuplicateRecipeError:
        raise HTTPException(status_code=409, detail="A cocktail with this name already exists")


# ── Saved cocktails ──────────────────────────────────────────────────────


@app.get("/cocktails", response_model=list[SavedCocktail])
def list_cocktails(search: str = "") -> list[SavedCocktail]:
    return search_recipes(search)


@app.post("/cocktails", response_model=SavedCocktail, status_code=201)
def add_cocktail(body: CocktailInput) -> SavedCocktail:
    return create_recipe(body)


@app.get("/cocktails/{recipe_id}", response_model=SavedCocktail)
def cocktail_detail(recipe_id: str) -> SavedCocktail:
    try:
        return get_recipe(recipe_id)
    except RecipeNotFoundError:
        raise HTTPException(status_code=404, detail="Cocktail not found")


@app.put("/cocktails/{recipe_id}", response_model=SavedCocktail)
def edit_cocktail(recipe_id: str, body: CocktailInput) -> SavedCocktail:
    try:
        return update_recipe(recipe_id, body)
    except RecipeNotFoundError:
        raise HTTPException(status_code=404, detail="Cocktail not found")


@app.delete("/cocktails/{recipe_id}", status_code=204)
def remove_cocktail(recipe_id: str) -> None:
    try:
        delete_recipe(recipe_id)
    except RecipeNotFoundError:
        raise HTTPException(status_code=404, detail="Cocktail not found")


# ── Team ─────────────────────────────────────────────────────────────────


@app.get("/team", response_model=list[TeamMember])
def list_team() -> list[TeamMember]:
    return get_members()


@app.post("/team", response_model=TeamMember, status_code=201)
def add_team_member(body: TeamMemberInput) -> TeamMember:
    return add_member(body.email, body.role)


@app.put("/team/{member_id}", response_model=TeamMember)
def change_team_role(member_id: str, body: RoleUpdate) -> TeamMember:
    try:
        return update_member_role(member_id, body.role)
    except TeamMemberNotFoundError:
        raise HTTPException(status_code=404, detail="Team member not found")


@app.delete("/team/{member_id}", status_code=204)
def remove_team_member(member_id: str) -> None:
    try:
        remove_member(member_id)
    except TeamMemberNotFoundError:
        raise HTTPException(status_code=404, detail="Team member not found")


# ── Settings & measurements ──────────────────────────────────────────────


@app.get("/settings", response_model=UserPreferences)
def read_settings() -> UserPreferences:
    return get_preferences()


@app.put("/settings", response_model=UserPreferences)
def write_settings(body: PreferencesUpdate) -> UserPreferences:
    return update_preferences(body)


@app.post("/measurements/format", response_model=FormatResponse)
def format_measurements(body: FormatRequest) -> FormatResponse:
    system = body.system or get_preferences().measurement_system
    return FormatResponse(
        system=system,
        values=[format_for_user(v, system) for v in body.values],
    )


# ── Admin ────────────────────────────────────────────────────────────────


@app.get("/cache/stats")
def cache_stats() -> dict:
    return get_cache_stats()
