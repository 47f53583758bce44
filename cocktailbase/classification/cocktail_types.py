"""
Cocktail type classification.

Every drink gets exactly one ``CocktailType``. Resolution runs three
ordered rule tables and the first matching rule wins:

1. ``NAME_RULES`` - a regex over ``"<name> <category>"``.
2. ``INGREDIENT_RULES`` - every regex of the rule must hit the joined
   ingredient text.
3. ``HEURISTIC_RULES`` - predicates over ``IngredientSignals`` derived from
   the ingredient text and the detected base spirits.

``CocktailType.other`` is returned when no rule fires. The tables are
position sensitive: reordering them changes the output for real drinks.
"""
from __future__ import annotations

import re
from dataclasses import dataclass
from enum import Enum
from typing import Callable

from .spirits import BaseSpirit, detect_base_spirits


class CocktailType(str, Enum):
    spritz = "Spritz"
    martini = "Martini"
    sour = "Sour"
    margarita = "Margarita"
    negroni = "Negroni"
    old_fashioned = "Old Fashioned"
    mojito = "Mojito"
    mule = "Mule"
    collins = "Collins"
    daiquiri = "Daiquiri"
    manhattan = "Manhattan"
    fizz = "Fizz"
    punch = "Punch"
    highball = "Highball"
    shot = "Shot"
    other = "Other"


# Card colours used by the board and Explore views.
COCKTAIL_TYPE_COLORS: dict[CocktailType, str] = {
    CocktailType.spritz: "#845EF7",
    CocktailType.martini: "#495057",
    CocktailType.sour: "#FCC419",
    CocktailType.margarita: "#20C997",
    CocktailType.negroni: "#C92A2A",
    CocktailType.old_fashioned: "#E8590C",
    CocktailType.mojito: "#2F9E44",
    CocktailType.mule: "#868E96",
    CocktailType.collins: "#1C7ED6",
    CocktailType.daiquiri: "#E64980",
    CocktailType.manhattan: "#862E9C",
    CocktailType.fizz: "#12B886",
    CocktailType.punch: "#F76707",
    CocktailType.highball: "#339AF0",
    CocktailType.shot: "#D9480F",
    CocktailType.other: "#748FFC",
}


# ---------------------------------------------------------------------------
# Tier 1: name / category patterns
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class NameRule:
    pattern: re.Pattern[str]
    type: CocktailType

    def matches(self, haystack: str) -> bool:
        return self.pattern.search(haystack) is not None


def _name_rule(pattern: str, cocktail_type: CocktailType) -> NameRule:
    return NameRule(re.compile(pattern, re.IGNORECASE), cocktail_type)


NAME_RULES: tuple[NameRule, ...] = (
    _name_rule(r"spritz|aperol spritz|campari spritz", CocktailType.spritz),
    _name_rule(
        r"martini(?!.*(royale|french))|espresso martini|vodka martini|cosmopolitan",
        CocktailType.martini,
    ),
    _name_rule(r"sour|whiskey sour|pisco sour|amaretto sour|midori sour", CocktailType.sour),
    _name_rule(r"margarita|frozen margarita", CocktailType.margarita),
    _name_rule(r"negroni|americano|boulevardier", CocktailType.negroni),
    _name_rule(r"old[-\s]?fashioned", CocktailType.old_fashioned),
    _name_rule(r"mojito|mint julep", CocktailType.mojito),
    _name_rule(r"mule|moscow mule|mexican mule|kentucky mule|buck", CocktailType.mule),
    _name_rule(r"collins|tom collins|vodka collins", CocktailType.collins),
    _name_rule(r"daiquiri|frozen daiquiri", CocktailType.daiquiri),
    _name_rule(r"manhattan|rob roy", CocktailType.manhattan),
    _name_rule(r"fizz|gin fizz|ramos fizz|sloe gin fizz", CocktailType.fizz),
    _name_rule(
        r"punch|planter|mai tai|zombie|tiki|hurricane|pina colada|piña colada",
        CocktailType.punch,
    ),
    _name_rule(
        r"highball|vodka tonic|gin and tonic|screwdriver|cuba libre|rum and coke|whiskey ginger",
        CocktailType.highball,
    ),
    _name_rule(r"shot|shooter|jager|jäger|kamikaze|b[-\s]?52|b52", CocktailType.shot),
)


# ---------------------------------------------------------------------------
# Tier 2: ingredient combinations
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class IngredientRule:
    patterns: tuple[re.Pattern[str], ...]
    type: CocktailType

    def matches(self, ingredient_text: str) -> bool:
        return all(p.search(ingredient_text) for p in self.patterns)


def _combo(*patterns: str, type: CocktailType) -> IngredientRule:
    return IngredientRule(tuple(re.compile(p, re.IGNORECASE) for p in patterns), type)


INGREDIENT_RULES: tuple[IngredientRule, ...] = (
    # Highballs
    _combo(r"vodka", r"orange juice", type=CocktailType.highball),
    _combo(r"vodka", r"cranberry", type=CocktailType.highball),
    _combo(r"gin", r"tonic", type=CocktailType.highball),
    _combo(r"rum", r"coke|cola", type=CocktailType.highball),
    _combo(r"whiskey|whisky", r"ginger|ginger ale", type=CocktailType.highball),
    _combo(r"vodka", r"red bull|energy", type=CocktailType.highball),
    # Mojito family
    _combo(r"rum", r"lime|mint", type=CocktailType.mojito),
    _combo(r"white rum", r"mint", type=CocktailType.mojito),
    # Margaritas
    _combo(r"tequila", r"lime", type=CocktailType.margarita),
    _combo(r"tequila", r"triple sec|cointreau", type=CocktailType.margarita),
    _combo(r"tequila", r"grapefruit", type=CocktailType.margarita),
    # Manhattans
    _combo(r"whiskey|whisky|bourbon|rye", r"sweet vermouth", type=CocktailType.manhattan),
    _combo(r"whiskey|whisky", r"vermouth", r"bitters", type=CocktailType.manhattan),
    # Negronis
    _combo(r"gin", r"campari", type=CocktailType.negroni),
    _combo(r"gin", r"vermouth", r"campari", type=CocktailType.negroni),
    # Martinis
    _combo(r"vodka", r"coffee|kahlua|espresso", type=CocktailType.martini),
    _combo(r"gin", r"dry vermouth", type=CocktailType.martini),
    _combo(r"vodka", r"dry vermouth", type=CocktailType.martini),
    _combo(r"vodka", r"cranberry", r"lime", type=CocktailType.martini),
    # Punch / tiki
    _combo(r"rum", r"coconut", type=CocktailType.punch),
    _combo(r"rum", r"pineapple", type=CocktailType.punch),
    _combo(r"rum", r"orange juice", r"pineapple", type=CocktailType.punch),
    _combo(r"rum", r"lime", r"orgeat|almond", type=CocktailType.punch),
    # Spritz
    _combo(r"prosecco|champagne|sparkling", r"aperol|campari", type=CocktailType.spritz),
    _combo(r"prosecco|sparkling", r"elderflower", type=CocktailType.spritz),
    # Old Fashioned
    _combo(r"bourbon|whiskey|rye", r"sugar|simple syrup", r"bitters", type=CocktailType.old_fashioned),
    _combo(r"whiskey|bourbon", r"bitters", type=CocktailType.old_fashioned),
    # Sours
    _combo(r"whiskey|bourbon", r"lemon juice", r"sugar|syrup", type=CocktailType.sour),
    _combo(r"amaretto", r"lemon", type=CocktailType.sour),
    _combo(r"pisco", r"lemon|lime", r"egg white", type=CocktailType.sour),
    # Daiquiri
    _combo(r"white rum|light rum", r"lime", r"sugar|syrup", type=CocktailType.daiquiri),
)


# ---------------------------------------------------------------------------
# Tier 3: heuristic ladder
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class IngredientSignals:
    spirits: tuple[BaseSpirit, ...]
    has_citrus: bool
    has_sugar: bool
    has_bitters: bool
    has_cream: bool
    has_juice: bool
    has_soda: bool
    has_tropical: bool

    @property
    def spirit_count(self) -> int:
        return len(self.spirits)

    @classmethod
    def from_ingredients(cls, ingredient_names: list[str], ingredient_text: str) -> IngredientSignals:
        def has(pattern: str) -> bool:
            return re.search(pattern, ingredient_text, re.IGNORECASE) is not None

        return cls(
            spirits=tuple(detect_base_spirits(ingredient_names)),
            has_citrus=has(r"lemon") or has(r"lime") or has(r"orange"),
            has_sugar=has(r"sugar|syrup|simple"),
            has_bitters=has(r"bitters"),
            has_cream=has(r"cream|milk"),
            has_juice=has(r"juice"),
            has_soda=has(r"soda|tonic|ginger ale|cola|coke"),
            has_tropical=has(r"pineapple|coconut|mango|passion"),
        )


@dataclass(frozen=True)
class HeuristicRule:
    label: str
    predicate: Callable[[IngredientSignals], bool]
    type: CocktailType


HEURISTIC_RULES: tuple[HeuristicRule, ...] = (
    HeuristicRule(
        "sparkling wine",
        lambda s: BaseSpirit.champagne in s.spirits,
        CocktailType.spritz,
    ),
    HeuristicRule(
        "spirit + citrus + sugar",
        lambda s: s.spirit_count >= 1 and s.has_citrus and s.has_sugar,
        CocktailType.sour,
    ),
    HeuristicRule(
        "spirit + bitters",
        lambda s: s.has_bitters and s.spirit_count >= 1,
        CocktailType.old_fashioned,
    ),
    HeuristicRule(
        "rum + tropical fruit",
        lambda s: BaseSpirit.rum in s.spirits and s.has_tropical,
        CocktailType.punch,
    ),
    HeuristicRule("several spirits", lambda s: s.spirit_count >= 2, CocktailType.punch),
    HeuristicRule(
        "spirit + soda",
        lambda s: s.spirit_count == 1 and s.has_soda,
        CocktailType.highball,
    ),
    HeuristicRule(
        "spirit + juice, unsweetened",
        lambda s: s.spirit_count == 1 and s.has_juice and not s.has_sugar,
        CocktailType.highball,
    ),
    HeuristicRule(
        "spirit + cream",
        lambda s: s.spirit_count >= 1 and s.has_cream,
        CocktailType.martini,
    ),
    HeuristicRule(
        "rum + citrus",
        lambda s: s.spirit_count == 1 and s.has_citrus and BaseSpirit.rum in s.spirits,
        CocktailType.daiquiri,
    ),
    HeuristicRule(
        "spirit + citrus",
        lambda s: s.spirit_count == 1 and s.has_citrus,
        CocktailType.collins,
    ),
    HeuristicRule("gin", lambda s: BaseSpirit.gin in s.spirits, CocktailType.martini),
    HeuristicRule(
        "whiskey",
        lambda s: BaseSpirit.whiskey in s.spirits or BaseSpirit.bourbon in s.spirits,
        CocktailType.manhattan,
    ),
    HeuristicRule("vodka", lambda s: BaseSpirit.vodka in s.spirits, CocktailType.martini),
    HeuristicRule("single spirit", lambda s: s.spirit_count == 1, CocktailType.highball),
)


def map_category_to_cocktail_type(
    category: str | None = None,
    name: str | None = None,
    ingredients: list[str] | None = None,
) -> CocktailType:
    """Return the cocktail type for a drink; never raises, never returns None."""
    haystack = f"{name or ''} {category or ''}".lower()

    for rule in NAME_RULES:
        if rule.matches(haystack):
            return rule.type

    if not ingredients:
        return CocktailType.other

    ingredient_text = " ".join(i.lower() for i in ingredients)

    for rule in INGREDIENT_RULES:
        if rule.matches(ingredient_text):
            return rule.type

    signals = IngredientSignals.from_ingredients(ingredients, ingredient_text)
    for heuristic in HEURISTIC_RULES:
        if heuristic.predicate(signals):
            return heuristic.type

    return CocktailType.other
