from __future__ import annotations

from enum import Enum


class BaseSpirit(str, Enum):
    vodka = "Vodka"
    gin = "Gin"
    rum = "Rum"
    tequila = "Tequila"
    whiskey = "Whiskey"
    bourbon = "Bourbon"
    scotch = "Scotch"
    brandy = "Brandy"
    cognac = "Cognac"
    mezcal = "Mezcal"
    champagne = "Champagne"
    wine = "Wine"


# Table order is the output order of detect_base_spirits.
BASE_SPIRIT_KEYWORDS: dict[BaseSpirit, tuple[str, ...]] = {
    BaseSpirit.vodka: ("vodka",),
    BaseSpirit.gin: ("gin",),
    BaseSpirit.rum: ("rum", "cachaca", "cachaça"),
    BaseSpirit.tequila: ("tequila",),
    BaseSpirit.whiskey: ("whiskey", "whisky", "rye"),
    BaseSpirit.bourbon: ("bourbon",),
    BaseSpirit.scotch: ("scotch",),
    BaseSpirit.brandy: ("brandy",),
    BaseSpirit.cognac: ("cognac",),
    BaseSpirit.mezcal: ("mezcal",),
    BaseSpirit.champagne: ("champagne", "prosecco", "cava", "sparkling wine"),
    BaseSpirit.wine: ("wine", "vermouth", "porto", "port"),
}

BASE_SPIRIT_OPTIONS: list[BaseSpirit] = list(BASE_SPIRIT_KEYWORDS)


def detect_base_spirits(ingredient_names: list[str]) -> list[BaseSpirit]:
    """Return the base spirits whose keywords occur in any ingredient name.

    Matching is a case-insensitive substring test, so "Malibu Rum" and
    "Ginger Ale" both count (for Rum and Gin respectively). Each spirit
    appears at most once, in table order.
    """
    lowered = [name.lower() for name in ingredient_names if name]

    spirits: list[BaseSpirit] = []
    for spirit, keywords in BASE_SPIRIT_KEYWORDS.items():
        if any(keyword in ingredient for keyword in keywords for ingredient in lowered):
            spirits.append(spirit)
    return spirits
