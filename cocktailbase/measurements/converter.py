from __future__ import annotations

import math
import re
from enum import Enum


class MeasurementSystem(str, Enum):
    metric = "metric"
    imperial = "imperial"


UNICODE_FRACTIONS: dict[str, float] = {
    "¼": 0.25,
    "½": 0.5,
    "¾": 0.75,
    "⅓": 1 / 3,
    "⅔": 2 / 3,
    "⅛": 0.125,
    "⅜": 0.375,
    "⅝": 0.625,
    "⅞": 0.875,
}

ML_PER_UNIT: dict[str, float] = {
    "ml": 1.0,
    "cl": 10.0,
    "oz": 29.5735,  # US fluid ounce
}
OZ_PER_ML = 0.033814

_UNIT_RE = re.compile(r"(ml|cl|oz)", re.IGNORECASE)
_NON_NUMERIC_RE = re.compile(r"[^0-9\s/.\-¼½¾⅓⅔⅛⅜⅝⅞]")


def _to_number(token: str) -> float | None:
    try:
        value = float(token)
    except ValueError:
        return None
    return None if math.isnan(value) else value


def parse_numeric_part(value: str) -> float | None:
    """Sum the quantities in ``value``; ``"1 ½"`` -> 1.5, ``"3/4"`` -> 0.75.

    Returns ``None`` when nothing positive could be read.
    """
    if not value:
        return None
    cleaned = _NON_NUMERIC_RE.sub(" ", value).replace("-", " ").strip()
    if not cleaned:
        return None

    total = 0.0
    for token in cleaned.split():
        if token in UNICODE_FRACTIONS:
            total += UNICODE_FRACTIONS[token]
            continue
        if "/" in token:
            parts = token.split("/")
            numerator = _to_number(parts[0])
            denominator = _to_number(parts[1])
            if numerator and denominator:
                total += numerator / denominator
                continue
        decimal = _to_number(token)
        if decimal is not None:
            total += decimal

    return total if total > 0 else None


def to_milliliters(value: float, unit: str) -> float:
    return value * ML_PER_UNIT.get(unit, 1.0)


def _round_half_up(value: float, digits: int) -> float:
    factor = 10 ** digits
    return math.floor(value * factor + 0.5) / factor


def format_value(value: float) -> str:
    """Render a quantity: >=100 whole, >=10 one decimal, else two decimals.

    Trailing zeros are dropped, so 5.0 renders as ``"5"``.
    """
    if value >= 100:
        rounded = _round_half_up(value, 0)
    elif value >= 10:
        rounded = _round_half_up(value, 1)
    else:
        rounded = _round_half_up(value, 2)

    if rounded == int(rounded):
        return str(int(rounded))
    return repr(rounded)


def convert_measurement(raw: str, system: MeasurementSystem) -> str | None:
    """Convert ``raw`` into ``system``; ``None`` when it has no ml/cl/oz quantity."""
    match = _UNIT_RE.search(raw)
    if not match:
        return None

    unit = match.group(1).lower()
    numeric_value = parse_numeric_part(raw[: match.start()])
    if not numeric_value:
        return None

    ml_value = to_milliliters(numeric_value, unit)
    if system == MeasurementSystem.metric:
        return f"{format_value(ml_value)} ml"
    return f"{format_value(ml_value * OZ_PER_ML)} oz"


def format_measurement(raw: str | None, system: MeasurementSystem | str = MeasurementSystem.metric) -> str:
    """Re-render a measure in ``system``, returning ``raw`` unchanged when it can't."""
    if not raw:
        return raw or ""
    return convert_measurement(raw, MeasurementSystem(system)) or raw
