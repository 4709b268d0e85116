"""
Rank-tier colouring for per-minute rates.

Each metric maps its current rate onto the ranked ladder, iron to challenger.
Gold and CS compare on the integer part of the rate; vision compares the raw
value. Rates above the top band get no tier.
"""

from __future__ import annotations
import math

TIER_COLORS: dict[str, str] = {
    "iron": "rgb(81,68,68)",
    "bronze": "rgb(127,84,20)",
    "silver": "rgb(240,240,240)",
    "gold": "rgb(228,228,126)",
    "platinum": "rgb(123,228,172)",
    "diamond": "rgb(81,245,250)",
    "master": "rgb(159,53,220)",
    "grandmaster": "rgb(255,59,20)",
    "challenger": "rgb(102,204,255)",
}

# (exclusive upper bound, tier), scanned in order
_BANDS: dict[str, tuple[tuple[float, str], ...]] = {
    "gold": (
        (200, "iron"), (250, "bronze"), (300, "silver"), (350, "gold"), (400, "platinum"),
        (450, "diamond"), (500, "master"), (550, "grandmaster"), (651, "challenger"),
    ),
    "cs": (
        (4, "iron"), (5, "bronze"), (6, "silver"), (7, "gold"), (8, "platinum"),
        (10, "diamond"), (11, "master"), (12, "grandmaster"), (13, "challenger"),
    ),
    "vs": (
        (0.2, "iron"), (0.4, "bronze"), (0.6, "silver"), (0.8, "gold"), (1.0, "platinum"),
        (1.2, "diamond"), (1.4, "master"), (1.6, "grandmaster"), (4.0, "challenger"),
    ),
}

_INTEGER_METRICS = frozenset({"gold", "cs"})


def tier_for(metric: str, rate: float) -> str | None:
    bands = _BANDS.get(metric)
    if bands is None or math.isnan(rate):
        return None
    value = float(math.trunc(rate)) if metric in _INTEGER_METRICS else rate
    if value < 0:
        return None
    for upper, tier in bands:
        if value < upper:
            return tier
    return None


def tier_style(metric: str, rate: float) -> str:
    tier = tier_for(metric, rate)
    if tier is None:
        return ""
    style = TIER_COLORS[tier]
    if tier == "challenger":
        style += " blink"
    return style
