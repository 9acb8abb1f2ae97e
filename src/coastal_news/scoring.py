# src/coastal_news/scoring.py
"""
Relevance scoring: how pertinent a hazard category is to a location.

    base 0.5
    + 0.3 critical | 0.2 high | 0.1 medium | 0 low
    + 0.2  cyclone on the east coast
    + 0.15 tsunami on the south or east coast
    clamped to 1.0
"""

from __future__ import annotations

from typing import Dict

from .location import LocationContext

BASE_SCORE = 0.5
MAX_SCORE = 1.0

_RISK_BONUS: Dict[str, float] = {
    "critical": 0.3,
    "high": 0.2,
    "medium": 0.1,
    "low": 0.0,
}

CYCLONE_EAST_BONUS = 0.2
TSUNAMI_ZONE_BONUS = 0.15
_TSUNAMI_ZONES = {"south", "east"}


def score(category: str, location: LocationContext) -> float:
    total = BASE_SCORE
    total += _RISK_BONUS.get(location.risk_level, 0.0)
    if category == "cyclone" and location.coastal_zone == "east":
        total += CYCLONE_EAST_BONUS
    if category == "tsunami" and location.coastal_zone in _TSUNAMI_ZONES:
        total += TSUNAMI_ZONE_BONUS
    return min(total, MAX_SCORE)
