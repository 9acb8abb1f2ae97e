# src/coastal_news/location.py
"""
Location context supplied by the location collaborator.

`LocationContext` is immutable. `profile_location` derives the coastal zone,
risk level and nearest major port from raw coordinates and a reverse-geocoded
city/state, for callers (CLI, tests) that only know where the user is.
"""

from __future__ import annotations

import math
from typing import Literal, Optional, Tuple

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel

RiskLevel = Literal["low", "medium", "high", "critical"]
CoastalZone = Literal["north", "south", "east", "west"]

UNKNOWN_CITY = "Unknown City"
UNKNOWN_STATE = "Unknown State"


class LocationContext(BaseModel):
    model_config = ConfigDict(frozen=True, alias_generator=to_camel, populate_by_name=True)

    lat: float = Field(ge=-90, le=90)
    lng: float = Field(ge=-180, le=180)
    city: str = UNKNOWN_CITY
    state: str = UNKNOWN_STATE
    risk_level: RiskLevel = "low"
    coastal_zone: Optional[CoastalZone] = None
    nearest_port: Optional[str] = None

    @field_validator("city", "state")
    @classmethod
    def _strip(cls, v: str) -> str:
        return v.strip()

    @property
    def location_key(self) -> str:
        """Identity used by the freshness cache."""
        return self.city

    @property
    def region(self) -> str:
        """Display region: the city, or the state when the city is unknown."""
        if self.city and self.city != UNKNOWN_CITY:
            return self.city
        return self.state


# ------------------------ profiling (India coastline) ------------------------

_HIGH_RISK_CITIES = ("mumbai", "chennai", "kolkata", "visakhapatnam", "kochi")
_CRITICAL_RISK_CITIES = ("sundarbans", "pulicat", "chilika")

MAJOR_PORTS: Tuple[Tuple[str, float, float], ...] = (
    ("Mumbai Port", 18.9220, 72.8347),
    ("Chennai Port", 13.1023, 80.3000),
    ("Kolkata Port", 22.5726, 88.3639),
    ("Visakhapatnam Port", 17.6868, 83.2185),
    ("Kochi Port", 9.9312, 76.2673),
    ("Mangalore Port", 12.8697, 74.8856),
    ("Tuticorin Port", 8.7642, 78.1348),
)


def coastal_zone_for(lat: float, lng: float) -> CoastalZone:
    if lng < 75:
        return "west"  # Arabian Sea side
    if lng > 85:
        return "east"  # Bay of Bengal side
    if lat < 10:
        return "south"
    return "east"


def risk_level_for(city: str, zone: Optional[str]) -> RiskLevel:
    name = city.lower()
    if any(c in name for c in _CRITICAL_RISK_CITIES):
        return "critical"
    if any(c in name for c in _HIGH_RISK_CITIES):
        return "high"
    if zone == "east":
        return "medium"
    return "low"


def nearest_port(lat: float, lng: float) -> str:
    # planar distance in degrees; good enough to pick among a handful of ports
    name, _, _ = min(MAJOR_PORTS, key=lambda p: math.hypot(lat - p[1], lng - p[2]))
    return name


def profile_location(
    lat: float,
    lng: float,
    city: Optional[str] = None,
    state: Optional[str] = None,
) -> LocationContext:
    city = (city or "").strip() or UNKNOWN_CITY
    state = (state or "").strip() or UNKNOWN_STATE
    zone = coastal_zone_for(lat, lng)
    return LocationContext(
        lat=lat,
        lng=lng,
        city=city,
        state=state,
        risk_level=risk_level_for(city, zone),
        coastal_zone=zone,
        nearest_port=nearest_port(lat, lng),
    )
