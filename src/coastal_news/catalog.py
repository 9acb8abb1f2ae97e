# src/coastal_news/catalog.py
"""
Static catalog of hazard message templates.

Each hazard category maps to one or more templates. A template carries a fixed
urgency tier and the attribution shown as the item's source. Titles and
descriptions may contain the `{region}` placeholder, expanded by `synth`.

The marine-flooding and emergency entries are written for this package; the
other seven categories carry the original city-feed templates.

Public API
----------
CATEGORIES            declared category order (used for uniform picks)
URGENCIES             urgency tiers, lowest first
lookup(category)      -> tuple[CategoryTemplate, ...]   (never empty)
categories()          -> tuple[str, ...]
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, Literal, Tuple, get_args

Category = Literal[
    "tsunami",
    "cyclone",
    "storm-surge",
    "high-waves",
    "coastal-erosion",
    "marine-flooding",
    "weather",
    "safety",
    "emergency",
]
Urgency = Literal["low", "medium", "high", "urgent"]

CATEGORIES: Tuple[str, ...] = get_args(Category)
URGENCIES: Tuple[str, ...] = get_args(Urgency)

REGION_PLACEHOLDER = "{region}"


@dataclass(frozen=True)
class CategoryTemplate:
    title_pattern: str
    description_pattern: str
    urgency: str
    source: str


_CATALOG: Dict[str, Tuple[CategoryTemplate, ...]] = {
    "tsunami": (
        CategoryTemplate(
            "Tsunami Advisory Issued for {region} Coast",
            "Maritime authorities have issued a precautionary tsunami advisory following "
            "seismic activity in the Indian Ocean. Coastal residents advised to stay alert.",
            "high",
            "Indian National Centre for Ocean Information Services",
        ),
        CategoryTemplate(
            "Tsunami Preparedness Drill Scheduled in {region}",
            "Emergency response teams will conduct tsunami evacuation drills across coastal "
            "communities to enhance disaster preparedness.",
            "medium",
            "Disaster Management Authority",
        ),
    ),
    "cyclone": (
        CategoryTemplate(
            "Cyclone Alert: {region} Braces for Severe Weather",
            "Meteorological department forecasts formation of cyclonic circulation over Bay "
            "of Bengal. Coastal areas urged to take preventive measures.",
            "urgent",
            "India Meteorological Department",
        ),
        CategoryTemplate(
            "Post-Cyclone Recovery Efforts Underway in {region}",
            "Relief operations continue as authorities work to restore normalcy after recent "
            "cyclonic weather. Emergency shelters remain operational.",
            "medium",
            "State Disaster Response Force",
        ),
    ),
    "storm-surge": (
        CategoryTemplate(
            "Storm Surge Warning for {region} Coastline",
            "High tide combined with strong winds may cause storm surge up to 2-3 meters. "
            "Low-lying coastal areas advised to evacuate.",
            "high",
            "Coastal Security Group",
        ),
    ),
    "high-waves": (
        CategoryTemplate(
            "High Wave Alert: {region} Beaches Closed to Public",
            "Wave heights reaching 4-5 meters expected along the coast. All water sports and "
            "fishing activities suspended until further notice.",
            "medium",
            "Coast Guard",
        ),
    ),
    "coastal-erosion": (
        CategoryTemplate(
            "Coastal Erosion Threatens {region} Communities",
            "Accelerated shoreline erosion reported along {region} coast. Government "
            "announces new coastal protection measures.",
            "medium",
            "Ministry of Earth Sciences",
        ),
    ),
    "marine-flooding": (
        CategoryTemplate(
            "Tidal Flooding Reported in Low-Lying Areas of {region}",
            "Spring tides have pushed seawater into low-lying neighbourhoods of {region}. "
            "Residents advised to move valuables to higher ground.",
            "high",
            "Municipal Disaster Cell",
        ),
        CategoryTemplate(
            "Flood Barriers Inspected Ahead of High Tide in {region}",
            "Engineers completed inspection of sea walls and flood gates protecting {region} "
            "ahead of the seasonal high tide cycle.",
            "low",
            "Irrigation and Flood Control Department",
        ),
    ),
    "weather": (
        CategoryTemplate(
            "Monsoon Update: Heavy Rainfall Expected in {region}",
            "Southwest monsoon intensifies over {region}. Heavy to very heavy rainfall likely "
            "in next 48 hours.",
            "medium",
            "Regional Meteorological Centre",
        ),
        CategoryTemplate(
            "Heat Wave Conditions Prevail in {region}",
            "Maximum temperatures soar above 40°C in {region}. Health advisory issued for "
            "vulnerable populations.",
            "high",
            "Health Department",
        ),
    ),
    "safety": (
        CategoryTemplate(
            "Beach Safety Guidelines Updated for {region}",
            "New safety protocols introduced for beachgoers in {region} following recent "
            "incidents. Lifeguard services enhanced.",
            "low",
            "Tourism Department",
        ),
        CategoryTemplate(
            "Fishermen Safety Training Program Launched in {region}",
            "Comprehensive safety training initiative for fishing communities includes "
            "weather monitoring and emergency response.",
            "low",
            "Fisheries Department",
        ),
    ),
    "emergency": (
        CategoryTemplate(
            "Evacuation Ordered for Coastal Villages Near {region}",
            "District administration has ordered immediate evacuation of coastal villages "
            "near {region}. Relief camps opened in schools and community halls.",
            "urgent",
            "District Collectorate",
        ),
        CategoryTemplate(
            "Emergency Helpline Activated for {region}",
            "A 24x7 emergency control room is now operational for {region}. Residents can "
            "report stranded persons and damaged structures.",
            "high",
            "State Emergency Operations Centre",
        ),
    ),
}


def _check_complete() -> None:
    missing = [c for c in CATEGORIES if not _CATALOG.get(c)]
    if missing:
        raise RuntimeError(f"Template catalog has no entries for: {missing}")
    bad = [
        (c, t.urgency)
        for c, templates in _CATALOG.items()
        for t in templates
        if t.urgency not in URGENCIES
    ]
    if bad:
        raise RuntimeError(f"Template catalog has unknown urgency tiers: {bad}")


_check_complete()


def categories() -> Tuple[str, ...]:
    return CATEGORIES


def lookup(category: str) -> Tuple[CategoryTemplate, ...]:
    """Return the templates for `category`. Raises KeyError for undeclared categories."""
    return _CATALOG[category]
