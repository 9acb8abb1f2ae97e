# src/coastal_news/synth.py
"""
Item synthesis: location context -> concrete feed items.

Two paths produce FeedItems:

synthesize(location, count, ...)
    Expand random catalog templates for the location (the default when the
    news source returns nothing).

items_from_events(events, location, ...)
    Normalize raw hazard events from a news source. When a source yields
    events they replace the synthesized set wholesale.

Both paths score items with the relevance scorer and only allow
`is_breaking` on urgent items. Randomness and the clock are injected so tests
can pin them.
"""

from __future__ import annotations

import logging
import random
from datetime import datetime, timedelta
from typing import Any, Callable, Dict, Iterable, List, Optional

from pydantic import TypeAdapter, ValidationError

from . import catalog
from .location import LocationContext
from .models import Clock, FeedItem, ItemLocation, utc_now
from .scoring import score

log = logging.getLogger("synth")

Scorer = Callable[[str, LocationContext], float]
RawEvent = Dict[str, Any]

DEFAULT_COUNT = 18
BREAKING_PROBABILITY = 0.10
JITTER_DEGREES = 1.0
RECENCY_WINDOW = timedelta(hours=24)

_FLAG = TypeAdapter(bool)


def expand(pattern: str, region: str) -> str:
    """Replace every `{region}` placeholder in `pattern`."""
    return pattern.replace(catalog.REGION_PLACEHOLDER, region)


def synthesize(
    location: Optional[LocationContext],
    count: int = DEFAULT_COUNT,
    *,
    rng: Optional[random.Random] = None,
    clock: Clock = utc_now,
    breaking_probability: float = BREAKING_PROBABILITY,
    jitter_degrees: float = JITTER_DEGREES,
    window: timedelta = RECENCY_WINDOW,
    scorer: Scorer = score,
) -> List[FeedItem]:
    if location is None:
        return []
    rng = rng or random.Random()
    now = clock()
    region = location.region
    window_s = window.total_seconds()

    items: List[FeedItem] = []
    for i in range(count):
        category = rng.choice(catalog.CATEGORIES)
        template = rng.choice(catalog.lookup(category))
        published = now - timedelta(seconds=rng.random() * window_s)
        lat = location.lat + (rng.random() - 0.5) * 2 * jitter_degrees
        lng = location.lng + (rng.random() - 0.5) * 2 * jitter_degrees
        # draw even for non-urgent items so the stream does not depend on category
        breaking_roll = rng.random()

        items.append(
            FeedItem(
                id=f"news_{i + 1}",
                title=expand(template.title_pattern, region),
                description=expand(template.description_pattern, region),
                category=category,
                urgency=template.urgency,
                source=template.source,
                published_at=published,
                location=ItemLocation(lat=lat, lng=lng, region=region),
                relevance_score=scorer(category, location),
                is_breaking=template.urgency == "urgent" and breaking_roll < breaking_probability,
            )
        )
    return items


# ------------------------ raw source events ------------------------


def _first(d: RawEvent, *keys: str) -> Any:
    for k in keys:
        v = d.get(k)
        if v is not None and v != "":
            return v
    return None


def _event_location(e: RawEvent, location: LocationContext) -> ItemLocation:
    loc = e.get("location") if isinstance(e.get("location"), dict) else {}
    lat = _first(loc, "lat") if loc else None
    lng = _first(loc, "lng", "lon") if loc else None
    if lat is None:
        lat = _first(e, "lat", "latitude")
    if lng is None:
        lng = _first(e, "lng", "lon", "longitude")
    region = (loc.get("region") if loc else None) or location.region
    return ItemLocation(
        lat=float(lat) if lat is not None else location.lat,
        lng=float(lng) if lng is not None else location.lng,
        region=str(region),
    )


def _from_event(
    e: RawEvent,
    index: int,
    location: LocationContext,
    now: datetime,
    scorer: Scorer,
) -> FeedItem:
    category = str(_first(e, "category") or "").strip().lower()
    if category not in catalog.CATEGORIES:
        raise ValueError(f"unknown category {category!r}")
    urgency = str(_first(e, "urgency") or "medium").strip().lower()
    region = location.region
    title = _first(e, "title", "headline")
    if not title:
        raise ValueError("event has no title")

    # quoted flags ("false", "0") coerce like YAML booleans; junk raises
    flag = _first(e, "is_breaking", "isBreaking")
    breaking = flag is not None and _FLAG.validate_python(flag) and urgency == "urgent"
    return FeedItem(
        id=str(_first(e, "id") or f"event_{index + 1}"),
        title=expand(str(title), region),
        description=expand(str(_first(e, "description", "summary") or ""), region),
        category=category,
        urgency=urgency,
        source=str(_first(e, "source") or "Unknown Source"),
        published_at=_first(e, "published_at", "publishedAt", "updated") or now,
        url=_first(e, "url", "link"),
        image_url=_first(e, "image_url", "imageUrl"),
        location=_event_location(e, location),
        relevance_score=scorer(category, location),
        is_breaking=breaking,
    )


def items_from_events(
    events: Iterable[RawEvent],
    location: Optional[LocationContext],
    *,
    clock: Clock = utc_now,
    scorer: Scorer = score,
) -> List[FeedItem]:
    if location is None:
        return []
    now = clock()
    out: List[FeedItem] = []
    for i, e in enumerate(events):
        try:
            out.append(_from_event(e, i, location, now, scorer))
        except (AttributeError, TypeError, ValueError, ValidationError) as exc:
            log.debug("Skipping malformed source event #%d: %s", i, exc)
            continue
    return out
