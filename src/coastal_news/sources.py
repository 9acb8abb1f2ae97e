# src/coastal_news/sources.py
"""
News sources: the fetch step of a refresh.

A source returns raw hazard events (dicts) for a location. An empty result
means "nothing from upstream" and the engine falls back to synthesizing items
from the template catalog; a non-empty result replaces the synthesized set.

Raw event contract (dict-like):
    Required keys:
      - "category": str          # one of catalog.CATEGORIES
      - "title": str             # may contain {region}
    Optional:
      - "id", "description", "urgency" (default "medium"), "source",
        "published_at" (ISO8601), "url", "image_url", "is_breaking",
        "lat"/"lng" or "location": {"lat", "lng", "region"},
        "city"                   # restrict the event to one city

Sources raise `FetchFailure` for anything the user should see as
"failed to fetch news".
"""

from __future__ import annotations

import asyncio
import logging
from pathlib import Path
from typing import Any, Dict, List, Protocol

import yaml

from .errors import FetchFailure
from .location import LocationContext

log = logging.getLogger("sources")

RawEvent = Dict[str, Any]


class NewsSource(Protocol):
    async def fetch(self, location: LocationContext) -> List[RawEvent]: ...


class StubSource:
    """Stand-in for an upstream news API: waits, then returns nothing."""

    def __init__(self, delay_seconds: float = 1.0) -> None:
        self.delay_seconds = delay_seconds

    async def fetch(self, location: LocationContext) -> List[RawEvent]:
        if self.delay_seconds > 0:
            await asyncio.sleep(self.delay_seconds)
        return []


class FileSource:
    """
    Raw events from a local YAML (or JSON) file, either a top-level list or a
    mapping with an `events` list.
    """

    def __init__(self, path: Path, delay_seconds: float = 0.0) -> None:
        self.path = Path(path)
        self.delay_seconds = delay_seconds

    def _read(self) -> List[RawEvent]:
        try:
            data = yaml.safe_load(self.path.read_text(encoding="utf-8"))
        except (OSError, yaml.YAMLError) as e:
            raise FetchFailure(f"Failed to read events from {self.path}: {e}") from e
        if data is None:
            return []
        if isinstance(data, dict):
            data = data.get("events") or []
        if not isinstance(data, list):
            raise FetchFailure(f"{self.path}: expected a list of events")
        return [e for e in data if isinstance(e, dict)]

    async def fetch(self, location: LocationContext) -> List[RawEvent]:
        if self.delay_seconds > 0:
            await asyncio.sleep(self.delay_seconds)
        events = self._read()
        out = []
        for e in events:
            city = e.get("city")
            if isinstance(city, str) and city.strip().lower() != location.city.lower():
                continue
            out.append(e)
        log.debug("Read %d event(s) for %s from %s", len(out), location.city, self.path)
        return out
