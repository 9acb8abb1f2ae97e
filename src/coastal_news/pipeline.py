# src/coastal_news/pipeline.py
"""
Feed engine: cache → fetch → synthesize → score → rank → publish → persist

The engine owns the live feed for one user location. It is what the
presentation layer talks to:

    engine = FeedEngine.from_settings(settings)
    await engine.set_location(location)   # serves cache, then refreshes
    snap = engine.snapshot()              # news, loading, error, last_fetch
    engine.breaking_news() / engine.urgent_news() / engine.news_by_category("cyclone")
    await engine.refresh()

Collaborators (all injectable):

sources.NewsSource
    - async fetch(location) -> list[RawEvent]   # [] means "synthesize"
cache.FreshnessCache
    - read(location_key) -> list[FeedItem] | None
    - write(location_key, items) -> None
random.Random
    - drives template picks, timestamps, jitter and breaking flags
clock
    - () -> aware datetime; used for cache age and item timestamps

Refresh ordering:
    Every refresh (and every location change) bumps a generation counter.
    A refresh only publishes if its generation is still current when the
    fetch resolves, so a slow refresh for an old location can never overwrite
    the feed or the cache of a newer one.

Logging:
    Respects settings.app.log_level (configured by the CLI) and emits concise
    progress lines under the "pipeline" logger.
"""

from __future__ import annotations

import logging
import random
from dataclasses import dataclass
from datetime import datetime
from typing import List, Optional, Sequence, Tuple

from . import filters
from .cache import FreshnessCache, JsonFileStore
from .location import LocationContext
from .models import Clock, FeedItem, utc_now
from .ranking import rank
from .settings import FeedConfig, Settings, SourceConfig
from .sources import FileSource, NewsSource, RawEvent, StubSource
from .synth import items_from_events, synthesize

log = logging.getLogger("pipeline")

FETCH_ERROR_MESSAGE = "Failed to fetch news"


# ------------------------ logging setup ------------------------


def _setup_logging(level: str) -> None:
    logging.basicConfig(
        level=getattr(logging, level, logging.INFO),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


# ------------------------ source dispatch ------------------------


def build_source(cfg: SourceConfig) -> NewsSource:
    if cfg.kind == "file":
        if cfg.events_file is None:
            raise RuntimeError("source.kind 'file' requires source.events_file")
        return FileSource(cfg.events_file, delay_seconds=cfg.delay_seconds)
    return StubSource(delay_seconds=cfg.delay_seconds)


# ------------------------ engine ------------------------


@dataclass(frozen=True)
class FeedSnapshot:
    news: Tuple[FeedItem, ...]
    loading: bool
    error: Optional[str]
    last_fetch: Optional[datetime]


class FeedEngine:
    def __init__(
        self,
        cache: FreshnessCache,
        source: NewsSource,
        *,
        feed: Optional[FeedConfig] = None,
        rng: Optional[random.Random] = None,
        clock: Clock = utc_now,
    ) -> None:
        self.cache = cache
        self.source = source
        self.feed = feed or FeedConfig()
        self.rng = rng or random.Random()
        self.clock = clock

        self._location: Optional[LocationContext] = None
        self._news: Tuple[FeedItem, ...] = ()
        self._loading = False
        self._error: Optional[str] = None
        self._last_fetch: Optional[datetime] = None
        self._generation = 0

    @classmethod
    def from_settings(
        cls,
        settings: Settings,
        *,
        rng: Optional[random.Random] = None,
        clock: Clock = utc_now,
    ) -> "FeedEngine":
        feed = settings.app.feed
        cache = FreshnessCache(
            JsonFileStore(settings.paths.cache_file),
            key=feed.cache_key,
            ttl=feed.cache_ttl,
            clock=clock,
        )
        return cls(cache, build_source(settings.app.source), feed=feed, rng=rng, clock=clock)

    # ---------------------- state ----------------------

    @property
    def location(self) -> Optional[LocationContext]:
        return self._location

    @property
    def generation(self) -> int:
        return self._generation

    def snapshot(self) -> FeedSnapshot:
        return FeedSnapshot(
            news=self._news,
            loading=self._loading,
            error=self._error,
            last_fetch=self._last_fetch,
        )

    # ---------------------- views ----------------------

    def news_by_category(self, category: Optional[str] = None) -> List[FeedItem]:
        return filters.by_category(self._news, category)

    def breaking_news(self) -> List[FeedItem]:
        return filters.breaking(self._news)

    def urgent_news(self) -> List[FeedItem]:
        return filters.urgent_or_high(self._news)

    # ---------------------- refresh ----------------------

    async def set_location(self, location: Optional[LocationContext]) -> FeedSnapshot:
        """
        Switch to a new location: publish a fresh cached feed for it if one
        exists, then run a refresh. An absent location leaves the engine idle.
        """
        self._location = location
        # any refresh still in flight belongs to the previous location
        self._generation += 1
        if location is None:
            self._loading = False
            return self.snapshot()

        cached = self.cache.read(location.location_key)
        if cached is not None:
            log.info("Serving %d cached item(s) for %s", len(cached), location.location_key)
            self._news = tuple(cached)
            self._last_fetch = self.clock()

        await self.refresh()
        return self.snapshot()

    async def refresh(self) -> FeedSnapshot:
        location = self._location
        if location is None:
            return self.snapshot()

        self._generation += 1
        generation = self._generation
        self._loading = True
        self._error = None

        try:
            events = await self.source.fetch(location)
            items = self._build(location, events)
        except Exception as e:
            if generation != self._generation:
                log.debug("Dropping error from superseded refresh #%d: %s", generation, e)
                return self.snapshot()
            log.error("Error fetching city news for %s: %s", location.location_key, e)
            self._error = str(e) or FETCH_ERROR_MESSAGE
            self._loading = False
            return self.snapshot()

        if generation != self._generation:
            log.debug("Discarding superseded refresh #%d for %s", generation, location.location_key)
            return self.snapshot()

        self._publish(location, items)
        return self.snapshot()

    def _build(self, location: LocationContext, events: Sequence[RawEvent]) -> List[FeedItem]:
        items: List[FeedItem] = []
        if events:
            items = items_from_events(events, location, clock=self.clock)
            if not items:
                log.warning("All %d source event(s) were malformed; synthesizing instead.", len(events))
        if not items:
            items = synthesize(
                location,
                self.feed.item_count,
                rng=self.rng,
                clock=self.clock,
                breaking_probability=self.feed.breaking_probability,
                jitter_degrees=self.feed.jitter_degrees,
                window=self.feed.recency_window,
            )
        return rank(items)

    def _publish(self, location: LocationContext, items: List[FeedItem]) -> None:
        self._news = tuple(items)
        self._last_fetch = self.clock()
        self._loading = False
        self.cache.write(location.location_key, self._news)
        log.info(
            "Published %d item(s) for %s (%d breaking).",
            len(self._news),
            location.location_key,
            len(filters.breaking(self._news)),
        )


# ------------------------ public entrypoint ------------------------


async def run(
    settings: Settings,
    location: LocationContext,
    *,
    rng: Optional[random.Random] = None,
) -> FeedSnapshot:
    """One-shot: build an engine from settings and load the feed for `location`."""
    engine = FeedEngine.from_settings(settings, rng=rng)
    return await engine.set_location(location)
