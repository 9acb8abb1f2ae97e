from __future__ import annotations

import random
from datetime import datetime, timedelta, timezone
from pathlib import Path
from typing import Any, Callable, Optional

import pytest

from coastal_news.cache import FreshnessCache, MemoryStore
from coastal_news.location import LocationContext
from coastal_news.models import FeedItem
from coastal_news.settings import AppConfig, FeedConfig, Paths, Settings, SourceConfig

T0 = datetime(2025, 11, 3, 10, 0, 0, tzinfo=timezone.utc)


# --------------------------- clock & randomness ---------------------------


class FakeClock:
    """Manually advanced clock returning aware UTC datetimes."""

    def __init__(self, start: datetime = T0) -> None:
        self.now = start

    def __call__(self) -> datetime:
        return self.now

    def advance(self, **kwargs: float) -> None:
        self.now = self.now + timedelta(**kwargs)


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def rng() -> random.Random:
    return random.Random(1234)


# --------------------------- locations ---------------------------


@pytest.fixture
def location_factory() -> Callable[..., LocationContext]:
    def _build(
        city: str = "Chennai",
        state: str = "Tamil Nadu",
        risk_level: str = "high",
        coastal_zone: Optional[str] = "east",
        lat: float = 13.08,
        lng: float = 80.27,
    ) -> LocationContext:
        return LocationContext(
            lat=lat,
            lng=lng,
            city=city,
            state=state,
            risk_level=risk_level,
            coastal_zone=coastal_zone,
        )

    return _build


@pytest.fixture
def chennai(location_factory) -> LocationContext:
    return location_factory()


# --------------------------- items ---------------------------


@pytest.fixture
def item_factory() -> Callable[..., FeedItem]:
    counter = {"n": 0}

    def _build(
        urgency: str = "medium",
        relevance_score: float = 0.5,
        is_breaking: bool = False,
        published_at: datetime = T0,
        category: str = "weather",
        **extra: Any,
    ) -> FeedItem:
        counter["n"] += 1
        return FeedItem(
            id=extra.pop("id", f"item_{counter['n']}"),
            title=extra.pop("title", f"Item {counter['n']}"),
            description=extra.pop("description", ""),
            category=category,
            urgency=urgency,
            source=extra.pop("source", "Test Desk"),
            published_at=published_at,
            relevance_score=relevance_score,
            is_breaking=is_breaking,
            **extra,
        )

    return _build


# --------------------------- cache ---------------------------


@pytest.fixture
def memory_store() -> MemoryStore:
    return MemoryStore()


@pytest.fixture
def cache(memory_store: MemoryStore, clock: FakeClock) -> FreshnessCache:
    return FreshnessCache(memory_store, clock=clock)


# --------------------------- Settings factory ---------------------------


@pytest.fixture
def tmp_repo(tmp_path: Path) -> Path:
    (tmp_path / "config").mkdir(parents=True, exist_ok=True)
    (tmp_path / "data").mkdir(parents=True, exist_ok=True)
    return tmp_path


@pytest.fixture
def settings_factory(tmp_repo: Path) -> Callable[..., Settings]:
    """Build Settings rooted at tmp_repo without reading real YAML/.env."""

    def _build(
        source: Optional[SourceConfig] = None,
        item_count: int = 18,
        log_level: str = "ERROR",
    ) -> Settings:
        paths = Paths(
            root=tmp_repo,
            config_dir=tmp_repo / "config",
            data_dir=tmp_repo / "data",
            cache_file=tmp_repo / "data" / "cache.json",
        )
        app = AppConfig(
            log_level=log_level,
            feed=FeedConfig(item_count=item_count),
            source=source or SourceConfig(kind="stub", delay_seconds=0),
        )
        return Settings(paths=paths, app=app)

    return _build
