# src/coastal_news/models.py
"""
Feed item model shared by the synthesizer, ranker, cache and views.

Serialized with camelCase keys (`publishedAt`, `relevanceScore`, `isBreaking`)
and ISO-8601 UTC timestamps so cached feeds round-trip losslessly.
"""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Callable, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator
from pydantic.alias_generators import to_camel

from .catalog import Category, Urgency

Clock = Callable[[], datetime]


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


class _Model(BaseModel):
    model_config = ConfigDict(frozen=True, alias_generator=to_camel, populate_by_name=True)


class ItemLocation(_Model):
    lat: float
    lng: float
    region: str


class FeedItem(_Model):
    id: str
    title: str
    description: str = ""
    category: Category
    urgency: Urgency
    source: str
    published_at: datetime
    url: Optional[str] = None
    image_url: Optional[str] = None
    location: Optional[ItemLocation] = None
    relevance_score: float = Field(ge=0.0, le=1.0)
    is_breaking: bool = False

    @field_validator("published_at")
    @classmethod
    def _as_utc(cls, v: datetime) -> datetime:
        # naive timestamps are taken as UTC
        if v.tzinfo is None:
            return v.replace(tzinfo=timezone.utc)
        return v.astimezone(timezone.utc)

    @model_validator(mode="after")
    def _breaking_needs_urgent(self) -> "FeedItem":
        if self.is_breaking and self.urgency != "urgent":
            raise ValueError("only urgent items can be flagged as breaking")
        return self

    def to_json(self) -> dict:
        return self.model_dump(mode="json", by_alias=True, exclude_none=True)
