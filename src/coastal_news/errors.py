# src/coastal_news/errors.py
"""
Error taxonomy for the feed engine.

FetchFailure      raised by a news source during refresh; the engine turns it
                  into a user-visible message and keeps the last live feed.
CacheReadFailure  / CacheWriteFailure
                  raised inside the cache layer only; always caught there,
                  logged, and degraded to "no cache".
"""

from __future__ import annotations


class FeedError(Exception):
    """Base class for engine errors."""


class FetchFailure(FeedError):
    pass


class CacheReadFailure(FeedError):
    pass


class CacheWriteFailure(FeedError):
    pass
