# src/coastal_news/filters.py
"""
Read-only views over a ranked feed. Input order is preserved and nothing is
mutated, so calling a view twice on the same feed gives the same result.

Public API
----------
by_category(items, category=None) -> list[FeedItem]
breaking(items)                   -> list[FeedItem]
urgent_or_high(items)             -> list[FeedItem]
ticker_text(items, limit=None)    -> str
"""

from __future__ import annotations

from typing import Iterable, List, Optional, Sequence

from .models import FeedItem

_URGENT_TIERS = {"urgent", "high"}

TICKER_SEPARATOR = " • "


def by_category(items: Iterable[FeedItem], category: Optional[str] = None) -> List[FeedItem]:
    if not category:
        return list(items)
    return [i for i in items if i.category == category]


def breaking(items: Iterable[FeedItem]) -> List[FeedItem]:
    return [i for i in items if i.is_breaking]


def urgent_or_high(items: Iterable[FeedItem]) -> List[FeedItem]:
    return [i for i in items if i.urgency in _URGENT_TIERS]


def ticker_text(items: Sequence[FeedItem], limit: Optional[int] = None) -> str:
    """Join headlines for a scrolling ticker."""
    chosen = items[:limit] if limit is not None else items
    return TICKER_SEPARATOR.join(i.title for i in chosen if i.title)
