# src/coastal_news/ranking.py
"""
Feed ordering.

Total order, highest priority first:
  1. breaking items before the rest
  2. adjusted score (relevance + urgency bonus), descending
  3. published time, most recent first
Exact ties keep their input order (`sorted` is stable).
"""

from __future__ import annotations

from typing import Dict, Iterable, List, Tuple

from .models import FeedItem

URGENCY_BONUS: Dict[str, float] = {"urgent": 0.3, "high": 0.2}


def adjusted_score(item: FeedItem) -> float:
    return item.relevance_score + URGENCY_BONUS.get(item.urgency, 0.0)


def _sort_key(item: FeedItem) -> Tuple[bool, float, float]:
    return (not item.is_breaking, -adjusted_score(item), -item.published_at.timestamp())


def rank(items: Iterable[FeedItem]) -> List[FeedItem]:
    return sorted(items, key=_sort_key)
