from datetime import timedelta

import pytest

from coastal_news.ranking import adjusted_score, rank


def test_breaking_first_regardless_of_time(item_factory, clock):
    older_breaking = item_factory(
        urgency="urgent", relevance_score=0.6, is_breaking=True,
        published_at=clock.now - timedelta(hours=20),
    )
    newer_plain = item_factory(
        urgency="urgent", relevance_score=0.6, is_breaking=False,
        published_at=clock.now,
    )
    assert rank([newer_plain, older_breaking]) == [older_breaking, newer_plain]


def test_raw_score_can_outrank_urgency_bonus(item_factory):
    urgent = item_factory(urgency="urgent", relevance_score=0.5)
    low = item_factory(urgency="low", relevance_score=0.9)
    assert adjusted_score(urgent) == pytest.approx(0.8)
    assert adjusted_score(low) == pytest.approx(0.9)
    assert rank([urgent, low]) == [low, urgent]


def test_urgency_bonus_values(item_factory):
    assert adjusted_score(item_factory(urgency="high", relevance_score=0.5)) == pytest.approx(0.7)
    assert adjusted_score(item_factory(urgency="medium", relevance_score=0.5)) == pytest.approx(0.5)
    assert adjusted_score(item_factory(urgency="low", relevance_score=0.5)) == pytest.approx(0.5)


def test_recency_breaks_score_ties(item_factory, clock):
    old = item_factory(published_at=clock.now - timedelta(hours=3))
    new = item_factory(published_at=clock.now - timedelta(minutes=5))
    mid = item_factory(published_at=clock.now - timedelta(hours=1))
    assert [i.id for i in rank([old, new, mid])] == [new.id, mid.id, old.id]


def test_full_ties_keep_every_item(item_factory, clock):
    items = [item_factory(published_at=clock.now) for _ in range(5)]
    ranked = rank(items)
    assert len(ranked) == 5
    assert {i.id for i in ranked} == {i.id for i in items}


def test_empty_input():
    assert rank([]) == []
