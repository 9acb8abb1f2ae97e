from coastal_news import filters
from coastal_news.ranking import rank
from coastal_news.synth import synthesize


def _sample(item_factory):
    return [
        item_factory(category="cyclone", urgency="urgent", is_breaking=True, title="Cyclone"),
        item_factory(category="tsunami", urgency="high", title="Tsunami"),
        item_factory(category="weather", urgency="medium", title="Rain"),
        item_factory(category="safety", urgency="low", title="Beach"),
        item_factory(category="cyclone", urgency="medium", title="Recovery"),
    ]


def test_by_category(item_factory):
    items = _sample(item_factory)
    assert [i.title for i in filters.by_category(items, "cyclone")] == ["Cyclone", "Recovery"]
    assert filters.by_category(items, "emergency") == []


def test_by_category_without_category_returns_all(item_factory):
    items = _sample(item_factory)
    assert filters.by_category(items) == items
    assert filters.by_category(items, None) == items


def test_breaking(item_factory):
    assert [i.title for i in filters.breaking(_sample(item_factory))] == ["Cyclone"]


def test_urgent_or_high(item_factory):
    assert [i.title for i in filters.urgent_or_high(_sample(item_factory))] == ["Cyclone", "Tsunami"]


def test_views_are_idempotent(chennai, rng, clock):
    feed = rank(synthesize(chennai, rng=rng, clock=clock))
    snapshot = list(feed)
    assert filters.urgent_or_high(feed) == filters.urgent_or_high(feed)
    assert filters.breaking(feed) == filters.breaking(feed)
    assert filters.by_category(feed, "weather") == filters.by_category(feed, "weather")
    assert feed == snapshot


def test_ticker_text(item_factory):
    items = _sample(item_factory)
    assert filters.ticker_text(items, limit=2) == "Cyclone • Tsunami"
    assert filters.ticker_text([]) == ""
