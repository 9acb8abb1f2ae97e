# src/coastal_news/__init__.py
"""
coastal-news package init.

Exports
-------
__version__ : str
run(location) : convenience wrapper loading the feed for one location with default settings
"""

from __future__ import annotations

import asyncio
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from .location import LocationContext
    from .pipeline import FeedSnapshot

# Bump this when you tag releases; used by the CLI.
__version__ = "0.1.0"


def run(location: "LocationContext") -> "FeedSnapshot":
    """
    Convenience runner:
        from coastal_news import run
        from coastal_news.location import profile_location
        snap = run(profile_location(13.08, 80.27, "Chennai", "Tamil Nadu"))
    Equivalent to: Settings.load() → asyncio.run(pipeline.run(settings, location))
    """
    from . import pipeline
    from .settings import Settings

    settings = Settings.load()
    return asyncio.run(pipeline.run(settings, location))


__all__ = ["__version__", "run"]
