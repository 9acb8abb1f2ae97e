# src/coastal_news/cli.py
"""
Command-line entrypoint for coastal-news.

Goals
-----
- Happy path: `python -m coastal_news --city Chennai --state "Tamil Nadu" --lat 13.08 --lng 80.27`
  prints the ranked feed for that location.
- Useful flags:
    --config-dir PATH      Override ./config (also via COASTAL_NEWS_CONFIG_DIR)
    --root PATH            Override repo root (also via COASTAL_NEWS_ROOT)
    --risk / --zone        Override the derived risk level / coastal zone
    --category / --breaking / --urgent   Filtered views of the feed
    --seed N               Reproducible synthesis
    --json                 Machine-readable output
    --print-settings       Dump effective settings and exit
    --version              Print version and exit

Exit codes
----------
0  success
1  configuration error (missing/invalid config or location)
2  runtime error (including a refresh that ended with an error)
"""

from __future__ import annotations

import argparse
import asyncio
import json
import os
import random
import sys
from pathlib import Path
from typing import Any, Dict, List, Optional

from pydantic import ValidationError

from . import __version__ as PKG_VERSION
from . import filters, pipeline
from .catalog import CATEGORIES
from .location import LocationContext, profile_location
from .models import FeedItem
from .settings import Settings


def _parse_args(argv: List[str]) -> argparse.Namespace:
    p = argparse.ArgumentParser(
        prog="coastal-news",
        description="Location-aware coastal hazard news feed.",
    )
    p.add_argument("--config-dir", type=Path, help="Override config directory")
    p.add_argument("--root", type=Path, help="Override repo root")
    p.add_argument("--lat", type=float, help="Latitude in degrees")
    p.add_argument("--lng", type=float, help="Longitude in degrees")
    p.add_argument("--city", default="", help="City name (empty means unknown)")
    p.add_argument("--state", default="", help="State / province name")
    p.add_argument("--risk", choices=["low", "medium", "high", "critical"], help="Risk level override")
    p.add_argument("--zone", choices=["north", "south", "east", "west"], help="Coastal zone override")
    views = p.add_mutually_exclusive_group()
    views.add_argument("--category", choices=list(CATEGORIES), help="Only items of this category")
    views.add_argument("--breaking", action="store_true", help="Only breaking items")
    views.add_argument("--urgent", action="store_true", help="Only urgent or high items")
    p.add_argument("--limit", type=int, default=None, help="Print at most N items")
    p.add_argument("--seed", type=int, default=None, help="Seed for reproducible feeds")
    p.add_argument("--json", action="store_true", help="Print JSON instead of text")
    p.add_argument("--print-settings", action="store_true", help="Print effective settings and exit")
    p.add_argument("--version", action="store_true", help="Print version and exit")
    return p.parse_args(argv)


def _location_from_args(ns: argparse.Namespace) -> LocationContext:
    if ns.lat is None or ns.lng is None:
        raise ValueError("--lat and --lng are required")
    loc = profile_location(ns.lat, ns.lng, ns.city, ns.state)
    overrides: Dict[str, Any] = {}
    if ns.risk:
        overrides["risk_level"] = ns.risk
    if ns.zone:
        overrides["coastal_zone"] = ns.zone
    return loc.model_copy(update=overrides) if overrides else loc


def _select(ns: argparse.Namespace, items: List[FeedItem]) -> List[FeedItem]:
    if ns.breaking:
        chosen = filters.breaking(items)
    elif ns.urgent:
        chosen = filters.urgent_or_high(items)
    else:
        chosen = filters.by_category(items, ns.category)
    if ns.limit is not None:
        chosen = chosen[: max(ns.limit, 0)]
    return chosen


def _format_item(item: FeedItem) -> str:
    flag = "BREAKING " if item.is_breaking else ""
    when = item.published_at.strftime("%Y-%m-%d %H:%M UTC")
    return (
        f"{flag}[{item.urgency.upper()}] {item.title}\n"
        f"    {item.category} | {item.source} | {when} | relevance {item.relevance_score:.2f}"
    )


def main(argv: Optional[List[str]] = None) -> int:
    ns = _parse_args(argv if argv is not None else sys.argv[1:])

    if ns.version:
        print(f"coastal-news {PKG_VERSION}")
        return 0

    # Environment overrides (allow CLI to take precedence)
    if ns.root:
        os.environ["COASTAL_NEWS_ROOT"] = str(ns.root.expanduser())
    if ns.config_dir:
        os.environ["COASTAL_NEWS_CONFIG_DIR"] = str(ns.config_dir.expanduser())

    try:
        settings = Settings.load(root=ns.root.expanduser() if ns.root else None)
    except Exception as e:
        print(f"[config] {e}", file=sys.stderr)
        return 1

    if ns.print_settings:
        print(json.dumps(settings.model_dump(mode="json"), indent=2, ensure_ascii=False))
        return 0

    try:
        location = _location_from_args(ns)
    except (ValueError, ValidationError) as e:
        print(f"[config] {e}", file=sys.stderr)
        return 1

    pipeline._setup_logging(settings.app.log_level)
    rng = random.Random(ns.seed) if ns.seed is not None else None

    try:
        snap = asyncio.run(pipeline.run(settings, location, rng=rng))
    except Exception as e:
        print(f"[runtime] {e}", file=sys.stderr)
        return 2
    if snap.error:
        print(f"[runtime] {snap.error}", file=sys.stderr)
        return 2

    items = _select(ns, list(snap.news))
    if ns.json:
        out = {
            "location": location.model_dump(mode="json", by_alias=True),
            "lastFetch": snap.last_fetch.isoformat() if snap.last_fetch else None,
            "news": [i.to_json() for i in items],
        }
        print(json.dumps(out, indent=2, ensure_ascii=False))
        return 0

    print(f"{location.region} ({location.risk_level} risk, {location.coastal_zone or 'inland'} coast)")
    if not items:
        print("No news items.")
    for item in items:
        print(_format_item(item))
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
