# src/coastal_news/cache.py
"""
Single-slot freshness cache for the last ranked feed.

Goals
-----
- Serve the previous feed instantly when the user is still in the same place
  and the feed is younger than the TTL (30 minutes by default).
- Keep storage behind a tiny key/value protocol so tests (and hosts) can inject
  their own backend.
- Never fail the caller: unreadable, corrupt or unwritable storage is logged
  and treated as "no cache".

Data model (string value stored under `key`)
--------------------------------------------
{
  "news": [ {FeedItem JSON, camelCase keys}, ... ],
  "timestamp": "2025-10-01T12:34:56.123456Z",
  "location": "Chennai"
}

Public API
----------
Store protocol:       get(key) -> str | None ; set(key, value) -> None
MemoryStore()         in-process dict backend
JsonFileStore(path)   JSON file backend with atomic writes
FreshnessCache(store, key=..., ttl=..., clock=...)
cache.read(location_key) -> list[FeedItem] | None
cache.write(location_key, items) -> None
"""

from __future__ import annotations

import json
import logging
from datetime import datetime, timedelta, timezone
from pathlib import Path
from typing import Any, Dict, Iterable, List, Optional, Protocol

from pydantic import TypeAdapter, ValidationError

from .errors import CacheReadFailure, CacheWriteFailure
from .models import Clock, FeedItem, utc_now

log = logging.getLogger("cache")

DEFAULT_KEY = "coastal_news_city_news"
DEFAULT_TTL = timedelta(minutes=30)

_ITEMS = TypeAdapter(List[FeedItem])


# --------------------------- storage backends ---------------------------


class Store(Protocol):
    def get(self, key: str) -> Optional[str]: ...

    def set(self, key: str, value: str) -> None: ...


class MemoryStore:
    def __init__(self) -> None:
        self._data: Dict[str, str] = {}

    def get(self, key: str) -> Optional[str]:
        return self._data.get(key)

    def set(self, key: str, value: str) -> None:
        self._data[key] = value


class JsonFileStore:
    """
    Key/value strings in one JSON file. Writes go to a temp file in the same
    directory and then `replace()` the target, so a crash never leaves a
    half-written file behind.
    """

    version = 1

    def __init__(self, path: Path) -> None:
        self.path = Path(path)

    def _load(self) -> Dict[str, str]:
        if not self.path.exists():
            return {}
        data = json.loads(self.path.read_text(encoding="utf-8"))
        entries = data.get("entries", {}) if isinstance(data, dict) else {}
        if not isinstance(entries, dict):
            return {}
        return {k: v for k, v in entries.items() if isinstance(v, str)}

    def get(self, key: str) -> Optional[str]:
        return self._load().get(key)

    def set(self, key: str, value: str) -> None:
        try:
            entries = self._load()
        except ValueError:
            # corrupt file; keep a copy for inspection and start fresh
            log.warning("Corrupt cache file %s; backing up and starting fresh", self.path)
            self.path.replace(self.path.with_suffix(".json.bak"))
            entries = {}
        entries[key] = value
        self.path.parent.mkdir(parents=True, exist_ok=True)
        tmp = self.path.with_suffix(".json.tmp")
        payload = {"version": self.version, "entries": entries}
        tmp.write_text(json.dumps(payload, ensure_ascii=False, indent=2), encoding="utf-8")
        tmp.replace(self.path)


# --------------------------- helpers ---------------------------


def _iso(ts: datetime) -> str:
    return ts.astimezone(timezone.utc).isoformat().replace("+00:00", "Z")


def _parse_iso(ts: Any) -> datetime:
    if not isinstance(ts, str) or not ts:
        raise ValueError(f"invalid timestamp {ts!r}")
    parsed = datetime.fromisoformat(ts.replace("Z", "+00:00"))
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed


# --------------------------- cache ---------------------------


class FreshnessCache:
    def __init__(
        self,
        store: Store,
        *,
        key: str = DEFAULT_KEY,
        ttl: timedelta = DEFAULT_TTL,
        clock: Clock = utc_now,
    ) -> None:
        self.store = store
        self.key = key
        self.ttl = ttl
        self.clock = clock

    def _load(self) -> Optional[Dict[str, Any]]:
        try:
            raw = self.store.get(self.key)
            if raw is None:
                return None
            data = json.loads(raw)
            if not isinstance(data, dict):
                raise ValueError("cache entry is not an object")
            return {
                "timestamp": _parse_iso(data.get("timestamp")),
                "location": data.get("location"),
                "news": data.get("news"),
            }
        except Exception as exc:
            raise CacheReadFailure(str(exc)) from exc

    def read(self, location_key: str) -> Optional[List[FeedItem]]:
        """Return cached items for `location_key` if fresh, else None."""
        try:
            entry = self._load()
            if entry is None:
                return None
            age = self.clock() - entry["timestamp"]
            if age >= self.ttl or entry["location"] != location_key:
                return None
            return _ITEMS.validate_python(entry["news"])
        except ValidationError as exc:
            log.warning("Discarding malformed cached feed: %s", exc.error_count())
            return None
        except CacheReadFailure as exc:
            log.warning("Error reading cached feed: %s", exc)
            return None

    def _save(self, payload: Dict[str, Any]) -> None:
        try:
            self.store.set(self.key, json.dumps(payload, ensure_ascii=False))
        except Exception as exc:
            raise CacheWriteFailure(str(exc)) from exc

    def write(self, location_key: str, items: Iterable[FeedItem]) -> None:
        """Replace the single slot. Failures are logged, never raised."""
        payload = {
            "news": [item.to_json() for item in items],
            "timestamp": _iso(self.clock()),
            "location": location_key,
        }
        try:
            self._save(payload)
        except CacheWriteFailure as exc:
            log.warning("Error writing cached feed: %s", exc)
