"""
Recent-activity history.

Page visits are recorded newest-first into a small list kept in a
key-value store under a fixed key. Repeat visits to the same page within
the debounce window are ignored, and only the newest `max_items` entries
are kept.
"""

import json
import logging
import math
import time
from dataclasses import asdict
from pathlib import Path
from typing import Callable, Protocol

from .config import (
    ACTIVITY_CONFIG,
    ACTIVITY_DEBOUNCE_SECONDS,
    ACTIVITY_STORAGE_KEY,
    MAX_ACTIVITIES,
)
from .models import ActivityItem

logger = logging.getLogger(__name__)


class KeyValueStore(Protocol):
    def get(self, key: str) -> str | None: ...

    def set(self, key: str, value: str) -> None: ...

    def remove(self, key: str) -> None: ...


class InMemoryKeyValueStore:
    def __init__(self) -> None:
        self._data: dict[str, str] = {}

    def get(self, key: str) -> str | None:
        return self._data.get(key)

    def set(self, key: str, value: str) -> None:
        self._data[key] = value

    def remove(self, key: str) -> None:
        self._data.pop(key, None)


class JsonFileKeyValueStore:
    """Key-value pairs persisted as one JSON object on disk."""

    def __init__(self, path: Path | str) -> None:
        self.path = Path(path)

    def _read(self) -> dict[str, str]:
        if not self.path.exists():
            return {}
        try:
            data = json.loads(self.path.read_text(encoding="utf-8"))
        except ValueError:
            logger.warning("Ignoring unreadable state file %s", self.path)
            return {}
        if not isinstance(data, dict):
            logger.warning("Ignoring state file %s: expected a JSON object", self.path)
            return {}
        return data

    def _write(self, data: dict[str, str]) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        self.path.write_text(json.dumps(data), encoding="utf-8")

    def get(self, key: str) -> str | None:
        return self._read().get(key)

    def set(self, key: str, value: str) -> None:
        data = self._read()
        data[key] = value
        self._write(data)

    def remove(self, key: str) -> None:
        data = self._read()
        if data.pop(key, None) is not None:
            self._write(data)


class ActivityTracker:
    """Records page visits into a bounded, debounced history."""

    def __init__(
        self,
        store: KeyValueStore,
        clock: Callable[[], float] = time.time,
        debounce_seconds: float = ACTIVITY_DEBOUNCE_SECONDS,
        max_items: int = MAX_ACTIVITIES,
        storage_key: str = ACTIVITY_STORAGE_KEY,
    ) -> None:
        self.store = store
        self.clock = clock
        self.debounce_seconds = debounce_seconds
        self.max_items = max_items
        self.storage_key = storage_key
        self._listeners: list[Callable[[], None]] = []

    def subscribe(self, listener: Callable[[], None]) -> Callable[[], None]:
        """Call `listener` after every change; returns an unsubscribe function.

        Unsubscribing more than once is a no-op.
        """
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def _notify(self) -> None:
        for listener in list(self._listeners):
            listener()

    def _now_ms(self) -> int:
        return int(self.clock() * 1000)

    def get_history(self) -> list[ActivityItem]:
        """Stored activities, newest first. Unreadable state yields []."""
        try:
            raw = self.store.get(self.storage_key)
            if not raw:
                return []
            return [ActivityItem(**item) for item in json.loads(raw)]
        except (ValueError, TypeError, OSError):
            logger.exception("Error reading activity history")
            return []

    def add_activity(self, path: str) -> ActivityItem | None:
        """Record a visit to `path`.

        Returns the new item, or None when the path is not tracked or the
        visit repeats the newest entry within the debounce window.
        """
        config = ACTIVITY_CONFIG.get(path)
        if config is None:
            return None

        activities = self.get_history()
        now_ms = self._now_ms()

        if activities and activities[0].path == path:
            if now_ms - activities[0].timestamp < self.debounce_seconds * 1000:
                return None

        item = ActivityItem(
            id=f"{path}-{now_ms}",
            icon=config["icon"],
            title=config["title"],
            description=config["description"],
            timestamp=now_ms,
            path=path,
            gradient=config["gradient"],
        )
        updated = [item, *activities][: self.max_items]

        try:
            self.store.set(self.storage_key, json.dumps([asdict(a) for a in updated]))
        except (ValueError, TypeError, OSError):
            logger.exception("Error adding activity for %s", path)
            return None

        self._notify()
        return item

    def clear(self) -> None:
        try:
            self.store.remove(self.storage_key)
        except (ValueError, OSError):
            logger.exception("Error clearing activity history")
            return
        self._notify()


def get_time_ago(timestamp_ms: int, now_ms: int | None = None) -> str:
    """Relative time label: "Just now", "5m ago", "3h ago", "2d ago", "1w ago", "2mo ago"."""
    if now_ms is None:
        now_ms = int(time.time() * 1000)
    seconds = math.floor((now_ms - timestamp_ms) / 1000)

    if seconds < 60:
        return "Just now"

    minutes = seconds // 60
    if minutes < 60:
        return f"{minutes}m ago"

    hours = minutes // 60
    if hours < 24:
        return f"{hours}h ago"

    days = hours // 24
    if days < 7:
        return f"{days}d ago"

    weeks = days // 7
    if weeks < 4:
        return f"{weeks}w ago"

    return f"{days // 30}mo ago"
