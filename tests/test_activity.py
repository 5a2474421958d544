"""Tests for the recent-activity history and relative time labels."""
import json

import pytest

from textile_dashboard.activity import (
    ActivityTracker,
    InMemoryKeyValueStore,
    JsonFileKeyValueStore,
    get_time_ago,
)
from textile_dashboard.config import ACTIVITY_CONFIG, ACTIVITY_STORAGE_KEY

PATHS = list(ACTIVITY_CONFIG)


class FakeClock:
    def __init__(self, start=1_700_000_000.0):
        self.now = start

    def __call__(self):
        return self.now

    def advance(self, seconds):
        self.now += seconds


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def tracker(clock):
    return ActivityTracker(InMemoryKeyValueStore(), clock=clock)


class TestAddActivity:

    def test_records_item_from_config(self, tracker, clock):
        item = tracker.add_activity("/inventory")
        assert item.title == "Managed Inventory"
        assert item.icon == "Package"
        assert item.timestamp == int(clock.now * 1000)
        assert item.id == f"/inventory-{item.timestamp}"
        assert item.gradient == "bg-gradient-to-br from-teal-500 to-teal-600"
        assert tracker.get_history() == [item]

    def test_repeat_within_window_is_ignored(self, tracker, clock):
        tracker.add_activity("/inventory")
        clock.advance(5)
        assert tracker.add_activity("/inventory") is None
        assert len(tracker.get_history()) == 1

    def test_repeat_after_window_is_recorded(self, tracker, clock):
        tracker.add_activity("/inventory")
        clock.advance(10)
        assert tracker.add_activity("/inventory") is not None
        assert len(tracker.get_history()) == 2

    def test_debounce_only_checks_newest_entry(self, tracker, clock):
        tracker.add_activity("/inventory")
        clock.advance(1)
        tracker.add_activity("/settings")
        clock.advance(1)
        assert tracker.add_activity("/inventory") is not None
        assert [a.path for a in tracker.get_history()] == ["/inventory", "/settings", "/inventory"]

    def test_unknown_path_is_ignored(self, tracker):
        assert tracker.add_activity("/nowhere") is None
        assert tracker.get_history() == []

    def test_history_is_capped_newest_first(self, tracker, clock):
        visited = []
        for i in range(25):
            path = PATHS[i % len(PATHS)]
            tracker.add_activity(path)
            visited.append(path)
            clock.advance(1)

        history = tracker.get_history()
        assert len(history) == 10
        assert [a.path for a in history] == visited[::-1][:10]
        timestamps = [a.timestamp for a in history]
        assert timestamps == sorted(timestamps, reverse=True)

    def test_custom_capacity(self, clock):
        tracker = ActivityTracker(InMemoryKeyValueStore(), clock=clock, max_items=3)
        for path in PATHS[:5]:
            tracker.add_activity(path)
        assert len(tracker.get_history()) == 3


class TestHistoryStorage:

    def test_corrupt_value_reads_as_empty(self, clock):
        kv = InMemoryKeyValueStore()
        kv.set(ACTIVITY_STORAGE_KEY, "{not json")
        tracker = ActivityTracker(kv, clock=clock)
        assert tracker.get_history() == []
        # a fresh write replaces the corrupt value
        assert tracker.add_activity("/") is not None
        assert len(tracker.get_history()) == 1

    def test_wrong_shape_reads_as_empty(self, clock):
        kv = InMemoryKeyValueStore()
        kv.set(ACTIVITY_STORAGE_KEY, json.dumps([{"path": "/"}]))
        assert ActivityTracker(kv, clock=clock).get_history() == []

    def test_clear(self, tracker):
        tracker.add_activity("/")
        tracker.clear()
        assert tracker.get_history() == []

    def test_json_file_store_persists(self, tmp_path, clock):
        path = tmp_path / "state" / "activity.json"
        ActivityTracker(JsonFileKeyValueStore(path), clock=clock).add_activity("/book-library")

        reopened = ActivityTracker(JsonFileKeyValueStore(path), clock=clock)
        assert [a.path for a in reopened.get_history()] == ["/book-library"]

    def test_json_file_store_corrupt_file(self, tmp_path, clock):
        path = tmp_path / "activity.json"
        path.write_text("garbage", encoding="utf-8")
        assert ActivityTracker(JsonFileKeyValueStore(path), clock=clock).get_history() == []

    @pytest.mark.parametrize("content", ["garbage", "[1, 2, 3]"])
    def test_corrupt_file_is_replaced_on_add(self, tmp_path, clock, content):
        path = tmp_path / "activity.json"
        path.write_text(content, encoding="utf-8")
        tracker = ActivityTracker(JsonFileKeyValueStore(path), clock=clock)

        item = tracker.add_activity("/inventory")
        assert item is not None
        assert tracker.get_history() == [item]

    def test_clear_on_corrupt_file(self, tmp_path, clock):
        path = tmp_path / "activity.json"
        path.write_text("garbage", encoding="utf-8")
        tracker = ActivityTracker(JsonFileKeyValueStore(path), clock=clock)

        events = []
        tracker.subscribe(lambda: events.append("changed"))
        tracker.clear()
        assert tracker.get_history() == []
        assert events == ["changed"]


class TestListeners:

    def test_notified_on_add_and_clear(self, tracker, clock):
        events = []
        tracker.subscribe(lambda: events.append("changed"))
        tracker.add_activity("/")
        tracker.clear()
        assert events == ["changed", "changed"]

    def test_not_notified_when_ignored(self, tracker):
        events = []
        tracker.subscribe(lambda: events.append("changed"))
        tracker.add_activity("/unknown")
        assert events == []

    def test_unsubscribe(self, tracker):
        events = []
        unsubscribe = tracker.subscribe(lambda: events.append("changed"))
        unsubscribe()
        tracker.add_activity("/")
        assert events == []

    def test_unsubscribe_twice(self, tracker):
        events = []
        unsubscribe = tracker.subscribe(lambda: events.append("first"))
        tracker.subscribe(lambda: events.append("second"))
        unsubscribe()
        unsubscribe()
        tracker.add_activity("/")
        assert events == ["second"]

    def test_listener_sees_new_history(self, tracker):
        seen = []
        tracker.subscribe(lambda: seen.append([a.path for a in tracker.get_history()]))
        tracker.add_activity("/book-library")
        assert seen == [["/book-library"]]


class TestTimeAgo:

    NOW = 1_700_000_000_000

    @pytest.mark.parametrize("elapsed_s, expected", [
        (0, "Just now"),
        (59, "Just now"),
        (60, "1m ago"),
        (59 * 60, "59m ago"),
        (3600, "1h ago"),
        (23 * 3600, "23h ago"),
        (86400, "1d ago"),
        (6 * 86400, "6d ago"),
        (7 * 86400, "1w ago"),
        (27 * 86400, "3w ago"),
        (28 * 86400, "0mo ago"),
        (65 * 86400, "2mo ago"),
    ])
    def test_labels(self, elapsed_s, expected):
        assert get_time_ago(self.NOW - elapsed_s * 1000, now_ms=self.NOW) == expected
