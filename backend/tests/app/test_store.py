"""
Tests for the in-memory analysis history.
"""

import asyncio
import sys
import threading
from pathlib import Path

sys.path.insert(0, str(Path(__file__).resolve().parents[3]))

from backend.app.store import HistoryStore, make_preview


def test_newest_first_and_bounded():
    store = HistoryStore(limit=5)
    for i in range(7):
        store.record(language="python", code=f"code {i}", health_score=100 - i, issue_count=i)

    entries = store.list_entries()
    assert len(entries) == 5
    assert [e.issue_count for e in entries] == [6, 5, 4, 3, 2]


def test_entry_fields():
    store = HistoryStore()
    entry = store.record(language="go", code="x" * 80, health_score=70, issue_count=3)
    data = entry.to_dict()
    assert set(data) == {"entry_id", "timestamp", "language", "preview", "health_score", "issue_count"}
    assert data["preview"] == "x" * 50 + "..."
    assert data["timestamp"].endswith("Z")
    assert store.get_entry(entry.entry_id) == entry


def test_short_preview_still_gets_ellipsis():
    assert make_preview("abc") == "abc..."


def test_get_missing_entry():
    assert HistoryStore().get_entry("an_missing") is None


def test_subscriber_receives_entries_from_other_threads():
    store = HistoryStore()

    async def scenario():
        queue = store.subscribe()
        worker = threading.Thread(
            target=store.record,
            kwargs={"language": "rust", "code": "fn main() {}", "health_score": 100, "issue_count": 0},
        )
        worker.start()
        worker.join()
        event = await asyncio.wait_for(queue.get(), timeout=2.0)
        store.unsubscribe(queue)
        return event

    event = asyncio.run(scenario())
    assert event["language"] == "rust"
    assert event["preview"] == "fn main() {}..."


def test_unsubscribe_stops_delivery():
    store = HistoryStore()

    async def scenario():
        queue = store.subscribe()
        store.unsubscribe(queue)
        store.record(language="cpp", code="x", health_score=100, issue_count=0)
        await asyncio.sleep(0)
        return queue.qsize()

    assert asyncio.run(scenario()) == 0
