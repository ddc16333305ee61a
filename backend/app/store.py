from __future__ import annotations

import asyncio
from dataclasses import asdict, dataclass
from datetime import datetime, timezone
from threading import Lock
from typing import Any, Dict, List, Optional, Tuple
from uuid import uuid4

from .config import DEFAULT_HISTORY_LIMIT, ServiceConfig

PREVIEW_CHARS = 50


@dataclass
class HistoryEntry:
    entry_id: str
    timestamp: str
    language: str
    preview: str
    health_score: int
    issue_count: int

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


def make_preview(code: str) -> str:
    return code[:PREVIEW_CHARS] + "..."


class HistoryStore:
    """
    Recent analyses, newest first, bounded to `limit` entries.

    Subscribers receive each new entry on their asyncio queue. Entries are
    usually recorded from FastAPI's worker threads, so delivery goes through
    the subscriber's own event loop.
    """

    def __init__(self, limit: int = DEFAULT_HISTORY_LIMIT) -> None:
        self.limit = limit
        self._entries: List[HistoryEntry] = []
        self._subscribers: List[Tuple[asyncio.AbstractEventLoop, asyncio.Queue]] = []
        self._lock = Lock()

    def record(self, language: str, code: str, health_score: int, issue_count: int) -> HistoryEntry:
        entry = HistoryEntry(
            entry_id=f"an_{uuid4().hex[:8]}",
            timestamp=datetime.now(timezone.utc).isoformat().replace("+00:00", "Z"),
            language=language,
            preview=make_preview(code),
            health_score=health_score,
            issue_count=issue_count,
        )
        with self._lock:
            self._entries.insert(0, entry)
            del self._entries[self.limit:]
            subscribers = list(self._subscribers)

        event = entry.to_dict()
        for loop, queue in subscribers:
            try:
                loop.call_soon_threadsafe(queue.put_nowait, event)
            except RuntimeError:
                # loop already closed; the subscriber is gone
                self.unsubscribe(queue)
        return entry

    def list_entries(self) -> List[HistoryEntry]:
        with self._lock:
            return list(self._entries)

    def get_entry(self, entry_id: str) -> Optional[HistoryEntry]:
        with self._lock:
            for entry in self._entries:
                if entry.entry_id == entry_id:
                    return entry
        return None

    def clear(self) -> None:
        with self._lock:
            self._entries.clear()

    def subscribe(self) -> asyncio.Queue:
        """Must be called from the event loop that will consume the queue."""
        queue: asyncio.Queue = asyncio.Queue()
        loop = asyncio.get_running_loop()
        with self._lock:
            self._subscribers.append((loop, queue))
        return queue

    def unsubscribe(self, queue: asyncio.Queue) -> None:
        with self._lock:
            self._subscribers = [(lp, q) for lp, q in self._subscribers if q is not queue]


history_store = HistoryStore(limit=ServiceConfig.from_env().history_limit)
