"""
Stale-view notifications for note pages.

List and detail reads always go to the database. Mutations report the views
they made stale (``/notes`` for the list, ``/notes/<id>`` for a detail) and the
most recent events are kept in a bounded buffer.
"""
import logging
from collections import deque
from datetime import datetime, timezone
from threading import Lock
from typing import Deque, List, NamedTuple, Optional

logger = logging.getLogger(__name__)

NOTES_LIST_PATH = "/notes"
MAX_STALE_EVENTS = 1000


def note_detail_path(note_id: str) -> str:
    return f"{NOTES_LIST_PATH}/{note_id}"


class StaleView(NamedTuple):
    user_id: str
    path: str
    at: datetime


class ViewInvalidator:

    def __init__(self, max_events: int = MAX_STALE_EVENTS):
        self._lock = Lock()
        self._events: Deque[StaleView] = deque(maxlen=max_events)

    def invalidate(self, user_id: str, *paths: str) -> int:
        """Mark ``user_id``'s views under ``paths`` stale. Returns the number of paths recorded."""
        now = datetime.now(timezone.utc)
        with self._lock:
            for path in paths:
                self._events.append(StaleView(user_id=user_id, path=path, at=now))

        logger.debug("Marked views stale for user %s: %s", user_id, paths)
        return len(paths)

    def recent(self, user_id: Optional[str] = None, limit: int = 50) -> List[StaleView]:
        """Newest first, optionally for one user only."""
        with self._lock:
            events = [event for event in self._events if user_id is None or event.user_id == user_id]
        return list(reversed(events))[: max(limit, 0)]
