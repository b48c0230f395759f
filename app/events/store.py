# app/events/store.py
import logging
from dataclasses import dataclass, replace
from datetime import date

from app.shared.rwlock import RWLock

logger = logging.getLogger(__name__)


@dataclass
class Event:
    user_id: int
    date: date
    title: str
    text: str


class EventNotFound(KeyError):
    def __init__(self, user_id: int, day: date):
        super().__init__("event not found")
        self.user_id = user_id
        self.date = day

    def __str__(self):
        return "event not found"


class EventStore:
    """
    In-memory calendar events, partitioned by user_id.

    Each partition keeps insertion order. (user_id, date) is how update/delete
    find an event, but duplicates are allowed: they act on the first match only.
    One RWLock guards the whole store; mutations take it exclusively.
    """

    def __init__(self):
        self._lock = RWLock()
        self._events: dict[int, list[Event]] = {}

    def create(self, event: Event) -> None:
        with self._lock.write():
            self._events.setdefault(event.user_id, []).append(replace(event))
        logger.debug("created event user_id=%s date=%s", event.user_id, event.date)

    def update(self, user_id: int, day: date, title: str, text: str) -> None:
        with self._lock.write():
            for e in self._events.get(user_id, []):
                if e.date == day:
                    e.title = title
                    e.text = text
                    break
            else:
                raise EventNotFound(user_id, day)
        logger.debug("updated event user_id=%s date=%s", user_id, day)

    def delete(self, user_id: int, day: date) -> None:
        with self._lock.write():
            arr = self._events.get(user_id, [])
            for i, e in enumerate(arr):
                if e.date == day:
                    del arr[i]
                    break
            else:
                raise EventNotFound(user_id, day)
        logger.debug("deleted event user_id=%s date=%s", user_id, day)

    def query_range(self, user_id: int, start: date, end: date) -> list[Event]:
        """Events with start <= date <= end, in insertion order. Returns copies."""
        with self._lock.read():
            return [replace(e) for e in self._events.get(user_id, []) if start <= e.date <= end]

    def snapshot(self, user_id: int) -> list[Event]:
        with self._lock.read():
            return [replace(e) for e in self._events.get(user_id, [])]
