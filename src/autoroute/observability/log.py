"""Event log — bounded, lock-protected store of route events.

Keeps the most recent events in a ring buffer and answers simple
filtered queries (event type, age, path substring, HTTP verb).

Thread Safety:
    Every access goes through one ``threading.Lock``; request handlers may
    record and query concurrently.

"""

import threading
from collections import Counter, deque
from collections.abc import Iterable
from typing import Any

# Attributes searched, in order, by the ``path`` filter
_PATH_FIELDS: tuple[str, ...] = ("path", "pattern", "source")


class EventLog:
    """Ring buffer of events with query helpers.

    Once ``max_events`` is reached the oldest event is dropped for each new
    one.

    Args:
        max_events: Capacity of the buffer.

    """

    __slots__ = ("_events", "_lock", "_max_events")

    def __init__(self, max_events: int = 10_000) -> None:
        self._max_events = max_events
        self._events: deque[Any] = deque(maxlen=max_events)
        self._lock = threading.Lock()

    def append(self, event: Any) -> None:
        """Store one event."""
        with self._lock:
            self._events.append(event)

    def append_many(self, events: Iterable[Any]) -> None:
        """Store several events under a single lock acquisition."""
        with self._lock:
            self._events.extend(events)

    def query(
        self,
        *,
        event_type: type | None = None,
        since_ns: int = 0,
        path: str | None = None,
        verb: str | None = None,
        limit: int = 100,
    ) -> list[Any]:
        """Return matching events, newest first.

        Args:
            event_type: Keep only instances of this class.
            since_ns: Keep only events stamped at or after this time.
            path: Keep only events whose ``path``, ``pattern`` or ``source``
                contains this substring.
            verb: Keep only events carrying this HTTP verb.
            limit: Stop after this many matches.

        """
        with self._lock:
            snapshot = list(self._events)

        matches: list[Any] = []
        for event in reversed(snapshot):
            if len(matches) >= limit:
                break
            if event_type is not None and not isinstance(event, event_type):
                continue
            if since_ns and getattr(event, "timestamp_ns", 0) < since_ns:
                continue
            if path is not None and path not in _event_path(event):
                continue
            if verb is not None and getattr(event, "verb", None) != verb:
                continue
            matches.append(event)
        return matches

    def recent(self, n: int = 20) -> list[Any]:
        """The last *n* events, oldest first."""
        with self._lock:
            snapshot = list(self._events)
        return snapshot[-n:]

    def clear(self) -> int:
        """Drop every stored event; return how many there were."""
        with self._lock:
            dropped = len(self._events)
            self._events.clear()
        return dropped

    def stats(self) -> dict[str, Any]:
        """Totals per event class plus buffer capacity."""
        with self._lock:
            snapshot = list(self._events)
        return {
            "total": len(snapshot),
            "max_events": self._max_events,
            "by_type": dict(Counter(type(event).__name__ for event in snapshot)),
        }

    def __len__(self) -> int:
        with self._lock:
            return len(self._events)


def _event_path(event: Any) -> str:
    for name in _PATH_FIELDS:
        value = getattr(event, name, None)
        if value:
            return str(value)
    return ""
