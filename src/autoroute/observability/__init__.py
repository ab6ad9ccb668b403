"""Observability — build and request events for autoroute.

Events are frozen dataclasses with nanosecond timestamps, safe for
concurrent production from multiple request handlers.

Quick Start:
    >>> from autoroute.observability import EventLog, RouteCollector
    >>> log = EventLog()
    >>> collector = RouteCollector(log)
    >>> # Pass collector to Autoroute(..., collector=collector)

"""

from autoroute.observability.collector import RouteCollector
from autoroute.observability.events import (
    ActionCompleted,
    ActionFailed,
    ControllerRegistered,
    RouteEvent,
    RouteRegistered,
    RouterBuilt,
    now_ns,
)
from autoroute.observability.log import EventLog

__all__ = [
    "ActionCompleted",
    "ActionFailed",
    "ControllerRegistered",
    "EventLog",
    "RouteCollector",
    "RouteEvent",
    "RouteRegistered",
    "RouterBuilt",
    "now_ns",
]
