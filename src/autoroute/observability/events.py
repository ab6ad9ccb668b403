"""Event model for route building and request handling.

All events are frozen dataclasses with:
- ``timestamp_ns``: Monotonic nanosecond timestamp
- Descriptive fields for the specific event type

Thread Safety:
    All events are frozen (immutable) and safe to share across threads.

"""

import time
from dataclasses import dataclass


# ---------------------------------------------------------------------------
# Build events
# ---------------------------------------------------------------------------


@dataclass(frozen=True, slots=True)
class ControllerRegistered:
    """A controller file was loaded and its actions registered.

    Attributes:
        path: Absolute path to the controller file.
        route: URL route derived from the file path.
        actions: Names of the actions that were registered.
        timestamp_ns: Monotonic nanosecond timestamp.

    """

    path: str
    route: str
    actions: tuple[str, ...]
    timestamp_ns: int


@dataclass(frozen=True, slots=True)
class RouteRegistered:
    """A single (verb, pattern) pair was added to the router.

    Attributes:
        verb: Lower-case HTTP verb.
        pattern: URL pattern.
        action: Controller action bound to the pattern.
        source: Controller file path.
        timestamp_ns: Monotonic nanosecond timestamp.

    """

    verb: str
    pattern: str
    action: str
    source: str
    timestamp_ns: int


@dataclass(frozen=True, slots=True)
class RouterBuilt:
    """A router build finished.

    Attributes:
        path: Controllers base directory.
        controllers: Number of controllers registered.
        routes: Number of route entries registered.
        duration_ms: Build time in milliseconds.
        timestamp_ns: Monotonic nanosecond timestamp.

    """

    path: str
    controllers: int
    routes: int
    duration_ms: float
    timestamp_ns: int


# ---------------------------------------------------------------------------
# Request events
# ---------------------------------------------------------------------------


@dataclass(frozen=True, slots=True)
class ActionCompleted:
    """A controller action returned successfully.

    Attributes:
        path: Original request URL.
        action: Action name.
        duration_ms: Time spent in the action in milliseconds.
        timestamp_ns: Monotonic nanosecond timestamp.

    """

    path: str
    action: str
    duration_ms: float
    timestamp_ns: int


@dataclass(frozen=True, slots=True)
class ActionFailed:
    """A controller action raised; the error was handed to the framework.

    Attributes:
        path: Original request URL.
        action: Action name.
        error: ``repr()`` of the exception.
        duration_ms: Time spent in the action in milliseconds.
        timestamp_ns: Monotonic nanosecond timestamp.

    """

    path: str
    action: str
    error: str
    duration_ms: float
    timestamp_ns: int


# ---------------------------------------------------------------------------
# Union type
# ---------------------------------------------------------------------------

type RouteEvent = (
    ControllerRegistered
    | RouteRegistered
    | RouterBuilt
    | ActionCompleted
    | ActionFailed
)


def now_ns() -> int:
    """Return the current monotonic clock value in nanoseconds."""
    return time.monotonic_ns()
