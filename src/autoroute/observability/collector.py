"""Route collector — records build and request events into an ``EventLog``.

Also implements the ``record(event)`` lifecycle-collector protocol, so the
same collector can be handed to the server and receive its connection
events alongside autoroute's own.

Thread Safety:
    The collector delegates to ``EventLog`` which is internally locked.
    Safe for concurrent use from request handlers.

"""

from typing import Any

from autoroute.observability.events import (
    ActionCompleted,
    ActionFailed,
    ControllerRegistered,
    RouteRegistered,
    RouterBuilt,
    now_ns,
)
from autoroute.observability.log import EventLog


class RouteCollector:
    """Event collector for route building and request handling.

    Args:
        log: The EventLog to store events in.

    """

    __slots__ = ("_log",)

    def __init__(self, log: EventLog | None = None) -> None:
        self._log = log if log is not None else EventLog()

    @property
    def log(self) -> EventLog:
        """The underlying event log."""
        return self._log

    # ----- Lifecycle collector protocol -----

    def record(self, event: Any) -> None:
        """Record an externally produced event as-is."""
        self._log.append(event)

    # ----- Build events -----

    def record_controller(self, path: str, route: str, actions: tuple[str, ...]) -> None:
        """Record a registered controller."""
        self._log.append(
            ControllerRegistered(
                path=path,
                route=route,
                actions=actions,
                timestamp_ns=now_ns(),
            )
        )

    def record_route(self, verb: str, pattern: str, *, action: str = "", source: str = "") -> None:
        """Record a registered route entry."""
        self._log.append(
            RouteRegistered(
                verb=verb,
                pattern=pattern,
                action=action,
                source=source,
                timestamp_ns=now_ns(),
            )
        )

    def record_build(
        self,
        path: str,
        *,
        controllers: int = 0,
        routes: int = 0,
        duration_ms: float = 0.0,
    ) -> None:
        """Record a completed router build."""
        self._log.append(
            RouterBuilt(
                path=path,
                controllers=controllers,
                routes=routes,
                duration_ms=duration_ms,
                timestamp_ns=now_ns(),
            )
        )

    # ----- Request events -----

    def record_action(self, path: str, action: str, *, duration_ms: float = 0.0) -> None:
        """Record a successful action call."""
        self._log.append(
            ActionCompleted(
                path=path,
                action=action,
                duration_ms=duration_ms,
                timestamp_ns=now_ns(),
            )
        )

    def record_failure(
        self,
        path: str,
        action: str,
        error: BaseException,
        *,
        duration_ms: float = 0.0,
    ) -> None:
        """Record a failed action call."""
        self._log.append(
            ActionFailed(
                path=path,
                action=action,
                error=repr(error),
                duration_ms=duration_ms,
                timestamp_ns=now_ns(),
            )
        )

    # ----- Summary -----

    def summary(self) -> dict[str, Any]:
        """Return counts of registered routes and handled requests."""
        stats = self._log.stats()
        by_type = stats["by_type"]
        return {
            "controllers": by_type.get("ControllerRegistered", 0),
            "routes": by_type.get("RouteRegistered", 0),
            "actions_completed": by_type.get("ActionCompleted", 0),
            "actions_failed": by_type.get("ActionFailed", 0),
            "total_events": stats["total"],
        }
