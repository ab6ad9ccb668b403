"""Declarative route table.

``RouteTable`` is the default router: an append-only, ordered list of
``RouteEntry`` records.  It performs no matching; the hosting framework
mounts the entries in table order (see ``autoroute.app.mount_routes``).

Any object with a compatible ``add(verb, pattern, handler)`` method can be
used in its place.
"""

from __future__ import annotations

from collections.abc import Iterator
from dataclasses import dataclass
from pathlib import Path
from typing import Protocol

from autoroute._types import HttpVerb, RouteHandler, RoutePath


class Router(Protocol):
    """What the builder needs from a router."""

    def add(
        self,
        verb: HttpVerb,
        pattern: RoutePath,
        handler: RouteHandler,
        *,
        action: str = "",
        source: Path | None = None,
    ) -> None: ...


@dataclass(frozen=True, slots=True)
class RouteEntry:
    """A single registered (verb, pattern, handler) triple.

    Attributes:
        verb: Lower-case HTTP verb.
        pattern: URL pattern, ``:id`` marks the identifier segment.
        handler: Request adapter shared by every pattern of one action.
        action: Controller action name the handler invokes.
        source: Controller file the action was loaded from, if any.

    """

    verb: HttpVerb
    pattern: RoutePath
    handler: RouteHandler
    action: str = ""
    source: Path | None = None


class RouteTable:
    """Ordered, append-only collection of route entries."""

    __slots__ = ("_entries",)

    def __init__(self) -> None:
        self._entries: list[RouteEntry] = []

    def add(
        self,
        verb: HttpVerb,
        pattern: RoutePath,
        handler: RouteHandler,
        *,
        action: str = "",
        source: Path | None = None,
    ) -> None:
        """Append an entry; entries are never reordered or removed."""
        self._entries.append(
            RouteEntry(verb=verb, pattern=pattern, handler=handler, action=action, source=source)
        )

    @property
    def entries(self) -> tuple[RouteEntry, ...]:
        """Snapshot of the registered entries in registration order."""
        return tuple(self._entries)

    def describe(self) -> list[tuple[HttpVerb, RoutePath]]:
        """Return ``(verb, pattern)`` pairs in registration order."""
        return [(entry.verb, entry.pattern) for entry in self._entries]

    def __iter__(self) -> Iterator[RouteEntry]:
        return iter(tuple(self._entries))

    def __len__(self) -> int:
        return len(self._entries)

    def __repr__(self) -> str:
        return f"RouteTable({len(self._entries)} entries)"
