"""Route specificity ordering.

A router that matches in registration order must see ``/a/b`` before
``/a`` before ``/``, otherwise the shorter pattern shadows the longer one.
"""

from collections.abc import Iterable
from dataclasses import dataclass
from pathlib import Path

from autoroute._types import RoutePath
from autoroute.routes.paths import route_depth


@dataclass(frozen=True, slots=True)
class ControllerInfo:
    """A resolved controller file and the route derived from it.

    Attributes:
        path: Absolute path of the surviving controller variant.
        route: URL route derived from *path* (e.g. ``/sub-path/sub-test``).

    """

    path: Path
    route: RoutePath

    @property
    def depth(self) -> int:
        """Number of non-empty route segments."""
        return route_depth(self.route)


def sort_by_specificity(infos: Iterable[ControllerInfo]) -> list[ControllerInfo]:
    """Order controllers deepest route first.

    The sort is stable: controllers of equal depth keep encounter order.
    """
    return sorted(infos, key=lambda info: -info.depth)
