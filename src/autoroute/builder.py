"""Router builder — discover controllers and register their routes.

``Autoroute`` ties the pipeline together::

    discover -> resolve variants -> translate paths -> check conflicts
             -> sort by specificity -> load controllers -> register actions

Usage::

    from autoroute import Autoroute, RouteTable

    autoroute = Autoroute(RouteTable, {"read": "get", "create": "post"})
    table = autoroute.create_router("controllers/", meta_list=["user"])

The build runs once, synchronously.  Any error aborts it and no partially
populated router is returned.
"""

from __future__ import annotations

import dataclasses
import logging
import time
from collections.abc import Callable, Iterable, Mapping, Sequence
from pathlib import Path
from typing import TYPE_CHECKING

from autoroute._errors import DiscoveryError, RouteConflictError
from autoroute.actions import ActionsMap
from autoroute.config import AutorouteOptions
from autoroute.handler import create_route_handler
from autoroute.routes.discovery import find_controllers
from autoroute.routes.loader import load_controller
from autoroute.routes.ordering import ControllerInfo, sort_by_specificity
from autoroute.routes.paths import route_from_path
from autoroute.routes.registrar import register_controller
from autoroute.routes.resolver import resolve_unique

if TYPE_CHECKING:
    from autoroute._types import RouteHandler, RoutePath
    from autoroute.observability.collector import RouteCollector
    from autoroute.routes.controller import Controller
    from autoroute.routes.table import RouteEntry, Router

logger = logging.getLogger("autoroute")


class Autoroute[R: Router]:
    """Build routers from a directory of controller modules.

    Args:
        router_factory: Zero-argument callable returning an empty router.
        actions: Action name -> HTTP verb mapping.
        options: Builder options; keyword *overrides* replace single fields.
        collector: Optional event collector for build and request events.

    """

    __slots__ = ("actions", "collector", "options", "router_factory")

    def __init__(
        self,
        router_factory: Callable[[], R],
        actions: Mapping[str, str],
        options: AutorouteOptions | None = None,
        *,
        collector: RouteCollector | None = None,
        **overrides: object,
    ) -> None:
        base = options if options is not None else AutorouteOptions()
        self.router_factory = router_factory
        self.actions = ActionsMap.from_mapping(actions)
        self.options = dataclasses.replace(base, **overrides) if overrides else base
        self.collector = collector

    # -- Pipeline steps --

    def route_from_path(self, base_path: str | Path, file_path: str | Path) -> RoutePath:
        """Translate a controller file path into its URL route."""
        return route_from_path(base_path, file_path, self.options.extensions)

    def find_controllers(self, base_path: str | Path) -> list[Path]:
        """Enumerate candidate controller files under *base_path*."""
        return find_controllers(
            base_path,
            pattern=self.options.pattern,
            ignore=self.options.ignore,
            extensions=self.options.extensions,
        )

    def resolve_unique(self, paths: Iterable[str | Path]) -> list[Path]:
        """Keep one preferred variant per logical controller."""
        return resolve_unique(paths, self.options.extensions)

    def create_route_handler(
        self,
        controller: Controller,
        action: str,
        meta_list: Sequence[str] = (),
    ) -> RouteHandler:
        """Build the request handler for one controller action."""
        return create_route_handler(
            controller,
            action,
            meta_list=meta_list,
            on_request=self.options.on_request,
            on_response=self.options.on_response,
            collector=self.collector,
        )

    def register_controller(
        self,
        router: R,
        base_route: RoutePath,
        controller: Controller,
        meta_list: Sequence[str] = (),
        *,
        source: Path | None = None,
    ) -> list[RouteEntry]:
        """Register every mapped action of *controller* at *base_route*."""
        entries = register_controller(
            router,
            base_route,
            controller,
            self.actions,
            lambda ctrl, action: self.create_route_handler(ctrl, action, meta_list),
            source=source,
        )
        if self.collector is not None:
            src = str(source) if source is not None else controller.name
            for entry in entries:
                self.collector.record_route(
                    entry.verb, entry.pattern, action=entry.action, source=src,
                )
        return entries

    def controller_infos(self, base_path: str | Path) -> list[ControllerInfo]:
        """Discover, resolve and translate; return infos in registration order.

        Raises:
            DiscoveryError: If the directory cannot be enumerated or a file
                path has no URL form.
            RouteConflictError: If two non-variant files derive the same route.

        """
        root = Path(base_path).resolve()
        survivors = self.resolve_unique(self.find_controllers(root))
        infos: list[ControllerInfo] = []
        for path in survivors:
            try:
                route = self.route_from_path(root, path)
            except ValueError as exc:
                msg = f"Cannot derive a route for controller {path}: {exc}"
                raise DiscoveryError(msg) from exc
            infos.append(ControllerInfo(path=path, route=route))
        _check_conflicts(infos)
        return sort_by_specificity(infos)

    # -- Orchestration --

    def create_router(self, base_path: str | Path, meta_list: Sequence[str] = ()) -> R:
        """Build a router populated from the controllers under *base_path*.

        Raises:
            DiscoveryError: If the directory cannot be enumerated.
            LoadError: If a controller module fails to import.
            RouteConflictError: If two non-variant files derive the same route.

        """
        t0 = time.perf_counter()
        root = Path(base_path).resolve()
        infos = self.controller_infos(root)

        # Load everything before touching the router so a failing import
        # leaves nothing half-registered.
        loaded = [(info, load_controller(info.path, root)) for info in infos]

        router = self.router_factory()
        route_count = 0
        for info, controller in loaded:
            entries = self.register_controller(
                router, info.route, controller, meta_list, source=info.path,
            )
            route_count += len(entries)
            logger.debug(
                "registered %s -> %s (%d routes)", info.path, info.route, len(entries),
            )
            if self.collector is not None:
                self.collector.record_controller(
                    str(info.path), info.route, tuple(dict.fromkeys(e.action for e in entries)),
                )

        if self.collector is not None:
            self.collector.record_build(
                str(root),
                controllers=len(loaded),
                routes=route_count,
                duration_ms=(time.perf_counter() - t0) * 1000,
            )
        return router


def _check_conflicts(infos: Iterable[ControllerInfo]) -> None:
    """Fail when two distinct controllers derive the same route."""
    seen: dict[str, Path] = {}
    for info in infos:
        if info.route in seen:
            msg = (
                f"Duplicate route {info.route!r}: "
                f"derived from {seen[info.route]} and {info.path}"
            )
            raise RouteConflictError(msg)
        seen[info.route] = info.path
