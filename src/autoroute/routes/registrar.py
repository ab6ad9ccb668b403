"""Action registration — bind controller actions to verbs and patterns.

For every action of the actions map that a controller exports::

    head/get/put/patch/delete  ->  /users  and  /users/:id
    post                       ->  /users

At the root route only ``/`` is registered, never a bare ``/:id``.
"""

from collections.abc import Callable, Mapping
from pathlib import Path

from autoroute._types import HttpVerb, RouteHandler, RoutePath
from autoroute.actions import SINGULAR_VERBS
from autoroute.routes.controller import Controller
from autoroute.routes.paths import ROOT_ROUTE
from autoroute.routes.table import RouteEntry, Router

ID_SEGMENT = ":id"


def expand_patterns(verb: HttpVerb, base_route: RoutePath) -> tuple[RoutePath, ...]:
    """Return the URL patterns an action bound to *verb* is served on."""
    if verb in SINGULAR_VERBS and base_route != ROOT_ROUTE:
        return (base_route, f"{base_route.rstrip('/')}/{ID_SEGMENT}")
    return (base_route,)


def register_controller(
    router: Router,
    base_route: RoutePath,
    controller: Controller,
    actions: Mapping[str, HttpVerb],
    handler_factory: Callable[[Controller, str], RouteHandler],
    *,
    source: Path | None = None,
) -> list[RouteEntry]:
    """Register every mapped action of *controller* on *router*.

    Actions are visited in *actions* order; exports missing from *actions*
    are ignored.  One handler is built per action and shared by all of its
    patterns.

    Returns:
        The entries added, in registration order.

    """
    added: list[RouteEntry] = []

    for action, verb in actions.items():
        if action not in controller:
            continue

        handler = handler_factory(controller, action)
        for pattern in expand_patterns(verb, base_route):
            router.add(verb, pattern, handler, action=action, source=source)
            added.append(
                RouteEntry(verb=verb, pattern=pattern, handler=handler, action=action, source=source)
            )

    return added
