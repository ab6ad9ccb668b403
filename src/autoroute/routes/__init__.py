"""Route derivation from a controllers directory.

Pure building blocks used by ``autoroute.builder.Autoroute``: path
translation, discovery, variant resolution, specificity ordering,
controller loading and action registration.

Public API::

    from autoroute.routes import find_controllers, resolve_unique, route_from_path

    paths = resolve_unique(find_controllers(Path("controllers")))
    routes = [route_from_path(Path("controllers").resolve(), p) for p in paths]
"""

from autoroute.routes.controller import Controller
from autoroute.routes.discovery import DEFAULT_PATTERN, find_controllers, glob_match
from autoroute.routes.loader import load_controller
from autoroute.routes.ordering import ControllerInfo, sort_by_specificity
from autoroute.routes.paths import DEFAULT_EXTENSIONS, ROOT_ROUTE, route_from_path, slug_case
from autoroute.routes.registrar import expand_patterns, register_controller
from autoroute.routes.resolver import resolve_unique
from autoroute.routes.table import RouteEntry, Router, RouteTable

__all__ = [
    "DEFAULT_EXTENSIONS",
    "DEFAULT_PATTERN",
    "ROOT_ROUTE",
    "Controller",
    "ControllerInfo",
    "RouteEntry",
    "RouteTable",
    "Router",
    "expand_patterns",
    "find_controllers",
    "glob_match",
    "load_controller",
    "register_controller",
    "resolve_unique",
    "route_from_path",
    "slug_case",
    "sort_by_specificity",
]
