"""Autoroute — convention-based HTTP routes from a tree of controller modules.

Drop controller modules into a directory and get a route table::

    controllers/index.py            -> /
    controllers/users.py            -> /users, /users/:id
    controllers/api/v1/UserGroups.py -> /api/v1/user-groups, /api/v1/user-groups/:id

Each module-level function named in the actions map becomes a route::

    from autoroute import Autoroute, RouteTable

    autoroute = Autoroute(RouteTable, {"read": "get", "create": "post"})
    table = autoroute.create_router("controllers/")

Mount the table on Chirp, or serve it from the command line::

    autoroute routes my-project/
    autoroute serve my-project/

"""

# PEP 703: Declare this module as free-threading safe
_Py_mod_gil = 0

__version__ = "0.1.0-dev"
__all__ = [
    "ActionsMap",
    "Autoroute",
    "AutorouteConfig",
    "AutorouteOptions",
    "Controller",
    "IncomingRequest",
    "RouteTable",
    "__version__",
    "build",
    "mount_routes",
    "serve",
]

_LAZY: dict[str, str] = {
    "ActionsMap": "autoroute.actions",
    "Autoroute": "autoroute.builder",
    "AutorouteConfig": "autoroute.config",
    "AutorouteOptions": "autoroute.config",
    "Controller": "autoroute.routes.controller",
    "IncomingRequest": "autoroute.handler",
    "RouteTable": "autoroute.routes.table",
    "build": "autoroute.app",
    "mount_routes": "autoroute.app",
    "serve": "autoroute.app",
}


def __getattr__(name: str) -> object:
    """Lazy imports for public API.

    Keeps ``import autoroute`` fast while providing a clean top-level API.
    """
    module_name = _LAZY.get(name)
    if module_name is None:
        msg = f"module {__name__!r} has no attribute {name!r}"
        raise AttributeError(msg)

    import importlib

    return getattr(importlib.import_module(module_name), name)
