"""Autoroute error hierarchy.

All autoroute-specific errors inherit from AutorouteError for easy catching.
Errors raised by controller actions and request hooks are never wrapped:
they propagate unaltered to the hosting framework.
"""


class AutorouteError(Exception):
    """Base error for all autoroute operations."""


class ConfigError(AutorouteError):
    """Invalid or missing configuration (actions map, options, config file)."""


class DiscoveryError(AutorouteError):
    """The controllers directory could not be enumerated."""


class LoadError(AutorouteError):
    """A discovered controller file could not be imported."""


class RouteConflictError(AutorouteError):
    """Two distinct controller files derive the same URL route."""
