"""Shared type definitions for autoroute."""

from collections.abc import Awaitable, Callable
from typing import Any, Literal

# HTTP verbs a controller action may be bound to
type HttpVerb = Literal["head", "get", "post", "put", "patch", "delete"]

# Route URL path (e.g., "/", "/users", "/api/v1/users/:id")
type RoutePath = str

# Controller action: (params, meta[, context]) -> value or awaitable
type ActionFunc = Callable[..., Any]

# Per-route request handler produced by the request adapter
type RouteHandler = Callable[..., Awaitable[Any]]
