"""Autoroute application — mount a route table on a Chirp App.

The builder produces a framework-neutral ``RouteTable``.  This module is
the Chirp integration: it adapts Chirp requests to ``IncomingRequest``,
registers every table entry on a Chirp ``App`` in table order, and
provides the ``serve`` and ``build`` entry points used by the CLI.
``serve`` also exposes the build and request counters of its collector
at ``/__autoroute/stats``.
"""

from __future__ import annotations

import json
import sys
import time
from collections.abc import Sequence
from pathlib import Path
from typing import TYPE_CHECKING, Any

from autoroute._errors import ConfigError
from autoroute.builder import Autoroute
from autoroute.config_loader import load_config
from autoroute.handler import IncomingRequest
from autoroute.routes.table import RouteTable

if TYPE_CHECKING:
    from chirp import App

    from autoroute.config import AutorouteConfig
    from autoroute.observability.collector import RouteCollector
    from autoroute.routes.table import RouteEntry

_BODYLESS_METHODS: frozenset[str] = frozenset({"GET", "HEAD", "DELETE"})

STATS_ENDPOINT = "/__autoroute/stats"


def to_chirp_path(pattern: str) -> str:
    """Convert ``:name`` placeholders to Chirp's ``{name}`` syntax.

    ``/users/:id`` -> ``/users/{id}``

    """
    return "/".join(
        f"{{{segment[1:]}}}" if segment.startswith(":") else segment
        for segment in pattern.split("/")
    )


async def request_from_chirp(request: Any, meta_list: Sequence[str] = ()) -> IncomingRequest:
    """Build an ``IncomingRequest`` from a Chirp ``Request``.

    The body is parsed as JSON or form data depending on ``Content-Type``.
    Names in *meta_list* are read from Chirp's request-scoped ``g``.
    """
    from chirp.context import g

    query = {key: request.query.get(key) for key in request.query}
    body, files = await _read_body(request)

    state: dict[str, Any] = {}
    for name in meta_list:
        try:
            state[name] = getattr(g, name)
        except AttributeError:
            continue

    return IncomingRequest(
        original_url=request.url,
        method=request.method,
        query=query,
        body=body,
        path_params=dict(request.path_params),
        files=files,
        state=state,
    )


async def _read_body(request: Any) -> tuple[Any, dict[str, Any] | None]:
    """Return ``(body, files)`` for *request*."""
    if request.method in _BODYLESS_METHODS:
        return None, None

    content_type = (request.content_type or "").split(";", 1)[0].strip().lower()
    if content_type == "application/json":
        raw = await request.body()
        return (await request.json() if raw.strip() else None), None
    if content_type in ("application/x-www-form-urlencoded", "multipart/form-data"):
        form = await request.form()
        files = dict(form.files) or None
        return {key: form[key] for key in form}, files
    return None, None


def _chirp_endpoint(entry: RouteEntry, meta_list: Sequence[str]) -> Any:
    """Wrap a table handler as a Chirp route handler."""
    from chirp import Response

    handler = entry.handler

    # Chirp injects the request by parameter name
    async def endpoint(request):  # noqa: ANN001, ANN202
        incoming = await request_from_chirp(request, meta_list)
        reply = await handler(incoming)
        return Response(body=reply.body, status=reply.status, content_type=reply.content_type)

    endpoint.__name__ = getattr(handler, "__name__", "endpoint")
    return endpoint


def mount_routes(app: App, table: RouteTable, meta_list: Sequence[str] = ()) -> int:
    """Register every entry of *table* on *app*, in table order.

    Returns the number of routes registered.
    """
    for entry in table:
        path = to_chirp_path(entry.pattern)
        app.route(
            path,
            methods=[entry.verb.upper()],
            name=f"autoroute:{entry.verb}:{path}",
            referenced=True,
        )(_chirp_endpoint(entry, meta_list))
    return len(table)


def stats_payload(collector: RouteCollector) -> dict[str, Any]:
    """Route and request counts plus the event log summary."""
    return {"routes": collector.summary(), "event_log": collector.log.stats()}


def mount_stats_endpoint(app: App, collector: RouteCollector) -> None:
    """Register the ``/__autoroute/stats`` JSON endpoint on *app*."""

    async def stats_handler(request):  # noqa: ANN001, ANN202, ARG001
        from chirp import Response

        return Response(
            body=json.dumps(stats_payload(collector), indent=2),
            status=200,
            content_type="application/json",
        )

    stats_handler.__name__ = "autoroute_stats"
    stats_handler.__qualname__ = "autoroute_stats"

    app.route(STATS_ENDPOINT, name="autoroute:stats", referenced=True)(stats_handler)


def _create_chirp_app(config: AutorouteConfig) -> App:
    """Create a Chirp App bound to the configured host and port."""
    try:
        from chirp import App, AppConfig
    except ImportError as exc:
        msg = "serve requires Chirp. Install with: pip install autoroute[chirp]"
        raise ConfigError(msg) from exc

    return App(config=AppConfig(debug=config.debug, host=config.host, port=config.port))


# ---------------------------------------------------------------------------
# Public entry points
# ---------------------------------------------------------------------------


def build(
    root: str | Path = ".",
    *,
    collector: RouteCollector | None = None,
    **kwargs: object,
) -> tuple[AutorouteConfig, RouteTable]:
    """Load the project config under *root* and build its route table.

    Args:
        root: Project root directory.
        collector: Optional event collector.
        **kwargs: Override AutorouteConfig fields.

    """
    config = load_config(Path(root), **kwargs)
    autoroute = Autoroute(RouteTable, config.actions, config.options(), collector=collector)
    table = autoroute.create_router(config.controllers_path, meta_list=config.meta)
    return config, table


def serve(root: str | Path = ".", **kwargs: object) -> None:
    """Build the route table and serve it with Chirp.

    Route and request events are collected and served as JSON at
    ``STATS_ENDPOINT``.

    Args:
        root: Project root directory.
        **kwargs: Override AutorouteConfig fields.

    """
    from autoroute.banner import print_banner
    from autoroute.observability import EventLog, RouteCollector

    collector = RouteCollector(EventLog())
    t0 = time.perf_counter()
    config, table = build(root, collector=collector, **kwargs)

    app = _create_chirp_app(config)
    route_count = mount_routes(app, table, config.meta)
    mount_stats_endpoint(app, collector)
    load_ms = (time.perf_counter() - t0) * 1000

    print_banner(config, route_count, mode="serve", load_ms=load_ms)
    sys.stderr.flush()

    app.run(host=config.host, port=config.port, lifecycle_collector=collector)
