"""Request adapter — the per-route handler around a controller action.

For each request the handler:

1. merges query, body and path parameters into ``params``
   (path params win over body, body wins over query),
2. attaches uploaded files as ``params["files"]`` when a ``data`` upload
   is present,
3. builds ``meta`` from the allow-listed request-scoped names,
4. calls ``on_request``, awaits the action, calls ``on_response``,
5. serializes the result as a JSON response.

An exception raised by the action (or a hook) is re-raised unaltered so
the hosting framework's error handling renders it.
"""

from __future__ import annotations

import functools
import inspect
import json
import time
from collections.abc import Awaitable, Callable, Mapping, Sequence
from dataclasses import dataclass, field, fields
from typing import TYPE_CHECKING, Any

from autoroute.config import noop_hook

if TYPE_CHECKING:
    from autoroute._types import ActionFunc, RouteHandler
    from autoroute.observability.collector import RouteCollector
    from autoroute.routes.controller import Controller

# Upload field that marks a request as carrying files
UPLOAD_FIELD = "data"

JSON_CONTENT_TYPE = "application/json; charset=utf-8"


@dataclass(frozen=True, slots=True)
class IncomingRequest:
    """Framework-neutral view of an HTTP request.

    Attributes:
        original_url: Request path including the query string.
        method: Upper-case HTTP method.
        query: Query-string parameters.
        body: Parsed request body (JSON object or form fields), if any.
        path_params: Parameters captured from the URL pattern.
        files: Uploaded files keyed by field name, if any.
        state: Request-scoped values set by middleware (e.g. ``user``).

    """

    original_url: str
    method: str = "GET"
    query: Mapping[str, Any] = field(default_factory=dict)
    body: Any = None
    path_params: Mapping[str, Any] = field(default_factory=dict)
    files: Mapping[str, Any] | None = None
    state: Mapping[str, Any] = field(default_factory=dict)


_REQUEST_FIELDS: frozenset[str] = frozenset(f.name for f in fields(IncomingRequest))


@dataclass(frozen=True, slots=True)
class JSONResponse:
    """Serialized action result."""

    body: str
    status: int = 200
    content_type: str = JSON_CONTENT_TYPE

    @classmethod
    def from_result(cls, result: Any) -> JSONResponse:
        return cls(body=json.dumps(result, default=str))


@dataclass(frozen=True, slots=True)
class RequestInfo:
    """Payload passed to ``on_request`` before the action runs."""

    original_url: str
    action: str
    params: Mapping[str, Any]
    meta: Mapping[str, Any]


@dataclass(frozen=True, slots=True)
class ResponseInfo:
    """Payload passed to ``on_response`` after the action succeeds."""

    original_url: str
    action: str
    params: Mapping[str, Any]
    meta: Mapping[str, Any]
    result: Any = None


@dataclass(frozen=True, slots=True)
class ActionContext:
    """Optional third argument for actions that accept it."""

    original_url: str
    action: str


def build_params(request: IncomingRequest) -> dict[str, Any]:
    """Merge query, body and path parameters (later sources win)."""
    params: dict[str, Any] = dict(request.query)
    if isinstance(request.body, Mapping):
        params.update(request.body)
    params.update(request.path_params)

    if request.files and UPLOAD_FIELD in request.files:
        params["files"] = request.files
    return params


def build_meta(request: IncomingRequest, meta_list: Sequence[str]) -> dict[str, Any]:
    """Pick the allow-listed names from the request.

    Request-scoped ``state`` is consulted first, then the request's own
    fields.  Names found in neither are left out.
    """
    meta: dict[str, Any] = {}
    for name in meta_list:
        if name in request.state:
            meta[name] = request.state[name]
        elif name in _REQUEST_FIELDS:
            meta[name] = getattr(request, name)
    return meta


def create_route_handler(
    controller: Controller,
    action: str,
    *,
    meta_list: Sequence[str] = (),
    on_request: Callable[[RequestInfo], object] = noop_hook,
    on_response: Callable[[ResponseInfo], object] = noop_hook,
    collector: RouteCollector | None = None,
) -> RouteHandler:
    """Build the async request handler for ``controller``'s *action*.

    Raises:
        KeyError: If *controller* does not export *action*.

    """
    func = controller.lookup(action)
    if func is None:
        msg = f"{controller.name} has no action {action!r}"
        raise KeyError(msg)

    call = _as_async(func)
    arity = _positional_arity(func)
    meta_names = tuple(meta_list)

    async def handle(request: IncomingRequest) -> JSONResponse:
        params = build_params(request)
        meta = build_meta(request, meta_names)
        original_url = request.original_url

        on_request(RequestInfo(original_url=original_url, action=action, params=params, meta=meta))

        args = (params, meta, ActionContext(original_url=original_url, action=action))[:arity]

        t0 = time.perf_counter()
        try:
            result = await call(*args)
        except Exception as exc:
            if collector is not None:
                collector.record_failure(
                    original_url, action, exc,
                    duration_ms=(time.perf_counter() - t0) * 1000,
                )
            raise

        if collector is not None:
            collector.record_action(
                original_url, action, duration_ms=(time.perf_counter() - t0) * 1000,
            )

        on_response(ResponseInfo(
            original_url=original_url,
            action=action,
            params=params,
            meta=meta,
            result=result,
        ))
        return JSONResponse.from_result(result)

    handle.__name__ = f"{action}_handler"
    handle.__qualname__ = f"{controller.name}.{action}_handler"
    return handle


def _as_async(func: ActionFunc) -> Callable[..., Awaitable[Any]]:
    """Normalize *func* to a coroutine function so callers always await it."""
    if inspect.iscoroutinefunction(func):
        return func

    @functools.wraps(func)
    async def call(*args: Any) -> Any:
        result = func(*args)
        if inspect.isawaitable(result):
            result = await result
        return result

    return call


def _positional_arity(func: ActionFunc) -> int:
    """How many of ``(params, meta, context)`` *func* accepts."""
    try:
        sig = inspect.signature(func)
    except (TypeError, ValueError):
        return 2

    positional = 0
    for param in sig.parameters.values():
        if param.kind is inspect.Parameter.VAR_POSITIONAL:
            return 3
        if param.kind in (
            inspect.Parameter.POSITIONAL_ONLY,
            inspect.Parameter.POSITIONAL_OR_KEYWORD,
        ):
            positional += 1
    return min(positional, 3)
