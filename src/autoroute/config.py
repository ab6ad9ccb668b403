"""Autoroute configuration.

``AutorouteOptions`` holds the builder options and is frozen after
creation.  ``AutorouteConfig`` is the project-level configuration used by
the CLI and ``serve()``; it produces the builder options.
"""

from __future__ import annotations

from collections.abc import Callable, Mapping
from dataclasses import dataclass, field
from pathlib import Path
from types import MappingProxyType
from typing import TYPE_CHECKING

from autoroute.actions import REST_ACTIONS
from autoroute.routes.discovery import DEFAULT_PATTERN
from autoroute.routes.paths import DEFAULT_EXTENSIONS

if TYPE_CHECKING:
    from autoroute.handler import RequestInfo, ResponseInfo


def noop_hook(info: object) -> None:
    """Default request/response hook: does nothing."""


@dataclass(frozen=True, slots=True)
class AutorouteOptions:
    """Options for an ``Autoroute`` builder.

    Attributes:
        pattern: Inclusion glob matched against base-relative POSIX paths.
        ignore: Exclusion globs; a match on any of them drops the file.
        extensions: Recognized controller extensions, most preferred first.
        on_request: Called with a ``RequestInfo`` before each action.
        on_response: Called with a ``ResponseInfo`` after each successful action.

    """

    pattern: str = DEFAULT_PATTERN
    ignore: tuple[str, ...] = ()
    extensions: tuple[str, ...] = DEFAULT_EXTENSIONS
    on_request: Callable[[RequestInfo], object] = noop_hook
    on_response: Callable[[ResponseInfo], object] = noop_hook

    def __post_init__(self) -> None:
        # Accept lists from callers and config files
        object.__setattr__(self, "ignore", tuple(self.ignore))
        object.__setattr__(self, "extensions", tuple(self.extensions))


@dataclass(frozen=True, slots=True)
class AutorouteConfig:
    """Project configuration for the ``autoroute`` CLI.

    Attributes:
        root: Project root directory.  Always resolved to an absolute path
              on construction.
        controllers_dir: Directory containing controller modules.
        actions: Action name -> HTTP verb mapping.
        meta: Request-scoped names exposed to actions as ``meta``.
        pattern: Inclusion glob for controller discovery.
        ignore: Exclusion globs for controller discovery.
        extensions: Recognized controller extensions, most preferred first.
        host: Bind address for ``serve``.
        port: Bind port for ``serve``.
        debug: Run the server in debug mode.

    """

    root: Path = field(default_factory=Path.cwd)
    controllers_dir: str = "controllers"
    actions: Mapping[str, str] = field(default_factory=lambda: MappingProxyType(dict(REST_ACTIONS)))
    meta: tuple[str, ...] = ()
    pattern: str = DEFAULT_PATTERN
    ignore: tuple[str, ...] = ()
    extensions: tuple[str, ...] = DEFAULT_EXTENSIONS
    host: str = "127.0.0.1"
    port: int = 8000
    debug: bool = False

    def __post_init__(self) -> None:
        if not self.root.is_absolute():
            object.__setattr__(self, "root", self.root.resolve())
        object.__setattr__(self, "meta", tuple(self.meta))
        object.__setattr__(self, "ignore", tuple(self.ignore))
        object.__setattr__(self, "extensions", tuple(self.extensions))
        if not isinstance(self.actions, MappingProxyType):
            object.__setattr__(self, "actions", MappingProxyType(dict(self.actions)))

    @property
    def controllers_path(self) -> Path:
        """Absolute path to the controllers directory."""
        return self.root / self.controllers_dir

    def options(
        self,
        *,
        on_request: Callable[[RequestInfo], object] = noop_hook,
        on_response: Callable[[ResponseInfo], object] = noop_hook,
    ) -> AutorouteOptions:
        """Build the builder options described by this config."""
        return AutorouteOptions(
            pattern=self.pattern,
            ignore=self.ignore,
            extensions=self.extensions,
            on_request=on_request,
            on_response=on_response,
        )
