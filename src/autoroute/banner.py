"""Terminal output — startup banner and route table listing.

Detects ``NO_COLOR`` / ``TERM`` for safe fallback to plain text.
"""

from __future__ import annotations

import os
import sys
from typing import IO, TYPE_CHECKING

if TYPE_CHECKING:
    from autoroute.config import AutorouteConfig
    from autoroute.routes.table import RouteTable


# ---------------------------------------------------------------------------
# ANSI helpers — respect NO_COLOR (https://no-color.org)
# ---------------------------------------------------------------------------

def _supports_color() -> bool:
    """Return True if the terminal supports ANSI colors."""
    if os.environ.get("NO_COLOR"):
        return False
    if os.environ.get("TERM") == "dumb":
        return False
    return hasattr(sys.stderr, "isatty") and sys.stderr.isatty()


_COLOR = _supports_color()

_RESET = "\033[0m" if _COLOR else ""
_BOLD = "\033[1m" if _COLOR else ""
_DIM = "\033[2m" if _COLOR else ""
_CYAN = "\033[36m" if _COLOR else ""
_GREEN = "\033[32m" if _COLOR else ""
_YELLOW = "\033[33m" if _COLOR else ""
_MAGENTA = "\033[35m" if _COLOR else ""
_RED = "\033[31m" if _COLOR else ""


# ---------------------------------------------------------------------------
# Verb badges
# ---------------------------------------------------------------------------

_VERB_COLORS: dict[str, str] = {
    "head": _DIM,
    "get": _GREEN,
    "post": _YELLOW,
    "put": _CYAN,
    "patch": _MAGENTA,
    "delete": _RED,
}


def _verb_badge(verb: str) -> str:
    """Return a fixed-width, colored verb label."""
    color = _VERB_COLORS.get(verb, _DIM)
    return f"{color}{verb.upper():<6}{_RESET}"


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------

def print_banner(
    config: AutorouteConfig,
    route_count: int,
    mode: str,
    *,
    load_ms: float = 0.0,
    warnings: list[str] | None = None,
) -> None:
    """Print the autoroute startup banner to stderr.

    Args:
        config: Resolved AutorouteConfig.
        route_count: Number of route entries registered.
        mode: ``"serve"`` or ``"routes"``.
        load_ms: Time spent building the router in milliseconds.
        warnings: Optional list of warning messages to display.

    """
    from autoroute import __version__

    header = f"  {_BOLD}autoroute{_RESET} {_DIM}v{__version__}{_RESET}  {_CYAN}[{mode}]{_RESET}"

    lines: list[str] = [
        "",
        header,
        f"  {_DIM}{'─' * 43}{_RESET}",
    ]

    routes_label = "route" if route_count == 1 else "routes"
    timing = f" {_DIM}in {load_ms:.0f}ms{_RESET}" if load_ms > 0 else ""
    lines.append(f"  {_DIM}├─{_RESET} {route_count} {routes_label} registered{timing}")
    lines.append(f"  {_DIM}└─{_RESET} controllers: {_DIM}{config.controllers_path}{_RESET}")

    if mode == "serve":
        lines.append("")
        lines.append(f"  {_BOLD}{_CYAN}http://{config.host}:{config.port}{_RESET}")

    if warnings:
        lines.append("")
        lines.extend(f"  {_YELLOW}!{_RESET} {w}" for w in warnings)

    lines.append("")

    print("\n".join(lines), file=sys.stderr)


def format_route_table(table: RouteTable, *, root: str | None = None) -> list[str]:
    """Render one line per entry: verb, pattern, action and source file."""
    lines: list[str] = []
    width = max((len(entry.pattern) for entry in table), default=0)
    for entry in table:
        source = ""
        if entry.source is not None:
            source = str(entry.source)
            if root is not None and source.startswith(root):
                source = source[len(root):].lstrip("/\\")
        lines.append(
            f"{_verb_badge(entry.verb)} {entry.pattern:<{width}}  "
            f"{_DIM}{entry.action}{_RESET}  {_DIM}{source}{_RESET}".rstrip()
        )
    return lines


def print_route_table(
    table: RouteTable,
    *,
    root: str | None = None,
    file: IO[str] | None = None,
) -> None:
    """Print the route table in registration order."""
    out = file if file is not None else sys.stdout
    for line in format_route_table(table, root=root):
        print(line, file=out)
