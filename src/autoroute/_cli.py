"""Autoroute CLI — autoroute routes / autoroute serve.

Entry point for the ``autoroute`` command-line interface.
"""

from __future__ import annotations

import argparse
import sys


def _build_parser() -> argparse.ArgumentParser:
    """Build the argument parser for the autoroute CLI."""
    parser = argparse.ArgumentParser(
        prog="autoroute",
        description="Derive HTTP routes from a directory of controller modules.",
    )
    parser.add_argument(
        "--version",
        action="version",
        version=f"%(prog)s {_get_version()}",
    )

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    # autoroute routes
    routes_parser = subparsers.add_parser(
        "routes",
        help="Print the derived route table",
    )
    routes_parser.add_argument("root", nargs="?", default=".", help="Project root directory")
    routes_parser.add_argument(
        "--controllers-dir", default=None, help="Controllers directory (relative to root)",
    )
    routes_parser.add_argument(
        "--ignore", action="append", default=None, metavar="GLOB",
        help="Exclude controllers matching GLOB (repeatable)",
    )

    # autoroute serve
    serve_parser = subparsers.add_parser(
        "serve",
        help="Serve the derived routes with Chirp",
    )
    serve_parser.add_argument("root", nargs="?", default=".", help="Project root directory")
    serve_parser.add_argument(
        "--controllers-dir", default=None, help="Controllers directory (relative to root)",
    )
    serve_parser.add_argument("--host", default=None, help="Bind address")
    serve_parser.add_argument("--port", type=int, default=None, help="Bind port")
    serve_parser.add_argument("--debug", action="store_true", default=None, help="Debug mode")

    return parser


def _get_version() -> str:
    """Get the package version."""
    from autoroute import __version__

    return __version__


def main(argv: list[str] | None = None) -> None:
    """CLI entry point."""
    parser = _build_parser()
    args = parser.parse_args(argv)

    if args.command is None:
        parser.print_help()
        sys.exit(0)

    from autoroute._errors import AutorouteError

    try:
        if args.command == "routes":
            _routes(args)
        elif args.command == "serve":
            from autoroute.app import serve

            serve(
                root=args.root,
                controllers_dir=args.controllers_dir,
                host=args.host,
                port=args.port,
                debug=args.debug,
            )
    except AutorouteError as exc:
        print(f"autoroute: error: {exc}", file=sys.stderr)
        sys.exit(1)


def _routes(args: argparse.Namespace) -> None:
    """Build the route table and print it."""
    from autoroute.app import build
    from autoroute.banner import print_route_table

    overrides: dict[str, object] = {"controllers_dir": args.controllers_dir}
    if args.ignore:
        overrides["ignore"] = tuple(args.ignore)
    config, table = build(args.root, **overrides)
    print_route_table(table, root=str(config.controllers_path))


if __name__ == "__main__":
    main()
