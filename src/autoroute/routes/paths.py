"""Path-to-route translation.

Derives a URL route from a controller file's position relative to the
controllers directory::

    controllers/index.py              -> /
    controllers/users.py              -> /users
    controllers/api/v1/UserGroups.py  -> /api/v1/user-groups
    controllers/SubPath/index.py      -> /sub-path

Every segment is slug-cased independently.  Only the recognized extension
and a trailing ``index`` segment are stripped, both case-insensitively.
"""

import re
from collections.abc import Sequence
from pathlib import Path, PurePath

from autoroute._types import RoutePath

DEFAULT_EXTENSIONS: tuple[str, ...] = (".py", ".pyc")

INDEX_NAME = "index"

ROOT_ROUTE: RoutePath = "/"

# "HTMLParser" -> "HTML Parser"
_ACRONYM_BOUNDARY = re.compile(r"([A-Z]+)([A-Z][a-z])")
# "subPath" -> "sub Path", "v1Users" -> "v1 Users"
_CAMEL_BOUNDARY = re.compile(r"([a-z\d])([A-Z])")
# Underscores, dots, spaces, hyphens and any other punctuation
_SEPARATORS = re.compile(r"[\W_]+")


def slug_case(segment: str) -> str:
    """Lower-case *segment* and hyphenate its word boundaries.

    Digits never start a new word, so ``v1`` stays ``v1`` rather than
    becoming ``v-1``.

    ``SubPath``    -> ``sub-path``
    ``user_groups`` -> ``user-groups``
    ``apiV2``      -> ``api-v2``

    """
    spaced = _ACRONYM_BOUNDARY.sub(r"\1 \2", segment)
    spaced = _CAMEL_BOUNDARY.sub(r"\1 \2", spaced)
    spaced = _SEPARATORS.sub(" ", spaced)
    return "-".join(spaced.lower().split())


def route_from_path(
    base_path: str | PurePath,
    file_path: str | PurePath,
    extensions: Sequence[str] = DEFAULT_EXTENSIONS,
) -> RoutePath:
    """Translate a controller file path into its URL route.

    Raises:
        ValueError: If *file_path* is not located under *base_path*, or a
            segment slug-cases to an empty string (e.g. a directory named
            ``--``).

    """
    relative = Path(file_path).relative_to(base_path)
    parts = list(relative.parts)
    if not parts:
        return ROOT_ROUTE

    lowered = {ext.lower() for ext in extensions}
    last = parts[-1]
    suffix = PurePath(last).suffix
    if suffix.lower() in lowered:
        stem = last[: -len(suffix)]
        if stem.lower() == INDEX_NAME:
            parts.pop()
        else:
            parts[-1] = stem

    segments = [slug_case(part) for part in parts]
    if not all(segments):
        msg = f"{relative.as_posix()!r} has a segment with no URL-safe characters"
        raise ValueError(msg)
    return "/" + "/".join(segments) if segments else ROOT_ROUTE


def route_depth(route: RoutePath) -> int:
    """Count the non-empty segments of *route* (``/`` has depth 0)."""
    return sum(1 for segment in route.split("/") if segment)
