"""Duplicate resolution — one file per logical controller.

A project may keep several variants of the same controller side by side
(``users.py`` next to a compiled ``users.pyc``).  Variants share a
directory and a base name and differ only in extension; exactly one of
them is loaded.
"""

from collections.abc import Iterable, Sequence
from pathlib import Path

from autoroute.routes.paths import DEFAULT_EXTENSIONS


def resolve_unique(
    paths: Iterable[str | Path],
    extensions: Sequence[str] = DEFAULT_EXTENSIONS,
) -> list[Path]:
    """Keep the most preferred variant of each controller.

    Files whose extension is not in *extensions* are discarded.  Within a
    ``(directory, base name)`` group the extension listed first wins.  The
    result is independent of input order: it is sorted by extension-less
    path, descending.

    ``["/c/users.pyc", "/c/users.py", "/c/admin/users.pyc"]``
    -> ``[Path("/c/users.py"), Path("/c/admin/users.pyc")]``

    """
    rank = {ext: index for index, ext in enumerate(extensions)}
    chosen: dict[tuple[Path, str], Path] = {}

    for raw in paths:
        path = Path(raw)
        if path.suffix not in rank:
            continue
        key = (path.parent, path.stem)
        current = chosen.get(key)
        if current is None or rank[path.suffix] < rank[current.suffix]:
            chosen[key] = path

    return [
        chosen[key]
        for key in sorted(chosen, key=lambda k: (k[0] / k[1]).as_posix(), reverse=True)
    ]
