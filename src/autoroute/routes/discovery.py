"""Controller discovery — enumerate candidate controller files.

Walks the controllers directory and keeps files that:

- have a recognized controller extension,
- match the inclusion glob (default ``**/*``),
- match none of the ignore globs,
- have no hidden component (a name starting with ``.`` or ``_``, which
  also covers ``__pycache__``, ``__init__.py`` and private helpers).

Globs are matched against the POSIX path relative to the base directory
and support ``**`` (zero or more directories), ``*``, ``?``, ``[...]`` and
``{a,b}`` alternation.
"""

import functools
import re
from collections.abc import Iterable, Sequence
from pathlib import Path

from autoroute._errors import DiscoveryError
from autoroute.routes.paths import DEFAULT_EXTENSIONS

DEFAULT_PATTERN = "**/*"

_HIDDEN_PREFIXES: tuple[str, ...] = (".", "_")


def find_controllers(
    base_path: str | Path,
    *,
    pattern: str = DEFAULT_PATTERN,
    ignore: Iterable[str] = (),
    extensions: Sequence[str] = DEFAULT_EXTENSIONS,
) -> list[Path]:
    """Return absolute paths of candidate controller files under *base_path*.

    Order is unspecified; callers sort explicitly.

    Raises:
        DiscoveryError: If *base_path* is not a directory or cannot be walked.

    """
    root = Path(base_path)
    if not root.is_dir():
        msg = f"Controllers directory not found: {root}"
        raise DiscoveryError(msg)
    root = root.resolve()
    ignore_patterns = tuple(ignore)

    found: list[Path] = []
    try:
        for candidate in root.rglob("*"):
            if candidate.suffix not in extensions:
                continue
            relative = candidate.relative_to(root)
            if _is_hidden(relative):
                continue
            if not candidate.is_file():
                continue
            rel_posix = relative.as_posix()
            if not glob_match(rel_posix, pattern):
                continue
            if any(glob_match(rel_posix, skip) for skip in ignore_patterns):
                continue
            found.append(candidate)
    except OSError as exc:
        msg = f"Failed to enumerate controllers in {root}: {exc}"
        raise DiscoveryError(msg) from exc

    return found


def _is_hidden(relative: Path) -> bool:
    return any(part.startswith(_HIDDEN_PREFIXES) for part in relative.parts)


def glob_match(path: str, pattern: str) -> bool:
    """Match a POSIX relative *path* against a glob *pattern*.

    ``**/*.spec.py`` matches ``a.spec.py`` and ``x/y/a.spec.py``;
    ``*.py`` matches only files directly under the base directory.

    """
    return _compile_glob(pattern).fullmatch(path) is not None


@functools.lru_cache(maxsize=128)
def _compile_glob(pattern: str) -> re.Pattern[str]:
    """Translate a glob into an anchored regular expression."""
    out: list[str] = []
    i = 0
    n = len(pattern)
    depth = 0  # open ``{`` groups

    while i < n:
        c = pattern[i]
        if c == "*":
            if pattern.startswith("**", i):
                i += 2
                if pattern.startswith("/", i):
                    # "**/" spans zero or more whole directories
                    out.append("(?:.*/)?")
                    i += 1
                else:
                    out.append(".*")
                continue
            out.append("[^/]*")
        elif c == "?":
            out.append("[^/]")
        elif c == "[":
            out_set, end = _translate_set(pattern, i)
            out.append(out_set)
            i = end
        elif c == "{":
            depth += 1
            out.append("(?:")
        elif c == "}" and depth:
            depth -= 1
            out.append(")")
        elif c == "," and depth:
            out.append("|")
        else:
            out.append(re.escape(c))
        i += 1

    if depth:
        msg = f"Unbalanced '{{' in glob pattern {pattern!r}"
        raise ValueError(msg)
    try:
        return re.compile("".join(out))
    except re.error as exc:
        msg = f"Invalid glob pattern {pattern!r}: {exc}"
        raise ValueError(msg) from exc


def _translate_set(pattern: str, start: int) -> tuple[str, int]:
    """Translate the ``[...]`` set opening at *start*.

    Returns the regex fragment and the index of the closing ``]``.  A ``]``
    right after ``[`` or ``[!`` is a literal member; an unclosed ``[`` is a
    literal bracket.
    """
    j = start + 1
    if j < len(pattern) and pattern[j] == "!":
        j += 1
    if j < len(pattern) and pattern[j] == "]":
        j += 1
    end = pattern.find("]", j)
    if end == -1:
        return re.escape("["), start

    body = pattern[start + 1 : end]
    negate = body.startswith("!")
    if negate:
        body = body[1:]
    members = "".join(ch if ch == "-" else re.escape(ch) for ch in body)
    prefix = "^" if negate else ""
    return f"[{prefix}{members}]", end
