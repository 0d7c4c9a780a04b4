"""
Glob expansion against the filesystem.

Three layers: `basedir()` finds where to start enumerating, `read_dir_recursive()`
lists everything under it, and `match_paths()` filters that candidate list
with `wcmatch` (pure, no I/O). `glob_sync()` ties them together.
"""

from __future__ import annotations

import logging
import os
import re
from collections.abc import Sequence

from wcmatch import glob

from filelist.errors import DirectoryReadError, ReadErrorKind
from filelist.types import GLOB_CHARS, MatchOptions

log = logging.getLogger(__name__)

_SEPARATORS_RE = re.compile(r"([/\\])")


def basedir(pattern: str) -> str:
    """
    Return the longest wildcard-free directory prefix of `pattern`, i.e. the
    directory that contains every path the pattern can match.

        basedir("/test/**")      == "/test"
        basedir("src/*/x.js")    == "src"
        basedir("*.txt")         == "."
        basedir("src/lib")       == "src/lib"

    A pattern without wildcards is its own base directory (so a trailing `..`
    is a directory, not a file name), which makes the function idempotent:
    `basedir(basedir(p)) == basedir(p)`.
    """
    # Alternating [segment, separator, segment, ...]
    parts = _SEPARATORS_RE.split(pattern or "")
    base = ""
    for i in range(0, len(parts), 2):
        segment = parts[i]
        if any(c in segment for c in GLOB_CHARS):
            break
        base += segment
        if i + 1 < len(parts):
            base += parts[i + 1]

    if len(base) > 1 and base[-1] in "/\\":
        base = base[:-1]
    return base or "."


def normalize_separators(path: str) -> str:
    return path.replace("\\", "/")


def read_dir_recursive(dir_path: str) -> list[str]:
    """
    List `dir_path` itself followed by everything beneath it, depth-first with
    entries sorted by name. Paths are normalized and always use `/`.

    Raises `DirectoryReadError` if any directory in the tree can't be listed.
    """
    root = os.path.normpath(dir_path)
    result = [normalize_separators(root)]
    _read_dir_into(root, result)
    return result


def _read_dir_into(directory: str, out: list[str]) -> None:
    try:
        with os.scandir(directory) as it:
            entries = sorted(it, key=lambda e: e.name)
    except OSError as e:
        raise DirectoryReadError(directory, ReadErrorKind.from_os_error(e), e.strerror) from e

    for entry in entries:
        child = os.path.normpath(os.path.join(directory, entry.name))
        out.append(normalize_separators(child))
        if entry.is_dir(follow_symlinks=False):
            _read_dir_into(child, out)


def match_paths(
    candidates: Sequence[str], pattern: str, options: MatchOptions | None = None
) -> list[str]:
    """Filter `candidates` down to those matching `pattern`, preserving order."""
    options = options or MatchOptions()
    return glob.globfilter(candidates, pattern, flags=options.wcmatch_flags)


def glob_sync(
    pattern: str, options: MatchOptions | None = None, *, verbose: bool = True
) -> list[str]:
    """
    Expand `pattern` against the filesystem. An unreadable base directory
    yields no matches (logged as a warning when `verbose`).
    """
    base = basedir(pattern)
    try:
        candidates = read_dir_recursive(base)
    except DirectoryReadError as e:
        if verbose:
            log.warning("%s", e)
        return []

    normalized = os.path.normpath(pattern).replace(os.sep, "/")
    return match_paths(candidates, normalized, options)
