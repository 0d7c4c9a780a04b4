"""Gitignore-syntax ignore files as exclusion predicates, using pathspec."""

from __future__ import annotations

import os
from pathlib import Path

import pathspec


def _read_ignore_file(path: Path) -> list[str] | None:
    """Return the non-blank, non-comment lines of `path`, or `None` if unreadable."""
    try:
        text = path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError):
        return None
    return [line for line in text.splitlines() if line.strip() and not line.strip().startswith("#")]


def load_ignore_file(path: str | os.PathLike[str]) -> pathspec.PathSpec | None:
    """
    Read a gitignore-syntax file and return a compiled `PathSpec`,
    or `None` if the file doesn't exist, can't be read, or has no rules.
    """
    ignore_file = Path(path)
    if not ignore_file.is_file():
        return None
    lines = _read_ignore_file(ignore_file)
    if not lines:
        return None
    return pathspec.PathSpec.from_lines("gitignore", lines)


class IgnoreFileMatcher:
    """
    Exclusion predicate backed by a `PathSpec`. Candidate paths are matched
    relative to `root`; anything outside `root` is never excluded.
    """

    def __init__(self, spec: pathspec.PathSpec, root: str | os.PathLike[str]) -> None:
        self.spec = spec
        self.root = os.path.abspath(root)

    def __call__(self, path: str) -> bool:
        try:
            rel = os.path.relpath(os.path.abspath(path), self.root)
        except ValueError:
            # Different drive on Windows
            return False
        if rel == os.curdir or rel == os.pardir or rel.startswith(os.pardir + os.sep):
            return False
        rel = rel.replace(os.sep, "/")
        if os.path.isdir(path):
            # Let directory-only patterns like `build/` match the directory itself.
            return self.spec.match_file(rel + "/")
        return self.spec.match_file(rel)

    def __repr__(self) -> str:
        return f"IgnoreFileMatcher(root={self.root!r})"
