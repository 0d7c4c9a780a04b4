"""
Default exclusion rules every new `FileList` starts with.

Both collections are tuples; each rule set copies them into its own lists, so
`clear_exclusions()` on one list never affects another.
"""

from __future__ import annotations

import os
import re

from filelist.types import PatternRule, PredicateRule, RegexRule


def _is_core_file(path: str) -> bool:
    """
    True for a path whose last segment is `core` and which is not a directory.
    Checked against the filesystem on every call; a path that no longer exists
    is not excluded.
    """
    if not re.search(r"(^|[/\\])core$", path):
        return False
    return os.path.exists(path) and not os.path.isdir(path)


DEFAULT_IGNORE_PATTERNS: tuple[PatternRule, ...] = (
    # Version control metadata
    RegexRule(re.compile(r"(^|[/\\])CVS([/\\]|$)")),
    RegexRule(re.compile(r"(^|[/\\])\.svn([/\\]|$)")),
    RegexRule(re.compile(r"(^|[/\\])\.git([/\\]|$)")),
    # Editor backups
    RegexRule(re.compile(r"\.bak$")),
    RegexRule(re.compile(r"~$")),
)

DEFAULT_IGNORE_PREDICATES: tuple[PredicateRule, ...] = (PredicateRule(_is_core_file),)
