"""Value types shared by the matcher, the exclusion engine and `FileList`."""

from __future__ import annotations

import os
import re
from collections.abc import Callable, Mapping
from dataclasses import dataclass, fields, replace
from typing import Any, Union

from wcmatch import glob

from filelist.errors import ExclusionPatternError, InvalidOptionError

# Characters that mark a string as a glob pattern rather than a literal path.
GLOB_CHARS = frozenset("*?[{")


def has_glob(pattern: str) -> bool:
    return any(c in pattern for c in GLOB_CHARS)


@dataclass(frozen=True)
class MatchOptions:
    """
    Matching flags for a single `include()` call. The schema is closed:
    `from_mapping()` rejects keys that are not fields here.
    """

    nocase: bool = False
    dot: bool = False
    matchbase: bool = False
    nobrace: bool = False
    noglobstar: bool = False
    noext: bool = False

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any]) -> MatchOptions:
        return cls().merge(data)

    def merge(self, other: MatchOptions | Mapping[str, Any]) -> MatchOptions:
        """
        Return a copy with `other` layered on top. Only keys that `other` sets
        explicitly (or, for a `MatchOptions`, fields that differ from the
        default) override this instance.
        """
        if isinstance(other, MatchOptions):
            default = MatchOptions()
            changes = {
                f.name: getattr(other, f.name)
                for f in fields(MatchOptions)
                if getattr(other, f.name) != getattr(default, f.name)
            }
        else:
            unknown = sorted(set(other) - _OPTION_NAMES)
            if unknown:
                raise InvalidOptionError(f"Unknown match option(s): {', '.join(unknown)}")
            not_bool = sorted(key for key, value in other.items() if not isinstance(value, bool))
            if not_bool:
                raise InvalidOptionError(
                    f"Match option(s) must be true or false: {', '.join(not_bool)}"
                )
            changes = dict(other)
        return replace(self, **changes)

    @property
    def wcmatch_flags(self) -> int:
        """Translate to `wcmatch.glob` flags (minimatch-like defaults)."""
        flags = glob.FORCEUNIX
        if not self.nobrace:
            flags |= glob.BRACE
        if not self.noglobstar:
            flags |= glob.GLOBSTAR
        if not self.noext:
            flags |= glob.EXTGLOB
        if self.nocase:
            flags |= glob.IGNORECASE
        if self.dot:
            flags |= glob.DOTGLOB
        if self.matchbase:
            flags |= glob.MATCHBASE
        return flags


_OPTION_NAMES = frozenset(f.name for f in fields(MatchOptions))


@dataclass(frozen=True)
class PendingInclude:
    """A queued include request, expanded on first read of the list."""

    pattern: str
    options: MatchOptions


# Exclusion rules. The variant is decided once, in `classify_rule()`.


@dataclass(frozen=True)
class LiteralRule:
    path: str


@dataclass(frozen=True)
class GlobRule:
    pattern: str


@dataclass(frozen=True)
class RegexRule:
    regex: re.Pattern[str]


@dataclass(frozen=True)
class PredicateRule:
    func: Callable[[str], object]


PatternRule = Union[LiteralRule, GlobRule, RegexRule]
ExcludeRule = Union[LiteralRule, GlobRule, RegexRule, PredicateRule]


def classify_rule(value: object) -> ExcludeRule:
    """
    Turn a value passed to `exclude()` into a rule:

    - `str` / `os.PathLike` → `GlobRule` if it contains a glob metacharacter,
      else `LiteralRule`
    - compiled `str` regex → `RegexRule` (a `bytes` regex is rejected)
    - any other callable → `PredicateRule`
    - anything else → `LiteralRule` of its `str()`
    """
    if isinstance(value, (LiteralRule, GlobRule, RegexRule, PredicateRule)):
        return value
    if isinstance(value, (str, os.PathLike)):
        text = os.fspath(value)
        if isinstance(text, bytes):
            text = os.fsdecode(text)
        return GlobRule(text) if has_glob(text) else LiteralRule(text)
    if isinstance(value, re.Pattern):
        if isinstance(value.pattern, bytes):
            raise ExclusionPatternError(f"Exclusion regex must be a str pattern: {value!r}")
        return RegexRule(value)
    if callable(value):
        return PredicateRule(value)
    return LiteralRule(str(value))
