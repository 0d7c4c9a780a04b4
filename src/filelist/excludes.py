"""
The exclusion engine: literal and glob rules compiled into a single
alternation, regex rules tested one by one with their own flags, then
predicate functions.
"""

from __future__ import annotations

import re
from collections.abc import Iterable

from filelist.defaults import DEFAULT_IGNORE_PATTERNS, DEFAULT_IGNORE_PREDICATES
from filelist.matcher import glob_sync
from filelist.types import (
    ExcludeRule,
    GlobRule,
    LiteralRule,
    PatternRule,
    PredicateRule,
    RegexRule,
)

_MATCH_NOTHING = re.compile(r"(?!)")


def escape_path(path: str) -> str:
    """
    Escape `path` for literal use in a regex, letting each separator match
    either `/` or `\\`.
    """
    return r"[/\\]".join(re.escape(part) for part in re.split(r"[/\\]", path))

class ExclusionRuleSet:
    """
    Ordered exclusion rules for one `FileList`.

    Literal and glob rules share one compiled alternation, derived lazily and
    dropped whenever one of them is added, so it is never stale when read.
    Glob rules are expanded against the filesystem at compile time. Regex
    rules keep their own compiled pattern: group numbers and flags would not
    survive being pasted into a shared expression.
    """

    def __init__(
        self,
        patterns: Iterable[PatternRule] = DEFAULT_IGNORE_PATTERNS,
        predicates: Iterable[PredicateRule] = DEFAULT_IGNORE_PREDICATES,
    ) -> None:
        self._patterns: list[PatternRule] = list(patterns)
        self._predicates: list[PredicateRule] = list(predicates)
        self._compiled: re.Pattern[str] | None = None

    @classmethod
    def empty(cls) -> ExclusionRuleSet:
        return cls((), ())

    @property
    def patterns(self) -> tuple[PatternRule, ...]:
        return tuple(self._patterns)

    @property
    def predicates(self) -> tuple[PredicateRule, ...]:
        return tuple(self._predicates)

    @property
    def regexes(self) -> tuple[re.Pattern[str], ...]:
        return tuple(rule.regex for rule in self._patterns if isinstance(rule, RegexRule))

    def add(self, rule: ExcludeRule) -> None:
        if isinstance(rule, PredicateRule):
            self._predicates.append(rule)
            return
        self._patterns.append(rule)
        if not isinstance(rule, RegexRule):
            self._compiled = None

    def clear(self) -> None:
        self._patterns = []
        self._predicates = []
        self._compiled = None

    def copy(self) -> ExclusionRuleSet:
        clone = ExclusionRuleSet(self._patterns, self._predicates)
        clone._compiled = self._compiled
        return clone

    def compile(self, *, verbose: bool = True) -> re.Pattern[str]:
        """Return the literal/glob alternation, building it if needed."""
        if self._compiled is None:
            self._compiled = self._build(verbose=verbose)
        return self._compiled

    def _build(self, *, verbose: bool) -> re.Pattern[str]:
        fragments: list[str] = []
        for rule in self._patterns:
            if isinstance(rule, GlobRule):
                fragments.extend(escape_path(m) for m in glob_sync(rule.pattern, verbose=verbose))
            elif isinstance(rule, LiteralRule):
                fragments.append(escape_path(rule.path))

        if not fragments:
            return _MATCH_NOTHING
        # Every fragment is escaped, so the union always compiles.
        return re.compile("|".join(f"(?:{fragment})" for fragment in fragments))

    def should_exclude(self, path: str, *, verbose: bool = True) -> bool:
        if self.compile(verbose=verbose).search(path):
            return True
        if any(regex.search(path) for regex in self.regexes):
            return True
        return any(rule.func(path) for rule in self._predicates)
