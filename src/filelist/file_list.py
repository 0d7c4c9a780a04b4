"""
`FileList`: a lazily resolved, deduplicated list of paths built from include
and exclude rules.

Nothing touches the filesystem until the list is first read. Any read (length,
indexing, iteration, `to_list()`, ...) resolves all pending includes once,
then the list behaves like an ordinary mutable sequence of strings.
"""

from __future__ import annotations

import os
from collections.abc import Callable, Iterable, Iterator, Mapping, MutableSequence
from typing import Any, ClassVar, Union, overload

from filelist.config import FileListConfig
from filelist.excludes import ExclusionRuleSet
from filelist.gitignore import IgnoreFileMatcher, load_ignore_file
from filelist.matcher import glob_sync
from filelist.types import MatchOptions, PendingInclude, classify_rule, has_glob

IncludeArg = Union[str, os.PathLike[str], Iterable[Any], Mapping[str, Any], MatchOptions, None]


def _flatten_paths(arg: Any) -> Iterator[str]:
    """Yield path strings from a string, path-like, or (nested) list/tuple of them."""
    if not arg:
        return
    if isinstance(arg, str):
        yield arg
    elif isinstance(arg, os.PathLike):
        yield os.fsdecode(os.fspath(arg))
    elif isinstance(arg, (list, tuple)):
        for item in arg:
            yield from _flatten_paths(item)
    else:
        raise TypeError(f"Cannot include value of type {type(arg).__name__}: {arg!r}")


class FileList(MutableSequence[str]):
    """
    Lazy list of file paths. For example::

        files = FileList("src/**/*.py", "setup.py").exclude("src/vendor")
        for path in files:  # resolved here
            ...

    Includes are expanded in the order they were added, duplicates keep their
    first position, and exclusion rules are applied after all expansion, so an
    exclude removes a path regardless of which include produced it.

    Not thread-safe: callers must serialize `include()`, `exclude()` and reads
    on a shared instance.
    """

    verbose: ClassVar[bool] = True
    """Process-wide switch for unreadable-directory warnings."""

    def __init__(self, *args: IncludeArg, **options: bool) -> None:
        self._pending_add: list[PendingInclude] = []
        # Cleared on resolution, set again by new includes.
        self._pending: bool = True
        self._excludes: ExclusionRuleSet = ExclusionRuleSet()
        self._items: list[str] = []
        self.include(*args, **options)

    @classmethod
    def from_config(cls, config: FileListConfig, root: str | os.PathLike[str] = ".") -> FileList:
        """
        Build a list from a loaded `FileListConfig`. With `respect_gitignore`,
        `<root>/.gitignore` is registered as an exclusion.
        """
        file_list = cls()
        if config.include:
            file_list.include(config.include, config.match_options)
        if config.exclude:
            file_list.exclude(config.exclude)
        if config.respect_gitignore:
            file_list.exclude_ignore_file(os.path.join(root, ".gitignore"), root=root)
        return file_list

    # Rule management

    @property
    def pending(self) -> bool:
        return self._pending

    @property
    def pending_add(self) -> tuple[PendingInclude, ...]:
        return tuple(self._pending_add)

    @property
    def excludes(self) -> ExclusionRuleSet:
        return self._excludes

    def include(self, *args: IncludeArg, **options: bool) -> FileList:
        """
        Queue glob patterns or literal paths. Arguments may be strings, path-like
        objects, lists of them, or option mappings / `MatchOptions` (merged, in
        order, into the options for this call only; keyword options go last).
        Empty values are ignored. No filesystem access happens here.
        """
        call_options = MatchOptions()
        patterns: list[str] = []
        for arg in args:
            if isinstance(arg, (MatchOptions, Mapping)):
                call_options = call_options.merge(arg)
            else:
                patterns.extend(_flatten_paths(arg))
        if options:
            call_options = call_options.merge(options)

        if patterns:
            self._pending_add.extend(PendingInclude(p, call_options) for p in patterns)
            self._pending = True
        return self

    def exclude(self, *rules: Any) -> FileList:
        """
        Add exclusion rules: literal paths, glob patterns, compiled regexes,
        or predicate functions (directly or as one list). If the list is
        already resolved, it is re-filtered immediately.
        """
        if len(rules) == 1 and isinstance(rules[0], (list, tuple)):
            rules = tuple(rules[0])

        classified = [
            classify_rule(rule)
            for rule in rules
            if rule is not None and not (isinstance(rule, str) and not rule)
        ]
        before = self._excludes.copy()
        for rule in classified:
            self._excludes.add(rule)

        if not self._pending:
            try:
                self._filter_excluded()
            except Exception:
                self._excludes = before
                raise
        return self

    def exclude_ignore_file(
        self, path: str | os.PathLike[str], *, root: str | os.PathLike[str] | None = None
    ) -> FileList:
        """
        Exclude paths matched by a gitignore-syntax file. Patterns are relative
        to `root`, which defaults to the directory holding the file. A missing
        or empty file adds nothing.
        """
        spec = load_ignore_file(path)
        if spec is None:
            return self
        if root is None:
            root = os.path.dirname(os.path.abspath(path))
        return self.exclude(IgnoreFileMatcher(spec, root))

    def should_exclude(self, path: str | os.PathLike[str]) -> bool:
        """Whether `path` would be filtered out by the current exclusion rules."""
        return self._excludes.should_exclude(os.fsdecode(os.fspath(path)), verbose=self.verbose)

    def clear_inclusions(self) -> FileList:
        """Drop pending includes. Only useful before the list is resolved."""
        self._pending_add = []
        return self

    def clear_exclusions(self) -> FileList:
        """Drop every exclusion rule, including the built-in defaults."""
        self._excludes.clear()
        return self

    # Resolution

    def resolve(self) -> FileList:
        """Expand pending includes against the filesystem. No-op once resolved."""
        if not self._pending:
            return self

        queue = self._pending_add
        previous = self._items
        # Cleared first so reads made during resolution don't recurse.
        self._pending = False
        self._pending_add = []
        try:
            items = list(previous)
            for pending in queue:
                items.extend(self._expand(pending))
            # Unique, in first-occurrence order
            items = list(dict.fromkeys(items))
            self._items = self._without_excluded(items)
        except Exception:
            self._items = previous
            self._pending_add = queue + self._pending_add
            self._pending = True
            raise
        return self

    def _expand(self, pending: PendingInclude) -> list[str]:
        if has_glob(pending.pattern):
            return glob_sync(pending.pattern, pending.options, verbose=self.verbose)
        return [pending.pattern]

    def _without_excluded(self, items: list[str]) -> list[str]:
        self._excludes.compile(verbose=self.verbose)
        return [p for p in items if not self.should_exclude(p)]

    def _filter_excluded(self) -> None:
        self._items = self._without_excluded(self._items)

    def _resolved_items(self) -> list[str]:
        if self._pending:
            self.resolve()
        return self._items

    def _derive(self, items: Iterable[str]) -> FileList:
        """A new, already-resolved list carrying a copy of this list's rules."""
        derived = type(self)()
        derived._pending_add = list(self._pending_add)
        derived._excludes = self._excludes.copy()
        derived._items = list(items)
        derived._pending = False
        return derived

    # Sequence protocol

    @overload
    def __getitem__(self, index: int) -> str: ...

    @overload
    def __getitem__(self, index: slice) -> FileList: ...

    def __getitem__(self, index: int | slice) -> str | FileList:
        items = self._resolved_items()
        if isinstance(index, slice):
            return self._derive(items[index])
        return items[index]

    @overload
    def __setitem__(self, index: int, value: str) -> None: ...

    @overload
    def __setitem__(self, index: slice, value: Iterable[str]) -> None: ...

    def __setitem__(self, index: int | slice, value: Any) -> None:
        items = self._resolved_items()
        if isinstance(index, slice):
            items[index] = list(value)
        else:
            items[index] = value

    def __delitem__(self, index: int | slice) -> None:
        del self._resolved_items()[index]

    def __len__(self) -> int:
        return len(self._resolved_items())

    def __iter__(self) -> Iterator[str]:
        return iter(self._resolved_items())

    def __contains__(self, value: object) -> bool:
        return value in self._resolved_items()

    def insert(self, index: int, value: str) -> None:
        self._resolved_items().insert(index, value)

    def clear(self) -> None:
        self._resolved_items().clear()

    def reverse(self) -> None:
        self._resolved_items().reverse()

    def sort(self, *, key: Callable[[str], Any] | None = None, reverse: bool = False) -> None:
        self._resolved_items().sort(key=key, reverse=reverse)

    def __eq__(self, other: object) -> bool:
        if isinstance(other, FileList):
            return self._resolved_items() == other._resolved_items()
        if isinstance(other, (list, tuple)):
            return self._resolved_items() == list(other)
        return NotImplemented

    # Copy-style operations: each returns a new resolved `FileList`

    def copy(self) -> FileList:
        return self._derive(self._resolved_items())

    def filter(self, func: Callable[[str], object]) -> FileList:
        return self._derive(p for p in self._resolved_items() if func(p))

    def map(self, func: Callable[[str], str]) -> FileList:
        return self._derive(func(p) for p in self._resolved_items())

    def concat(self, *others: str | Iterable[str]) -> FileList:
        """Append strings or sequences (including other `FileList`s) into a new list."""
        items = list(self._resolved_items())
        for other in others:
            if isinstance(other, str):
                items.append(other)
            else:
                items.extend(other)
        return self._derive(items)

    def __add__(self, other: Iterable[str]) -> FileList:
        if isinstance(other, str):
            return NotImplemented
        return self.concat(other)

    def __radd__(self, other: Iterable[str]) -> FileList:
        if isinstance(other, str):
            return NotImplemented
        return self._derive([*other, *self._resolved_items()])

    def to_list(self) -> list[str]:
        """Resolve and return a copy of the paths that the caller may mutate."""
        return list(self._resolved_items())

    def __repr__(self) -> str:
        if self._pending:
            patterns = [p.pattern for p in self._pending_add]
            return f"{type(self).__name__}(pending={patterns!r})"
        return f"{type(self).__name__}({self._items!r})"
