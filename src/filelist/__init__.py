"""
Lazily resolved, deduplicated file lists driven by include/exclude rules.

Usage::

    from filelist import FileList

    files = FileList()
    files.include("src/**/*.py", "README.md")
    files.include("*.json", nocase=True)
    files.exclude("src/generated", re.compile(r"_test\\.py$"))
    paths = files.to_list()  # the filesystem is read here, once
"""

from filelist.config import FileListConfig, find_config_file, load_config
from filelist.defaults import DEFAULT_IGNORE_PATTERNS, DEFAULT_IGNORE_PREDICATES
from filelist.errors import (
    ConfigError,
    DirectoryReadError,
    ExclusionPatternError,
    FileListError,
    InvalidOptionError,
    ReadErrorKind,
)
from filelist.excludes import ExclusionRuleSet
from filelist.file_list import FileList
from filelist.matcher import basedir, glob_sync, match_paths, read_dir_recursive
from filelist.types import MatchOptions, PendingInclude

__all__ = [
    "ConfigError",
    "DEFAULT_IGNORE_PATTERNS",
    "DEFAULT_IGNORE_PREDICATES",
    "DirectoryReadError",
    "ExclusionPatternError",
    "ExclusionRuleSet",
    "FileList",
    "FileListConfig",
    "FileListError",
    "InvalidOptionError",
    "MatchOptions",
    "PendingInclude",
    "ReadErrorKind",
    "basedir",
    "find_config_file",
    "glob_sync",
    "load_config",
    "match_paths",
    "read_dir_recursive",
]
