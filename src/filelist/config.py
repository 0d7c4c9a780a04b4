"""
Project-level defaults for `FileList`, read from TOML.

A config lives in `.filelist.toml`, `filelist.toml`, or the `[tool.filelist]`
table of a `pyproject.toml`, in the nearest directory at or above the start
directory. Keys may be grouped under any tables (`[files]`, `[match]`, ...)
and written in kebab-case. Keys left out of the file stay `None`.
"""

from __future__ import annotations

import sys
from collections.abc import Callable, Iterator
from dataclasses import dataclass
from pathlib import Path
from typing import Any

from filelist.errors import ConfigError
from filelist.types import MatchOptions

if sys.version_info >= (3, 11):
    import tomllib  # pyright: ignore[reportUnreachable]
else:
    import tomli as tomllib  # type: ignore[no-redef]  # pyright: ignore[reportUnreachable]


@dataclass
class FileListConfig:
    """Settings loaded from a config file."""

    include: list[str] | None = None
    exclude: list[str] | None = None
    respect_gitignore: bool | None = None
    nocase: bool | None = None
    dot: bool | None = None

    @property
    def match_options(self) -> MatchOptions:
        """Options for the configured includes. Unset flags are off."""
        return MatchOptions(nocase=bool(self.nocase), dot=bool(self.dot))


_STANDALONE_NAMES = (".filelist.toml", "filelist.toml")
_PYPROJECT = "pyproject.toml"


def _as_paths(key: str, value: Any) -> list[str]:
    if isinstance(value, str):
        return [value]
    if isinstance(value, list) and all(isinstance(item, str) for item in value):
        return list(value)
    raise ConfigError(f"`{key}` must be a string or a list of strings, got {value!r}")


def _as_flag(key: str, value: Any) -> bool:
    if isinstance(value, bool):
        return value
    raise ConfigError(f"`{key}` must be true or false, got {value!r}")


# Field name -> converter for the raw TOML value
_SCHEMA: dict[str, Callable[[str, Any], Any]] = {
    "include": _as_paths,
    "exclude": _as_paths,
    "respect_gitignore": _as_flag,
    "nocase": _as_flag,
    "dot": _as_flag,
}


def _candidates(directory: Path) -> Iterator[Path]:
    for name in (*_STANDALONE_NAMES, _PYPROJECT):
        yield directory / name


def _is_config_file(path: Path) -> bool:
    if not path.is_file():
        return False
    if path.name != _PYPROJECT:
        return True
    # A pyproject only counts when it has a [tool.filelist] table.
    try:
        return "filelist" in tomllib.loads(path.read_text()).get("tool", {})
    except (tomllib.TOMLDecodeError, OSError):
        return False


def find_config_file(start_dir: Path) -> Path | None:
    """
    Return the nearest config file at or above `start_dir`, or `None`.
    Within one directory, `.filelist.toml` beats `filelist.toml`, which
    beats `pyproject.toml`.
    """
    start = start_dir.resolve()
    for directory in (start, *start.parents):
        for candidate in _candidates(directory):
            if _is_config_file(candidate):
                return candidate
    return None


def load_config(config_path: Path) -> FileListConfig:
    """
    Read `config_path` into a `FileListConfig`. Raises `ConfigError` when a
    known key holds a value of the wrong type.
    """
    table: dict[str, Any] = tomllib.loads(config_path.read_text())
    if config_path.name == _PYPROJECT:
        table = table.get("tool", {}).get("filelist", {})
    try:
        return _parse_config_data(table)
    except ConfigError as e:
        raise ConfigError(f"{config_path}: {e}") from e


def _leaf_items(table: dict[str, Any]) -> Iterator[tuple[str, Any]]:
    """Yield the keys of `table`, with nested tables opened one level."""
    for key, value in table.items():
        if isinstance(value, dict):
            yield from value.items()
        else:
            yield key, value


def _parse_config_data(data: dict[str, Any]) -> FileListConfig:
    values: dict[str, Any] = {}
    for key, value in _leaf_items(data):
        name = key.replace("-", "_")
        convert = _SCHEMA.get(name)
        if convert is not None:
            values[name] = convert(key, value)
    return FileListConfig(**values)
