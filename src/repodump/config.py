"""
Project defaults for repodump, read from TOML.

The first of `.repodump.toml`, `repodump.toml`, or a `pyproject.toml` with a
`[tool.repodump]` table, found walking up from the current directory, supplies
defaults for the command-line options; setting names match the `SelectorConfig`
fields plus `format` (an `OutputFormat`) and `output`. Keys may be kebab-case and may
be grouped under `[selection]` / `[output]` tables. Every value is type-checked
when the file is loaded; flags given on the command line win over the file.
"""

from __future__ import annotations

import dataclasses
import sys
from dataclasses import dataclass
from pathlib import Path
from typing import Any, TypeVar, cast

from repodump.errors import ConfigError
from repodump.exporter import OutputFormat

if sys.version_info >= (3, 11):
    import tomllib  # pyright: ignore[reportUnreachable]
else:
    import tomli as tomllib  # type: ignore[no-redef]  # pyright: ignore[reportUnreachable]

CONFIG_FILENAMES = (".repodump.toml", "repodump.toml")
PYPROJECT = "pyproject.toml"

# Expected TOML type for each setting.
_SETTING_TYPES: dict[str, type] = {
    "include": str,
    "exclude": str,
    "include_hidden": bool,
    "respect_gitignore": bool,
    "format": str,
    "output": str,
}


@dataclass(frozen=True)
class RepodumpConfig:
    """
    Settings from a config file. `None` means the file doesn't set it, so the
    command-line default applies.
    """

    include: str | None = None
    exclude: str | None = None
    include_hidden: bool | None = None
    respect_gitignore: bool | None = None
    format: OutputFormat | None = None
    output: str | None = None

    def settings(self) -> dict[str, Any]:
        """The settings this file actually sets."""
        return {
            f.name: getattr(self, f.name)
            for f in dataclasses.fields(self)
            if getattr(self, f.name) is not None
        }


def _read_toml(path: Path) -> dict[str, Any]:
    try:
        return tomllib.loads(path.read_text(encoding="utf-8"))
    except (tomllib.TOMLDecodeError, OSError, UnicodeDecodeError) as e:
        raise ConfigError(f"Could not load config file {path}: {e}") from e


def _repodump_table(pyproject: Path) -> dict[str, Any] | None:
    """The `[tool.repodump]` table of a pyproject.toml, or `None` if absent or unreadable."""
    try:
        tool = _read_toml(pyproject).get("tool", {})
    except ConfigError:
        return None
    table = tool.get("repodump") if isinstance(tool, dict) else None
    return cast(dict[str, Any], table) if table is not None else None


def find_config_file(start_dir: Path) -> Path | None:
    """
    Return the nearest config file at or above `start_dir`, or `None`. Within
    one directory `.repodump.toml` beats `repodump.toml`, which beats a
    `pyproject.toml` that has a `[tool.repodump]` table.
    """
    start = start_dir.resolve()
    for directory in (start, *start.parents):
        for name in CONFIG_FILENAMES:
            if (directory / name).is_file():
                return directory / name
        pyproject = directory / PYPROJECT
        if pyproject.is_file() and _repodump_table(pyproject) is not None:
            return pyproject
    return None


def _flatten(table: dict[str, Any]) -> dict[str, Any]:
    """Lift keys out of `[selection]`-style sub-tables and normalize them to snake_case."""
    flat: dict[str, Any] = {}
    for key, value in table.items():
        if isinstance(value, dict):
            flat.update(_flatten(cast(dict[str, Any], value)))
        else:
            flat[key.replace("-", "_")] = value
    return flat


def _check_setting(name: str, value: Any, path: Path) -> Any:
    expected = _SETTING_TYPES[name]
    if not isinstance(value, expected):
        raise ConfigError(
            f"{path}: {name.replace('_', '-')} must be a {expected.__name__}, "
            f"got {type(value).__name__} {value!r}"
        )
    if name == "format":
        try:
            return OutputFormat(value)
        except ValueError:
            choices = ", ".join(f.value for f in OutputFormat)
            raise ConfigError(
                f"{path}: Unknown output format {value!r} (expected one of: {choices})"
            ) from None
    return value


def load_config(config_path: Path) -> RepodumpConfig:
    """
    Load and validate a config file. Raises `ConfigError` for invalid TOML or
    a value of the wrong type; unknown keys only produce a warning.
    """
    data = _read_toml(config_path)
    if config_path.name == PYPROJECT:
        table = data.get("tool", {}).get("repodump", {})
        if not isinstance(table, dict):
            raise ConfigError(f"{config_path}: [tool.repodump] must be a table")
        data = cast(dict[str, Any], table)

    settings: dict[str, Any] = {}
    for name, value in _flatten(data).items():
        if name not in _SETTING_TYPES:
            print(f"Warning: unrecognized config key {name!r} (ignored)", file=sys.stderr)
            continue
        settings[name] = _check_setting(name, value, config_path)
    return RepodumpConfig(**settings)


_Opts = TypeVar("_Opts")


def apply_config(
    options: _Opts, config: RepodumpConfig | None, explicit_flags: set[str]
) -> _Opts:
    """
    Return `options` with the config file's settings filled in for every
    option the user didn't pass explicitly.
    """
    if config is None:
        return options
    updates = {
        name: value for name, value in config.settings().items() if name not in explicit_flags
    }
    return dataclasses.replace(options, **updates)  # type: ignore[type-var]
