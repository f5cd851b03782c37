"""Exception types raised by repodump."""

from __future__ import annotations

from pathlib import Path


class RepodumpError(Exception):
    """Base class for all errors reported by repodump."""


class PatternError(RepodumpError):
    """An include or exclude glob pattern is not valid."""

    def __init__(self, pattern: str, reason: str) -> None:
        super().__init__(f"Invalid glob pattern {pattern!r}: {reason}")
        self.pattern: str = pattern
        self.reason: str = reason


class InvalidRootError(RepodumpError):
    """The root path does not exist or is not a directory."""


class FileReadError(RepodumpError):
    """A selected file could not be read or decoded as UTF-8 text."""

    def __init__(self, path: str | Path, reason: str) -> None:
        super().__init__(f"Could not read {path}: {reason}")
        self.path: str | Path = path


class OutputError(RepodumpError):
    """The output artifact could not be created or written."""

    def __init__(self, path: str | Path, reason: str) -> None:
        super().__init__(f"Could not write {path}: {reason}")
        self.path: str | Path = path


class ConfigError(RepodumpError):
    """A config file could not be read or parsed."""


class ArtifactError(RepodumpError):
    """An exported artifact could not be parsed back into entries."""
