"""Configuration types for file selection."""

from __future__ import annotations

from dataclasses import dataclass

from repodump.file_selector.defaults import DEFAULT_INCLUDE


@dataclass
class SelectorConfig:
    """
    Configuration for selecting files under a root directory.

    `include=None` means `DEFAULT_INCLUDE` (every file, recursively).
    `exclude=None` means nothing is excluded by pattern.
    `respect_gitignore` is off by default so the result depends only on the
    patterns and the hidden-file policy.
    """

    include: str | None = None
    exclude: str | None = None
    include_hidden: bool = False
    respect_gitignore: bool = False

    @property
    def effective_include(self) -> str:
        """The include pattern, falling back to `DEFAULT_INCLUDE`."""
        return self.include if self.include is not None else DEFAULT_INCLUDE
