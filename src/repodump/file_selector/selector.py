"""
FileSelector: main entry point for file selection.

Expands include and exclude globs under a root directory into sets of
root-relative locations and returns their difference.
"""

from __future__ import annotations

from pathlib import Path

from repodump.errors import InvalidRootError, PatternError
from repodump.file_selector.gitignore import GitignoreMatcher
from repodump.file_selector.patterns import (
    check_utf8_name,
    is_hidden,
    to_location,
    validate_pattern,
)
from repodump.file_selector.types import SelectorConfig


class FileSelector:
    """
    Selects regular files under a root directory.

    The include and exclude patterns are evaluated independently, each
    filtered to regular files and by the hidden-file policy, and combined by
    set difference. Directories matched by a pattern are dropped; a matched
    directory does not pull in or prune its contents.
    """

    def __init__(self, config: SelectorConfig) -> None:
        self._config: SelectorConfig = config
        # Validate up front so a bad exclude fails before any globbing.
        self._include: str = validate_pattern(config.effective_include)
        self._exclude: str | None = (
            validate_pattern(config.exclude) if config.exclude is not None else None
        )

    def select(self, root: str | Path) -> set[str]:
        """
        Return the set of `/`-separated locations, relative to `root`, of the
        files selected by the configured patterns.

        Raises `FileReadError` if a selected file name isn't valid UTF-8.
        """
        root_path = _check_root(Path(root))

        included = self._expand(root_path, self._include)
        excluded = self._expand(root_path, self._exclude) if self._exclude else set()

        if self._config.respect_gitignore:
            matcher = GitignoreMatcher(root_path)
            excluded |= {loc for loc in included if matcher.is_ignored(loc)}

        selected = included - excluded
        for location in sorted(selected):
            check_utf8_name(location)
        return selected

    def _expand(self, root: Path, pattern: str) -> set[str]:
        """Expand `pattern` under `root` into hidden-filtered file locations."""
        try:
            matches = list(root.glob(pattern))
        except (ValueError, NotImplementedError) as e:
            raise PatternError(pattern, str(e)) from e

        locations: set[str] = set()
        for path in matches:
            if not path.is_file():
                continue
            location = to_location(path, root)
            if not self._config.include_hidden and is_hidden(location):
                continue
            locations.add(location)
        return locations


def _check_root(root: Path) -> Path:
    if not root.exists():
        raise InvalidRootError(f"Root directory '{root}' does not exist")
    if not root.is_dir():
        raise InvalidRootError(f"Root path '{root}' is not a directory")
    return root


def select_files(
    root: str | Path,
    include: str | None = None,
    exclude: str | None = None,
    include_hidden: bool = False,
    respect_gitignore: bool = False,
) -> set[str]:
    """Convenience wrapper: build a `FileSelector` and run it once on `root`."""
    config = SelectorConfig(
        include=include,
        exclude=exclude,
        include_hidden=include_hidden,
        respect_gitignore=respect_gitignore,
    )
    return FileSelector(config).select(root)
