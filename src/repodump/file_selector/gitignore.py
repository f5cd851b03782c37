"""Gitignore handling using pathspec."""

from __future__ import annotations

from pathlib import Path

import pathspec


def _read_ignore_file(path: Path) -> list[str] | None:
    """
    Return the pattern lines of an ignore file, skipping blanks and comments.
    Returns `None` if the file is missing, unreadable, or not UTF-8.
    """
    try:
        text = path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError):
        return None
    lines = text.splitlines()
    return [line for line in lines if line.strip() and not line.strip().startswith("#")]


def load_gitignore(directory: Path) -> pathspec.PathSpec | None:
    """
    Read `.gitignore` in the given directory and return a compiled `PathSpec`,
    or `None` if the file doesn't exist or has no patterns.
    """
    gitignore = directory / ".gitignore"
    if not gitignore.is_file():
        return None
    lines = _read_ignore_file(gitignore)
    if not lines:
        return None
    return pathspec.GitIgnoreSpec.from_lines(lines)


class GitignoreMatcher:
    """
    Answers whether a root-relative location is ignored by any `.gitignore`
    between the root and the file's directory. Each spec matches paths
    relative to the directory holding it.
    """

    def __init__(self, root: Path) -> None:
        self._root: Path = root
        # Cache gitignore specs per directory to avoid re-reading from disk.
        self._cache: dict[Path, pathspec.PathSpec | None] = {}

    def _get(self, directory: Path) -> pathspec.PathSpec | None:
        if directory not in self._cache:
            self._cache[directory] = load_gitignore(directory)
        return self._cache[directory]

    def is_ignored(self, location: str) -> bool:
        """
        Evaluate specs from the root down so a deeper `.gitignore` can override
        its parents, including re-including a file with a `!` pattern.
        """
        parts = location.split("/")
        ignored = False
        for depth in range(len(parts)):
            spec = self._get(self._root.joinpath(*parts[:depth]))
            if spec is None:
                continue
            verdict = spec.check_file("/".join(parts[depth:])).include
            if verdict is not None:
                ignored = verdict
        return ignored
