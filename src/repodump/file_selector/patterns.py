"""
Pure helpers for glob patterns and relative paths.

Nothing here touches the filesystem, so hidden-path detection and pattern
validation can be tested on plain strings.
"""

from __future__ import annotations

from pathlib import Path, PurePosixPath, PureWindowsPath

from repodump.errors import FileReadError, PatternError
from repodump.file_selector.defaults import HIDDEN_PREFIX

_RECURSIVE = "**"


def validate_pattern(pattern: str) -> str:
    """
    Check that `pattern` is a usable glob rooted inside the selection root and
    return it normalized: `\\` separators become `/`, and a trailing `**`
    segment becomes `**/*` so it matches the files below it.

    Raises `PatternError` for an empty pattern, an absolute pattern, a `..`
    segment, a `**` that is not a whole segment, or an unterminated `[`.
    """
    if not pattern:
        raise PatternError(pattern, "pattern is empty")
    normalized = pattern.replace("\\", "/")
    if normalized.startswith("/") or PureWindowsPath(pattern).drive:
        raise PatternError(pattern, "pattern must be relative to the root")

    segments = normalized.rstrip("/").split("/")
    for segment in segments:
        if segment == "..":
            raise PatternError(pattern, "'..' would select files outside the root")
        if _RECURSIVE in segment and segment != _RECURSIVE:
            raise PatternError(pattern, "'**' must be an entire path segment")
        _check_char_classes(pattern, segment)

    # Globbing `**` alone yields directories only on some Python versions.
    if segments[-1] == _RECURSIVE:
        normalized = "/".join(segments) + "/*"
    return normalized


def _check_char_classes(pattern: str, segment: str) -> None:
    """Reject a `[` that never closes within its segment."""
    i = 0
    n = len(segment)
    while i < n:
        if segment[i] == "[":
            j = i + 1
            if j < n and segment[j] == "!":
                j += 1
            # A `]` right after `[` or `[!` is a literal member of the class.
            if j < n and segment[j] == "]":
                j += 1
            while j < n and segment[j] != "]":
                j += 1
            if j >= n:
                raise PatternError(pattern, f"unterminated character class in {segment!r}")
            i = j
        i += 1


def is_hidden(location: str) -> bool:
    """
    True if any segment of the root-relative `location` starts with a dot,
    so `a/.b/c.txt` is hidden even though `c.txt` is not.
    """
    return any(
        part.startswith(HIDDEN_PREFIX) and part not in (".", "..")
        for part in PurePosixPath(location).parts
    )


def to_location(path: Path, root: Path) -> str:
    """Return `path` relative to `root` as a `/`-separated string."""
    return path.relative_to(root).as_posix()


def check_utf8_name(location: str) -> str:
    """
    Return `location` if it can be written out as UTF-8. File names that
    aren't valid UTF-8 come back from the filesystem with surrogate escapes
    and raise `FileReadError`, which names the file with backslash escapes.
    """
    try:
        location.encode("utf-8")
    except UnicodeEncodeError as e:
        shown = location.encode("utf-8", "backslashreplace").decode("utf-8")
        raise FileReadError(shown, f"file name is not valid UTF-8 ({e.reason})") from e
    return location
