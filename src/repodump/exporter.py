"""
Export selected files into a single Markdown or JSON artifact.

Entries are sorted by location so the same selection always produces the
same bytes. File contents are copied verbatim: no newline translation, no
placeholder text for unreadable files.
"""

from __future__ import annotations

import json
from collections.abc import Iterable
from dataclasses import asdict, dataclass
from enum import Enum
from pathlib import Path, PurePosixPath
from typing import Any

from strif import atomic_output_file

from repodump.errors import ArtifactError, FileReadError, OutputError
from repodump.file_selector.patterns import check_utf8_name


class OutputFormat(str, Enum):
    """Artifact format. The value is the name used on the command line."""

    json = "json"
    markdown = "markdown"

    @property
    def extension(self) -> str:
        return ".json" if self is OutputFormat.json else ".md"


@dataclass(frozen=True)
class FileEntry:
    """One exported file: its root-relative location and its full text."""

    location: str
    content: str


def read_text_exact(path: Path) -> str:
    """Read `path` as UTF-8 without newline translation."""
    return path.read_bytes().decode("utf-8")


def check_location(location: str) -> None:
    """Reject a location that is absolute, climbs out of the root, or isn't UTF-8."""
    path = PurePosixPath(location)
    if path.is_absolute() or Path(location).is_absolute() or ".." in path.parts:
        raise FileReadError(location, "location is outside the root directory")
    check_utf8_name(location)


def build_file_entries(files: Iterable[str], root: str | Path) -> list[FileEntry]:
    """
    Read each selected location under `root` and return entries sorted by
    location. Raises `FileReadError` on the first file that can't be read
    or isn't valid UTF-8, and for a location that leaves `root`.
    """
    root_path = Path(root)
    entries: list[FileEntry] = []
    for location in sorted(set(files)):
        check_location(location)
        try:
            content = read_text_exact(root_path / location)
        except UnicodeDecodeError as e:
            raise FileReadError(location, f"not valid UTF-8 text ({e.reason})") from e
        except OSError as e:
            raise FileReadError(location, e.strerror or str(e)) from e
        entries.append(FileEntry(location=location, content=content))
    return entries


def render_markdown(entries: Iterable[FileEntry]) -> str:
    """One `## <location>` heading per entry, followed by its content."""
    return "".join(f"## {entry.location}\n{entry.content}\n" for entry in entries)


def render_json(entries: Iterable[FileEntry]) -> str:
    """A compact JSON array of `{"location": ..., "content": ...}` objects."""
    return json.dumps(
        [asdict(entry) for entry in entries],
        ensure_ascii=False,
        separators=(",", ":"),
    )


_RENDERERS = {
    OutputFormat.json: render_json,
    OutputFormat.markdown: render_markdown,
}


def output_path_for(output_path: str | Path, fmt: OutputFormat) -> Path:
    """Replace any extension on `output_path` with the one `fmt` requires."""
    path = Path(output_path)
    try:
        return path.with_suffix(fmt.extension)
    except ValueError as e:
        raise OutputError(path, str(e)) from e


def write_atomic(path: Path, content: str) -> None:
    """
    Write `content` as UTF-8 to `path` atomically. On failure any previous
    file at `path` is left as it was.
    """
    try:
        data = content.encode("utf-8")
    except UnicodeEncodeError as e:
        raise OutputError(path, f"output is not encodable as UTF-8 ({e.reason})") from e

    try:
        with atomic_output_file(path, make_parents=True) as temp_path:
            Path(temp_path).write_bytes(data)
    except OSError as e:
        raise OutputError(path, e.strerror or str(e)) from e


def export_files(
    files: Iterable[str],
    root: str | Path,
    output_path: str | Path,
    fmt: OutputFormat,
) -> Path:
    """
    Read the selected `files` (locations relative to `root`), serialize them
    in `fmt` and write the artifact. The extension of `output_path` is forced
    to `.md` or `.json`. Returns the path written.
    """
    target = output_path_for(output_path, fmt)
    entries = build_file_entries(files, root)
    write_atomic(target, _RENDERERS[fmt](entries))
    return target


def load_entries(path: str | Path) -> list[FileEntry]:
    """Parse a JSON artifact back into entries."""
    try:
        data: Any = json.loads(Path(path).read_text(encoding="utf-8"))
    except (OSError, UnicodeDecodeError, json.JSONDecodeError) as e:
        raise ArtifactError(f"Could not load artifact {path}: {e}") from e
    if not isinstance(data, list):
        raise ArtifactError(f"Artifact {path} is not a JSON array")

    entries: list[FileEntry] = []
    for item in data:
        if (
            not isinstance(item, dict)
            or set(item) != {"location", "content"}
            or not all(isinstance(v, str) for v in item.values())
        ):
            raise ArtifactError(f"Artifact {path} has a malformed entry: {item!r}")
        entries.append(FileEntry(location=item["location"], content=item["content"]))
    return entries
