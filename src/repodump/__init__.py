"""
repodump: select files under a directory with glob patterns and export their
paths and contents as a single Markdown or JSON file.
"""

from repodump.errors import (
    ArtifactError,
    ConfigError,
    FileReadError,
    InvalidRootError,
    OutputError,
    PatternError,
    RepodumpError,
)
from repodump.exporter import FileEntry, OutputFormat, export_files, load_entries
from repodump.file_selector import FileSelector, SelectorConfig, select_files

__all__ = [
    "ArtifactError",
    "ConfigError",
    "FileEntry",
    "FileReadError",
    "FileSelector",
    "InvalidRootError",
    "OutputError",
    "OutputFormat",
    "PatternError",
    "RepodumpError",
    "SelectorConfig",
    "export_files",
    "load_entries",
    "select_files",
]
