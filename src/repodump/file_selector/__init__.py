"""
File selection with include/exclude globs and a hidden-file policy.

Usage::

    from repodump.file_selector import FileSelector, SelectorConfig

    config = SelectorConfig(include="**/*.py", exclude="tests/**/*")
    locations = FileSelector(config).select("path/to/repo")
"""

from repodump.file_selector.defaults import DEFAULT_INCLUDE
from repodump.file_selector.patterns import is_hidden, to_location, validate_pattern
from repodump.file_selector.selector import FileSelector, select_files
from repodump.file_selector.types import SelectorConfig

__all__ = [
    "DEFAULT_INCLUDE",
    "FileSelector",
    "SelectorConfig",
    "is_hidden",
    "select_files",
    "to_location",
    "validate_pattern",
]
