"""
Default patterns for file selection.

Patterns use shell glob syntax rooted at the selection root, with `**`
matching any number of path segments.
"""

from __future__ import annotations

# Everything under the root, at any depth.
DEFAULT_INCLUDE: str = "**/*"

# A path segment starting with this prefix marks the path as hidden.
HIDDEN_PREFIX: str = "."
