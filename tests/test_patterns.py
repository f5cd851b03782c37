"""Tests for the pure pattern and path helpers."""

from __future__ import annotations

from pathlib import Path

import pytest

from repodump.errors import PatternError
from repodump.file_selector import is_hidden, to_location, validate_pattern


def test_is_hidden_leaf():
    assert is_hidden(".hidden.txt")
    assert not is_hidden("visible.txt")


def test_is_hidden_checks_every_segment():
    assert is_hidden("a/.b/c.txt")
    assert is_hidden(".git/config")
    assert not is_hidden("a/b/c.txt")


def test_is_hidden_dot_inside_name_is_not_hidden():
    assert not is_hidden("src/file.name.py")
    assert not is_hidden("dir.d/file")


def test_is_hidden_ignores_current_dir_segment():
    assert not is_hidden("./a/b.txt")


def test_to_location_uses_forward_slashes(tmp_path: Path):
    nested = tmp_path / "sub" / "deep" / "file.txt"
    assert to_location(nested, tmp_path) == "sub/deep/file.txt"


def test_validate_pattern_accepts_common_globs():
    for pattern in ["**/*", "*.txt", "sub/*.txt", "src/**/*.py", "file?.md", "[ab].txt", "[!x]*"]:
        assert validate_pattern(pattern) == pattern


def test_validate_pattern_normalizes_backslashes():
    assert validate_pattern("sub\\*.txt") == "sub/*.txt"


def test_validate_pattern_trailing_recursive_matches_files():
    assert validate_pattern("sub/**") == "sub/**/*"
    assert validate_pattern("**") == "**/*"


def test_validate_pattern_closing_bracket_first_in_class():
    assert validate_pattern("[]]x") == "[]]x"
    assert validate_pattern("[!]]x") == "[!]]x"


@pytest.mark.parametrize(
    "pattern",
    ["", "/etc/*", "../*", "sub/../../*", "a**", "***", "**b/*.txt", "[abc.txt", "sub/[!"],
)
def test_validate_pattern_rejects_invalid(pattern: str):
    with pytest.raises(PatternError) as exc:
        validate_pattern(pattern)
    assert exc.value.pattern == pattern


def test_pattern_error_message_names_pattern():
    with pytest.raises(PatternError, match="a\\*\\*"):
        validate_pattern("a**")
