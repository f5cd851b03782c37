#!/usr/bin/env python3
"""
repodump: Export a directory tree's files into one Markdown or JSON file

Common usage:
  repodump .
  repodump path/to/repo -p '**/*.py' -e 'tests/**/*'
  repodump path/to/repo -f json -o context
  repodump --list-files path/to/repo

Patterns are shell globs relative to the root; `**` matches any number of
directories. Hidden files (any path segment starting with `.`) are skipped
unless --include-hidden is given.
"""

from __future__ import annotations

import argparse
import importlib.metadata
import sys
from dataclasses import dataclass
from pathlib import Path

from repodump.config import apply_config, find_config_file, load_config
from repodump.errors import RepodumpError
from repodump.exporter import OutputFormat, export_files
from repodump.file_selector import FileSelector, SelectorConfig


@dataclass
class Options:
    """Command-line options for the repodump tool."""

    root: str
    include: str | None
    exclude: str | None
    format: OutputFormat
    include_hidden: bool
    output: str
    respect_gitignore: bool
    list_files: bool
    verbose: bool
    version: bool


def _parse_args(args: list[str] | None = None) -> tuple[Options, set[str]]:
    """
    Parse command-line arguments.

    Returns a tuple of (options, explicit_flags) where `explicit_flags`
    tracks which flags the user explicitly passed (for config merge precedence).
    """
    # Use the module's docstring as the description
    module_doc = __doc__ or ""
    doc_parts = module_doc.split("\n\n")
    description = doc_parts[0]
    epilog = "\n\n".join(doc_parts[1:])

    parser = argparse.ArgumentParser(
        prog="repodump",
        description=description,
        epilog=epilog,
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument(
        "root",
        nargs="?",
        type=str,
        default=".",
        help="Root directory to export (default: current directory)",
    )
    parser.add_argument(
        "-p",
        "--include",
        type=str,
        default=None,
        metavar="GLOB",
        help="Include files matching the specified glob pattern (default: '**/*')",
    )
    parser.add_argument(
        "-e",
        "--exclude",
        type=str,
        default=None,
        metavar="GLOB",
        help="Exclude files matching the specified glob pattern",
    )
    parser.add_argument(
        "-f",
        "--format",
        type=str,
        choices=[f.value for f in OutputFormat],
        default=OutputFormat.markdown.value,
        help="Choose an output format: json or markdown (default: %(default)s)",
    )
    parser.add_argument(
        "-i",
        "--include-hidden",
        action="store_true",
        dest="include_hidden",
        help="Include hidden files in the output",
    )
    parser.add_argument(
        "-o",
        "--output",
        type=str,
        default="output",
        help="Set the output file path; the extension is set by --format "
        "(default: %(default)s)",
    )
    parser.add_argument(
        "--respect-gitignore",
        action="store_true",
        dest="respect_gitignore",
        help="Also exclude files ignored by .gitignore files under the root",
    )
    parser.add_argument(
        "--list-files",
        action="store_true",
        dest="list_files",
        help="Print the selected file paths without writing any output file",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Print progress and each exported path to stderr",
    )
    parser.add_argument(
        "--version",
        action="store_true",
        help="Show version information and exit",
    )
    opts = parser.parse_args(args)

    # Track which flags the user explicitly set (for config merge precedence).
    # Re-parse with sentinel defaults so passing a default value still counts.
    _SENTINEL = object()
    _tracked_flags = [
        "include",
        "exclude",
        "format",
        "include_hidden",
        "output",
        "respect_gitignore",
    ]
    sentinel_parser = argparse.ArgumentParser(add_help=False)
    sentinel_parser.add_argument("-p", "--include", default=_SENTINEL)
    sentinel_parser.add_argument("-e", "--exclude", default=_SENTINEL)
    sentinel_parser.add_argument("-f", "--format", default=_SENTINEL)
    sentinel_parser.add_argument(
        "-i", "--include-hidden", dest="include_hidden", action="store_true", default=_SENTINEL
    )
    sentinel_parser.add_argument("-o", "--output", default=_SENTINEL)
    sentinel_parser.add_argument(
        "--respect-gitignore", dest="respect_gitignore", action="store_true", default=_SENTINEL
    )
    sentinel_opts, _ = sentinel_parser.parse_known_args(args if args is not None else sys.argv[1:])

    explicit_flags = {
        name for name in _tracked_flags if getattr(sentinel_opts, name, _SENTINEL) is not _SENTINEL
    }

    return (
        Options(
            root=opts.root,
            include=opts.include,
            exclude=opts.exclude,
            format=OutputFormat(opts.format),
            include_hidden=opts.include_hidden,
            output=opts.output,
            respect_gitignore=opts.respect_gitignore,
            list_files=opts.list_files,
            verbose=opts.verbose,
            version=opts.version,
        ),
        explicit_flags,
    )


def _run(options: Options) -> None:
    """Select files under the root and either list or export them."""
    selector = FileSelector(
        SelectorConfig(
            include=options.include,
            exclude=options.exclude,
            include_hidden=options.include_hidden,
            respect_gitignore=options.respect_gitignore,
        )
    )
    selected = selector.select(options.root)

    if options.list_files:
        for location in sorted(selected):
            print(location)
        return

    if options.verbose:
        print(f"Selected {len(selected)} files under {options.root}", file=sys.stderr)
        for location in sorted(selected):
            print(f"  {location}", file=sys.stderr)

    written = export_files(selected, options.root, options.output, options.format)
    print(written)


def main(args: list[str] | None = None) -> int:
    """
    Main entry point for the repodump CLI.

    Args:
        args: Command-line arguments (uses sys.argv if None)

    Returns:
        Exit code (0 for success, non-zero for errors)
    """
    options, explicit_flags = _parse_args(args)

    if options.version:
        try:
            version = importlib.metadata.version("repodump")
            print(f"v{version}")
        except importlib.metadata.PackageNotFoundError:
            print("unknown (package not installed)")
        return 0

    try:
        config_path = find_config_file(Path.cwd())
        if config_path:
            config = load_config(config_path)
            options = apply_config(options, config, explicit_flags)
            if options.verbose:
                print(f"Using config file {config_path}", file=sys.stderr)
        _run(options)
    except RepodumpError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1
    except Exception as e:
        # Anything else is a bug or an environment problem, not bad input.
        print(f"Unexpected error: {e}", file=sys.stderr)
        return 2

    return 0


if __name__ == "__main__":
    sys.exit(main())
