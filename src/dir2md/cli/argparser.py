"""Command-line argument parsing for dir2md.

This module defines the command-line interface for dir2md,
handling argument parsing and validation.
"""

import argparse
from pathlib import Path
from typing import Optional

from dir2md import __version__
from dir2md.dir2md import OUTPUT_FORMATS
from dir2md.exclusion_rules.ignore_rules import DEFAULT_IGNORE_FILE


def create_parser() -> argparse.ArgumentParser:
    """Create and configure the command-line argument parser.

    Returns:
        An ArgumentParser instance configured with dir2md's options.
    """
    description = """
    dir2md: render a directory as an ASCII tree, optionally with the contents of its files.

    The directory is walked once. Hidden entries (names starting with '.') are always
    left out, entries matching the ignore patterns are left out together with everything
    below them, and symbolic links are followed without ever visiting the same real path
    twice. For Markdown output, the tree is followed by a "Full File List" section with
    one fenced block per file, except files matching the skip-content patterns (images and
    lock files by default), which only appear in the tree.
    """

    epilog = f"""
    Examples:
      # Print the tree and all file contents to stdout
      dir2md /path/to/project

      # Write a Markdown document (the output file never lists itself)
      dir2md -o tree.md /path/to/project

      # Write just the tree to a text file
      dir2md -o tree.txt /path/to/project

      # Use another ignore file, or add patterns directly
      dir2md --ignore ../project.ignore /path/to/project
      dir2md -i "*.log" -i "build/" /path/to/project

      # Leave PDF contents out as well, or drop the built-in skip list
      dir2md -k "*.pdf" /path/to/project
      dir2md --no-default-skip /path/to/project

      # Print a summary to stderr with debug logging
      dir2md -s stderr -vv /path/to/project

    Ignore file:
      One glob pattern per line; blank lines and lines starting with '#' are skipped.
      Defaults to {DEFAULT_IGNORE_FILE} inside the scanned directory; a missing file is fine.
    """

    parser = argparse.ArgumentParser(
        prog="dir2md",
        description=description,
        epilog=epilog,
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )

    parser.add_argument(
        "-V", "--version", action="version", version=f"dir2md {__version__}", help="Show the version and exit"
    )
    parser.add_argument(
        "directory",
        type=Path,
        help="The directory to scan. All paths in the output are relative to it.",
    )
    parser.add_argument(
        "--ignore",
        type=Path,
        metavar="FILE",
        default=Path(DEFAULT_IGNORE_FILE),
        help=(
            f"Ignore file with glob patterns (default: {DEFAULT_IGNORE_FILE}). "
            "Relative paths are resolved against DIRECTORY."
        ),
    )
    parser.add_argument(
        "-i",
        "--pattern",
        dest="patterns",
        metavar="PATTERN",
        action="append",
        default=[],
        help="Additional ignore pattern (can be specified multiple times).",
    )
    parser.add_argument(
        "-k",
        "--skip-content",
        dest="skip_content",
        metavar="PATTERN",
        action="append",
        default=[],
        help=(
            "Additional case-insensitive file-name pattern whose contents are left out of "
            "the document (can be specified multiple times)."
        ),
    )
    parser.add_argument(
        "--no-default-skip",
        action="store_true",
        help="Do not apply the built-in skip-content patterns (images, package-lock.json, composer.lock).",
    )
    parser.add_argument(
        "-o",
        "--output",
        type=Path,
        metavar="FILE",
        help="Output file path, overwritten if it exists. If not specified, output is written to stdout.",
    )
    parser.add_argument(
        "-f",
        "--format",
        choices=OUTPUT_FORMATS,
        default=None,
        help=(
            "Output format. Defaults to markdown for stdout and .md files, "
            "and to text (tree only) for other files."
        ),
    )
    parser.add_argument(
        "-s",
        "--summary",
        metavar="DEST",
        choices=["stderr", "stdout", "file"],
        help="Print summary report. Valid destinations: stderr, stdout, file (requires -o)",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="count",
        default=0,
        help="Increase log verbosity (-v for info, -vv for debug).",
    )

    return parser


def resolve_output_format(output: Optional[Path], requested: Optional[str]) -> str:
    """Choose the output format for a destination.

    Args:
        output: The output file, or None for stdout.
        requested: The format given on the command line, if any.

    Returns:
        "markdown" or "text".

    Example:
        >>> resolve_output_format(None, None)
        'markdown'
        >>> resolve_output_format(Path("tree.MD"), None)
        'markdown'
        >>> resolve_output_format(Path("tree.txt"), None)
        'text'
        >>> resolve_output_format(Path("tree.txt"), "markdown")
        'markdown'
    """
    if requested:
        return requested
    if output is None or output.suffix.lower() == ".md":
        return "markdown"
    return "text"


def resolve_ignore_file(directory: Path, ignore: Path) -> Path:
    """Resolve the ignore file location against the scanned directory.

    Example:
        >>> resolve_ignore_file(Path("/srv/app"), Path(".ignore")).as_posix()
        '/srv/app/.ignore'
        >>> resolve_ignore_file(Path("/srv/app"), Path("/etc/app.ignore")).as_posix()
        '/etc/app.ignore'
    """
    if ignore.is_absolute():
        return ignore
    return directory / ignore


def validate_args(args: argparse.Namespace) -> None:
    """Validate command-line arguments.

    Performs additional validation beyond what argparse can handle.

    Args:
        args: Parsed command-line arguments.

    Raises:
        ValueError: If any arguments fail validation.
    """
    if args.summary == "file" and not args.output:
        raise ValueError("--summary=file requires -o/--output to be specified")
