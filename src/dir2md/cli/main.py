"""Command-line interface for dir2md.

This module provides the command-line entry point. It parses arguments, builds the
exclusion rules, walks the directory and writes the tree (and, for Markdown output,
the file contents) to stdout or a file.

Signal Handling Notes:
    - SIGPIPE: Handled when output pipe is closed (e.g., when piping to `head`) on Unix-like systems
    - SIGINT: Handled for clean exit on Ctrl+C
    Both cases stop writing, close the output and exit with the conventional code.

Exit Codes:
    0: Successful completion
    1: Runtime error during execution (including a failed directory walk)
    2: Command-line syntax error
    126: Permission denied
    130: Interrupted by SIGINT (Ctrl+C)
    141: Broken pipe (SIGPIPE) on Unix-like systems

Example:
    # Markdown document with tree and contents
    $ dir2md -o tree.md /path/to/dir

    # Display version information
    $ dir2md --version
"""

import argparse
import logging
import sys
from collections.abc import Mapping

from dir2md.cli.argparser import create_parser, resolve_ignore_file, resolve_output_format, validate_args
from dir2md.cli.safe_writer import SafeWriter
from dir2md.cli.signal_handler import setup_signal_handling, signal_handler
from dir2md.dir2md import StreamingDir2Md
from dir2md.exceptions import TreeBuildError
from dir2md.exclusion_rules.ignore_rules import IgnoreExclusionRules
from dir2md.exclusion_rules.skip_content_rules import DEFAULT_SKIP_CONTENT_PATTERNS, SkipContentRules

logger = logging.getLogger(__name__)

EXIT_ERROR = 1
EXIT_PERMISSION_DENIED = 126

LOG_FORMAT = "%(levelname)s: %(message)s"


def configure_logging(verbosity: int) -> None:
    """Send log records to stderr at a level chosen by the number of -v flags."""
    if verbosity >= 2:
        level = logging.DEBUG
    elif verbosity == 1:
        level = logging.INFO
    else:
        level = logging.WARNING
    logging.basicConfig(level=level, format=LOG_FORMAT, stream=sys.stderr)


def format_counts(counts: Mapping) -> str:
    """Format the counts into a human-readable string.

    Args:
        counts: Mapping containing various count metrics.

    Returns:
        A formatted string showing all counts with appropriate labels.
    """
    return "\n".join(
        [
            f"Directories: {counts['directories']}",
            f"Files: {counts['files']}",
            f"Files with content: {counts['content_files']}",
            f"Lines: {counts['lines']}",
            f"Characters: {counts['characters']}",
        ]
    )


def build_ignore_rules(args: argparse.Namespace) -> IgnoreExclusionRules:
    """Load the ignore file and append any -i/--pattern patterns."""
    rules = IgnoreExclusionRules(resolve_ignore_file(args.directory, args.ignore))
    for pattern in args.patterns:
        rules.add_rule(pattern)
    return rules


def build_skip_content_rules(args: argparse.Namespace) -> SkipContentRules:
    """Start from the built-in skip-content patterns (unless disabled) and extend them."""
    defaults = () if args.no_default_skip else DEFAULT_SKIP_CONTENT_PATTERNS
    return SkipContentRules(list(defaults) + list(args.skip_content))


def run(args: argparse.Namespace) -> None:
    """Walk the directory and write the output described by ``args``.

    Raises:
        FileNotFoundError: If the directory does not exist.
        TreeBuildError: If the directory cannot be walked.
        OSError: If the output cannot be written.
    """
    output_format = resolve_output_format(args.output, args.format)
    exclude_paths = [args.output] if args.output else []

    analyzer = StreamingDir2Md(
        args.directory,
        ignore_rules=build_ignore_rules(args),
        skip_content_rules=build_skip_content_rules(args),
        output_format=output_format,
        fence_tree=args.output is not None,
        exclude_paths=exclude_paths,
    )

    output_file = args.output if args.output else sys.stdout.fileno()

    with SafeWriter(output_file) as safe_writer:
        try:
            for line in analyzer.stream_tree():
                safe_writer.write(line)

            for chunk in analyzer.stream_contents():
                safe_writer.write(chunk)

            if args.summary:
                counts = {
                    "directories": analyzer.directory_count,
                    "files": analyzer.file_count,
                    "content_files": analyzer.content_file_count,
                    "lines": analyzer.line_count,
                    "characters": analyzer.character_count,
                }
                count_output_str = format_counts(counts)

                if args.summary == "stderr":
                    print(count_output_str, file=sys.stderr)
                else:
                    # "stdout" without -o and "file" both go to the output stream
                    safe_writer.write("\n" + count_output_str + "\n")

        except BrokenPipeError:
            pass  # SafeWriter will automatically close in the context manager


def main() -> None:
    """Main entry point for the dir2md command-line interface.

    Exit codes:
        0: Successful completion
        1: Runtime error during execution
        2: Command-line syntax error
        126: Permission denied
        130: Interrupted by SIGINT (Ctrl+C)
        141: Broken pipe (SIGPIPE) on Unix-like systems
    """
    setup_signal_handling()

    parser = create_parser()
    # argparse calls sys.exit(2) for argument errors or sys.exit(0) for --version
    args = parser.parse_args()
    configure_logging(args.verbose)

    try:
        validate_args(args)
        run(args)
    except TreeBuildError as e:
        print(f"Error: {str(e)}", file=sys.stderr)
        sys.exit(EXIT_PERMISSION_DENIED if e.is_permission_error else EXIT_ERROR)
    except PermissionError as e:
        print(f"Error: {str(e)}", file=sys.stderr)
        sys.exit(EXIT_PERMISSION_DENIED)
    except Exception as e:
        logger.debug("Unhandled error", exc_info=True)
        print(f"Error: {str(e)}", file=sys.stderr)
        sys.exit(EXIT_ERROR)

    exit_code = signal_handler.exit_code()
    if exit_code is not None:
        sys.exit(exit_code)


if __name__ == "__main__":
    main()
