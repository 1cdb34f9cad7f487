"""Unit tests for the CLI main module."""

import argparse
import logging
from pathlib import Path
from unittest.mock import patch

import pytest

from dir2md.cli.main import (
    EXIT_ERROR,
    EXIT_PERMISSION_DENIED,
    build_ignore_rules,
    build_skip_content_rules,
    configure_logging,
    format_counts,
    main,
)
from dir2md.exceptions import TreeBuildError
from dir2md.exclusion_rules.skip_content_rules import DEFAULT_SKIP_CONTENT_PATTERNS

SCENARIO_TREE = "└── root\n    ├── included.txt\n    └── visibleDir\n        └── file.go\n"
SCENARIO_CONTENTS = (
    "\n## Full File List\n\n"
    "### included.txt\n```\nincluded\n```\n\n"
    "### visibleDir/file.go\n```go\npackage main\n```\n\n"
)


@pytest.fixture(autouse=True)
def no_signal_handlers():
    """Keep main() from installing process-wide signal handlers during tests."""
    with patch("dir2md.cli.main.setup_signal_handling"), patch("dir2md.cli.main.signal_handler") as handler:
        handler.exit_code.return_value = None
        yield handler


def run_main(*argv):
    with patch("sys.argv", ["dir2md", *[str(arg) for arg in argv]]):
        main()


def make_args(directory, **overrides):
    values = {
        "directory": Path(directory),
        "ignore": Path(".ignore"),
        "patterns": [],
        "skip_content": [],
        "no_default_skip": False,
    }
    values.update(overrides)
    return argparse.Namespace(**values)


def test_format_counts():
    counts = {"directories": 1, "files": 2, "content_files": 2, "lines": 14, "characters": 180}
    assert format_counts(counts) == (
        "Directories: 1\nFiles: 2\nFiles with content: 2\nLines: 14\nCharacters: 180"
    )


@pytest.mark.parametrize(
    "verbosity,level",
    [(0, logging.WARNING), (1, logging.INFO), (2, logging.DEBUG), (5, logging.DEBUG)],
)
def test_configure_logging(verbosity, level):
    with patch("dir2md.cli.main.logging.basicConfig") as mock_basic_config:
        configure_logging(verbosity)
    assert mock_basic_config.call_args.kwargs["level"] == level


def test_build_ignore_rules(scenario_root):
    rules = build_ignore_rules(make_args(scenario_root, patterns=["build/"]))
    assert rules.patterns == ["*.log", "build/"]


def test_build_ignore_rules_missing_file(tmp_path):
    rules = build_ignore_rules(make_args(tmp_path, ignore=Path("absent.ignore")))
    assert rules.patterns == []


def test_build_skip_content_rules():
    rules = build_skip_content_rules(make_args(".", skip_content=["*.pdf"]))
    assert rules.patterns == list(DEFAULT_SKIP_CONTENT_PATTERNS) + ["*.pdf"]

    rules = build_skip_content_rules(make_args(".", skip_content=["*.pdf"], no_default_skip=True))
    assert rules.patterns == ["*.pdf"]


def test_main_stdout(scenario_root, capfd):
    run_main(scenario_root)
    captured = capfd.readouterr()
    assert captured.out == SCENARIO_TREE + SCENARIO_CONTENTS
    assert captured.err == ""


def test_main_markdown_file(scenario_root, capfd):
    output = scenario_root / "out.md"
    run_main("-o", output, scenario_root)

    assert output.read_text(encoding="utf-8") == "```\n" + SCENARIO_TREE + "```\n" + SCENARIO_CONTENTS
    assert capfd.readouterr().out == ""


def test_main_overwrites_existing_output(scenario_root, tmp_path):
    output = tmp_path / "out.md"
    output.write_text("x" * 10000)
    run_main("-o", output, scenario_root)

    assert output.read_text(encoding="utf-8").startswith("```\n└── root\n")
    assert "x" * 10 not in output.read_text(encoding="utf-8")


def test_main_text_file(scenario_root, tmp_path):
    output = tmp_path / "tree.txt"
    run_main("-o", output, scenario_root)
    assert output.read_text(encoding="utf-8") == SCENARIO_TREE


def test_main_explicit_format(scenario_root, tmp_path):
    output = tmp_path / "tree.txt"
    run_main("-f", "markdown", "-o", output, scenario_root)
    assert output.read_text(encoding="utf-8") == "```\n" + SCENARIO_TREE + "```\n" + SCENARIO_CONTENTS


def test_main_extra_patterns(scenario_root, capfd):
    run_main("-i", "visibleDir/", "-f", "text", scenario_root)
    assert capfd.readouterr().out == "└── root\n    └── included.txt\n"


def test_main_skip_content(scenario_root, capfd):
    run_main("-k", "*.GO", scenario_root)
    out = capfd.readouterr().out
    assert "        └── file.go\n" in out
    assert "### visibleDir/file.go" not in out


def test_main_summary_stderr(scenario_root, capfd):
    run_main("-s", "stderr", scenario_root)
    captured = capfd.readouterr()
    document = SCENARIO_TREE + SCENARIO_CONTENTS
    assert captured.out == document
    assert "Directories: 1\nFiles: 2\nFiles with content: 2\n" in captured.err
    assert f"Lines: {document.count(chr(10))}" in captured.err


def test_main_summary_file(scenario_root, tmp_path):
    output = tmp_path / "out.md"
    run_main("-s", "file", "-o", output, scenario_root)

    document = "```\n" + SCENARIO_TREE + "```\n" + SCENARIO_CONTENTS
    summary = (
        "\nDirectories: 1\nFiles: 2\nFiles with content: 2\n"
        f"Lines: {document.count(chr(10))}\nCharacters: {len(document)}\n"
    )
    assert output.read_text(encoding="utf-8") == document + summary


def test_main_summary_file_requires_output(scenario_root, capfd):
    with pytest.raises(SystemExit) as exc_info:
        run_main("-s", "file", scenario_root)
    assert exc_info.value.code == EXIT_ERROR
    assert "Error: --summary=file requires -o/--output" in capfd.readouterr().err


def test_main_missing_directory(tmp_path, capfd):
    with pytest.raises(SystemExit) as exc_info:
        run_main(tmp_path / "missing")
    assert exc_info.value.code == EXIT_ERROR
    captured = capfd.readouterr()
    assert captured.out == ""
    assert "Error: " in captured.err


def test_main_tree_build_error(tmp_path, capfd):
    (tmp_path / "dangling").symlink_to(tmp_path / "nowhere")
    with pytest.raises(SystemExit) as exc_info:
        run_main(tmp_path)
    assert exc_info.value.code == EXIT_ERROR
    captured = capfd.readouterr()
    assert captured.out == ""
    assert "Error: Failed to build tree at" in captured.err


def test_main_tree_build_permission_error(scenario_root, capfd):
    error = TreeBuildError(str(scenario_root), "cannot list directory: Permission denied")
    error.__cause__ = PermissionError(13, "Permission denied")
    with patch("dir2md.cli.main.run", side_effect=error), pytest.raises(SystemExit) as exc_info:
        run_main(scenario_root)
    assert exc_info.value.code == EXIT_PERMISSION_DENIED
    assert "Permission denied" in capfd.readouterr().err


def test_main_permission_error(scenario_root, capfd):
    with patch("dir2md.cli.main.run", side_effect=PermissionError(13, "Permission denied")):
        with pytest.raises(SystemExit) as exc_info:
            run_main(scenario_root)
    assert exc_info.value.code == EXIT_PERMISSION_DENIED


def test_main_signal_exit_code(scenario_root, no_signal_handlers, capfd):
    no_signal_handlers.exit_code.return_value = 141
    with pytest.raises(SystemExit) as exc_info:
        run_main(scenario_root)
    assert exc_info.value.code == 141


def test_main_broken_pipe_is_quiet(scenario_root, capfd):
    with patch("dir2md.cli.main.SafeWriter.write", side_effect=BrokenPipeError()):
        run_main(scenario_root)
    assert capfd.readouterr().err == ""


def test_main_reproduces_file_bytes(tmp_path):
    root = tmp_path / "root"
    root.mkdir()
    (root / "data.txt").write_bytes(b"caf\xe9\rdone\r\n")
    output = tmp_path / "out.md"
    run_main("-o", output, root)

    assert output.read_bytes().endswith(b"### data.txt\n```\ncaf\xe9\rdone\n```\n\n")
