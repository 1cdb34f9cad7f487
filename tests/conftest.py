"""Test configuration and fixtures for dir2md."""

import pytest


def pytest_addoption(parser):
    """Add custom command-line options for tests."""
    parser.addoption("--run-cli-tests", action="store_true", default=False, help="Run CLI integration tests (slow)")


@pytest.fixture
def scenario_root(tmp_path):
    """A directory with hidden entries, an ignore file and an ignored log file."""
    root = tmp_path / "root"
    root.mkdir()
    (root / "visibleDir").mkdir()
    (root / "visibleDir" / "file.go").write_text("package main\n")
    (root / "visibleDir" / "file.log").write_text("log line\n")
    (root / ".hiddenDir").mkdir()
    (root / ".hiddenDir" / "hiddenFile.txt").write_text("hidden\n")
    (root / ".hiddenFile").write_text("hidden\n")
    (root / "included.txt").write_text("included\n")
    (root / ".ignore").write_text("# logs\n*.log\n")
    return root
