"""Unit tests for the signal handler module in dir2md CLI."""

import os
import signal
from unittest.mock import MagicMock, patch

import pytest

from dir2md.cli.signal_handler import EXIT_SIGINT, EXIT_SIGPIPE, SignalHandler, cleanup, setup_signal_handling


@pytest.fixture
def mock_os():
    """Create a mock for os module functions used in signal handling."""
    with patch("dir2md.cli.signal_handler.os", autospec=True) as mock:
        mock.open.return_value = 123
        mock.dup2 = MagicMock()
        mock.devnull = "/dev/null"
        mock.O_WRONLY = os.O_WRONLY
        yield mock


@pytest.fixture
def fresh_signal_handler():
    """A SignalHandler independent of the module-level singleton."""
    return SignalHandler()


def test_signal_handler_initialization(fresh_signal_handler):
    assert not fresh_signal_handler.sigpipe_received.is_set()
    assert not fresh_signal_handler.sigint_received.is_set()
    assert not fresh_signal_handler.interrupted
    assert fresh_signal_handler.exit_code() is None


def test_install_records_original_handlers(fresh_signal_handler):
    with patch("signal.signal") as mock_signal, patch("signal.getsignal", return_value=signal.SIG_DFL):
        fresh_signal_handler.install()

    mock_signal.assert_any_call(signal.SIGINT, fresh_signal_handler.handle_sigint)
    if hasattr(signal, "SIGPIPE"):
        mock_signal.assert_any_call(signal.SIGPIPE, fresh_signal_handler.handle_sigpipe)
        assert fresh_signal_handler._original_handlers[signal.SIGPIPE] == signal.SIG_DFL
    assert fresh_signal_handler._original_handlers[signal.SIGINT] == signal.SIG_DFL


def test_handle_sigint(fresh_signal_handler):
    original = MagicMock()
    fresh_signal_handler._original_handlers[signal.SIGINT] = original
    with patch("signal.signal") as mock_signal:
        fresh_signal_handler.handle_sigint(signal.SIGINT, None)

    assert fresh_signal_handler.sigint_received.is_set()
    assert fresh_signal_handler.interrupted
    assert fresh_signal_handler.exit_code() == EXIT_SIGINT
    mock_signal.assert_called_once_with(signal.SIGINT, original)


@pytest.mark.skipif(not hasattr(signal, "SIGPIPE"), reason="SIGPIPE not available")
def test_handle_sigpipe(fresh_signal_handler):
    with patch("signal.signal") as mock_signal:
        fresh_signal_handler.handle_sigpipe(signal.SIGPIPE, None)

    assert fresh_signal_handler.sigpipe_received.is_set()
    assert fresh_signal_handler.exit_code() == EXIT_SIGPIPE
    # Nothing was installed, so there is nothing to restore
    mock_signal.assert_not_called()


def test_sigpipe_takes_precedence(fresh_signal_handler):
    fresh_signal_handler.sigint_received.set()
    fresh_signal_handler.sigpipe_received.set()
    assert fresh_signal_handler.exit_code() == EXIT_SIGPIPE


def test_setup_signal_handling():
    with patch("dir2md.cli.signal_handler.signal_handler") as mock_handler:
        setup_signal_handling()
    mock_handler.install.assert_called_once_with()


def test_cleanup_when_interrupted(mock_os):
    with patch("dir2md.cli.signal_handler.signal_handler") as mock_handler, patch(
        "dir2md.cli.signal_handler.sys"
    ) as mock_sys:
        mock_handler.interrupted = True
        mock_sys.stdout.fileno.return_value = 1
        cleanup()

    mock_os.open.assert_called_once_with("/dev/null", os.O_WRONLY)
    mock_os.dup2.assert_called_once_with(123, 1)


def test_cleanup_when_not_interrupted(mock_os):
    with patch("dir2md.cli.signal_handler.signal_handler") as mock_handler:
        mock_handler.interrupted = False
        cleanup()

    mock_os.open.assert_not_called()
    mock_os.dup2.assert_not_called()
