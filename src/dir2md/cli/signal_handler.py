"""Signal handling for the dir2md CLI.

SIGPIPE (output pipe closed, e.g. ``dir2md . | head``) and SIGINT (Ctrl+C) are
recorded rather than acted on immediately; SafeWriter checks them before every write
and the CLI turns them into exit codes once output has been shut down cleanly.
"""

import atexit
import os
import signal
import sys
from threading import Event
from types import FrameType
from typing import Any, Dict, Optional

EXIT_SIGINT = 130
EXIT_SIGPIPE = 141


class SignalHandler:
    """Records SIGPIPE and SIGINT so the CLI can stop writing and exit cleanly.

    Each handler restores the original disposition after the first signal, so a
    second Ctrl+C interrupts immediately.

    Attributes:
        sigpipe_received: Event set when SIGPIPE arrives.
        sigint_received: Event set when SIGINT arrives.
    """

    def __init__(self) -> None:
        self.sigpipe_received = Event()
        self.sigint_received = Event()
        self._original_handlers: Dict[int, Any] = {}

    @property
    def interrupted(self) -> bool:
        """Whether either signal has been received."""
        return self.sigpipe_received.is_set() or self.sigint_received.is_set()

    def handle_sigpipe(self, signum: int, frame: Optional[FrameType]) -> None:
        self.sigpipe_received.set()
        self._restore(signum)

    def handle_sigint(self, signum: int, frame: Optional[FrameType]) -> None:
        self.sigint_received.set()
        self._restore(signum)

    def _restore(self, signum: int) -> None:
        if signum in self._original_handlers:
            signal.signal(signum, self._original_handlers[signum])

    def install(self) -> None:
        """Install the handlers, remembering the ones they replace.

        SIGPIPE is only handled on platforms that have it.
        """
        if hasattr(signal, "SIGPIPE"):
            self._original_handlers[signal.SIGPIPE] = signal.getsignal(signal.SIGPIPE)
            signal.signal(signal.SIGPIPE, self.handle_sigpipe)
        self._original_handlers[signal.SIGINT] = signal.getsignal(signal.SIGINT)
        signal.signal(signal.SIGINT, self.handle_sigint)

    def exit_code(self) -> Optional[int]:
        """Exit code implied by the received signals, or None if none arrived."""
        if self.sigpipe_received.is_set():
            return EXIT_SIGPIPE
        if self.sigint_received.is_set():
            return EXIT_SIGINT
        return None


# Create a singleton instance for the application
signal_handler = SignalHandler()


def setup_signal_handling() -> None:
    """Configure signal handlers for SIGPIPE and SIGINT."""
    signal_handler.install()


def cleanup() -> None:
    """Point stdout at the null device after an interruption.

    This keeps the interpreter from reporting a broken pipe while flushing stdout at
    shutdown.
    """
    if signal_handler.interrupted:
        devnull = os.open(os.devnull, os.O_WRONLY)
        os.dup2(devnull, sys.stdout.fileno())


atexit.register(cleanup)
