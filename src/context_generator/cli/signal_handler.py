"""SIGPIPE and SIGINT bookkeeping for the context-generator CLI.

Handlers installed here never raise inside the scan. They record which signal
arrived, put the previous handler back, and leave it to the writer to stop and to
``main`` to turn the recorded signal into an exit code.
"""

import atexit
import os
import signal
import sys
from threading import Event
from types import FrameType
from typing import Optional

# Conventional shell exit status for death by a signal: 128 + signal number
EXIT_SIGPIPE = 128 + signal.SIGPIPE
EXIT_SIGINT = 128 + signal.SIGINT


class SignalHandler:
    """Records SIGPIPE and SIGINT so that a scan can stop between writes.

    SIGPIPE arrives when the reader of our output goes away (``context-generator |
    head``); SIGINT when the user presses Ctrl+C. Each handler fires once: after the
    first delivery the original handler is restored.

    Attributes:
        sigpipe_received: Set once SIGPIPE has been delivered.
        sigint_received: Set once SIGINT has been delivered.
        original_sigpipe_handler: Handler to restore after SIGPIPE.
        original_sigint_handler: Handler to restore after SIGINT.
    """

    def __init__(self) -> None:
        self.sigpipe_received = Event()
        self.sigint_received = Event()
        self.original_sigpipe_handler = signal.getsignal(signal.SIGPIPE)
        self.original_sigint_handler = signal.getsignal(signal.SIGINT)

    def handle_sigpipe(self, signum: int, frame: Optional[FrameType]) -> None:
        self.sigpipe_received.set()
        signal.signal(signal.SIGPIPE, self.original_sigpipe_handler)

    def handle_sigint(self, signum: int, frame: Optional[FrameType]) -> None:
        self.sigint_received.set()
        signal.signal(signal.SIGINT, self.original_sigint_handler)

    @property
    def interrupted(self) -> bool:
        """True once either signal has been received."""
        return self.sigpipe_received.is_set() or self.sigint_received.is_set()

    @property
    def exit_code(self) -> Optional[int]:
        """Exit status the CLI should end with, or None if no signal was received.

        A broken pipe takes precedence over an interrupt.
        """
        if self.sigpipe_received.is_set():
            return int(EXIT_SIGPIPE)
        if self.sigint_received.is_set():
            return int(EXIT_SIGINT)
        return None


# Process-wide instance shared by the writer and the entry point
signal_handler = SignalHandler()


def setup_signal_handling() -> None:
    """Route SIGPIPE and SIGINT to the process-wide handler."""
    signal.signal(signal.SIGPIPE, signal_handler.handle_sigpipe)
    signal.signal(signal.SIGINT, signal_handler.handle_sigint)


def cleanup() -> None:
    """Point stdout at the null device after an interruption.

    Runs at exit so that flushing a dead pipe during shutdown cannot print a second
    error on top of the exit status.
    """
    if signal_handler.interrupted:
        devnull = os.open(os.devnull, os.O_WRONLY)
        os.dup2(devnull, sys.stdout.fileno())


atexit.register(cleanup)
