"""
Signal handling for graceful shutdown.

SIGINT and SIGTERM are translated into a cancellation request on a
threading.Event that the sampling loop checks once per tick. No global flag
is involved; the event is owned by whoever runs the loop.
"""

import logging
import signal
import threading
from typing import Any

logger = logging.getLogger(__name__)


class SignalHandler:
    """
    Installs SIGINT/SIGTERM handlers that set a cancellation event, and
    restores the previous handlers afterwards.

    Usable as a context manager.
    """

    def __init__(self, cancel_event: threading.Event):
        self.cancel_event = cancel_event
        self._original_sigint_handler = None
        self._original_sigterm_handler = None
        self._signal_handlers_set = False

    def setup_signal_handlers(self) -> None:
        """Set up signal handlers; the originals are kept for restoring."""
        self._original_sigint_handler = signal.signal(signal.SIGINT, self._handle_signal)
        self._original_sigterm_handler = signal.signal(signal.SIGTERM, self._handle_signal)
        self._signal_handlers_set = True
        logger.debug("Signal handlers installed for SIGINT and SIGTERM")

    def cleanup_signal_handlers(self) -> None:
        """Restore original signal handlers."""
        if not self._signal_handlers_set:
            return

        try:
            if self._original_sigint_handler is not None:
                signal.signal(signal.SIGINT, self._original_sigint_handler)
            if self._original_sigterm_handler is not None:
                signal.signal(signal.SIGTERM, self._original_sigterm_handler)
            logger.debug("Original signal handlers restored")
        finally:
            self._signal_handlers_set = False

    def _handle_signal(self, signum: int, frame: Any) -> None:
        if self.cancel_event.is_set():
            logger.warning("Shutdown already in progress. Please be patient.")
            return

        logger.info(
            f"Signal {signal.strsignal(signum)} received. pemon is terminating..."
        )
        self.cancel_event.set()

    def __enter__(self) -> "SignalHandler":
        self.setup_signal_handlers()
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.cleanup_signal_handlers()
