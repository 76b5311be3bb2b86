"""
Delayed clearing of copied secrets.
"""

import logging
import math
import threading
from typing import Callable, Optional

logger = logging.getLogger(__name__)

TimerFactory = Callable[[float, Callable[[], None]], None]


class Clipboard:
    """Interface of the system clipboard used by the scheduler."""

    def read_text(self) -> str:
        raise NotImplementedError

    def write_text(self, text: str) -> None:
        raise NotImplementedError

    def clear(self) -> None:
        raise NotImplementedError


def thread_timer(delay_seconds: float, callback: Callable[[], None]) -> None:
    """Run callback once on a daemon thread after delay_seconds."""
    timer = threading.Timer(delay_seconds, callback)
    timer.daemon = True
    timer.start()


class ClipboardClearScheduler:
    """Clears the clipboard after a delay unless something else was copied meanwhile."""

    def __init__(self, clipboard: Clipboard, timer: Optional[TimerFactory] = None):
        self.clipboard = clipboard
        self.timer = timer or thread_timer

    def schedule_clear(self, value: str, delay_seconds) -> None:
        """
        Arrange for the clipboard to be cleared after delay_seconds if it still holds value.

        A delay that is not a positive finite number leaves the clipboard alone.
        Scheduled clears cannot be cancelled.
        """
        try:
            delay = float(delay_seconds)
        except (TypeError, ValueError):
            return
        if not math.isfinite(delay) or delay <= 0:
            return
        self.timer(delay, lambda: self._clear_if_unchanged(value))

    def copy(self, value: str, delay_seconds) -> None:
        self.clipboard.write_text(value)
        self.schedule_clear(value, delay_seconds)

    def _clear_if_unchanged(self, value: str) -> None:
        try:
            if self.clipboard.read_text() == value:
                self.clipboard.clear()
                logger.debug("Clipboard cleared")
        except Exception as e:
            logger.error(f"Failed to clear clipboard: {e}", exc_info=True)
