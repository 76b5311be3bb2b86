"""
PyQt5 adapters for the clipboard scheduler.

Both need a running QApplication; the timer callback fires on the Qt event
loop instead of a background thread.
"""

from typing import Callable

from PyQt5.QtCore import QTimer
from PyQt5.QtWidgets import QApplication

from .clipboard import Clipboard


class QtClipboard(Clipboard):
    """System clipboard through QApplication.clipboard()."""

    def read_text(self) -> str:
        return QApplication.clipboard().text()

    def write_text(self, text: str) -> None:
        QApplication.clipboard().setText(text)

    def clear(self) -> None:
        QApplication.clipboard().clear()


def qt_single_shot(delay_seconds: float, callback: Callable[[], None]) -> None:
    QTimer.singleShot(int(delay_seconds * 1000), callback)
