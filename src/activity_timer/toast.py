from __future__ import annotations

"""Toast overlay widget and the error reporter built on it."""

import logging
from typing import Protocol

from PyQt6.QtCore import QTimer, Qt
from PyQt6.QtWidgets import QLabel, QWidget

_log = logging.getLogger(__name__)


class ErrorReporter(Protocol):
    def report(self, error: Exception) -> None: ...


class Toast(QLabel):  # pragma: no cover - UI utility
    def __init__(self, parent: QWidget, message: str, timeout_ms: int = 2500):
        super().__init__(parent)
        self.setText(message)
        self.setStyleSheet(
            """
            background: rgba(160,40,40,0.9);
            color: #fff; padding: 6px 12px; border-radius: 6px;
            """
        )
        self.setAttribute(Qt.WidgetAttribute.WA_TransparentForMouseEvents)
        self.adjustSize()
        w = parent.width()
        self.move(int((w - self.width()) / 2), 30)
        self.show()
        QTimer.singleShot(timeout_ms, self.close)


def show_toast(parent: QWidget, message: str, timeout_ms: int = 2500) -> None:  # pragma: no cover
    Toast(parent, message, timeout_ms)


class ToastErrorReporter:
    def __init__(self, parent: QWidget | None, timeout_ms: int = 4000) -> None:
        self._parent = parent
        self._timeout_ms = timeout_ms

    def report(self, error: Exception) -> None:
        _log.warning("operation failed: %s", error, extra={"_json_error": type(error).__name__})
        if self._parent is None:
            return
        show_toast(self._parent, f"Something went wrong: {error}", self._timeout_ms)


__all__ = ["ErrorReporter", "ToastErrorReporter", "show_toast"]
