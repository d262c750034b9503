from __future__ import annotations

"""OS notifications for timer transitions."""

from pathlib import Path
from typing import Any, Mapping, Protocol, Union

from PyQt6.QtGui import QIcon
from PyQt6.QtWidgets import QSystemTrayIcon

from .models import Activity

NOTIFICATION_ICON = Path(__file__).resolve().parent / "resources" / "icon-notification.png"
NO_PROJECT = "No Project"
TITLE_STARTED = "Timer Started."
TITLE_STOPPED = "Timer Stopped."


class Notifier(Protocol):
    def notify(self, title: str, message: str, icon: Path) -> None: ...


def compose_message(activity: Union[Activity, Mapping[str, Any]]) -> str:
    """``"<project name>"`` or ``"No Project"``, plus ``" - <description>"`` if set."""
    if isinstance(activity, Activity):
        project_name = activity.project.name if activity.project else None
        description = activity.description
    else:
        project = activity.get("project")
        project_name = project.get("name") if project else None
        description = activity.get("description")
    head = project_name if project_name else NO_PROJECT
    tail = f" - {description}" if description else ""
    return head + tail


def notify_activity(notifier: Notifier, title: str, activity: Union[Activity, Mapping[str, Any]]) -> None:
    notifier.notify(title, compose_message(activity), NOTIFICATION_ICON)


class TrayNotifier:  # pragma: no cover - UI heavy
    def __init__(self, tray: QSystemTrayIcon, timeout_ms: int = 4000) -> None:
        self._tray = tray
        self._timeout_ms = timeout_ms

    def notify(self, title: str, message: str, icon: Path) -> None:
        self._tray.showMessage(title, message, QIcon(str(icon)), self._timeout_ms)


__all__ = [
    "Notifier",
    "TrayNotifier",
    "compose_message",
    "notify_activity",
    "NOTIFICATION_ICON",
    "TITLE_STARTED",
    "TITLE_STOPPED",
]
