from datetime import datetime, timezone

from activity_timer.models import Activity, Project
from activity_timer.notifier import NOTIFICATION_ICON, compose_message, notify_activity


def test_compose_message_with_project_and_description():
    a = Activity(id=1, started_at=datetime(2025, 1, 1, tzinfo=timezone.utc), description="write tests", project=Project(id=1, name="Core"))
    assert compose_message(a) == "Core - write tests"


def test_compose_message_without_project_or_description():
    assert compose_message({"id": 1, "project": None, "description": None}) == "No Project"
    assert compose_message({"id": 1, "description": "standup"}) == "No Project - standup"
    assert compose_message({"project": {"id": 2, "name": "Ops"}, "description": ""}) == "Ops"


def test_notify_activity_passes_icon(notifier):
    notify_activity(notifier, "Timer Started.", {"project": {"name": "Ops"}, "description": "deploy"})
    assert notifier.calls == [("Timer Started.", "Ops - deploy", NOTIFICATION_ICON)]
    assert NOTIFICATION_ICON.exists()
