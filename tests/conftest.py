import json
import os
from pathlib import Path
import sys
import httpx
import pytest

os.environ.setdefault("QT_QPA_PLATFORM", "offscreen")

# Ensure src/ is on sys.path for direct test invocation without an editable install
PROJECT_ROOT = Path(__file__).resolve().parents[1]
SRC_PATH = PROJECT_ROOT / "src"
if str(SRC_PATH) not in sys.path:
    sys.path.insert(0, str(SRC_PATH))

from activity_timer.api_client import ApiClient, ApiClientConfig
from activity_timer.entity_store import EntityStore


class FakeNotifier:
    def __init__(self):
        self.calls = []

    def notify(self, title, message, icon):
        self.calls.append((title, message, icon))


class FakeReporter:
    def __init__(self):
        self.errors = []

    def report(self, error):
        self.errors.append(error)


class FakeServer:
    """In-memory stand-in for the activities API behind an httpx.MockTransport."""

    def __init__(self):
        self.activities = {}
        self.requests = []
        self.fail = False
        self.next_id = 100
        self.projects = {}

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        if self.fail:
            return httpx.Response(500, text="Server Error")
        path = request.url.path
        method = request.method
        body = json.loads(request.content) if request.content else {}
        if path == "/v1/search":
            q = request.url.params.get("q", "")
            found = [a for a in self.activities.values() if q in (a.get("description") or "")]
            return httpx.Response(200, json=found)
        if path == "/v1/activities/working":
            working = next((a for a in self.activities.values() if not a.get("stoppedAt")), None)
            return httpx.Response(200, json=working)
        if path == "/v1/activities" and method == "POST":
            record = dict(body["activity"])
            record["id"] = self.next_id
            self.next_id += 1
            record.setdefault("startedAt", "2025-01-01T09:00:00Z")
            project_id = record.pop("projectId", None)
            if project_id in self.projects:
                record["project"] = self.projects[project_id]
            self.activities[record["id"]] = record
            return httpx.Response(201, json=record)
        if path.startswith("/v1/activities/"):
            activity_id = int(path.rsplit("/", 1)[1])
            if activity_id not in self.activities:
                return httpx.Response(404, text="Not Found")
            if method == "PUT":
                self.activities[activity_id].update(body["activity"])
                return httpx.Response(200, json=self.activities[activity_id])
            if method == "DELETE":
                del self.activities[activity_id]
                return httpx.Response(204)
        return httpx.Response(404, text="Not Found")


@pytest.fixture()
def notifier():
    return FakeNotifier()


@pytest.fixture()
def reporter():
    return FakeReporter()


@pytest.fixture()
def server():
    return FakeServer()


@pytest.fixture()
def api(server):
    client = ApiClient(
        ApiClientConfig(base_url="http://api.test", token="secret-token"),
        transport=httpx.MockTransport(server.handler),
    )
    yield client
    client.close()


@pytest.fixture()
def store(qtbot):
    return EntityStore()
