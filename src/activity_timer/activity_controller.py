from __future__ import annotations

"""Activity controller: start/stop/update/delete against the API.

Design:
 - Every network call goes through the injected ApiClient; responses are
   merged into the injected EntityStore and views are derived from it on read.
 - At most one activity is running (no ``stoppedAt``). ``add`` does not stop
   the previous one; callers stop first.
 - Failures (ApiError) are reported and turned into a False/None result,
   nothing is raised to the UI.
 - ``delete`` removes the local record before the request and does not
   restore it when the request fails.
"""

from datetime import datetime
import logging
from typing import Any, Callable, Dict, List, Optional

from PyQt6.QtCore import QObject, pyqtSignal

from .api_client import ApiClient, ApiError
from .entity_store import ACTIVITIES, EntityStore
from .models import Activity, format_timestamp, utc_now_iso
from .notifier import Notifier, TITLE_STARTED, TITLE_STOPPED, notify_activity
from .search import search_suggestions
from .toast import ErrorReporter

TimeProvider = Callable[[], datetime]

_log = logging.getLogger(__name__)


class ActivityController(QObject):
    timer_started = pyqtSignal(object)  # Activity
    timer_stopped = pyqtSignal(object)  # Activity

    def __init__(
        self,
        api: ApiClient,
        store: EntityStore,
        notifier: Notifier,
        reporter: ErrorReporter,
        time_provider: Optional[TimeProvider] = None,
    ) -> None:
        super().__init__()
        self._api = api
        self._store = store
        self._notifier = notifier
        self._reporter = reporter
        self._time_provider = time_provider
        self._stop_on_suspend = True
        self._stop_on_shutdown = True

    # --- Derived views --------------------------------------------------
    def all(self) -> List[Activity]:
        return self._store.get_all(ACTIVITIES)

    def working(self) -> Optional[Activity]:
        return next((a for a in self.all() if not a.stopped_at), None)

    def search_suggestions(self, text: str) -> List[Activity]:
        return search_suggestions(self.all(), text)

    # --- Flags ----------------------------------------------------------
    @property
    def stop_on_suspend(self) -> bool:
        return self._stop_on_suspend

    def set_stop_on_suspend(self, flag: bool) -> None:
        self._stop_on_suspend = flag

    @property
    def stop_on_shutdown(self) -> bool:
        return self._stop_on_shutdown

    def set_stop_on_shutdown(self, flag: bool) -> None:
        self._stop_on_shutdown = flag

    # --- Remote operations ----------------------------------------------
    def search(self, query: str) -> None:
        try:
            resp = self._api.request("/v1/search", params={"q": query})
        except ApiError as e:
            self._fail("search", e)
            return
        self._store.merge(resp.data, many=True)

    def fetch_working(self) -> None:
        try:
            resp = self._api.request("/v1/activities/working")
        except ApiError as e:
            self._fail("fetch_working", e)
            return
        self._store.merge(resp.data)

    def update(self, payload: Dict[str, Any]) -> bool:
        try:
            resp = self._api.request(
                f"/v1/activities/{payload['id']}",
                method="put",
                data={"activity": payload},
            )
        except ApiError as e:
            self._fail("update", e)
            return False
        self._store.merge(resp.data)
        return True

    def stop(self) -> Optional[bool]:
        working = self.working()
        if working is None:
            return None
        activity_id = working.id
        try:
            resp = self._api.request(
                f"/v1/activities/{activity_id}",
                method="put",
                data={"activity": {"id": activity_id, "stoppedAt": self._now_iso()}},
            )
        except ApiError as e:
            self._fail("stop", e)
            return False
        self._store.merge(resp.data)
        # Message uses the server's copy; it may carry project data we lack.
        notify_activity(self._notifier, TITLE_STOPPED, resp.data or {})
        _log.info("timer stopped", extra={"_json_activity_id": activity_id})
        self.timer_stopped.emit(self._store.get(ACTIVITIES, activity_id))
        return True

    def add(self, payload: Dict[str, Any]) -> bool:
        try:
            resp = self._api.request(
                "/v1/activities",
                method="post",
                data={"activity": payload},
            )
        except ApiError as e:
            self._fail("add", e)
            return False
        self._store.merge(resp.data)
        notify_activity(self._notifier, TITLE_STARTED, resp.data or {})
        activity_id = (resp.data or {}).get("id")
        _log.info("timer started", extra={"_json_activity_id": activity_id})
        self.timer_started.emit(self._store.get(ACTIVITIES, activity_id))
        return True

    def delete(self, activity_id: Any) -> bool:
        self._store.delete(ACTIVITIES, activity_id)
        try:
            self._api.request(f"/v1/activities/{activity_id}", method="delete")
        except ApiError as e:
            self._fail("delete", e)
            return False
        return True

    # --- Internal -------------------------------------------------------
    def _now_iso(self) -> str:
        if self._time_provider is None:
            return utc_now_iso()
        return format_timestamp(self._time_provider())  # type: ignore[return-value]

    def _fail(self, operation: str, error: ApiError) -> None:
        _log.warning(
            "%s failed: %s",
            operation,
            error,
            extra={"_json_operation": operation, "_json_status": error.status_code},
        )
        self._reporter.report(error)


__all__ = ["ActivityController"]
