from __future__ import annotations

"""EntityStore keeps normalized server records in memory with change signals.

Records are kept per table ("activities", "projects") keyed by id, in
insertion order. Nested projects are split out of activities on merge and
re-attached on read, so every activity sharing a project sees the latest
project data.
"""

import logging
from typing import Any, Dict, List, Optional

from PyQt6.QtCore import QObject, pyqtSignal

from .models import Activity, Project

ACTIVITIES = "activities"
PROJECTS = "projects"

_log = logging.getLogger(__name__)


class EntityStore(QObject):
    changed = pyqtSignal()

    def __init__(self) -> None:
        super().__init__()
        self._tables: Dict[str, Dict[Any, Dict[str, Any]]] = {ACTIVITIES: {}, PROJECTS: {}}

    # --- Writing --------------------------------------------------------
    def merge(self, json: Any, many: bool = False) -> None:
        """Merge one activity (or a list when ``many``) from a server response."""
        if json is None:
            return
        records = json if many else [json]
        for record in records:
            self._merge_activity(record)
        self.changed.emit()

    def delete(self, name: str, entity_id: Any) -> bool:
        table = self._tables.get(name)
        if table is None or entity_id not in table:
            return False
        del table[entity_id]
        self.changed.emit()
        return True

    def clear(self) -> None:
        for table in self._tables.values():
            table.clear()
        self.changed.emit()

    # --- Reading --------------------------------------------------------
    def get_all(self, name: str) -> List[Any]:
        table = self._tables.get(name)
        if not table:
            return []
        if name == PROJECTS:
            return [Project.from_json(r) for r in table.values()]
        return [self._denormalize(r) for r in table.values()]

    def get(self, name: str, entity_id: Any) -> Optional[Any]:
        record = self._tables.get(name, {}).get(entity_id)
        if record is None:
            return None
        if name == PROJECTS:
            return Project.from_json(record)
        return self._denormalize(record)

    # --- Internal -------------------------------------------------------
    def _merge_activity(self, record: Dict[str, Any]) -> None:
        entity_id = record.get("id")
        if entity_id is None:
            _log.warning("skipping activity without id", extra={"_json_record": record})
            return
        normalized = dict(record)
        project = normalized.get("project")
        if isinstance(project, dict) and project.get("id") is not None:
            self._upsert(PROJECTS, project["id"], project)
            normalized["project"] = project["id"]
        self._upsert(ACTIVITIES, entity_id, normalized)

    def _upsert(self, name: str, entity_id: Any, record: Dict[str, Any]) -> None:
        table = self._tables[name]
        if entity_id in table:
            table[entity_id].update(record)
        else:
            table[entity_id] = dict(record)

    def _denormalize(self, record: Dict[str, Any]) -> Activity:
        data = dict(record)
        project = data.get("project")
        if project is not None and not isinstance(project, dict):
            data["project"] = self._tables[PROJECTS].get(project)
        return Activity.from_json(data)


__all__ = ["EntityStore", "ACTIVITIES", "PROJECTS"]
