from __future__ import annotations

"""Dataclass models for the records the activities API returns."""

from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Any, Dict, Optional


def utc_now_iso() -> str:
    return datetime.now(timezone.utc).replace(microsecond=0, tzinfo=None).isoformat() + "Z"


def parse_timestamp(value: Any) -> Optional[datetime]:
    """Parse an ISO-8601 string from the server; ``Z`` is accepted as UTC."""
    if not value:
        return None
    if isinstance(value, datetime):
        return value
    text = str(value)
    if text.endswith("Z"):
        text = text[:-1] + "+00:00"
    dt = datetime.fromisoformat(text)
    if dt.tzinfo is None:
        dt = dt.replace(tzinfo=timezone.utc)
    return dt


def format_timestamp(dt: Optional[datetime]) -> Optional[str]:
    if dt is None:
        return None
    return dt.astimezone(timezone.utc).replace(tzinfo=None).isoformat() + "Z"


@dataclass(slots=True, frozen=True)
class Project:
    id: Optional[int]
    name: str

    @classmethod
    def from_json(cls, data: Dict[str, Any]) -> "Project":
        return cls(id=data.get("id"), name=data.get("name", ""))

    def to_json(self) -> Dict[str, Any]:
        return {"id": self.id, "name": self.name}


@dataclass(slots=True)
class Activity:
    id: Optional[int]
    started_at: Optional[datetime]
    stopped_at: Optional[datetime] = None
    description: Optional[str] = None
    project: Optional[Project] = None

    @property
    def is_running(self) -> bool:
        return not self.stopped_at

    @classmethod
    def from_json(cls, data: Dict[str, Any]) -> "Activity":
        project = data.get("project")
        return cls(
            id=data.get("id"),
            started_at=parse_timestamp(data.get("startedAt")),
            stopped_at=parse_timestamp(data.get("stoppedAt")),
            description=data.get("description"),
            project=Project.from_json(project) if project else None,
        )

    def to_json(self) -> Dict[str, Any]:
        payload: Dict[str, Any] = {
            "id": self.id,
            "startedAt": format_timestamp(self.started_at),
            "stoppedAt": format_timestamp(self.stopped_at),
            "description": self.description,
            "project": self.project.to_json() if self.project else None,
        }
        if self.id is None:
            del payload["id"]
        return payload


__all__ = [
    "Activity",
    "Project",
    "utc_now_iso",
    "parse_timestamp",
    "format_timestamp",
]
