from __future__ import annotations

"""Suggestions for the "what are you working on" box."""

from datetime import datetime, timezone
from typing import Iterable, List

from .models import Activity

MAX_SUGGESTIONS = 3

_OLDEST = datetime.min.replace(tzinfo=timezone.utc)


def search_suggestions(activities: Iterable[Activity], text: str) -> List[Activity]:
    """Return recent activities whose description contains ``text``.

    Matching is a case-sensitive substring test. The three most recently
    started matches are kept, then collapsed so each (project, description)
    pair appears once, the most recent occurrence winning. An empty query
    yields no suggestions.
    """
    if not text:
        return []

    matched = [a for a in activities if a.description and text in a.description]
    matched.sort(key=lambda a: a.started_at or _OLDEST, reverse=True)
    matched = matched[:MAX_SUGGESTIONS]

    seen = set()
    result: List[Activity] = []
    for a in matched:
        key = (a.project, a.description)
        if key in seen:
            continue
        seen.add(key)
        result.append(a)
    return result


__all__ = ["search_suggestions", "MAX_SUGGESTIONS"]
