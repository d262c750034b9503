from datetime import datetime, timedelta, timezone

from activity_timer.models import Activity, Project
from activity_timer.search import search_suggestions

BASE = datetime(2025, 1, 1, 9, 0, tzinfo=timezone.utc)


def act(i, description, hours, project=None):
    return Activity(id=i, started_at=BASE + timedelta(hours=hours), stopped_at=BASE, description=description, project=project)


def test_duplicates_collapse_to_most_recent():
    api = Project(id=1, name="API")
    items = [
        act(1, "build api", 1, api),
        act(2, "build api", 2, api),
        act(3, "fix bug", 3, api),
    ]
    result = search_suggestions(items, "build")
    assert [a.id for a in result] == [2]


def test_empty_query_returns_nothing():
    assert search_suggestions([act(1, "build api", 1)], "") == []


def test_results_capped_at_three_most_recent_first():
    items = [act(i, f"task {i}", i) for i in range(5)]
    result = search_suggestions(items, "task")
    assert [a.id for a in result] == [4, 3, 2]


def test_match_is_case_sensitive_substring():
    items = [act(1, "Build API", 1), act(2, "rebuild", 2)]
    assert [a.id for a in search_suggestions(items, "build")] == [2]


def test_activities_without_description_are_skipped():
    items = [act(1, None, 5), act(2, "", 4), act(3, "write docs", 1)]
    assert [a.id for a in search_suggestions(items, "docs")] == [3]


def test_same_description_different_project_kept():
    items = [
        act(1, "review", 1, Project(id=1, name="A")),
        act(2, "review", 2, Project(id=2, name="B")),
        act(3, "review", 3, None),
    ]
    assert [a.id for a in search_suggestions(items, "review")] == [3, 2, 1]


def test_dedup_happens_after_cap():
    p = Project(id=1, name="A")
    items = [act(1, "sync", 4, p), act(2, "sync", 3, p), act(3, "sync", 2, p), act(4, "sync other", 1, p)]
    # cap keeps ids 1..3, which all share a key; the older distinct entry is not pulled in
    assert [a.id for a in search_suggestions(items, "sync")] == [1]
