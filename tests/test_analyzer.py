"""Tests for statistics and rankings."""

from datetime import datetime, timedelta, timezone

from sessionkeeper.analyzer import aggregate, largest_projects, oldest_sessions, reclaimable_bytes
from sessionkeeper.models import Project, Session

BASE = datetime(2024, 6, 1, tzinfo=timezone.utc)


def make_session(name: str, size: int, age_days: int = 0) -> Session:
    """Helper to create sessions."""
    return Session(
        name=name,
        path=f"/r/{name}",
        size=size,
        age_days=age_days,
        modified=BASE - timedelta(days=age_days),
    )


def make_project(name: str, *sessions: Session) -> Project:
    """Helper to create projects."""
    return Project(name=name, path=f"/r/{name}", sessions=list(sessions))


class TestAggregate:
    def test_empty(self):
        stats = aggregate([])
        assert stats.total_projects == 0
        assert stats.total_sessions == 0
        assert stats.total_size == 0

    def test_sums(self):
        projects = [
            make_project("a", make_session("1.jsonl", 100), make_session("2.jsonl", 4000)),
            make_project("b", make_session("3.jsonl", 50)),
            make_project("empty"),
        ]
        stats = aggregate(projects)
        assert stats.total_projects == 3
        assert stats.total_sessions == 3
        assert stats.total_size == 4150


class TestLargestProjects:
    def test_ordering_and_limit(self):
        projects = [
            make_project("small", make_session("1.jsonl", 10)),
            make_project("big", make_session("2.jsonl", 1000)),
            make_project("mid", make_session("3.jsonl", 100)),
        ]
        assert [p.name for p in largest_projects(projects, limit=2)] == ["big", "mid"]

    def test_excludes_empty_projects(self):
        projects = [make_project("empty"), make_project("a", make_session("1.jsonl", 1))]
        assert [p.name for p in largest_projects(projects)] == ["a"]

    def test_ties_broken_by_name(self):
        projects = [
            make_project("b", make_session("1.jsonl", 10)),
            make_project("a", make_session("2.jsonl", 10)),
        ]
        assert [p.name for p in largest_projects(projects)] == ["a", "b"]


class TestOldestSessions:
    def test_oldest_first(self):
        projects = [
            make_project("a", make_session("new.jsonl", 1, 1), make_session("old.jsonl", 1, 90)),
            make_project("b", make_session("mid.jsonl", 1, 30)),
        ]
        ranked = oldest_sessions(projects, limit=2)
        assert [(p.name, s.name) for p, s in ranked] == [("a", "old.jsonl"), ("b", "mid.jsonl")]


class TestReclaimableBytes:
    def test_sum(self):
        assert reclaimable_bytes([make_session("a", 10), make_session("b", 32)]) == 42

    def test_empty(self):
        assert reclaimable_bytes([]) == 0
