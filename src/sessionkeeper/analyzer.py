"""Statistics and rankings over a completed scan."""

from sessionkeeper.models import Project, Session, Statistics


def aggregate(projects: list[Project]) -> Statistics:
    """
    Reduce a project listing into global statistics.

    Pure function of its input: no filesystem access and no caching, so the
    result always matches the scan it was computed from.
    """
    return Statistics(
        total_projects=len(projects),
        total_sessions=sum(p.session_count for p in projects),
        total_size=sum(p.total_size for p in projects),
    )


def largest_projects(projects: list[Project], limit: int = 5) -> list[Project]:
    """Projects with the largest total size, biggest first."""
    ranked = [p for p in projects if p.total_size > 0]
    ranked.sort(key=lambda p: (-p.total_size, p.name))
    return ranked[:limit]


def oldest_sessions(projects: list[Project], limit: int = 5) -> list[tuple[Project, Session]]:
    """Least recently modified sessions across all projects, with their project."""
    pairs = [(p, s) for p in projects for s in p.sessions]
    pairs.sort(key=lambda pair: (pair[1].modified, pair[1].path))
    return pairs[:limit]


def reclaimable_bytes(sessions: list[Session]) -> int:
    """Total size of a selection of sessions."""
    return sum(s.size for s in sessions)
