"""Shared fixtures: a temporary managed root with helpers to populate it."""

import os
import time
from pathlib import Path

import pytest

DAY = 24 * 60 * 60


def write_session(
    root: Path,
    project: str,
    name: str,
    content: str | bytes = "",
    age_days: int = 0,
) -> Path:
    """Create <root>/<project>/<name> with the given content and age."""
    project_dir = root / project
    project_dir.mkdir(parents=True, exist_ok=True)
    path = project_dir / name
    if isinstance(content, bytes):
        path.write_bytes(content)
    else:
        path.write_bytes(content.encode("utf-8"))

    # An hour of slack keeps the floored age stable during the test run
    mtime = time.time() - age_days * DAY - 3600 if age_days else time.time()
    os.utime(path, (mtime, mtime))
    return path


@pytest.fixture
def managed_root(tmp_path: Path) -> Path:
    """An empty, canonical managed root."""
    root = tmp_path / "claude" / "projects"
    root.mkdir(parents=True)
    return root.resolve()


@pytest.fixture
def populated_root(managed_root: Path) -> Path:
    """The scenario tree: proj-a with a 100 B (1 day) and a 4000 B (40 days) session."""
    write_session(managed_root, "proj-a", "recent.jsonl", "r" * 100, age_days=1)
    write_session(managed_root, "proj-a", "stale.jsonl", "s" * 4000, age_days=40)
    return managed_root
