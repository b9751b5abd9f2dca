"""Project and session scanning for sessionkeeper."""

import os
import time
from concurrent.futures import ThreadPoolExecutor, as_completed
from datetime import datetime, timezone
from pathlib import Path
from typing import Optional

from loguru import logger

from sessionkeeper.config import DEFAULT_PREVIEW_CHARS, default_max_workers
from sessionkeeper.errors import (
    NotASessionArtifactError,
    PermissionDeniedError,
    SessionKeeperError,
    SessionNotFoundError,
)
from sessionkeeper.models import Project, Session
from sessionkeeper.safety import (
    SESSION_SUFFIX,
    assert_contained,
    canonicalize,
    is_session_file,
    lexical_path,
)
from sessionkeeper.transcript import summarize_preview

SECONDS_PER_DAY = 24 * 60 * 60
PREVIEW_MARKER = "..."


def age_in_days(mtime: float, now: float) -> int:
    """Whole days between mtime and now, floored and clamped to >= 0."""
    return max(int((now - mtime) // SECONDS_PER_DAY), 0)


def preview_byte_budget(max_chars: int) -> int:
    """Bytes to read so that max_chars + 1 UTF-8 characters always fit."""
    return 4 * max_chars + 4


def extract_preview(path: Path, max_chars: int = DEFAULT_PREVIEW_CHARS) -> Optional[str]:
    """
    Read a bounded excerpt from the start of a file.

    At most preview_byte_budget(max_chars) bytes are read, so the cost does not
    grow with the file size. Invalid UTF-8 is replaced rather than rejected.

    Args:
        path: File to read
        max_chars: Character budget for the excerpt

    Returns:
        The excerpt, with PREVIEW_MARKER appended if the file holds more than
        max_chars characters. None if the file is empty or unreadable.
    """
    try:
        with open(path, "rb") as f:
            raw = f.read(preview_byte_budget(max_chars))
    except OSError:
        return None

    if not raw:
        return None

    text = raw.decode("utf-8", errors="replace")
    if len(text) > max_chars:
        return text[:max_chars] + PREVIEW_MARKER
    return text


def scan_sessions(
    project_path: Path,
    now: Optional[float] = None,
    with_preview: bool = True,
    preview_chars: int = DEFAULT_PREVIEW_CHARS,
) -> list[Session]:
    """
    List the session transcripts directly inside a project directory.

    Args:
        project_path: Project directory to scan
        now: Reference timestamp for ages (default: current time)
        with_preview: Whether to read a content preview for each session
        preview_chars: Character budget for previews

    Returns:
        Sessions sorted newest first (name breaks ties)

    Raises:
        OSError: if the directory itself cannot be listed
    """
    now = time.time() if now is None else now
    sessions = []

    with os.scandir(project_path) as entries:
        for entry in entries:
            if not entry.name.endswith(SESSION_SUFFIX):
                continue
            try:
                if not entry.is_file(follow_symlinks=False):
                    continue
                stat = entry.stat(follow_symlinks=False)
            except OSError:
                # Vanished or unreadable between listing and stat
                continue

            path = Path(entry.path)
            sessions.append(
                Session(
                    name=entry.name,
                    path=str(path),
                    size=stat.st_size,
                    age_days=age_in_days(stat.st_mtime, now),
                    modified=datetime.fromtimestamp(stat.st_mtime, tz=timezone.utc),
                    content_preview=extract_preview(path, preview_chars) if with_preview else None,
                )
            )

    sessions.sort(key=lambda s: s.name)
    sessions.sort(key=lambda s: s.modified, reverse=True)
    return sessions


def build_project(
    project_path: Path,
    now: Optional[float] = None,
    with_preview: bool = True,
    preview_chars: int = DEFAULT_PREVIEW_CHARS,
) -> Project:
    """Scan one project directory into a Project (raises OSError if unreadable)."""
    sessions = scan_sessions(
        project_path, now=now, with_preview=with_preview, preview_chars=preview_chars
    )
    latest = sessions[0].content_preview if sessions else None
    summary = None
    if latest:
        try:
            summary = summarize_preview(latest)
        except (ValueError, RecursionError) as e:
            logger.debug("No summary for {}: {}", project_path, e)
    return Project(
        name=project_path.name,
        path=str(project_path),
        sessions=sessions,
        latest_preview=summary,
    )


def list_project_dirs(root: Path) -> list[Path]:
    """Immediate, non-symlinked subdirectories of root; [] if root is unreadable."""
    project_dirs = []
    try:
        with os.scandir(root) as entries:
            for entry in entries:
                try:
                    if entry.is_dir(follow_symlinks=False):
                        project_dirs.append(Path(entry.path))
                except OSError:
                    continue
    except OSError as e:
        logger.debug("Cannot list managed root {}: {}", root, e)
        return []
    return project_dirs


def scan_all_projects(
    root: Path,
    max_workers: Optional[int] = None,
    with_preview: bool = True,
    preview_chars: int = DEFAULT_PREVIEW_CHARS,
    now: Optional[float] = None,
) -> list[Project]:
    """
    Scan every project under the managed root in parallel.

    Unreadable projects (permission errors, removed mid-scan) are skipped so
    that one bad directory does not hide the rest.

    Args:
        root: Managed root directory
        max_workers: Worker threads (default: min(cpu_count, 8))
        with_preview: Whether to read content previews
        preview_chars: Character budget for previews
        now: Reference timestamp shared by every session in this scan

    Returns:
        Projects sorted by name
    """
    now = time.time() if now is None else now
    project_dirs = list_project_dirs(root)
    if not project_dirs:
        return []

    projects: dict[str, Project] = {}
    with ThreadPoolExecutor(max_workers=max_workers or default_max_workers()) as executor:
        future_to_dir = {
            executor.submit(build_project, path, now, with_preview, preview_chars): path
            for path in project_dirs
        }

        for future in as_completed(future_to_dir):
            path = future_to_dir[future]
            try:
                projects[str(path)] = future.result()
            except OSError as e:
                logger.debug("Skipping unreadable project {}: {}", path, e)

    result = sorted(projects.values(), key=lambda p: (p.name, p.path))
    logger.debug(
        "Scanned {} projects, {} sessions under {}",
        len(result),
        sum(p.session_count for p in result),
        root,
    )
    return result


def scan_project(
    root: Path,
    project_path: str | Path,
    with_preview: bool = True,
    preview_chars: int = DEFAULT_PREVIEW_CHARS,
    now: Optional[float] = None,
) -> Optional[Project]:
    """
    Scan a single project given by a caller-supplied path.

    Returns:
        The Project, or None if it does not exist, is not a direct child
        directory of root, is a symbolic link, or cannot be read

    Raises:
        PathEscapeError: if project_path resolves outside root
    """
    canonical_root = canonicalize(root)
    path = assert_contained(canonical_root, project_path)
    if path.parent != canonical_root or not path.is_dir():
        return None
    if lexical_path(canonical_root, project_path).is_symlink():
        logger.debug("Ignoring symlinked project {}", project_path)
        return None
    try:
        return build_project(path, now=now, with_preview=with_preview, preview_chars=preview_chars)
    except OSError as e:
        logger.debug("Cannot scan project {}: {}", path, e)
        return None


def filter_by_age(projects: list[Project], days: int) -> list[Session]:
    """Every session across projects whose age is at least `days`."""
    return [s for p in projects for s in p.sessions if s.age_days >= days]


def read_full_content(root: Path, session_path: str | Path) -> str:
    """
    Read a whole session transcript for a detailed view.

    Args:
        root: Managed root directory
        session_path: Caller-supplied path of the session file

    Returns:
        Full file content (invalid UTF-8 replaced, newlines preserved)

    Raises:
        PathEscapeError: if the path resolves outside root
        SessionNotFoundError: if the file does not exist (or vanished)
        NotASessionArtifactError: if the path is not a session transcript
    """
    path = assert_contained(root, session_path)
    if not path.exists():
        raise SessionNotFoundError(f"Session not found: {session_path}", path=str(session_path))
    if not is_session_file(root, path):
        raise NotASessionArtifactError(
            f"Not a session transcript: {session_path}", path=str(session_path)
        )

    try:
        with open(path, encoding="utf-8", errors="replace", newline="") as f:
            return f.read()
    except FileNotFoundError as e:
        raise SessionNotFoundError(
            f"Session vanished before it could be read: {session_path}", path=str(session_path)
        ) from e
    except PermissionError as e:
        raise PermissionDeniedError(
            f"Permission denied reading session: {session_path}", path=str(session_path)
        ) from e
    except OSError as e:
        raise SessionKeeperError(
            f"Cannot read session {session_path}: {e.strerror}", path=str(session_path)
        ) from e
