"""The session store: every operation a front end may call.

All paths accepted here are plain strings from outside and are re-validated
against the managed root before any content read or deletion. Nothing is
cached between calls except the located root itself.
"""

from pathlib import Path
from typing import Iterable, Optional

from sessionkeeper.analyzer import aggregate
from sessionkeeper.cleaner import delete_older_than, delete_project, delete_sessions, validate_days
from sessionkeeper.config import Settings, get_settings
from sessionkeeper.errors import ProjectNotFoundError
from sessionkeeper.locator import RootLocator
from sessionkeeper.models import DeletionResult, Project, Session, Statistics
from sessionkeeper.scanner import filter_by_age, read_full_content, scan_all_projects, scan_project


class SessionStore:
    """Session-store operations bound to one lazily located managed root."""

    def __init__(
        self,
        locator: Optional[RootLocator] = None,
        settings: Optional[Settings] = None,
    ):
        self.settings = settings or get_settings()
        self.locator = locator or RootLocator(explicit_root=self.settings.root)

    def locate_root(self) -> Optional[Path]:
        """Managed root, or None when there is none yet (e.g. first run)."""
        return self.locator.locate()

    def _scan(self, with_preview: bool = True) -> list[Project]:
        root = self.locate_root()
        if root is None:
            return []
        return scan_all_projects(
            root,
            max_workers=self.settings.scan_workers,
            with_preview=with_preview,
            preview_chars=self.settings.preview_chars,
        )

    def get_statistics(self) -> Statistics:
        """Totals from a fresh scan; all zeros when there is no root."""
        return aggregate(self._scan(with_preview=False))

    def scan_projects(self) -> list[Project]:
        """Every project with its sessions."""
        return self._scan()

    def get_project(self, project_path: str) -> Project:
        """
        One project, by path or by name (names are resolved against the root).

        Raises:
            RootNotFoundError: if there is no managed root
            PathEscapeError: if the path resolves outside the root
            ProjectNotFoundError: if the project does not exist
        """
        root = self.locator.require()
        project = scan_project(root, project_path, preview_chars=self.settings.preview_chars)
        if project is None:
            raise ProjectNotFoundError(f"Project not found: {project_path}", path=project_path)
        return project

    def get_project_sessions(self, project_path: str) -> list[Session]:
        """Sessions of one project."""
        return self.get_project(project_path).sessions

    def filter_sessions_by_age(self, days: int) -> list[Session]:
        """Sessions across all projects with an age of at least `days`."""
        validate_days(days)
        return filter_by_age(self._scan(), days)

    def get_session_content(self, session_path: str) -> str:
        """Full text of one session file."""
        return read_full_content(self.locator.require(), session_path)

    def delete_sessions(self, session_paths: Iterable[str]) -> DeletionResult:
        """Delete the given sessions, best effort; see DeletionResult.deleted_count."""
        return delete_sessions(self.locator.require(), session_paths)

    def delete_project(self, project_path: str) -> None:
        """Delete a whole project; raises if anything goes wrong."""
        delete_project(self.locator.require(), project_path)

    def delete_old_sessions(self, days: int) -> DeletionResult:
        """Delete every session with an age of at least `days` (fresh scan)."""
        return delete_older_than(
            self.locator.require(), days, max_workers=self.settings.scan_workers
        )
