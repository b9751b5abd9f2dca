"""Validated deletion of sessions and projects."""

import shutil
from pathlib import Path
from typing import Callable, Iterable

from loguru import logger

from sessionkeeper.errors import (
    NotAProjectError,
    PathEscapeError,
    ProjectDeletionError,
    ProjectNotFoundError,
    reason_for_os_error,
)
from sessionkeeper.models import DeletionFailure, DeletionResult, FailureReason
from sessionkeeper.safety import assert_contained, canonicalize, is_session_file, lexical_path
from sessionkeeper.scanner import filter_by_age, scan_all_projects


def validate_days(days: int) -> None:
    """Raise ValueError unless days is a non-negative integer."""
    if isinstance(days, bool) or not isinstance(days, int) or days < 0:
        raise ValueError(f"days must be a non-negative integer, got {days!r}")


def delete_session_file(root: Path, path_str: str) -> DeletionFailure | None:
    """
    Validate and delete one session file.

    Args:
        root: Managed root directory
        path_str: Caller-supplied session path

    Returns:
        None on success, otherwise the failure to report
    """
    try:
        path = assert_contained(root, path_str)
    except PathEscapeError as e:
        return DeletionFailure(path=path_str, reason=FailureReason.ESCAPE_REJECTED, detail=str(e))

    if not path.exists():
        return DeletionFailure(
            path=path_str, reason=FailureReason.NOT_FOUND, detail="Session does not exist"
        )

    if lexical_path(canonicalize(root), path_str).is_symlink():
        return DeletionFailure(
            path=path_str,
            reason=FailureReason.NOT_A_SESSION_FILE,
            detail="Symbolic links are never deleted",
        )

    if not is_session_file(root, path):
        return DeletionFailure(
            path=path_str,
            reason=FailureReason.NOT_A_SESSION_FILE,
            detail="Not a session transcript inside a project directory",
        )

    try:
        path.unlink()
    except OSError as e:
        return DeletionFailure(
            path=path_str, reason=reason_for_os_error(e), detail=e.strerror or str(e)
        )

    return None


def delete_sessions(
    root: Path,
    paths: Iterable[str],
    progress_callback: Callable[[str, bool], None] | None = None,
) -> DeletionResult:
    """
    Delete session files, best effort.

    Every path is validated on its own; one failure never stops the rest.

    Args:
        root: Managed root directory
        paths: Caller-supplied session paths (duplicates are ignored)
        progress_callback: Optional callback(path, deleted)

    Returns:
        DeletionResult whose deleted_count is the number of files removed
    """
    result = DeletionResult()

    for path_str in dict.fromkeys(str(p) for p in paths):
        failure = delete_session_file(root, path_str)

        if failure is None:
            result.deleted_count += 1
            result.deleted_paths.append(path_str)
            logger.info("Deleted session {}", path_str)
        else:
            result.failures.append(failure)
            logger.warning("Could not delete {}: {} ({})", path_str, failure.reason.value, failure.detail)

        if progress_callback:
            progress_callback(path_str, failure is None)

    return result


def delete_project(root: Path, project_path: str) -> None:
    """
    Remove a project directory and everything below it.

    Unlike delete_sessions this is all or nothing from the caller's side: any
    error during removal fails the whole call.

    Args:
        root: Managed root directory
        project_path: Caller-supplied project path

    Raises:
        PathEscapeError: if the path resolves outside root
        ProjectNotFoundError: if the project does not exist
        NotAProjectError: if the path is not a direct child directory of root
        ProjectDeletionError: if recursive removal fails
    """
    canonical_root = canonicalize(root)
    path = assert_contained(canonical_root, project_path)

    if path == canonical_root or path.parent != canonical_root:
        raise NotAProjectError(
            f"Not a project directory of the managed root: {project_path}", path=project_path
        )
    if not path.exists():
        raise ProjectNotFoundError(f"Project not found: {project_path}", path=project_path)
    if not path.is_dir():
        raise NotAProjectError(f"Not a directory: {project_path}", path=project_path)
    if lexical_path(canonical_root, project_path).is_symlink():
        raise NotAProjectError(f"Symbolic link, not a project: {project_path}", path=project_path)

    try:
        shutil.rmtree(path)
    except OSError as e:
        logger.warning("Project removal failed for {}: {}", path, e)
        error = ProjectDeletionError(
            f"Failed to delete project {path.name}: {e.strerror or e}", path=project_path
        )
        error.reason = reason_for_os_error(e)
        raise error from e

    logger.info("Deleted project {}", path)


def delete_older_than(
    root: Path,
    days: int,
    max_workers: int | None = None,
) -> DeletionResult:
    """
    Delete every session whose age is at least `days`.

    The root is scanned afresh right before deleting, so an earlier listing
    shown to the user is never acted on.

    Args:
        root: Managed root directory
        days: Age threshold in whole days (>= 0)
        max_workers: Worker threads for the scan

    Returns:
        DeletionResult for the selected sessions
    """
    validate_days(days)
    projects = scan_all_projects(root, max_workers=max_workers, with_preview=False)
    targets = [s.path for s in filter_by_age(projects, days)]
    logger.debug("{} sessions are at least {} days old", len(targets), days)
    return delete_sessions(root, targets)
