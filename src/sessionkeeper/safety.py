"""Containment checks for every path that reaches a read or delete.

Paths arrive from callers as plain strings and cannot be trusted. Both the
managed root and the candidate are canonicalized (``~`` expanded, symlinks and
``..`` resolved) before comparing them component-wise; a string prefix match
is never taken as proof of containment (``/a/projects-evil`` starts with
``/a/projects`` but is not inside it).
"""

import os
from pathlib import Path

from sessionkeeper.errors import PathEscapeError

# Claude Code writes one JSON-lines transcript per session.
SESSION_SUFFIX = ".jsonl"


def canonicalize(path: str | Path) -> Path:
    """Expand ``~`` and resolve symlinks and relative segments."""
    return Path(os.path.expanduser(str(path))).resolve()


def lexical_path(root: str | Path, candidate: str | Path) -> Path:
    """Absolute form of candidate without resolving symlinks (relative to root)."""
    candidate_path = Path(os.path.expanduser(str(candidate)))
    if not candidate_path.is_absolute():
        candidate_path = Path(root) / candidate_path
    return candidate_path


def assert_contained(root: str | Path, candidate: str | Path) -> Path:
    """
    Return the canonical candidate if it lies within root.

    Relative candidates are interpreted against the root.

    Args:
        root: Managed root directory
        candidate: Path supplied by a caller

    Returns:
        Canonical candidate path (equal to or below the canonical root)

    Raises:
        PathEscapeError: if the canonical candidate is outside the root, or
            the path cannot be canonicalized at all
    """
    canonical_root = canonicalize(root)
    candidate_path = lexical_path(canonical_root, candidate)

    try:
        canonical = candidate_path.resolve()
    except (OSError, RuntimeError, ValueError) as e:
        # Symlink loops and embedded NUL bytes end up here
        raise PathEscapeError(f"Cannot resolve path: {e}", path=str(candidate)) from e

    if canonical == canonical_root or canonical.is_relative_to(canonical_root):
        return canonical

    raise PathEscapeError(
        f"Path resolves outside the managed root: {canonical}", path=str(candidate)
    )


def is_contained(root: str | Path, candidate: str | Path) -> bool:
    """Boolean form of assert_contained."""
    try:
        assert_contained(root, candidate)
    except PathEscapeError:
        return False
    return True


def is_session_file(root: str | Path, path: Path) -> bool:
    """
    Check that a canonical path is a session transcript of the managed root.

    A session is a regular ``*.jsonl`` file exactly one level below a
    project directory, i.e. ``<root>/<project>/<session>.jsonl``.
    """
    canonical_root = canonicalize(root)
    return (
        path.suffix == SESSION_SUFFIX
        and path.parent.parent == canonical_root
        and path.parent != canonical_root
        and path.is_file()
    )


def is_project_dir(root: str | Path, path: Path) -> bool:
    """Check that a canonical path is a direct child directory of the root."""
    canonical_root = canonicalize(root)
    return path.parent == canonical_root and path != canonical_root and path.is_dir()
