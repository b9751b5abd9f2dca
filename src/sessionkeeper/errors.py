"""Error taxonomy for sessionkeeper."""

from sessionkeeper.models import FailureReason


class SessionKeeperError(Exception):
    """Base class for every error raised by the session store."""

    reason: FailureReason = FailureReason.IO_ERROR

    def __init__(self, message: str, path: str | None = None):
        super().__init__(message)
        self.path = path


class NotFoundError(SessionKeeperError):
    """Root, project or session is missing."""

    reason = FailureReason.NOT_FOUND


class RootNotFoundError(NotFoundError):
    """No managed root could be located."""


class ProjectNotFoundError(NotFoundError):
    """Project directory does not exist."""


class SessionNotFoundError(NotFoundError):
    """Session file does not exist (or vanished since it was listed)."""


class PermissionDeniedError(SessionKeeperError):
    """The operating system refused access to the path."""

    reason = FailureReason.PERMISSION_DENIED


class PathEscapeError(SessionKeeperError):
    """Path resolves outside the managed root."""

    reason = FailureReason.ESCAPE_REJECTED


class NotASessionArtifactError(SessionKeeperError):
    """Path is inside the root but is not a session transcript."""

    reason = FailureReason.NOT_A_SESSION_FILE


class NotAProjectError(SessionKeeperError):
    """Path is inside the root but is not a project directory."""

    reason = FailureReason.NOT_A_PROJECT


class ProjectDeletionError(SessionKeeperError):
    """Recursive removal of a project failed partway or entirely."""


def reason_for_os_error(error: OSError) -> FailureReason:
    """Map a low-level OSError onto a failure reason."""
    if isinstance(error, FileNotFoundError):
        return FailureReason.NOT_FOUND
    if isinstance(error, PermissionError):
        return FailureReason.PERMISSION_DENIED
    return FailureReason.IO_ERROR
