"""Data models for sessionkeeper."""

from datetime import datetime
from enum import Enum
from typing import Optional

from pydantic import BaseModel, Field, computed_field

from sessionkeeper.formatting import format_size


class FailureReason(str, Enum):
    """Why a single path could not be deleted or read."""

    NOT_FOUND = "not-found"
    PERMISSION_DENIED = "permission-denied"
    ESCAPE_REJECTED = "escape-rejected"  # Resolves outside the managed root
    NOT_A_SESSION_FILE = "not-a-session-file"
    NOT_A_PROJECT = "not-a-project"
    IO_ERROR = "io-error"  # Any other OS-level failure


class Session(BaseModel):
    """One transcript file inside a project directory."""

    name: str = Field(..., description="File name of the transcript")
    path: str = Field(..., description="Absolute path of the transcript")
    size: int = Field(..., ge=0, description="Size in bytes")
    age_days: int = Field(..., ge=0, description="Whole days since last modification")
    modified: datetime = Field(..., description="Last modification time")
    content_preview: Optional[str] = Field(
        None, description="Bounded excerpt from the start of the file"
    )

    @computed_field
    @property
    def size_human(self) -> str:
        """Human-readable size string."""
        return format_size(self.size)


class Project(BaseModel):
    """A direct subdirectory of the managed root, grouping sessions."""

    name: str = Field(..., description="Directory base name")
    path: str = Field(..., description="Absolute path of the project directory")
    sessions: list[Session] = Field(default_factory=list)
    latest_preview: Optional[str] = Field(
        None, description="Preview of the most recently modified session"
    )

    @computed_field
    @property
    def session_count(self) -> int:
        """Number of sessions in the project."""
        return len(self.sessions)

    @computed_field
    @property
    def total_size(self) -> int:
        """Sum of all session sizes in bytes."""
        return sum(s.size for s in self.sessions)

    @computed_field
    @property
    def total_size_human(self) -> str:
        """Human-readable total size."""
        return format_size(self.total_size)


class Statistics(BaseModel):
    """Global counts reduced from one full scan."""

    total_projects: int = Field(0, ge=0)
    total_sessions: int = Field(0, ge=0)
    total_size: int = Field(0, ge=0)

    @computed_field
    @property
    def total_size_human(self) -> str:
        """Human-readable total size."""
        return format_size(self.total_size)


class DeletionFailure(BaseModel):
    """A path that could not be deleted, and why."""

    path: str = Field(..., description="Path as requested by the caller")
    reason: FailureReason = Field(..., description="Enumerated failure reason")
    detail: str = Field("", description="Short human-readable explanation")


class DeletionResult(BaseModel):
    """Outcome of a batch session deletion."""

    deleted_count: int = Field(0, ge=0, description="Files actually removed from disk")
    deleted_paths: list[str] = Field(default_factory=list)
    failures: list[DeletionFailure] = Field(default_factory=list)

    @property
    def failure_count(self) -> int:
        """Number of paths that could not be deleted."""
        return len(self.failures)

    @property
    def success(self) -> bool:
        """True when every requested path was deleted."""
        return not self.failures
