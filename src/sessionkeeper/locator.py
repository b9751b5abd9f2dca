"""Discovery of the managed root directory."""

import os
from pathlib import Path
from typing import Mapping, Optional

from loguru import logger

from sessionkeeper.errors import RootNotFoundError

PROJECTS_DIRNAME = "projects"


class RootLocator:
    """
    Find the directory holding per-project session folders.

    Probe order: an explicit root if one was configured (then it is the only
    candidate), ``~/.claude/projects``, ``$XDG_CONFIG_HOME/claude/projects``,
    and finally ``$CLAUDE_CONFIG_DIR/projects``. The first readable directory
    wins and is cached until refresh() is called.
    """

    def __init__(
        self,
        explicit_root: Optional[str | Path] = None,
        home: Optional[Path] = None,
        environ: Optional[Mapping[str, str]] = None,
    ):
        self.explicit_root = Path(os.path.expanduser(str(explicit_root))) if explicit_root else None
        self._home = home
        self._environ = environ
        self._root: Optional[Path] = None
        self._resolved = False

    @property
    def home(self) -> Path:
        return self._home or Path.home()

    @property
    def environ(self) -> Mapping[str, str]:
        return os.environ if self._environ is None else self._environ

    def candidates(self) -> list[Path]:
        """Candidate locations in probe order."""
        if self.explicit_root is not None:
            return [self.explicit_root]

        xdg = self.environ.get("XDG_CONFIG_HOME") or str(self.home / ".config")
        paths = [
            self.home / ".claude" / PROJECTS_DIRNAME,
            Path(xdg) / "claude" / PROJECTS_DIRNAME,
        ]
        config_dir = self.environ.get("CLAUDE_CONFIG_DIR")
        if config_dir:
            paths.append(Path(os.path.expanduser(config_dir)) / PROJECTS_DIRNAME)
        return paths

    def locate(self) -> Optional[Path]:
        """Return the cached managed root, probing on first use. None if not found."""
        if not self._resolved:
            self._root = self._probe()
            self._resolved = True
        return self._root

    def refresh(self) -> Optional[Path]:
        """Drop the cached root and probe again."""
        self._resolved = False
        self._root = None
        return self.locate()

    def require(self) -> Path:
        """Return the managed root or raise RootNotFoundError."""
        root = self.locate()
        if root is None:
            raise RootNotFoundError("No Claude Code projects directory found")
        return root

    def _probe(self) -> Optional[Path]:
        for candidate in self.candidates():
            if _is_readable_dir(candidate):
                root = candidate.resolve()
                logger.debug("Managed root: {}", root)
                return root
            logger.debug("Not a readable directory, skipping: {}", candidate)
        return None


def _is_readable_dir(path: Path) -> bool:
    try:
        return path.is_dir() and os.access(path, os.R_OK | os.X_OK)
    except OSError:
        return False
