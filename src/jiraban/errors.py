"""Exceptions raised at the edges of a sync run."""

from pathlib import Path


class JirabanError(Exception):
    """Base class for jiraban errors."""


class ConfigError(JirabanError):
    """Required configuration is missing or invalid."""


class TrackerError(JirabanError):
    """Fetching issues from the tracker failed."""


class FilesystemFailure(JirabanError):
    """Reading or writing one target file failed.

    Carries the path and the underlying error so a run can report the
    failure and carry on with the remaining files.
    """

    def __init__(self, path: Path | str, cause: Exception):
        self.path = Path(path)
        self.cause = cause
        reason = getattr(cause, "strerror", None) or cause
        super().__init__(f"{self.path}: {reason}")
