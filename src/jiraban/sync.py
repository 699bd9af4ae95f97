"""Sync engine: write one file per issue, then regenerate the board.

Runs sequentially. Each issue file is read, merged and replaced before the
next one is touched; the board is written last. A filesystem error on one
file is recorded and the run carries on.
"""

import logging
from dataclasses import dataclass, field
from datetime import datetime, timezone
from pathlib import Path

from jiraban import board, writer
from jiraban.config import Config
from jiraban.errors import FilesystemFailure
from jiraban.jira import JiraClient
from jiraban.models import Issue

logger = logging.getLogger(__name__)


@dataclass
class SyncResult:
    created: list[str] = field(default_factory=list)
    updated: list[str] = field(default_factory=list)
    unchanged: list[str] = field(default_factory=list)
    failures: list[FilesystemFailure] = field(default_factory=list)
    board_path: Path | None = None

    @property
    def ok(self) -> bool:
        return not self.failures

    def as_dict(self) -> dict:
        return {
            "created": self.created,
            "updated": self.updated,
            "unchanged": self.unchanged,
            "failures": [{"path": str(f.path), "error": str(f)} for f in self.failures],
            "board": str(self.board_path) if self.board_path else None,
        }


def now_timestamp() -> str:
    """Current UTC time, to the second, as used for the synced field."""
    return datetime.now(timezone.utc).isoformat(timespec="seconds")


def sync_issue(config: Config, issue: Issue, synced_at: str) -> str:
    """Sync one issue file. Returns "created", "updated" or "unchanged".

    Raises FilesystemFailure if the file can't be read or written.
    """
    path = writer.issue_path(config.vault_path, config.issues_folder, issue.key)
    try:
        existing = writer.read_existing(path)
    except (OSError, UnicodeDecodeError) as e:
        raise FilesystemFailure(path, e) from e

    content = writer.write(issue, existing, synced_at)
    if content == existing:
        return "unchanged"

    try:
        writer.write_atomic(path, content)
    except OSError as e:
        raise FilesystemFailure(path, e) from e
    return "created" if existing is None else "updated"


def write_board(config: Config, issues: list[Issue]) -> Path:
    """Regenerate the board file. Raises FilesystemFailure on write errors."""
    path = config.board_path
    content = board.generate(issues)
    try:
        writer.write_atomic(path, content)
    except OSError as e:
        raise FilesystemFailure(path, e) from e
    return path


def sync_issues(config: Config, issues: list[Issue], synced_at: str | None = None) -> SyncResult:
    """Write every issue file, then the board."""
    synced_at = synced_at or now_timestamp()
    result = SyncResult()

    for issue in issues:
        try:
            outcome = sync_issue(config, issue, synced_at)
        except FilesystemFailure as e:
            logger.error("failed to sync %s: %s", issue.key, e)
            result.failures.append(e)
            continue
        getattr(result, outcome).append(issue.key)
        if outcome != "unchanged":
            logger.info("%s %s", outcome, issue.key)

    try:
        result.board_path = write_board(config, issues)
        logger.info("generated board %s", result.board_path)
    except FilesystemFailure as e:
        logger.error("failed to write board: %s", e)
        result.failures.append(e)

    return result


def run_sync(config: Config, client: JiraClient | None = None) -> SyncResult:
    """Fetch issues from Jira and sync them into the vault.

    Tracker errors propagate before anything is written.
    """
    if client is None:
        with JiraClient(config) as owned:
            issues = owned.fetch_issues()
    else:
        issues = client.fetch_issues()
    logger.info("found %d issues", len(issues))
    return sync_issues(config, issues)
