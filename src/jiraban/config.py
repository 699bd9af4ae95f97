"""Configuration from the environment and an optional .env file.

Variables already set in the process environment win over the .env file.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Mapping

from dotenv import dotenv_values

from jiraban.errors import ConfigError

DEFAULT_JQL = "assignee = currentUser() AND statusCategory != Done ORDER BY updated DESC"
DEFAULT_ISSUES_FOLDER = "Jira Tickets"
DEFAULT_BOARD_FILE = "My Jira Board.md"

REQUIRED = ("JIRA_HOST", "JIRA_TOKEN", "OBSIDIAN_VAULT_PATH")


@dataclass
class Config:
    jira_host: str
    jira_token: str
    vault_path: Path
    jira_user: str | None = None
    jql: str = DEFAULT_JQL
    issues_folder: str = DEFAULT_ISSUES_FOLDER
    board_file: str = DEFAULT_BOARD_FILE

    @property
    def base_url(self) -> str:
        return f"https://{self.jira_host}"

    @property
    def issues_dir(self) -> Path:
        return self.vault_path / self.issues_folder

    @property
    def board_path(self) -> Path:
        return self.vault_path / self.board_file

    @classmethod
    def from_env(cls, environ: Mapping[str, str] | None = None, env_file: Path | str | None = ".env") -> Config:
        """Build a Config from environ (default os.environ) layered over env_file.

        Raises ConfigError listing every required variable that is missing.
        """
        values: dict[str, str] = {}
        if env_file is not None and Path(env_file).is_file():
            values.update({k: v for k, v in dotenv_values(env_file).items() if k and v is not None})
        values.update(os.environ if environ is None else environ)

        def get(name: str) -> str:
            return (values.get(name) or "").strip()

        missing = [name for name in REQUIRED if not get(name)]
        if missing:
            raise ConfigError(f"missing required setting(s): {', '.join(missing)}")

        return cls(
            jira_host=_normalize_host(get("JIRA_HOST")),
            jira_token=get("JIRA_TOKEN"),
            vault_path=Path(get("OBSIDIAN_VAULT_PATH")).expanduser(),
            jira_user=get("JIRA_USER") or None,
            jql=get("JIRA_JQL") or DEFAULT_JQL,
            issues_folder=get("JIRABAN_ISSUES_FOLDER") or DEFAULT_ISSUES_FOLDER,
            board_file=get("JIRABAN_BOARD_FILE") or DEFAULT_BOARD_FILE,
        )


def _normalize_host(host: str) -> str:
    """Strip a scheme and trailing slashes: "https://x.atlassian.net/" -> "x.atlassian.net"."""
    for scheme in ("https://", "http://"):
        if host.lower().startswith(scheme):
            host = host[len(scheme) :]
    return host.rstrip("/")
