"""Shared fixtures for CLI tests."""

import pytest

ENV_VARS = (
    "JIRA_HOST",
    "JIRA_USER",
    "JIRA_TOKEN",
    "JIRA_JQL",
    "OBSIDIAN_VAULT_PATH",
    "JIRABAN_ISSUES_FOLDER",
    "JIRABAN_BOARD_FILE",
)


@pytest.fixture
def clean_env(monkeypatch):
    """Remove any jiraban settings inherited from the real environment."""
    for name in ENV_VARS:
        monkeypatch.delenv(name, raising=False)
    return monkeypatch


@pytest.fixture
def jira_env(clean_env, tmp_path):
    """Environment with all required settings; returns the vault path."""
    vault = tmp_path / "vault"
    clean_env.setenv("JIRA_HOST", "example.atlassian.net")
    clean_env.setenv("JIRA_TOKEN", "token")
    clean_env.setenv("OBSIDIAN_VAULT_PATH", str(vault))
    return vault
