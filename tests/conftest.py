"""Shared fixtures for jiraban tests."""

import pytest

from jiraban.config import Config
from jiraban.models import BulletList, Heading, Issue, ListItem, Paragraph, Text

HOST = "example.atlassian.net"


@pytest.fixture
def make_issue():
    """Factory for Issue records with sensible defaults."""

    def _make_issue(key="PROJ-1", summary="Fix login", status="To Do", **fields):
        fields.setdefault("link", f"https://{HOST}/browse/{key}")
        return Issue(key=key, summary=summary, status=status, **fields)

    return _make_issue


@pytest.fixture
def issue(make_issue):
    """An issue with a small description."""
    description = [
        Heading(1, [Text("Plan")]),
        BulletList([ListItem([Paragraph([Text("step one")])]), ListItem([Paragraph([Text("step two")])])]),
    ]
    return make_issue(priority="High", issue_type="Bug", description=description, updated="2024-01-05")


@pytest.fixture
def config(tmp_path):
    """Config pointing at an empty vault under tmp_path."""
    vault = tmp_path / "vault"
    vault.mkdir()
    return Config(jira_host=HOST, jira_token="token", vault_path=vault, jira_user="me@example.com")
