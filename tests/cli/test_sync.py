"""Tests for 'jiraban sync' command."""

import json
from argparse import Namespace

from jiraban.cli.sync import sync
from jiraban.errors import TrackerError
from jiraban.models import Issue
from jiraban.sync import sync_issues


def make_args(tmp_path, **overrides):
    args = dict(json=False, verbose=False, vault=None, jql=None, env_file=str(tmp_path / "absent.env"))
    args.update(overrides)
    return Namespace(**args)


def fake_run_sync(calls):
    def _run_sync(config):
        calls.append(config)
        issues = [Issue("A-1", "First", "To Do", link="u1"), Issue("A-2", "Second", "Done", link="u2")]
        return sync_issues(config, issues, "t1")

    return _run_sync


def test_sync(jira_env, tmp_path, monkeypatch, capsys):
    calls = []
    monkeypatch.setattr("jiraban.cli.sync.run_sync", fake_run_sync(calls))

    assert sync(make_args(tmp_path)) == 0

    out = capsys.readouterr().out
    assert "created: 2, updated: 0, unchanged: 0" in out
    assert "board:" in out
    assert (jira_env / "Jira Tickets" / "A-1.md").exists()
    assert calls[0].vault_path == jira_env


def test_sync_json(jira_env, tmp_path, monkeypatch, capsys):
    monkeypatch.setattr("jiraban.cli.sync.run_sync", fake_run_sync([]))

    assert sync(make_args(tmp_path, json=True)) == 0

    data = json.loads(capsys.readouterr().out)
    assert data["created"] == ["A-1", "A-2"]
    assert data["board"].endswith("My Jira Board.md")


def test_sync_flag_overrides(jira_env, tmp_path, monkeypatch):
    calls = []
    monkeypatch.setattr("jiraban.cli.sync.run_sync", fake_run_sync(calls))
    other = tmp_path / "other"

    assert sync(make_args(tmp_path, vault=str(other), jql="project = X")) == 0

    assert calls[0].vault_path == other
    assert calls[0].jql == "project = X"
    assert (other / "My Jira Board.md").exists()


def test_sync_missing_config(clean_env, tmp_path, capsys):
    assert sync(make_args(tmp_path)) == 1
    err = capsys.readouterr().err
    assert err.startswith("error: missing required setting(s): JIRA_HOST")


def test_sync_tracker_error(jira_env, tmp_path, monkeypatch, capsys):
    def broken(config):
        raise TrackerError("Jira API error 401: nope")

    monkeypatch.setattr("jiraban.cli.sync.run_sync", broken)

    assert sync(make_args(tmp_path, json=True)) == 1
    assert json.loads(capsys.readouterr().err) == {"error": "Jira API error 401: nope"}
    assert not jira_env.exists()


def test_sync_file_failure_exit_code(jira_env, tmp_path, monkeypatch, capsys):
    (jira_env / "Jira Tickets" / "A-1.md").mkdir(parents=True)
    monkeypatch.setattr("jiraban.cli.sync.run_sync", fake_run_sync([]))

    assert sync(make_args(tmp_path)) == 1
    assert "A-1.md" in capsys.readouterr().err


def test_sync_vault_flag_satisfies_config(clean_env, tmp_path, monkeypatch):
    clean_env.setenv("JIRA_HOST", "example.atlassian.net")
    clean_env.setenv("JIRA_TOKEN", "token")
    calls = []
    monkeypatch.setattr("jiraban.cli.sync.run_sync", fake_run_sync(calls))

    assert sync(make_args(tmp_path, vault=str(tmp_path / "v"))) == 0
    assert calls[0].vault_path == tmp_path / "v"
