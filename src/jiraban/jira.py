"""Minimal Jira Cloud client: fetch the issues matched by a JQL query."""

from __future__ import annotations

import logging
from typing import Any

import httpx

from jiraban.adf import parse_document
from jiraban.config import Config
from jiraban.errors import TrackerError
from jiraban.models import Issue

logger = logging.getLogger(__name__)

SEARCH_PATH = "/rest/api/3/search"
FIELDS = "summary,description,status,created,updated,priority,issuetype"
PAGE_SIZE = 50
TIMEOUT = 30.0


def _name(value: Any) -> str | None:
    """Pull .name out of a Jira field object like {"name": "High"}."""
    if isinstance(value, dict) and isinstance(value.get("name"), str):
        return value["name"]
    return None


def issue_from_json(raw: Any, host: str) -> Issue:
    """Map one issue from a search response onto an Issue.

    Raises TrackerError if the payload isn't shaped like an issue.
    """
    if not isinstance(raw, dict):
        raise TrackerError(f"unexpected issue payload: {type(raw).__name__}")
    key = raw.get("key")
    if not isinstance(key, str) or not key.strip():
        raise TrackerError(f"unexpected issue payload: key {key!r}")
    fields = raw.get("fields")
    if fields is None:
        fields = {}
    elif not isinstance(fields, dict):
        raise TrackerError(f"unexpected issue payload: {key} fields is a {type(fields).__name__}")

    summary = fields.get("summary")
    return Issue(
        key=key,
        summary=summary if isinstance(summary, str) else "",
        status=_name(fields.get("status")) or "",
        priority=_name(fields.get("priority")),
        issue_type=_name(fields.get("issuetype")),
        description=parse_document(fields.get("description")),
        link=f"https://{host}/browse/{key}",
        created=fields.get("created"),
        updated=fields.get("updated"),
    )


class JiraClient:
    """Authenticated HTTP session against one Jira host.

    Uses basic auth when a user is configured, otherwise the token is sent
    as a bearer personal access token.
    """

    def __init__(self, config: Config, transport: httpx.BaseTransport | None = None):
        self.config = config
        if config.jira_user:
            auth = httpx.BasicAuth(config.jira_user, config.jira_token)
            headers = {"Accept": "application/json"}
        else:
            auth = None
            headers = {"Accept": "application/json", "Authorization": f"Bearer {config.jira_token}"}
        self._client = httpx.Client(
            base_url=config.base_url,
            auth=auth,
            headers=headers,
            timeout=TIMEOUT,
            transport=transport,
        )

    def close(self) -> None:
        self._client.close()

    def __enter__(self) -> JiraClient:
        return self

    def __exit__(self, *exc) -> None:
        self.close()

    def fetch_issues(self) -> list[Issue]:
        """Fetch every issue matching the configured JQL, in tracker order.

        Raises TrackerError on any transport failure or non-2xx response.
        """
        issues: list[Issue] = []
        start = 0
        while True:
            page = self._search(start)
            raw_issues = page.get("issues") or []
            if not isinstance(raw_issues, list):
                raise TrackerError("invalid search response from Jira")
            issues.extend(issue_from_json(raw, self.config.jira_host) for raw in raw_issues)
            start += len(raw_issues)
            total = page.get("total")
            if not raw_issues or not isinstance(total, int) or start >= total:
                break
        logger.info("fetched %d issues", len(issues))
        return issues

    def _search(self, start: int) -> dict:
        params = {
            "jql": self.config.jql,
            "fields": FIELDS,
            "startAt": start,
            "maxResults": PAGE_SIZE,
        }
        try:
            resp = self._client.get(SEARCH_PATH, params=params)
        except httpx.HTTPError as e:
            raise TrackerError(f"request to {self.config.jira_host} failed: {e}") from e

        if not resp.is_success:
            raise TrackerError(f"Jira API error {resp.status_code}: {resp.text}")

        try:
            data = resp.json()
        except ValueError as e:
            raise TrackerError(f"invalid JSON from Jira: {e}") from e
        if not isinstance(data, dict):
            raise TrackerError("invalid search response from Jira")
        return data
