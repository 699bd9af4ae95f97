"""Build and read the YAML front-matter block at the top of an issue file."""

import re

import yaml

from jiraban.models import Issue

DELIMITER = "---"

# Fixed key order; every key is always written so the block's shape never changes.
FIELDS = ("jira_key", "summary", "type", "status", "priority", "created", "updated", "link", "synced")

_FRONT_MATTER = re.compile(r"\A---\n(.*?\n)?---\n?", re.DOTALL)


def issue_meta(issue: Issue, synced_at: str) -> dict[str, str]:
    """Flatten an issue into the ordered front-matter mapping."""
    values = {
        "jira_key": issue.key,
        "summary": issue.summary,
        "type": issue.issue_type,
        "status": issue.status,
        "priority": issue.priority,
        "created": issue.created,
        "updated": issue.updated,
        "link": issue.link,
        "synced": synced_at,
    }
    return {key: "" if values[key] is None else str(values[key]) for key in FIELDS}


def build(issue: Issue, synced_at: str) -> str:
    """Serialize the issue's metadata as a front-matter block.

    The result starts and ends with a "---" line and ends with a newline.
    """
    return serialize(issue_meta(issue, synced_at))


def serialize(meta: dict) -> str:
    """Dump meta as YAML between delimiter lines, keeping insertion order."""
    body = yaml.dump(
        meta,
        default_flow_style=False,
        sort_keys=False,
        allow_unicode=True,
        width=2**31 - 1,
    )
    return f"{DELIMITER}\n{body}{DELIMITER}\n"


def extract(text: str) -> tuple[dict, str]:
    """Split leading front-matter from text. Returns (meta, remaining_text).

    Only a block starting at the very first byte counts. Unparseable YAML
    is treated as no meta at all.
    """
    match = _FRONT_MATTER.match(text)
    if not match:
        return {}, text

    remaining = text[match.end() :]
    try:
        meta = yaml.safe_load(match.group(1) or "") or {}
    except yaml.YAMLError:
        meta = {}
    if not isinstance(meta, dict):
        meta = {}
    return meta, remaining
