"""Generate the kanban board file that groups issues by status."""

from jiraban.frontmatter import serialize
from jiraban.merger import overwrite
from jiraban.models import Issue

BOARD_META = {"kanban-plugin": "basic"}
NO_STATUS = "(no status)"


def group_by_status(issues: list[Issue]) -> dict[str, list[Issue]]:
    """Group issues by their exact status string.

    Statuses appear in the order first seen; issues keep their input
    order within a group.
    """
    groups: dict[str, list[Issue]] = {}
    for issue in issues:
        groups.setdefault(issue.status, []).append(issue)
    return groups


def card_line(issue: Issue) -> str:
    """Checkbox line linking back to the tracker."""
    ref = f"[{issue.key}]({issue.link})" if issue.link else issue.key
    summary = " ".join(issue.summary.split())
    return f"- [ ] {ref} {summary}".rstrip()


def lane_title(status: str) -> str:
    """Status collapsed onto one line, so it can't break out of its heading."""
    return " ".join(status.split()) or NO_STATUS


def generate(issues: list[Issue]) -> str:
    """Render the whole board. The board is fully machine-owned."""
    parts = [serialize(BOARD_META)]
    for status, members in group_by_status(issues).items():
        parts.append(f"## {lane_title(status)}\n")
        parts.append("\n".join(card_line(issue) for issue in members) + "\n")
    return overwrite("\n".join(parts))
