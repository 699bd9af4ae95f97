"""Produce and write one Markdown file per issue."""

import logging
import os
import re
import stat
import tempfile
from pathlib import Path

from jiraban import frontmatter
from jiraban.merger import find_marker, merge
from jiraban.models import Issue
from jiraban.renderer import render

logger = logging.getLogger(__name__)

_UNSAFE_FILENAME = re.compile(r'[\\/:*?"<>|]')


def issue_path(root: Path | str, folder: str, key: str) -> Path:
    """Path of the file for an issue key: <root>/<folder>/<key>.md."""
    name = _UNSAFE_FILENAME.sub("_", key).strip(". ") or "_"
    return Path(root) / folder / f"{name}.md"


def machine_content(issue: Issue, synced_at: str) -> str:
    """Front-matter followed by the rendered description."""
    head = frontmatter.build(issue, synced_at)
    body = render(issue.description)
    return f"{head}\n{body}" if body else head


def write(issue: Issue, existing: str | None, synced_at: str) -> str:
    """Return the full new content for an issue's file.

    If regenerating with the sync time already recorded in the existing
    file reproduces it exactly, the existing content is returned as is,
    so an unchanged issue leaves its file byte-identical.
    """
    if existing is not None:
        previous = frontmatter.extract(existing)[0].get("synced")
        if isinstance(previous, str) and previous != synced_at:
            if merge(existing, machine_content(issue, previous)) == existing:
                return existing
        if find_marker(existing) is None:
            logger.warning("%s: no user-notes marker, preserving existing content below a new one", issue.key)

    return merge(existing, machine_content(issue, synced_at))


def read_existing(path: Path) -> str | None:
    """Read a file exactly as stored, or None if it doesn't exist."""
    try:
        with open(path, encoding="utf-8", newline="") as f:
            return f.read()
    except FileNotFoundError:
        return None


def write_atomic(path: Path, content: str) -> None:
    """Replace path with content in one step.

    Writes a temp file beside the target and renames it over, so a crash
    leaves either the old file or the new one, never a partial write. The
    result keeps the target's permissions, or gets the umask default when
    the file is new.
    """
    path.parent.mkdir(parents=True, exist_ok=True)
    mode = _target_mode(path)
    fd, tmp = tempfile.mkstemp(prefix=f".{path.name}.", suffix=".tmp", dir=path.parent)
    try:
        with os.fdopen(fd, "w", encoding="utf-8", newline="") as f:
            f.write(content)
        os.chmod(tmp, mode)
        os.replace(tmp, path)
    except BaseException:
        Path(tmp).unlink(missing_ok=True)
        raise


def _target_mode(path: Path) -> int:
    # mkstemp always creates 0600
    try:
        return stat.S_IMODE(path.stat().st_mode)
    except FileNotFoundError:
        umask = os.umask(0)
        os.umask(umask)
        return 0o666 & ~umask
