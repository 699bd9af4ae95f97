"""Merge regenerated content into an existing file without losing user notes.

A file is split at the first line that is exactly USER_NOTES_MARKER.
Everything above it is machine-owned and replaced on every sync; the
marker line and everything below it belong to the user and are carried
forward byte for byte. The merge is purely textual.
"""

import re

USER_NOTES_MARKER = "%% USER_NOTES_START %%"

_MARKER_LINE = re.compile(r"^" + re.escape(USER_NOTES_MARKER) + r"\r?$", re.MULTILINE)


def find_marker(text: str) -> int | None:
    """Return the offset of the first marker line in text, or None."""
    match = _MARKER_LINE.search(text)
    return match.start() if match else None


def merge(existing: str | None, new_content: str) -> str:
    """Combine new machine content with the user section of existing.

    - No existing file: new content, then an empty user section.
    - Existing file with a marker: new content, then everything from the
      first marker onward, unchanged.
    - Existing file without a marker: new content, a fresh marker, then the
      whole existing file, so nothing already there is lost.
    """
    machine = _defuse(new_content)
    if machine and not machine.endswith("\n"):
        machine += "\n"

    if existing is None:
        return f"{machine}{USER_NOTES_MARKER}\n"

    pos = find_marker(existing)
    if pos is None:
        return f"{machine}{USER_NOTES_MARKER}\n{existing}"
    return machine + existing[pos:]


def overwrite(new_content: str) -> str:
    """Content for a fully machine-owned file: no user section kept."""
    if new_content and not new_content.endswith("\n"):
        return new_content + "\n"
    return new_content


def _defuse(text: str) -> str:
    """Escape marker lines in generated text so they never act as a split point."""
    return _MARKER_LINE.sub(lambda m: "\\" + m.group(0), text)
