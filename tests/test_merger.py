"""Tests for merging regenerated content with user notes."""

from jiraban.merger import USER_NOTES_MARKER, find_marker, merge, overwrite

MARKER = USER_NOTES_MARKER


def test_merge_first_sync():
    assert merge(None, "FRONTMATTER\nBODY\n") == f"FRONTMATTER\nBODY\n{MARKER}\n"


def test_merge_adds_missing_newline():
    assert merge(None, "BODY") == f"BODY\n{MARKER}\n"


def test_merge_empty_content():
    assert merge(None, "") == f"{MARKER}\n"


def test_merge_preserves_user_section():
    existing = f"old stuff\n{MARKER}\nmy notes\n- [ ] todo\n"
    assert merge(existing, "new\n") == f"new\n{MARKER}\nmy notes\n- [ ] todo\n"


def test_merge_suffix_is_verbatim():
    existing = f"old\n{MARKER}\n  odd  spacing\r\nno trailing newline"
    pos = existing.index(MARKER)
    result = merge(existing, "anything at all\n")
    assert result.endswith(existing[pos:])
    assert result == "anything at all\n" + existing[pos:]


def test_merge_splits_at_first_marker():
    existing = f"old\n{MARKER}\nnotes\n{MARKER}\nmore\n"
    assert merge(existing, "new\n") == f"new\n{MARKER}\nnotes\n{MARKER}\nmore\n"


def test_merge_without_marker_keeps_everything():
    existing = "# Hand written\n\nprecious notes\n"
    result = merge(existing, "new\n")
    assert result == f"new\n{MARKER}\n{existing}"
    assert result.endswith(existing)


def test_merge_marker_must_be_whole_line():
    existing = f"see {MARKER} inline\n"
    assert merge(existing, "new\n") == f"new\n{MARKER}\n{existing}"


def test_merge_marker_with_crlf():
    existing = f"old\r\n{MARKER}\r\nnotes\r\n"
    assert merge(existing, "new\n") == f"new\n{MARKER}\r\nnotes\r\n"


def test_merge_is_idempotent():
    content = "---\nstatus: Done\n---\n\nbody\n"
    once = merge(None, content)
    assert merge(once, content) == once
    with_notes = once + "notes\n"
    assert merge(with_notes, content) == with_notes


def test_generated_marker_is_escaped():
    result = merge(None, f"text\n{MARKER}\n")
    assert result == f"text\n\\{MARKER}\n{MARKER}\n"
    assert find_marker(result) == result.rindex(MARKER)


def test_escaped_marker_survives_resync():
    content = f"text\n{MARKER}\n"
    once = merge(None, content) + "notes\n"
    assert merge(once, content) == once


def test_find_marker():
    assert find_marker("nothing here") is None
    assert find_marker(f"a\n{MARKER}\n") == 2
    assert find_marker(MARKER) == 0


def test_overwrite():
    assert overwrite("board") == "board\n"
    assert overwrite("board\n") == "board\n"
    assert overwrite("") == ""
