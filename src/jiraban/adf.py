"""Parse Atlassian Document Format payloads into document nodes.

Parsing is total: anything we can't make sense of becomes an Unknown node
rather than an exception, so one odd description never aborts a sync.
"""

from __future__ import annotations

from typing import Any

from jiraban.models import (
    Blockquote,
    BulletList,
    CodeBlock,
    Document,
    Emoji,
    HardBreak,
    Heading,
    InlineCard,
    ListItem,
    Mark,
    Mention,
    Node,
    OrderedList,
    Panel,
    Paragraph,
    Rule,
    Text,
    Unknown,
)

# Deeper subtrees become Unknown so parsing and rendering stay well inside
# the interpreter's recursion limit.
MAX_DEPTH = 100

MARK_KINDS = {
    "strong": "bold",
    "em": "italic",
    "code": "code",
    "strike": "strike",
    "link": "link",
}

_CONTAINERS = {
    "paragraph": Paragraph,
    "listItem": ListItem,
    "bulletList": BulletList,
    "orderedList": OrderedList,
    "blockquote": Blockquote,
}


def parse_document(raw: Any) -> Document:
    """Parse a top-level ADF doc (or None) into a list of block nodes."""
    if raw is None:
        return []
    if isinstance(raw, list):
        content = raw
    elif isinstance(raw, dict):
        content = raw.get("content")
        if content is None:
            return []
        if not isinstance(content, list):
            return [Unknown("malformed doc", raw)]
    else:
        return [Unknown("malformed doc", raw)]
    return _parse_children(content, set())


def parse_node(raw: Any) -> Node:
    """Parse a single ADF node."""
    return _parse(raw, set())


def _parse_children(content: list, seen: set[int]) -> list[Node]:
    return [_parse(child, seen) for child in content]


def _parse(raw: Any, seen: set[int]) -> Node:
    if not isinstance(raw, dict):
        return Unknown("malformed node", raw)
    kind = raw.get("type")
    if not isinstance(kind, str):
        return Unknown("untyped node", raw)
    if id(raw) in seen:
        return Unknown(kind, None)
    if len(seen) >= MAX_DEPTH:
        return Unknown("too deep", None)

    seen.add(id(raw))
    try:
        return _build(kind, raw, seen)
    finally:
        seen.discard(id(raw))


def _build(kind: str, raw: dict, seen: set[int]) -> Node:
    attrs = raw.get("attrs")
    if not isinstance(attrs, dict):
        attrs = {}

    if kind == "text":
        text = raw.get("text")
        if not isinstance(text, str):
            return Unknown(kind, raw)
        return Text(text, _parse_marks(raw.get("marks")))
    if kind == "hardBreak":
        return HardBreak()
    if kind == "rule":
        return Rule()
    if kind == "mention":
        label = attrs.get("text") or attrs.get("id")
        if not isinstance(label, str):
            return Unknown(kind, raw)
        return Mention(label)
    if kind == "emoji":
        label = attrs.get("text") or attrs.get("shortName")
        if not isinstance(label, str):
            return Unknown(kind, raw)
        return Emoji(label)
    if kind == "inlineCard":
        url = attrs.get("url")
        if not isinstance(url, str):
            return Unknown(kind, raw)
        return InlineCard(url)

    content = raw.get("content", [])
    if content is None:
        content = []
    if not isinstance(content, list):
        return Unknown(kind, raw)

    if kind == "codeBlock":
        language = attrs.get("language")
        code = "".join(c["text"] for c in content if isinstance(c, dict) and isinstance(c.get("text"), str))
        return CodeBlock(language if isinstance(language, str) else "", code)

    children = _parse_children(content, seen)
    if kind == "heading":
        return Heading(_heading_level(attrs.get("level")), children)
    if kind == "panel":
        panel_type = attrs.get("panelType")
        return Panel(panel_type if isinstance(panel_type, str) else "info", children)
    node_cls = _CONTAINERS.get(kind)
    if node_cls is None:
        return Unknown(kind, raw)
    return node_cls(children)


def _heading_level(level: Any) -> int:
    if isinstance(level, bool) or not isinstance(level, int):
        return 1
    return min(max(level, 1), 6)


def _parse_marks(raw: Any) -> tuple[Mark, ...]:
    """Convert ADF marks, dropping the ones Markdown can't express."""
    if not isinstance(raw, list):
        return ()
    marks = []
    for item in raw:
        if not isinstance(item, dict) or not isinstance(item.get("type"), str):
            continue
        kind = MARK_KINDS.get(item["type"])
        if kind is None:
            continue
        if kind == "link":
            attrs = item.get("attrs")
            href = attrs.get("href") if isinstance(attrs, dict) else None
            if not isinstance(href, str) or not href:
                continue
            mark = Mark(kind, href)
        else:
            mark = Mark(kind)
        if mark not in marks:
            marks.append(mark)
    return tuple(marks)
