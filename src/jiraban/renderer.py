"""Render description documents to Markdown.

render() is total: unknown or malformed nodes come out as an HTML comment
instead of raising, and the same input always renders to the same bytes.
"""

from __future__ import annotations

import logging
import re
from typing import Any

from jiraban.adf import MAX_DEPTH, parse_document
from jiraban.models import (
    Blockquote,
    BulletList,
    CodeBlock,
    Emoji,
    HardBreak,
    Heading,
    InlineCard,
    ListItem,
    Mark,
    Mention,
    OrderedList,
    Panel,
    Paragraph,
    Rule,
    Text,
    Unknown,
)

logger = logging.getLogger(__name__)

INDENT = "  "

# Innermost first. Code sits innermost so its backticks don't swallow the others.
MARK_ORDER = ("code", "strike", "italic", "bold", "link")

_EDGE_SPACE = re.compile(r"^(\s*)(.*?)(\s*)$", re.DOTALL)
_BACKTICKS = re.compile(r"`+")
_LISTS = (BulletList, OrderedList)
_INLINE = (Text, Mention, Emoji, InlineCard, HardBreak)


def render(document: Any) -> str:
    """Render a Document (or a raw ADF payload) to a Markdown string.

    Blocks are separated by one blank line and the result ends with a
    newline. An empty document renders to "".
    """
    if document is None or isinstance(document, dict):
        document = parse_document(document)
    elif not isinstance(document, list):
        document = [Unknown("malformed doc", document)]
    text = _blocks(document, set())
    return text + "\n" if text else ""


def _blocks(nodes: list, seen: set[int]) -> str:
    rendered = (_block(node, seen) for node in nodes)
    return "\n\n".join(block for block in rendered if block)


def _block(node: Any, seen: set[int]) -> str:
    if id(node) in seen:
        return _unknown(Unknown("cycle"))
    if len(seen) >= MAX_DEPTH:
        return _unknown(Unknown("too deep"))
    seen.add(id(node))
    try:
        return _render_block(node, seen)
    finally:
        seen.discard(id(node))


def _render_block(node: Any, seen: set[int]) -> str:
    if isinstance(node, Paragraph):
        return _inline(node.children, seen)
    if isinstance(node, Heading):
        level = min(max(node.level, 1), 6) if isinstance(node.level, int) else 1
        title = _inline(node.children, seen).replace("\n", " ")
        return f"{'#' * level} {title}".rstrip()
    if isinstance(node, _LISTS):
        return "\n".join(_list_lines(node, 0, seen))
    if isinstance(node, ListItem):
        return "\n".join(_list_lines(BulletList([node]), 0, seen))
    if isinstance(node, CodeBlock):
        return _code_block(node)
    if isinstance(node, (Blockquote, Panel)):
        return _quote(_blocks(node.children, seen))
    if isinstance(node, Rule):
        return "---"
    if isinstance(node, _INLINE):
        return _inline([node], seen)
    return _unknown(node)


def _inline(nodes: list, seen: set[int]) -> str:
    return "".join(_inline_node(node, seen) for node in nodes)


def _inline_node(node: Any, seen: set[int]) -> str:
    if isinstance(node, Text):
        return _marked(node.text, node.marks)
    if isinstance(node, Mention):
        return f"**{node.label}**" if node.label else ""
    if isinstance(node, Emoji):
        return node.label
    if isinstance(node, InlineCard):
        return f"<{node.url}>"
    if isinstance(node, HardBreak):
        return "\n"
    if isinstance(node, Unknown):
        return _unknown(node)
    # A block where inline content was expected: flatten it in place.
    return _block(node, seen)


def _marked(text: str, marks: tuple[Mark, ...]) -> str:
    """Wrap text in Markdown delimiters for its marks, in a fixed order."""
    if not isinstance(text, str):
        return ""
    lead, core, trail = _EDGE_SPACE.match(text).groups()
    if not core:
        return text

    by_kind = {mark.kind: mark for mark in marks}
    for kind in MARK_ORDER:
        mark = by_kind.get(kind)
        if mark is None:
            continue
        if kind == "code":
            core = f"`` {core} ``" if "`" in core else f"`{core}`"
        elif kind == "strike":
            core = f"~~{core}~~"
        elif kind == "italic":
            core = f"_{core}_"
        elif kind == "bold":
            core = f"**{core}**"
        elif kind == "link":
            core = f"[{core}]({mark.href})"
    return f"{lead}{core}{trail}"


def _list_lines(lst: BulletList | OrderedList, depth: int, seen: set[int]) -> list[str]:
    """Render a list as lines, nesting sublists one indent level deeper."""
    lines: list[str] = []
    indent = INDENT * depth
    ordered = isinstance(lst, OrderedList)
    number = 0
    for item in lst.children:
        if isinstance(item, _LISTS):
            lines.extend(_nested(item, depth + 1, seen))
            continue
        if isinstance(item, Unknown):
            lines.append(indent + _unknown(item))
            continue
        if not isinstance(item, ListItem):
            item = ListItem([item])
        number += 1
        bullet = f"{number}. " if ordered else "- "
        lines.extend(_item_lines(item, indent, bullet, depth, seen))
    return lines


def _nested(lst: Any, depth: int, seen: set[int]) -> list[str]:
    if id(lst) in seen:
        return [INDENT * depth + _unknown(Unknown("cycle"))]
    if len(seen) >= MAX_DEPTH:
        return [INDENT * depth + _unknown(Unknown("too deep"))]
    seen.add(id(lst))
    try:
        return _list_lines(lst, depth, seen)
    finally:
        seen.discard(id(lst))


def _item_lines(item: ListItem, indent: str, bullet: str, depth: int, seen: set[int]) -> list[str]:
    # Inline runs and paragraphs share the bullet line; sublists follow it.
    segments: list[str] = []
    nested: list[str] = []
    buffer: list = []
    for child in item.children:
        if isinstance(child, (*_INLINE, Unknown)):
            buffer.append(child)
            continue
        if buffer:
            segments.append(_inline(buffer, seen))
            buffer = []
        if isinstance(child, _LISTS):
            nested.extend(_nested(child, depth + 1, seen))
        else:
            segments.append(_block(child, seen))
    if buffer:
        segments.append(_inline(buffer, seen))

    body = "\n".join(segment for segment in segments if segment).split("\n")
    continuation = indent + " " * len(bullet)
    lines = [indent + bullet + body[0] if body[0] else (indent + bullet).rstrip()]
    lines.extend(continuation + line if line else "" for line in body[1:])
    return lines + nested


def _code_block(node: CodeBlock) -> str:
    """Fence code verbatim, with a fence longer than any backtick run inside."""
    code = node.code if isinstance(node.code, str) else ""
    longest = max((len(run) for run in _BACKTICKS.findall(code)), default=0)
    fence = "`" * max(3, longest + 1)
    language = node.language.split()[0].replace("`", "") if node.language and node.language.strip() else ""
    if code and not code.endswith("\n"):
        code += "\n"
    return f"{fence}{language}\n{code}{fence}"


def _quote(text: str) -> str:
    return "\n".join(f"> {line}" if line else ">" for line in text.split("\n"))


def _unknown(node: Any) -> str:
    kind = node.kind if isinstance(node, Unknown) else type(node).__name__
    kind = re.sub(r"[^\w .:-]", "", str(kind)).replace("--", "-").strip() or "node"
    logger.debug("skipping unsupported node: %s", kind)
    return f"<!-- unsupported: {kind} -->"
