"""Data models for synced issues and their description documents."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Union


@dataclass(frozen=True)
class Mark:
    """Inline formatting on a text run: bold, italic, code, strike or link."""

    kind: str
    href: str = ""


@dataclass
class Text:
    text: str
    marks: tuple[Mark, ...] = ()


@dataclass
class Mention:
    label: str


@dataclass
class Emoji:
    label: str


@dataclass
class InlineCard:
    url: str


@dataclass
class HardBreak:
    pass


@dataclass
class Rule:
    pass


@dataclass
class Paragraph:
    children: list[Node] = field(default_factory=list)


@dataclass
class Heading:
    level: int = 1
    children: list[Node] = field(default_factory=list)


@dataclass
class ListItem:
    children: list[Node] = field(default_factory=list)


@dataclass
class BulletList:
    children: list[Node] = field(default_factory=list)


@dataclass
class OrderedList:
    children: list[Node] = field(default_factory=list)


@dataclass
class CodeBlock:
    language: str = ""
    code: str = ""


@dataclass
class Blockquote:
    children: list[Node] = field(default_factory=list)


@dataclass
class Panel:
    kind: str = "info"
    children: list[Node] = field(default_factory=list)


@dataclass
class Unknown:
    """Catch-all for node kinds we don't understand or can't parse.

    kind is the remote type name when there was one, otherwise a short
    description of what was wrong with the node.
    """

    kind: str
    raw: Any = None


Node = Union[
    Text,
    Mention,
    Emoji,
    InlineCard,
    HardBreak,
    Rule,
    Paragraph,
    Heading,
    ListItem,
    BulletList,
    OrderedList,
    CodeBlock,
    Blockquote,
    Panel,
    Unknown,
]

Document = list[Node]


@dataclass
class Issue:
    """One tracked work item as fetched from the tracker."""

    key: str
    summary: str = ""
    status: str = ""
    priority: str | None = None
    issue_type: str | None = None
    description: Document = field(default_factory=list)
    link: str = ""
    created: str | None = None
    updated: str | None = None
