"""Typed Atlassian Document Format (ADF) nodes.

Only the subset Jira comments need: doc, heading, paragraph, bulletList,
listItem, codeBlock and text (optionally with a `strong` mark). Type names
and attribute keys match Jira's REST API v3 exactly.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Union

ADF_VERSION = 1


@dataclass(frozen=True)
class Text:
    """Inline text run."""
    value: str
    bold: bool = False

    def to_adf(self) -> dict[str, Any]:
        node: dict[str, Any] = {"type": "text", "text": self.value}
        if self.bold:
            node["marks"] = [{"type": "strong"}]
        return node


@dataclass(frozen=True)
class Heading:
    level: int
    text: str

    def to_adf(self) -> dict[str, Any]:
        return {
            "type": "heading",
            "attrs": {"level": self.level},
            "content": _text_content(self.text),
        }


@dataclass(frozen=True)
class Paragraph:
    inlines: tuple[Text, ...] = ()

    @property
    def text(self) -> str:
        return "".join(t.value for t in self.inlines)

    def to_adf(self) -> dict[str, Any]:
        # ADF rejects empty text nodes.
        return {
            "type": "paragraph",
            "content": [t.to_adf() for t in self.inlines if t.value],
        }


@dataclass(frozen=True)
class CodeBlock:
    language: str
    text: str

    def to_adf(self) -> dict[str, Any]:
        return {
            "type": "codeBlock",
            "attrs": {"language": self.language},
            "content": _text_content(self.text),
        }


@dataclass(frozen=True)
class ListItem:
    children: tuple["BlockNode", ...]

    @property
    def text(self) -> str:
        """Text of the item's leading paragraph."""
        for child in self.children:
            if isinstance(child, Paragraph):
                return child.text
        return ""

    def to_adf(self) -> dict[str, Any]:
        return {"type": "listItem", "content": [c.to_adf() for c in self.children]}


@dataclass(frozen=True)
class BulletList:
    items: tuple[ListItem, ...]

    def to_adf(self) -> dict[str, Any]:
        return {"type": "bulletList", "content": [i.to_adf() for i in self.items]}


BlockNode = Union[Heading, Paragraph, BulletList, CodeBlock]


@dataclass(frozen=True)
class Doc:
    children: tuple[BlockNode, ...] = ()

    def to_adf(self) -> dict[str, Any]:
        return {
            "type": "doc",
            "version": ADF_VERSION,
            "content": [c.to_adf() for c in self.children],
        }


def _text_content(value: str) -> list[dict[str, Any]]:
    return [Text(value).to_adf()] if value else []


def comment_payload(doc: Doc) -> dict[str, Any]:
    """Request body for Jira's `POST /rest/api/3/issue/{key}/comment`."""
    return {"body": doc.to_adf()}
