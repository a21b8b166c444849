"""Flatten ADF trees (e.g. a Jira issue description) back to plain text."""

from __future__ import annotations

from typing import Any, Mapping

from .nodes import Doc


def adf_to_text(node: Mapping[str, Any] | Doc | None) -> str:
    """Concatenate text nodes depth-first.

    `hardBreak` becomes a newline and every paragraph is followed by a blank
    line. Unknown node types contribute only their children's text.
    """
    if node is None:
        return ""
    if isinstance(node, Doc):
        node = node.to_adf()

    parts: list[str] = []

    def walk(current: Any) -> None:
        if not isinstance(current, Mapping):
            return
        node_type = current.get("type")
        if node_type == "text":
            parts.append(str(current.get("text") or ""))
        elif node_type == "hardBreak":
            parts.append("\n")
        content = current.get("content")
        if isinstance(content, list):
            for child in content:
                walk(child)
        if node_type == "paragraph":
            parts.append("\n\n")

    walk(node)
    return "".join(parts).strip()
