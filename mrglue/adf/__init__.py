"""Markup -> Atlassian Document Format compiler for Jira comments."""

from .compiler import DocumentCompiler, compile_document
from .nodes import BulletList, CodeBlock, Doc, Heading, ListItem, Paragraph, Text, comment_payload
from .plaintext import adf_to_text

__all__ = [
    "BulletList",
    "CodeBlock",
    "Doc",
    "DocumentCompiler",
    "Heading",
    "ListItem",
    "Paragraph",
    "Text",
    "adf_to_text",
    "comment_payload",
    "compile_document",
]
