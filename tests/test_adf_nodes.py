"""Tests for mrglue.adf.nodes — ADF JSON shapes Jira's REST API expects."""

import dataclasses
import json

import pytest

from mrglue.adf import comment_payload, compile_document
from mrglue.adf.nodes import BulletList, CodeBlock, Doc, Heading, ListItem, Paragraph, Text
from mrglue.config import CompilerOptions


def test_text_marks() -> None:
    assert Text("a").to_adf() == {"type": "text", "text": "a"}
    assert Text("a", bold=True).to_adf() == {"type": "text", "text": "a", "marks": [{"type": "strong"}]}


def test_heading_shape() -> None:
    assert Heading(level=2, text="Plan").to_adf() == {
        "type": "heading",
        "attrs": {"level": 2},
        "content": [{"type": "text", "text": "Plan"}],
    }


def test_code_block_shape() -> None:
    assert CodeBlock(language="js", text="x;\n").to_adf() == {
        "type": "codeBlock",
        "attrs": {"language": "js"},
        "content": [{"type": "text", "text": "x;\n"}],
    }


def test_empty_nodes_have_no_empty_text() -> None:
    assert Paragraph().to_adf() == {"type": "paragraph", "content": []}
    assert CodeBlock(language="text", text="").to_adf()["content"] == []
    assert Paragraph((Text(""),)).to_adf() == {"type": "paragraph", "content": []}


def test_paragraph_text_joins_runs() -> None:
    assert Paragraph((Text("a ", bold=True), Text("b"))).text == "a b"
    assert Paragraph().text == ""


def test_bullet_list_shape() -> None:
    node = BulletList((ListItem((Paragraph((Text("one"),)),)),))
    assert node.to_adf() == {
        "type": "bulletList",
        "content": [
            {
                "type": "listItem",
                "content": [{"type": "paragraph", "content": [{"type": "text", "text": "one"}]}],
            }
        ],
    }


def test_list_item_text_without_paragraph() -> None:
    assert ListItem((CodeBlock("text", "x"),)).text == ""


def test_doc_shape_and_comment_payload() -> None:
    doc = Doc((Paragraph((Text("hi"),)),))
    assert doc.to_adf() == {
        "type": "doc",
        "version": 1,
        "content": [{"type": "paragraph", "content": [{"type": "text", "text": "hi"}]}],
    }
    assert comment_payload(doc) == {"body": doc.to_adf()}


def test_compiled_document_serializes_to_json() -> None:
    text = "## QA\n**Checks**\n* login works\n** with SSO\n```kotlin\nfun a() = 1\n```\nDone"
    payload = compile_document(text).to_adf()

    assert json.loads(json.dumps(payload)) == payload
    assert [n["type"] for n in payload["content"]] == [
        "heading",
        "paragraph",
        "bulletList",
        "codeBlock",
        "paragraph",
    ]
    nested = payload["content"][2]["content"][1]["content"][0]["content"][0]["text"]
    assert nested == "  with SSO"


def test_nested_list_serialization() -> None:
    payload = compile_document("* a\n** b", CompilerOptions(nested_lists="nest")).to_adf()
    item = payload["content"][0]["content"][0]
    assert [c["type"] for c in item["content"]] == ["paragraph", "bulletList"]


def test_nodes_are_immutable() -> None:
    node = Heading(level=1, text="x")
    with pytest.raises(dataclasses.FrozenInstanceError):
        node.level = 2  # type: ignore[misc]
