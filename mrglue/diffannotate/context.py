"""Prompt-ready text built from a merge request's per-file diffs.

`changes` is the list returned by GitLab's `merge_requests/:iid/diffs`
endpoint; only `new_path` and `diff` are read.
"""

from __future__ import annotations

from typing import Any, Iterable, Mapping

from .annotator import AnnotationWarning, annotate_diff


def _change_fields(change: Mapping[str, Any]) -> tuple[str, str]:
    path = str(change.get("new_path") or change.get("old_path") or "").strip()
    diff = change.get("diff")
    return path, diff if isinstance(diff, str) else ""


def _annotated_block(new_path: str, diff: str) -> tuple[str, list[AnnotationWarning]]:
    annotated = annotate_diff(diff)
    text = annotated.text
    if text and not text.endswith("\n"):
        text += "\n"
    return f"File: {new_path}\n{text}", annotated.warnings


def file_block(new_path: str, diff: str) -> str:
    """File block."""
    return _annotated_block(new_path, diff)[0]


def build_review_context(
    changes: Iterable[Mapping[str, Any]],
) -> tuple[str, list[tuple[str, AnnotationWarning]]]:
    """Annotate every changed file and join the blocks with a blank line.

    Returns the context text and (path, warning) pairs for diffs with
    malformed hunk headers.
    """
    blocks: list[str] = []
    warnings: list[tuple[str, AnnotationWarning]] = []
    for change in changes:
        if not isinstance(change, Mapping):
            continue
        path, diff = _change_fields(change)
        block, block_warnings = _annotated_block(path, diff)
        blocks.append(block)
        warnings.extend((path, w) for w in block_warnings)
    return "\n\n".join(blocks), warnings


def diff_summary_markdown(changes: Iterable[Mapping[str, Any]]) -> str:
    """Raw diffs as fenced markdown, one block per distinct file path."""
    seen: set[str] = set()
    parts: list[str] = []
    for change in changes:
        if not isinstance(change, Mapping):
            continue
        path, diff = _change_fields(change)
        if path in seen:
            continue
        seen.add(path)
        parts.append(f"**{path}**\n```diff\n{diff}\n```\n")
    return "".join(parts)


def changed_paths(changes: Iterable[Mapping[str, Any]]) -> dict[str, str]:
    """Map new_path -> diff, first occurrence wins."""
    paths: dict[str, str] = {}
    for change in changes:
        if not isinstance(change, Mapping):
            continue
        path, diff = _change_fields(change)
        if path and path not in paths:
            paths[path] = diff
    return paths
