"""Unified diff annotation and suggestion anchoring for MR review prompts."""

from .annotator import (
    AnnotatedDiff,
    AnnotationWarning,
    HunkHeader,
    annotate,
    annotate_diff,
    build_newline_map,
    parse_hunk_header,
)
from .context import build_review_context, changed_paths, diff_summary_markdown, file_block
from .suggestions import (
    Suggestion,
    extract_json_block,
    filter_suggestions,
    parse_suggestions,
    suggestion_body,
)

__all__ = [
    "AnnotatedDiff",
    "AnnotationWarning",
    "HunkHeader",
    "Suggestion",
    "annotate",
    "annotate_diff",
    "build_newline_map",
    "build_review_context",
    "changed_paths",
    "diff_summary_markdown",
    "extract_json_block",
    "file_block",
    "filter_suggestions",
    "parse_hunk_header",
    "parse_suggestions",
    "suggestion_body",
]
