"""Text transforms behind the GitLab MR / Jira automation scripts."""

from .adf import Doc, comment_payload, compile_document
from .config import CompilerOptions, ConfigError, DiffOptions, ToolConfig, load_config
from .description import issue_details_markdown, jira_details_markdown, mr_description
from .diffannotate import annotate, annotate_diff
from .tickets import extract_ticket_keys

__all__ = [
    "CompilerOptions",
    "ConfigError",
    "DiffOptions",
    "Doc",
    "ToolConfig",
    "annotate",
    "annotate_diff",
    "comment_payload",
    "compile_document",
    "extract_ticket_keys",
    "issue_details_markdown",
    "jira_details_markdown",
    "load_config",
    "mr_description",
]
