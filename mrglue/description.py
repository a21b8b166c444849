"""Markdown for the GitLab merge request description.

Layout:

    ## Changes in branch <branch>

    ### Jira: <KEY>

    **Title:** <summary>

    **Description:** <description as plain text>

    **URL:** <base>/browse/<KEY>

    ### Diff Summary (AI Generated)
    <model summary>
"""

from __future__ import annotations

from typing import Any, Iterable, Mapping

from .adf import adf_to_text


def jira_details_markdown(key: str, summary: str, description_adf: Any, base_url: str) -> str:
    """One `### Jira:` block for a fetched issue."""
    description = adf_to_text(description_adf if isinstance(description_adf, Mapping) else None)
    url = f"{base_url.rstrip('/')}/browse/{key}"
    return (
        f"\n### Jira: {key}\n\n"
        f"**Title:** {summary}\n\n"
        f"**Description:** {description}\n\n"
        f"**URL:** {url}\n\n"
    )


def jira_error_markdown(key: str) -> str:
    return f"\n### Jira: {key} (Error fetching details)\n\n"


def issue_details_markdown(key: str, issue: Mapping[str, Any] | None, base_url: str) -> str:
    """Details block from a Jira REST issue payload; None means the fetch failed."""
    if not isinstance(issue, Mapping):
        return jira_error_markdown(key)
    fields = issue.get("fields")
    if not isinstance(fields, Mapping):
        return jira_error_markdown(key)
    summary = str(fields.get("summary") or "")
    return jira_details_markdown(key, summary, fields.get("description"), base_url)


def mr_description(branch: str, details: Iterable[str], summary: str) -> str:
    """Assemble the full description from the per-issue blocks and the diff summary."""
    description = f"## Changes in branch {branch}\n"
    description += "".join(details)
    description += f"\n### Diff Summary (AI Generated)\n{summary.strip()}\n"
    return description
