#!/usr/bin/env python3
"""Render the merge request description markdown.

Ticket keys come from the branch name, or from commit titles when the branch
has none. Issue payloads are the Jira REST `issue` responses, keyed by ticket;
a missing or null entry renders the "Error fetching details" block.
"""

from __future__ import annotations

import argparse
import json
import os
import sys
from pathlib import Path
from typing import Any

from mrglue.description import issue_details_markdown, mr_description
from mrglue.tickets import extract_ticket_keys


def warn(message: str) -> None:
    print(f"::warning::{message}", file=sys.stderr)


def fail(message: str) -> int:
    print(f"render-mr-description: {message}", file=sys.stderr)
    return 1


def parse_args(argv: list[str]) -> argparse.Namespace:
    p = argparse.ArgumentParser(prog="render-mr-description.py", description=__doc__.splitlines()[0])
    p.add_argument("--branch", required=True, help="Source branch name")
    p.add_argument("--summary", required=True, help="Path to the model's diff summary text")
    p.add_argument("--issues-json", default="", help="Path to a JSON object of ticket key -> Jira issue")
    p.add_argument("--commits-json", default="", help="Path to the branch commits JSON array")
    p.add_argument(
        "--jira-base-url",
        default=os.environ.get("JIRA_BASE_URL", ""),
        help="Jira site URL for browse links (default: $JIRA_BASE_URL)",
    )
    p.add_argument("--output", default="", help="Write markdown here instead of stdout")
    return p.parse_args(argv)


def _read_json(path: str) -> Any:
    return json.loads(Path(path).read_text(encoding="utf-8"))


def commit_titles(commits: Any) -> list[str]:
    if not isinstance(commits, list):
        raise ValueError("commits JSON must be an array")
    titles: list[str] = []
    for commit in commits:
        if isinstance(commit, dict):
            titles.append(str(commit.get("title") or ""))
        elif isinstance(commit, str):
            titles.append(commit)
    return titles


def main(argv: list[str] | None = None) -> int:
    """Main."""
    args = parse_args(sys.argv[1:] if argv is None else argv)

    try:
        summary = Path(args.summary).read_text(encoding="utf-8")
        issues = _read_json(args.issues_json) if args.issues_json else {}
        titles = commit_titles(_read_json(args.commits_json)) if args.commits_json else []
    except (OSError, ValueError) as exc:
        return fail(f"failed to read inputs: {exc}")
    if not isinstance(issues, dict):
        return fail("issues JSON must be an object")

    keys = extract_ticket_keys(args.branch, titles)
    if not keys:
        warn("no Jira tickets found in branch or commits")

    details: list[str] = []
    for key in keys:
        issue = issues.get(key)
        if issue is None:
            warn(f"{key}: no issue details")
        details.append(issue_details_markdown(key, issue, args.jira_base_url))

    rendered = mr_description(args.branch, details, summary)
    if not args.output:
        sys.stdout.write(rendered)
        return 0

    try:
        Path(args.output).write_text(rendered, encoding="utf-8")
    except OSError as exc:
        return fail(f"failed to write {args.output}: {exc}")
    print(len(keys))
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
