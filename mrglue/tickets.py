"""Jira issue keys referenced by a branch."""

from __future__ import annotations

import re
from typing import Iterable

_ISSUE_KEY_RE = re.compile(r"[A-Z]+-\d+")


def _unique_keys(text: str, seen: dict[str, None]) -> None:
    for key in _ISSUE_KEY_RE.findall(text or ""):
        seen.setdefault(key, None)


def extract_ticket_keys(branch: str, commit_titles: Iterable[str] = ()) -> list[str]:
    """Issue keys from the branch name, falling back to commit titles.

    Order of first appearance is kept; duplicates are dropped.
    """
    keys: dict[str, None] = {}
    _unique_keys(branch, keys)
    if not keys:
        for title in commit_titles:
            _unique_keys(str(title or ""), keys)
    return list(keys)
