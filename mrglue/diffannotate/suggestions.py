"""Model code-suggestion parsing and anchoring.

The review prompt asks the model for a bare JSON array:

    [{"file": "<path>", "line": <new-file line>, "suggestion": "<code>", "note": "<why>"}]

Models routinely wrap that in a ```json fence, invent file paths, or point at
lines outside the diff. Everything here degrades to "fewer suggestions"
instead of raising, so a bad response never blocks posting.
"""

from __future__ import annotations

import json
import re
from dataclasses import dataclass
from typing import Any, Iterable, Mapping

from .annotator import build_newline_map
from .context import changed_paths

_JSON_BLOCK_RE = re.compile(r"```json\s*(.*?)\s*```", re.DOTALL)


@dataclass(frozen=True)
class Suggestion:
    """One replacement suggestion anchored on a new-file line."""
    file: str
    line: int
    suggestion: str
    note: str | None = None

    def to_dict(self) -> dict[str, Any]:
        out: dict[str, Any] = {"file": self.file, "line": self.line, "suggestion": self.suggestion}
        if self.note:
            out["note"] = self.note
        return out


def extract_json_block(text: str) -> str | None:
    """Body of the last ```json fenced block anywhere in the text."""
    matches = _JSON_BLOCK_RE.findall(text)
    if not matches:
        return None
    return matches[-1]


def _unwrap_fenced_code_block(text: str) -> str:
    stripped = text.strip()
    if not stripped.startswith("```"):
        return stripped
    lines = stripped.splitlines()
    if len(lines) < 2:
        return stripped
    if lines[-1].strip() != "```":
        return "\n".join(lines[1:]).strip()
    return "\n".join(lines[1:-1]).strip()


def _as_positive_int(value: Any) -> int | None:
    if isinstance(value, bool):
        return None
    if isinstance(value, float) and not value.is_integer():
        return None
    try:
        number = int(value)
    except (TypeError, ValueError):
        return None
    return number if number > 0 else None


def _coerce_suggestion(raw: Any) -> Suggestion | None:
    if not isinstance(raw, Mapping):
        return None
    path = str(raw.get("file") or "").strip()
    line = _as_positive_int(raw.get("line"))
    code = raw.get("suggestion")
    if not path or line is None or not isinstance(code, str):
        return None
    note = raw.get("note")
    note = note.strip() if isinstance(note, str) and note.strip() else None
    return Suggestion(file=path, line=line, suggestion=code, note=note)


def parse_suggestions(text: str) -> tuple[list[Suggestion], list[str]]:
    """Decode a model response into suggestions.

    Returns (suggestions, warnings). Entries missing a file, a positive line
    or a string suggestion are dropped with a warning.
    """
    payload = extract_json_block(text or "")
    if payload is None:
        payload = _unwrap_fenced_code_block(text or "")
    payload = payload.strip()
    if not payload:
        return [], ["empty suggestions response"]
    try:
        data = json.loads(payload)
    except json.JSONDecodeError as exc:
        return [], [f"suggestions response is not valid JSON: {exc}"]

    if isinstance(data, Mapping):
        data = data.get("suggestions", [data])
    if not isinstance(data, list):
        return [], ["suggestions response must be a JSON array"]

    suggestions: list[Suggestion] = []
    warnings: list[str] = []
    for idx, raw in enumerate(data):
        parsed = _coerce_suggestion(raw)
        if parsed is None:
            warnings.append(f"suggestions[{idx}]: missing file, line or suggestion")
            continue
        suggestions.append(parsed)
    return suggestions, warnings


def filter_suggestions(
    suggestions: Iterable[Suggestion],
    changes: Iterable[Mapping[str, Any]],
) -> tuple[list[Suggestion], list[str]]:
    """Keep suggestions that land on a new-file line of a changed file."""
    diffs = changed_paths(changes)
    line_maps: dict[str, dict[int, str]] = {}
    kept: list[Suggestion] = []
    warnings: list[str] = []

    for s in suggestions:
        if s.file not in diffs:
            warnings.append(f"{s.file}: not part of the change set")
            continue
        if s.file not in line_maps:
            line_maps[s.file] = build_newline_map(diffs[s.file])
        if s.line not in line_maps[s.file]:
            warnings.append(f"{s.file}:{s.line}: line is not in the diff")
            continue
        kept.append(s)
    return kept, warnings


def suggestion_body(suggestion: Suggestion) -> str:
    """GitLab discussion body for an inline suggestion."""
    body = f"```suggestion\n{suggestion.suggestion}\n```"
    if suggestion.note:
        body += f"\n**Note:** {suggestion.note}"
    return body
