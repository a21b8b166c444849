"""Line-number annotation for unified diff hunks.

GitLab's MR diffs endpoint returns each file's `diff` as bare hunks (no
`---`/`+++` file headers). Models can't anchor suggestions on that text, so
every added, removed and context line is rewritten as
`<sign><line> <content>`:

- `+N`: added line, N is the new-file line number.
- `-N`: removed line, N is the old-file line number.
- ` N`: context line, N is the new-file line number (suggestions are anchored
  on the new file).

Hunk headers are passed through unchanged.
"""

from __future__ import annotations

import re
from dataclasses import dataclass, field

_HUNK_RE = re.compile(
    r"^@@ -(?P<old_start>\d+)(?:,(?P<old_count>\d+))? \+(?P<new_start>\d+)(?:,(?P<new_count>\d+))? @@"
)

ADDED = "added"
REMOVED = "removed"
CONTEXT = "context"


@dataclass(frozen=True)
class HunkHeader:
    """Starting line numbers parsed from a `@@ -a,m +b,n @@` line."""
    old_start: int
    new_start: int


@dataclass(frozen=True)
class AnnotationWarning:
    """A diff line the annotator passed through without re-basing counters."""
    line_no: int
    line: str
    message: str


@dataclass(frozen=True)
class AnnotatedDiff:
    text: str
    warnings: list[AnnotationWarning] = field(default_factory=list)


def parse_hunk_header(line: str) -> HunkHeader | None:
    """Parse a hunk header, or return None when the line isn't a valid one."""
    m = _HUNK_RE.match(line or "")
    if not m:
        return None
    return HunkHeader(old_start=int(m.group("old_start")), new_start=int(m.group("new_start")))


def classify_line(line: str) -> tuple[str, str]:
    """Return (kind, content) for a diff body line."""
    if line.startswith("+"):
        return ADDED, line[1:]
    if line.startswith("-"):
        return REMOVED, line[1:]
    if line.startswith(" "):
        return CONTEXT, line[1:]
    # Some tools strip the leading space off blank context lines.
    return CONTEXT, line


def _split_lines(diff: str) -> tuple[list[str], bool]:
    text = diff or ""
    terminated = text.endswith("\n")
    if terminated:
        text = text[:-1]
    if not text and not terminated:
        return [], False
    return text.split("\n"), terminated


def annotate_diff(diff: str) -> AnnotatedDiff:
    """Annotate one file's diff and collect warnings for suspicious lines.

    Malformed `@@` headers are emitted unchanged and leave both counters at
    their previous values; each one produces a warning, as does the first
    content line seen before any hunk header.
    """
    lines, terminated = _split_lines(diff)
    out: list[str] = []
    warnings: list[AnnotationWarning] = []

    old_line = 0
    new_line = 0
    seen_header = False

    for line_no, raw in enumerate(lines, start=1):
        if raw.startswith("@@"):
            header = parse_hunk_header(raw)
            if header is None:
                warnings.append(
                    AnnotationWarning(line_no, raw, "malformed hunk header; line numbers not re-based")
                )
            else:
                old_line = header.old_start - 1
                new_line = header.new_start - 1
            seen_header = True
            out.append(raw)
            continue

        if raw.startswith("\\"):
            # "\ No newline at end of file" marker line.
            out.append(raw)
            continue

        if not seen_header:
            warnings.append(AnnotationWarning(line_no, raw, "diff content before any hunk header"))
            seen_header = True

        kind, content = classify_line(raw)
        if kind == ADDED:
            new_line += 1
            out.append(f"+{new_line} {content}")
        elif kind == REMOVED:
            old_line += 1
            out.append(f"-{old_line} {content}")
        else:
            old_line += 1
            new_line += 1
            out.append(f" {new_line} {content}")

    text = "\n".join(out)
    if terminated:
        text += "\n"
    return AnnotatedDiff(text=text, warnings=warnings)


def annotate(diff: str) -> str:
    """Annotate one file's diff with resolved line numbers."""
    return annotate_diff(diff).text


def build_newline_map(diff: str) -> dict[int, str]:
    """Return map: new-file line number -> content.

    Only lines present in the diff (context or additions) are mapped.
    Deletions don't advance the new-file line counter.
    """
    mapping: dict[int, str] = {}
    new_line: int | None = None

    for raw in _split_lines(diff)[0]:
        header = parse_hunk_header(raw)
        if header:
            new_line = header.new_start
            continue

        if new_line is None or raw.startswith(("@@", "\\")):
            continue

        kind, content = classify_line(raw)
        if kind == REMOVED:
            continue
        mapping[new_line] = content
        new_line += 1

    return mapping
