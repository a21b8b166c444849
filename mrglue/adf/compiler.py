"""Compile model-generated markup into an ADF document.

The accepted dialect is deliberately small:

- ```` ```lang ```` ... ```` ``` ````  fenced code block, content kept verbatim
- `#`, `##`, `###`                       headings (levels are configurable)
- `*`, `**`, `***`                       bullets, marker count = nesting depth
- `•`, `-`                               flat bullets
- `**whole line**`                       bold paragraph
- anything else                          plain paragraph

Unrecognized input always becomes a plain paragraph; compiling never raises.
"""

from __future__ import annotations

import re
from dataclasses import dataclass, field

from ..config import CompilerOptions
from .nodes import BlockNode, BulletList, CodeBlock, Doc, Heading, ListItem, Paragraph, Text

NORMAL = "normal"
IN_CODE_BLOCK = "in_code_block"

FENCE = "```"
INDENT = "  "

_HEADING_RE = re.compile(r"^(#{1,6})\s+(.*)$")
_STAR_BULLET_RE = re.compile(r"^(\*+)\s+(.*)$")
_DASH_BULLET_RE = re.compile(r"^-\s+(.*)$")
_DOT_BULLET_RE = re.compile(r"^•\s*(.*)$")
_BOLD_LINE_RE = re.compile(r"^\*\*(.+)\*\*$")
_INLINE_BOLD_RE = re.compile(r"\*\*(.+?)\*\*")


@dataclass
class _ScanState:
    mode: str = NORMAL
    children: list[BlockNode] = field(default_factory=list)
    # (depth, text) per bullet of the currently open list, None when closed.
    list_entries: list[tuple[int, str]] | None = None
    code_language: str = "text"
    code_lines: list[str] = field(default_factory=list)


def _split_lines(text: str) -> list[str]:
    lines = (text or "").replace("\r\n", "\n").split("\n")
    if lines and lines[-1] == "":
        lines.pop()
    return lines


def _inlines(text: str, inline_bold: bool, indent: str = "") -> tuple[Text, ...]:
    # Whitespace left behind by stripped ** markers is trimmed at the edges;
    # the list indent is applied afterwards.
    if not inline_bold:
        value = text.replace("**", "").strip()
        return (Text(indent + value),) if value else ()

    runs: list[Text] = []
    pos = 0
    for m in _INLINE_BOLD_RE.finditer(text):
        before = text[pos : m.start()].replace("**", "")
        if before:
            runs.append(Text(before))
        runs.append(Text(m.group(1), bold=True))
        pos = m.end()
    rest = text[pos:].replace("**", "")
    if rest:
        runs.append(Text(rest))

    if runs and not runs[0].bold:
        runs[0] = Text(runs[0].value.lstrip())
    if runs and not runs[-1].bold:
        runs[-1] = Text(runs[-1].value.rstrip())
    runs = [r for r in runs if r.value]
    if runs and indent:
        if runs[0].bold:
            runs.insert(0, Text(indent))
        else:
            runs[0] = Text(indent + runs[0].value)
    return tuple(runs)


class DocumentCompiler:
    """Line-oriented markup -> `Doc` compiler."""

    def __init__(self, options: CompilerOptions | None = None) -> None:
        self._options = options or CompilerOptions()

    @property
    def options(self) -> CompilerOptions:
        return self._options

    def _bullet(self, trimmed: str) -> tuple[int, str] | None:
        markers = self._options.bullet_markers
        if "*" in markers:
            m = _STAR_BULLET_RE.match(trimmed)
            if m and len(m.group(1)) <= self._options.max_bullet_depth:
                return len(m.group(1)), m.group(2).strip()
        if "-" in markers:
            m = _DASH_BULLET_RE.match(trimmed)
            if m:
                return 1, m.group(1).strip()
        if "•" in markers:
            m = _DOT_BULLET_RE.match(trimmed)
            if m:
                return 1, m.group(1).strip()
        return None

    def _heading(self, trimmed: str) -> Heading | None:
        m = _HEADING_RE.match(trimmed)
        if not m or len(m.group(1)) not in self._options.heading_levels:
            return None
        return Heading(level=len(m.group(1)), text=m.group(2).replace("**", "").strip())

    def _flat_items(self, entries: list[tuple[int, str]]) -> list[ListItem]:
        items: list[ListItem] = []
        for depth, text in entries:
            inlines = _inlines(text, self._options.inline_bold, INDENT * (depth - 1))
            items.append(ListItem((Paragraph(inlines),)))
        return items

    def _nested_items(self, entries: list[tuple[int, str]]) -> list[ListItem]:
        items: list[ListItem] = []
        i = 0
        while i < len(entries):
            depth, text = entries[i]
            j = i + 1
            while j < len(entries) and entries[j][0] > depth:
                j += 1
            children: list[BlockNode] = [Paragraph(_inlines(text, self._options.inline_bold))]
            if j > i + 1:
                children.append(BulletList(tuple(self._nested_items(entries[i + 1 : j]))))
            items.append(ListItem(tuple(children)))
            i = j
        return items

    def _close_list(self, state: _ScanState) -> None:
        if state.list_entries is None:
            return
        if self._options.nested_lists == "nest":
            items = self._nested_items(state.list_entries)
        else:
            items = self._flat_items(state.list_entries)
        state.children.append(BulletList(tuple(items)))
        state.list_entries = None

    def _close_code_block(self, state: _ScanState) -> None:
        state.children.append(CodeBlock(language=state.code_language, text="".join(state.code_lines)))
        state.code_lines = []
        state.mode = NORMAL

    def _scan_line(self, state: _ScanState, line: str) -> None:
        trimmed = line.strip()

        if state.mode == IN_CODE_BLOCK:
            if trimmed.startswith(FENCE):
                self._close_code_block(state)
            else:
                state.code_lines.append(line + "\n")
            return

        if trimmed.startswith(FENCE):
            self._close_list(state)
            tag = trimmed[len(FENCE) :].strip()
            state.code_language = tag.split()[0] if tag else self._options.default_code_language
            state.code_lines = []
            state.mode = IN_CODE_BLOCK
            return

        heading = self._heading(trimmed)
        if heading is not None:
            self._close_list(state)
            state.children.append(heading)
            return

        bullet = self._bullet(trimmed)
        if bullet is not None:
            if state.list_entries is None:
                state.list_entries = []
            state.list_entries.append(bullet)
            return

        m = _BOLD_LINE_RE.match(trimmed)
        if m:
            self._close_list(state)
            state.children.append(Paragraph((Text(m.group(1).replace("**", "").strip(), bold=True),)))
            return

        if not trimmed:
            if self._options.blank_lines == "paragraph":
                self._close_list(state)
                state.children.append(Paragraph())
            return

        self._close_list(state)
        state.children.append(Paragraph(_inlines(trimmed, self._options.inline_bold)))

    def compile(self, text: str) -> Doc:
        """Compile the whole text into a document."""
        state = _ScanState(code_language=self._options.default_code_language)
        for line in _split_lines(text):
            self._scan_line(state, line)

        if state.mode == IN_CODE_BLOCK:
            # Unterminated fence: keep what was captured.
            self._close_code_block(state)
        self._close_list(state)
        return Doc(tuple(state.children))


def compile_document(text: str, options: CompilerOptions | None = None) -> Doc:
    """Compile markup text into an ADF `Doc`."""
    return DocumentCompiler(options).compile(text)
