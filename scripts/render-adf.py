#!/usr/bin/env python3
"""Compile model-generated markup into Jira ADF JSON."""

from __future__ import annotations

import argparse
import dataclasses
import json
import sys
from pathlib import Path

from mrglue.adf import comment_payload, compile_document
from mrglue.config import BLANK_LINE_POLICIES, NESTED_LIST_MODES, ConfigError, load_config


def parse_args(argv: list[str]) -> argparse.Namespace:
    p = argparse.ArgumentParser(prog="render-adf.py", description=__doc__)
    p.add_argument("--input", required=True, help="Markup text file ('-' for stdin)")
    p.add_argument("--output", default="", help="Write JSON here instead of stdout")
    p.add_argument("--config", default="", help="Path to config.yml (default: defaults/config.yml)")
    p.add_argument("--blank-lines", choices=BLANK_LINE_POLICIES, help="Override document.blank_lines")
    p.add_argument("--nested-lists", choices=NESTED_LIST_MODES, help="Override document.nested_lists")
    p.add_argument(
        "--comment",
        action="store_true",
        help='Wrap the document as a Jira comment request body ({"body": ...})',
    )
    return p.parse_args(argv)


def read_input(path: str) -> str:
    if path == "-":
        return sys.stdin.read()
    return Path(path).read_text(encoding="utf-8")


def main(argv: list[str] | None = None) -> int:
    """Main."""
    args = parse_args(sys.argv[1:] if argv is None else argv)

    try:
        cfg = load_config(Path(args.config) if args.config else None)
    except ConfigError as e:
        print(f"render-adf: config error: {e}", file=sys.stderr)
        return 2

    options = cfg.document
    if args.blank_lines:
        options = dataclasses.replace(options, blank_lines=args.blank_lines)
    if args.nested_lists:
        options = dataclasses.replace(options, nested_lists=args.nested_lists)

    try:
        text = read_input(args.input)
    except (OSError, UnicodeDecodeError) as exc:
        print(f"render-adf: failed to read {args.input}: {exc}", file=sys.stderr)
        return 1

    doc = compile_document(text, options)
    payload = comment_payload(doc) if args.comment else doc.to_adf()
    rendered = json.dumps(payload, ensure_ascii=False, indent=2) + "\n"

    if not args.output:
        sys.stdout.write(rendered)
        return 0

    try:
        Path(args.output).write_text(rendered, encoding="utf-8")
    except OSError as exc:
        print(f"render-adf: failed to write {args.output}: {exc}", file=sys.stderr)
        return 1
    print(len(doc.children))
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
