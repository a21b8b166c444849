#!/usr/bin/env python3
"""Render line-numbered review context from merge request diffs.

Input is either the JSON array returned by GitLab's
`merge_requests/:iid/diffs` endpoint (`--diffs-json`) or one raw per-file
diff (`--diff`, optionally labelled with `--path`).
"""

from __future__ import annotations

import argparse
import json
import sys
from pathlib import Path

from mrglue.config import ConfigError, load_config
from mrglue.diffannotate import build_review_context, diff_summary_markdown


def warn(message: str) -> None:
    print(f"::warning::{message}", file=sys.stderr)


def fail(message: str) -> int:
    print(f"annotate-diff: {message}", file=sys.stderr)
    return 1


def parse_args(argv: list[str]) -> argparse.Namespace:
    p = argparse.ArgumentParser(prog="annotate-diff.py", description=__doc__.splitlines()[0])
    src = p.add_mutually_exclusive_group(required=True)
    src.add_argument("--diffs-json", help="Path to the MR diffs JSON array")
    src.add_argument("--diff", help="Path to a single raw file diff")
    p.add_argument("--path", default="", help="File path label for --diff")
    p.add_argument("--output", default="", help="Write here instead of stdout")
    p.add_argument("--config", default="", help="Path to config.yml (default: defaults/config.yml)")
    p.add_argument(
        "--summary",
        action="store_true",
        help="Emit raw diffs as fenced markdown blocks instead of annotated context",
    )
    return p.parse_args(argv)


def load_changes(args: argparse.Namespace) -> list[dict]:
    if args.diff:
        diff = Path(args.diff).read_text(encoding="utf-8")
        return [{"new_path": args.path or Path(args.diff).name, "diff": diff}]

    data = json.loads(Path(args.diffs_json).read_text(encoding="utf-8"))
    if isinstance(data, dict):
        data = data.get("changes", [])
    if not isinstance(data, list):
        raise ValueError("expected a JSON array of changes")
    return [c for c in data if isinstance(c, dict)]


def main(argv: list[str] | None = None) -> int:
    """Main."""
    args = parse_args(sys.argv[1:] if argv is None else argv)

    try:
        cfg = load_config(Path(args.config) if args.config else None)
    except ConfigError as e:
        print(f"annotate-diff: config error: {e}", file=sys.stderr)
        return 2

    try:
        changes = load_changes(args)
    except (OSError, json.JSONDecodeError, ValueError) as exc:
        return fail(f"failed to read diffs: {exc}")

    if args.summary:
        rendered = diff_summary_markdown(changes)
    else:
        rendered, warnings = build_review_context(changes)
        if cfg.diff.warn_on_malformed_hunks:
            for path, w in warnings:
                warn(f"{path}: line {w.line_no}: {w.message}: {w.line!r}")

    if not args.output:
        sys.stdout.write(rendered)
        if rendered and not rendered.endswith("\n"):
            sys.stdout.write("\n")
        return 0

    try:
        Path(args.output).write_text(rendered, encoding="utf-8")
    except OSError as exc:
        return fail(f"failed to write {args.output}: {exc}")
    print(len(changes))
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
