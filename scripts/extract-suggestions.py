#!/usr/bin/env python3
"""Extract anchorable inline suggestions from a model response.

Reads the raw model text and the MR diffs JSON, keeps suggestions that land
on a new-file line of a changed file, and writes them as a JSON array with a
ready-to-post `body` per entry. Prints the number of suggestions kept.
"""

from __future__ import annotations

import argparse
import json
import sys
from pathlib import Path

from mrglue.diffannotate import filter_suggestions, parse_suggestions, suggestion_body


def warn(message: str) -> None:
    print(f"::warning::{message}", file=sys.stderr)


def parse_args(argv: list[str]) -> argparse.Namespace:
    p = argparse.ArgumentParser(prog="extract-suggestions.py", description="Extract inline suggestions.")
    p.add_argument("--response", required=True, help="Path to the raw model response text")
    p.add_argument("--diffs-json", required=True, help="Path to the MR diffs JSON array")
    p.add_argument("--output", required=True, help="Path to write suggestions JSON")
    return p.parse_args(argv)


def main(argv: list[str] | None = None) -> int:
    """Main."""
    args = parse_args(sys.argv[1:] if argv is None else argv)

    try:
        response = Path(args.response).read_text(encoding="utf-8")
        changes = json.loads(Path(args.diffs_json).read_text(encoding="utf-8"))
    except (OSError, UnicodeDecodeError, json.JSONDecodeError) as exc:
        print(f"extract-suggestions: failed to read inputs: {exc}", file=sys.stderr)
        return 1
    if not isinstance(changes, list):
        print("extract-suggestions: diffs JSON must be an array", file=sys.stderr)
        return 1

    suggestions, warnings = parse_suggestions(response)
    kept, dropped = filter_suggestions(suggestions, changes)
    for message in [*warnings, *dropped]:
        warn(message)

    out = [{**s.to_dict(), "body": suggestion_body(s)} for s in kept]
    try:
        Path(args.output).write_text(json.dumps(out, indent=2, ensure_ascii=False) + "\n", encoding="utf-8")
    except OSError as exc:
        print(f"extract-suggestions: failed to write {args.output}: {exc}", file=sys.stderr)
        return 1
    print(len(kept))
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
