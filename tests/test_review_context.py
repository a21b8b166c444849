"""Tests for mrglue.diffannotate.context — file blocks, review context, diff summary."""

from mrglue.diffannotate.context import (
    build_review_context,
    changed_paths,
    diff_summary_markdown,
    file_block,
)

CHANGES = [
    {"new_path": "app/Main.kt", "diff": "@@ -1,2 +1,2 @@\n-val a = 1\n+val a = 2\n keep\n"},
    {"new_path": "README.md", "diff": "@@ -3 +3,2 @@\n intro\n+more\n"},
]


def test_file_block_prefixes_path_and_annotates() -> None:
    assert file_block("a.py", "@@ -1 +1 @@\n+x") == "File: a.py\n@@ -1 +1 @@\n+1 x\n"


def test_review_context_joins_files_with_blank_line() -> None:
    text, warnings = build_review_context(CHANGES)

    assert warnings == []
    assert text == (
        "File: app/Main.kt\n"
        "@@ -1,2 +1,2 @@\n"
        "-1 val a = 1\n"
        "+1 val a = 2\n"
        " 2 keep\n"
        "\n\n"
        "File: README.md\n"
        "@@ -3 +3,2 @@\n"
        " 3 intro\n"
        "+4 more\n"
    )


def test_review_context_reports_warnings_per_path() -> None:
    _, warnings = build_review_context([{"new_path": "x.py", "diff": "@@ nope @@\n+a"}])
    assert len(warnings) == 1
    path, warning = warnings[0]
    assert path == "x.py"
    assert warning.line == "@@ nope @@"


def test_review_context_skips_non_mappings_and_tolerates_missing_diff() -> None:
    text, _ = build_review_context(["junk", {"new_path": "empty.txt"}])
    assert text == "File: empty.txt\n"


def test_review_context_empty() -> None:
    assert build_review_context([]) == ("", [])


def test_diff_summary_dedupes_paths() -> None:
    changes = [*CHANGES, {"new_path": "README.md", "diff": "@@ -9 +9 @@\n+dup\n"}]
    summary = diff_summary_markdown(changes)

    assert summary.count("**README.md**") == 1
    assert "+dup" not in summary
    assert summary.startswith("**app/Main.kt**\n```diff\n@@ -1,2 +1,2 @@\n")


def test_changed_paths_first_occurrence_wins() -> None:
    paths = changed_paths([{"new_path": "a", "diff": "1"}, {"new_path": "a", "diff": "2"}, {"diff": "3"}])
    assert paths == {"a": "1"}


def test_changed_paths_falls_back_to_old_path() -> None:
    assert changed_paths([{"old_path": "gone.py", "diff": "@@ -1 +0,0 @@\n-x"}]) == {
        "gone.py": "@@ -1 +0,0 @@\n-x"
    }
