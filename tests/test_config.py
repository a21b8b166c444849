"""Tests for mrglue.config — load_config and compiler option validation."""

from pathlib import Path

import pytest

from mrglue.config import (
    DEFAULT_CONFIG_PATH,
    CompilerOptions,
    ConfigError,
    DiffOptions,
    ToolConfig,
    compiler_options_from_dict,
    load_config,
)


def write_config(tmp_path: Path, content: str) -> Path:
    p = tmp_path / "config.yml"
    p.write_text(content, encoding="utf-8")
    return p


class TestLoadConfig:
    def test_bundled_defaults_match_builtin_defaults(self):
        assert DEFAULT_CONFIG_PATH.is_file()
        assert load_config(DEFAULT_CONFIG_PATH) == ToolConfig()
        assert load_config() == ToolConfig()

    def test_empty_file_means_defaults(self, tmp_path):
        assert load_config(write_config(tmp_path, "")) == ToolConfig()

    def test_full_config(self, tmp_path):
        path = write_config(tmp_path, """
document:
  blank_lines: paragraph
  heading_levels: [1, 3, 3]
  bullet_markers: ["•"]
  max_bullet_depth: 2
  nested_lists: nest
  inline_bold: true
  default_code_language: kotlin
diff:
  warn_on_malformed_hunks: false
""")
        cfg = load_config(path)
        assert cfg.document == CompilerOptions(
            blank_lines="paragraph",
            heading_levels=(1, 3),
            bullet_markers=("•",),
            max_bullet_depth=2,
            nested_lists="nest",
            inline_bold=True,
            default_code_language="kotlin",
        )
        assert cfg.diff == DiffOptions(warn_on_malformed_hunks=False)

    def test_partial_document_keeps_other_defaults(self, tmp_path):
        cfg = load_config(write_config(tmp_path, "document:\n  blank_lines: PARAGRAPH\n"))
        assert cfg.document.blank_lines == "paragraph"
        assert cfg.document.heading_levels == (1, 2, 3)
        assert cfg.diff == DiffOptions()

    def test_missing_file(self, tmp_path):
        with pytest.raises(ConfigError, match="missing config file"):
            load_config(tmp_path / "nope.yml")

    def test_directory_is_unreadable(self, tmp_path):
        with pytest.raises(ConfigError, match="unable to read config file"):
            load_config(tmp_path)

    def test_non_utf8_file_is_unreadable(self, tmp_path):
        p = tmp_path / "config.yml"
        p.write_bytes(b"\xff\xfedocument: {}\n")
        with pytest.raises(ConfigError, match="unable to read config file"):
            load_config(p)

    def test_invalid_yaml(self, tmp_path):
        with pytest.raises(ConfigError, match="invalid YAML"):
            load_config(write_config(tmp_path, "document: [unclosed\n"))

    def test_top_level_must_be_mapping(self, tmp_path):
        with pytest.raises(ConfigError, match="config: expected mapping"):
            load_config(write_config(tmp_path, "- a\n- b\n"))

    def test_diff_flag_must_be_bool(self, tmp_path):
        with pytest.raises(ConfigError, match="warn_on_malformed_hunks: expected boolean"):
            load_config(write_config(tmp_path, "diff:\n  warn_on_malformed_hunks: maybe\n"))


class TestCompilerOptionsFromDict:
    def test_none_is_default(self):
        assert compiler_options_from_dict(None) == CompilerOptions()

    @pytest.mark.parametrize(
        "raw, message",
        [
            ({"blank_lines": "drop"}, "blank_lines: must be one of skip, paragraph"),
            ({"blank_lines": 1}, "blank_lines: expected string"),
            ({"heading_levels": 2}, "heading_levels: expected list"),
            ({"heading_levels": [7]}, r"heading_levels\[0\]: must be <= 6"),
            ({"heading_levels": [0]}, r"heading_levels\[0\]: must be >= 1"),
            ({"bullet_markers": ["+"]}, r"bullet_markers\[0\]: must be one of"),
            ({"max_bullet_depth": True}, "max_bullet_depth: expected integer"),
            ({"nested_lists": "tree"}, "nested_lists: must be one of flatten, nest"),
            ({"inline_bold": "yes"}, "inline_bold: expected boolean"),
            ({"default_code_language": "  "}, "default_code_language: must be non-empty"),
        ],
    )
    def test_invalid_values(self, raw, message):
        with pytest.raises(ConfigError, match=message):
            compiler_options_from_dict(raw)

    def test_not_a_mapping(self):
        with pytest.raises(ConfigError, match="config.document: expected mapping"):
            compiler_options_from_dict(["skip"])  # type: ignore[arg-type]
