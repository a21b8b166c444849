"""Typed loader for defaults/config.yml.

Centralizes parsing/validation of the markup and diff options so the CLIs
and callers share one set of defaults.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

import yaml

BLANK_LINE_POLICIES = ("skip", "paragraph")
NESTED_LIST_MODES = ("flatten", "nest")
BULLET_MARKERS = ("*", "-", "•")
DEFAULT_CONFIG_PATH = Path(__file__).resolve().parent.parent / "defaults" / "config.yml"


class ConfigError(RuntimeError):
    """Invalid or unreadable configuration."""
    pass


@dataclass(frozen=True)
class CompilerOptions:
    """Options for the markup -> ADF compiler."""
    blank_lines: str = "skip"
    heading_levels: tuple[int, ...] = (1, 2, 3)
    bullet_markers: tuple[str, ...] = BULLET_MARKERS
    max_bullet_depth: int = 3
    nested_lists: str = "flatten"
    inline_bold: bool = False
    default_code_language: str = "text"


@dataclass(frozen=True)
class DiffOptions:
    """Options for diff annotation."""
    warn_on_malformed_hunks: bool = True


@dataclass(frozen=True)
class ToolConfig:
    document: CompilerOptions = field(default_factory=CompilerOptions)
    diff: DiffOptions = field(default_factory=DiffOptions)


def _require_mapping(value: Any, ctx: str) -> dict[str, Any]:
    if not isinstance(value, dict):
        raise ConfigError(f"{ctx}: expected mapping")
    return value


def _require_list(value: Any, ctx: str) -> list[Any]:
    if not isinstance(value, list):
        raise ConfigError(f"{ctx}: expected list")
    return value


def _require_str(value: Any, ctx: str) -> str:
    if not isinstance(value, str):
        raise ConfigError(f"{ctx}: expected string")
    s = value.strip()
    if not s:
        raise ConfigError(f"{ctx}: must be non-empty")
    return s


def _require_bool(value: Any, ctx: str) -> bool:
    if not isinstance(value, bool):
        raise ConfigError(f"{ctx}: expected boolean")
    return value


def _require_positive_int(value: Any, ctx: str) -> int:
    if isinstance(value, bool) or not isinstance(value, int):
        raise ConfigError(f"{ctx}: expected integer")
    if value < 1:
        raise ConfigError(f"{ctx}: must be >= 1")
    return value


def _require_choice(value: Any, ctx: str, choices: tuple[str, ...]) -> str:
    s = _require_str(value, ctx).lower()
    if s not in choices:
        raise ConfigError(f"{ctx}: must be one of {', '.join(choices)}")
    return s


def _load_yaml(path: Path) -> Any:
    try:
        return yaml.safe_load(path.read_text(encoding="utf-8"))
    except FileNotFoundError:
        raise ConfigError(f"missing config file: {path}") from None
    except (OSError, UnicodeDecodeError) as e:
        raise ConfigError(f"unable to read config file {path}: {e}") from e
    except yaml.YAMLError as e:
        raise ConfigError(f"invalid YAML in {path}: {e}") from e


def compiler_options_from_dict(raw: dict[str, Any] | None, ctx: str = "config.document") -> CompilerOptions:
    """Build CompilerOptions from a mapping; missing keys keep their defaults."""
    if raw is None:
        return CompilerOptions()
    cfg = _require_mapping(raw, ctx)
    defaults = CompilerOptions()

    blank_lines = defaults.blank_lines
    if "blank_lines" in cfg:
        blank_lines = _require_choice(cfg["blank_lines"], f"{ctx}.blank_lines", BLANK_LINE_POLICIES)

    heading_levels = defaults.heading_levels
    if "heading_levels" in cfg:
        levels: list[int] = []
        for idx, item in enumerate(_require_list(cfg["heading_levels"], f"{ctx}.heading_levels")):
            level = _require_positive_int(item, f"{ctx}.heading_levels[{idx}]")
            if level > 6:
                raise ConfigError(f"{ctx}.heading_levels[{idx}]: must be <= 6")
            levels.append(level)
        heading_levels = tuple(dict.fromkeys(levels))

    bullet_markers = defaults.bullet_markers
    if "bullet_markers" in cfg:
        markers: list[str] = []
        for idx, item in enumerate(_require_list(cfg["bullet_markers"], f"{ctx}.bullet_markers")):
            markers.append(_require_choice(item, f"{ctx}.bullet_markers[{idx}]", BULLET_MARKERS))
        bullet_markers = tuple(dict.fromkeys(markers))

    max_bullet_depth = defaults.max_bullet_depth
    if "max_bullet_depth" in cfg:
        max_bullet_depth = _require_positive_int(cfg["max_bullet_depth"], f"{ctx}.max_bullet_depth")

    nested_lists = defaults.nested_lists
    if "nested_lists" in cfg:
        nested_lists = _require_choice(cfg["nested_lists"], f"{ctx}.nested_lists", NESTED_LIST_MODES)

    inline_bold = defaults.inline_bold
    if "inline_bold" in cfg:
        inline_bold = _require_bool(cfg["inline_bold"], f"{ctx}.inline_bold")

    default_code_language = defaults.default_code_language
    if "default_code_language" in cfg:
        default_code_language = _require_str(cfg["default_code_language"], f"{ctx}.default_code_language")

    return CompilerOptions(
        blank_lines=blank_lines,
        heading_levels=heading_levels,
        bullet_markers=bullet_markers,
        max_bullet_depth=max_bullet_depth,
        nested_lists=nested_lists,
        inline_bold=inline_bold,
        default_code_language=default_code_language,
    )


def load_config(path: Path | None = None) -> ToolConfig:
    """Load config; an empty file means all defaults.

    Without an explicit path the bundled defaults/config.yml is used when
    present (source checkouts), otherwise built-in defaults.
    """
    if path is None:
        if not DEFAULT_CONFIG_PATH.is_file():
            return ToolConfig()
        path = DEFAULT_CONFIG_PATH
    raw = _load_yaml(path)
    if raw is None:
        return ToolConfig()
    cfg = _require_mapping(raw, "config")

    document = compiler_options_from_dict(cfg.get("document"))

    diff = DiffOptions()
    diff_raw = cfg.get("diff")
    if diff_raw is not None:
        diff_cfg = _require_mapping(diff_raw, "config.diff")
        if "warn_on_malformed_hunks" in diff_cfg:
            diff = DiffOptions(
                warn_on_malformed_hunks=_require_bool(
                    diff_cfg["warn_on_malformed_hunks"], "config.diff.warn_on_malformed_hunks"
                )
            )

    return ToolConfig(document=document, diff=diff)
