"""Rule configuration for the infinite-field game (line length, scoring flags)."""

from dataclasses import dataclass, fields, replace
from pathlib import Path

import yaml


@dataclass(frozen=True)
class RuleConfig:
    field_size: int | None = None  # None = unbounded
    required_length: int = 5
    single_line_scoring: bool = True
    reset_on_full_block: bool = True
    require_both_ends_blocked: bool = True
    block_lookahead: int = 2
    uniform_weights: bool = False
    draw_move_ceiling: int = 50

    def __post_init__(self):
        if self.required_length < 2:
            raise ValueError("required_length must be at least 2")
        if self.block_lookahead < 1:
            raise ValueError("block_lookahead must be at least 1")
        if self.draw_move_ceiling < 0:
            raise ValueError("draw_move_ceiling must be non-negative")
        if self.field_size is not None and self.field_size < self.required_length:
            raise ValueError("field_size must fit a required-length line")

    @classmethod
    def simple(cls, **overrides):
        """Simple rules: flat cell weights, every run scores, blocked lines keep scoring."""
        base = cls(uniform_weights=True, reset_on_full_block=False, single_line_scoring=False)
        return replace(base, **overrides) if overrides else base

    @classmethod
    def from_mapping(cls, data):
        known = {f.name for f in fields(cls)}
        unknown = set(data) - known
        if unknown:
            raise ValueError(f"Unknown rule keys: {', '.join(sorted(unknown))}")
        return cls(**data)

    def describe(self):
        size = "infinite field" if self.field_size is None else f"field {self.field_size}"
        return (
            f"Rules: line to win = {self.required_length}, {size}, "
            f"single line scoring = {self.single_line_scoring}, "
            f"reset on full block = {self.reset_on_full_block}"
        )


def resolve_project_path(path):
    """Resolve a repo-relative path when invoked from outside the package directory."""
    p = Path(path)
    if p.is_absolute() or p.exists():
        return p
    candidate = Path(__file__).resolve().parents[1] / p
    return candidate if candidate.exists() else p


def load_settings(path="config/settings.yaml"):
    """Load the full settings mapping; missing file yields an empty mapping."""
    path = resolve_project_path(path)
    try:
        with open(path, "r", encoding="utf-8") as f:
            return yaml.safe_load(f) or {}
    except FileNotFoundError:
        return {}


def load_rules(path="config/settings.yaml", **overrides):
    """Build a RuleConfig from the `rules:` section of a settings file."""
    data = dict(load_settings(path).get("rules") or {})
    data.update({k: v for k, v in overrides.items() if v is not None})
    return RuleConfig.from_mapping(data)
