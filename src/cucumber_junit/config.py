"""Conversion options: defaults, file loading, and validation."""

from __future__ import annotations

import copy
import logging
from dataclasses import dataclass, field
from pathlib import Path

from cucumber_junit.utils import deep_merge, load_json, load_yaml

logger = logging.getLogger(__name__)

DEFAULT_INDENT = "    "

# Divisors turning a step duration into seconds.
DURATION_DIVISORS: dict[str, float] = {
    "ns": 1_000_000_000,
    "us": 1_000_000,
    "ms": 1_000,
    "s": 1,
}

DEFAULT_OPTIONS: dict = {
    "prefix": "",
    "strict": False,
    "indent": DEFAULT_INDENT,
    "stream": False,
    "declaration": {"encoding": "UTF-8"},
    "duration_unit": "us",
}

_DECLARATION_KEYS = {"version", "encoding", "standalone"}


@dataclass
class ConversionOptions:
    prefix: str = ""
    strict: bool = False
    indent: str | bool = DEFAULT_INDENT
    stream: bool = False
    declaration: dict | bool = field(default_factory=lambda: {"encoding": "UTF-8"})
    duration_unit: str = "us"

    @property
    def duration_divisor(self) -> float:
        return DURATION_DIVISORS[self.duration_unit]

    @classmethod
    def from_dict(cls, data: dict | None = None) -> ConversionOptions:
        """Build options from a (partial) dict merged over the defaults.

        Raises ValueError listing every problem found.
        """
        merged = deep_merge(copy.deepcopy(DEFAULT_OPTIONS), data or {})
        errors = validate_options(merged)
        if errors:
            raise ValueError("Invalid options: " + "; ".join(errors))
        return cls(
            prefix=merged["prefix"] or "",
            strict=merged["strict"],
            indent=merged["indent"],
            stream=merged["stream"],
            declaration=merged["declaration"],
            duration_unit=merged["duration_unit"],
        )


def load_options(path: Path | None = None) -> dict:
    """Load an options file (JSON, or YAML by extension) merged with defaults."""
    if path is None:
        return copy.deepcopy(DEFAULT_OPTIONS)
    if not path.exists():
        logger.warning("Options file not found: %s. Using defaults.", path)
        return copy.deepcopy(DEFAULT_OPTIONS)

    if path.suffix.lower() in (".yml", ".yaml"):
        user_options = load_yaml(path)
    else:
        user_options = load_json(path)
    if not user_options:
        logger.warning(
            "Options file exists but could not be loaded (corrupt?): %s "
            "Using defaults.", path
        )
    return deep_merge(copy.deepcopy(DEFAULT_OPTIONS), user_options)


def validate_options(options: dict) -> list[str]:
    """Validate options, returning list of error messages (empty if valid)."""
    errors = []
    unknown = set(options) - set(DEFAULT_OPTIONS)
    for key in sorted(unknown):
        errors.append(f"Unknown option '{key}'")
    prefix = options.get("prefix", "")
    if prefix is not None and not isinstance(prefix, str):
        errors.append("'prefix' must be a string")
    for key in ("strict", "stream"):
        if not isinstance(options.get(key, False), bool):
            errors.append(f"'{key}' must be a boolean")
    if not isinstance(options.get("indent", DEFAULT_INDENT), (str, bool)):
        errors.append("'indent' must be a string or a boolean")
    declaration = options.get("declaration", True)
    if isinstance(declaration, dict):
        for key in sorted(set(declaration) - _DECLARATION_KEYS):
            errors.append(f"'declaration' has unknown key '{key}'")
    elif not isinstance(declaration, bool):
        errors.append("'declaration' must be a boolean or a mapping")
    unit = options.get("duration_unit", "us")
    if unit not in DURATION_DIVISORS:
        errors.append(
            f"invalid duration_unit '{unit}' (expected one of {', '.join(DURATION_DIVISORS)})"
        )
    return errors
