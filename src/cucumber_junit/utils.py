"""JSON/YAML loading and dict merge helpers."""

from __future__ import annotations

import json
from pathlib import Path

import yaml


def load_json(path: Path) -> dict:
    """Load a JSON object, returning empty dict if missing, malformed or not a mapping."""
    try:
        data = json.loads(path.read_text(encoding="utf-8"))
    except (FileNotFoundError, json.JSONDecodeError):
        return {}
    return data if isinstance(data, dict) else {}


def load_yaml(path: Path) -> dict:
    """Load a YAML mapping, returning empty dict if missing or malformed."""
    try:
        data = yaml.safe_load(path.read_text(encoding="utf-8"))
    except (FileNotFoundError, yaml.YAMLError):
        return {}
    return data if isinstance(data, dict) else {}


def deep_merge(base: dict, override: dict) -> dict:
    """Recursively merge override into base, returning a new dict."""
    result = base.copy()
    for key, value in override.items():
        if key in result and isinstance(result[key], dict) and isinstance(value, dict):
            result[key] = deep_merge(result[key], value)
        else:
            result[key] = value
    return result
