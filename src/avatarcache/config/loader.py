"""YAML config loading and validation."""

from __future__ import annotations

from pathlib import Path
from typing import Any

import yaml

from avatarcache.config.schema import AvatarConfig, build_config


def load_yaml(path: str | Path) -> dict[str, Any]:
    """Load any YAML (or JSON) file whose top level is a mapping."""
    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"YAML file not found: {path}")

    with open(path) as f:
        raw = yaml.safe_load(f)

    if not isinstance(raw, dict):
        raise ValueError(f"Expected YAML mapping, got {type(raw).__name__} in {path}")

    return raw


def load_config_yaml(path: str | Path, **overrides: Any) -> AvatarConfig:
    """Load an avatar config YAML file and return a validated AvatarConfig.

    ``overrides`` win over values from the file.
    """
    raw = load_yaml(path)
    if "avatar" not in raw or not isinstance(raw["avatar"], dict):
        raise ValueError(f"Invalid avatar YAML: missing top-level 'avatar' key in {path}")

    values = dict(raw["avatar"])
    values.update({k: v for k, v in overrides.items() if v is not None})
    return build_config(**values)
