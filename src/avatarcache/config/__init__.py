"""Configuration — defaults, schema, YAML loading and layering."""

from avatarcache.config.hierarchy import config_sources, load_config_hierarchy
from avatarcache.config.loader import load_config_yaml
from avatarcache.config.schema import (
    AvatarConfig,
    GravatarSettings,
    LocationSettings,
    UrlSettings,
    build_config,
)

__all__ = [
    "AvatarConfig",
    "GravatarSettings",
    "LocationSettings",
    "UrlSettings",
    "build_config",
    "config_sources",
    "load_config_hierarchy",
    "load_config_yaml",
]
