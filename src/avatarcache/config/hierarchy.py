"""Configuration layering for the CLI and embedding applications.

Layers, lowest priority first::

    defaults -> ~/.avatarcache/config.yaml -> ./avatarcache.yaml -> env -> runtime

Config files hold avatar settings at the top level or under an ``avatar:``
key. Strategy sections (``url``, ``gravatar``, ``location``) are merged key
by key across layers, so a project file can change the Gravatar style
without repeating the global base URL. Setting a section to ``false`` in any
layer disables the strategy until a later layer enables it again.
"""

from __future__ import annotations

import logging
import os
from collections.abc import Callable, Iterator
from pathlib import Path
from typing import Any

import yaml

from avatarcache.config.defaults import get_defaults

logger = logging.getLogger(__name__)

_GLOBAL_CONFIG_PATH = Path.home() / ".avatarcache" / "config.yaml"
_PROJECT_CONFIG_NAME = "avatarcache.yaml"

_STRATEGY_SECTIONS = frozenset({"url", "gravatar", "location"})

_TRUTHY = {"1", "true", "yes", "on"}
_FALSY = {"0", "false", "no", "off", ""}


def _parse_flag(value: str) -> bool:
    return value.strip().lower() in _TRUTHY


def _parse_number(value: str) -> int | float:
    number = float(value)
    return int(number) if number.is_integer() else number


def _parse_size(value: str) -> int | float | str:
    # A pixel count, otherwise a dotted path such as "request.query_params.s"
    try:
        return _parse_number(value)
    except ValueError:
        return value


def _parse_fallback(value: str) -> str | bool:
    return False if value.strip().lower() in _FALSY else value


# Environment variable -> (config key, parser)
_ENV_VARS: dict[str, tuple[str, Callable[[str], Any]]] = {
    "MAPBOX_ACCESS_TOKEN": ("mapbox_access_token", str),
    "AVATARCACHE_ENTITY": ("entity", str),
    "AVATARCACHE_ENTITY_ID": ("entity_id", str),
    "AVATARCACHE_ORDER": ("order", str),
    "AVATARCACHE_CACHE_DISABLED": ("cache_disabled", _parse_flag),
    "AVATARCACHE_CACHE_ROOT": ("cache_root", str),
    "AVATARCACHE_SIZE": ("size", _parse_size),
    "AVATARCACHE_WIDTH": ("width", _parse_number),
    "AVATARCACHE_HEIGHT": ("height", _parse_number),
    "AVATARCACHE_FALLBACK_URL": ("fallback_url", _parse_fallback),
    "AVATARCACHE_REQUEST_TIMEOUT": ("request_timeout", _parse_number),
    "AVATARCACHE_LOG_LEVEL": ("log_level", str),
}


def load_config_hierarchy(**runtime_overrides: Any) -> dict[str, Any]:
    """Merge every layer and return settings ready for ``build_config``.

    ``log_level`` is left in the result for the caller to consume; the
    negative ``cache_disabled`` switch is folded into ``cache``.
    """
    config, _ = _merge_layers(runtime_overrides)
    return config


def config_sources(**runtime_overrides: Any) -> dict[str, str]:
    """Name the layer that last set each top-level key."""
    _, sources = _merge_layers(runtime_overrides)
    return sources


def _merge_layers(runtime_overrides: dict[str, Any]) -> tuple[dict[str, Any], dict[str, str]]:
    config: dict[str, Any] = {}
    sources: dict[str, str] = {}
    for source, layer in _iter_layers(runtime_overrides):
        for key, value in layer.items():
            if key == "cache_disabled":
                key, value = "cache", not value
            config[key] = _merge_value(key, config.get(key), value)
            sources[key] = source
    return config, sources


def _merge_value(key: str, current: Any, incoming: Any) -> Any:
    if key in _STRATEGY_SECTIONS and isinstance(incoming, dict):
        base = current if isinstance(current, dict) else {}
        return {**base, **incoming}
    return incoming


def _iter_layers(runtime_overrides: dict[str, Any]) -> Iterator[tuple[str, dict[str, Any]]]:
    yield "defaults", get_defaults()

    global_cfg = _load_yaml_config(_GLOBAL_CONFIG_PATH)
    if global_cfg:
        yield "global", global_cfg

    project_path = _find_project_config()
    if project_path:
        project_cfg = _load_yaml_config(project_path)
        if project_cfg:
            yield "project", project_cfg

    env_cfg = _load_env_vars()
    if env_cfg:
        yield "env", env_cfg

    runtime = {k: v for k, v in runtime_overrides.items() if v is not None}
    if runtime:
        yield "runtime", runtime


def _load_yaml_config(path: Path) -> dict[str, Any] | None:
    """Read one config file; unreadable or malformed files are skipped."""
    if not path.is_file():
        return None
    try:
        with open(path) as f:
            data = yaml.safe_load(f)
    except (OSError, yaml.YAMLError) as e:
        logger.warning("Failed to load config %s: %s", path, e)
        return None

    if isinstance(data, dict) and isinstance(data.get("avatar"), dict):
        data = data["avatar"]
    if not isinstance(data, dict):
        logger.warning("Config file %s is not a mapping, ignoring", path)
        return None
    return data


def _find_project_config() -> Path | None:
    """Nearest avatarcache.yaml in the working directory or above it."""
    directory = Path.cwd()
    while True:
        candidate = directory / _PROJECT_CONFIG_NAME
        if candidate.is_file():
            return candidate
        if directory.parent == directory:
            return None
        directory = directory.parent


def _load_env_vars() -> dict[str, Any]:
    result: dict[str, Any] = {}
    for env_key, (config_key, parse) in _ENV_VARS.items():
        raw = os.environ.get(env_key)
        if raw is None:
            continue
        try:
            result[config_key] = parse(raw)
        except ValueError:
            # Left as text so validation reports the offending setting
            logger.warning("Cannot parse %s=%r for '%s'", env_key, raw, config_key)
            result[config_key] = raw
    return result
