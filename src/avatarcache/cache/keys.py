"""Cache key derivation — identity plus resolved dimensions."""

from __future__ import annotations

from pathlib import Path
from typing import Any
from urllib.parse import quote

from avatarcache.config.schema import AvatarConfig
from avatarcache.errors.exceptions import ConfigurationError
from avatarcache.types import AvatarRecord
from avatarcache.utils.paths import is_present, resolve_path


def derive_cache_key(entity: Any, request: Any, config: AvatarConfig) -> AvatarRecord:
    """Compute identity, width/height and cache path for ``entity``.

    Runs whether or not caching is enabled: the path is also where a freshly
    fetched image is written.
    """
    identity_value = resolve_path(entity, config.entity_id)
    identity = str(identity_value) if identity_value is not None else ""

    width, height = resolve_dimensions(entity, request, config)

    return AvatarRecord(
        identity=identity,
        width=width,
        height=height,
        cache_path=cache_path_for(config.cache_root, identity, width, height),
    )


def resolve_dimensions(entity: Any, request: Any, config: AvatarConfig) -> tuple[int, int]:
    """Apply the ``size`` setting over the literal width/height.

    A numeric size sets both dimensions. A string size is a dotted path into
    ``{"entity": ..., "request": ...}``; when it resolves to nothing the
    literal width/height stand.
    """
    size = config.size
    if size is None:
        return config.width, config.height

    if isinstance(size, bool) or not isinstance(size, (int, float, str)):
        raise ConfigurationError(
            f"size must be a number or a path, got {type(size).__name__}",
            setting="size",
        )

    if isinstance(size, (int, float)):
        pixels = _coerce_pixels(size, "size")
        return pixels, pixels

    resolved = resolve_path({"entity": entity, "request": request}, size)
    if not is_present(resolved):
        return config.width, config.height

    pixels = _coerce_pixels(resolved, f"size path '{size}'")
    return pixels, pixels


def cache_path_for(root: Path, identity: str, width: int, height: int) -> Path:
    """``{root}/{identity}-{width}x{height}.png``.

    Characters that could escape ``root`` are percent-encoded; ordinary
    identities are used verbatim.
    """
    safe_identity = quote(identity, safe="@+=,")
    return Path(root) / f"{safe_identity}-{width}x{height}.png"


def _coerce_pixels(value: Any, source: str) -> int:
    """Truncate ``value`` to a positive pixel count; ``source`` names it in errors."""
    try:
        pixels = int(value)
    except (TypeError, ValueError, OverflowError) as exc:
        raise ConfigurationError(
            f"{source} resolved to a non-numeric value: {value!r}",
            setting="size",
        ) from exc
    if isinstance(value, bool) or pixels <= 0:
        raise ConfigurationError(
            f"{source} resolved to an invalid size: {value!r}",
            setting="size",
        )
    return pixels
