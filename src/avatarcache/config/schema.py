"""Pydantic models for avatar configuration."""

from __future__ import annotations

import math
from collections.abc import Callable
from pathlib import Path
from typing import Any, Literal

from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    StrictFloat,
    StrictInt,
    ValidationError,
    field_validator,
)

from avatarcache.config import defaults
from avatarcache.errors.exceptions import ConfigurationError
from avatarcache.types import StrategyName


class UrlSettings(BaseModel):
    """Explicit avatar URL stored on the entity."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    path: str = defaults.DEFAULT_URL_PATH


class GravatarSettings(BaseModel):
    """Hash lookup against a Gravatar-compatible service."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    path: str = defaults.DEFAULT_GRAVATAR_PATH
    style: str = defaults.DEFAULT_GRAVATAR_STYLE
    base_url: str = defaults.DEFAULT_GRAVATAR_BASE_URL


class LocationSettings(BaseModel):
    """Static map image centred on the entity's location.

    The ``*_path`` fields are resolved under the value found at ``path``;
    the plain fields are used when a sub-path resolves to nothing.
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    path: str = defaults.DEFAULT_LOCATION_PATH
    base_url: str = defaults.DEFAULT_MAP_BASE_URL

    latitude_path: str = "lat"
    longitude_path: str = "lng"
    zoom_path: str = "zoom"
    bearing_path: str = "bearing"
    style_path: str = "style"
    style_subtype_path: str = "style_subtype"

    latitude: float = defaults.DEFAULT_LATITUDE
    longitude: float = defaults.DEFAULT_LONGITUDE
    zoom: float = defaults.DEFAULT_ZOOM
    bearing: float = defaults.DEFAULT_BEARING
    style: str = defaults.DEFAULT_MAP_STYLE
    style_subtype: str = defaults.DEFAULT_MAP_STYLE_SUBTYPE


class AvatarConfig(BaseModel):
    """Immutable per-pipeline configuration. Build it with :func:`build_config`."""

    model_config = ConfigDict(frozen=True, extra="forbid", arbitrary_types_allowed=True)

    entity: str | Callable[..., Any] = defaults.DEFAULT_ENTITY
    entity_id: str = defaults.DEFAULT_ENTITY_ID
    order: tuple[StrategyName, ...] = tuple(StrategyName(n) for n in defaults.DEFAULT_ORDER)

    cache: bool = defaults.DEFAULT_CACHE_ENABLED
    cache_root: Path = defaults.DEFAULT_CACHE_ROOT
    error_handler: Callable[..., Any] | None = None

    size: StrictInt | StrictFloat | str | None = None
    width: int = Field(default=defaults.DEFAULT_WIDTH, gt=0)
    height: int = Field(default=defaults.DEFAULT_HEIGHT, gt=0)

    url: UrlSettings | Literal[False] = Field(default_factory=UrlSettings)
    gravatar: GravatarSettings | Literal[False] = Field(default_factory=GravatarSettings)
    location: LocationSettings | Literal[False] = Field(default_factory=LocationSettings)
    fallback_url: str | Literal[False] = False

    mapbox_access_token: str | None = None
    request_timeout: float = Field(default=defaults.DEFAULT_REQUEST_TIMEOUT, gt=0)

    @field_validator("order", mode="before")
    @classmethod
    def _split_order(cls, value: Any) -> Any:
        if isinstance(value, str):
            return [part.strip() for part in value.split(",") if part.strip()]
        return value

    @field_validator("cache_root")
    @classmethod
    def _expand_cache_root(cls, value: Path) -> Path:
        return value.expanduser()

    @field_validator("url", "gravatar", "location", mode="before")
    @classmethod
    def _enable_with_defaults(cls, value: Any) -> Any:
        # ``True`` means "enabled with default settings"
        if value is True:
            return {}
        return value

    @field_validator("fallback_url", mode="before")
    @classmethod
    def _none_disables_fallback(cls, value: Any) -> Any:
        return False if value is None else value

    @field_validator("size")
    @classmethod
    def _positive_size(cls, value: int | float | str | None) -> int | str | None:
        # Any real number is a pixel count for both dimensions
        if isinstance(value, float):
            if not math.isfinite(value):
                raise ValueError("size must be a finite number of pixels")
            value = int(value)
        if isinstance(value, int) and value <= 0:
            raise ValueError("size must be a positive number of pixels")
        return value

    def is_enabled(self, strategy: StrategyName) -> bool:
        """A strategy is disabled only when its setting is explicitly False."""
        setting = getattr(self, strategy.value)
        return setting is not False


def build_config(**overrides: Any) -> AvatarConfig:
    """Layer ``overrides`` onto the package defaults.

    ``None`` values are ignored so callers can forward optional arguments
    untouched. Nested strategy settings may be given as mappings; missing
    keys keep their defaults. Validation failures are re-raised as
    :class:`ConfigurationError`.
    """
    values = {k: v for k, v in overrides.items() if v is not None}
    values.pop("log_level", None)
    try:
        return AvatarConfig(**values)
    except ValidationError as exc:
        fields = sorted({str(err["loc"][0]) for err in exc.errors() if err["loc"]})
        raise ConfigurationError(
            f"Invalid avatar configuration ({', '.join(fields) or 'config'}): {exc}",
            setting=fields[0] if fields else None,
        ) from exc
