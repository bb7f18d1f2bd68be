"""avatarcache — resolve, fetch and cache avatar images for request subjects."""

from avatarcache.config.schema import AvatarConfig, build_config
from avatarcache.core import resolve_avatar, resolve_avatar_async
from avatarcache.errors.exceptions import (
    AvatarCacheError,
    ConfigurationError,
    ResolutionExhaustedError,
    StorageError,
    TransportError,
)
from avatarcache.pipeline.engine import AvatarPipeline
from avatarcache.types import (
    AvatarRecord,
    Failed,
    FetchTarget,
    Outcome,
    Resolved,
    ServedFromCache,
    StrategyName,
)

__all__ = [
    "AvatarCacheError",
    "AvatarConfig",
    "AvatarPipeline",
    "AvatarRecord",
    "ConfigurationError",
    "Failed",
    "FetchTarget",
    "Outcome",
    "ResolutionExhaustedError",
    "Resolved",
    "ServedFromCache",
    "StorageError",
    "StrategyName",
    "TransportError",
    "build_config",
    "resolve_avatar",
    "resolve_avatar_async",
]
