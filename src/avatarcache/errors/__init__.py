"""Error handling — exception hierarchy and the default error handler."""

from avatarcache.errors.exceptions import (
    AvatarCacheError,
    ConfigurationError,
    ResolutionExhaustedError,
    StorageError,
    TransportError,
)

__all__ = [
    "AvatarCacheError",
    "ConfigurationError",
    "ResolutionExhaustedError",
    "TransportError",
    "StorageError",
]
