"""Cache subsystem — content-addressed PNG files keyed by identity and size."""

from avatarcache.cache.keys import cache_path_for, derive_cache_key, resolve_dimensions
from avatarcache.cache.store import AvatarStore, StoreStats

__all__ = [
    "AvatarStore",
    "StoreStats",
    "cache_path_for",
    "derive_cache_key",
    "resolve_dimensions",
]
