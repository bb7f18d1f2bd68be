"""Package-level default configuration values."""

from __future__ import annotations

from pathlib import Path
from typing import Any

# Entity lookup
DEFAULT_ENTITY = "request.state.user"
DEFAULT_ENTITY_ID = "id"

# Strategy order
DEFAULT_ORDER = ("url", "gravatar", "location", "fallback_url")

# Cache settings
DEFAULT_CACHE_ENABLED = True
DEFAULT_CACHE_ROOT = Path.home() / ".avatarcache" / "avatars"

# Dimensions (pixels)
DEFAULT_WIDTH = 200
DEFAULT_HEIGHT = 200

# Gravatar
DEFAULT_GRAVATAR_PATH = "email"
DEFAULT_GRAVATAR_STYLE = "identicon"
DEFAULT_GRAVATAR_BASE_URL = "https://gravatar.com/avatar"

# Explicit URL field
DEFAULT_URL_PATH = "avatar"

# Static map image
DEFAULT_LOCATION_PATH = "location"
DEFAULT_MAP_BASE_URL = "https://api.mapbox.com/styles/v1"
DEFAULT_LATITUDE = 0.0
DEFAULT_LONGITUDE = 0.0
DEFAULT_ZOOM = 13.0
DEFAULT_BEARING = 0.0
DEFAULT_MAP_STYLE = "mapbox"
DEFAULT_MAP_STYLE_SUBTYPE = "streets-v11"

# Outbound HTTP
DEFAULT_REQUEST_TIMEOUT = 10.0

# Log level
DEFAULT_LOG_LEVEL = "WARNING"


def get_defaults() -> dict[str, Any]:
    """Return the top-level defaults as a flat dictionary for merging."""
    return {
        "entity": DEFAULT_ENTITY,
        "entity_id": DEFAULT_ENTITY_ID,
        "order": list(DEFAULT_ORDER),
        "cache": DEFAULT_CACHE_ENABLED,
        "cache_root": str(DEFAULT_CACHE_ROOT),
        "width": DEFAULT_WIDTH,
        "height": DEFAULT_HEIGHT,
        "fallback_url": False,
        "request_timeout": DEFAULT_REQUEST_TIMEOUT,
        "log_level": DEFAULT_LOG_LEVEL,
    }
