"""Dotted-path lookups into arbitrary structured values."""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from typing import Any

_MISSING = object()

def resolve_path(source: Any, path: str) -> Any | None:
    """Walk ``path`` (e.g. ``"request.state.user"``) through ``source``.

    Each segment is looked up as a mapping key, a sequence index (digits
    only) or an attribute. Mappings that are not plain dicts (a Starlette
    ``Request``, for one) offer their non-callable attributes first.
    Returns None as soon as a segment cannot be followed.
    """
    if not path:
        return None

    current = source
    for segment in path.split("."):
        if current is None:
            return None
        current = _step(current, segment)
    return current


def is_present(value: Any) -> bool:
    """True for anything except None and the empty string."""
    return value is not None and value != ""


def _step(value: Any, segment: str) -> Any | None:
    if isinstance(value, dict):
        return value.get(segment)
    if isinstance(value, Mapping):
        # Request objects are mappings over their raw scope; their public
        # attributes (query_params, headers, state) win over scope keys.
        attr = getattr(value, segment, _MISSING)
        if attr is not _MISSING and not callable(attr):
            return attr
        return value.get(segment)
    if isinstance(value, Sequence) and not isinstance(value, (str, bytes)):
        if segment.lstrip("-").isdigit():
            index = int(segment)
            if -len(value) <= index < len(value):
                return value[index]
        return None
    return getattr(value, segment, None)
