"""Entity resolution — find the subject whose avatar is requested."""

from __future__ import annotations

import inspect
from typing import Any

from avatarcache.config.schema import AvatarConfig
from avatarcache.errors.exceptions import ConfigurationError
from avatarcache.utils.paths import resolve_path


async def resolve_entity(config: AvatarConfig, request: Any, response: Any) -> Any:
    """Resolve the entity from a dotted path or a locator function.

    A path is evaluated against ``{"request": request, "response": response}``.
    A function is called with ``(request, response)`` and awaited if it
    returns an awaitable.
    """
    locator = config.entity
    if isinstance(locator, str):
        return resolve_path({"request": request, "response": response}, locator)
    if callable(locator):
        result = locator(request, response)
        if inspect.isawaitable(result):
            result = await result
        return result
    raise ConfigurationError(
        f"entity must be a path or a callable, got {type(locator).__name__}",
        setting="entity",
    )
