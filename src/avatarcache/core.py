"""Top-level entry points for resolving avatars outside a web request."""

from __future__ import annotations

import asyncio
import logging
from pathlib import Path
from typing import Any

from avatarcache.config.schema import AvatarConfig, build_config
from avatarcache.pipeline.engine import AvatarPipeline
from avatarcache.types import Failed, Outcome

logger = logging.getLogger(__name__)


class PathResponder:
    """Records the file the pipeline serves instead of sending it anywhere."""

    def __init__(self) -> None:
        self.path: Path | None = None

    def send_file(self, path: Path) -> None:
        self.path = path


def _ignore_error(error: Exception, request: Any, response: Any) -> None:
    """Errors are re-raised by the caller from the Failed outcome."""


async def resolve_avatar_async(entity: Any, config: AvatarConfig) -> Outcome:
    """Run the pipeline for a literal ``entity``.

    The configured ``entity`` locator is replaced so the given object is
    used, and a Failed outcome is returned rather than handled.
    """
    config = config.model_copy(
        update={"entity": lambda request, response: entity, "error_handler": _ignore_error}
    )
    pipeline = AvatarPipeline(config)
    try:
        return await pipeline.handle(None, PathResponder())
    finally:
        await pipeline.close()


def resolve_avatar(entity: Any, **overrides: Any) -> Path:
    """Resolve and cache the avatar for ``entity`` (sync wrapper).

    Returns the cache path; raises the pipeline's error on failure.
    """
    outcome = asyncio.run(resolve_avatar_async(entity, build_config(**overrides)))
    if isinstance(outcome, Failed):
        raise outcome.error
    return outcome.record.cache_path
