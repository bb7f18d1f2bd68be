"""Gravatar hash lookup."""

from __future__ import annotations

import hashlib
from typing import Any

from avatarcache.config.schema import GravatarSettings
from avatarcache.strategies.base import Strategy
from avatarcache.types import AvatarRecord, FetchTarget, StrategyName
from avatarcache.utils.paths import is_present, resolve_path


def gravatar_hash(value: Any) -> str:
    """MD5 hex digest of ``str(value)``, as the service expects."""
    return hashlib.md5(str(value).encode("utf-8")).hexdigest()  # noqa: S324


class GravatarStrategy(Strategy):
    """Matches when the entity has a hash source (its email by default).

    The service renders ``style`` (``d=``) for unknown hashes, so a match
    here always yields an image.
    """

    name = StrategyName.GRAVATAR

    def __init__(self, settings: GravatarSettings) -> None:
        self._settings = settings

    def attempt(self, entity: Any, record: AvatarRecord) -> FetchTarget | None:
        value = resolve_path(entity, self._settings.path)
        if not is_present(value):
            return None
        base_url = self._settings.base_url.rstrip("/")
        return FetchTarget(
            url=f"{base_url}/{gravatar_hash(value)}",
            params={"size": record.size, "d": self._settings.style},
        )
