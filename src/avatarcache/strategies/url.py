"""Explicit avatar URL stored on the entity."""

from __future__ import annotations

from typing import Any

from avatarcache.config.schema import UrlSettings
from avatarcache.strategies.base import Strategy
from avatarcache.types import AvatarRecord, FetchTarget, StrategyName
from avatarcache.utils.paths import is_present, resolve_path


class UrlStrategy(Strategy):
    name = StrategyName.URL

    def __init__(self, settings: UrlSettings) -> None:
        self._settings = settings

    def attempt(self, entity: Any, record: AvatarRecord) -> FetchTarget | None:
        value = resolve_path(entity, self._settings.path)
        if not is_present(value):
            return None
        return FetchTarget(url=str(value))
