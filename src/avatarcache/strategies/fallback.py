"""Static fallback URL."""

from __future__ import annotations

from typing import Any

from avatarcache.strategies.base import Strategy
from avatarcache.types import AvatarRecord, FetchTarget, StrategyName


class FallbackStrategy(Strategy):
    name = StrategyName.FALLBACK_URL

    def __init__(self, url: str) -> None:
        self._url = url

    def attempt(self, entity: Any, record: AvatarRecord) -> FetchTarget | None:
        if not self._url:
            return None
        return FetchTarget(url=self._url)
