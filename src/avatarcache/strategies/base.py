"""Strategy interface."""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any, ClassVar

from avatarcache.types import AvatarRecord, FetchTarget, StrategyName


class Strategy(ABC):
    """Attempts to derive a fetchable image from an entity."""

    name: ClassVar[StrategyName]

    @abstractmethod
    def attempt(self, entity: Any, record: AvatarRecord) -> FetchTarget | None:
        """Return a fetch target, or None when the entity does not qualify."""

    def __repr__(self) -> str:
        return f"<{type(self).__name__} {self.name.value}>"
