"""Strategy chain — evaluate strategies in configured order, first match wins."""

from __future__ import annotations

import logging
from collections.abc import Iterable
from typing import Any

from avatarcache.config.schema import AvatarConfig
from avatarcache.errors.exceptions import ConfigurationError, ResolutionExhaustedError
from avatarcache.strategies.base import Strategy
from avatarcache.strategies.fallback import FallbackStrategy
from avatarcache.strategies.gravatar import GravatarStrategy
from avatarcache.strategies.location import LocationStrategy
from avatarcache.strategies.url import UrlStrategy
from avatarcache.types import AvatarRecord, FetchTarget, StrategyName

logger = logging.getLogger(__name__)


def build_strategy(name: StrategyName | str, config: AvatarConfig) -> Strategy:
    """Instantiate one strategy from its settings in ``config``."""
    try:
        name = StrategyName(name)
    except ValueError as exc:
        raise ConfigurationError(f"Unknown avatar strategy '{name}'", setting="order") from exc

    if name == StrategyName.URL and config.url is not False:
        return UrlStrategy(config.url)
    if name == StrategyName.GRAVATAR and config.gravatar is not False:
        return GravatarStrategy(config.gravatar)
    if name == StrategyName.LOCATION and config.location is not False:
        return LocationStrategy(config.location, access_token=config.mapbox_access_token)
    if name == StrategyName.FALLBACK_URL and config.fallback_url is not False:
        return FallbackStrategy(config.fallback_url)
    raise ConfigurationError(f"Avatar strategy '{name.value}' is disabled", setting=name.value)


class StrategyChain:
    """Ordered strategies; disabled ones are dropped without reordering the rest."""

    def __init__(self, strategies: Iterable[Strategy]) -> None:
        self._strategies = list(strategies)

    @classmethod
    def from_config(cls, config: AvatarConfig) -> StrategyChain:
        strategies = []
        for name in config.order:
            name = StrategyName(name)
            if not config.is_enabled(name):
                logger.debug("Strategy '%s' disabled, skipping", name.value)
                continue
            strategies.append(build_strategy(name, config))
        return cls(strategies)

    @property
    def names(self) -> list[str]:
        return [s.name.value for s in self._strategies]

    def select(self, entity: Any, record: AvatarRecord) -> FetchTarget:
        """Return the first strategy's target and record which one matched.

        Raises ResolutionExhaustedError if no strategy matches.
        """
        for strategy in self._strategies:
            target = strategy.attempt(entity, record)
            if target is not None and target.url:
                record.target = target
                record.strategy = strategy.name
                logger.debug(
                    "Strategy '%s' matched for identity '%s'",
                    strategy.name.value,
                    record.identity,
                )
                return target

        raise ResolutionExhaustedError(
            f"No avatar resolved (tried: {', '.join(self.names) or 'none'})",
            tried=self.names,
        )
