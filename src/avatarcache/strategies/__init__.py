"""Avatar resolution strategies and the ordered chain that runs them."""

from avatarcache.strategies.base import Strategy
from avatarcache.strategies.chain import StrategyChain, build_strategy
from avatarcache.strategies.fallback import FallbackStrategy
from avatarcache.strategies.gravatar import GravatarStrategy, gravatar_hash
from avatarcache.strategies.location import LocationStrategy
from avatarcache.strategies.url import UrlStrategy

__all__ = [
    "Strategy",
    "StrategyChain",
    "build_strategy",
    "UrlStrategy",
    "GravatarStrategy",
    "LocationStrategy",
    "FallbackStrategy",
    "gravatar_hash",
]
