"""Avatar pipeline — resolve, cache-check, select, fetch, persist, serve."""

from __future__ import annotations

import asyncio
import inspect
import logging
from pathlib import Path
from typing import Any

from avatarcache.cache.keys import derive_cache_key
from avatarcache.cache.store import AvatarStore
from avatarcache.config.schema import AvatarConfig, build_config
from avatarcache.errors.handler import default_error_handler
from avatarcache.fetch.client import AvatarFetcher
from avatarcache.host import Responder
from avatarcache.pipeline.entity import resolve_entity
from avatarcache.strategies.chain import StrategyChain
from avatarcache.types import Failed, Outcome, Resolved, ServedFromCache

logger = logging.getLogger(__name__)


class AvatarPipeline:
    """Serve an avatar for the subject of one request.

    Flow per request::

        entity ─┐
                ├─> cache key ─> hit?  ── yes ─> send file ─> ServedFromCache
        mkdir ──┘                     └─ no ──> strategy ─> fetch ─> send file ─> Resolved

    Any exception along the way is handed to the error handler exactly once
    and reported as ``Failed``. A cache hit is a normal return value, so it
    can never reach the handler.
    """

    def __init__(
        self,
        config: AvatarConfig,
        fetcher: AvatarFetcher | None = None,
        store: AvatarStore | None = None,
    ) -> None:
        self._config = config
        self._chain = StrategyChain.from_config(config)
        self._store = store or AvatarStore(config.cache_root)
        self._fetcher = fetcher or AvatarFetcher(timeout=config.request_timeout)
        self._error_handler = config.error_handler or default_error_handler

    @classmethod
    def from_overrides(cls, **overrides: Any) -> AvatarPipeline:
        """Build the configuration from keyword overrides and wrap it."""
        return cls(build_config(**overrides))

    @property
    def config(self) -> AvatarConfig:
        return self._config

    @property
    def chain(self) -> StrategyChain:
        return self._chain

    @property
    def store(self) -> AvatarStore:
        return self._store

    async def handle(self, request: Any, response: Responder) -> Outcome:
        """Run the pipeline for one request/response pair."""
        try:
            return await self._run(request, response)
        except Exception as exc:
            logger.debug("Avatar pipeline failed: %s", exc)
            await _maybe_await(self._error_handler(exc, request, response))
            return Failed(error=exc)

    async def close(self) -> None:
        await self._fetcher.close()

    async def _run(self, request: Any, response: Responder) -> Outcome:
        entity, _ = await asyncio.gather(
            resolve_entity(self._config, request, response),
            self._store.prepare(),
        )

        record = derive_cache_key(entity, request, self._config)

        if self._config.cache and await self._store.contains(record.cache_path):
            logger.debug("Cache hit: %s", record.cache_path)
            await _dispatch(response, record.cache_path)
            return ServedFromCache(record=record)

        logger.debug("Cache miss: %s", record.cache_path)
        target = self._chain.select(entity, record)
        await self._fetcher.fetch_to(target, record.cache_path)
        logger.info(
            "Cached avatar for '%s' via %s at %s",
            record.identity,
            record.strategy.value if record.strategy else "-",
            record.cache_path,
        )

        await _dispatch(response, record.cache_path)
        return Resolved(record=record)


async def _dispatch(response: Responder, path: Path) -> None:
    await _maybe_await(response.send_file(path))


async def _maybe_await(value: Any) -> Any:
    if inspect.isawaitable(value):
        return await value
    return value
