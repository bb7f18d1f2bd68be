"""Async image fetcher — streams a remote image into the cache path."""

from __future__ import annotations

import asyncio
import logging
import os
import uuid
from pathlib import Path
from typing import BinaryIO

import httpx

from avatarcache.config.defaults import DEFAULT_REQUEST_TIMEOUT
from avatarcache.errors.exceptions import StorageError, TransportError
from avatarcache.types import FetchTarget

logger = logging.getLogger(__name__)

_CHUNK_SIZE = 64 * 1024


class AvatarFetcher:
    """GETs fetch targets over HTTP and persists the body to disk.

    Bytes go to a sibling ``.part`` file that replaces the cache path only
    once the whole body has been written, so a failed transfer never
    leaves a truncated image behind.
    """

    def __init__(
        self,
        client: httpx.AsyncClient | None = None,
        timeout: float = DEFAULT_REQUEST_TIMEOUT,
    ) -> None:
        self._client = client
        self._owns_client = client is None
        self._timeout = timeout

    async def fetch_to(self, target: FetchTarget, path: Path) -> Path:
        """Stream ``target`` into ``path`` and return ``path``."""
        client = self._get_client()
        tmp_path = path.with_name(f"{path.name}.{uuid.uuid4().hex}.part")

        logger.debug("Fetching %s -> %s", target.url, path)
        completed = False
        try:
            async with client.stream("GET", target.url, params=target.params) as response:
                _ensure_success(response, target.url)
                await self._write_stream(response, tmp_path)
            await asyncio.to_thread(os.replace, tmp_path, path)
            completed = True
        except httpx.HTTPError as exc:
            raise TransportError(
                f"Failed to fetch avatar from {target.url}: {exc}",
                url=target.url,
                original=exc,
            ) from exc
        except OSError as exc:
            raise StorageError(
                f"Failed to write avatar to {path}: {exc}",
                path=path,
                original=exc,
            ) from exc
        finally:
            if not completed:
                await _discard(tmp_path)

        return path

    async def close(self) -> None:
        if self._client is not None and self._owns_client:
            await self._client.aclose()
            self._client = None

    async def _write_stream(self, response: httpx.Response, tmp_path: Path) -> int:
        handle: BinaryIO = await asyncio.to_thread(open, tmp_path, "wb")
        written = 0
        try:
            async for chunk in response.aiter_bytes(_CHUNK_SIZE):
                if not chunk:
                    continue
                await asyncio.to_thread(handle.write, chunk)
                written += len(chunk)
        finally:
            await asyncio.to_thread(handle.close)
        logger.debug("Wrote %d bytes to %s", written, tmp_path)
        return written

    def _get_client(self) -> httpx.AsyncClient:
        if self._client is None:
            self._client = httpx.AsyncClient(timeout=self._timeout, follow_redirects=True)
        return self._client


def _ensure_success(response: httpx.Response, url: str) -> None:
    if response.is_success:
        return
    raise TransportError(
        f"Avatar source {url} answered HTTP {response.status_code}",
        url=url,
        http_status=response.status_code,
    )


async def _discard(path: Path) -> None:
    try:
        await asyncio.to_thread(path.unlink, missing_ok=True)
    except OSError as e:
        logger.debug("Could not remove partial file %s: %s", path, e)
