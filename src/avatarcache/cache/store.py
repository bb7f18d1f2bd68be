"""On-disk avatar store — one PNG per identity and size, no index."""

from __future__ import annotations

import asyncio
import logging
from pathlib import Path

from pydantic import BaseModel

logger = logging.getLogger(__name__)


class StoreStats(BaseModel):
    """Aggregate view of the cache root."""

    entries: int = 0
    size_bytes: int = 0

    @property
    def size_mb(self) -> float:
        return self.size_bytes / (1024 * 1024)


class AvatarStore:
    """File-system cache rooted at ``root``.

    Existence of the file is the only state tracked; entries are never
    updated in place or evicted here.
    """

    def __init__(self, root: Path) -> None:
        self._root = Path(root)

    @property
    def root(self) -> Path:
        return self._root

    async def prepare(self) -> None:
        """Create the cache root. Failures are logged and ignored."""
        try:
            await asyncio.to_thread(self._root.mkdir, parents=True, exist_ok=True)
        except OSError as e:
            logger.debug("Could not create cache root %s: %s", self._root, e)

    async def contains(self, path: Path) -> bool:
        """Check for a cached file. Any stat failure counts as a miss."""
        try:
            return await asyncio.to_thread(path.is_file)
        except OSError as e:
            logger.debug("Cache lookup failed for %s: %s", path, e)
            return False

    def stats(self) -> StoreStats:
        """Count cached images under the root."""
        if not self._root.is_dir():
            return StoreStats()
        files = [p for p in self._root.glob("*.png") if p.is_file()]
        return StoreStats(
            entries=len(files),
            size_bytes=sum(p.stat().st_size for p in files),
        )
