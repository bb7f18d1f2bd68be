"""Custom exception hierarchy for avatarcache."""

from __future__ import annotations

from pathlib import Path
from typing import Any


class AvatarCacheError(Exception):
    """Base exception for all avatarcache errors."""

    def __init__(self, message: str = "", **kwargs: Any) -> None:
        super().__init__(message)
        self.message = message


class ConfigurationError(AvatarCacheError):
    """Invalid configuration — fail fast, never retried.

    Examples: unknown strategy name, malformed size, bad entity locator.
    """

    def __init__(self, message: str = "", setting: str | None = None) -> None:
        super().__init__(message)
        self.setting = setting


class ResolutionExhaustedError(AvatarCacheError):
    """No strategy in the configured order produced a fetch target."""

    def __init__(self, message: str = "", tried: list[str] | None = None) -> None:
        super().__init__(message)
        self.tried = tried or []


class TransportError(AvatarCacheError):
    """The outbound image request failed.

    Examples: connection error, timeout, non-2xx status.
    """

    def __init__(
        self,
        message: str = "",
        url: str | None = None,
        http_status: int | None = None,
        original: Exception | None = None,
    ) -> None:
        super().__init__(message)
        self.url = url
        self.http_status = http_status
        self.original = original


class StorageError(AvatarCacheError):
    """Writing the fetched image to the cache path failed."""

    def __init__(
        self,
        message: str = "",
        path: Path | None = None,
        original: Exception | None = None,
    ) -> None:
        super().__init__(message)
        self.path = path
        self.original = original
