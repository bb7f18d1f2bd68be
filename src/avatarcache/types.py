"""Shared Pydantic models for avatarcache."""

from __future__ import annotations

from enum import StrEnum
from pathlib import Path
from typing import Any

from pydantic import BaseModel, ConfigDict, Field

# ── Enums ──


class StrategyName(StrEnum):
    URL = "url"
    GRAVATAR = "gravatar"
    LOCATION = "location"
    FALLBACK_URL = "fallback_url"


# ── Runtime models ──


class FetchTarget(BaseModel):
    """A remote image to retrieve: a URL plus optional query parameters."""

    model_config = ConfigDict(frozen=True)

    url: str
    params: dict[str, Any] | None = None


class Location(BaseModel):
    """Map position rendered by the location strategy."""

    latitude: float
    longitude: float
    zoom: float
    bearing: float
    style: str
    style_subtype: str


class AvatarRecord(BaseModel):
    """Per-request working record threaded through the pipeline."""

    identity: str = ""
    width: int = Field(gt=0)
    height: int = Field(gt=0)
    cache_path: Path
    target: FetchTarget | None = None
    strategy: StrategyName | None = None

    @property
    def size(self) -> int:
        return max(self.width, self.height)


# ── Pipeline outcomes ──


class ServedFromCache(BaseModel):
    """The cached file already existed and was dispatched."""

    record: AvatarRecord


class Resolved(BaseModel):
    """A strategy matched; the image was fetched, persisted and dispatched."""

    record: AvatarRecord


class Failed(BaseModel):
    """A stage raised; the error handler has been invoked."""

    model_config = ConfigDict(arbitrary_types_allowed=True)

    error: Exception


Outcome = ServedFromCache | Resolved | Failed
