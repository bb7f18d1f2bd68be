"""Request pipeline — entity resolution through response dispatch."""

from avatarcache.pipeline.engine import AvatarPipeline
from avatarcache.pipeline.entity import resolve_entity

__all__ = ["AvatarPipeline", "resolve_entity"]
