"""Outbound fetch and persistence of avatar images."""

from avatarcache.fetch.client import AvatarFetcher

__all__ = ["AvatarFetcher"]
