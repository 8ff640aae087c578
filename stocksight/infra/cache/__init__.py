"""In-memory cache infrastructure — typed TTL cache."""

from .memory import CacheEntry, TypedCache

__all__ = ["CacheEntry", "TypedCache"]
