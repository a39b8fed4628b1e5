"""Response caches for the Quandl client."""

from __future__ import annotations

from typing import TYPE_CHECKING

from .base import Cacher
from .file import FileCache
from .memory import MemoryCache, CacheEntry
from .redis import RedisCache

if TYPE_CHECKING:
    from ..config import ClientConfig


CACHE_BACKENDS = ("none", "memory", "file", "redis")


def build_cache(config: ClientConfig) -> Cacher | None:
    """Create the cache selected by config.cache_backend (None for "none")."""
    backend = config.cache_backend.lower()
    if backend == "none":
        return None
    if backend == "memory":
        return MemoryCache(max_size=config.cache_max_size, ttl_seconds=config.cache_ttl)
    if backend == "file":
        return FileCache(directory=config.cache_dir, ttl_seconds=config.cache_ttl)
    if backend == "redis":
        return RedisCache.from_url(
            config.redis_url,
            prefix=config.redis_prefix,
            ttl_seconds=int(config.cache_ttl),
        )
    raise ValueError(
        f"Unknown cache backend: {config.cache_backend} (expected one of {', '.join(CACHE_BACKENDS)})"
    )


__all__ = [
    "build_cache",
    "CACHE_BACKENDS",
    "Cacher",
    "CacheEntry",
    "FileCache",
    "MemoryCache",
    "RedisCache",
]
