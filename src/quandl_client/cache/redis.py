"""Redis response cache."""

from __future__ import annotations

import logging

import redis

from .base import Cacher


logger = logging.getLogger(__name__)


class RedisCache(Cacher):
    """
    Redis-based cache for raw responses.

    Can be shared across processes and survives restarts.

    Key format: {prefix}{key}
    Value: raw response bytes
    """

    def __init__(
        self,
        client: redis.Redis,
        prefix: str = "quandl:",
        ttl_seconds: int = 3600,
    ):
        self._client = client
        self.prefix = prefix
        self.ttl_seconds = ttl_seconds

    @classmethod
    def from_url(cls, url: str, prefix: str = "quandl:", ttl_seconds: int = 3600) -> RedisCache:
        """Create a cache connected to a redis:// URL."""
        return cls(redis.Redis.from_url(url), prefix=prefix, ttl_seconds=ttl_seconds)

    def _key(self, key: str) -> str:
        return f"{self.prefix}{key}"

    def get(self, key: str) -> bytes | None:
        """Cached bytes, or None if missing or Redis is unavailable."""
        try:
            return self._client.get(self._key(key))
        except redis.RedisError as e:
            logger.error(f"Redis get error for {key}: {e}")
            return None

    def set(self, key: str, data: bytes) -> None:
        if self.ttl_seconds > 0:
            self._client.setex(self._key(key), self.ttl_seconds, data)
        else:
            self._client.set(self._key(key), data)

    def delete(self, key: str) -> bool:
        """Delete a cached entry."""
        return bool(self._client.delete(self._key(key)))
