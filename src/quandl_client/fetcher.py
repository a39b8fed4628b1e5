"""Cache-backed retrieval of raw responses."""

from __future__ import annotations

import logging
from dataclasses import dataclass

import httpx

from .cache import Cacher
from .errors import CacheWriteError, NetworkError
from .urls import Format, PreparedRequest, mask_token


logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class RawPayload:
    """Raw response bytes and where they came from."""
    content: bytes
    format: Format
    url: str
    status_code: int | None = None
    from_cache: bool = False

    @property
    def text(self) -> str:
        return self.content.decode("utf-8", errors="replace")


class Fetcher:
    """
    Resolves a prepared request to raw bytes.

    Flow:
    1. Look the request up in the cache (if any); a hit skips the network
    2. GET the URL
    3. Write a successful response to the cache; a failed write fails the fetch
    """

    def __init__(self, http: httpx.Client, cache: Cacher | None = None):
        self.http = http
        self.cache = cache

    def fetch(self, request: PreparedRequest) -> RawPayload:
        if self.cache is not None:
            cached = self.cache.get(request.cache_key)
            if cached is not None:
                logger.debug(f"Cache hit for {mask_token(request.url)}")
                return RawPayload(
                    content=cached,
                    format=request.format,
                    url=request.url,
                    from_cache=True,
                )
            logger.debug(f"Cache miss for {mask_token(request.url)}")

        try:
            response = self.http.get(request.url)
            content = response.read()
        except httpx.RequestError as e:
            raise NetworkError(
                f"Request to {mask_token(request.url)} failed: {e}",
                url=request.url,
            ) from e

        if self.cache is not None:
            if response.is_success:
                try:
                    self.cache.set(request.cache_key, content)
                except Exception as e:
                    raise CacheWriteError(
                        f"Failed to cache response for {mask_token(request.url)}: {e}",
                        key=request.cache_key,
                    ) from e
            else:
                logger.warning(
                    f"Not caching HTTP {response.status_code} response from {mask_token(request.url)}"
                )

        return RawPayload(
            content=content,
            format=request.format,
            url=request.url,
            status_code=response.status_code,
        )
