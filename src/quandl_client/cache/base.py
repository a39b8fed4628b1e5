"""Cache interface used by the fetcher."""

from __future__ import annotations

from abc import ABC, abstractmethod


class Cacher(ABC):
    """
    Base class for response caches.

    Keys are arbitrary strings and values are opaque response bytes.
    Lifetime and durability of entries belong to the implementation.
    """

    @abstractmethod
    def get(self, key: str) -> bytes | None:
        """Return cached bytes for key, or None on a miss."""
        ...

    @abstractmethod
    def set(self, key: str, data: bytes) -> None:
        """
        Store bytes under key.

        Raise on failure; the fetcher treats a failed write as a failed fetch.
        """
        ...
