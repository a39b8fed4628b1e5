"""Exceptions raised by the Quandl client."""

from __future__ import annotations

from typing import Any


class QuandlError(Exception):
    """Base exception for Quandl client errors."""
    pass


class NetworkError(QuandlError):
    """The HTTP request could not be completed."""

    def __init__(self, message: str, url: str | None = None):
        super().__init__(message)
        self.url = url


class CacheWriteError(QuandlError):
    """The response was fetched but could not be written to the cache."""

    def __init__(self, message: str, key: str | None = None):
        super().__init__(message)
        self.key = key


class DecodeError(QuandlError):
    """
    The response body could not be decoded into the expected shape.

    The raw body is kept so the literal server response can be inspected;
    provider-side errors usually surface here.
    """

    def __init__(self, raw: bytes, cause: Exception, url: str | None = None):
        self.raw = raw
        self.cause = cause
        self.url = url
        text = raw.decode("utf-8", errors="replace")
        super().__init__(f"JSON decode error:\nRESPONSE:\n{text}\n\nERROR:\n{cause}")


class TypeMismatchError(QuandlError, TypeError):
    """A column cell does not hold the requested type."""

    def __init__(self, index: int, expected: str, value: Any):
        self.index = index
        self.expected = expected
        self.value = value
        super().__init__(
            f"Cell {index}: expected {expected}, got {type(value).__name__} ({value!r})"
        )
