"""Shared test fixtures for the Quandl client tests.

The network is replaced with an httpx.MockTransport that serves canned
provider responses and records every request it receives.
"""

from __future__ import annotations

import pytest

from quandl_client.cache import MemoryCache
from quandl_client.client import QuandlClient
from quandl_client.config import ClientConfig

from tests.samples import BASE_URL, FakeQuandl


# =============================================================================
# Fixtures
# =============================================================================

@pytest.fixture
def fake_quandl() -> FakeQuandl:
    return FakeQuandl()


@pytest.fixture
def config() -> ClientConfig:
    """Config that does not depend on the environment."""
    return ClientConfig(api_key=None, base_url=BASE_URL, cache_backend="none", timeout=5)


@pytest.fixture
def cache() -> MemoryCache:
    return MemoryCache(max_size=100, ttl_seconds=0)


@pytest.fixture
def client(config, fake_quandl) -> QuandlClient:
    """Client without a cache."""
    with QuandlClient(config=config, transport=fake_quandl.transport) as c:
        yield c


@pytest.fixture
def cached_client(config, cache, fake_quandl) -> QuandlClient:
    """Client backed by an in-memory cache."""
    with QuandlClient(config=config, cache=cache, transport=fake_quandl.transport) as c:
        yield c
