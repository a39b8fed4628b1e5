"""Client configuration."""

from __future__ import annotations

import os
import tempfile
from dataclasses import dataclass, field, fields
from typing import Any


DEFAULT_BASE_URL = "https://www.quandl.com/api"


@dataclass
class ClientConfig:
    """
    Configuration for the Quandl client.

    Can be set via:
    - Constructor arguments
    - Environment variables (QUANDL_*)
    - Config file (YAML)
    """
    # API key, sent as the auth_token query parameter
    api_key: str | None = field(
        default_factory=lambda: os.environ.get("QUANDL_API_KEY")
    )

    # API root the URL templates are built on
    base_url: str = field(
        default_factory=lambda: os.environ.get("QUANDL_BASE_URL", DEFAULT_BASE_URL)
    )

    # Request timeout (seconds)
    timeout: float = field(
        default_factory=lambda: float(os.environ.get("QUANDL_TIMEOUT", "30"))
    )

    # Response cache: none | memory | file | redis
    cache_backend: str = field(
        default_factory=lambda: os.environ.get("QUANDL_CACHE", "none")
    )
    cache_dir: str = field(
        default_factory=lambda: os.environ.get("QUANDL_CACHE_DIR", tempfile.gettempdir())
    )
    # Entry lifetime (seconds, 0 = no expiry)
    cache_ttl: float = field(
        default_factory=lambda: float(os.environ.get("QUANDL_CACHE_TTL", "3600"))
    )
    cache_max_size: int = 1000

    redis_url: str = field(
        default_factory=lambda: os.environ.get("QUANDL_REDIS_URL", "redis://localhost:6379/0")
    )
    redis_prefix: str = "quandl:"

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> ClientConfig:
        """Create config from a dictionary, ignoring unknown keys."""
        known = {f.name for f in fields(cls)}
        return cls(**{k: v for k, v in data.items() if k in known})

    @classmethod
    def from_yaml(cls, path: str) -> ClientConfig:
        """Load config from YAML file."""
        import yaml
        with open(path, "r") as f:
            data = yaml.safe_load(f)
        return cls.from_dict(data or {})
