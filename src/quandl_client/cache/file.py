"""File-based response cache."""

from __future__ import annotations

import hashlib
import logging
import tempfile
import time
from pathlib import Path

from .base import Cacher


logger = logging.getLogger(__name__)


class FileCache(Cacher):
    """
    Cache that stores each response in its own file.

    Files are named ``quandl<md5(key)>`` inside ``directory`` (the system temp
    directory by default). An entry older than ``ttl_seconds`` is a miss;
    a TTL of 0 keeps entries forever.
    """

    def __init__(self, directory: str | Path | None = None, ttl_seconds: float = 3600.0):
        self.directory = Path(directory) if directory else Path(tempfile.gettempdir())
        self.ttl_seconds = ttl_seconds

    def path_for(self, key: str) -> Path:
        digest = hashlib.md5(key.encode("utf-8")).hexdigest()
        return self.directory / f"quandl{digest}"

    def get(self, key: str) -> bytes | None:
        path = self.path_for(key)
        try:
            if self.ttl_seconds > 0 and time.time() - path.stat().st_mtime > self.ttl_seconds:
                logger.debug(f"Cache file expired: {path}")
                return None
            return path.read_bytes()
        except FileNotFoundError:
            return None

    def set(self, key: str, data: bytes) -> None:
        self.directory.mkdir(parents=True, exist_ok=True)
        path = self.path_for(key)
        # Write then rename so readers never see a partial file
        tmp = path.with_suffix(".tmp")
        tmp.write_bytes(data)
        tmp.replace(path)
