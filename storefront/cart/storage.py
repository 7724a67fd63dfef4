"""
Storage backends for the serialized cart blob.

A backend holds exactly one blob under one key. Backends are allowed to
raise; the cart store decides how failures degrade.
"""
import os
from pathlib import Path
from typing import Optional, Protocol, Union

from upstash_redis import Redis

# Upstash Redis - standard env var names per docs
UPSTASH_REDIS_REST_URL = os.environ.get("UPSTASH_REDIS_REST_URL", "")
UPSTASH_REDIS_REST_TOKEN = os.environ.get("UPSTASH_REDIS_REST_TOKEN", "")

_sync_redis_client: Optional[Redis] = None


class CartStorage(Protocol):
    def get(self) -> Optional[bytes]:
        ...

    def set(self, data: bytes) -> None:
        ...

    def delete(self) -> None:
        ...


class MemoryStorage:
    """In-process blob, used by tests and single-process tools."""

    def __init__(self, data: Optional[bytes] = None):
        self.data = data

    def get(self) -> Optional[bytes]:
        return self.data

    def set(self, data: bytes) -> None:
        self.data = data

    def delete(self) -> None:
        self.data = None


class FileStorage:
    """Blob kept in a local file; a missing file reads as no cart."""

    def __init__(self, path: Union[str, Path]):
        self.path = Path(path)

    def get(self) -> Optional[bytes]:
        try:
            return self.path.read_bytes()
        except FileNotFoundError:
            return None

    def set(self, data: bytes) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        tmp_path = self.path.with_suffix(self.path.suffix + ".tmp")
        tmp_path.write_bytes(data)
        tmp_path.replace(self.path)

    def delete(self) -> None:
        self.path.unlink(missing_ok=True)


def is_redis_configured() -> bool:
    return bool(UPSTASH_REDIS_REST_URL and UPSTASH_REDIS_REST_TOKEN)


def get_redis_sync() -> Redis:
    """
    Get sync Upstash Redis client (singleton).

    Uses standard Upstash env var names:
    - UPSTASH_REDIS_REST_URL
    - UPSTASH_REDIS_REST_TOKEN
    """
    global _sync_redis_client

    if _sync_redis_client is None:
        if not is_redis_configured():
            raise ValueError("UPSTASH_REDIS_REST_URL and UPSTASH_REDIS_REST_TOKEN must be set")
        _sync_redis_client = Redis(url=UPSTASH_REDIS_REST_URL, token=UPSTASH_REDIS_REST_TOKEN)

    return _sync_redis_client


class RedisStorage:
    """Blob kept under a single Upstash Redis key (client-owned, one device)."""

    def __init__(self, key: str, client: Optional[Redis] = None):
        self.key = key
        self._client = client  # Lazy initialization

    @property
    def client(self) -> Redis:
        if self._client is None:
            self._client = get_redis_sync()
        return self._client

    def get(self) -> Optional[bytes]:
        value = self.client.get(self.key)
        if value is None:
            return None
        if isinstance(value, bytes):
            return value
        return str(value).encode("utf-8")

    def set(self, data: bytes) -> None:
        self.client.set(self.key, data.decode("utf-8"))

    def delete(self) -> None:
        self.client.delete(self.key)
