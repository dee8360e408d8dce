"""Session store: string values by key. Production: Redis."""
import logging
from abc import ABC, abstractmethod
from typing import Any, Optional

import redis

logger = logging.getLogger(__name__)


class SessionStore(ABC):
    """Interface for short-term session state (get/put a string by key)."""

    backend_name: str = "abstract"

    @abstractmethod
    def get(self, key: str) -> Optional[str]:
        """Get the stored value, or None when the key is absent."""
        pass

    @abstractmethod
    def put(self, key: str, value: str) -> None:
        """Store value under key. Last writer wins."""
        pass


class InMemorySessionStore(SessionStore):
    """In-memory store. Default when REDIS_URL is not set; contents are lost on restart."""

    backend_name = "memory"

    def __init__(self) -> None:
        self._store: dict[str, str] = {}

    def get(self, key: str) -> Optional[str]:
        return self._store.get(key)

    def put(self, key: str, value: str) -> None:
        self._store[key] = value


class RedisSessionStore(SessionStore):
    """
    Redis-backed store. Values are plain strings (decode_responses=True).
    ttl_seconds > 0 sets an expiry on every put; 0 keeps keys until evicted.
    """

    backend_name = "redis"

    def __init__(self, url: str = "", ttl_seconds: int = 0, client: Any = None) -> None:
        if client is None and not url:
            raise ValueError("RedisSessionStore requires REDIS_URL (e.g. redis://localhost:6379/0) or a client.")
        self._client = client if client is not None else redis.Redis.from_url(url, decode_responses=True)
        self.ttl_seconds = max(0, ttl_seconds)

    def get(self, key: str) -> Optional[str]:
        return self._client.get(key)

    def put(self, key: str, value: str) -> None:
        if self.ttl_seconds:
            self._client.set(key, value, ex=self.ttl_seconds)
        else:
            self._client.set(key, value)


def build_session_store(redis_url: str = "", ttl_seconds: int = 0) -> SessionStore:
    """Return RedisSessionStore when redis_url is set, else InMemorySessionStore."""
    if redis_url:
        logger.info("Using Redis session store (ttl=%ss)", ttl_seconds)
        return RedisSessionStore(url=redis_url, ttl_seconds=ttl_seconds)
    logger.info("REDIS_URL not set; using in-memory session store")
    return InMemorySessionStore()
