"""
Credential storage for engine acquisition tokens.

The stored value is opaque: it is never validated, only forwarded to
engine acquisition. Two backends:
- InMemoryCredentialStore: process-local dict (default, tests)
- RedisCredentialStore: survives restarts, shared between workers
"""

from typing import Optional, Protocol

import structlog
from redis.asyncio import Redis as AsyncRedis

from review_sentiment.config import Settings
from review_sentiment.persistence.redis_client import RedisClient

logger = structlog.get_logger(__name__)


class CredentialStore(Protocol):
    """Key-value persistence capability supplied by the environment."""

    async def get(self, key: str) -> Optional[str]:
        ...

    async def set(self, key: str, value: str) -> None:
        ...

    async def remove(self, key: str) -> None:
        ...


class InMemoryCredentialStore:
    """Credential store backed by a dict; contents are lost on restart."""

    def __init__(self, initial: Optional[dict[str, str]] = None):
        self._values: dict[str, str] = dict(initial or {})

    async def get(self, key: str) -> Optional[str]:
        return self._values.get(key)

    async def set(self, key: str, value: str) -> None:
        self._values[key] = value

    async def remove(self, key: str) -> None:
        self._values.pop(key, None)


class RedisCredentialStore:
    """
    Credential store backed by Redis.

    Keys are namespaced with a prefix so the store can share a database
    with other applications.
    """

    KEY_PREFIX = "review_sentiment:credential:"

    def __init__(self, redis_client: AsyncRedis):
        """
        Initialize store.

        Args:
            redis_client: Async Redis client (decode_responses=True)
        """
        self.redis = redis_client

    def _key(self, key: str) -> str:
        return f"{self.KEY_PREFIX}{key}"

    async def get(self, key: str) -> Optional[str]:
        value = await self.redis.get(self._key(key))
        logger.debug("Credential lookup", key=key, found=value is not None)
        return value

    async def set(self, key: str, value: str) -> None:
        await self.redis.set(self._key(key), value)
        logger.info("Credential stored", key=key)

    async def remove(self, key: str) -> None:
        await self.redis.delete(self._key(key))
        logger.info("Credential removed", key=key)


def create_credential_store(settings: Settings) -> CredentialStore:
    """
    Build the configured credential store.

    Seeds the store with HF_TOKEN when it is set, so a token provided via
    the environment is picked up like one saved through the API.

    Raises:
        ValueError: Unknown CREDENTIAL_BACKEND
    """
    backend = settings.CREDENTIAL_BACKEND.lower()
    if backend == "memory":
        initial = {settings.CREDENTIAL_KEY: settings.HF_TOKEN} if settings.HF_TOKEN else None
        return InMemoryCredentialStore(initial)
    if backend == "redis":
        if settings.HF_TOKEN:
            logger.warning(
                "HF_TOKEN is ignored with the redis credential backend; store it via PUT /credential"
            )
        return RedisCredentialStore(RedisClient.get_async_client(settings))
    raise ValueError(f"Unknown credential backend: {settings.CREDENTIAL_BACKEND}")
