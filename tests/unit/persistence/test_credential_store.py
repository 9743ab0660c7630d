"""
Unit tests for credential stores.
"""

from unittest.mock import AsyncMock, MagicMock, patch

import pytest

from review_sentiment.config import Settings
from review_sentiment.persistence.credential_store import (
    InMemoryCredentialStore,
    RedisCredentialStore,
    create_credential_store,
)


@pytest.fixture
def mock_redis():
    """Mock async Redis client."""
    redis = MagicMock()
    redis.get = AsyncMock(return_value="hf_secret")
    redis.set = AsyncMock(return_value=True)
    redis.delete = AsyncMock(return_value=1)
    return redis


class TestInMemoryCredentialStore:

    @pytest.mark.asyncio
    async def test_set_get_remove(self):
        store = InMemoryCredentialStore()

        assert await store.get("huggingface_token") is None
        await store.set("huggingface_token", "hf_abc")
        assert await store.get("huggingface_token") == "hf_abc"
        await store.remove("huggingface_token")
        assert await store.get("huggingface_token") is None

    @pytest.mark.asyncio
    async def test_remove_missing_key(self):
        store = InMemoryCredentialStore()

        await store.remove("missing")  # Should not raise

    @pytest.mark.asyncio
    async def test_initial_values_copied(self):
        initial = {"huggingface_token": "hf_seed"}
        store = InMemoryCredentialStore(initial)
        await store.remove("huggingface_token")

        assert initial == {"huggingface_token": "hf_seed"}


class TestRedisCredentialStore:

    @pytest.mark.asyncio
    async def test_get_uses_prefixed_key(self, mock_redis):
        store = RedisCredentialStore(mock_redis)

        value = await store.get("huggingface_token")

        assert value == "hf_secret"
        mock_redis.get.assert_awaited_once_with("review_sentiment:credential:huggingface_token")

    @pytest.mark.asyncio
    async def test_set(self, mock_redis):
        store = RedisCredentialStore(mock_redis)

        await store.set("huggingface_token", "hf_new")

        mock_redis.set.assert_awaited_once_with(
            "review_sentiment:credential:huggingface_token", "hf_new"
        )

    @pytest.mark.asyncio
    async def test_remove(self, mock_redis):
        store = RedisCredentialStore(mock_redis)

        await store.remove("huggingface_token")

        mock_redis.delete.assert_awaited_once_with("review_sentiment:credential:huggingface_token")


class TestCreateCredentialStore:

    @pytest.mark.asyncio
    async def test_memory_seeded_from_env_token(self):
        settings = Settings(CREDENTIAL_BACKEND="memory", HF_TOKEN="hf_env")

        store = create_credential_store(settings)

        assert isinstance(store, InMemoryCredentialStore)
        assert await store.get("huggingface_token") == "hf_env"

    @pytest.mark.asyncio
    async def test_memory_without_token(self):
        store = create_credential_store(Settings(CREDENTIAL_BACKEND="memory", HF_TOKEN=None))

        assert await store.get("huggingface_token") is None

    def test_redis_backend(self):
        settings = Settings(CREDENTIAL_BACKEND="redis")
        client = MagicMock()

        with patch(
            "review_sentiment.persistence.credential_store.RedisClient.get_async_client",
            return_value=client,
        ) as mock_get_client:
            store = create_credential_store(settings)

        assert isinstance(store, RedisCredentialStore)
        assert store.redis is client
        mock_get_client.assert_called_once_with(settings)

    def test_unknown_backend(self):
        with pytest.raises(ValueError, match="Unknown credential backend"):
            create_credential_store(Settings(CREDENTIAL_BACKEND="vault"))
