"""Integration test fixtures (service checks and prerequisites).

Provides fixtures for checking if external services are available.
Integration tests are skipped if required services are not running.
"""

import httpx
import pytest
import pytest_asyncio
from redis import Redis
from redis.asyncio import Redis as AsyncRedis

INTEGRATION_MODEL = "distilbert-base-uncased-finetuned-sst-2-english"


@pytest.fixture(scope="session")
def check_huggingface_hub():
    """Check if the Hugging Face hub is reachable.

    Skips tests if model downloads are impossible (offline CI).
    """
    try:
        response = httpx.get(f"https://huggingface.co/api/models/{INTEGRATION_MODEL}", timeout=10)
        if response.status_code != 200:
            pytest.skip("Hugging Face hub not available (non-200 status)")
    except Exception as e:
        pytest.skip(f"Hugging Face hub not available: {e}")


@pytest.fixture(scope="session")
def check_redis():
    """Check if Redis is available at localhost:6379.

    Skips tests if Redis is not reachable.
    """
    try:
        client = Redis.from_url("redis://localhost:6379/0")
        client.ping()
        client.close()
    except Exception as e:
        pytest.skip(f"Redis not available: {e}")


@pytest_asyncio.fixture
async def real_async_redis_client(check_redis):
    """Real AsyncRedis client instance for integration tests.

    Requires Redis to be running (checked by check_redis fixture).
    Uses database 15 (test database).
    """
    client = AsyncRedis.from_url("redis://localhost:6379/15", decode_responses=True)

    # Clear test database before test
    await client.flushdb()

    yield client

    # Clear test database after test
    await client.flushdb()
    await client.aclose()


@pytest.fixture
def integration_settings(test_settings):
    """Settings for integration tests with real services.

    Points to localhost Redis and a small public sentiment model.
    """
    test_settings.ENGINE_CANDIDATES = ["does-not-exist/sentiment-model", INTEGRATION_MODEL]
    test_settings.ENGINE_DEVICE = "cpu"
    test_settings.REDIS_URL = "redis://localhost:6379/15"  # Test database
    test_settings.PROMETHEUS_ENABLED = False

    return test_settings
