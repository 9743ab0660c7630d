"""
Persistence layer for Review Sentiment.

Provides credential storage (in-memory or Redis) for the optional token
used when downloading inference engines.
"""

from review_sentiment.persistence.credential_store import (
    CredentialStore,
    InMemoryCredentialStore,
    RedisCredentialStore,
    create_credential_store,
)
from review_sentiment.persistence.redis_client import RedisClient

__all__ = [
    "CredentialStore",
    "InMemoryCredentialStore",
    "RedisClient",
    "RedisCredentialStore",
    "create_credential_store",
]
