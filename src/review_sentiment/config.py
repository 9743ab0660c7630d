"""
Configuration settings for the Review Sentiment demo service.

All settings are loaded from environment variables with sensible defaults.
Use .env file for local development.
"""

from pydantic_settings import BaseSettings, SettingsConfigDict
from typing import Optional


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # === Application ===
    APP_NAME: str = "Review Sentiment"
    APP_VERSION: str = "0.1.0"
    DEBUG: bool = False
    LOG_LEVEL: str = "INFO"
    ENVIRONMENT: str = "development"

    # === Corpus ===
    CORPUS_SOURCE: str = "reviews_test.tsv"  # Local path or http(s) URL
    CORPUS_PRIMARY_FIELD: str = "summary"
    CORPUS_FALLBACK_FIELD: str = "text"
    CORPUS_FETCH_TIMEOUT: int = 30  # seconds

    # === Inference Engines ===
    # Tried in order, first successful acquisition wins
    ENGINE_CANDIDATES: list[str] = [
        "nlptown/bert-base-multilingual-uncased-sentiment",
        "distilbert-base-uncased-finetuned-sst-2-english",
        "j-hartmann/emotion-english-distilroberta-base",
    ]
    ENGINE_AUTH_REQUIRED: list[str] = []  # Candidates skipped without a credential
    ENGINE_TASK: str = "text-classification"
    ENGINE_DEVICE: Optional[str] = None  # e.g. "cpu", "cuda:0"; None lets transformers decide
    ANALYZE_TIMEOUT_SECONDS: Optional[float] = None  # None = wait indefinitely

    # === Credentials ===
    CREDENTIAL_BACKEND: str = "memory"  # "memory" or "redis"
    CREDENTIAL_KEY: str = "huggingface_token"
    HF_TOKEN: Optional[str] = None  # Seeds the credential store at startup

    # === Redis ===
    REDIS_URL: str = "redis://redis:6379/0"
    REDIS_MAX_CONNECTIONS: int = 10

    # === Presentation ===
    EVENT_LOG_SIZE: int = 100  # Reporter events retained for GET /events

    # === Monitoring ===
    PROMETHEUS_ENABLED: bool = True


# Global settings instance
settings = Settings()
