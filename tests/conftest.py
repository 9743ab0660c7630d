"""Shared test fixtures and configuration for all tests.

This conftest.py provides common fixtures used across unit and integration tests.
"""

from pathlib import Path

import pytest

from review_sentiment.config import Settings


@pytest.fixture
def fixtures_dir() -> Path:
    """Path to test fixtures directory."""
    return Path(__file__).parent / "fixtures"


@pytest.fixture
def sample_tsv_path(fixtures_dir: Path) -> Path:
    """Corpus with 4 usable rows out of 6."""
    return fixtures_dir / "reviews_sample.tsv"


@pytest.fixture
def sample_reviews() -> list[str]:
    """Reviews expected from reviews_sample.tsv, in row order."""
    return [
        "Great value",
        "The zipper broke after one week.",
        "Just okay",
        "Would buy again, my kids love it.",
    ]


@pytest.fixture
def blank_tsv_path(fixtures_dir: Path) -> Path:
    """Corpus where no row has review text."""
    return fixtures_dir / "reviews_blank.tsv"


@pytest.fixture
def test_settings(sample_tsv_path: Path) -> Settings:
    """Test settings with safe defaults for local testing.

    Override specific settings in individual tests as needed:
        def test_something(test_settings):
            test_settings.ENGINE_CANDIDATES = ["custom/model"]
    """
    return Settings(
        # === Application ===
        APP_NAME="Review Sentiment (Test)",
        APP_VERSION="0.1.0",
        DEBUG=True,
        LOG_LEVEL="DEBUG",
        ENVIRONMENT="development",

        # === Corpus ===
        CORPUS_SOURCE=str(sample_tsv_path),

        # === Engines ===
        ENGINE_CANDIDATES=["primary/model", "fallback/model"],
        ENGINE_AUTH_REQUIRED=[],
        ANALYZE_TIMEOUT_SECONDS=None,

        # === Credentials ===
        CREDENTIAL_BACKEND="memory",
        HF_TOKEN=None,

        # === Redis ===
        REDIS_URL="redis://localhost:6379/0",
        REDIS_MAX_CONNECTIONS=5,

        PROMETHEUS_ENABLED=False,  # Disable metrics in tests unless explicitly needed
    )


@pytest.fixture
def write_tsv(tmp_path: Path):
    """Factory fixture writing a TSV file from a header and rows.

    Usage:
        def test_something(write_tsv):
            path = write_tsv(["summary", "text"], [["Nice", ""]])
    """
    def _write(header: list[str], rows: list[list[str]], name: str = "reviews.tsv") -> Path:
        lines = ["\t".join(header)] + ["\t".join(row) for row in rows]
        path = tmp_path / name
        path.write_text("\n".join(lines) + "\n", encoding="utf-8")
        return path

    return _write
