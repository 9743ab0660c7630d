"""
Review corpus loader.

Reads a tab-separated review file from an http(s) URL or a local path
and extracts one review text per row:
- The header row names the fields
- The primary field is used when its trimmed text is non-empty,
  otherwise the fallback field
- Rows where neither field has text (including short/malformed rows)
  are dropped without failing the load
"""

import asyncio
import csv
import io
import time
from pathlib import Path
from typing import Optional
from urllib.parse import urlparse

import httpx
import structlog

from review_sentiment.config import Settings
from review_sentiment.corpus.exceptions import CorpusEmpty, CorpusUnavailable
from review_sentiment.models.sentiment_models import ReviewCorpus

logger = structlog.get_logger(__name__)

REMOTE_SCHEMES = frozenset({"http", "https"})

# Review fields can be long free text; the csv default caps them at 128 KiB
MAX_FIELD_SIZE = 16 * 1024 * 1024
csv.field_size_limit(max(csv.field_size_limit(), MAX_FIELD_SIZE))


def extract_review(row: dict, primary_field: str, fallback_field: str) -> Optional[str]:
    """
    Pick the review text for one parsed row.

    Returns:
        Trimmed primary text, else trimmed fallback text, else None
    """
    for field in (primary_field, fallback_field):
        value = row.get(field)
        if isinstance(value, str) and value.strip():
            return value.strip()
    return None


def parse_reviews(tsv_text: str, primary_field: str = "summary", fallback_field: str = "text") -> list[str]:
    """
    Extract review texts from tab-separated content, in row order.

    Quote characters carry no meaning: the tab is the only delimiter and
    every line is one row.

    Args:
        tsv_text: Full file content, first line is the header
        primary_field: Preferred column name
        fallback_field: Column used when the primary one is blank

    Returns:
        List of non-empty review strings (may be empty)

    Raises:
        csv.Error: A field exceeds MAX_FIELD_SIZE
    """
    tsv_text = tsv_text.lstrip("\ufeff")
    reader = csv.DictReader(io.StringIO(tsv_text), delimiter="\t", quoting=csv.QUOTE_NONE)
    if not reader.fieldnames:
        return []

    reviews: list[str] = []
    skipped = 0
    for row in reader:
        review = extract_review(row, primary_field, fallback_field)
        if review is None:
            skipped += 1
            continue
        reviews.append(review)

    if skipped:
        logger.debug("Skipped rows without review text", skipped=skipped, kept=len(reviews))
    return reviews


class CorpusLoader:
    """
    Acquires a ReviewCorpus from a remote or local tab-separated source.

    Does NOT retry: a failed fetch is reported as CorpusUnavailable and
    the session controller decides what happens next.
    """

    def __init__(
        self,
        primary_field: str = "summary",
        fallback_field: str = "text",
        timeout: float = 30,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        """
        Initialize corpus loader.

        Args:
            primary_field: Preferred review column
            fallback_field: Column used when the primary one is blank
            timeout: HTTP timeout in seconds for remote sources
            transport: Optional httpx transport (used by tests to stub HTTP)
        """
        self.primary_field = primary_field
        self.fallback_field = fallback_field
        self.timeout = timeout
        self._transport = transport

    @classmethod
    def from_settings(cls, settings: Settings) -> "CorpusLoader":
        return cls(
            primary_field=settings.CORPUS_PRIMARY_FIELD,
            fallback_field=settings.CORPUS_FALLBACK_FIELD,
            timeout=settings.CORPUS_FETCH_TIMEOUT,
        )

    async def load(self, source: str) -> ReviewCorpus:
        """
        Fetch, parse and filter the corpus.

        Args:
            source: http(s) URL, file:// URI or filesystem path

        Returns:
            ReviewCorpus with at least one entry

        Raises:
            CorpusUnavailable: Source could not be read or parsed
            CorpusEmpty: No row produced usable review text
        """
        start_time = time.perf_counter()
        logger.info("Loading review corpus", source=source)

        content = await self._fetch(source)
        try:
            reviews = parse_reviews(content, self.primary_field, self.fallback_field)
        except csv.Error as e:
            logger.error("Corpus file unparseable", source=source, error=str(e))
            raise CorpusUnavailable(
                f"Failed to parse TSV file: {e}",
                details={"source": source, "error_type": type(e).__name__},
            ) from e

        if not reviews:
            logger.warning(
                "Corpus contains no usable reviews",
                source=source,
                primary_field=self.primary_field,
                fallback_field=self.fallback_field,
            )
            raise CorpusEmpty(
                "No reviews available to analyze",
                details={
                    "source": source,
                    "fields": [self.primary_field, self.fallback_field],
                },
            )

        corpus = ReviewCorpus(entries=tuple(reviews), source=source)
        logger.info(
            "Review corpus loaded",
            source=source,
            count=len(corpus),
            duration_ms=int((time.perf_counter() - start_time) * 1000),
        )
        return corpus

    async def _fetch(self, source: str) -> str:
        parsed = urlparse(source)
        if parsed.scheme in REMOTE_SCHEMES:
            return await self._fetch_remote(source)
        path = Path(parsed.path) if parsed.scheme == "file" else Path(source)
        return await self._read_local(path)

    async def _fetch_remote(self, url: str) -> str:
        try:
            async with httpx.AsyncClient(
                timeout=httpx.Timeout(self.timeout),
                transport=self._transport,
                follow_redirects=True,
            ) as client:
                response = await client.get(url)
                response.raise_for_status()
                return response.text
        except httpx.HTTPStatusError as e:
            status_code = e.response.status_code
            logger.error("Corpus fetch returned error status", url=url, status_code=status_code)
            raise CorpusUnavailable(
                f"Failed to load TSV file: {status_code}",
                details={"source": url, "status": status_code},
            ) from e
        except httpx.HTTPError as e:
            logger.error("Corpus fetch failed", url=url, error=str(e), error_type=type(e).__name__)
            raise CorpusUnavailable(
                f"Failed to load TSV file: {e}",
                details={"source": url, "error_type": type(e).__name__},
            ) from e

    async def _read_local(self, path: Path) -> str:
        try:
            return await asyncio.to_thread(path.read_text, encoding="utf-8-sig")
        except (OSError, UnicodeDecodeError) as e:
            logger.error("Corpus file unreadable", path=str(path), error=str(e))
            raise CorpusUnavailable(
                f"Failed to load TSV file: {e}",
                details={"source": str(path), "error_type": type(e).__name__},
            ) from e
