"""
Review corpus acquisition.

Components:
- CorpusLoader: Fetches and filters a tab-separated review file
- parse_reviews: Row extraction with primary/fallback field policy
- exceptions: CorpusUnavailable, CorpusEmpty
"""

from review_sentiment.corpus.exceptions import CorpusEmpty, CorpusError, CorpusUnavailable
from review_sentiment.corpus.loader import CorpusLoader, extract_review, parse_reviews

__all__ = [
    "CorpusEmpty",
    "CorpusError",
    "CorpusLoader",
    "CorpusUnavailable",
    "extract_review",
    "parse_reviews",
]
