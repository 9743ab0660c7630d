"""
Exceptions raised while acquiring the review corpus.

Both are session-fatal during initialization: the controller moves to
FAILED and reports the kind to the presentation layer.
"""

from review_sentiment.exceptions import ReviewSentimentError
from review_sentiment.models.enums import ErrorKind


class CorpusError(ReviewSentimentError):
    """Base exception for corpus acquisition errors."""

    kind = ErrorKind.CORPUS_UNAVAILABLE


class CorpusUnavailable(CorpusError):
    """
    Raised when the corpus source cannot be read.

    Covers network errors, non-2xx HTTP responses, missing local files
    and undecodable content.
    """

    kind = ErrorKind.CORPUS_UNAVAILABLE


class CorpusEmpty(CorpusError):
    """Raised when no row yields usable review text after filtering."""

    kind = ErrorKind.CORPUS_EMPTY
