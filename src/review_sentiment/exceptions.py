"""
Base exception for the Review Sentiment service.

Every domain error carries a machine-readable ErrorKind so the session
controller can forward it to the presentation layer without inspecting
the concrete class.
"""

from review_sentiment.models.enums import ErrorKind


class ReviewSentimentError(Exception):
    """
    Base exception for all domain errors.

    Attributes:
        message: Human-readable description
        details: Structured context for logs and API responses
        kind: Taxonomy entry reported to the presentation layer
    """

    kind: ErrorKind  # Set by every concrete subclass

    def __init__(self, message: str, details: dict | None = None):
        super().__init__(message)
        self.message = message
        self.details = details or {}
