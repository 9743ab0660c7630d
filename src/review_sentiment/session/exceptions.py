"""
Session controller exceptions.
"""

from review_sentiment.exceptions import ReviewSentimentError
from review_sentiment.models.enums import ErrorKind


class NotReady(ReviewSentimentError):
    """
    Raised when analyze() is invoked outside the READY phase.

    Nothing is selected and nothing is reported when this is raised.
    """

    kind = ErrorKind.NOT_READY
