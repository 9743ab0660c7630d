"""
Custom exceptions for the inference engine layer.

These exceptions let the gateway distinguish a single candidate failing
to load (try the next one) from every candidate failing (session-fatal)
and from a classify call failing on an acquired engine (transient).
"""

from review_sentiment.exceptions import ReviewSentimentError
from review_sentiment.models.enums import ErrorKind


class EngineError(ReviewSentimentError):
    """
    Base exception for all engine errors.

    All engine-specific exceptions inherit from this to allow catching
    any engine-related error with a single except clause.
    """

    kind = ErrorKind.ENGINE_ACQUISITION_FAILED


class EngineAcquisitionError(EngineError):
    """
    Raised when one candidate engine cannot be acquired.

    Examples:
    - Model removed or renamed on the hub
    - Rate limited or gated without a credential
    - Incompatible weight format

    Triggers fallback to the next candidate; never escapes the gateway.
    """

    kind = ErrorKind.ENGINE_ACQUISITION_FAILED


class NoEngineAvailable(EngineError):
    """
    Raised when every candidate engine failed to load.

    Attributes:
        attempts: Mapping of engine identifier -> failure message, in
            the order the candidates were tried
    """

    kind = ErrorKind.NO_ENGINE_AVAILABLE

    def __init__(self, attempts: dict[str, str]):
        self.attempts = attempts
        tried = ", ".join(attempts) or "none"
        super().__init__(
            f"No sentiment engine could be loaded (tried: {tried})",
            details={"attempts": attempts},
        )


class InferenceFailure(EngineError):
    """
    Raised when a classify call on an acquired engine fails.

    Covers exceptions thrown by the engine, empty results and an expired
    analysis deadline. The underlying error is chained as __cause__.
    Not retried automatically.
    """

    kind = ErrorKind.INFERENCE_FAILURE
