"""
Enumerations for Review Sentiment data models.

All enums are closed taxonomies - no values outside these sets are permitted.
"""

from enum import Enum


class SentimentCategory(str, Enum):
    """
    Canonical sentiment category.

    Every engine vocabulary (polarity, star rating, emotion) is folded
    into exactly one of these three values.
    """

    POSITIVE = "POSITIVE"
    NEGATIVE = "NEGATIVE"
    NEUTRAL = "NEUTRAL"


class SessionPhase(str, Enum):
    """
    Lifecycle phase of a SessionController.

    INITIALIZING -> READY -> ANALYZING -> READY (loop)
    INITIALIZING -> FAILED
    """

    INITIALIZING = "initializing"
    READY = "ready"
    ANALYZING = "analyzing"
    FAILED = "failed"


class Severity(str, Enum):
    """Severity of a status notification sent to the presentation layer."""

    LOADING = "loading"
    READY = "ready"
    ERROR = "error"


class ErrorKind(str, Enum):
    """Failure taxonomy reported through on_error."""

    CORPUS_UNAVAILABLE = "corpus_unavailable"
    CORPUS_EMPTY = "corpus_empty"
    ENGINE_ACQUISITION_FAILED = "engine_acquisition_failed"
    NO_ENGINE_AVAILABLE = "no_engine_available"
    INFERENCE_FAILURE = "inference_failure"
    NOT_READY = "not_ready"


class EngineBackend(str, Enum):
    """Runtime used to acquire an inference engine."""

    TRANSFORMERS = "transformers"
