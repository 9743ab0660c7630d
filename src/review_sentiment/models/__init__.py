"""
Data models for Review Sentiment.

Includes:
- Enums (SentimentCategory, SessionPhase, Severity, ErrorKind, EngineBackend)
- Pydantic models (LabelScore, CanonicalSentiment, ReviewCorpus, EngineDescriptor,
  AnalysisOutcome, SessionEvent)
- SessionState (mutable dataclass owned by SessionController)
"""

from review_sentiment.models.enums import (
    EngineBackend,
    ErrorKind,
    SentimentCategory,
    SessionPhase,
    Severity,
)
from review_sentiment.models.sentiment_models import (
    AnalysisOutcome,
    CanonicalSentiment,
    EngineDescriptor,
    LabelScore,
    ReviewCorpus,
    SessionEvent,
)
from review_sentiment.models.session_state import SessionState

__all__ = [
    # Enums
    "EngineBackend",
    "ErrorKind",
    "SentimentCategory",
    "SessionPhase",
    "Severity",
    # Models
    "AnalysisOutcome",
    "CanonicalSentiment",
    "EngineDescriptor",
    "LabelScore",
    "ReviewCorpus",
    "SessionEvent",
    # State
    "SessionState",
]
