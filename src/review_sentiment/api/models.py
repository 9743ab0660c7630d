"""
API-specific request and response models for FastAPI endpoints.

These models wrap the core domain models (SessionState, AnalysisOutcome,
SessionEvent) with API-specific metadata and status information.
"""

from datetime import datetime, timezone
from typing import Optional

from pydantic import BaseModel, Field

from review_sentiment.models.enums import SentimentCategory, SessionPhase
from review_sentiment.models.sentiment_models import AnalysisOutcome, SessionEvent
from review_sentiment.models.session_state import SessionState


class SessionStateResponse(BaseModel):
    """Snapshot of the session readiness record."""

    phase: SessionPhase
    corpus_ready: bool
    engine_ready: bool
    engine_identifier: Optional[str] = None
    busy: bool
    corpus_size: int = Field(ge=0)

    @classmethod
    def from_state(cls, state: SessionState) -> "SessionStateResponse":
        return cls(
            phase=state.phase,
            corpus_ready=state.corpus_ready,
            engine_ready=state.engine_ready,
            engine_identifier=state.engine_identifier,
            busy=state.busy,
            corpus_size=state.corpus_size,
        )


class HealthResponse(BaseModel):
    """Response for health check endpoint."""

    status: str = Field(
        description="Overall health",
        examples=["healthy", "unhealthy"],
    )
    version: str
    session: SessionStateResponse
    timestamp: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))


class AnalyzeResponse(BaseModel):
    """Response for the analyze endpoint."""

    status: str = Field(
        description="success when a sentiment was produced, failed on inference error",
        examples=["success", "failed"],
    )
    review: str = Field(description="Review text that was analyzed")
    engine: str = Field(description="Identifier of the engine that ran inference")
    category: Optional[SentimentCategory] = None
    confidence: Optional[float] = Field(default=None, ge=0.0, le=1.0)
    confidence_percent: Optional[float] = Field(default=None, ge=0.0, le=100.0)
    raw_label: Optional[str] = None
    raw_score: Optional[float] = None
    elapsed_ms: int = Field(ge=0)
    error: Optional[str] = None

    @classmethod
    def from_outcome(cls, outcome: AnalysisOutcome) -> "AnalyzeResponse":
        sentiment = outcome.sentiment
        return cls(
            status="success" if outcome.succeeded else "failed",
            review=outcome.review,
            engine=outcome.engine,
            category=sentiment.category if sentiment else None,
            confidence=sentiment.confidence if sentiment else None,
            confidence_percent=sentiment.confidence_percent if sentiment else None,
            raw_label=outcome.raw_label,
            raw_score=outcome.raw_score,
            elapsed_ms=outcome.elapsed_ms,
            error=outcome.error,
        )


class EventsResponse(BaseModel):
    """Most recent reporter notifications, oldest first."""

    count: int = Field(ge=0)
    events: list[SessionEvent]


class CredentialUpdateRequest(BaseModel):
    """Token to store; blank clears the stored token."""

    token: str = Field(max_length=4096)


class CredentialStatusResponse(BaseModel):
    """Whether an acquisition token is stored. The token itself is never returned."""

    present: bool
