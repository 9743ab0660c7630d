"""
Pydantic models for corpus entries, inference output and analysis results.

These are the values that flow between CorpusLoader, InferenceGateway,
the label normalizer and SessionController.
"""

from datetime import datetime, timezone
from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

from review_sentiment.models.enums import EngineBackend, SentimentCategory


class LabelScore(BaseModel):
    """One (label, score) pair emitted by an inference engine."""

    model_config = ConfigDict(frozen=True)

    label: str = Field(description="Raw label in the engine's own vocabulary", examples=["5 stars", "POSITIVE", "joy"])
    score: float = Field(ge=0.0, le=1.0, description="Engine probability for this label")


class CanonicalSentiment(BaseModel):
    """Engine-independent sentiment category with a normalized confidence."""

    model_config = ConfigDict(frozen=True)

    category: SentimentCategory
    confidence: float = Field(ge=0.0, le=1.0)

    @property
    def confidence_percent(self) -> float:
        """Confidence as a percentage rounded to one decimal place."""
        return round(self.confidence * 100, 1)


class ReviewCorpus(BaseModel):
    """
    Ordered, immutable collection of review texts.

    Entry order matches source row order. A corpus always holds at least
    one entry; an empty extraction is reported as CorpusEmpty instead.
    """

    model_config = ConfigDict(frozen=True)

    entries: tuple[str, ...] = Field(min_length=1)
    source: str = Field(description="Path or URL the corpus was read from")

    @field_validator("entries")
    @classmethod
    def entries_not_blank(cls, v: tuple[str, ...]) -> tuple[str, ...]:
        for entry in v:
            if not entry.strip():
                raise ValueError("corpus entries must be non-empty text")
        return v

    def __len__(self) -> int:
        return len(self.entries)

    def __getitem__(self, index: int) -> str:
        return self.entries[index]


class EngineDescriptor(BaseModel):
    """
    Candidate inference engine.

    The backend tag selects the acquisition routine; requires_auth marks
    candidates that cannot be fetched without a credential.
    """

    model_config = ConfigDict(frozen=True)

    identifier: str = Field(min_length=1, examples=["distilbert-base-uncased-finetuned-sst-2-english"])
    backend: EngineBackend = EngineBackend.TRANSFORMERS
    requires_auth: bool = False


class AnalysisOutcome(BaseModel):
    """Result of one SessionController.analyze() call."""

    review: str
    engine: str
    sentiment: Optional[CanonicalSentiment] = None
    raw_label: Optional[str] = None
    raw_score: Optional[float] = None
    elapsed_ms: int = Field(ge=0)
    error: Optional[str] = Field(
        default=None,
        description="Inference failure message; set only when sentiment is None",
    )

    @property
    def succeeded(self) -> bool:
        return self.sentiment is not None


class SessionEvent(BaseModel):
    """A single notification emitted towards the presentation layer."""

    name: str = Field(examples=["status", "result", "error"])
    payload: dict[str, Any] = Field(default_factory=dict)
    created_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))
