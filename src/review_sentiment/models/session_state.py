"""
Mutable readiness record owned by a single SessionController.
"""

from dataclasses import asdict, dataclass
from typing import Any, Optional

from review_sentiment.models.enums import SessionPhase


@dataclass
class SessionState:
    """
    Readiness and activity flags for one session.

    Mutated only by SessionController. `busy` is True for exactly the
    lifetime of one in-flight analyze() call.

    Attributes:
        corpus_ready: Corpus loaded with at least one entry
        engine_ready: An inference engine has been acquired
        engine_identifier: Identifier of the acquired engine
        busy: An analysis is in flight
        phase: Current state machine phase
        corpus_size: Number of entries in the loaded corpus
    """

    corpus_ready: bool = False
    engine_ready: bool = False
    engine_identifier: Optional[str] = None
    busy: bool = False
    phase: SessionPhase = SessionPhase.INITIALIZING
    corpus_size: int = 0

    def to_dict(self) -> dict[str, Any]:
        data = asdict(self)
        data["phase"] = self.phase.value
        return data
