"""
Abstract base class for text-classification engines.

Defines the interface every engine binding (transformers pipelines,
test doubles) must follow. The gateway and session controller depend
only on this interface, never on a concrete runtime.
"""

from abc import ABC, abstractmethod

import structlog

from review_sentiment.models.sentiment_models import EngineDescriptor, LabelScore

logger = structlog.get_logger(__name__)


class BaseClassificationEngine(ABC):
    """
    An acquired, ready-to-invoke classification capability.

    Responsibilities:
    - Classify one text into a ranked list of (label, score) pairs
    - Report which descriptor it was acquired from

    Does NOT handle:
    - Acquisition fallback (that's InferenceGateway's job)
    - Label normalization (that's normalize()'s job)
    - Retrying failed calls (never done automatically)
    """

    def __init__(self, descriptor: EngineDescriptor):
        self.descriptor = descriptor
        logger.info(
            "Initialized classification engine",
            engine_class=self.__class__.__name__,
            identifier=descriptor.identifier,
            backend=descriptor.backend.value,
        )

    @property
    def identifier(self) -> str:
        return self.descriptor.identifier

    @abstractmethod
    async def classify(self, text: str) -> list[LabelScore]:
        """
        Classify text.

        Args:
            text: Non-empty review text

        Returns:
            LabelScore list ordered by descending score (may be empty
            if the engine produced nothing)

        Raises:
            Any exception from the underlying runtime; the gateway wraps
            these into InferenceFailure.
        """
        pass

    async def close(self) -> None:
        """Release engine resources. Default implementation does nothing."""
        logger.debug("Closing engine", identifier=self.identifier)

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(identifier={self.identifier})"
