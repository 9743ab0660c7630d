"""
Inference gateway with ordered engine fallback.

Acquisition Policy:
    1. Try each candidate descriptor in order
    2. A failed candidate is recorded and the next one is tried
    3. The first engine acquired is kept for the rest of the session
    4. If every candidate fails: raise NoEngineAvailable

Classification is never retried and never triggers re-acquisition: a
failed classify call raises InferenceFailure and the gateway keeps its
engine.

Usage:
    gateway = InferenceGateway(acquirer=acquire_engine)
    await gateway.initialize(["model-a", "model-b"], credential=token)
    ranked = await gateway.classify("Great product!")
"""

import asyncio
import time
from typing import Optional, Sequence, Union

import structlog

from review_sentiment.engines.acquisition import EngineAcquirer, acquire_engine
from review_sentiment.engines.base_engine import BaseClassificationEngine
from review_sentiment.engines.exceptions import (
    EngineAcquisitionError,
    InferenceFailure,
    NoEngineAvailable,
)
from review_sentiment.models.sentiment_models import EngineDescriptor, LabelScore
from review_sentiment.monitoring.metrics import (
    engine_acquisitions_total,
    inference_latency_seconds,
)

logger = structlog.get_logger(__name__)


class InferenceGateway:
    """
    Owns the single acquired classification engine for a session.

    Attributes:
        timeout: Optional classify deadline in seconds (None = no deadline)
        attempts: Failure messages of candidates tried before the bound
            engine (or of all candidates after NoEngineAvailable)
    """

    def __init__(
        self,
        acquirer: EngineAcquirer = acquire_engine,
        timeout: Optional[float] = None,
    ):
        """
        Initialize gateway.

        Args:
            acquirer: Coroutine turning (descriptor, credential) into an engine
            timeout: Optional deadline applied to every classify call
        """
        self._acquirer = acquirer
        self._engine: Optional[BaseClassificationEngine] = None
        self.timeout = timeout
        self.attempts: dict[str, str] = {}

    @property
    def ready(self) -> bool:
        return self._engine is not None

    @property
    def identifier(self) -> Optional[str]:
        return self._engine.identifier if self._engine else None

    async def initialize(
        self,
        candidates: Sequence[Union[EngineDescriptor, str]],
        credential: Optional[str] = None,
    ) -> BaseClassificationEngine:
        """
        Acquire the first engine that loads.

        Calling this again once an engine is bound returns that engine
        without trying any candidate.

        Args:
            candidates: Descriptors (or bare identifiers) in preference order
            credential: Optional bearer token forwarded to every attempt

        Returns:
            The bound engine

        Raises:
            NoEngineAvailable: Every candidate failed (or list was empty)
        """
        if self._engine is not None:
            logger.info("Gateway already bound, keeping engine", identifier=self._engine.identifier)
            return self._engine

        descriptors = [
            c if isinstance(c, EngineDescriptor) else EngineDescriptor(identifier=c)
            for c in candidates
        ]
        self.attempts = {}

        for attempt, descriptor in enumerate(descriptors, start=1):
            logger.info(
                "Attempting engine acquisition",
                identifier=descriptor.identifier,
                attempt=attempt,
                candidates=len(descriptors),
            )
            try:
                engine = await self._acquirer(descriptor, credential)
            except Exception as e:
                if isinstance(e, EngineAcquisitionError):
                    message = e.message
                else:
                    message = f"{type(e).__name__}: {e}" if str(e) else type(e).__name__
                self.attempts[descriptor.identifier] = message
                engine_acquisitions_total.labels(engine=descriptor.identifier, success="false").inc()
                logger.warning(
                    "Engine acquisition failed, trying next candidate",
                    identifier=descriptor.identifier,
                    attempt=attempt,
                    error=message,
                    error_type=type(e).__name__,
                )
                continue

            engine_acquisitions_total.labels(engine=descriptor.identifier, success="true").inc()
            self._engine = engine
            logger.info(
                "Engine bound",
                identifier=engine.identifier,
                attempt=attempt,
                fallback=attempt > 1,
            )
            return engine

        logger.error("All engine candidates failed", attempts=self.attempts)
        raise NoEngineAvailable(dict(self.attempts))

    async def classify(self, text: str) -> list[LabelScore]:
        """
        Classify text with the bound engine.

        Args:
            text: Non-empty review text

        Returns:
            LabelScore list ordered by descending score (never empty)

        Raises:
            ValueError: text is empty or whitespace
            InferenceFailure: No engine bound, engine raised, returned
                nothing, or the deadline expired
        """
        if not text or not text.strip():
            raise ValueError("text must be non-empty")
        if self._engine is None:
            raise InferenceFailure("Sentiment engine not initialized")

        engine = self._engine
        start_time = time.perf_counter()
        try:
            if self.timeout is not None:
                results = await asyncio.wait_for(engine.classify(text), timeout=self.timeout)
            else:
                results = await engine.classify(text)
        except asyncio.TimeoutError as e:
            logger.error("Classify deadline expired", identifier=engine.identifier, timeout=self.timeout)
            raise InferenceFailure(
                f"Inference timed out after {self.timeout}s",
                details={"identifier": engine.identifier, "timeout": self.timeout},
            ) from e
        except Exception as e:
            logger.error(
                "Classify failed",
                identifier=engine.identifier,
                error=str(e),
                error_type=type(e).__name__,
            )
            raise InferenceFailure(
                str(e) or type(e).__name__,
                details={"identifier": engine.identifier, "error_type": type(e).__name__},
            ) from e

        if not results:
            logger.error("Engine returned no results", identifier=engine.identifier)
            raise InferenceFailure(
                "Engine returned no results",
                details={"identifier": engine.identifier},
            )

        elapsed = time.perf_counter() - start_time
        inference_latency_seconds.labels(engine=engine.identifier).observe(elapsed)
        logger.debug(
            "Classify succeeded",
            identifier=engine.identifier,
            top_label=results[0].label,
            latency_ms=int(elapsed * 1000),
        )
        return sorted(results, key=lambda r: r.score, reverse=True)

    async def close(self) -> None:
        if self._engine is not None:
            await self._engine.close()
