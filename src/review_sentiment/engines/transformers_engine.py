"""
Hugging Face transformers engine binding.

Wraps a local text-classification pipeline. Both acquisition (download
then load) and inference are blocking, so they run in a worker thread via
asyncio.to_thread and the controller's event loop stays responsive.
"""

import asyncio
import time
from typing import Any, Optional

import structlog
from transformers import pipeline

from review_sentiment.engines.base_engine import BaseClassificationEngine
from review_sentiment.engines.exceptions import EngineAcquisitionError
from review_sentiment.models.sentiment_models import EngineDescriptor, LabelScore

logger = structlog.get_logger(__name__)


def to_label_scores(raw_output: Any) -> list[LabelScore]:
    """
    Convert pipeline output into LabelScore records, best first.

    Accepts both the flat form ``[{"label": ..., "score": ...}, ...]`` and
    the nested form ``[[{...}, ...]]`` returned for batched input.
    """
    if not raw_output:
        return []
    if isinstance(raw_output, dict):
        raw_output = [raw_output]
    if isinstance(raw_output[0], list):
        raw_output = raw_output[0]

    results = [
        LabelScore(
            label=str(item["label"]),
            score=min(max(float(item["score"]), 0.0), 1.0),
        )
        for item in raw_output
    ]
    return sorted(results, key=lambda r: r.score, reverse=True)


class TransformersEngine(BaseClassificationEngine):
    """
    Engine backed by a transformers text-classification pipeline.

    Supported vocabularies depend on the model, e.g.:
    - nlptown/bert-base-multilingual-uncased-sentiment: "1 star" .. "5 stars"
    - distilbert-base-uncased-finetuned-sst-2-english: POSITIVE / NEGATIVE
    - j-hartmann/emotion-english-distilroberta-base: joy, sadness, anger, ...
    """

    def __init__(self, descriptor: EngineDescriptor, classifier: Any):
        """
        Initialize engine around an already-loaded pipeline.

        Args:
            descriptor: Descriptor the pipeline was acquired from
            classifier: Callable transformers pipeline
        """
        self._classifier = classifier
        super().__init__(descriptor)

    @classmethod
    async def acquire(
        cls,
        descriptor: EngineDescriptor,
        credential: Optional[str] = None,
        task: str = "text-classification",
        device: Optional[str] = None,
    ) -> "TransformersEngine":
        """
        Download (if needed) and load a pipeline for descriptor.

        Args:
            descriptor: Candidate to acquire
            credential: Optional Hugging Face token; omitted when absent
            task: Pipeline task name
            device: Optional device string passed through to transformers

        Returns:
            Ready TransformersEngine

        Raises:
            EngineAcquisitionError: Any failure while creating the pipeline
        """
        kwargs: dict[str, Any] = {"task": task, "model": descriptor.identifier}
        if credential:
            kwargs["token"] = credential
        if device is not None:
            kwargs["device"] = device

        logger.info(
            "Acquiring transformers pipeline",
            identifier=descriptor.identifier,
            task=task,
            authenticated=bool(credential),
            device=device,
        )
        start_time = time.perf_counter()
        try:
            classifier = await asyncio.to_thread(pipeline, **kwargs)
        except Exception as e:
            logger.warning(
                "Pipeline acquisition failed",
                identifier=descriptor.identifier,
                error=str(e),
                error_type=type(e).__name__,
            )
            raise EngineAcquisitionError(
                f"Error loading model {descriptor.identifier}: {e}",
                details={"identifier": descriptor.identifier, "error_type": type(e).__name__},
            ) from e

        logger.info(
            "Transformers pipeline ready",
            identifier=descriptor.identifier,
            load_ms=int((time.perf_counter() - start_time) * 1000),
        )
        return cls(descriptor, classifier)

    async def classify(self, text: str) -> list[LabelScore]:
        raw_output = await asyncio.to_thread(
            self._classifier, text, top_k=None, truncation=True
        )
        return to_label_scores(raw_output)
