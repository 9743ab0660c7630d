"""
Uniform engine acquisition.

Candidates are plain EngineDescriptor data; one function turns any
descriptor into a ready engine by dispatching on its backend tag. The
gateway's fallback loop never needs to know which runtime is involved.
"""

from functools import partial
from typing import Awaitable, Callable, Optional, Sequence

import structlog

from review_sentiment.config import Settings
from review_sentiment.engines.base_engine import BaseClassificationEngine
from review_sentiment.engines.exceptions import EngineAcquisitionError
from review_sentiment.engines.transformers_engine import TransformersEngine
from review_sentiment.models.enums import EngineBackend
from review_sentiment.models.sentiment_models import EngineDescriptor

logger = structlog.get_logger(__name__)

EngineAcquirer = Callable[[EngineDescriptor, Optional[str]], Awaitable[BaseClassificationEngine]]


def build_descriptors(
    candidates: Sequence[str],
    auth_required: Sequence[str] = (),
    backend: EngineBackend = EngineBackend.TRANSFORMERS,
) -> list[EngineDescriptor]:
    """
    Turn configured identifiers into descriptors, preserving order.

    Args:
        candidates: Engine identifiers in preference order
        auth_required: Identifiers that need a credential
        backend: Backend tag applied to every candidate

    Returns:
        List of EngineDescriptor
    """
    auth = set(auth_required)
    return [
        EngineDescriptor(identifier=identifier, backend=backend, requires_auth=identifier in auth)
        for identifier in candidates
    ]


async def acquire_engine(
    descriptor: EngineDescriptor,
    credential: Optional[str] = None,
    *,
    task: str = "text-classification",
    device: Optional[str] = None,
) -> BaseClassificationEngine:
    """
    Acquire one engine.

    Args:
        descriptor: Candidate to acquire
        credential: Optional bearer token, passed through when present
        task: Pipeline task name
        device: Optional device string

    Returns:
        Ready engine

    Raises:
        EngineAcquisitionError: Candidate needs a missing credential,
            uses an unsupported backend, or failed to load
    """
    if descriptor.requires_auth and not credential:
        logger.info(
            "Skipping engine that requires a credential",
            identifier=descriptor.identifier,
        )
        raise EngineAcquisitionError(
            f"Model {descriptor.identifier} requires a Hugging Face token",
            details={"identifier": descriptor.identifier, "reason": "credential_missing"},
        )

    if descriptor.backend is EngineBackend.TRANSFORMERS:
        return await TransformersEngine.acquire(
            descriptor, credential=credential, task=task, device=device
        )

    raise EngineAcquisitionError(
        f"Unsupported engine backend: {descriptor.backend}",
        details={"identifier": descriptor.identifier, "backend": str(descriptor.backend)},
    )


def acquirer_from_settings(settings: Settings) -> EngineAcquirer:
    """Bind task and device from settings into an EngineAcquirer."""
    return partial(acquire_engine, task=settings.ENGINE_TASK, device=settings.ENGINE_DEVICE)
