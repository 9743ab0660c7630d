"""
Inference engine abstraction, bindings and gateway.

Components:
- BaseClassificationEngine: Abstract base class for engines
- TransformersEngine: Hugging Face text-classification pipeline binding
- acquire_engine: Descriptor -> engine, dispatching on backend
- InferenceGateway: Ordered fallback acquisition + classify
- exceptions: Engine-specific exceptions
"""

from review_sentiment.engines.acquisition import (
    EngineAcquirer,
    acquire_engine,
    acquirer_from_settings,
    build_descriptors,
)
from review_sentiment.engines.base_engine import BaseClassificationEngine
from review_sentiment.engines.exceptions import (
    EngineAcquisitionError,
    EngineError,
    InferenceFailure,
    NoEngineAvailable,
)
from review_sentiment.engines.gateway import InferenceGateway
from review_sentiment.engines.transformers_engine import TransformersEngine, to_label_scores

__all__ = [
    "BaseClassificationEngine",
    "EngineAcquirer",
    "EngineAcquisitionError",
    "EngineError",
    "InferenceFailure",
    "InferenceGateway",
    "NoEngineAvailable",
    "TransformersEngine",
    "acquire_engine",
    "acquirer_from_settings",
    "build_descriptors",
    "to_label_scores",
]
