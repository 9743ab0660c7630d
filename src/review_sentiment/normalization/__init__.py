"""
Sentiment label normalization.

Components:
- MarkerRule, MarkerTable: Declarative label-marker rules per category
- DEFAULT_MARKER_TABLE: Polarity, star-rating and emotion vocabularies
- normalize: (raw label, raw score) -> CanonicalSentiment
"""

from review_sentiment.normalization.markers import (
    DEFAULT_MARKER_TABLE,
    NEGATIVE_MARKERS,
    POSITIVE_MARKERS,
    MarkerRule,
    MarkerTable,
)
from review_sentiment.normalization.normalizer import normalize, normalize_top

__all__ = [
    "DEFAULT_MARKER_TABLE",
    "NEGATIVE_MARKERS",
    "POSITIVE_MARKERS",
    "MarkerRule",
    "MarkerTable",
    "normalize",
    "normalize_top",
]
