"""
Label normalizer: raw engine output -> canonical sentiment.

Rules (first match wins):
    1. Positive marker and score > 0.5  -> POSITIVE, confidence = score
    2. Negative marker and score > 0.5  -> NEGATIVE, confidence = score
    3. Anything else                    -> NEUTRAL, confidence = |score - 0.5| * 2

Rule 3 maps an ambiguous score near 0.5 to a confidence near 0. This
means a positive label at 0.51 reports 0.51 while the same label at 0.50
reports 0.0; the discontinuity is kept as observed behavior.
"""

from review_sentiment.models.enums import SentimentCategory
from review_sentiment.models.sentiment_models import CanonicalSentiment, LabelScore
from review_sentiment.normalization.markers import DEFAULT_MARKER_TABLE, MarkerTable

POLARITY_THRESHOLD = 0.5


def normalize(
    raw_label: str,
    raw_score: float,
    markers: MarkerTable = DEFAULT_MARKER_TABLE,
) -> CanonicalSentiment:
    """
    Map a raw (label, score) pair to a CanonicalSentiment.

    Pure and deterministic.

    Args:
        raw_label: Label as emitted by the engine (any supported vocabulary)
        raw_score: Engine probability in [0, 1]
        markers: Marker table to consult (defaults to all known vocabularies)

    Returns:
        CanonicalSentiment with category and confidence in [0, 1]

    Raises:
        ValueError: If raw_score is outside [0, 1]

    Examples:
        >>> normalize("POSITIVE", 0.92)
        CanonicalSentiment(category=<SentimentCategory.POSITIVE: 'POSITIVE'>, confidence=0.92)
        >>> normalize("1 star", 0.8).category
        <SentimentCategory.NEGATIVE: 'NEGATIVE'>
    """
    if not 0.0 <= raw_score <= 1.0:
        raise ValueError(f"raw_score must be within [0, 1], got {raw_score}")

    if raw_score > POLARITY_THRESHOLD:
        matched = markers.matching_categories(raw_label)
        if matched:
            return CanonicalSentiment(category=matched[0], confidence=raw_score)

    return CanonicalSentiment(
        category=SentimentCategory.NEUTRAL,
        confidence=abs(raw_score - POLARITY_THRESHOLD) * 2,
    )


def normalize_top(
    results: list[LabelScore],
    markers: MarkerTable = DEFAULT_MARKER_TABLE,
) -> CanonicalSentiment:
    """Normalize the top-ranked entry of a ranked result list."""
    if not results:
        raise ValueError("Cannot normalize an empty result list")
    top = results[0]
    return normalize(top.label, top.score, markers)
