"""Monitoring and metrics instrumentation for Review Sentiment.

Exports custom Prometheus metrics for operational monitoring and alerting.
"""

from review_sentiment.monitoring.metrics import (
    analyses_total,
    corpus_entries,
    engine_acquisitions_total,
    inference_latency_seconds,
    sentiment_categories_total,
)

__all__ = [
    "analyses_total",
    "corpus_entries",
    "engine_acquisitions_total",
    "inference_latency_seconds",
    "sentiment_categories_total",
]
