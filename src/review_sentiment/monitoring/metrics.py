"""Custom Prometheus metrics for Review Sentiment.

These metrics are exposed at /metrics endpoint and should be scraped by Prometheus.
Alert rules should be configured for:
- engine_acquisitions_total{success="false"} (primary model unavailable, running on fallback)
- analyses_total{outcome="failure"} (inference errors on the acquired engine)
"""

from prometheus_client import Counter, Gauge, Histogram

# === Analysis Metrics ===

analyses_total = Counter(
    "analyses_total",
    "Total analyze() calls by outcome",
    ["outcome"],
)
"""
Analyze invocations by outcome.

Labels:
- outcome: success (sentiment reported), failure (inference error reported),
  rejected (another analysis was in flight)
"""

sentiment_categories_total = Counter(
    "sentiment_categories_total",
    "Canonical sentiment categories reported",
    ["category"],
)
"""
Distribution of reported categories.

Labels:
- category: POSITIVE, NEGATIVE, NEUTRAL

A NEUTRAL share close to 1.0 usually means the engine's vocabulary is
missing from the marker tables.
"""

# === Engine Metrics ===

inference_latency_seconds = Histogram(
    "inference_latency_seconds",
    "Classify latency in seconds",
    ["engine"],
    buckets=[0.01, 0.05, 0.1, 0.25, 0.5, 1.0, 2.5, 5.0, 10.0],
)
"""
Classify call latency (successful calls only).

Labels:
- engine: Identifier of the acquired engine

Buckets sized for local CPU inference of a single short review.
"""

engine_acquisitions_total = Counter(
    "engine_acquisitions_total",
    "Engine acquisition attempts by identifier and result",
    ["engine", "success"],
)
"""
Engine acquisition attempts.

Labels:
- engine: Candidate identifier
- success: true (engine bound), false (fell through to next candidate)
"""

# === Corpus Metrics ===

corpus_entries = Gauge(
    "corpus_entries",
    "Number of reviews in the loaded corpus",
)
