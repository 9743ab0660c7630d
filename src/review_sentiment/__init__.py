"""
Review Sentiment: on-demand sentiment classification of random reviews.

Loads a tab-separated review corpus and a local text-classification model
concurrently, then classifies one randomly chosen review per request:
- Ordered fallback across candidate models
- Normalization of star, polarity and emotion labels to POSITIVE/NEGATIVE/NEUTRAL
- Session state machine guarding against overlapping analyses

Architecture: FastAPI presentation adapter + SessionController + transformers pipelines
"""

__version__ = "0.1.0"
