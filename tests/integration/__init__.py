"""
Integration tests for Review Sentiment.

Test components against real external services:
- Redis credential store (skipped when Redis is not running)
- Transformers engine acquisition (skipped when models cannot be downloaded)
"""
