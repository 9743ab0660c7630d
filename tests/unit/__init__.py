"""
Unit tests for Review Sentiment.

Test individual components in isolation:
- Label normalizer and marker tables
- Corpus loader (local files, stubbed HTTP)
- Engine binding, acquisition and gateway fallback
- Session controller state machine and reporters
- Credential stores
- API routes with dependency overrides
"""
