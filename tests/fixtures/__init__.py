"""
Test fixtures for Review Sentiment.

Contains sample corpora:
- reviews_sample.tsv: Mixed rows (primary field, fallback field, blank and short rows)
- reviews_blank.tsv: Every row blank in both review fields
"""
