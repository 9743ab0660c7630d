"""
Unit tests for presentation reporters.
"""

from unittest.mock import MagicMock

from review_sentiment.models.enums import ErrorKind, SentimentCategory, Severity
from review_sentiment.session.reporting import (
    CompositeReporter,
    EventLogReporter,
    LoggingReporter,
)


def test_event_payloads_use_plain_values():
    reporter = EventLogReporter()

    reporter.on_status("Loading reviews...", Severity.LOADING)
    reporter.on_result(SentimentCategory.NEUTRAL, 40.0, 12)
    reporter.on_error(ErrorKind.CORPUS_EMPTY, "No reviews available to analyze")

    status, result, error = reporter.events()
    assert status.name == "status"
    assert status.payload == {"message": "Loading reviews...", "severity": "loading"}
    assert result.payload == {"category": "NEUTRAL", "confidence_percent": 40.0, "elapsed_ms": 12}
    assert error.payload == {"kind": "corpus_empty", "message": "No reviews available to analyze"}


def test_events_limit_keeps_most_recent():
    reporter = EventLogReporter()
    for i in range(5):
        reporter.on_corpus_ready(i)

    recent = reporter.events(limit=2)

    assert [e.payload["count"] for e in recent] == [3, 4]


def test_events_filter_by_name():
    reporter = EventLogReporter()
    reporter.on_review_selected("Great value")
    reporter.on_engine_ready("a/model")
    reporter.on_review_selected("Just okay")

    selected = reporter.events(name="review_selected")

    assert [e.payload["text"] for e in selected] == ["Great value", "Just okay"]


def test_max_events_drops_oldest():
    reporter = EventLogReporter(max_events=3)
    for i in range(5):
        reporter.on_corpus_ready(i)

    assert [e.payload["count"] for e in reporter.events()] == [2, 3, 4]


def test_clear():
    reporter = EventLogReporter()
    reporter.on_engine_ready("a/model")

    reporter.clear()

    assert reporter.events() == []


def test_composite_fans_out_in_order():
    calls = []
    first = MagicMock()
    first.on_status.side_effect = lambda *args: calls.append("first")
    second = MagicMock()
    second.on_status.side_effect = lambda *args: calls.append("second")
    reporter = CompositeReporter([first, second])

    reporter.on_status("Token cleared", Severity.READY)
    reporter.on_engine_ready("a/model")

    assert calls == ["first", "second"]
    second.on_engine_ready.assert_called_once_with("a/model")


def test_logging_reporter_accepts_every_notification():
    reporter = LoggingReporter()

    reporter.on_status("Loaded 3 reviews", Severity.READY)
    reporter.on_status("Error loading reviews: offline", Severity.ERROR)
    reporter.on_corpus_ready(3)
    reporter.on_engine_ready("a/model")
    reporter.on_review_selected("x" * 200)
    reporter.on_result(SentimentCategory.POSITIVE, 91.5, 30)
    reporter.on_error(ErrorKind.INFERENCE_FAILURE, "boom")
