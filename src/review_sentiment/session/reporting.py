"""
Presentation reporting interface.

The session controller never touches presentation widgets. It only emits
these notifications; terminal, web or test adapters implement them.
"""

from collections import deque
from typing import Optional, Protocol, Sequence

import structlog

from review_sentiment.models.enums import ErrorKind, SentimentCategory, Severity
from review_sentiment.models.sentiment_models import SessionEvent

logger = structlog.get_logger(__name__)


class SessionReporter(Protocol):
    """Notification sink implemented by a presentation adapter."""

    def on_status(self, message: str, severity: Severity) -> None:
        ...

    def on_corpus_ready(self, count: int) -> None:
        ...

    def on_engine_ready(self, identifier: str) -> None:
        ...

    def on_review_selected(self, text: str) -> None:
        ...

    def on_result(
        self, category: SentimentCategory, confidence_percent: float, elapsed_ms: int
    ) -> None:
        ...

    def on_error(self, kind: ErrorKind, message: str) -> None:
        ...


class LoggingReporter:
    """Writes every notification to the structured log."""

    def __init__(self, logger_name: str = "review_sentiment.presentation"):
        self._logger = structlog.get_logger(logger_name)

    def on_status(self, message: str, severity: Severity) -> None:
        if severity is Severity.ERROR:
            self._logger.error("Status", message=message, severity=severity.value)
        else:
            self._logger.info("Status", message=message, severity=severity.value)

    def on_corpus_ready(self, count: int) -> None:
        self._logger.info("Corpus ready", count=count)

    def on_engine_ready(self, identifier: str) -> None:
        self._logger.info("Engine ready", identifier=identifier)

    def on_review_selected(self, text: str) -> None:
        self._logger.info("Review selected", length=len(text), preview=text[:80])

    def on_result(
        self, category: SentimentCategory, confidence_percent: float, elapsed_ms: int
    ) -> None:
        self._logger.info(
            "Sentiment result",
            category=category.value,
            confidence_percent=confidence_percent,
            elapsed_ms=elapsed_ms,
        )

    def on_error(self, kind: ErrorKind, message: str) -> None:
        self._logger.error("Session error", kind=kind.value, message=message)


class EventLogReporter:
    """
    Keeps the most recent notifications as SessionEvent records.

    Backs the web adapter's GET /events endpoint and serves as the
    headless harness in tests.
    """

    def __init__(self, max_events: int = 100):
        self._events: deque[SessionEvent] = deque(maxlen=max_events)

    def _record(self, name: str, **payload) -> None:
        self._events.append(SessionEvent(name=name, payload=payload))

    def events(self, limit: Optional[int] = None, name: Optional[str] = None) -> list[SessionEvent]:
        """
        Return recorded events, oldest first.

        Args:
            limit: Keep only the most recent N events
            name: Keep only events with this name
        """
        selected = [e for e in self._events if name is None or e.name == name]
        if limit is not None:
            selected = selected[-limit:] if limit > 0 else []
        return selected

    def clear(self) -> None:
        self._events.clear()

    def on_status(self, message: str, severity: Severity) -> None:
        self._record("status", message=message, severity=severity.value)

    def on_corpus_ready(self, count: int) -> None:
        self._record("corpus_ready", count=count)

    def on_engine_ready(self, identifier: str) -> None:
        self._record("engine_ready", identifier=identifier)

    def on_review_selected(self, text: str) -> None:
        self._record("review_selected", text=text)

    def on_result(
        self, category: SentimentCategory, confidence_percent: float, elapsed_ms: int
    ) -> None:
        self._record(
            "result",
            category=category.value,
            confidence_percent=confidence_percent,
            elapsed_ms=elapsed_ms,
        )

    def on_error(self, kind: ErrorKind, message: str) -> None:
        self._record("error", kind=kind.value, message=message)


class CompositeReporter:
    """Forwards every notification to each wrapped reporter, in order."""

    def __init__(self, reporters: Sequence[SessionReporter]):
        self.reporters = list(reporters)

    def on_status(self, message: str, severity: Severity) -> None:
        for reporter in self.reporters:
            reporter.on_status(message, severity)

    def on_corpus_ready(self, count: int) -> None:
        for reporter in self.reporters:
            reporter.on_corpus_ready(count)

    def on_engine_ready(self, identifier: str) -> None:
        for reporter in self.reporters:
            reporter.on_engine_ready(identifier)

    def on_review_selected(self, text: str) -> None:
        for reporter in self.reporters:
            reporter.on_review_selected(text)

    def on_result(
        self, category: SentimentCategory, confidence_percent: float, elapsed_ms: int
    ) -> None:
        for reporter in self.reporters:
            reporter.on_result(category, confidence_percent, elapsed_ms)

    def on_error(self, kind: ErrorKind, message: str) -> None:
        for reporter in self.reporters:
            reporter.on_error(kind, message)
