"""
Session orchestration.

Components:
- SessionController: Readiness state machine and analyze()
- SessionReporter: Presentation notification interface
- LoggingReporter / EventLogReporter / CompositeReporter: Reporter adapters
- NotReady: analyze() invoked outside READY
"""

from review_sentiment.session.controller import SessionController
from review_sentiment.session.exceptions import NotReady
from review_sentiment.session.reporting import (
    CompositeReporter,
    EventLogReporter,
    LoggingReporter,
    SessionReporter,
)

__all__ = [
    "CompositeReporter",
    "EventLogReporter",
    "LoggingReporter",
    "NotReady",
    "SessionController",
    "SessionReporter",
]
