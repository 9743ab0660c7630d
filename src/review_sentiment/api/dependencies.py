"""
FastAPI dependency injection for Review Sentiment.

Provides process-wide singletons: the session controller (and its
corpus, engine and state), the event log backing GET /events, and the
credential store.
"""

from functools import lru_cache

from review_sentiment.config import Settings, settings
from review_sentiment.persistence.credential_store import CredentialStore, create_credential_store
from review_sentiment.session.controller import SessionController
from review_sentiment.session.reporting import (
    CompositeReporter,
    EventLogReporter,
    LoggingReporter,
)


@lru_cache()
def get_settings() -> Settings:
    """
    Get settings singleton.

    Returns:
        Settings instance
    """
    return settings


@lru_cache()
def get_event_log() -> EventLogReporter:
    """
    Get singleton event log reporter.

    Returns:
        EventLogReporter sized by EVENT_LOG_SIZE
    """
    return EventLogReporter(max_events=get_settings().EVENT_LOG_SIZE)


@lru_cache()
def get_credential_store() -> CredentialStore:
    """
    Get singleton credential store (memory or Redis, per CREDENTIAL_BACKEND).

    Returns:
        CredentialStore instance
    """
    return create_credential_store(get_settings())


@lru_cache()
def get_session_controller() -> SessionController:
    """
    Get the singleton session controller.

    One controller per process: the corpus and the acquired engine are
    loaded once and shared by every request. Notifications go both to
    the structured log and to the event log.

    Returns:
        SessionController instance
    """
    reporter = CompositeReporter([LoggingReporter(), get_event_log()])
    return SessionController.from_settings(
        get_settings(),
        reporter,
        credential_store=get_credential_store(),
    )
