"""Unit test fixtures (fakes and stubs).

Provides engine, acquirer and corpus doubles for testing without
downloading models or reading real corpora.
"""

import asyncio
import random
from typing import Optional
from unittest.mock import AsyncMock, Mock

import pytest

from review_sentiment.corpus.loader import CorpusLoader
from review_sentiment.engines.base_engine import BaseClassificationEngine
from review_sentiment.engines.exceptions import EngineAcquisitionError
from review_sentiment.engines.gateway import InferenceGateway
from review_sentiment.models.sentiment_models import EngineDescriptor, LabelScore, ReviewCorpus
from review_sentiment.persistence.credential_store import InMemoryCredentialStore
from review_sentiment.session.controller import SessionController
from review_sentiment.session.reporting import EventLogReporter


class FakeEngine(BaseClassificationEngine):
    """Engine double returning canned results (or raising)."""

    def __init__(
        self,
        identifier: str = "fake/model",
        results: Optional[list[LabelScore]] = None,
        error: Optional[Exception] = None,
        gate: Optional[asyncio.Event] = None,
    ):
        super().__init__(EngineDescriptor(identifier=identifier))
        self.results = results if results is not None else [
            LabelScore(label="POSITIVE", score=0.92),
            LabelScore(label="NEGATIVE", score=0.08),
        ]
        self.error = error
        self.gate = gate
        self.calls: list[str] = []

    async def classify(self, text: str) -> list[LabelScore]:
        self.calls.append(text)
        if self.gate is not None:
            await self.gate.wait()
        if self.error is not None:
            raise self.error
        return list(self.results)


class FakeAcquirer:
    """Acquirer double: identifier -> engine, or -> exception to raise."""

    def __init__(self, outcomes: dict):
        self.outcomes = outcomes
        self.attempted: list[str] = []
        self.credentials: list[Optional[str]] = []

    async def __call__(self, descriptor: EngineDescriptor, credential: Optional[str] = None):
        self.attempted.append(descriptor.identifier)
        self.credentials.append(credential)
        outcome = self.outcomes.get(
            descriptor.identifier,
            EngineAcquisitionError(f"Model {descriptor.identifier} not found"),
        )
        if isinstance(outcome, Exception):
            raise outcome
        return outcome


@pytest.fixture
def make_engine():
    """Factory fixture for FakeEngine.

    Usage:
        def test_something(make_engine):
            engine = make_engine("nlptown/x", results=[LabelScore(label="1 star", score=0.8)])
    """
    return FakeEngine


@pytest.fixture
def make_acquirer():
    """Factory fixture for FakeAcquirer."""
    return FakeAcquirer


@pytest.fixture
def event_log() -> EventLogReporter:
    """Headless reporter recording every notification."""
    return EventLogReporter(max_events=1000)


@pytest.fixture
def corpus_entries() -> tuple[str, ...]:
    return ("alpha review", "beta review", "gamma review", "delta review", "epsilon review")


@pytest.fixture
def stub_loader(corpus_entries):
    """CorpusLoader mock returning a 5-entry corpus."""
    loader = Mock(spec=CorpusLoader)
    loader.load = AsyncMock(
        return_value=ReviewCorpus(entries=corpus_entries, source="memory://reviews")
    )
    return loader


@pytest.fixture
def build_controller(stub_loader, event_log, make_acquirer):
    """Factory fixture wiring a SessionController around doubles.

    Usage:
        controller, engine = build_controller()
        controller, engine = build_controller(engine=FakeEngine(error=RuntimeError("x")))
    """
    def _build(
        engine: Optional[FakeEngine] = None,
        loader=None,
        acquirer: Optional[FakeAcquirer] = None,
        credential_store=None,
        seed: int = 1234,
    ):
        engine = engine or FakeEngine(identifier="primary/model")
        acquirer = acquirer or make_acquirer({engine.identifier: engine})
        controller = SessionController(
            corpus_loader=loader or stub_loader,
            gateway=InferenceGateway(acquirer=acquirer),
            reporter=event_log,
            corpus_source="memory://reviews",
            engine_candidates=[engine.identifier],
            credential_store=credential_store if credential_store is not None else InMemoryCredentialStore(),
            rng=random.Random(seed),
        )
        return controller, engine

    return _build
