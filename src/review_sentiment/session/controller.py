"""
Session controller: orchestrates corpus + engine readiness and analysis.

State machine:
    INITIALIZING -> READY      both resources acquired
    INITIALIZING -> FAILED     either acquisition failed (reported, not retried)
    READY -> ANALYZING -> READY  every analyze() call, success or handled failure

Corpus loading and engine acquisition run concurrently; the controller
joins on both before becoming READY. A FAILED session can be recovered by
calling initialize() again, which only re-acquires what is missing.

Usage:
    controller = SessionController.from_settings(settings, reporter)
    await controller.initialize()
    outcome = await controller.analyze()
"""

import asyncio
import random
import time
from typing import Optional, Sequence, Union

import structlog

from review_sentiment.config import Settings
from review_sentiment.corpus.exceptions import CorpusError
from review_sentiment.corpus.loader import CorpusLoader
from review_sentiment.engines.acquisition import acquirer_from_settings, build_descriptors
from review_sentiment.engines.exceptions import InferenceFailure, NoEngineAvailable
from review_sentiment.engines.gateway import InferenceGateway
from review_sentiment.exceptions import ReviewSentimentError
from review_sentiment.models.enums import ErrorKind, SessionPhase, Severity
from review_sentiment.models.sentiment_models import (
    AnalysisOutcome,
    EngineDescriptor,
    ReviewCorpus,
)
from review_sentiment.models.session_state import SessionState
from review_sentiment.monitoring.metrics import (
    analyses_total,
    corpus_entries,
    sentiment_categories_total,
)
from review_sentiment.normalization.markers import DEFAULT_MARKER_TABLE, MarkerTable
from review_sentiment.normalization.normalizer import normalize_top
from review_sentiment.persistence.credential_store import CredentialStore
from review_sentiment.session.exceptions import NotReady
from review_sentiment.session.reporting import SessionReporter

logger = structlog.get_logger(__name__)


class SessionController:
    """
    Owns the SessionState, the ReviewCorpus and the InferenceGateway.

    Only one analysis runs at a time: a call made while another is in
    flight is rejected (returns None), never queued.
    """

    def __init__(
        self,
        corpus_loader: CorpusLoader,
        gateway: InferenceGateway,
        reporter: SessionReporter,
        corpus_source: str,
        engine_candidates: Sequence[Union[EngineDescriptor, str]],
        credential_store: Optional[CredentialStore] = None,
        credential_key: str = "huggingface_token",
        markers: MarkerTable = DEFAULT_MARKER_TABLE,
        rng: Optional[random.Random] = None,
    ):
        """
        Initialize controller. No I/O happens until initialize().

        Args:
            corpus_loader: Loader for the review corpus
            gateway: Gateway that will hold the acquired engine
            reporter: Presentation notification sink
            corpus_source: Path or URL of the corpus
            engine_candidates: Engines to try, in preference order
            credential_store: Optional store holding the acquisition token
            credential_key: Key of the token inside credential_store
            markers: Marker table used to normalize engine labels
            rng: Random source for review selection
        """
        self.state = SessionState()
        self._corpus_loader = corpus_loader
        self._gateway = gateway
        self._reporter = reporter
        self._corpus_source = corpus_source
        self._engine_candidates = list(engine_candidates)
        self._credential_store = credential_store
        self._credential_key = credential_key
        self._markers = markers
        self._rng = rng or random.Random()
        self._corpus: Optional[ReviewCorpus] = None
        self._init_lock = asyncio.Lock()

    @classmethod
    def from_settings(
        cls,
        settings: Settings,
        reporter: SessionReporter,
        credential_store: Optional[CredentialStore] = None,
    ) -> "SessionController":
        """Build a controller with the loader, gateway and candidates from settings."""
        return cls(
            corpus_loader=CorpusLoader.from_settings(settings),
            gateway=InferenceGateway(
                acquirer=acquirer_from_settings(settings),
                timeout=settings.ANALYZE_TIMEOUT_SECONDS,
            ),
            reporter=reporter,
            corpus_source=settings.CORPUS_SOURCE,
            engine_candidates=build_descriptors(
                settings.ENGINE_CANDIDATES, settings.ENGINE_AUTH_REQUIRED
            ),
            credential_store=credential_store,
            credential_key=settings.CREDENTIAL_KEY,
        )

    @property
    def phase(self) -> SessionPhase:
        return self.state.phase

    @property
    def corpus(self) -> Optional[ReviewCorpus]:
        return self._corpus

    # ------------------------------------------------------------------
    # Initialization
    # ------------------------------------------------------------------

    async def initialize(self) -> SessionPhase:
        """
        Acquire corpus and engine concurrently.

        Resources already acquired by an earlier attempt are kept, so
        re-invoking after FAILED only retries what failed. A no-op when
        the session is already READY (or analyzing).

        Returns:
            READY or FAILED
        """
        async with self._init_lock:
            if self.state.phase in (SessionPhase.READY, SessionPhase.ANALYZING):
                logger.info("Session already initialized", phase=self.state.phase.value)
                return self.state.phase

            self.state.phase = SessionPhase.INITIALIZING
            logger.info(
                "Session initialization started",
                corpus_ready=self.state.corpus_ready,
                engine_ready=self.state.engine_ready,
            )
            credential = await self._load_credential()

            pending = []
            if not self.state.corpus_ready:
                pending.append(self._initialize_corpus())
            if not self.state.engine_ready:
                pending.append(self._initialize_engine(credential))

            results = await asyncio.gather(*pending, return_exceptions=True)
            failures = [r for r in results if isinstance(r, BaseException)]

            if failures:
                self.state.phase = SessionPhase.FAILED
                logger.error(
                    "Session initialization failed",
                    failures=[type(f).__name__ for f in failures],
                    corpus_ready=self.state.corpus_ready,
                    engine_ready=self.state.engine_ready,
                )
                for failure in failures:
                    if not isinstance(failure, ReviewSentimentError):
                        raise failure
                return self.state.phase

            self.state.phase = SessionPhase.READY
            logger.info(
                "Session ready",
                corpus_size=self.state.corpus_size,
                engine=self.state.engine_identifier,
            )
            return self.state.phase

    async def _initialize_corpus(self) -> None:
        self._reporter.on_status("Loading reviews...", Severity.LOADING)
        try:
            corpus = await self._corpus_loader.load(self._corpus_source)
        except CorpusError as e:
            self._reporter.on_status(f"Error loading reviews: {e.message}", Severity.ERROR)
            self._reporter.on_error(e.kind, e.message)
            raise
        except Exception as e:
            message = str(e) or type(e).__name__
            self._reporter.on_status(f"Error loading reviews: {message}", Severity.ERROR)
            self._reporter.on_error(ErrorKind.CORPUS_UNAVAILABLE, message)
            raise

        self._corpus = corpus
        self.state.corpus_ready = True
        self.state.corpus_size = len(corpus)
        corpus_entries.set(len(corpus))
        self._reporter.on_corpus_ready(len(corpus))
        self._reporter.on_status(f"Loaded {len(corpus)} reviews", Severity.READY)

    async def _initialize_engine(self, credential: Optional[str]) -> None:
        self._reporter.on_status(
            "Downloading sentiment model... This may take a minute.", Severity.LOADING
        )
        try:
            engine = await self._gateway.initialize(self._engine_candidates, credential)
        except NoEngineAvailable as e:
            self._reporter.on_status(f"Error loading model: {e.message}", Severity.ERROR)
            self._reporter.on_error(e.kind, e.message)
            raise
        except Exception as e:
            message = str(e) or type(e).__name__
            self._reporter.on_status(f"Error loading model: {message}", Severity.ERROR)
            self._reporter.on_error(ErrorKind.NO_ENGINE_AVAILABLE, message)
            raise

        self.state.engine_ready = True
        self.state.engine_identifier = engine.identifier
        self._reporter.on_engine_ready(engine.identifier)
        self._reporter.on_status("Model loaded and ready for analysis!", Severity.READY)

    # ------------------------------------------------------------------
    # Credentials
    # ------------------------------------------------------------------

    async def _load_credential(self) -> Optional[str]:
        if self._credential_store is None:
            return None
        try:
            token = await self._credential_store.get(self._credential_key)
        except Exception as e:
            logger.warning(
                "Credential store unavailable, continuing without token",
                error=str(e),
                error_type=type(e).__name__,
            )
            return None

        if token and token.strip():
            self._reporter.on_status("Token loaded from storage", Severity.READY)
            return token.strip()

        logger.info("No stored token, using anonymous model access")
        return None

    async def store_credential(self, value: str) -> bool:
        """
        Save or clear the acquisition token.

        A blank value removes the stored token. The token is only used by
        the next engine acquisition; a bound engine is never swapped.

        Returns:
            True if a token is now stored, False if it was cleared

        Raises:
            RuntimeError: No credential store configured
        """
        if self._credential_store is None:
            raise RuntimeError("No credential store configured")

        token = value.strip()
        if token:
            await self._credential_store.set(self._credential_key, token)
            self._reporter.on_status("Token saved locally", Severity.READY)
            return True

        await self._credential_store.remove(self._credential_key)
        self._reporter.on_status("Token cleared", Severity.READY)
        return False

    async def has_credential(self) -> bool:
        if self._credential_store is None:
            return False
        token = await self._credential_store.get(self._credential_key)
        return bool(token and token.strip())

    # ------------------------------------------------------------------
    # Analysis
    # ------------------------------------------------------------------

    async def analyze(self) -> Optional[AnalysisOutcome]:
        """
        Classify one randomly selected review.

        The selected review is reported before inference starts. On
        success the normalized sentiment and elapsed time are reported;
        an inference failure is reported as an error and the session
        stays usable.

        Returns:
            AnalysisOutcome, or None if another analysis is in flight

        Raises:
            NotReady: Session is initializing or failed
        """
        if self.state.busy:
            analyses_total.labels(outcome="rejected").inc()
            logger.warning("Analysis already in progress, request rejected")
            return None
        if self.state.phase is not SessionPhase.READY or self._corpus is None:
            raise NotReady(
                f"Session is not ready for analysis (phase: {self.state.phase.value})",
                details={
                    "phase": self.state.phase.value,
                    "corpus_ready": self.state.corpus_ready,
                    "engine_ready": self.state.engine_ready,
                },
            )

        self.state.busy = True
        self.state.phase = SessionPhase.ANALYZING
        try:
            review = self._rng.choice(self._corpus.entries)
            self._reporter.on_review_selected(review)
            self._reporter.on_status("Analyzing sentiment...", Severity.LOADING)
            return await self._run_analysis(review)
        finally:
            self.state.busy = False
            self.state.phase = SessionPhase.READY

    async def _run_analysis(self, review: str) -> AnalysisOutcome:
        engine = self.state.engine_identifier or ""
        start_time = time.perf_counter()
        try:
            ranked = await self._gateway.classify(review)
        except InferenceFailure as e:
            elapsed_ms = int((time.perf_counter() - start_time) * 1000)
            analyses_total.labels(outcome="failure").inc()
            self._reporter.on_status(f"Analysis error: {e.message}", Severity.ERROR)
            self._reporter.on_error(e.kind, e.message)
            return AnalysisOutcome(
                review=review,
                engine=engine,
                elapsed_ms=elapsed_ms,
                error=e.message,
            )

        elapsed_ms = int((time.perf_counter() - start_time) * 1000)
        top = ranked[0]
        sentiment = normalize_top(ranked, self._markers)

        analyses_total.labels(outcome="success").inc()
        sentiment_categories_total.labels(category=sentiment.category.value).inc()
        logger.info(
            "Analysis complete",
            engine=engine,
            raw_label=top.label,
            raw_score=top.score,
            category=sentiment.category.value,
            confidence=sentiment.confidence,
            elapsed_ms=elapsed_ms,
        )

        self._reporter.on_result(sentiment.category, sentiment.confidence_percent, elapsed_ms)
        self._reporter.on_status(
            f"Analysis complete! Inference took {elapsed_ms}ms", Severity.READY
        )
        return AnalysisOutcome(
            review=review,
            engine=engine,
            sentiment=sentiment,
            raw_label=top.label,
            raw_score=top.score,
            elapsed_ms=elapsed_ms,
        )
