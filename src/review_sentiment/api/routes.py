"""
API routes for the review sentiment demo.

The web adapter only reads SessionState and triggers controller
operations; everything the controller reports also lands in the event
log exposed at GET /events.
"""

from fastapi import APIRouter, Depends, Query, Response, status
from fastapi.responses import JSONResponse

from review_sentiment.api.dependencies import (
    get_event_log,
    get_session_controller,
    get_settings,
)
from review_sentiment.api.models import (
    AnalyzeResponse,
    CredentialStatusResponse,
    CredentialUpdateRequest,
    EventsResponse,
    HealthResponse,
    SessionStateResponse,
)
from review_sentiment.config import Settings
from review_sentiment.models.enums import SessionPhase
from review_sentiment.session.controller import SessionController
from review_sentiment.session.reporting import EventLogReporter

router = APIRouter()


@router.get(
    "/health",
    response_model=HealthResponse,
    summary="Service health check",
    responses={
        200: {"description": "Corpus and engine are loaded"},
        503: {"description": "Session is initializing or failed"},
    },
)
async def health_check(
    response: Response,
    controller: SessionController = Depends(get_session_controller),
    settings: Settings = Depends(get_settings),
) -> HealthResponse:
    healthy = controller.phase in (SessionPhase.READY, SessionPhase.ANALYZING)
    if not healthy:
        response.status_code = status.HTTP_503_SERVICE_UNAVAILABLE
    return HealthResponse(
        status="healthy" if healthy else "unhealthy",
        version=settings.APP_VERSION,
        session=SessionStateResponse.from_state(controller.state),
    )


@router.get(
    "/session",
    response_model=SessionStateResponse,
    summary="Current session state",
)
async def get_session(
    controller: SessionController = Depends(get_session_controller),
) -> SessionStateResponse:
    return SessionStateResponse.from_state(controller.state)


@router.post(
    "/session/initialize",
    response_model=SessionStateResponse,
    summary="(Re)initialize the session",
    description="""
    Acquire whatever is still missing (corpus, engine or both).

    This is the recovery path after a failed startup. It is a no-op when
    the session is already ready, and never replaces an acquired engine.
    """,
)
async def initialize_session(
    controller: SessionController = Depends(get_session_controller),
) -> SessionStateResponse:
    await controller.initialize()
    return SessionStateResponse.from_state(controller.state)


@router.post(
    "/analyze",
    response_model=AnalyzeResponse,
    summary="Analyze a random review",
    responses={
        200: {"description": "Analysis ran (status=failed on inference error)"},
        409: {"description": "Session not ready, or another analysis in progress"},
    },
)
async def analyze_random_review(
    controller: SessionController = Depends(get_session_controller),
):
    outcome = await controller.analyze()
    if outcome is None:
        return JSONResponse(
            status_code=status.HTTP_409_CONFLICT,
            content={
                "error": "analysis_in_progress",
                "message": "Another analysis is already running",
            },
        )
    return AnalyzeResponse.from_outcome(outcome)


@router.get(
    "/events",
    response_model=EventsResponse,
    summary="Recent session notifications",
)
async def list_events(
    limit: int = Query(default=20, ge=1, le=1000),
    event_log: EventLogReporter = Depends(get_event_log),
) -> EventsResponse:
    events = event_log.events(limit=limit)
    return EventsResponse(count=len(events), events=events)


@router.get(
    "/credential",
    response_model=CredentialStatusResponse,
    summary="Whether a Hugging Face token is stored",
)
async def credential_status(
    controller: SessionController = Depends(get_session_controller),
) -> CredentialStatusResponse:
    return CredentialStatusResponse(present=await controller.has_credential())


@router.put(
    "/credential",
    response_model=CredentialStatusResponse,
    summary="Store (or clear, if blank) the Hugging Face token",
)
async def update_credential(
    body: CredentialUpdateRequest,
    controller: SessionController = Depends(get_session_controller),
) -> CredentialStatusResponse:
    present = await controller.store_credential(body.token)
    return CredentialStatusResponse(present=present)


@router.delete(
    "/credential",
    response_model=CredentialStatusResponse,
    summary="Remove the stored token",
)
async def delete_credential(
    controller: SessionController = Depends(get_session_controller),
) -> CredentialStatusResponse:
    present = await controller.store_credential("")
    return CredentialStatusResponse(present=present)
