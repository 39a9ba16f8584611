"""
Review router - API endpoints for flashcard review sessions.
"""

import logging

from fastapi import APIRouter, status
from fastapi.responses import JSONResponse

from studycards.core.exceptions import ReviewSessionNotFoundError
from studycards.dependencies import DBSession, ReviewStore
from studycards.review.schemas import (
    ReviewAction,
    ReviewError,
    ReviewSessionCreate,
    ReviewStateRead,
)
from studycards.review.service import get_review_service

logger = logging.getLogger(__name__)

review_router = APIRouter(prefix="/review-sessions", tags=["Review"])


def _session_not_found(e: ReviewSessionNotFoundError) -> JSONResponse:
    return JSONResponse(
        status_code=status.HTTP_404_NOT_FOUND,
        content={"error": e.message, "code": "SESSION_NOT_FOUND"},
    )


@review_router.post(
    "",
    response_model=ReviewStateRead,
    status_code=status.HTTP_201_CREATED,
    summary="Start a review session",
    description=(
        "Start a review session over the cards matching the filters, in random order. "
        "If no card matches, the session stays in the setup phase."
    ),
)
async def create_session(
    request: ReviewSessionCreate,
    db: DBSession,
    store: ReviewStore,
) -> ReviewStateRead:
    """Start a new review session."""
    logger.info(f"[ReviewRouter] Starting session (topics={request.topics}, types={request.types})")

    service = get_review_service(db, store)
    return await service.create_session(request)


@review_router.get(
    "/{session_id}",
    response_model=ReviewStateRead,
    status_code=status.HTTP_200_OK,
    summary="Get review session state",
    responses={
        200: {"model": ReviewStateRead, "description": "Current state"},
        404: {"model": ReviewError, "description": "Session not found"},
    },
)
async def get_session(
    session_id: str,
    db: DBSession,
    store: ReviewStore,
) -> ReviewStateRead:
    try:
        service = get_review_service(db, store)
        return service.get_state(session_id)
    except ReviewSessionNotFoundError as e:
        logger.warning(f"[ReviewRouter] Session not found: {session_id}")
        return _session_not_found(e)


@review_router.post(
    "/{session_id}/{action}",
    response_model=ReviewStateRead,
    status_code=status.HTTP_200_OK,
    summary="Apply a review action",
    description=(
        "flip toggles the card side; know and again answer the flipped card; "
        "restart reshuffles a finished session; back returns to setup. "
        "Actions that are not valid in the current state are ignored (applied=false)."
    ),
    responses={
        200: {"model": ReviewStateRead, "description": "State after the action"},
        404: {"model": ReviewError, "description": "Session not found"},
    },
)
async def apply_action(
    session_id: str,
    action: ReviewAction,
    db: DBSession,
    store: ReviewStore,
) -> ReviewStateRead:
    """Apply a transition to a review session."""
    logger.info(f"[ReviewRouter] {action.value} on session: {session_id}")

    try:
        service = get_review_service(db, store)
        return service.apply(session_id, action)
    except ReviewSessionNotFoundError as e:
        logger.warning(f"[ReviewRouter] Session not found: {session_id}")
        return _session_not_found(e)


@review_router.delete(
    "/{session_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Discard review session",
    responses={
        204: {"description": "Session discarded"},
        404: {"model": ReviewError, "description": "Session not found"},
    },
)
async def discard_session(
    session_id: str,
    db: DBSession,
    store: ReviewStore,
) -> None:
    logger.info(f"[ReviewRouter] Discarding session: {session_id}")

    try:
        service = get_review_service(db, store)
        service.discard_session(session_id)
    except ReviewSessionNotFoundError as e:
        logger.warning(f"[ReviewRouter] Session not found: {session_id}")
        return _session_not_found(e)
