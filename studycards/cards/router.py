"""
Cards router - API endpoints for card management, import and export.
"""

import logging
from typing import List, Optional

from fastapi import APIRouter, Depends, Query, Request, status
from fastapi.responses import JSONResponse
from sqlalchemy.ext.asyncio import AsyncSession

from studycards.cards.schemas import (
    CardCreate,
    CardError,
    CardList,
    CardRead,
    CardStats,
    CardUpdate,
    ExportResponse,
    ImportRequest,
    ImportResponse,
    TopicList,
)
from studycards.cards.service import get_card_service
from studycards.config import get_settings
from studycards.core.exceptions import CardNotFoundError
from studycards.database import get_db
from studycards.rate_limit import limiter

logger = logging.getLogger(__name__)
settings = get_settings()

cards_router = APIRouter(prefix="/cards", tags=["Cards"])


def _card_not_found(e: CardNotFoundError) -> JSONResponse:
    return JSONResponse(
        status_code=status.HTTP_404_NOT_FOUND,
        content={"error": e.message, "code": "CARD_NOT_FOUND"},
    )


@cards_router.get(
    "",
    response_model=CardList,
    status_code=status.HTTP_200_OK,
    summary="List cards",
    description="List all cards ordered by topic, type and id, optionally filtered.",
)
async def list_cards(
    topic: List[str] = Query(default=[], description="Only these topics (repeatable)"),
    card_type: List[str] = Query(default=[], alias="type", description="Only these types (repeatable)"),
    category: List[str] = Query(default=[], description="Only these categories (repeatable)"),
    q: Optional[str] = Query(None, description="Search in title, content and variables"),
    db: AsyncSession = Depends(get_db),
) -> CardList:
    """List cards with optional filters."""
    logger.info(f"[CardsRouter] Listing cards (topic={topic}, type={card_type}, category={category}, q={q!r})")

    service = get_card_service(db)
    return await service.list_cards(topics=topic, types=card_type, categories=category, query=q)


@cards_router.get(
    "/topics",
    response_model=TopicList,
    status_code=status.HTTP_200_OK,
    summary="List topics",
    description="Distinct topics of all cards in alphabetical order.",
)
async def list_topics(db: AsyncSession = Depends(get_db)) -> TopicList:
    service = get_card_service(db)
    return await service.get_topics()


@cards_router.get(
    "/stats",
    response_model=CardStats,
    status_code=status.HTTP_200_OK,
    summary="Card statistics",
    description="Card counts in total and per topic, type and category.",
)
async def get_stats(db: AsyncSession = Depends(get_db)) -> CardStats:
    service = get_card_service(db)
    return await service.get_stats()


@cards_router.get(
    "/needing-images",
    response_model=CardList,
    status_code=status.HTTP_200_OK,
    summary="Cards needing images",
    description="Cards flagged with image_needed that have no image yet.",
)
async def list_cards_needing_images(db: AsyncSession = Depends(get_db)) -> CardList:
    service = get_card_service(db)
    return await service.get_cards_needing_images()


@cards_router.get(
    "/export",
    response_model=ExportResponse,
    status_code=status.HTTP_200_OK,
    summary="Export all cards",
    description="Export the full collection with metadata. The result can be re-imported.",
)
async def export_cards(db: AsyncSession = Depends(get_db)) -> ExportResponse:
    """Export all cards."""
    logger.info("[CardsRouter] Exporting cards")

    service = get_card_service(db)
    return await service.export_cards()


@cards_router.post(
    "/import",
    response_model=ImportResponse,
    status_code=status.HTTP_200_OK,
    summary="Bulk import cards",
    description=(
        "Import a list of cards. Cards with the same title, topic and type as a stored card "
        "are skipped unless strategy is replace_all. Ids are generated for every imported card."
    ),
    responses={
        200: {"model": ImportResponse, "description": "Import result"},
        422: {"description": "Malformed card in payload"},
        429: {"description": "Too many imports"},
    },
)
@limiter.limit(settings.import_rate_limit)
async def import_cards(
    request: Request,
    import_data: ImportRequest,
    db: AsyncSession = Depends(get_db),
) -> ImportResponse:
    """Bulk import cards with duplicate detection."""
    logger.info(f"[CardsRouter] Importing {len(import_data.cards)} cards")

    service = get_card_service(db)
    return await service.import_cards(import_data)


@cards_router.post(
    "",
    response_model=CardRead,
    status_code=status.HTTP_201_CREATED,
    summary="Create a card",
    description="Create a single card. The id is generated from topic and type.",
    responses={
        201: {"model": CardRead, "description": "Card created"},
        422: {"description": "title, topic and type are required"},
    },
)
async def create_card(
    card_data: CardCreate,
    db: AsyncSession = Depends(get_db),
) -> CardRead:
    """Create a new card."""
    logger.info(f"[CardsRouter] Creating card: {card_data.title}")

    service = get_card_service(db)
    return await service.create_card(card_data)


@cards_router.get(
    "/{card_id}",
    response_model=CardRead,
    status_code=status.HTTP_200_OK,
    summary="Get card by ID",
    responses={
        200: {"model": CardRead, "description": "The card"},
        404: {"model": CardError, "description": "Card not found"},
    },
)
async def get_card(
    card_id: str,
    db: AsyncSession = Depends(get_db),
) -> CardRead:
    try:
        service = get_card_service(db)
        return await service.get_card(card_id)
    except CardNotFoundError as e:
        logger.warning(f"[CardsRouter] Card not found: {card_id}")
        return _card_not_found(e)


@cards_router.patch(
    "/{card_id}",
    response_model=CardRead,
    status_code=status.HTTP_200_OK,
    summary="Update card",
    description="Update card fields. The id stays the same even if topic or type change.",
    responses={
        200: {"model": CardRead, "description": "Updated card"},
        404: {"model": CardError, "description": "Card not found"},
    },
)
async def update_card(
    card_id: str,
    card_data: CardUpdate,
    db: AsyncSession = Depends(get_db),
) -> CardRead:
    """Update a card."""
    logger.info(f"[CardsRouter] Updating card: {card_id}")

    try:
        service = get_card_service(db)
        return await service.update_card(card_id, card_data)
    except CardNotFoundError as e:
        logger.warning(f"[CardsRouter] Card not found: {card_id}")
        return _card_not_found(e)


@cards_router.delete(
    "/{card_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Delete card",
    description="Delete a card permanently.",
    responses={
        204: {"description": "Card deleted"},
        404: {"model": CardError, "description": "Card not found"},
    },
)
async def delete_card(
    card_id: str,
    db: AsyncSession = Depends(get_db),
) -> None:
    """Delete a card."""
    logger.info(f"[CardsRouter] Deleting card: {card_id}")

    try:
        service = get_card_service(db)
        await service.delete_card(card_id)
    except CardNotFoundError as e:
        logger.warning(f"[CardsRouter] Card not found: {card_id}")
        return _card_not_found(e)
