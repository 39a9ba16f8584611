"""
Cards service - Business logic for card management.
Includes id allocation, bulk import with duplicate detection and export.
"""

import asyncio
import logging
from datetime import datetime, timezone
from typing import List, Optional, Sequence

from sqlalchemy.ext.asyncio import AsyncSession

from studycards.cards.dedup import plan_import
from studycards.cards.filters import (
    cards_needing_images,
    compute_stats,
    extract_topics,
    extract_types,
    filter_cards,
)
from studycards.cards.idgen import generate_card_id
from studycards.cards.models import Card
from studycards.cards.repository import CardRepository
from studycards.cards.schemas import (
    CardCreate,
    CardList,
    CardRead,
    CardStats,
    CardUpdate,
    ExportMetadata,
    ExportResponse,
    ImportRequest,
    ImportResponse,
    TopicList,
)
from studycards.config import get_settings

logger = logging.getLogger(__name__)
settings = get_settings()

# Serializes "read all ids -> generate -> insert -> commit" within this process.
_id_allocation_lock = asyncio.Lock()

# Fields that must never be cleared by an update.
REQUIRED_FIELDS = ("topic", "type", "category", "title", "content", "image_needed")


class CardService:
    """Service for card business logic."""

    def __init__(self, db: AsyncSession):
        self.db = db
        self.card_repo = CardRepository(db)

    # ═══════════════════════════════════════════════════════════════════════
    # QUERIES
    # ═══════════════════════════════════════════════════════════════════════

    async def get_all_cards(self) -> List[CardRead]:
        cards = await self.card_repo.get_all()
        return [self._card_to_read_dto(c) for c in cards]

    async def list_cards(
        self,
        topics: Optional[Sequence[str]] = None,
        types: Optional[Sequence[str]] = None,
        categories: Optional[Sequence[str]] = None,
        query: Optional[str] = None,
    ) -> CardList:
        """List cards narrowed by the given filters."""
        logger.info(
            f"[CardService] Listing cards (topics={topics}, types={types}, "
            f"categories={categories}, q={query!r})"
        )

        cards = filter_cards(
            await self.get_all_cards(),
            topics=topics,
            types=types,
            categories=categories,
            query=query,
        )
        return CardList(cards=cards, total=len(cards))

    async def get_card(self, card_id: str) -> CardRead:
        card = await self.card_repo.get_by_id(card_id)
        return self._card_to_read_dto(card)

    async def get_topics(self) -> TopicList:
        return TopicList(topics=extract_topics(await self.get_all_cards()))

    async def get_stats(self) -> CardStats:
        return compute_stats(await self.get_all_cards())

    async def get_cards_needing_images(self) -> CardList:
        cards = cards_needing_images(await self.get_all_cards())
        return CardList(cards=cards, total=len(cards))

    # ═══════════════════════════════════════════════════════════════════════
    # MUTATIONS
    # ═══════════════════════════════════════════════════════════════════════

    async def create_card(self, card_data: CardCreate) -> CardRead:
        """Create a card under a freshly generated id."""
        logger.info(f"[CardService] Creating card: {card_data.title} ({card_data.topic}/{card_data.type})")

        async with _id_allocation_lock:
            existing_ids = await self.card_repo.get_taken_ids()
            card_id = generate_card_id(card_data.topic, card_data.type, existing_ids)
            card = await self.card_repo.create(card_id, card_data.model_dump(mode="json"))
            await self.db.commit()

        return self._card_to_read_dto(card)

    async def update_card(self, card_id: str, card_data: CardUpdate) -> CardRead:
        """Update card fields in place. Topic or type changes keep the id."""
        logger.info(f"[CardService] Updating card: {card_id}")

        changes = card_data.model_dump(mode="json", exclude_unset=True)
        for name in REQUIRED_FIELDS:
            if name in changes and changes[name] is None:
                del changes[name]

        card = await self.card_repo.update(card_id, changes)
        return self._card_to_read_dto(card)

    async def delete_card(self, card_id: str) -> bool:
        """Delete a card permanently."""
        logger.info(f"[CardService] Deleting card: {card_id}")
        return await self.card_repo.delete(card_id)

    async def import_cards(self, request: ImportRequest) -> ImportResponse:
        """
        Bulk import cards.

        Probable duplicates (same fingerprint as a stored card) are skipped
        unless the strategy is replace_all. Ids are allocated against the
        ids of stored and deleted cards plus the ids assigned earlier in
        the same batch.
        """
        logger.info(
            f"[CardService] Importing {len(request.cards)} cards "
            f"(strategy={request.strategy.value}, category={request.category})"
        )

        candidates = [c.model_dump(mode="json", exclude_none=True) for c in request.cards]
        category = request.category.value if request.category else None

        async with _id_allocation_lock:
            existing_cards = await self.card_repo.get_all()
            retired_ids = await self.card_repo.get_retired_ids()
            plan = plan_import(
                candidates,
                existing_cards=[self._card_to_read_dto(c).model_dump(mode="json") for c in existing_cards],
                existing_ids=[c.id for c in existing_cards] + retired_ids,
                strategy=request.strategy,
                category=category,
            )

            created: List[Card] = []
            if plan.imported:
                created = await self.card_repo.bulk_create(plan.imported)
                await self.db.commit()

        logger.info(
            f"[CardService] Imported {plan.imported_count} cards "
            f"({plan.duplicate_count} duplicates)"
        )

        return ImportResponse(
            imported=plan.imported_count,
            duplicates=plan.duplicate_count,
            cards=[self._card_to_read_dto(c) for c in created],
        )

    # ═══════════════════════════════════════════════════════════════════════
    # EXPORT
    # ═══════════════════════════════════════════════════════════════════════

    async def export_cards(self) -> ExportResponse:
        """Export the whole collection in the import file format."""
        logger.info("[CardService] Exporting cards")

        cards = await self.get_all_cards()
        return ExportResponse(
            metadata=ExportMetadata(
                title=settings.export_title,
                version=settings.export_version,
                last_updated=datetime.now(timezone.utc).date().isoformat(),
                schema_version=settings.export_schema_version,
            ),
            topics=extract_topics(cards),
            types=extract_types(cards),
            cards=cards,
        )

    # ═══════════════════════════════════════════════════════════════════════
    # DTO TRANSFORMATIONS
    # ═══════════════════════════════════════════════════════════════════════

    def _card_to_read_dto(self, card: Card) -> CardRead:
        """Convert Card model to CardRead DTO."""
        return CardRead.model_validate(card)


def get_card_service(db: AsyncSession) -> CardService:
    """Factory function for CardService."""
    return CardService(db)
