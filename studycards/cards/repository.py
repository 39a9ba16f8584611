"""
Cards repository - Data Access Layer for cards.
Handles all database operations for Card entities.
"""

import logging
from datetime import datetime, timezone
from typing import Any, Dict, List, Mapping, Sequence

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from studycards.cards.models import DEFAULT_CATEGORY, Card, RetiredCardId
from studycards.core.exceptions import CardNotFoundError

logger = logging.getLogger(__name__)

# Columns a caller may set; id and timestamps are managed here.
CARD_FIELDS = (
    "topic",
    "type",
    "category",
    "title",
    "content",
    "latex",
    "variables",
    "result_unit",
    "conditions",
    "axes",
    "key_features",
    "image",
    "image_needed",
    "image_description",
)


def _card_values(data: Mapping[str, Any]) -> Dict[str, Any]:
    values = {name: data.get(name) for name in CARD_FIELDS}
    values["category"] = values["category"] or DEFAULT_CATEGORY
    values["content"] = values["content"] or ""
    values["image_needed"] = bool(values["image_needed"])
    return values


class CardRepository:
    """Repository for Card CRUD operations."""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def create(self, card_id: str, data: Mapping[str, Any]) -> Card:
        """
        Insert a new card under an already generated id.

        Args:
            card_id: Card id (see idgen.generate_card_id)
            data: Card fields

        Returns:
            Created Card entity
        """
        now = datetime.now(timezone.utc)
        card = Card(id=card_id, created_at=now, updated_at=now, **_card_values(data))

        self.db.add(card)
        await self.db.flush()

        logger.info(f"[CardRepository] Created card: {card.id} - {card.title}")
        return card

    async def bulk_create(self, cards: Sequence[Mapping[str, Any]]) -> List[Card]:
        """
        Insert several cards in one flush.

        Args:
            cards: Card dicts, each with its "id" already assigned

        Returns:
            List of created Card entities
        """
        now = datetime.now(timezone.utc)

        entities = []
        for data in cards:
            card = Card(id=data["id"], created_at=now, updated_at=now, **_card_values(data))
            self.db.add(card)
            entities.append(card)

        await self.db.flush()

        logger.info(f"[CardRepository] Bulk created {len(entities)} cards")
        return entities

    async def get_by_id(self, card_id: str) -> Card:
        """
        Get a card by its id.

        Raises:
            CardNotFoundError: If card not found
        """
        result = await self.db.execute(select(Card).where(Card.id == card_id))
        card = result.scalar_one_or_none()

        if card is None:
            raise CardNotFoundError(f"Card not found: {card_id}")

        return card

    async def get_all(self) -> Sequence[Card]:
        """Get all cards ordered by topic, type and id."""
        stmt = select(Card).order_by(Card.topic, Card.type, Card.id)
        result = await self.db.execute(stmt)
        return result.scalars().all()

    async def get_all_ids(self) -> List[str]:
        """Get every card id currently in use."""
        result = await self.db.execute(select(Card.id))
        return list(result.scalars().all())

    async def get_retired_ids(self) -> List[str]:
        """Get the ids of all deleted cards."""
        result = await self.db.execute(select(RetiredCardId.id))
        return list(result.scalars().all())

    async def get_taken_ids(self) -> List[str]:
        """
        Get every id that must not be handed out again:
        ids of stored cards plus ids of deleted cards.
        """
        return await self.get_all_ids() + await self.get_retired_ids()

    async def update(self, card_id: str, changes: Mapping[str, Any]) -> Card:
        """
        Apply a partial update. The id is never changed, even when
        topic or type change.

        Args:
            card_id: Card id
            changes: Fields to overwrite

        Returns:
            Updated Card entity
        """
        card = await self.get_by_id(card_id)

        for name, value in changes.items():
            if name in CARD_FIELDS:
                setattr(card, name, value)

        card.updated_at = datetime.now(timezone.utc)
        await self.db.flush()

        logger.info(f"[CardRepository] Updated card: {card.id}")
        return card

    async def delete(self, card_id: str) -> bool:
        """
        Delete a card permanently. Its id is retired and never reused.

        Raises:
            CardNotFoundError: If card not found
        """
        card = await self.get_by_id(card_id)
        await self.db.delete(card)

        if await self.db.get(RetiredCardId, card_id) is None:
            self.db.add(RetiredCardId(id=card_id, retired_at=datetime.now(timezone.utc)))
        await self.db.flush()

        logger.info(f"[CardRepository] Deleted card: {card_id}")
        return True

