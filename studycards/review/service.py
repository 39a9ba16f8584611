"""
Review service - starts review sessions from stored cards and applies
transitions to them.
"""

import logging

from sqlalchemy.ext.asyncio import AsyncSession

from studycards.cards.service import CardService
from studycards.review.schemas import ReviewAction, ReviewSessionCreate, ReviewStateRead
from studycards.review.store import ReviewSessionStore

logger = logging.getLogger(__name__)


class ReviewService:
    """Service for review session business logic."""

    def __init__(self, db: AsyncSession, store: ReviewSessionStore):
        self.card_service = CardService(db)
        self.store = store

    async def create_session(self, request: ReviewSessionCreate) -> ReviewStateRead:
        """
        Start a session over the cards matching the request filters.
        The session stays in setup phase if no card matches.
        """
        card_list = await self.card_service.list_cards(
            topics=request.topics,
            types=request.types,
            categories=request.categories,
            query=request.q,
        )

        session_id, deck = self.store.create()
        started = deck.start(card_list.cards)

        logger.info(f"[ReviewService] Session {session_id} with {card_list.total} cards (started={started})")
        return ReviewStateRead.from_state(session_id, deck.state(), applied=started)

    def get_state(self, session_id: str) -> ReviewStateRead:
        deck = self.store.get(session_id)
        return ReviewStateRead.from_state(session_id, deck.state())

    def apply(self, session_id: str, action: ReviewAction) -> ReviewStateRead:
        """Apply a transition. Actions that are invalid in the current state are ignored."""
        deck = self.store.get(session_id)

        transitions = {
            ReviewAction.FLIP: deck.flip,
            ReviewAction.KNOW: deck.know,
            ReviewAction.AGAIN: deck.again,
            ReviewAction.RESTART: deck.restart,
            ReviewAction.BACK: deck.back,
        }
        applied = transitions[action]()

        if not applied:
            logger.info(f"[ReviewService] Ignored {action.value} in phase {deck.phase.value} ({session_id})")
        return ReviewStateRead.from_state(session_id, deck.state(), applied=applied)

    def discard_session(self, session_id: str) -> None:
        self.store.discard(session_id)


def get_review_service(db: AsyncSession, store: ReviewSessionStore) -> ReviewService:
    """Factory function for ReviewService."""
    return ReviewService(db, store)
