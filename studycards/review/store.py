"""
In-memory registry of active review sessions.

Sessions live only as long as the process. The oldest sessions are
evicted once the configured maximum is reached.
"""

import logging
import random
from typing import Dict, Optional
from uuid import uuid4

from studycards.cards.schemas import CardRead
from studycards.config import get_settings
from studycards.core.exceptions import ReviewSessionNotFoundError
from studycards.review.deck import ReviewDeck

logger = logging.getLogger(__name__)
settings = get_settings()


class ReviewSessionStore:
    """Keeps ReviewDeck instances keyed by session id."""

    def __init__(self, max_sessions: int = 500, rng: Optional[random.Random] = None):
        self.max_sessions = max_sessions
        self._rng = rng
        self._sessions: Dict[str, ReviewDeck[CardRead]] = {}

    def __len__(self) -> int:
        return len(self._sessions)

    def __contains__(self, session_id: str) -> bool:
        return session_id in self._sessions

    def create(self) -> tuple[str, ReviewDeck[CardRead]]:
        """Register a new deck in setup phase and return it with its id."""
        while len(self._sessions) >= self.max_sessions:
            oldest = next(iter(self._sessions))
            del self._sessions[oldest]
            logger.info(f"[ReviewSessionStore] Evicted session: {oldest}")

        session_id = str(uuid4())
        deck: ReviewDeck[CardRead] = ReviewDeck(rng=self._rng)
        self._sessions[session_id] = deck

        logger.info(f"[ReviewSessionStore] Created session: {session_id}")
        return session_id, deck

    def get(self, session_id: str) -> ReviewDeck[CardRead]:
        """
        Get a session's deck.

        Raises:
            ReviewSessionNotFoundError: If the id is unknown
        """
        deck = self._sessions.get(session_id)
        if deck is None:
            raise ReviewSessionNotFoundError(f"Review session not found: {session_id}")
        return deck

    def discard(self, session_id: str) -> None:
        """
        Drop a session.

        Raises:
            ReviewSessionNotFoundError: If the id is unknown
        """
        if self._sessions.pop(session_id, None) is None:
            raise ReviewSessionNotFoundError(f"Review session not found: {session_id}")
        logger.info(f"[ReviewSessionStore] Discarded session: {session_id}")

    def clear(self) -> None:
        self._sessions.clear()


_store = ReviewSessionStore(max_sessions=settings.review_max_sessions)


def get_review_store() -> ReviewSessionStore:
    """Process-wide session store (FastAPI dependency)."""
    return _store
