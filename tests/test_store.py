"""Tests for the in-memory review session store."""

import pytest

from studycards.core.exceptions import ReviewSessionNotFoundError
from studycards.review.deck import DeckPhase
from studycards.review.store import ReviewSessionStore


class TestReviewSessionStore:
    """Test suite for ReviewSessionStore."""

    def test_create_and_get(self) -> None:
        store = ReviewSessionStore()
        session_id, deck = store.create()

        assert session_id in store
        assert store.get(session_id) is deck
        assert deck.phase == DeckPhase.SETUP

    def test_oldest_session_is_evicted(self) -> None:
        store = ReviewSessionStore(max_sessions=2)
        first, _ = store.create()
        second, _ = store.create()
        third, _ = store.create()

        assert len(store) == 2
        assert first not in store
        assert second in store
        assert third in store

    def test_unknown_session_raises(self) -> None:
        store = ReviewSessionStore()

        with pytest.raises(ReviewSessionNotFoundError):
            store.get("missing")
        with pytest.raises(ReviewSessionNotFoundError):
            store.discard("missing")

    def test_discard(self) -> None:
        store = ReviewSessionStore()
        session_id, _ = store.create()

        store.discard(session_id)

        assert session_id not in store
