"""Tests for the review deck state machine."""

import random

import pytest

from studycards.review.deck import DeckPhase, ReviewDeck, completion_percentage

CARDS = ["a", "b", "c", "d"]


@pytest.fixture
def deck() -> ReviewDeck[str]:
    review_deck: ReviewDeck[str] = ReviewDeck(rng=random.Random(7))
    assert review_deck.start(CARDS)
    return review_deck


def _answer(deck: ReviewDeck[str], known: bool) -> None:
    assert deck.flip()
    assert deck.know() if known else deck.again()


class TestStart:
    """Test suite for starting a session."""

    def test_start_deals_a_permutation(self, deck: ReviewDeck[str]) -> None:
        state = deck.state()

        assert state.phase == DeckPhase.LEARNING
        assert sorted(deck.deck) == CARDS
        assert state.current_index == 0
        assert state.current_card == deck.deck[0]
        assert state.known_count == 0
        assert state.total_seen == 0
        assert state.total_cards == 4

    def test_start_with_no_cards_is_ignored(self) -> None:
        empty: ReviewDeck[str] = ReviewDeck()

        assert not empty.start([])
        assert empty.phase == DeckPhase.SETUP
        assert empty.current_card is None

    def test_start_while_learning_is_ignored(self, deck: ReviewDeck[str]) -> None:
        assert not deck.start(["x"])
        assert sorted(deck.deck) == CARDS


class TestAnswers:
    """Test suite for flip, know and again."""

    def test_flip_toggles(self, deck: ReviewDeck[str]) -> None:
        assert deck.flip()
        assert deck.is_flipped
        assert deck.flip()
        assert not deck.is_flipped

    def test_answers_require_flipped_card(self, deck: ReviewDeck[str]) -> None:
        assert not deck.know()
        assert not deck.again()
        assert deck.total_seen == 0

    def test_know_advances_and_unflips(self, deck: ReviewDeck[str]) -> None:
        second = deck.deck[1]
        _answer(deck, known=True)

        assert deck.current_index == 1
        assert deck.current_card == second
        assert not deck.is_flipped
        assert deck.known_count == 1

    def test_again_moves_card_to_back(self, deck: ReviewDeck[str]) -> None:
        order = deck.deck
        _answer(deck, known=False)

        assert deck.deck == order[1:] + order[:1]
        assert deck.current_index == 0
        assert deck.current_card == order[1]
        assert deck.total_seen == 1
        assert deck.known_count == 0

    def test_again_on_last_card_shows_it_again(self, deck: ReviewDeck[str]) -> None:
        for _ in range(3):
            _answer(deck, known=True)
        last = deck.current_card
        _answer(deck, known=False)

        assert deck.current_index == 3
        assert deck.current_card == last
        assert deck.phase == DeckPhase.LEARNING

    def test_again_n_times_restores_order(self, deck: ReviewDeck[str]) -> None:
        """Test that one full rotation of misses returns to the dealt order."""
        order = deck.deck
        for _ in range(len(order)):
            _answer(deck, known=False)

        assert deck.deck == order
        assert deck.current_card == order[0]

    def test_one_miss_gives_seventy_five_percent(self, deck: ReviewDeck[str]) -> None:
        _answer(deck, known=False)
        for _ in range(4):
            _answer(deck, known=True)

        state = deck.state()
        assert state.phase == DeckPhase.DONE
        assert state.known_count == 3
        assert state.total_seen == 5
        assert state.percentage == 75
        assert state.current_card is None

    def test_answers_ignored_when_done(self, deck: ReviewDeck[str]) -> None:
        for _ in range(4):
            _answer(deck, known=True)

        assert deck.phase == DeckPhase.DONE
        assert deck.percentage == 100
        assert not deck.flip()
        assert not deck.know()


class TestRestartAndBack:
    """Test suite for leaving and repeating a session."""

    def test_restart_only_when_done(self, deck: ReviewDeck[str]) -> None:
        assert not deck.restart()

        for _ in range(4):
            _answer(deck, known=True)
        assert deck.restart()

        assert deck.phase == DeckPhase.LEARNING
        assert sorted(deck.deck) == CARDS
        assert deck.known_count == 0
        assert deck.total_seen == 0

    def test_restart_reuses_original_cards_after_misses(self, deck: ReviewDeck[str]) -> None:
        _answer(deck, known=False)
        for _ in range(4):
            _answer(deck, known=True)
        deck.restart()

        assert deck.known_count == 0
        _answer(deck, known=True)
        assert deck.known_count == 1

    def test_back_returns_to_setup(self, deck: ReviewDeck[str]) -> None:
        assert deck.back()

        assert deck.phase == DeckPhase.SETUP
        assert deck.deck == []
        assert deck.current_card is None
        assert not deck.back()

    def test_start_again_after_back(self, deck: ReviewDeck[str]) -> None:
        deck.back()
        assert deck.start(["x", "y"])
        assert sorted(deck.deck) == ["x", "y"]


class TestCompletionPercentage:
    """Test suite for completion_percentage."""

    @pytest.mark.parametrize(
        ("known", "total", "expected"),
        [(0, 0, 0), (3, 4, 75), (1, 8, 13), (1, 3, 33), (2, 3, 67), (5, 5, 100)],
    )
    def test_rounds_half_up(self, known: int, total: int, expected: int) -> None:
        assert completion_percentage(known, total) == expected
