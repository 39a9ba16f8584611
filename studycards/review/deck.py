"""
Review deck - requeue-on-miss flashcard drill.

This is deliberately not a spaced-repetition scheduler: a session shuffles
the given cards once and walks through them. "Know" advances to the next
card, "again" moves the current card to the back of the deck. The session
is done once every card has been answered with "know".

Phases:
    setup    -> learning   start(cards)   (no-op for an empty list)
    learning -> learning   flip(), again(), know()
    learning -> done       know() on the last card
    done     -> learning   restart()      (reshuffles the original list)
    done     -> setup      back()
"""

import random
from dataclasses import dataclass
from enum import Enum
from typing import Generic, List, Optional, Sequence, TypeVar

T = TypeVar("T")


class DeckPhase(str, Enum):
    """Phase of a review session."""
    SETUP = "setup"
    LEARNING = "learning"
    DONE = "done"


@dataclass
class _DeckEntry(Generic[T]):
    card: T
    missed: bool = False


@dataclass(frozen=True)
class DeckState(Generic[T]):
    """Snapshot of a review deck after a transition."""
    phase: DeckPhase
    current_card: Optional[T]
    current_index: int
    deck_length: int
    is_flipped: bool
    known_count: int
    total_seen: int
    total_cards: int
    percentage: int


def completion_percentage(known_count: int, total_cards: int) -> int:
    """
    Share of cards known at first showing, rounded half up.

    Returns:
        Integer percentage, 0 for an empty deck
    """
    if total_cards <= 0:
        return 0
    return (200 * known_count + total_cards) // (2 * total_cards)


class ReviewDeck(Generic[T]):
    """
    In-memory drill session over an ordered list of cards.

    Transitions that are not valid in the current phase, and know()/again()
    before the card was flipped, are ignored and return False.
    """

    def __init__(self, rng: Optional[random.Random] = None):
        self._rng = rng or random.Random()
        self._source: List[T] = []
        self._entries: List[_DeckEntry[T]] = []
        self.phase = DeckPhase.SETUP
        self.current_index = 0
        self.is_flipped = False
        self.known_count = 0
        self.total_seen = 0

    # ═══════════════════════════════════════════════════════════════════════
    # READ ACCESS
    # ═══════════════════════════════════════════════════════════════════════

    @property
    def deck(self) -> List[T]:
        """Cards in their current drill order."""
        return [entry.card for entry in self._entries]

    @property
    def total_cards(self) -> int:
        return len(self._entries)

    @property
    def current_card(self) -> Optional[T]:
        if self.phase != DeckPhase.LEARNING:
            return None
        if 0 <= self.current_index < len(self._entries):
            return self._entries[self.current_index].card
        return None

    @property
    def percentage(self) -> int:
        return completion_percentage(self.known_count, self.total_cards)

    def state(self) -> DeckState[T]:
        return DeckState(
            phase=self.phase,
            current_card=self.current_card,
            current_index=self.current_index,
            deck_length=len(self._entries),
            is_flipped=self.is_flipped,
            known_count=self.known_count,
            total_seen=self.total_seen,
            total_cards=self.total_cards,
            percentage=self.percentage,
        )

    # ═══════════════════════════════════════════════════════════════════════
    # TRANSITIONS
    # ═══════════════════════════════════════════════════════════════════════

    def start(self, cards: Sequence[T]) -> bool:
        """
        Start a session over ``cards`` in random order.

        Allowed from setup and done. An empty list leaves the deck untouched.
        """
        if self.phase == DeckPhase.LEARNING or not cards:
            return False

        self._source = list(cards)
        self._deal()
        return True

    def restart(self) -> bool:
        """Reshuffle the original card list after a finished session."""
        if self.phase != DeckPhase.DONE or not self._source:
            return False

        self._deal()
        return True

    def back(self) -> bool:
        """Leave the session (finished or abandoned) and return to setup."""
        if self.phase == DeckPhase.SETUP:
            return False

        self._entries = []
        self._reset_counters()
        self.phase = DeckPhase.SETUP
        return True

    def flip(self) -> bool:
        if self.phase != DeckPhase.LEARNING:
            return False

        self.is_flipped = not self.is_flipped
        return True

    def know(self) -> bool:
        """
        Answer the current card as known and advance.

        Only cards that were never sent back count towards known_count.
        """
        if not self._can_answer():
            return False

        entry = self._entries[self.current_index]
        if not entry.missed:
            self.known_count += 1
        self.total_seen += 1
        self.is_flipped = False
        self.current_index += 1

        if self.current_index >= len(self._entries):
            self.phase = DeckPhase.DONE
        return True

    def again(self) -> bool:
        """
        Answer the current card as not known and move it to the back.

        The next card slides into the current position. If the card was
        already last it stays where it is and is shown again.
        """
        if not self._can_answer():
            return False

        self.total_seen += 1
        self.is_flipped = False

        entry = self._entries.pop(self.current_index)
        entry.missed = True
        self._entries.append(entry)
        self.current_index = min(self.current_index, len(self._entries) - 1)
        return True

    # ═══════════════════════════════════════════════════════════════════════
    # HELPERS
    # ═══════════════════════════════════════════════════════════════════════

    def _can_answer(self) -> bool:
        return self.phase == DeckPhase.LEARNING and self.is_flipped

    def _deal(self) -> None:
        shuffled = list(self._source)
        self._rng.shuffle(shuffled)
        self._entries = [_DeckEntry(card) for card in shuffled]
        self._reset_counters()
        self.phase = DeckPhase.LEARNING

    def _reset_counters(self) -> None:
        self.current_index = 0
        self.is_flipped = False
        self.known_count = 0
        self.total_seen = 0
