"""
Filtering, topic extraction and statistics over card collections.
Operates on in-memory CardRead DTOs.
"""

import unicodedata
from collections import Counter
from typing import Iterable, List, Optional, Sequence

from studycards.cards.schemas import CardRead, CardStats


def _collation_key(text: str) -> tuple:
    """Sort key approximating German collation: accents folded, case-insensitive."""
    decomposed = unicodedata.normalize("NFKD", text)
    base = "".join(char for char in decomposed if not unicodedata.combining(char))
    return (base.casefold(), text)


def card_matches_search(card: CardRead, query: str) -> bool:
    """Case-insensitive substring match on title, content and variables."""
    needle = query.lower()
    if needle in card.title.lower():
        return True
    if needle in card.content.lower():
        return True
    for variable in card.variables or []:
        if needle in variable.name.lower() or needle in variable.symbol.lower():
            return True
    return False


def filter_cards(
    cards: Iterable[CardRead],
    topics: Optional[Sequence[str]] = None,
    types: Optional[Sequence[str]] = None,
    categories: Optional[Sequence[str]] = None,
    query: Optional[str] = None,
) -> List[CardRead]:
    """
    Narrow a card list by topic, type, category and free-text search.

    Empty criteria are ignored. The input order is preserved.
    """
    filtered = list(cards)
    if topics:
        filtered = [c for c in filtered if c.topic in topics]
    if types:
        filtered = [c for c in filtered if c.type in types]
    if categories:
        filtered = [c for c in filtered if c.category.value in categories]

    needle = (query or "").strip()
    if needle:
        filtered = [c for c in filtered if card_matches_search(c, needle)]
    return filtered


def extract_topics(cards: Iterable[CardRead]) -> List[str]:
    """Distinct topics in German-aware alphabetical order."""
    return sorted({card.topic for card in cards}, key=_collation_key)


def extract_types(cards: Iterable[CardRead]) -> List[str]:
    """Distinct types in order of first appearance."""
    return list(dict.fromkeys(card.type for card in cards))


def compute_stats(cards: Sequence[CardRead]) -> CardStats:
    return CardStats(
        total=len(cards),
        by_topic=dict(Counter(card.topic for card in cards)),
        by_type=dict(Counter(card.type for card in cards)),
        by_category=dict(Counter(card.category.value for card in cards)),
    )


def cards_needing_images(cards: Iterable[CardRead]) -> List[CardRead]:
    """Cards flagged as needing an image that do not have one yet."""
    return [card for card in cards if card.image_needed and not card.image]
