"""
Import-time duplicate detection.

A fingerprint joins title, topic and type (optionally category) with a
sentinel separator. It is an advisory key only: the storage layer does not
enforce it, and the replace_all strategy deliberately imports duplicates.
"""

import logging
from dataclasses import dataclass, field
from typing import Any, Dict, Iterable, List, Mapping, Optional, Set

from studycards.cards.idgen import generate_card_id, get_id_prefix, parse_sequence
from studycards.cards.models import DEFAULT_CATEGORY
from studycards.cards.schemas import ImportStrategy

logger = logging.getLogger(__name__)

FINGERPRINT_SEPARATOR = "|||"


def fingerprint(
    title: str,
    topic: str,
    card_type: str,
    category: Optional[str] = None,
) -> str:
    """
    Build the duplicate-detection key for a card.

    The separator is not escaped: fields containing ``|||`` may collide.
    """
    parts = [title, topic, card_type]
    if category is not None:
        parts.append(category)
    return FINGERPRINT_SEPARATOR.join(parts)


def card_fingerprint(card: Mapping[str, Any], with_category: bool = False) -> str:
    """Fingerprint of a card dict, using its own category when requested."""
    category = None
    if with_category:
        category = card.get("category") or DEFAULT_CATEGORY
    return fingerprint(card["title"], card["topic"], card["type"], category)


def _is_preservable_id(card_id: Optional[str], topic: str, card_type: str, id_pool: Set[str]) -> bool:
    """A supplied id is kept if it is free and matches the topic/type prefix."""
    if not card_id or card_id in id_pool:
        return False
    return parse_sequence(card_id, get_id_prefix(topic, card_type)) is not None


@dataclass
class ImportPlan:
    """Outcome of classifying an import batch."""

    imported: List[Dict[str, Any]] = field(default_factory=list)
    duplicates: List[Dict[str, Any]] = field(default_factory=list)

    @property
    def imported_count(self) -> int:
        return len(self.imported)

    @property
    def duplicate_count(self) -> int:
        return len(self.duplicates)


def plan_import(
    candidates: Iterable[Mapping[str, Any]],
    existing_cards: Iterable[Mapping[str, Any]],
    existing_ids: Iterable[str],
    strategy: ImportStrategy = ImportStrategy.SKIP_DUPLICATES,
    category: Optional[str] = None,
) -> ImportPlan:
    """
    Classify candidate cards as duplicates or new cards and assign ids.

    Candidates are assumed to be well-formed (title, topic and type set).
    Ids are generated sequentially against a pool that grows with every
    assigned id, so one batch never produces the same id twice. A candidate
    keeps its own id only if that id is unused and well-formed for the
    candidate's topic and type.

    Args:
        candidates: Incoming card dicts
        existing_cards: Every stored card, used for fingerprinting
        existing_ids: Every stored or retired card id
        strategy: SKIP_DUPLICATES drops duplicates, REPLACE_ALL imports them
        category: When set, applied to every imported card and included in
            the fingerprint

    Returns:
        ImportPlan with fully formed cards to insert and the skipped duplicates
    """
    with_category = category is not None
    known_fingerprints: Set[str] = {
        card_fingerprint(card, with_category=with_category) for card in existing_cards
    }
    id_pool: Set[str] = set(existing_ids)
    plan = ImportPlan()

    for candidate in candidates:
        card = dict(candidate)
        if with_category:
            card["category"] = category
        elif not card.get("category"):
            card["category"] = DEFAULT_CATEGORY

        if (
            strategy == ImportStrategy.SKIP_DUPLICATES
            and card_fingerprint(card, with_category=with_category) in known_fingerprints
        ):
            plan.duplicates.append(card)
            continue

        card_id = card.get("id")
        if not _is_preservable_id(card_id, card["topic"], card["type"], id_pool):
            card_id = generate_card_id(card["topic"], card["type"], id_pool)
        card["id"] = card_id
        id_pool.add(card_id)
        plan.imported.append(card)

    logger.debug(
        f"[Dedup] Planned import: {plan.imported_count} new, "
        f"{plan.duplicate_count} duplicates (strategy={strategy.value})"
    )
    return plan
