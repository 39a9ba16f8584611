"""
Card identifier generation.

Card ids have the form ``<ABBR>-<TYPE_INITIAL>-<SEQ>``, e.g. ``ZUG-F-001``:
a three-letter topic abbreviation, a one-letter type initial and a
sequence number that is unique within that prefix.

The sequence is recomputed from the complete id set on every call
(max + 1), so ids imported out of band with gaps are honoured.
"""

from enum import Enum
from typing import Iterable, Mapping, Optional

# Special letters folded to plain ASCII before abbreviating a topic.
# Extend this table to support further alphabets.
UMLAUT_MAP: dict[str, str] = {
    "ä": "A",
    "ö": "O",
    "ü": "U",
    "Ä": "A",
    "Ö": "O",
    "Ü": "U",
    "ß": "S",
}

ABBREVIATION_LENGTH = 3
FILLER_CHAR = "X"
SEQUENCE_WIDTH = 3
ID_SEPARATOR = "-"


class CardType(str, Enum):
    """Known card types."""
    FORMEL = "Formel"
    DEFINITION = "Definition"
    GRAPH = "Graph"
    ERKLAERUNG = "Erklärung"


TYPE_INITIALS: dict[CardType, str] = {
    CardType.FORMEL: "F",
    CardType.DEFINITION: "D",
    CardType.GRAPH: "G",
    CardType.ERKLAERUNG: "E",
}


def _is_ascii_letter(char: str) -> bool:
    return ("a" <= char <= "z") or ("A" <= char <= "Z")


def get_topic_abbreviation(
    topic: str,
    substitutions: Optional[Mapping[str, str]] = None,
) -> str:
    """
    Derive the three-letter topic abbreviation used in card ids.

    Special letters are transliterated first, then everything that is not
    an ASCII letter is dropped. Short results are padded with ``X``.

    Args:
        topic: Free-text topic name
        substitutions: Optional transliteration table (defaults to UMLAUT_MAP)

    Returns:
        Uppercase abbreviation of exactly three characters

    Examples:
        get_topic_abbreviation("Zugversuch") => "ZUG"
        get_topic_abbreviation("Härteprüfung") => "HAR"
        get_topic_abbreviation("123") => "XXX"
    """
    table = UMLAUT_MAP if substitutions is None else substitutions
    transliterated = "".join(table.get(char, char) for char in topic)
    letters = "".join(char for char in transliterated if _is_ascii_letter(char))
    return letters.upper()[:ABBREVIATION_LENGTH].ljust(ABBREVIATION_LENGTH, FILLER_CHAR)


def get_type_initial(card_type: str) -> str:
    """
    Get the single-letter initial for a card type.

    Unknown types fall back to their first character, upper-cased,
    so new types work before the mapping table is updated.

    Args:
        card_type: Card type value (e.g. "Formel")

    Returns:
        Single uppercase character
    """
    try:
        return TYPE_INITIALS[CardType(card_type)]
    except ValueError:
        pass

    if not card_type:
        return FILLER_CHAR
    return card_type[0].upper()


def get_id_prefix(topic: str, card_type: str) -> str:
    """Build the ``<ABBR>-<INITIAL>-`` prefix shared by a topic and type."""
    abbreviation = get_topic_abbreviation(topic)
    initial = get_type_initial(card_type)
    return f"{abbreviation}{ID_SEPARATOR}{initial}{ID_SEPARATOR}"


def parse_sequence(card_id: str, prefix: str) -> Optional[int]:
    """
    Extract the sequence number of an id belonging to ``prefix``.

    Returns:
        The parsed number, or None if the id has another prefix
        or a non-numeric suffix
    """
    if not card_id.startswith(prefix):
        return None

    suffix = card_id[len(prefix):]
    if not suffix.isascii() or not suffix.isdigit():
        return None
    return int(suffix)


def generate_card_id(topic: str, card_type: str, existing_ids: Iterable[str]) -> str:
    """
    Generate the next free card id for a topic and type.

    Scans all existing ids with the same prefix and returns max + 1,
    zero-padded to at least three digits. Never fails and never mutates
    ``existing_ids``.

    When generating several ids in one batch, add each new id to the pool
    before the next call, otherwise duplicates are produced.

    Args:
        topic: The card's topic
        card_type: The card's type
        existing_ids: Every card id currently in use

    Returns:
        A new card id, e.g. "ZUG-F-004"
    """
    prefix = get_id_prefix(topic, card_type)

    max_number = 0
    for card_id in existing_ids:
        number = parse_sequence(card_id, prefix)
        if number is not None and number > max_number:
            max_number = number

    return f"{prefix}{max_number + 1:0{SEQUENCE_WIDTH}d}"
