"""Tests for card id generation."""

import pytest

from studycards.cards.idgen import (
    UMLAUT_MAP,
    generate_card_id,
    get_id_prefix,
    get_topic_abbreviation,
    get_type_initial,
    parse_sequence,
)


class TestTopicAbbreviation:
    """Test suite for get_topic_abbreviation."""

    @pytest.mark.parametrize(
        ("topic", "expected"),
        [
            ("Zugversuch", "ZUG"),
            ("Härteprüfung", "HAR"),
            ("Wärmebehandlung", "WAR"),
            ("Eisen-Kohlenstoff-Diagramm", "EIS"),
            ("Öl", "OLX"),
            ("ßeta", "SET"),
            ("A", "AXX"),
            ("123", "XXX"),
            ("É", "XXX"),
            ("", "XXX"),
            ("  a b c d", "ABC"),
        ],
    )
    def test_abbreviation(self, topic: str, expected: str) -> None:
        """Test abbreviation of typical and degenerate topics."""
        assert get_topic_abbreviation(topic) == expected

    def test_abbreviation_is_idempotent(self) -> None:
        """Test that abbreviating an abbreviation returns it unchanged."""
        abbreviation = get_topic_abbreviation("Härteprüfung")
        assert get_topic_abbreviation(abbreviation) == abbreviation

    def test_custom_substitution_table(self) -> None:
        """Test that the transliteration table can be extended."""
        table = {**UMLAUT_MAP, "É": "E"}
        assert get_topic_abbreviation("Élasticité", substitutions=table) == "ELA"


class TestTypeInitial:
    """Test suite for get_type_initial."""

    @pytest.mark.parametrize(
        ("card_type", "expected"),
        [
            ("Formel", "F"),
            ("Definition", "D"),
            ("Graph", "G"),
            ("Erklärung", "E"),
        ],
    )
    def test_known_types(self, card_type: str, expected: str) -> None:
        assert get_type_initial(card_type) == expected

    def test_unknown_type_falls_back_to_first_letter(self) -> None:
        """Test that new types work without updating the mapping."""
        assert get_type_initial("beispiel") == "B"

    def test_empty_type(self) -> None:
        assert get_type_initial("") == "X"


class TestGenerateCardId:
    """Test suite for generate_card_id."""

    def test_empty_id_set(self) -> None:
        """Test the first id of a prefix."""
        assert generate_card_id("Torsion", "Graph", []) == "TOR-G-001"

    def test_skips_gaps_and_ignores_other_prefixes(self) -> None:
        """Test that the highest number wins and other prefixes are ignored."""
        existing = ["ZUG-F-001", "ZUG-F-003", "WAR-D-002"]
        assert generate_card_id("Zugversuch", "Formel", existing) == "ZUG-F-004"

    def test_ignores_non_numeric_suffixes(self) -> None:
        existing = ["ZUG-F-abc", "ZUG-F-", "ZUG-F-002", "ZUG-F-00x"]
        assert generate_card_id("Zugversuch", "Formel", existing) == "ZUG-F-003"

    def test_width_is_a_minimum(self) -> None:
        """Test that numbers above 999 are not truncated."""
        assert generate_card_id("Zugversuch", "Formel", ["ZUG-F-999"]) == "ZUG-F-1000"
        assert generate_card_id("Zugversuch", "Formel", ["ZUG-F-1000"]) == "ZUG-F-1001"

    def test_degenerate_input(self) -> None:
        assert generate_card_id("", "", []) == "XXX-X-001"

    def test_does_not_mutate_input(self) -> None:
        existing = ["ZUG-F-001"]
        generate_card_id("Zugversuch", "Formel", existing)
        assert existing == ["ZUG-F-001"]

    def test_sequential_batch_with_growing_pool(self) -> None:
        """Test that adding each id to the pool yields distinct ids."""
        pool: list[str] = []
        for _ in range(3):
            pool.append(generate_card_id("Zugversuch", "Formel", pool))
        assert pool == ["ZUG-F-001", "ZUG-F-002", "ZUG-F-003"]

    def test_accepts_any_iterable(self) -> None:
        existing = {"HAR-D-001", "HAR-D-002"}
        assert generate_card_id("Härteprüfung", "Definition", existing) == "HAR-D-003"
        assert generate_card_id("Härteprüfung", "Definition", iter(existing)) == "HAR-D-003"


class TestPrefixHelpers:
    """Test suite for prefix and sequence parsing helpers."""

    def test_prefix(self) -> None:
        assert get_id_prefix("Zugversuch", "Erklärung") == "ZUG-E-"

    def test_parse_sequence(self) -> None:
        assert parse_sequence("ZUG-F-012", "ZUG-F-") == 12
        assert parse_sequence("WAR-F-012", "ZUG-F-") is None
        assert parse_sequence("ZUG-F-1a", "ZUG-F-") is None
