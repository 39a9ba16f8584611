"""Tests for card filtering and statistics."""

import pytest

from studycards.cards.filters import (
    cards_needing_images,
    compute_stats,
    extract_topics,
    extract_types,
    filter_cards,
)
from studycards.cards.schemas import CardCategory, CardRead, Variable


@pytest.fixture
def cards() -> list[CardRead]:
    return [
        CardRead(
            id="ZUG-F-001",
            topic="Zugversuch",
            type="Formel",
            title="Spannung",
            content="Kraft pro Fläche",
            variables=[Variable(symbol="F", name="Kraft", unit="N")],
        ),
        CardRead(
            id="HAR-D-001",
            topic="Härteprüfung",
            type="Definition",
            title="Vickers",
            content="Diamantpyramide",
            image_needed=True,
        ),
        CardRead(
            id="ZUG-G-001",
            topic="Zugversuch",
            type="Graph",
            category=CardCategory.KLAUSURAUFGABEN,
            title="Spannungs-Dehnungs-Diagramm",
            image_needed=True,
            image="data:image/png;base64,AAAA",
        ),
        CardRead(id="AUS-E-001", topic="Ausscheidungshärten", type="Erklärung", title="Ablauf"),
    ]


class TestFilterCards:
    """Test suite for filter_cards."""

    def test_no_criteria_returns_everything(self, cards: list[CardRead]) -> None:
        assert filter_cards(cards) == cards

    def test_filter_by_topic_and_type(self, cards: list[CardRead]) -> None:
        result = filter_cards(cards, topics=["Zugversuch"], types=["Graph"])
        assert [c.id for c in result] == ["ZUG-G-001"]

    def test_filter_by_category(self, cards: list[CardRead]) -> None:
        result = filter_cards(cards, categories=["Theorie"])
        assert [c.id for c in result] == ["ZUG-F-001", "HAR-D-001", "AUS-E-001"]

    def test_search_is_case_insensitive(self, cards: list[CardRead]) -> None:
        result = filter_cards(cards, query="SPANNUNG")
        assert [c.id for c in result] == ["ZUG-F-001", "ZUG-G-001"]

    def test_search_matches_content_and_variables(self, cards: list[CardRead]) -> None:
        assert [c.id for c in filter_cards(cards, query="pyramide")] == ["HAR-D-001"]
        assert [c.id for c in filter_cards(cards, query="kraft")] == ["ZUG-F-001"]

    def test_blank_query_is_ignored(self, cards: list[CardRead]) -> None:
        assert filter_cards(cards, query="   ") == cards


class TestCollectionHelpers:
    """Test suite for topics, types, stats and image helpers."""

    def test_topics_sorted_with_umlauts(self, cards: list[CardRead]) -> None:
        assert extract_topics(cards) == ["Ausscheidungshärten", "Härteprüfung", "Zugversuch"]

    def test_types_in_first_seen_order(self, cards: list[CardRead]) -> None:
        assert extract_types(cards) == ["Formel", "Definition", "Graph", "Erklärung"]

    def test_stats(self, cards: list[CardRead]) -> None:
        stats = compute_stats(cards)

        assert stats.total == 4
        assert stats.by_topic == {"Zugversuch": 2, "Härteprüfung": 1, "Ausscheidungshärten": 1}
        assert stats.by_type["Formel"] == 1
        assert stats.by_category == {"Theorie": 3, "Klausuraufgaben": 1}

    def test_cards_needing_images_skips_cards_with_image(self, cards: list[CardRead]) -> None:
        assert [c.id for c in cards_needing_images(cards)] == ["HAR-D-001"]
