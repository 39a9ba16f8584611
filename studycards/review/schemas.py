"""
Pydantic schemas for review module.
"""

from enum import Enum
from typing import List, Optional

from pydantic import BaseModel, Field

from studycards.cards.schemas import CardRead
from studycards.review.deck import DeckPhase, DeckState


class ReviewAction(str, Enum):
    """Transitions a client can apply to a review session."""
    FLIP = "flip"
    KNOW = "know"
    AGAIN = "again"
    RESTART = "restart"
    BACK = "back"


class ReviewSessionCreate(BaseModel):
    """DTO for starting a review session over a filtered card list."""

    topics: List[str] = Field(default_factory=list, description="Only these topics")
    types: List[str] = Field(default_factory=list, description="Only these types")
    categories: List[str] = Field(default_factory=list, description="Only these categories")
    q: Optional[str] = Field(None, description="Search in title, content and variables")

    model_config = {
        "json_schema_extra": {
            "example": {
                "topics": ["Zugversuch"],
                "types": ["Formel"],
            }
        }
    }


class ReviewStateRead(BaseModel):
    """State of a review session after the latest transition."""

    session_id: str = Field(..., description="Review session ID")
    phase: DeckPhase = Field(..., description="setup, learning or done")
    current_card: Optional[CardRead] = Field(None, description="Card currently shown")
    current_index: int = Field(..., description="Position of the current card")
    deck_length: int = Field(..., description="Number of cards in the deck")
    is_flipped: bool = Field(..., description="Whether the back side is shown")
    known_count: int = Field(..., description="Cards known at first showing")
    total_seen: int = Field(..., description="Answers given so far")
    total_cards: int = Field(..., description="Cards at session start")
    percentage: int = Field(..., description="known_count / total_cards in percent")
    applied: bool = Field(True, description="False if the action was ignored in the current state")

    @classmethod
    def from_state(
        cls,
        session_id: str,
        state: DeckState[CardRead],
        applied: bool = True,
    ) -> "ReviewStateRead":
        return cls(
            session_id=session_id,
            phase=state.phase,
            current_card=state.current_card,
            current_index=state.current_index,
            deck_length=state.deck_length,
            is_flipped=state.is_flipped,
            known_count=state.known_count,
            total_seen=state.total_seen,
            total_cards=state.total_cards,
            percentage=state.percentage,
            applied=applied,
        )


class ReviewError(BaseModel):
    """Error response for review operations."""

    error: str = Field(..., description="Error message")
    code: str = Field(..., description="Error code")
