"""
Pydantic schemas for cards module.
DTOs for API input/output validation.
"""

from datetime import datetime
from enum import Enum
from typing import Dict, List, Optional

from pydantic import BaseModel, Field


class CardCategory(str, Enum):
    """Card categories."""
    THEORIE = "Theorie"
    KLAUSURAUFGABEN = "Klausuraufgaben"


class ImportStrategy(str, Enum):
    """How duplicates are handled during a bulk import."""
    SKIP_DUPLICATES = "skip_duplicates"
    REPLACE_ALL = "replace_all"


# ═══════════════════════════════════════════════════════════════════════════
# NESTED FIELD SCHEMAS
# ═══════════════════════════════════════════════════════════════════════════


class Variable(BaseModel):
    """A formula variable."""

    symbol: str = Field(..., description="Symbol as used in the formula")
    name: str = Field(..., description="Variable name")
    unit: str = Field("", description="Physical unit")


class Axes(BaseModel):
    """Axis labels of a graph card."""

    x: str = Field(..., description="x-axis label")
    y: str = Field(..., description="y-axis label")


# ═══════════════════════════════════════════════════════════════════════════
# CARD SCHEMAS
# ═══════════════════════════════════════════════════════════════════════════


class CardBase(BaseModel):
    """Fields shared by card create and read DTOs."""

    topic: str = Field(..., min_length=1, max_length=200, description="Topic / chapter name")
    type: str = Field(..., min_length=1, max_length=50, description="Formel, Definition, Graph or Erklärung")
    category: CardCategory = Field(CardCategory.THEORIE, description="Card category")
    title: str = Field(..., min_length=1, max_length=500, description="Card title")
    content: str = Field("", description="Card text")
    latex: Optional[str] = Field(None, description="LaTeX formula")
    variables: Optional[List[Variable]] = Field(None, description="Formula variables")
    result_unit: Optional[str] = Field(None, description="Unit of the formula result")
    conditions: Optional[str] = Field(None, description="Validity conditions")
    axes: Optional[Axes] = Field(None, description="Graph axes")
    key_features: Optional[List[str]] = Field(None, description="Key features of a graph")
    image: Optional[str] = Field(None, description="Image as data URI")
    image_needed: bool = Field(False, description="Whether the card still needs an image")
    image_description: Optional[str] = Field(None, description="Description of the needed image")


class CardCreate(CardBase):
    """DTO for creating a single card. The id is generated by the server."""

    model_config = {
        "json_schema_extra": {
            "example": {
                "topic": "Zugversuch",
                "type": "Formel",
                "category": "Theorie",
                "title": "Spannung",
                "content": "Technische Spannung im Zugversuch",
                "latex": "\\sigma = \\frac{F}{S_0}",
                "variables": [
                    {"symbol": "F", "name": "Kraft", "unit": "N"},
                    {"symbol": "S_0", "name": "Anfangsquerschnitt", "unit": "mm^2"},
                ],
                "result_unit": "MPa",
            }
        }
    }


class CardImportItem(CardBase):
    """A candidate card inside an import payload. May carry its own id."""

    id: Optional[str] = Field(None, max_length=64, description="Optional pre-assigned card id")


class CardUpdate(BaseModel):
    """DTO for updating a card. Only provided fields change; the id never does."""

    topic: Optional[str] = Field(None, min_length=1, max_length=200)
    type: Optional[str] = Field(None, min_length=1, max_length=50)
    category: Optional[CardCategory] = None
    title: Optional[str] = Field(None, min_length=1, max_length=500)
    content: Optional[str] = None
    latex: Optional[str] = None
    variables: Optional[List[Variable]] = None
    result_unit: Optional[str] = None
    conditions: Optional[str] = None
    axes: Optional[Axes] = None
    key_features: Optional[List[str]] = None
    image: Optional[str] = None
    image_needed: Optional[bool] = None
    image_description: Optional[str] = None

    model_config = {
        "json_schema_extra": {
            "example": {
                "title": "Technische Spannung",
                "image_needed": True,
            }
        }
    }


class CardRead(CardBase):
    """DTO for reading a card."""

    id: str = Field(..., description="Card ID, e.g. ZUG-F-001")
    created_at: Optional[datetime] = Field(None, description="Creation timestamp")
    updated_at: Optional[datetime] = Field(None, description="Last update timestamp")

    model_config = {"from_attributes": True}


class CardList(BaseModel):
    """DTO for listing cards."""

    cards: List[CardRead] = Field(..., description="List of cards")
    total: int = Field(..., description="Number of cards returned")


# ═══════════════════════════════════════════════════════════════════════════
# IMPORT / EXPORT SCHEMAS
# ═══════════════════════════════════════════════════════════════════════════


class ImportRequest(BaseModel):
    """DTO for a bulk import."""

    cards: List[CardImportItem] = Field(..., description="Cards to import")
    strategy: ImportStrategy = Field(
        ImportStrategy.SKIP_DUPLICATES,
        description="skip_duplicates drops probable duplicates, replace_all imports them anyway",
    )
    category: Optional[CardCategory] = Field(
        None,
        description="Category applied to every imported card; enables category-aware duplicate detection",
    )

    model_config = {
        "json_schema_extra": {
            "example": {
                "strategy": "skip_duplicates",
                "category": "Theorie",
                "cards": [
                    {"topic": "Zugversuch", "type": "Definition", "title": "Streckgrenze", "content": "..."},
                ],
            }
        }
    }


class ImportResponse(BaseModel):
    """Response for a bulk import."""

    imported: int = Field(..., description="Number of imported cards")
    duplicates: int = Field(..., description="Number of skipped duplicates")
    cards: List[CardRead] = Field(..., description="Imported cards with their ids")


class ExportMetadata(BaseModel):
    """Metadata block of an export file."""

    title: str
    version: str
    last_updated: str = Field(..., description="ISO date of the export")
    schema_version: str


class ExportResponse(BaseModel):
    """Full card collection export, re-importable via /cards/import."""

    metadata: ExportMetadata
    topics: List[str]
    types: List[str]
    cards: List[CardRead]


# ═══════════════════════════════════════════════════════════════════════════
# STATS SCHEMAS
# ═══════════════════════════════════════════════════════════════════════════


class CardStats(BaseModel):
    """Card counts per topic, type and category."""

    total: int = Field(..., description="Total number of cards")
    by_topic: Dict[str, int] = Field(default_factory=dict)
    by_type: Dict[str, int] = Field(default_factory=dict)
    by_category: Dict[str, int] = Field(default_factory=dict)


class TopicList(BaseModel):
    """Sorted distinct topics."""

    topics: List[str]


# ═══════════════════════════════════════════════════════════════════════════
# ERROR SCHEMAS
# ═══════════════════════════════════════════════════════════════════════════


class CardError(BaseModel):
    """Error response for card operations."""

    error: str = Field(..., description="Error message")
    code: str = Field(..., description="Error code")

    model_config = {
        "json_schema_extra": {
            "example": {
                "error": "Card not found: ZUG-F-999",
                "code": "CARD_NOT_FOUND",
            }
        }
    }
