"""
SQLAlchemy models for cards module.
Defines the Card table with its optional formula/graph fields.
"""

from datetime import datetime, timezone
from typing import Any, Dict, List, Optional

from sqlalchemy import JSON, Boolean, DateTime, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from studycards.database import Base

DEFAULT_CATEGORY = "Theorie"


class Card(Base):
    """
    Card model representing a single study card.
    The id is derived from topic and type at creation time and never changes.
    """

    __tablename__ = "cards"

    id: Mapped[str] = mapped_column(String(64), primary_key=True)
    topic: Mapped[str] = mapped_column(String(200), nullable=False, index=True)
    type: Mapped[str] = mapped_column(String(50), nullable=False, index=True)
    category: Mapped[str] = mapped_column(
        String(50),
        nullable=False,
        default=DEFAULT_CATEGORY,
        server_default=DEFAULT_CATEGORY,
        index=True,
    )
    title: Mapped[str] = mapped_column(String(500), nullable=False)
    content: Mapped[str] = mapped_column(Text, nullable=False)

    # Formula fields
    latex: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    variables: Mapped[Optional[List[Dict[str, Any]]]] = mapped_column(JSON, nullable=True)
    result_unit: Mapped[Optional[str]] = mapped_column(String(100), nullable=True)
    conditions: Mapped[Optional[str]] = mapped_column(Text, nullable=True)

    # Graph fields
    axes: Mapped[Optional[Dict[str, str]]] = mapped_column(JSON, nullable=True)
    key_features: Mapped[Optional[List[str]]] = mapped_column(JSON, nullable=True)

    # Image fields
    image: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    image_needed: Mapped[bool] = mapped_column(Boolean, default=False, nullable=False)
    image_description: Mapped[Optional[str]] = mapped_column(Text, nullable=True)

    # Timestamps
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        default=lambda: datetime.now(timezone.utc),
        nullable=False,
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        default=lambda: datetime.now(timezone.utc),
        onupdate=lambda: datetime.now(timezone.utc),
        nullable=False,
    )

    def __repr__(self) -> str:
        return f"<Card(id={self.id}, topic={self.topic}, type={self.type})>"


class RetiredCardId(Base):
    """
    Id of a deleted card.
    Kept so that the id generator never hands out a deleted id again.
    """

    __tablename__ = "retired_card_ids"

    id: Mapped[str] = mapped_column(String(64), primary_key=True)
    retired_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        default=lambda: datetime.now(timezone.utc),
        nullable=False,
    )

    def __repr__(self) -> str:
        return f"<RetiredCardId(id={self.id})>"
