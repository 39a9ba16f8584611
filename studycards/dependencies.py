"""
FastAPI dependencies for dependency injection.
"""

from typing import Annotated

from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession

from studycards.database import get_db
from studycards.review.store import ReviewSessionStore, get_review_store

# Type aliases for cleaner dependency injection
DBSession = Annotated[AsyncSession, Depends(get_db)]
ReviewStore = Annotated[ReviewSessionStore, Depends(get_review_store)]
