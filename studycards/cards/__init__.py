"""
Cards module - Card management, id generation and bulk import.
"""

from studycards.cards.router import cards_router

__all__ = ["cards_router"]
