"""
Custom exceptions for the application.
"""


class StudyCardsException(Exception):
    """Base exception for the study cards application."""

    def __init__(self, message: str = "An error occurred"):
        self.message = message
        super().__init__(self.message)


# ═══════════════════════════════════════════════════════════════════════════
# CARD EXCEPTIONS
# ═══════════════════════════════════════════════════════════════════════════


class CardNotFoundError(StudyCardsException):
    """Raised when a card is not found."""
    pass


# ═══════════════════════════════════════════════════════════════════════════
# REVIEW EXCEPTIONS
# ═══════════════════════════════════════════════════════════════════════════


class ReviewSessionNotFoundError(StudyCardsException):
    """Raised when a review session id is unknown or expired."""
    pass
