"""
Study Cards Backend Application.

A FastAPI backend for the Werkstoffkunde study-card application.
Provides card management, bulk import with duplicate detection and
flashcard review sessions.
"""

__version__ = "0.1.0"
