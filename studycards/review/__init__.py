"""
Review module - Requeue-on-miss flashcard drill sessions.

The router is imported from studycards.review.router so that the session
store can be used without loading the HTTP layer.
"""
