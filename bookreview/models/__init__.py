"""
SQLAlchemy Models Package

Model Relationships:
- Book -> Review: One-to-Many (a book owns zero or many reviews)
- User -> Review: One-to-Many (a user writes at most one review per book)

Importing every model here registers them with Base.metadata so Alembic
and create_tables() see all tables.
"""

from bookreview.models.user import User
from bookreview.models.book import Book
from bookreview.models.review import Review

__all__ = [
    "User",
    "Book",
    "Review",
]
