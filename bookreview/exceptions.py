"""
API Error Hierarchy

Services raise these exceptions; the handlers registered in main.py turn
them into JSON responses of the form {"message": "..."} with the matching
HTTP status code.

Taxonomy:
- Unauthenticated: missing, invalid or expired bearer token (401)
- NotFound: missing resource, or a review owned by someone else (404)
- ValidationError / DuplicateReview: rule or constraint violations (400)
- StoreError: any other relational store failure (400)
"""

from fastapi import status
from sqlalchemy.exc import SQLAlchemyError


class BookReviewError(Exception):
    """Base class for errors that map directly to an HTTP response."""

    status_code: int = status.HTTP_400_BAD_REQUEST
    default_message: str = "Bad request"

    def __init__(self, message: str | None = None) -> None:
        self.message = message or self.default_message
        super().__init__(self.message)


class Unauthenticated(BookReviewError):
    status_code = status.HTTP_401_UNAUTHORIZED
    default_message = "Invalid or expired token"


class NotFound(BookReviewError):
    status_code = status.HTTP_404_NOT_FOUND
    default_message = "Not found"


class ValidationError(BookReviewError):
    status_code = status.HTTP_400_BAD_REQUEST
    default_message = "Invalid request"


class DuplicateReview(ValidationError):
    default_message = "Already reviewed this book"


class StoreError(BookReviewError):
    """A database failure surfaced to the client with the driver's message."""

    status_code = status.HTTP_400_BAD_REQUEST
    default_message = "Database error"


def store_message(exc: SQLAlchemyError) -> str:
    """The driver's own error text when there is one, else SQLAlchemy's."""
    orig = getattr(exc, "orig", None)
    return str(orig) if orig is not None else str(exc)
