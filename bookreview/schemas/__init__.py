"""
Pydantic Schemas Package

Request/response validation models, kept separate from the SQLAlchemy
models so the API controls exactly what is exposed.

Schema Naming Convention:
- XxxCreate: Fields required when creating a record
- XxxUpdate: Fields allowed when updating
- XxxResponse: Fields returned in API responses
"""

from bookreview.schemas.common import CamelModel, MessageResponse
from bookreview.schemas.review import (
    ReviewAuthor,
    ReviewCreate,
    ReviewResponse,
    ReviewUpdate,
    ReviewWithUser,
)
from bookreview.schemas.book import (
    BookCreate,
    BookDetailResponse,
    BookListMeta,
    BookListResponse,
    BookResponse,
)
from bookreview.schemas.user import (
    Identity,
    LoginRequest,
    TokenResponse,
    UserCreate,
    UserResponse,
)

__all__ = [
    "CamelModel",
    "MessageResponse",
    # Review schemas
    "ReviewAuthor",
    "ReviewCreate",
    "ReviewUpdate",
    "ReviewResponse",
    "ReviewWithUser",
    # Book schemas
    "BookCreate",
    "BookResponse",
    "BookListMeta",
    "BookListResponse",
    "BookDetailResponse",
    # User/auth schemas
    "UserCreate",
    "UserResponse",
    "LoginRequest",
    "TokenResponse",
    "Identity",
]
