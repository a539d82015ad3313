"""
Book Pydantic Schemas

Handles:
- Book creation payloads
- Paginated list responses ({data, meta})
- Book detail with paginated reviews and the average rating
"""

from datetime import datetime

from pydantic import ConfigDict, Field, field_validator

from bookreview.schemas.common import CamelModel
from bookreview.schemas.review import ReviewWithUser


class BookBase(CamelModel):
    """
    Base schema with shared book fields.

    title and author are required; genre and published year are optional.
    """

    title: str = Field(
        ...,
        min_length=1,
        max_length=500,
        description="Book title",
        examples=["Dune", "Pride and Prejudice"],
    )

    author: str = Field(
        ...,
        min_length=1,
        max_length=255,
        description="Author name",
        examples=["Frank Herbert", "Jane Austen"],
    )

    genre: str | None = Field(
        default=None,
        max_length=100,
        description="Genre label",
        examples=["SciFi", "Romance"],
    )

    published_year: int | None = Field(
        default=None,
        ge=-9999,
        le=9999,
        description="Year of publication",
        examples=[1965, 1813],
    )

    @field_validator("title", "author")
    @classmethod
    def must_not_be_blank(cls, v: str) -> str:
        """Reject whitespace-only values and normalize surrounding spaces."""
        if not v.strip():
            raise ValueError("must not be empty or whitespace")
        return v.strip()


class BookCreate(BookBase):
    """
    Schema for creating a new book.

    Example request body:
    {
        "title": "Dune",
        "author": "Frank Herbert",
        "genre": "SciFi",
        "publishedYear": 1965
    }
    """

    pass


class BookResponse(BookBase):
    """Schema for book responses."""

    id: int = Field(..., description="Unique identifier")
    created_at: datetime = Field(..., description="When the book was created")
    updated_at: datetime = Field(..., description="When the book was last updated")


class BookListMeta(CamelModel):
    """
    Pagination metadata for book lists.

    total is the number of books matching the filters, independent of the
    page window. page and limit echo the request.
    """

    total: int = Field(..., ge=0, description="Total number of matching books")
    page: int = Field(..., description="Requested page number")
    limit: int = Field(..., description="Requested page size")


class BookListResponse(CamelModel):
    """Schema for paginated book list responses."""

    data: list[BookResponse] = Field(..., description="Books for this page")
    meta: BookListMeta

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "data": [],
                "meta": {"total": 42, "page": 1, "limit": 10},
            }
        },
    )


class BookDetailResponse(BookResponse):
    """
    Book detail: book fields, the mean rating across all of its reviews
    (null when there are none), and one page of reviews.
    """

    average_rating: float | None = Field(
        default=None,
        description="Mean rating over all reviews, null if no reviews",
    )
    reviews: list[ReviewWithUser] = Field(
        default_factory=list,
        description="Requested page of reviews",
    )
