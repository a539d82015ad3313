"""
Review Pydantic Schemas

Schemas:
- ReviewCreate: Create a new review
- ReviewUpdate: Update an existing review
- ReviewResponse: Review record returned by write endpoints
- ReviewWithUser: Review embedded in book detail, with the author's username

Business Rules:
- Rating must be 1-5 (validated at schema level)
- One review per user per book (enforced at database level)
"""

from datetime import datetime

from pydantic import Field, field_validator

from bookreview.schemas.common import CamelModel


class ReviewBase(CamelModel):
    """Shared review fields."""

    rating: int = Field(
        ...,
        ge=1,
        le=5,
        description="Rating from 1 to 5 stars",
        examples=[4, 5],
    )

    comment: str | None = Field(
        default=None,
        max_length=5000,
        description="Review text",
        examples=["A classic of the genre."],
    )

    @field_validator("comment")
    @classmethod
    def blank_comment_is_none(cls, v: str | None) -> str | None:
        if v is not None:
            v = v.strip()
            if not v:
                return None
        return v


class ReviewCreate(ReviewBase):
    """
    Schema for creating a new review.

    Example request body:
    {
        "rating": 5,
        "comment": "Amazing book!"
    }
    """

    pass


class ReviewUpdate(CamelModel):
    """
    Schema for updating an existing review.

    Fields left out of the request body keep their current value.
    """

    rating: int | None = Field(
        default=None,
        ge=1,
        le=5,
        description="Rating from 1 to 5 stars",
    )

    comment: str | None = Field(
        default=None,
        max_length=5000,
        description="Review text",
    )


class ReviewResponse(ReviewBase):
    """Schema for review responses."""

    id: int = Field(..., description="Unique review identifier")
    user_id: int = Field(..., description="ID of the user who wrote the review")
    book_id: int = Field(..., description="ID of the reviewed book")
    created_at: datetime = Field(..., description="When the review was created")
    updated_at: datetime = Field(..., description="When the review was last updated")


class ReviewAuthor(CamelModel):
    """Only the username of a reviewer is exposed on book pages."""

    username: str


class ReviewWithUser(ReviewResponse):
    user: ReviewAuthor
