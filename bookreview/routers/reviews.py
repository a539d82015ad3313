"""
Reviews Router

Endpoints:
- POST /books/{book_id}/reviews - Create a review (authenticated)
- PUT /reviews/{review_id} - Update a review (owner only)
- DELETE /reviews/{review_id} - Delete a review (owner only)

Business Rules:
- One review per user per book
- Another user's review answers 404, the same as a missing one
"""

from fastapi import APIRouter, Request, status

from bookreview.config import get_settings
from bookreview.dependencies import CurrentIdentity, DbSession, RowId
from bookreview.schemas import (
    MessageResponse,
    ReviewCreate,
    ReviewResponse,
    ReviewUpdate,
)
from bookreview.services import reviews as review_service
from bookreview.services.rate_limiter import limiter

settings = get_settings()

router = APIRouter(
    tags=["Reviews"],
    responses={
        401: {"description": "Missing, invalid or expired token"},
    },
)


@router.post(
    "/books/{book_id}/reviews",
    response_model=ReviewResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Create a review",
    description="Review a book. Requires authentication. One review per book per user.",
)
@limiter.limit(settings.rate_limit_write)
def create_review(
    request: Request,
    book_id: RowId,
    review_data: ReviewCreate,
    db: DbSession,
    identity: CurrentIdentity,
) -> ReviewResponse:
    return review_service.create_review(db, book_id, identity.id, review_data)


@router.put(
    "/reviews/{review_id}",
    response_model=ReviewResponse,
    summary="Update a review",
    description="Update your own review's rating and comment.",
    responses={404: {"description": "Review not found or not yours"}},
)
@limiter.limit(settings.rate_limit_write)
def update_review(
    request: Request,
    review_id: RowId,
    review_data: ReviewUpdate,
    db: DbSession,
    identity: CurrentIdentity,
) -> ReviewResponse:
    return review_service.update_review(db, review_id, identity.id, review_data)


@router.delete(
    "/reviews/{review_id}",
    response_model=MessageResponse,
    summary="Delete a review",
    description="Delete your own review.",
    responses={404: {"description": "Review not found or not yours"}},
)
@limiter.limit(settings.rate_limit_write)
def delete_review(
    request: Request,
    review_id: RowId,
    db: DbSession,
    identity: CurrentIdentity,
) -> MessageResponse:
    return review_service.delete_review(db, review_id, identity.id)
