"""
Review Service

Business Rules:
- One review per user per book. The existence check runs first so the
  common case never touches the constraint, but the unique constraint on
  (user_id, book_id) is what settles two concurrent submissions: a
  constraint violation on insert is reported as the same duplicate error.
- Only the author of a review may update or delete it. A review owned by
  someone else is reported exactly like a missing one (404), so callers
  cannot probe for review ids they do not own.
"""

import logging

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session

from bookreview.exceptions import DuplicateReview, NotFound, StoreError, store_message
from bookreview.models import Review
from bookreview.schemas import MessageResponse, ReviewCreate, ReviewResponse, ReviewUpdate

logger = logging.getLogger(__name__)

NOT_FOUND_OR_NOT_YOURS = "Review not found or not yours"


def find_user_review(db: Session, user_id: int, book_id: int) -> Review | None:
    """Return the review a user wrote for a book, if any."""
    stmt = select(Review).where(
        Review.user_id == user_id,
        Review.book_id == book_id,
    )
    return db.execute(stmt).scalar_one_or_none()


def get_owned_review(db: Session, review_id: int, user_id: int) -> Review:
    """
    Get a review belonging to user_id.

    Raises:
        NotFound: if the review does not exist or belongs to another user
    """
    review = db.get(Review, review_id)
    if review is None or review.user_id != user_id:
        raise NotFound(NOT_FOUND_OR_NOT_YOURS)
    return review


def create_review(
    db: Session,
    book_id: int,
    user_id: int,
    review_data: ReviewCreate,
) -> ReviewResponse:
    """
    Create a review for a book.

    Raises:
        DuplicateReview: if the user already reviewed this book
        StoreError: for any other rejected insert (e.g. unknown book)
    """
    if find_user_review(db, user_id, book_id) is not None:
        raise DuplicateReview()

    review = Review(
        book_id=book_id,
        user_id=user_id,
        rating=review_data.rating,
        comment=review_data.comment,
    )

    db.add(review)
    try:
        db.commit()
    except IntegrityError as exc:
        db.rollback()
        # Another request inserted the same pair between check and insert
        if find_user_review(db, user_id, book_id) is not None:
            logger.info(f"Duplicate review by user {user_id} for book {book_id} rejected by constraint")
            raise DuplicateReview() from exc
        raise StoreError(store_message(exc)) from exc
    except SQLAlchemyError as exc:
        db.rollback()
        raise StoreError(store_message(exc)) from exc
    db.refresh(review)

    logger.info(f"User {user_id} reviewed book {book_id} (review {review.id})")

    return ReviewResponse.model_validate(review)


def update_review(
    db: Session,
    review_id: int,
    user_id: int,
    review_data: ReviewUpdate,
) -> ReviewResponse:
    """
    Update the rating and/or comment of the caller's own review.

    Fields missing from the request keep their value; a null rating is
    ignored since every review must have one.

    Raises:
        NotFound: if the review does not exist or is not the caller's
    """
    review = get_owned_review(db, review_id, user_id)

    update_data = review_data.model_dump(exclude_unset=True)
    if update_data.get("rating") is None:
        update_data.pop("rating", None)
    for field, value in update_data.items():
        setattr(review, field, value)

    try:
        db.commit()
    except SQLAlchemyError as exc:
        db.rollback()
        raise StoreError(store_message(exc)) from exc
    db.refresh(review)

    return ReviewResponse.model_validate(review)


def delete_review(db: Session, review_id: int, user_id: int) -> MessageResponse:
    """
    Delete the caller's own review.

    Raises:
        NotFound: if the review does not exist or is not the caller's
    """
    review = get_owned_review(db, review_id, user_id)

    db.delete(review)
    try:
        db.commit()
    except SQLAlchemyError as exc:
        db.rollback()
        raise StoreError(store_message(exc)) from exc

    logger.info(f"User {user_id} deleted review {review_id}")

    return MessageResponse(message="Review deleted")
