"""
Book Service

Catalog operations:
- create_book: persist a new book
- list_books: filtered, paginated listing with a total count
- get_book: book detail with one page of reviews and the average rating
- search_books: unpaginated title/author search

Functions take the request's Session and return response schemas; failures
are raised as BookReviewError subclasses.
"""

import logging

from sqlalchemy import func, or_, select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session, selectinload

from bookreview.exceptions import NotFound, StoreError, store_message
from bookreview.models import Book, Review
from bookreview.schemas import (
    BookCreate,
    BookDetailResponse,
    BookListMeta,
    BookListResponse,
    BookResponse,
    ReviewWithUser,
)
from bookreview.utils.pagination import paginate

logger = logging.getLogger(__name__)


def create_book(db: Session, book_data: BookCreate) -> BookResponse:
    """
    Create a new book.

    Raises:
        StoreError: if the database rejects the row
    """
    book = Book(
        title=book_data.title,
        author=book_data.author,
        genre=book_data.genre,
        published_year=book_data.published_year,
    )

    db.add(book)
    try:
        db.commit()
    except SQLAlchemyError as exc:
        db.rollback()
        raise StoreError(store_message(exc)) from exc
    db.refresh(book)

    logger.info(f"Created book {book.id}: '{book.title}'")

    return BookResponse.model_validate(book)


def list_books(
    db: Session,
    page: int = 1,
    limit: int = 10,
    author: str | None = None,
    genre: str | None = None,
) -> BookListResponse:
    """
    List books with optional filters.

    - author: partial match, case-insensitive
    - genre: exact match, case-insensitive

    meta.total counts every matching book, not just the returned page.
    """
    stmt = select(Book)

    if author:
        stmt = stmt.where(Book.author.icontains(author, autoescape=True))
    if genre:
        stmt = stmt.where(func.lower(Book.genre) == genre.lower())

    count_stmt = select(func.count()).select_from(stmt.subquery())
    total = db.execute(count_stmt).scalar() or 0

    window = paginate(page, limit)
    books = db.execute(
        stmt.order_by(Book.id).offset(window.skip).limit(window.take)
    ).scalars().all()

    return BookListResponse(
        data=[BookResponse.model_validate(book) for book in books],
        meta=BookListMeta(total=total, page=page, limit=limit),
    )


def get_book(
    db: Session,
    book_id: int,
    review_page: int = 1,
    review_limit: int = 5,
) -> BookDetailResponse:
    """
    Get a book with a page of its reviews and its average rating.

    The average is aggregated over all of the book's reviews, not only the
    returned page, and is None when the book has none.

    Raises:
        NotFound: if the book does not exist
    """
    book = db.get(Book, book_id)
    if book is None:
        raise NotFound("Book not found")

    window = paginate(review_page, review_limit)
    reviews = db.execute(
        select(Review)
        .options(selectinload(Review.user))
        .where(Review.book_id == book_id)
        .order_by(Review.id)
        .offset(window.skip)
        .limit(window.take)
    ).scalars().all()

    average = db.execute(
        select(func.avg(Review.rating)).where(Review.book_id == book_id)
    ).scalar()

    return BookDetailResponse(
        **BookResponse.model_validate(book).model_dump(),
        average_rating=float(average) if average is not None else None,
        reviews=[ReviewWithUser.model_validate(review) for review in reviews],
    )


def search_books(db: Session, query: str | None) -> list[BookResponse]:
    """
    Find books whose title or author contains the query, case-insensitive.

    An empty or missing query returns an empty list.
    """
    if not query:
        return []

    stmt = (
        select(Book)
        .where(
            or_(
                Book.title.icontains(query, autoescape=True),
                Book.author.icontains(query, autoescape=True),
            )
        )
        .order_by(Book.id)
    )
    books = db.execute(stmt).scalars().all()

    return [BookResponse.model_validate(book) for book in books]
