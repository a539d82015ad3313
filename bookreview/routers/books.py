"""
Books Router

Endpoints:
- POST /books - Create a book (authenticated)
- GET /books - List books (page, limit, author, genre)
- GET /books/search - Search books by title or author
- GET /books/{book_id} - Book detail with paginated reviews and average rating
"""

from fastapi import APIRouter, Query, Request, status

from bookreview.config import get_settings
from bookreview.database import DB_INT_MAX, DB_INT_MIN
from bookreview.dependencies import CurrentIdentity, DbSession, RowId
from bookreview.schemas import (
    BookCreate,
    BookDetailResponse,
    BookListResponse,
    BookResponse,
)
from bookreview.services import books as book_service
from bookreview.services.rate_limiter import limiter

settings = get_settings()

router = APIRouter(
    prefix="/books",
    tags=["Books"],
    responses={
        404: {"description": "Book not found"},
    },
)


@router.post(
    "",
    response_model=BookResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Create a new book",
    description="Add a book to the catalog. Requires a bearer token.",
)
@limiter.limit(settings.rate_limit_write)
def create_book(
    request: Request,
    book_data: BookCreate,
    db: DbSession,
    identity: CurrentIdentity,
) -> BookResponse:
    return book_service.create_book(db, book_data)


@router.get(
    "",
    response_model=BookListResponse,
    summary="List books",
    description="Paginated list of books, optionally filtered by author and genre.",
)
@limiter.limit(settings.rate_limit_default)
def list_books(
    request: Request,
    db: DbSession,
    page: int = Query(
        default=1, ge=DB_INT_MIN, le=DB_INT_MAX, description="Page number (1-indexed)"
    ),
    limit: int = Query(
        default=10, ge=DB_INT_MIN, le=DB_INT_MAX, description="Books per page"
    ),
    author: str | None = Query(
        default=None,
        description="Author name contains (case-insensitive)",
        examples=["herbert"],
    ),
    genre: str | None = Query(
        default=None,
        description="Exact genre (case-insensitive)",
        examples=["scifi"],
    ),
) -> BookListResponse:
    """
    List books with pagination and optional filtering.

    Examples:
        GET /books?page=2&limit=5
        GET /books?author=austen&genre=romance
    """
    return book_service.list_books(db, page=page, limit=limit, author=author, genre=genre)


# Declared before /{book_id} so "search" is not parsed as an id
@router.get(
    "/search",
    response_model=list[BookResponse],
    summary="Search books",
    description="Books whose title or author contains the query. Empty query returns [].",
)
@limiter.limit(settings.rate_limit_default)
def search_books(
    request: Request,
    db: DbSession,
    query: str | None = Query(default=None, examples=["dune"]),
) -> list[BookResponse]:
    return book_service.search_books(db, query)


@router.get(
    "/{book_id}",
    response_model=BookDetailResponse,
    summary="Get a book by ID",
    description="Book fields, average rating over all reviews, and one page of reviews.",
)
@limiter.limit(settings.rate_limit_default)
def get_book(
    request: Request,
    book_id: RowId,
    db: DbSession,
    review_page: int = Query(
        default=1, alias="reviewPage", ge=DB_INT_MIN, le=DB_INT_MAX
    ),
    review_limit: int = Query(
        default=5, alias="reviewLimit", ge=DB_INT_MIN, le=DB_INT_MAX
    ),
) -> BookDetailResponse:
    return book_service.get_book(
        db,
        book_id,
        review_page=review_page,
        review_limit=review_limit,
    )
