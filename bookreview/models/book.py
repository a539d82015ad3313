"""
Book Model

The catalog entry that reviews are written against. Books are created
through the API and never deleted by any exposed operation.
"""

from datetime import datetime
from typing import TYPE_CHECKING

from sqlalchemy import DateTime, Integer, String, func
from sqlalchemy.orm import Mapped, mapped_column, relationship

from bookreview.database import Base

if TYPE_CHECKING:
    from bookreview.models.review import Review


class Book(Base):
    """
    Book model representing a catalog entry.

    Table: books

    Fields:
    - title: Book title (required)
    - author: Author name as free text (required)
    - genre: Genre label, matched case-insensitively when filtering
    - published_year: Year of first publication

    Relationships:
    - reviews: One-to-Many with Review

    Example:
        book = Book(
            title="Dune",
            author="Frank Herbert",
            genre="SciFi",
            published_year=1965,
        )
    """

    __tablename__ = "books"

    id: Mapped[int] = mapped_column(primary_key=True)

    title: Mapped[str] = mapped_column(
        String(500),
        index=True,
        nullable=False,
        comment="Book title"
    )

    author: Mapped[str] = mapped_column(
        String(255),
        index=True,
        nullable=False,
        comment="Author name"
    )

    genre: Mapped[str | None] = mapped_column(
        String(100),
        index=True,
        nullable=True,
        comment="Genre label"
    )

    published_year: Mapped[int | None] = mapped_column(
        Integer,
        nullable=True,
        comment="Year of publication"
    )

    # -------------------------------------------------------------------------
    # Timestamps
    # -------------------------------------------------------------------------
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        server_default=func.now(),
        nullable=False,
    )

    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        server_default=func.now(),
        onupdate=func.now(),
        nullable=False,
    )

    # -------------------------------------------------------------------------
    # Relationships
    # -------------------------------------------------------------------------
    # Book detail pages reviews with its own query instead of this collection
    reviews: Mapped[list["Review"]] = relationship(
        "Review",
        back_populates="book",
        cascade="all, delete-orphan",
    )

    def __repr__(self) -> str:
        return f"Book(id={self.id}, title='{self.title}', author='{self.author}')"
