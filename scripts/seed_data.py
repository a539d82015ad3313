#!/usr/bin/env python3
"""
Database Seed Script

Populates the database with sample users, books and reviews for
development.

USAGE:
    # From the project root, with the package installed (pip install -e .)
    python scripts/seed_data.py

This script:
1. Connects to the database using app settings
2. Clears existing data
3. Creates sample users, books and reviews

Every sample user has the password "ReadMore123".
"""

from sqlalchemy import delete
from sqlalchemy.orm import Session

from bookreview.database import SessionLocal, create_tables
from bookreview.models import Book, Review, User
from bookreview.services.security import hash_password

SAMPLE_PASSWORD = "ReadMore123"


def clear_data(db: Session) -> None:
    """Clear all existing data from the database."""
    print("Clearing existing data...")
    db.execute(delete(Review))
    db.execute(delete(Book))
    db.execute(delete(User))
    db.commit()
    print("Data cleared.")


def create_users(db: Session) -> dict[str, User]:
    """Create sample users."""
    print("Creating users...")
    hashed = hash_password(SAMPLE_PASSWORD)
    users = {
        name: User(username=name, hashed_password=hashed)
        for name in ("alice", "bob", "carol")
    }
    db.add_all(users.values())
    db.commit()
    for user in users.values():
        db.refresh(user)

    print(f"Created {len(users)} users.")
    return users


def create_books(db: Session) -> dict[str, Book]:
    """Create sample books."""
    print("Creating books...")
    books_data = [
        {"title": "Dune", "author": "Frank Herbert", "genre": "SciFi", "published_year": 1965},
        {"title": "Foundation", "author": "Isaac Asimov", "genre": "SciFi", "published_year": 1951},
        {"title": "I, Robot", "author": "Isaac Asimov", "genre": "SciFi", "published_year": 1950},
        {"title": "1984", "author": "George Orwell", "genre": "Dystopian", "published_year": 1949},
        {"title": "Animal Farm", "author": "George Orwell", "genre": "Satire", "published_year": 1945},
        {"title": "Pride and Prejudice", "author": "Jane Austen", "genre": "Romance", "published_year": 1813},
        {"title": "Emma", "author": "Jane Austen", "genre": "Romance", "published_year": 1815},
        {"title": "The Hobbit", "author": "J.R.R. Tolkien", "genre": "Fantasy", "published_year": 1937},
    ]

    books = {data["title"]: Book(**data) for data in books_data}
    db.add_all(books.values())
    db.commit()
    for book in books.values():
        db.refresh(book)

    print(f"Created {len(books)} books.")
    return books


def create_reviews(
    db: Session,
    users: dict[str, User],
    books: dict[str, Book],
) -> list[Review]:
    """Create sample reviews, at most one per user per book."""
    print("Creating reviews...")
    reviews_data = [
        ("alice", "Dune", 5, "The best world-building in the genre."),
        ("bob", "Dune", 3, "Slow start, great ending."),
        ("carol", "Dune", 4, None),
        ("alice", "1984", 5, "Still relevant."),
        ("bob", "Emma", 2, "Not for me."),
        ("carol", "The Hobbit", 5, "A perfect adventure."),
    ]

    reviews = [
        Review(
            user_id=users[username].id,
            book_id=books[title].id,
            rating=rating,
            comment=comment,
        )
        for username, title, rating, comment in reviews_data
    ]
    db.add_all(reviews)
    db.commit()

    print(f"Created {len(reviews)} reviews.")
    return reviews


def seed_database(clear_existing: bool = True) -> None:
    """
    Main function to seed the database.

    Args:
        clear_existing: If True, clears existing data before seeding.
    """
    print("=" * 60)
    print("Starting database seed...")
    print("=" * 60)

    create_tables()

    db = SessionLocal()

    try:
        if clear_existing:
            clear_data(db)

        users = create_users(db)
        books = create_books(db)
        reviews = create_reviews(db, users, books)

        print("=" * 60)
        print("Database seeding completed successfully!")
        print("=" * 60)
        print("\nSummary:")
        print(f"  - Users: {len(users)} (password: {SAMPLE_PASSWORD})")
        print(f"  - Books: {len(books)}")
        print(f"  - Reviews: {len(reviews)}")

    except Exception as e:
        print(f"Error seeding database: {e}")
        db.rollback()
        raise
    finally:
        db.close()


if __name__ == "__main__":
    seed_database()
