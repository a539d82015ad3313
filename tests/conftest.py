"""
pytest Fixtures for Book Review API Tests

FIXTURE SCOPES:
- session scope for the engine (created once)
- function scope for sessions, so every test starts from an empty database
"""

# =============================================================================
# TEST ENVIRONMENT SETUP
# =============================================================================
# Set environment variables BEFORE importing the app: settings are read once
import os

os.environ["RATE_LIMIT_ENABLED"] = "false"
os.environ["SECRET_KEY"] = "test-secret-key-for-unit-tests-at-least-32-characters-long"
os.environ["DATABASE_URL"] = "sqlite:///:memory:"

from collections.abc import Generator

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine, event
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool

from bookreview.database import Base, get_db
from bookreview.main import app
from bookreview.models import Book, Review, User
from bookreview.services.security import create_access_token, hash_password

# =============================================================================
# DATABASE FIXTURES
# =============================================================================
# SQLite in-memory: fast, isolated, no external database needed.
# Foreign keys are switched on so reviews of unknown books fail like they
# do on PostgreSQL.


@pytest.fixture(scope="session")
def engine():
    """
    Create a SQLite in-memory database engine.

    StaticPool keeps the single connection alive for the whole session;
    without it the in-memory database would vanish between connections.

    pysqlite manages transactions itself and breaks SAVEPOINT; the two
    listeners hand BEGIN back to SQLAlchemy so each test can run inside a
    savepoint that services are free to commit or roll back.
    """
    engine = create_engine(
        "sqlite:///:memory:",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )

    @event.listens_for(engine, "connect")
    def on_connect(dbapi_connection, connection_record):
        dbapi_connection.isolation_level = None
        cursor = dbapi_connection.cursor()
        cursor.execute("PRAGMA foreign_keys=ON")
        cursor.close()

    @event.listens_for(engine, "begin")
    def on_begin(conn):
        conn.exec_driver_sql("BEGIN")

    Base.metadata.create_all(bind=engine)

    yield engine

    Base.metadata.drop_all(bind=engine)


@pytest.fixture(scope="function")
def db_session(engine) -> Generator[Session, None, None]:
    """
    Create a database session wrapped in a transaction that is rolled back
    after the test.

    Session commits and rollbacks operate on savepoints inside that outer
    transaction, so tests don't affect each other.
    """
    TestSessionLocal = sessionmaker(
        autocommit=False,
        autoflush=False,
        join_transaction_mode="create_savepoint",
    )

    connection = engine.connect()
    transaction = connection.begin()
    session = TestSessionLocal(bind=connection)

    yield session

    session.close()
    transaction.rollback()
    connection.close()


@pytest.fixture(scope="function")
def client(db_session: Session) -> Generator[TestClient, None, None]:
    """Test client whose requests use the test session."""

    def override_get_db():
        try:
            yield db_session
        finally:
            pass  # Session cleanup handled by db_session fixture

    app.dependency_overrides[get_db] = override_get_db

    with TestClient(app) as test_client:
        yield test_client

    app.dependency_overrides.clear()


# =============================================================================
# SAMPLE DATA FIXTURES
# =============================================================================


def make_user(db: Session, username: str, password: str = "SecurePass123") -> User:
    user = User(username=username, hashed_password=hash_password(password))
    db.add(user)
    db.commit()
    db.refresh(user)
    return user


def auth_header_for(user: User) -> dict:
    """Authorization header carrying a valid token for user."""
    token = create_access_token({"sub": str(user.id), "username": user.username})
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture
def sample_user(db_session: Session) -> User:
    return make_user(db_session, "testuser")


@pytest.fixture
def second_user(db_session: Session) -> User:
    """A second user for ownership scenarios."""
    return make_user(db_session, "seconduser", "SecurePass456")


@pytest.fixture
def auth_headers(sample_user: User) -> dict:
    return auth_header_for(sample_user)


@pytest.fixture
def sample_book(db_session: Session) -> Book:
    book = Book(
        title="Dune",
        author="Frank Herbert",
        genre="SciFi",
        published_year=1965,
    )
    db_session.add(book)
    db_session.commit()
    db_session.refresh(book)
    return book


@pytest.fixture
def multiple_books(db_session: Session) -> list[Book]:
    """Fifteen books across three authors and genres for list tests."""
    authors = ["George Orwell", "Jane Austen", "Isaac Asimov"]
    genres = ["Dystopian", "Romance", "SciFi"]
    books = []
    for i in range(15):
        book = Book(
            title=f"Test Book {i + 1}",
            author=authors[i % 3],
            genre=genres[i % 3],
            published_year=1900 + i,
        )
        books.append(book)
        db_session.add(book)

    db_session.commit()
    for book in books:
        db_session.refresh(book)

    return books


@pytest.fixture
def sample_review(
    db_session: Session,
    sample_book: Book,
    sample_user: User,
) -> Review:
    review = Review(
        book_id=sample_book.id,
        user_id=sample_user.id,
        rating=4,
        comment="I really enjoyed reading this book.",
    )
    db_session.add(review)
    db_session.commit()
    db_session.refresh(review)
    return review
