"""
Tests for the error body contract

Every failure answers {"message": "..."}: rate limiting (429), database
errors a service did not map (400), and integers the driver cannot store
(400).
"""

import pytest
from fastapi import status
from sqlalchemy.exc import OperationalError

from bookreview.exceptions import store_message
from bookreview.services import books as book_service
from bookreview.services.rate_limiter import limiter

CREDENTIALS = {"username": "ghost", "password": "SecurePass123"}


@pytest.fixture
def rate_limiting(monkeypatch):
    """Switch the limiter on for one test with empty counters."""
    limiter.reset()
    monkeypatch.setattr(limiter, "enabled", True)
    yield limiter
    limiter.reset()


class TestRateLimit:

    def test_login_rate_limited(self, client, rate_limiting):
        """Login allows 10 attempts per minute per client."""
        responses = [client.post("/auth/login", json=CREDENTIALS) for _ in range(11)]
        codes = [response.status_code for response in responses]

        assert codes[0] == status.HTTP_401_UNAUTHORIZED
        assert status.HTTP_429_TOO_MANY_REQUESTS in codes

        limited = responses[codes.index(status.HTTP_429_TOO_MANY_REQUESTS)]
        assert limited.json()["message"].startswith("Too many requests")
        assert limited.headers["Retry-After"] == "60"

    def test_limits_are_per_client(self, client, rate_limiting):
        for _ in range(11):
            client.post(
                "/auth/login",
                json=CREDENTIALS,
                headers={"X-Forwarded-For": "10.0.0.1"},
            )

        response = client.post(
            "/auth/login",
            json=CREDENTIALS,
            headers={"X-Forwarded-For": "10.0.0.2"},
        )

        assert response.status_code == status.HTTP_401_UNAUTHORIZED

    def test_disabled_limiter_never_limits(self, client):
        codes = {client.post("/auth/login", json=CREDENTIALS).status_code for _ in range(12)}

        assert codes == {status.HTTP_401_UNAUTHORIZED}


class TestStoreErrors:

    def test_unmapped_database_error_is_400(self, client, monkeypatch):
        def broken_store(*args, **kwargs):
            raise OperationalError("SELECT books", {}, Exception("database is locked"))

        monkeypatch.setattr(book_service, "list_books", broken_store)

        response = client.get("/books")

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert response.json() == {"message": "database is locked"}

    def test_store_message_prefers_driver_text(self):
        exc = OperationalError("SELECT 1", {}, Exception("disk I/O error"))

        assert store_message(exc) == "disk I/O error"


class TestIntegerOverflow:

    def test_driver_overflow_is_400(self, client, monkeypatch):
        def overflow(*args, **kwargs):
            raise OverflowError("Python int too large to convert to SQLite INTEGER")

        monkeypatch.setattr(book_service, "get_book", overflow)

        response = client.get("/books/1")

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert response.json() == {
            "message": "Python int too large to convert to SQLite INTEGER"
        }
