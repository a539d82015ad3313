"""
Tests for Authentication

Covers registration, login, and the bearer token guard that protects
write endpoints.
"""

from datetime import timedelta

from fastapi import status
from jose import jwt

from bookreview.config import get_settings
from bookreview.models.user import User
from bookreview.services.security import (
    ALGORITHM,
    create_access_token,
    decode_token,
    hash_password,
    verify_password,
)

BOOK = {"title": "Dune", "author": "Frank Herbert"}


class TestPasswordHashing:

    def test_hash_is_not_plain_text(self):
        hashed = hash_password("SecurePass123")

        assert hashed != "SecurePass123"
        assert verify_password("SecurePass123", hashed)
        assert not verify_password("WrongPass123", hashed)


class TestRegister:
    """Tests for POST /auth/register."""

    def test_register_success(self, client):
        response = client.post(
            "/auth/register",
            json={"username": "NewReader", "password": "SecurePass123"},
        )

        assert response.status_code == status.HTTP_201_CREATED
        data = response.json()
        assert data["username"] == "newreader"
        assert isinstance(data["id"], int)
        assert "password" not in data
        assert "hashedPassword" not in data

    def test_register_duplicate_username(self, client, sample_user: User):
        response = client.post(
            "/auth/register",
            json={"username": "TestUser", "password": "SecurePass123"},
        )

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert response.json() == {"message": "Username already taken"}

    def test_register_short_password(self, client):
        response = client.post(
            "/auth/register",
            json={"username": "reader", "password": "short"},
        )

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert "password" in response.json()["message"]

    def test_register_invalid_username(self, client):
        response = client.post(
            "/auth/register",
            json={"username": "1reader!", "password": "SecurePass123"},
        )

        assert response.status_code == status.HTTP_400_BAD_REQUEST


class TestLogin:
    """Tests for POST /auth/login."""

    def test_login_success(self, client, sample_user: User):
        response = client.post(
            "/auth/login",
            json={"username": "testuser", "password": "SecurePass123"},
        )

        assert response.status_code == status.HTTP_200_OK
        data = response.json()
        assert data["tokenType"] == "bearer"
        assert data["expiresIn"] > 0

        payload = decode_token(data["accessToken"])
        assert payload["sub"] == str(sample_user.id)
        assert payload["username"] == "testuser"

    def test_login_token_opens_write_endpoints(self, client):
        client.post(
            "/auth/register",
            json={"username": "writer", "password": "SecurePass123"},
        )
        token = client.post(
            "/auth/login",
            json={"username": "writer", "password": "SecurePass123"},
        ).json()["accessToken"]

        response = client.post(
            "/books",
            json=BOOK,
            headers={"Authorization": f"Bearer {token}"},
        )

        assert response.status_code == status.HTTP_201_CREATED

    def test_login_username_is_case_insensitive(self, client, sample_user: User):
        response = client.post(
            "/auth/login",
            json={"username": "TESTUSER", "password": "SecurePass123"},
        )

        assert response.status_code == status.HTTP_200_OK

    def test_login_wrong_password(self, client, sample_user: User):
        response = client.post(
            "/auth/login",
            json={"username": "testuser", "password": "WrongPass123"},
        )

        assert response.status_code == status.HTTP_401_UNAUTHORIZED
        assert response.json() == {"message": "Invalid username or password"}

    def test_login_unknown_user(self, client):
        response = client.post(
            "/auth/login",
            json={"username": "ghost", "password": "SecurePass123"},
        )

        assert response.status_code == status.HTTP_401_UNAUTHORIZED
        assert response.json() == {"message": "Invalid username or password"}


class TestAuthGuard:
    """The bearer token check in front of write endpoints."""

    def assert_rejected(self, client, headers: dict, message: str = "Invalid or expired token"):
        response = client.post("/books", json=BOOK, headers=headers)

        assert response.status_code == status.HTTP_401_UNAUTHORIZED
        assert response.json() == {"message": message}

    def test_missing_header(self, client):
        self.assert_rejected(client, {}, "No token provided")

    def test_garbage_token(self, client):
        self.assert_rejected(client, {"Authorization": "Bearer not-a-jwt"})

    def test_expired_token(self, client, sample_user: User):
        token = create_access_token(
            {"sub": str(sample_user.id)},
            expires_delta=timedelta(minutes=-1),
        )

        self.assert_rejected(client, {"Authorization": f"Bearer {token}"})

    def test_token_signed_with_other_secret(self, client, sample_user: User):
        token = jwt.encode(
            {"sub": str(sample_user.id), "type": "access"},
            "some-other-secret-that-is-also-long-enough",
            algorithm=ALGORITHM,
        )

        self.assert_rejected(client, {"Authorization": f"Bearer {token}"})

    def test_token_without_subject(self, client):
        token = create_access_token({"username": "nobody"})

        self.assert_rejected(client, {"Authorization": f"Bearer {token}"})

    def test_token_of_wrong_type(self, client, sample_user: User):
        token = jwt.encode(
            {"sub": str(sample_user.id), "type": "refresh"},
            get_settings().secret_key,
            algorithm=ALGORITHM,
        )

        self.assert_rejected(client, {"Authorization": f"Bearer {token}"})

    def test_guard_does_not_look_up_user(self, client):
        """A valid token is enough; the subject need not exist in the database."""
        token = create_access_token({"sub": "424242", "username": "ghost"})

        response = client.post(
            "/books",
            json=BOOK,
            headers={"Authorization": f"Bearer {token}"},
        )

        assert response.status_code == status.HTTP_201_CREATED

    def test_read_endpoints_are_public(self, client, sample_book):
        assert client.get("/books").status_code == status.HTTP_200_OK
        assert client.get(f"/books/{sample_book.id}").status_code == status.HTTP_200_OK
        assert client.get("/books/search?query=dune").status_code == status.HTTP_200_OK
