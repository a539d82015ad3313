"""
User and Token Pydantic Schemas

Schemas:
- UserCreate: Registration data (username, password)
- LoginRequest: Credentials exchanged for a bearer token
- UserResponse: Public user data (never exposes the password hash)
- TokenResponse: Issued access token
- Identity: Caller identity decoded from a bearer token
"""

import re
from datetime import datetime

from pydantic import Field, field_validator

from bookreview.schemas.common import CamelModel


class UserCreate(CamelModel):
    """Schema for user registration."""

    username: str = Field(
        ...,
        min_length=3,
        max_length=50,
        description="Unique username (letters, numbers and underscores)",
        examples=["reader", "jane_doe123"],
    )

    password: str = Field(
        ...,
        min_length=8,
        max_length=128,
        description="Password (8-128 characters)",
        examples=["SecurePass123"],
    )

    @field_validator("username")
    @classmethod
    def username_must_be_valid(cls, v: str) -> str:
        """
        Validate username format.

        Rules:
        - Only alphanumeric and underscores
        - Must start with a letter
        """
        if not re.match(r"^[a-zA-Z][a-zA-Z0-9_]*$", v):
            raise ValueError(
                "Username must start with a letter and contain only "
                "letters, numbers, and underscores"
            )
        return v.lower()


class LoginRequest(CamelModel):
    """Credentials for POST /auth/login."""

    username: str = Field(..., min_length=1, max_length=50)
    password: str = Field(..., min_length=1, max_length=128)


class UserResponse(CamelModel):
    """Schema for user responses."""

    id: int = Field(..., description="Unique user identifier")
    username: str = Field(..., description="Unique username")
    created_at: datetime = Field(..., description="When the user registered")


class TokenResponse(CamelModel):
    """
    Issued bearer token.

    Send it back as: Authorization: Bearer <accessToken>
    """

    access_token: str = Field(..., description="Signed JWT access token")
    token_type: str = Field(default="bearer", description="Always 'bearer'")
    expires_in: int = Field(..., description="Token lifetime in seconds")


class Identity(CamelModel):
    """
    The authenticated caller, as carried in the token payload.

    Attached to request.state.user by the auth guard.
    """

    id: int
    username: str | None = None
