"""
Authentication Router

Handles user authentication endpoints:
- Registration (username/password)
- Login (username/password → JWT access token)

Security:
=========
- Passwords are hashed with bcrypt before storage
- Plain text passwords are never logged or stored
- Access tokens are stateless; the auth guard never looks users up
"""

import logging

from fastapi import APIRouter, Request, status
from sqlalchemy import select
from sqlalchemy.exc import IntegrityError

from bookreview.config import get_settings
from bookreview.dependencies import DbSession
from bookreview.exceptions import Unauthenticated, ValidationError
from bookreview.models import User
from bookreview.schemas import LoginRequest, TokenResponse, UserCreate, UserResponse
from bookreview.services.rate_limiter import limiter
from bookreview.services.security import (
    access_token_lifetime,
    create_access_token,
    hash_password,
    verify_password,
)

logger = logging.getLogger(__name__)
settings = get_settings()

router = APIRouter(
    prefix="/auth",
    tags=["Authentication"],
    responses={
        400: {"description": "Bad request"},
        401: {"description": "Unauthorized"},
    },
)


# -------------------------------------------------------------------------
# Registration Endpoint
# -------------------------------------------------------------------------
@router.post(
    "/register",
    response_model=UserResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Register a new user",
    description="""
    Create a user account.

    **Username:** 3-50 characters, starts with a letter, letters/numbers/underscores.

    **Password:** 8-128 characters.
    """,
)
@limiter.limit("5/minute")  # Strict rate limit to prevent spam registrations
def register(
    request: Request,
    user_data: UserCreate,
    db: DbSession,
) -> UserResponse:
    stmt = select(User).where(User.username == user_data.username)
    if db.execute(stmt).scalar_one_or_none() is not None:
        raise ValidationError("Username already taken")

    user = User(
        username=user_data.username,
        hashed_password=hash_password(user_data.password),
    )

    db.add(user)
    try:
        db.commit()
    except IntegrityError as exc:
        # Same username registered concurrently
        db.rollback()
        raise ValidationError("Username already taken") from exc
    db.refresh(user)

    logger.info(f"New user registered: {user.username}")

    return UserResponse.model_validate(user)


# -------------------------------------------------------------------------
# Login Endpoint
# -------------------------------------------------------------------------
@router.post(
    "/login",
    response_model=TokenResponse,
    summary="Login with username and password",
    description="""
    Exchange credentials for a bearer token.

    Include the token in the Authorization header:
    ```
    Authorization: Bearer <accessToken>
    ```
    """,
)
@limiter.limit("10/minute")  # Rate limit login attempts
def login(
    request: Request,
    credentials: LoginRequest,
    db: DbSession,
) -> TokenResponse:
    username = credentials.username.lower()

    stmt = select(User).where(User.username == username)
    user = db.execute(stmt).scalar_one_or_none()

    if user is None or not verify_password(credentials.password, user.hashed_password):
        logger.warning(f"Login failed for {username}")
        raise Unauthenticated("Invalid username or password")

    lifetime = access_token_lifetime()
    token = create_access_token(
        {"sub": str(user.id), "username": user.username},
        expires_delta=lifetime,
    )

    logger.info(f"User logged in: {user.username}")

    return TokenResponse(
        access_token=token,
        token_type="bearer",
        expires_in=int(lifetime.total_seconds()),
    )
