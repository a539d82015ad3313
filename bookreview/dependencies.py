"""
FastAPI Dependencies Module

Reusable components injected into route handlers with Depends():
- DbSession: one SQLAlchemy session per request
- RowId: an integer path id within the database INTEGER range
- CurrentIdentity: the auth guard for routes that require a bearer token
"""

import logging
from typing import Annotated

from fastapi import Depends, Header, Path, Request
from sqlalchemy.orm import Session

from bookreview.database import DB_INT_MAX, DB_INT_MIN, get_db
from bookreview.exceptions import Unauthenticated
from bookreview.schemas import Identity
from bookreview.services.security import verify_token_type

logger = logging.getLogger(__name__)

# Instead of writing:
#   def list_books(db: Session = Depends(get_db)):
# routes write:
#   def list_books(db: DbSession):
DbSession = Annotated[Session, Depends(get_db)]

# Path ids outside the INTEGER column range answer 400 instead of reaching
# the driver
RowId = Annotated[int, Path(ge=DB_INT_MIN, le=DB_INT_MAX)]


# =============================================================================
# Bearer Token Authentication
# =============================================================================
def get_current_identity(
    request: Request,
    authorization: Annotated[str | None, Header()] = None,
) -> Identity:
    """
    Verify the bearer token and return the caller's identity.

    1. Reads the Authorization header
    2. Strips the "Bearer " prefix
    3. Verifies signature, expiry and token type
    4. Attaches the identity to request.state.user

    No database lookup happens here: the token alone identifies the caller.

    Raises:
        Unauthenticated: "No token provided" if the header is missing,
            "Invalid or expired token" if verification fails
    """
    if not authorization:
        raise Unauthenticated("No token provided")

    token = authorization.removeprefix("Bearer ").strip()

    payload = verify_token_type(token)
    if payload is None:
        raise Unauthenticated("Invalid or expired token")

    try:
        user_id = int(payload.get("sub"))
    except (TypeError, ValueError):
        logger.warning("Token payload has no usable subject")
        raise Unauthenticated("Invalid or expired token")

    identity = Identity(id=user_id, username=payload.get("username"))
    request.state.user = identity
    return identity


CurrentIdentity = Annotated[Identity, Depends(get_current_identity)]
