"""
Request Throttling

One slowapi Limiter is shared by every router. Routes opt into a tier with
@limiter.limit(...); SlowAPIMiddleware applies RATE_LIMIT_DEFAULT to the
rest.

Tiers:
- catalog reads (list, detail, search): RATE_LIMIT_DEFAULT
- book and review writes: RATE_LIMIT_WRITE
- /auth/register and /auth/login: fixed per-route limits in routers/auth.py

Counters are kept in RATE_LIMIT_STORAGE_URI. memory:// is per process;
a shared store (redis://...) is needed once the API runs as several
workers. RATE_LIMIT_ENABLED=false turns every check off, which the test
suite relies on.
"""

import logging

from fastapi import Request
from slowapi import Limiter
from slowapi.errors import RateLimitExceeded
from slowapi.util import get_remote_address
from starlette.responses import JSONResponse

from bookreview.config import get_settings

logger = logging.getLogger(__name__)
settings = get_settings()


def get_client_ip(request: Request) -> str:
    """
    Key used to count requests: the caller's address.

    Behind a proxy the socket address is the proxy's own, so the left-most
    X-Forwarded-For entry (or X-Real-IP) wins when present.
    """
    forwarded_for = request.headers.get("X-Forwarded-For")
    if forwarded_for:
        return forwarded_for.split(",")[0].strip()

    real_ip = request.headers.get("X-Real-IP")
    if real_ip:
        return real_ip.strip()

    return get_remote_address(request)


def create_limiter() -> Limiter:
    limiter = Limiter(
        key_func=get_client_ip,
        default_limits=[settings.rate_limit_default],
        storage_uri=settings.rate_limit_storage_uri,
        strategy="fixed-window",
        enabled=settings.rate_limit_enabled,
    )

    logger.info(
        f"Throttling {'on' if settings.rate_limit_enabled else 'off'} "
        f"(reads {settings.rate_limit_default}, writes {settings.rate_limit_write}, "
        f"store {settings.rate_limit_storage_uri})"
    )

    return limiter


limiter = create_limiter()


def rate_limit_exceeded_handler(request: Request, exc: RateLimitExceeded) -> JSONResponse:
    """
    Answer a throttled request with 429 and the usual {"message": ...} body.

    Retry-After is the length of the exceeded window, e.g. 60 for "10/minute".
    """
    retry_after = exc.limit.limit.get_expiry()

    logger.warning(
        f"Throttled {request.method} {request.url.path} from "
        f"{get_client_ip(request)}: {exc.detail}"
    )

    return JSONResponse(
        status_code=429,
        content={"message": f"Too many requests: {exc.detail}"},
        headers={"Retry-After": str(retry_after)},
    )
