"""
FastAPI Application Entry Point

This module creates and configures the FastAPI application.

Key Concepts:
=============

1. Application Factory Pattern
   - create_app() returns a configured app
   - Tests import the module-level instance and override dependencies

2. Lifespan Events
   - startup: log configuration
   - shutdown: dispose of the process-wide database engine

3. Exception Handlers
   - Every failure is answered with a JSON body {"message": "..."}
   - API errors carry their own status code
   - Request validation and database errors answer 400
"""

import logging
from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse, PlainTextResponse
from slowapi.errors import RateLimitExceeded
from slowapi.middleware import SlowAPIMiddleware
from sqlalchemy.exc import SQLAlchemyError
from starlette.exceptions import HTTPException as StarletteHTTPException

from bookreview.config import get_settings
from bookreview.database import engine
from bookreview.exceptions import BookReviewError, store_message
from bookreview.routers import auth_router, books_router, reviews_router
from bookreview.services.rate_limiter import limiter, rate_limit_exceeded_handler

# =============================================================================
# Logging Configuration
# =============================================================================
settings = get_settings()

logging.basicConfig(
    level=getattr(logging, settings.log_level),
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger(__name__)


# =============================================================================
# Lifespan Events
# =============================================================================
@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """
    Application lifespan context manager.

    Code before yield runs on startup, code after yield on shutdown.
    """
    # ----- STARTUP -----
    logger.info(f"Starting {settings.app_name} ({settings.environment})...")
    logger.info(f"Rate limiting enabled: {settings.rate_limit_enabled}")

    yield

    # ----- SHUTDOWN -----
    logger.info(f"Shutting down {settings.app_name}...")
    engine.dispose()


def format_validation_errors(exc: RequestValidationError) -> str:
    """
    Flatten FastAPI validation errors into one readable message.

    ("body", "title") / "Field required" becomes "title: Field required".
    """
    messages = []
    for error in exc.errors():
        loc = [str(part) for part in error.get("loc", ())]
        field = ".".join(loc[1:]) or ".".join(loc)
        messages.append(f"{field}: {error.get('msg')}" if field else str(error.get("msg")))
    return "; ".join(messages) or "Invalid request"


# =============================================================================
# Application Factory
# =============================================================================
def create_app() -> FastAPI:
    """
    Create and configure the FastAPI application.

    Returns:
        Configured FastAPI application instance
    """
    app = FastAPI(
        title=settings.app_name,
        description="""
## Book Review API

A catalog of books with user reviews.

### Features
- **Books**: create, list with filters, search, detail with average rating
- **Reviews**: one review per user per book, editable only by its author

### Authentication
Register and log in under `/auth`, then send `Authorization: Bearer <token>`
to create books and write reviews.
        """,
        version=settings.app_version,
        docs_url="/docs",
        redoc_url="/redoc",
        openapi_url="/openapi.json",
        lifespan=lifespan,
    )

    # -------------------------------------------------------------------------
    # Rate Limiting
    # -------------------------------------------------------------------------
    app.state.limiter = limiter
    app.add_exception_handler(RateLimitExceeded, rate_limit_exceeded_handler)
    app.add_middleware(SlowAPIMiddleware)

    # -------------------------------------------------------------------------
    # CORS Middleware
    # -------------------------------------------------------------------------
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.allowed_origins_list,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # -------------------------------------------------------------------------
    # Exception Handlers
    # -------------------------------------------------------------------------
    @app.exception_handler(BookReviewError)
    async def api_error_handler(
        request: Request,
        exc: BookReviewError,
    ) -> JSONResponse:
        """Answer service errors with their status and message."""
        if exc.status_code == status.HTTP_401_UNAUTHORIZED:
            logger.warning(f"Rejected {request.method} {request.url.path}: {exc.message}")
        return JSONResponse(
            status_code=exc.status_code,
            content={"message": exc.message},
        )

    @app.exception_handler(RequestValidationError)
    async def validation_exception_handler(
        request: Request,
        exc: RequestValidationError,
    ) -> JSONResponse:
        """Malformed bodies, paths and query strings are client errors (400)."""
        return JSONResponse(
            status_code=status.HTTP_400_BAD_REQUEST,
            content={"message": format_validation_errors(exc)},
        )

    @app.exception_handler(StarletteHTTPException)
    async def http_exception_handler(
        request: Request,
        exc: StarletteHTTPException,
    ) -> JSONResponse:
        """Unknown routes and methods keep their status with a message body."""
        return JSONResponse(
            status_code=exc.status_code,
            content={"message": str(exc.detail)},
            headers=getattr(exc, "headers", None),
        )

    @app.exception_handler(SQLAlchemyError)
    async def sqlalchemy_exception_handler(
        request: Request,
        exc: SQLAlchemyError,
    ) -> JSONResponse:
        """
        Handle database errors not already mapped by a service.

        Reported as 400 with the driver's message.
        """
        logger.error(f"Database error: {exc}")
        return JSONResponse(
            status_code=status.HTTP_400_BAD_REQUEST,
            content={"message": store_message(exc)},
        )

    @app.exception_handler(OverflowError)
    async def overflow_exception_handler(
        request: Request,
        exc: OverflowError,
    ) -> JSONResponse:
        """The SQLite driver rejects integers outside INTEGER range with a bare OverflowError."""
        logger.warning(f"Integer out of range on {request.method} {request.url.path}: {exc}")
        return JSONResponse(
            status_code=status.HTTP_400_BAD_REQUEST,
            content={"message": str(exc)},
        )

    @app.exception_handler(Exception)
    async def general_exception_handler(
        request: Request,
        exc: Exception,
    ) -> JSONResponse:
        """Catch-all: hide internal errors unless in debug mode."""
        logger.error(f"Unhandled error: {exc}", exc_info=True)

        message = str(exc) if settings.debug else "An internal error occurred."
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content={"message": message},
        )

    # -------------------------------------------------------------------------
    # Register Routers
    # -------------------------------------------------------------------------
    app.include_router(auth_router)
    app.include_router(books_router)
    app.include_router(reviews_router)

    # -------------------------------------------------------------------------
    # Root and Health Endpoints
    # -------------------------------------------------------------------------
    @app.get(
        "/",
        tags=["Root"],
        summary="API root",
        response_class=PlainTextResponse,
    )
    async def root() -> str:
        return "Book Review API is running."

    @app.get(
        "/health",
        tags=["Health"],
        summary="Health check",
        description="Check if the API is running.",
    )
    async def health_check() -> dict:
        """Used by load balancers and container probes."""
        return {
            "status": "healthy",
            "app": settings.app_name,
            "version": settings.app_version,
        }

    return app


# =============================================================================
# Application Instance
# =============================================================================
# This is what uvicorn imports: uvicorn bookreview.main:app

app = create_app()


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "bookreview.main:app",
        host=settings.host,
        port=settings.port,
        reload=settings.debug,
    )
