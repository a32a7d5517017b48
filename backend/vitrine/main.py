"""
Vitrine Backend: FastAPI Application Factory
==============================================

What:  Creates and configures the FastAPI application instance.
How:   create_app() returns a configured FastAPI instance.
Who:   uvicorn (`uvicorn vitrine.main:app`) and the test suite.

Application Architecture:
    ┌─────────────────────────────────────────────────────────┐
    │                      FastAPI App                        │
    │                                                         │
    │  Middleware Chain:                                      │
    │  ┌────────────┐ ┌────────────┐ ┌────────────────────┐   │
    │  │  Req ID    │→│ Access log │→│ Rate limit (/api/) │   │
    │  └────────────┘ └────────────┘ └────────────────────┘   │
    │                                                         │
    │  Routes:                                                │
    │  ┌───────────────┐ ┌──────────────┐ ┌──────────────┐    │
    │  │ /api/contact  │ │ /api/auth/*  │ │ /api/projects│    │
    │  │ /api/admin/*  │ │ /api/packages│ │ /health      │    │
    │  └───────────────┘ └──────────────┘ └──────────────┘    │
    │  ┌───────────────────────────────────────────────────┐  │
    │  │ /{path}  pages and static assets (catch-all)      │  │
    │  └───────────────────────────────────────────────────┘  │
    │                                                         │
    │  Exception Handlers:                                    │
    │  ┌───────────────────────────────────────────────────┐  │
    │  │ Validation→400 │ Auth→401 │ NotFound→404 │ DB→500 │  │
    │  └───────────────────────────────────────────────────┘  │
    └─────────────────────────────────────────────────────────┘

Lifecycle:
    Startup:   logging, configuration check, uploads directory.
    Shutdown:  dispose the database engine.
"""

import logging
import sys
from contextlib import asynccontextmanager
from typing import Any, AsyncGenerator, Dict, Optional

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.middleware.gzip import GZipMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from vitrine import __version__
from vitrine.config import settings
from vitrine.database import dispose_engine
from vitrine.exceptions import (
    AlreadyExistsError,
    AuthenticationError,
    DatabaseError,
    FileStorageError,
    InvalidCredentialsError,
    NotFoundError,
    RateLimitExceededError,
    ValidationError,
    VitrineError,
)
from vitrine.middleware.logging import RequestLoggingMiddleware
from vitrine.middleware.rate_limit import RateLimitMiddleware
from vitrine.middleware.request_id import RequestIDMiddleware, request_id_var
from vitrine.routes import auth, health, packages, pages, projects, submissions

logger = logging.getLogger(__name__)

GENERIC_SERVER_ERROR = "An internal error occurred. Please try again later."

# Error codes for framework-raised HTTP errors (unknown method, etc.)
HTTP_ERROR_CODES = {
    400: "validation_error",
    401: "authentication_required",
    404: "not_found",
    405: "method_not_allowed",
}


# ══════════════════════════════════════════════════════════════════════════
# Logging
# ══════════════════════════════════════════════════════════════════════════

def setup_logging() -> None:
    """
    Configure the root logger once for the whole process.

    Format: %(asctime)s [%(levelname)s] %(name)s: %(message)s
    """
    logging.basicConfig(
        level=getattr(logging, settings.log_level, logging.INFO),
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%Y-%m-%dT%H:%M:%S",
        handlers=[logging.StreamHandler(sys.stdout)],
        force=True,
    )

    # vitrine.access already logs every request
    logging.getLogger("uvicorn.access").setLevel(logging.WARNING)
    logging.getLogger("sqlalchemy.engine").setLevel(logging.WARNING)
    logging.getLogger("multipart").setLevel(logging.WARNING)


# ══════════════════════════════════════════════════════════════════════════
# Application Lifespan
# ══════════════════════════════════════════════════════════════════════════

@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    setup_logging()
    logger.info("=" * 60)
    logger.info("Vitrine Backend %s starting up...", __version__)

    try:
        settings.validate_required_for_production()
    except ValueError as e:
        # Keep serving; the public site works without a real secret
        logger.error("Configuration error: %s", str(e))

    uploads = settings.uploads_path
    uploads.mkdir(parents=True, exist_ok=True)
    logger.info("Site root: %s", settings.site_root_path)
    logger.info("Uploads directory: %s", uploads)
    logger.info("Server ready at http://%s:%d", settings.backend_host, settings.backend_port)
    logger.info("=" * 60)

    yield

    logger.info("Vitrine Backend shutting down...")
    await dispose_engine()
    logger.info("Shutdown complete.")


# ══════════════════════════════════════════════════════════════════════════
# Exception Handlers
# ══════════════════════════════════════════════════════════════════════════

def error_response(
    status_code: int,
    error: str,
    message: str,
    details: Optional[Dict[str, Any]] = None,
    headers: Optional[Dict[str, str]] = None,
) -> JSONResponse:
    content: Dict[str, Any] = {"error": error, "message": message}
    if details:
        content["details"] = details
    content["request_id"] = request_id_var.get("")
    return JSONResponse(status_code=status_code, content=content, headers=headers)


def register_exception_handlers(app: FastAPI) -> None:
    """
    Map exception types to HTTP responses.

    Handler table:
        ValidationError           → 400 validation_error
        AlreadyExistsError        → 400 already_exists
        RequestValidationError    → 400 validation_error (malformed body/params)
        AuthenticationError       → 401 authentication_required | invalid_token
        InvalidCredentialsError   → 401 invalid_credentials
        NotFoundError             → 404 not_found
        RateLimitExceededError    → 429 rate_limit_exceeded
        HTTPException (framework) → its own status, e.g. 405 method_not_allowed
        DatabaseError             → 500 server_error (message is generic)
        FileStorageError          → 500 server_error (message is generic)
        VitrineError / Exception  → 500 internal_server_error

    Only `message` is ever returned for 4xx; 5xx bodies never include the
    underlying error.
    """

    @app.exception_handler(ValidationError)
    async def handle_validation_error(request: Request, exc: ValidationError):
        logger.warning("[%s] Validation error: %s", request_id_var.get(""), exc.message)
        details = {"field": exc.field} if exc.field else None
        return error_response(400, "validation_error", exc.message, details)

    @app.exception_handler(AlreadyExistsError)
    async def handle_already_exists(request: Request, exc: AlreadyExistsError):
        logger.info("[%s] Already exists: %s", request_id_var.get(""), exc.message)
        return error_response(400, "already_exists", exc.message)

    @app.exception_handler(RequestValidationError)
    async def handle_request_validation(request: Request, exc: RequestValidationError):
        errors = exc.errors()
        first = errors[0] if errors else {}
        location = ".".join(str(part) for part in first.get("loc", ()) if part != "body")
        message = first.get("msg", "Invalid request")
        if location:
            message = f"{location}: {message}"
        logger.warning("[%s] Request validation failed: %s", request_id_var.get(""), message)
        return error_response(400, "validation_error", message)

    @app.exception_handler(AuthenticationError)
    async def handle_authentication(request: Request, exc: AuthenticationError):
        logger.info(
            "[%s] Unauthorized %s %s: %s",
            request_id_var.get(""),
            request.method,
            request.url.path,
            exc.message,
        )
        return error_response(
            401,
            exc.error_code,
            exc.message,
            headers={"WWW-Authenticate": "Bearer"},
        )

    @app.exception_handler(InvalidCredentialsError)
    async def handle_invalid_credentials(request: Request, exc: InvalidCredentialsError):
        return error_response(401, "invalid_credentials", exc.message)

    @app.exception_handler(NotFoundError)
    async def handle_not_found(request: Request, exc: NotFoundError):
        return error_response(404, "not_found", exc.message)

    @app.exception_handler(RateLimitExceededError)
    async def handle_rate_limit(request: Request, exc: RateLimitExceededError):
        return error_response(
            429,
            "rate_limit_exceeded",
            exc.message,
            exc.context,
            headers={"Retry-After": str(exc.retry_after)},
        )

    @app.exception_handler(StarletteHTTPException)
    async def handle_http_exception(request: Request, exc: StarletteHTTPException):
        return error_response(
            exc.status_code,
            HTTP_ERROR_CODES.get(exc.status_code, "http_error"),
            str(exc.detail),
            headers=getattr(exc, "headers", None),
        )

    @app.exception_handler(DatabaseError)
    async def handle_database_error(request: Request, exc: DatabaseError):
        logger.error(
            "[%s] Database error: %s | Context: %s",
            request_id_var.get(""),
            exc.message,
            exc.context,
        )
        return error_response(500, "server_error", GENERIC_SERVER_ERROR)

    @app.exception_handler(FileStorageError)
    async def handle_file_storage_error(request: Request, exc: FileStorageError):
        logger.error(
            "[%s] File storage error: %s | Context: %s",
            request_id_var.get(""),
            exc.message,
            exc.context,
        )
        return error_response(500, "server_error", GENERIC_SERVER_ERROR)

    @app.exception_handler(VitrineError)
    async def handle_vitrine_error(request: Request, exc: VitrineError):
        logger.error("[%s] Unhandled application error: %s", request_id_var.get(""), exc.message)
        return error_response(500, "internal_server_error", GENERIC_SERVER_ERROR)

    @app.exception_handler(Exception)
    async def handle_unexpected_error(request: Request, exc: Exception):
        logger.error(
            "[%s] Unexpected error: %s",
            request_id_var.get(""),
            str(exc),
            exc_info=True,
        )
        return error_response(
            500,
            "internal_server_error",
            "An unexpected error occurred. Please try again or contact support.",
        )


# ══════════════════════════════════════════════════════════════════════════
# Application Factory
# ══════════════════════════════════════════════════════════════════════════

def create_app() -> FastAPI:
    app = FastAPI(
        title="Vitrine API",
        description=(
            "Backend for a small business showcase site: contact form, "
            "portfolio projects, pricing packages and an admin area."
        ),
        version=__version__,
        docs_url="/docs",
        redoc_url="/redoc",
        openapi_url="/openapi.json",
        lifespan=lifespan,
    )

    # Middleware runs in reverse order of addition:
    # RequestID → Logging → RateLimit → GZip → CORS → router
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins_list,
        allow_credentials=False,
        allow_methods=["*"],
        allow_headers=["*"],
        expose_headers=["X-Request-ID", "Retry-After"],
    )
    app.add_middleware(GZipMiddleware, minimum_size=500)
    app.add_middleware(RateLimitMiddleware)
    app.add_middleware(RequestLoggingMiddleware)
    app.add_middleware(RequestIDMiddleware)

    register_exception_handlers(app)

    app.include_router(submissions.router)
    app.include_router(auth.router)
    app.include_router(projects.router)
    app.include_router(packages.router)
    app.include_router(health.router)
    # Catch-all: must stay last
    app.include_router(pages.router)

    return app


app = create_app()
