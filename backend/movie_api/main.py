"""
Movie API Backend — FastAPI Application Factory
=================================================

What:  Creates and configures the FastAPI application instance.
Why:   Centralizes middleware registration, route mounting, exception
       handling and lifecycle management in one place.
How:   Factory pattern: create_app() returns a configured FastAPI instance.
Who:   Called by uvicorn to start the server (uvicorn movie_api.main:app).

Application Architecture:
    ┌──────────────────────────────────────────────────────────┐
    │                      FastAPI App                         │
    │                                                          │
    │  Middleware Chain:                                       │
    │  ┌────────────┐ ┌──────────┐ ┌─────────┐ ┌───────────┐   │
    │  │ Rate Limit │→│  Req ID  │→│ Logging │→│ GZip/CORS │   │
    │  └────────────┘ └──────────┘ └─────────┘ └───────────┘   │
    │                                                          │
    │  Routes:                                                 │
    │  /  /health  /api/v1/{auth,movies,actors,ratings}        │
    │                                                          │
    │  Exception Handlers:                                     │
    │  ┌────────────────────────────────────────────────────┐  │
    │  │ MovieApiError→status_code │ body validation→400    │  │
    │  │ anything else→500                                  │  │
    │  └────────────────────────────────────────────────────┘  │
    └──────────────────────────────────────────────────────────┘

Lifecycle:
    Startup:
    1. Initialize logging
    2. Validate configuration (refuse unsafe production settings)
    3. Ping MongoDB (with retries) and ensure indexes

    Shutdown:
    1. Close the MongoDB client (all pooled connections)
"""

import logging
import sys
import traceback
from contextlib import asynccontextmanager
from typing import Any, AsyncGenerator, Dict

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.middleware.gzip import GZipMiddleware
from fastapi.responses import JSONResponse

from movie_api import __version__
from movie_api.config import settings
from movie_api.database import close_client, ensure_indexes, get_database, ping_database
from movie_api.exceptions import MovieApiError, RateLimitExceededError
from movie_api.middleware.logging import RequestLoggingMiddleware
from movie_api.middleware.rate_limit import RateLimitMiddleware
from movie_api.middleware.request_id import RequestIDMiddleware, request_id_var
from movie_api.routes import actors, auth, health, index, movies, ratings

logger = logging.getLogger(__name__)


# ══════════════════════════════════════════════════════════════════════════
# Logging Configuration
# ══════════════════════════════════════════════════════════════════════════

def setup_logging() -> None:
    """
    Configure logging for the entire application.

    Format: %(asctime)s [%(levelname)s] %(name)s: %(message)s
    Called once during startup, before any other initialization.
    """
    logging.basicConfig(
        level=getattr(logging, settings.log_level, logging.INFO),
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%Y-%m-%dT%H:%M:%S",
        handlers=[logging.StreamHandler(sys.stdout)],
        force=True,
    )

    # RequestLoggingMiddleware writes the access log; these are redundant or chatty
    logging.getLogger("uvicorn.access").setLevel(logging.WARNING)
    logging.getLogger("pymongo").setLevel(logging.WARNING)
    logging.getLogger("passlib").setLevel(logging.WARNING)


# ══════════════════════════════════════════════════════════════════════════
# Application Lifespan (Startup & Shutdown)
# ══════════════════════════════════════════════════════════════════════════

@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """
    Startup: logging, configuration check, MongoDB ping and indexes.
    Shutdown: close the MongoDB client.

    Configuration errors abort startup: running production with the default
    JWT secret would let anyone forge tokens.
    """
    # ── Startup ───────────────────────────────────────────────────────────
    setup_logging()
    logger.info("=" * 60)
    logger.info("Movie API %s starting up (%s)...", __version__, settings.environment)

    try:
        settings.validate_required_for_production()
    except ValueError as e:
        logger.error("Configuration error: %s", str(e))
        raise

    await ping_database()
    await ensure_indexes(await get_database())

    logger.info("Server ready at http://%s:%d", settings.backend_host, settings.backend_port)
    logger.info("API docs: http://%s:%d/docs", settings.backend_host, settings.backend_port)
    logger.info("=" * 60)

    yield

    # ── Shutdown ──────────────────────────────────────────────────────────
    logger.info("Movie API shutting down...")
    await close_client()
    logger.info("Shutdown complete.")


# ══════════════════════════════════════════════════════════════════════════
# Exception Handlers
# ══════════════════════════════════════════════════════════════════════════

def error_body(exc: MovieApiError, request_id: str) -> Dict[str, Any]:
    """`{status, error, message, details?, request_id}` for an application error."""
    body: Dict[str, Any] = {
        "status": exc.status,
        "error": exc.error_code,
        "message": exc.message,
        "request_id": request_id,
    }
    # Server-side context (collection names, operations) stays in the logs
    if exc.context and exc.status_code < 500:
        body["details"] = exc.context
    return body


def register_exception_handlers(app: FastAPI) -> None:
    """
    Map exceptions to HTTP responses with one consistent body shape.

    Handler hierarchy:
        RateLimitExceededError   → 429 with Retry-After
        MovieApiError (all)      → exc.status_code ("fail" for 4xx, "error" for 5xx)
        RequestValidationError   → 400 "Invalid input data. <messages>"
        Exception (fallback)     → 500, with the stack trace in development only
    """

    @app.exception_handler(RateLimitExceededError)
    async def handle_rate_limit(request: Request, exc: RateLimitExceededError):
        return JSONResponse(
            status_code=exc.status_code,
            content=error_body(exc, request_id_var.get("")),
            headers={"Retry-After": str(exc.retry_after)},
        )

    @app.exception_handler(MovieApiError)
    async def handle_api_error(request: Request, exc: MovieApiError):
        rid = request_id_var.get("")
        if exc.status_code >= 500:
            logger.error("[%s] %s: %s | Context: %s", rid, type(exc).__name__, exc.message, exc.context)
        else:
            logger.info("[%s] %s: %s", rid, type(exc).__name__, exc.message)
        return JSONResponse(status_code=exc.status_code, content=error_body(exc, rid))

    @app.exception_handler(RequestValidationError)
    async def handle_request_validation(request: Request, exc: RequestValidationError):
        """Body/parameter validation failures, reported like any other 400."""
        rid = request_id_var.get("")
        messages = []
        for error in exc.errors():
            msg = str(error.get("msg", "invalid value"))
            # pydantic prefixes messages raised from validators
            msg = msg.removeprefix("Value error, ")
            location = ".".join(str(part) for part in error.get("loc", ()) if part != "body")
            messages.append(f"{location}: {msg}" if location else msg)
        message = f"Invalid input data. {'. '.join(messages)}"
        logger.info("[%s] Request validation failed: %s", rid, message)
        return JSONResponse(
            status_code=400,
            content={
                "status": "fail",
                "error": "validation_error",
                "message": message,
                "request_id": rid,
            },
        )

    @app.exception_handler(Exception)
    async def handle_unexpected_error(request: Request, exc: Exception):
        """
        Catch-all for unexpected errors (including LinkResolutionError).

        The stack trace is always logged; it is added to the response body
        only in the development environment.
        """
        rid = request_id_var.get("")
        logger.error("[%s] Unexpected error: %s", rid, str(exc), exc_info=True)
        content: Dict[str, Any] = {
            "status": "error",
            "error": "internal_server_error",
            "message": "Something went very wrong!",
            "request_id": rid,
        }
        if settings.is_development:
            content["stack"] = "".join(traceback.format_exception(type(exc), exc, exc.__traceback__))
        return JSONResponse(status_code=500, content=content)


# ══════════════════════════════════════════════════════════════════════════
# Application Factory
# ══════════════════════════════════════════════════════════════════════════

def create_app() -> FastAPI:
    """Create and configure the FastAPI application."""
    app = FastAPI(
        title="Movie API",
        description=(
            "RESTful API for movies, actors and ratings with filtering, sorting, "
            "field selection, pagination and hypermedia links."
        ),
        version=__version__,
        docs_url="/docs",
        redoc_url="/redoc",
        openapi_url="/openapi.json",
        lifespan=lifespan,
    )

    # ── Register Middleware ───────────────────────────────────────────────
    # Middleware executes in REVERSE order of addition:
    # RateLimit → RequestID → Logging → GZip → CORS → route
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins_list,
        allow_credentials=settings.cors_origins_list != ["*"],
        allow_methods=["*"],
        allow_headers=["*"],
        expose_headers=["X-Request-ID", "Retry-After"],
    )
    app.add_middleware(GZipMiddleware, minimum_size=500)
    app.add_middleware(RequestLoggingMiddleware)
    app.add_middleware(RequestIDMiddleware)
    app.add_middleware(RateLimitMiddleware)

    # ── Register Exception Handlers ───────────────────────────────────────
    register_exception_handlers(app)

    # ── Register Routes ───────────────────────────────────────────────────
    app.include_router(index.router)
    app.include_router(health.router)
    app.include_router(auth.router)
    app.include_router(movies.router)
    app.include_router(actors.router)
    app.include_router(ratings.router)

    return app


# ── Application Instance ─────────────────────────────────────────────────
# uvicorn expects `movie_api.main:app` to be importable
app = create_app()
