"""
Dealerships API — FastAPI Application Factory
===============================================

What:  Creates and configures the FastAPI application instance.
Why:   Centralizes middleware registration, route mounting, exception
       mapping and the store lifecycle in one place.
How:   Factory pattern: create_app() returns a configured FastAPI instance.
Who:   Served by uvicorn (uvicorn dealer_api.main:app --port 3030).

Lifecycle:
    Startup:
    1. Initialize logging
    2. Connect to MongoDB and ping it (failure aborts startup, exit non-zero)
    3. Ensure indexes, clear both collections, insert the seed data
       (failure is logged; the server still starts)

    Shutdown:
    1. Close the MongoDB client

Error mapping (every error body is {"error": <message>}):
    ValidationError / RequestValidationError → 400
    NotFoundError                            → 404
    DatabaseError                            → 500 (route-specific message)
    Exception (fallback)                     → 500
"""

import logging
import sys
from contextlib import asynccontextmanager
from typing import AsyncGenerator

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.middleware.gzip import GZipMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from dealer_api import __version__
from dealer_api.config import settings
from dealer_api.database import close_client, connect
from dealer_api.exceptions import (
    DatabaseConnectionError,
    DatabaseError,
    NotFoundError,
    ValidationError,
)
from dealer_api.middleware.logging import RequestLoggingMiddleware
from dealer_api.middleware.request_id import RequestIDMiddleware, request_id_var
from dealer_api.routes import dealerships, health, reviews
from dealer_api.services.seed_service import initialize_database

logger = logging.getLogger(__name__)


# ══════════════════════════════════════════════════════════════════════════
# Logging Configuration
# ══════════════════════════════════════════════════════════════════════════

def setup_logging() -> None:
    """
    Configure logging for the entire application.

    Called once during startup, before any other initialization.
    Format: %(asctime)s [%(levelname)s] %(name)s: %(message)s
    """
    logging.basicConfig(
        level=getattr(logging, settings.log_level, logging.INFO),
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%Y-%m-%dT%H:%M:%S",
        handlers=[logging.StreamHandler(sys.stdout)],
        force=True,
    )

    # The access middleware already logs every request
    logging.getLogger("uvicorn.access").setLevel(logging.WARNING)
    logging.getLogger("pymongo").setLevel(logging.WARNING)


# ══════════════════════════════════════════════════════════════════════════
# Application Lifespan (Startup & Shutdown)
# ══════════════════════════════════════════════════════════════════════════

@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """
    Open the store, seed it, and close it again on shutdown.

    The client and database handles live on `app.state`; repositories get
    them through the `get_database` dependency.
    """
    # ── Startup ───────────────────────────────────────────────────────────
    setup_logging()
    logger.info("Dealerships API %s starting up...", __version__)

    try:
        client = await connect(settings)
    except DatabaseConnectionError as e:
        # Re-raised: uvicorn reports "Application startup failed" and exits
        logger.critical("Error connecting to MongoDB: %s", e.message)
        raise

    app.state.mongo_client = client
    app.state.database = client[settings.mongo_db_name]

    await initialize_database(app.state.database, settings)

    logger.info("Server ready at http://%s:%d", settings.backend_host, settings.backend_port)

    yield

    # ── Shutdown ──────────────────────────────────────────────────────────
    logger.info("Dealerships API shutting down...")
    await close_client(client)
    logger.info("Shutdown complete.")


# ══════════════════════════════════════════════════════════════════════════
# Exception Handlers
# ══════════════════════════════════════════════════════════════════════════

def _error(status_code: int, message: str) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"error": message})


def _describe_validation_error(exc: RequestValidationError) -> str:
    errors = exc.errors()
    if not errors:
        return "Invalid request"
    first = errors[0]
    location = ".".join(str(part) for part in first.get("loc", ()))
    return f"Invalid request: {location}: {first.get('msg', 'invalid value')}"


def register_exception_handlers(app: FastAPI) -> None:
    """
    Map exception types to HTTP status codes.

    Handlers NEVER expose driver errors or stack traces; the details are
    logged server-side with the request id.
    """

    @app.exception_handler(ValidationError)
    async def handle_validation_error(request: Request, exc: ValidationError):
        logger.warning("[%s] Validation error: %s", request_id_var.get(""), exc.message)
        return _error(400, exc.message)

    @app.exception_handler(RequestValidationError)
    async def handle_request_validation_error(request: Request, exc: RequestValidationError):
        message = _describe_validation_error(exc)
        logger.warning("[%s] %s", request_id_var.get(""), message)
        return _error(400, message)

    @app.exception_handler(NotFoundError)
    async def handle_not_found(request: Request, exc: NotFoundError):
        return _error(404, exc.message)

    @app.exception_handler(DatabaseError)
    async def handle_database_error(request: Request, exc: DatabaseError):
        # The message is a fixed per-route string; context holds the driver error
        logger.error(
            "[%s] Database error: %s | Context: %s",
            request_id_var.get(""),
            exc.message,
            exc.context,
        )
        return _error(500, exc.message)

    @app.exception_handler(StarletteHTTPException)
    async def handle_http_exception(request: Request, exc: StarletteHTTPException):
        # Unknown routes (404) and wrong methods (405) keep the same body shape
        return JSONResponse(
            status_code=exc.status_code,
            content={"error": str(exc.detail)},
            headers=getattr(exc, "headers", None),
        )

    @app.exception_handler(Exception)
    async def handle_unexpected_error(request: Request, exc: Exception):
        logger.error(
            "[%s] Unexpected error: %s",
            request_id_var.get(""),
            str(exc),
            exc_info=True,
        )
        return _error(500, "An unexpected error occurred")


# ══════════════════════════════════════════════════════════════════════════
# Application Factory
# ══════════════════════════════════════════════════════════════════════════

def create_app() -> FastAPI:
    """
    Create and configure the FastAPI application.

    Tests build fresh instances and override `get_database` instead of
    running the lifespan.
    """
    app = FastAPI(
        title="Dealerships API",
        description=(
            "Read dealerships and their reviews, and post new reviews. "
            "Backed by MongoDB and seeded from static JSON on startup."
        ),
        version=__version__,
        docs_url="/docs",
        redoc_url="/redoc",
        openapi_url="/openapi.json",
        lifespan=lifespan,
    )

    # ── Register Middleware ───────────────────────────────────────────────
    # Executes in reverse order of addition: RequestID → Logging → GZip → CORS
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins_list,
        allow_methods=["*"],
        allow_headers=["*"],
        expose_headers=["X-Request-ID"],
    )
    app.add_middleware(GZipMiddleware, minimum_size=500)
    app.add_middleware(RequestLoggingMiddleware)
    app.add_middleware(RequestIDMiddleware)

    register_exception_handlers(app)

    app.include_router(health.router)
    app.include_router(reviews.router)
    app.include_router(dealerships.router)

    return app


# uvicorn expects `dealer_api.main:app` to be importable
app = create_app()
