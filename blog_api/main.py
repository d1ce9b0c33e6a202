"""
Blog API — FastAPI Application Factory
========================================

What:  Creates and configures the FastAPI application instance.
How:   Factory pattern: create_app() returns a configured FastAPI instance bound
       to one MongoDB connection string.
Who:   uvicorn (`uvicorn blog_api.main:app`), `python -m blog_api`, and tests.

Lifecycle:
    Startup:
    1. Initialize logging
    2. Open the MongoDB client and ping it (failure aborts startup)
    3. Store client and database handle on app.state

    Shutdown:
    1. Close the MongoDB client
"""

import logging
import sys
from contextlib import asynccontextmanager
from typing import Any, AsyncGenerator, Dict, Optional

from fastapi import FastAPI, Request
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.middleware.gzip import GZipMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from blog_api import __version__
from blog_api.config import settings
from blog_api.database import close_client, connect
from blog_api.exceptions import (
    BadRequestError,
    BlogAPIError,
    NotFoundError,
    StoreError,
)
from blog_api.middleware.logging import RequestLoggingMiddleware
from blog_api.middleware.request_id import (
    REQUEST_ID_HEADER,
    RequestIDMiddleware,
    request_id_var,
)
from blog_api.routes import health, posts

logger = logging.getLogger(__name__)


# ══════════════════════════════════════════════════════════════════════════
# Logging Configuration
# ══════════════════════════════════════════════════════════════════════════

def setup_logging() -> None:
    """
    Configure logging for the entire application.

    Format: 2024-01-15T12:00:00 [INFO] blog_api.access: GET /posts 200 3.1ms [1f2e3d4c] ...
    """
    logging.basicConfig(
        level=getattr(logging, settings.log_level, logging.INFO),
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%Y-%m-%dT%H:%M:%S",
        handlers=[logging.StreamHandler(sys.stdout)],
        force=True,
    )

    # Our access middleware replaces uvicorn's; the driver logs every heartbeat at DEBUG
    logging.getLogger("uvicorn.access").setLevel(logging.WARNING)
    logging.getLogger("pymongo").setLevel(logging.WARNING)


# ══════════════════════════════════════════════════════════════════════════
# Application Lifespan (Startup & Shutdown)
# ══════════════════════════════════════════════════════════════════════════

@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """
    Open the store connection on startup and close it on shutdown.

    A StoreError raised by connect() propagates out of the lifespan, so the
    server refuses to start without a reachable database.
    """
    setup_logging()
    logger.info("Blog API %s starting up...", __version__)

    try:
        client, db = await connect(app.state.database_url)
    except StoreError as e:
        logger.critical("Startup aborted: %s | Context: %s", e.message, e.context)
        raise

    app.state.mongo_client = client
    app.state.database = db
    logger.info("Server ready on port %d", settings.port)

    try:
        yield
    finally:
        logger.info("Blog API shutting down...")
        app.state.database = None
        await close_client(app.state.mongo_client)
        app.state.mongo_client = None
        logger.info("Shutdown complete.")


# ══════════════════════════════════════════════════════════════════════════
# Exception Handlers
# ══════════════════════════════════════════════════════════════════════════

def _request_id(request: Request) -> str:
    # request.state outlives the ContextVar, which is reset once the
    # request-id middleware unwinds (before the outermost 500 handler runs)
    return getattr(request.state, "request_id", "") or request_id_var.get("")


def _error_response(
    request: Request,
    status_code: int,
    error: str,
    message: str,
    details: Optional[Any] = None,
    headers: Optional[Dict[str, str]] = None,
) -> JSONResponse:
    rid = _request_id(request)
    content: Dict[str, Any] = {"error": error, "message": message, "request_id": rid}
    if details is not None:
        content["details"] = details
    response_headers = dict(headers or {})
    if rid:
        response_headers[REQUEST_ID_HEADER] = rid
    return JSONResponse(status_code=status_code, content=content, headers=response_headers)


def register_exception_handlers(app: FastAPI) -> None:
    """
    Map exception types to HTTP status codes and the shared error body.

    Handler hierarchy:
        BadRequestError        → 400
        NotFoundError          → 404
        RequestValidationError → 422 (malformed or missing JSON body)
        StoreError             → 500 (generic message, details logged)
        BlogAPIError (base)    → 500
        Starlette HTTPException→ its own status (unknown routes → 404)
        Exception (fallback)   → 500
    """

    @app.exception_handler(BadRequestError)
    async def handle_bad_request(request: Request, exc: BadRequestError):
        logger.warning("[%s] Bad request: %s", _request_id(request), exc.message)
        return _error_response(request, 400, "bad_request", exc.message)

    @app.exception_handler(NotFoundError)
    async def handle_not_found(request: Request, exc: NotFoundError):
        return _error_response(request, 404, "not_found", exc.message)

    @app.exception_handler(RequestValidationError)
    async def handle_validation_error(request: Request, exc: RequestValidationError):
        logger.warning("[%s] Invalid request body: %s", _request_id(request), exc.errors())
        return _error_response(
            request,
            422,
            "validation_error",
            "Request body is missing or malformed",
            details=jsonable_encoder(exc.errors()),
        )

    @app.exception_handler(StoreError)
    async def handle_store_error(request: Request, exc: StoreError):
        # Driver details stay in the log, never in the response
        logger.error(
            "[%s] Store error: %s | Context: %s", _request_id(request), exc.message, exc.context
        )
        return _error_response(request, 500, "server_error", "Internal server error")

    @app.exception_handler(BlogAPIError)
    async def handle_app_error(request: Request, exc: BlogAPIError):
        logger.error("[%s] Application error: %s", _request_id(request), exc.message)
        return _error_response(request, 500, "server_error", "Internal server error")

    @app.exception_handler(StarletteHTTPException)
    async def handle_http_exception(request: Request, exc: StarletteHTTPException):
        error = "not_found" if exc.status_code == 404 else "http_error"
        return _error_response(
            request,
            exc.status_code,
            error,
            str(exc.detail),
            headers=getattr(exc, "headers", None),
        )

    @app.exception_handler(Exception)
    async def handle_unexpected_error(request: Request, exc: Exception):
        logger.error("[%s] Unexpected error: %s", _request_id(request), str(exc), exc_info=True)
        return _error_response(
            request, 500, "internal_server_error", "Internal server error"
        )


# ══════════════════════════════════════════════════════════════════════════
# Application Factory
# ══════════════════════════════════════════════════════════════════════════

def create_app(database_url: Optional[str] = None) -> FastAPI:
    """
    Create and configure the FastAPI application.

    Args:
        database_url: MongoDB connection string; defaults to settings.database_url.
                      The integration suite passes settings.test_database_url.
    """
    app = FastAPI(
        title="Blog API",
        description="CRUD REST service for blog posts stored in MongoDB.",
        version=__version__,
        lifespan=lifespan,
    )
    app.state.database_url = database_url or settings.database_url
    app.state.mongo_client = None
    app.state.database = None

    # Middleware executes in REVERSE order of addition
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

    app.include_router(posts.router)
    app.include_router(health.router)

    return app


app = create_app()
