"""
Blog API — Document Store Connection Management
=================================================

What:  MongoDB client creation, startup ping, FastAPI dependency, and shutdown.
Why:   Centralizes all connection logic in one place.
How:   One AsyncMongoClient is opened when the application starts and stored on
       `app.state`. Route handlers receive the database handle through the
       `get_database` dependency instead of importing a module-level global,
       so tests can swap it with `app.dependency_overrides`.
When:  Client is created in the lifespan handler; handles are resolved per-request.

Connection Strategy:
    The driver pools connections internally, so a single client serves all
    concurrent requests. A `ping` at startup turns an unreachable server into
    an immediate startup failure instead of a 500 on the first request.
"""

import logging
from typing import Optional, Tuple

from fastapi import Request
from pymongo import AsyncMongoClient
from pymongo.asynchronous.database import AsyncDatabase
from pymongo.errors import ConfigurationError, PyMongoError

from blog_api.config import settings
from blog_api.exceptions import StoreError

logger = logging.getLogger(__name__)

# Collection name follows the pluralized model name
POSTS_COLLECTION = "blogposts"


def create_client(database_url: str, timeout_ms: Optional[int] = None) -> AsyncMongoClient:
    """
    Build an AsyncMongoClient for the given connection string.

    The client connects lazily; nothing touches the network until the first
    command (see `connect`).
    """
    return AsyncMongoClient(
        database_url,
        serverSelectionTimeoutMS=timeout_ms or settings.mongo_server_selection_timeout_ms,
    )


def default_database(client: AsyncMongoClient) -> AsyncDatabase:
    """Database named in the connection URL, or `settings.database_name`."""
    return client.get_default_database(default=settings.database_name)


async def connect(
    database_url: str, timeout_ms: Optional[int] = None
) -> Tuple[AsyncMongoClient, AsyncDatabase]:
    """
    Open a client and verify the server answers.

    Returns:
        (client, database). The caller owns the client and must close it.

    Raises:
        StoreError: The URL is malformed or the server did not answer the ping.
    """
    try:
        client = create_client(database_url, timeout_ms)
    except (ConfigurationError, ValueError) as e:
        raise StoreError(
            message="Invalid database configuration",
            context={"error_type": type(e).__name__, "detail": str(e)},
        ) from e

    db = default_database(client)
    try:
        await client.admin.command("ping")
    except PyMongoError as e:
        await client.close()
        raise StoreError(
            message="Could not connect to the database",
            context={"error_type": type(e).__name__, "detail": str(e)},
        ) from e

    logger.info("Connected to MongoDB database '%s'", db.name)
    return client, db


async def ping(db: AsyncDatabase) -> bool:
    """Lightweight liveness check used by GET /health."""
    try:
        await db.command("ping")
        return True
    except PyMongoError as e:
        logger.warning("Database ping failed: %s", str(e))
        return False


async def close_client(client: Optional[AsyncMongoClient]) -> None:
    """Closes all pooled connections; safe to call with None."""
    if client is not None:
        await client.close()
        logger.info("MongoDB client closed")


# ── Request Dependency ────────────────────────────────────────────────────
def get_database(request: Request) -> AsyncDatabase:
    """
    FastAPI dependency that provides the database handle for a request.

    Raises:
        StoreError: The application has no live connection (startup did not run
        or the client was already closed).
    """
    db = getattr(request.app.state, "database", None)
    if db is None:
        raise StoreError(
            message="Database connection is not available",
            context={"reason": "no database on app.state"},
        )
    return db
