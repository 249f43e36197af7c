"""
Dealerships API — Document Store Connection Management
========================================================

What:  Async MongoDB client lifecycle and FastAPI dependencies.
Why:   Centralizes all connection logic in one place; the client is a
       process-scoped resource rather than ambient global state.
How:   `connect()` creates an AsyncMongoClient and pings the server (fail
       fast); the lifespan stores the client on `app.state`, and
       `get_database()` hands the database to route dependencies.
Who:   Used by main.py (lifespan) and by repository dependencies.
When:  Client is created once at startup and closed at shutdown.

Connection Strategy:
    The client keeps its own connection pool and is safe to share between
    concurrent requests, so one client serves the whole process.
    serverSelectionTimeoutMS bounds how long a request (or the startup ping)
    waits for a reachable server before raising.
"""

import logging

from fastapi import Request
from pymongo import AsyncMongoClient
from pymongo.asynchronous.database import AsyncDatabase
from pymongo.errors import PyMongoError

from dealer_api.config import Settings, settings
from dealer_api.exceptions import DatabaseConnectionError

logger = logging.getLogger(__name__)


def create_client(config: Settings = settings) -> AsyncMongoClient:
    """Build a client from settings. No network I/O happens here."""
    return AsyncMongoClient(
        config.mongo_uri,
        serverSelectionTimeoutMS=config.mongo_server_selection_timeout_ms,
    )


async def connect(config: Settings = settings) -> AsyncMongoClient:
    """
    Create a client and verify the server is reachable.

    Why ping: AsyncMongoClient connects lazily, so without it an unreachable
    store would only surface on the first request.

    Raises:
        DatabaseConnectionError: the ping failed; the client is closed first.
    """
    client = create_client(config)
    try:
        await client.admin.command("ping")
    except PyMongoError as e:
        await client.close()
        raise DatabaseConnectionError(
            message=f"Could not connect to MongoDB: {e}",
            context={"error_type": type(e).__name__},
        ) from e

    logger.info("Connected to MongoDB (database=%s)", config.mongo_db_name)
    return client


async def ping(database: AsyncDatabase) -> bool:
    """Lightweight reachability check used by the health route."""
    try:
        await database.command("ping")
        return True
    except PyMongoError as e:
        logger.warning("MongoDB ping failed: %s", str(e))
        return False


async def close_client(client: AsyncMongoClient) -> None:
    """Close all pooled connections. Called during application shutdown."""
    await client.close()


# ── Dependencies ──────────────────────────────────────────────────────────
def get_database(request: Request) -> AsyncDatabase:
    """
    FastAPI dependency returning the database opened by the lifespan.

    Tests override this dependency to inject an in-memory double.
    """
    return request.app.state.database
