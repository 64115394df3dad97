"""
DocRelay Backend — MongoDB Connection Management
=================================================

What:  The RecordStore connection handle and its FastAPI dependency.
Why:   Centralizes all database connection logic in one place.
How:   Wraps a single pymongo AsyncMongoClient. The client owns its own
       connection pool, so one instance is shared by every request.
Who:   Created by the lifespan handler in main.py; injected into route
       handlers via FastAPI's dependency injection system.
When:  Connected once at startup, closed once at shutdown.

Lifecycle:
    startup   → RecordStore.connect()    (client built + ping)
    requests  → RecordStore.collection() (no reconnect per request)
    shutdown  → RecordStore.close()

    If startup connect fails the server still starts; the client is built
    lazily on the next data request and the driver reconnects on its own
    once the server is reachable.
"""

import asyncio
import logging
from typing import Optional

from fastapi import Request
from pymongo import AsyncMongoClient
from pymongo.asynchronous.collection import AsyncCollection
from pymongo.errors import PyMongoError

from docrelay.config import Settings, settings as default_settings
from docrelay.exceptions import StorageConnectionError

logger = logging.getLogger(__name__)


class RecordStore:
    """
    Connection handle to the configured MongoDB database.

    Only client construction is serialized (asyncio.Lock); operations run
    concurrently on the driver's pool.
    """

    def __init__(self, config: Optional[Settings] = None):
        self._settings = config or default_settings
        self._client: Optional[AsyncMongoClient] = None
        self._lock = asyncio.Lock()

    @property
    def is_connected(self) -> bool:
        return self._client is not None

    async def ensure_client(self) -> AsyncMongoClient:
        """
        Build the AsyncMongoClient if it does not exist yet.

        Raises:
            StorageConnectionError: the URI or client options are invalid.
        """
        if self._client is not None:
            return self._client

        async with self._lock:
            # Another coroutine may have built it while we waited
            if self._client is None:
                try:
                    self._client = AsyncMongoClient(
                        self._settings.mongo_uri,
                        serverSelectionTimeoutMS=self._settings.mongo_server_selection_timeout_ms,
                        connectTimeoutMS=self._settings.mongo_connect_timeout_ms,
                    )
                except PyMongoError as e:
                    raise StorageConnectionError(
                        message=str(e),
                        context={"uri": self._settings.mongo_uri_redacted},
                    ) from e
                logger.debug("MongoDB client created for %s", self._settings.mongo_uri_redacted)
        return self._client

    async def connect(self) -> None:
        """
        Create the client (once) and verify the server answers a ping.

        Idempotent: calling it again reuses the existing client and only
        repeats the ping.

        Raises:
            StorageConnectionError: invalid URI, unreachable host or
                rejected credentials.
        """
        client = await self.ensure_client()
        try:
            await client.admin.command("ping")
        except PyMongoError as e:
            raise StorageConnectionError(
                message=str(e),
                context={"uri": self._settings.mongo_uri_redacted},
            ) from e
        logger.info("Connected to MongoDB at %s", self._settings.mongo_uri_redacted)

    async def collection(self, name: Optional[str] = None) -> AsyncCollection:
        """Return a handle on `name` (default: the configured collection)."""
        client = await self.ensure_client()
        return client[self._settings.mongo_db][name or self._settings.mongo_collection]

    async def ping(self) -> bool:
        """Lightweight reachability check used by the health route."""
        try:
            client = await self.ensure_client()
            await client.admin.command("ping")
        except (StorageConnectionError, PyMongoError) as e:
            logger.warning("MongoDB ping failed: %s", e)
            return False
        return True

    async def close(self) -> None:
        """Close the client and its pool. Safe to call more than once."""
        client, self._client = self._client, None
        if client is not None:
            await client.close()
            logger.info("MongoDB client closed")


# ── Dependency ────────────────────────────────────────────────────────────
def get_record_store(request: Request) -> RecordStore:
    """
    FastAPI dependency returning the process-wide RecordStore.

    Example usage in a route:
        @router.get("/read")
        async def read(store: RecordStore = Depends(get_record_store)):
            ...
    """
    return request.app.state.record_store
