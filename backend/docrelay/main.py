"""
DocRelay Backend — FastAPI Application Factory
===============================================

What:  Creates and configures the FastAPI application instance.
How:   Factory pattern: create_app() returns a configured FastAPI instance.
Who:   Called by uvicorn (docrelay.main:app) or `python -m docrelay`.

Application Architecture:
    ┌─────────────────────────────────────────────────────┐
    │                   FastAPI App                       │
    │                                                     │
    │  Middleware Chain:  Request ID → Logging            │
    │                                                     │
    │  Routes:                                            │
    │    GET /  GET /test  GET|POST /create  GET /read    │
    │    GET /health                                      │
    │                                                     │
    │  Exception Handlers:                                │
    │    StorageOperationError → 500 "<action> failed: …" │
    │    Exception             → 500                      │
    └─────────────────────────────────────────────────────┘

Lifecycle:
    Startup:
    1. Initialize logging
    2. Validate MONGO_* configuration (logged, not fatal)
    3. Connect the shared RecordStore (logged, not fatal)

    Shutdown:
    1. Close the MongoDB client
"""

import logging
import sys
from contextlib import asynccontextmanager
from typing import AsyncGenerator, Optional

from fastapi import FastAPI, Request
from fastapi.responses import PlainTextResponse

from docrelay import __version__
from docrelay.config import settings
from docrelay.database import RecordStore
from docrelay.exceptions import StorageConnectionError, StorageOperationError
from docrelay.middleware.logging import RequestLoggingMiddleware
from docrelay.middleware.request_id import RequestIDMiddleware, request_id_var
from docrelay.routes import health, records

logger = logging.getLogger(__name__)


# ══════════════════════════════════════════════════════════════════════════
# Logging Configuration
# ══════════════════════════════════════════════════════════════════════════

def setup_logging() -> None:
    """
    Configure logging for the entire application.

    Format: %(asctime)s [%(levelname)s] %(name)s: %(message)s
    Output: stdout (container runtimes capture it)
    """
    logging.basicConfig(
        level=getattr(logging, settings.log_level, logging.INFO),
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%Y-%m-%dT%H:%M:%S",
        handlers=[logging.StreamHandler(sys.stdout)],
        force=True,
    )

    # Reduce noise from third-party libraries
    logging.getLogger("uvicorn.access").setLevel(logging.WARNING)
    logging.getLogger("pymongo").setLevel(logging.WARNING)


# ══════════════════════════════════════════════════════════════════════════
# Application Lifespan (Startup & Shutdown)
# ══════════════════════════════════════════════════════════════════════════

@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """
    Connect the shared RecordStore on startup and close it on shutdown.

    A failed connect does not stop the server: `/` and `/health` keep
    answering, and the data routes report the storage error as a 500.
    """
    # ── Startup ───────────────────────────────────────────────────────────
    setup_logging()
    logger.info("DocRelay Backend %s starting up...", __version__)

    try:
        settings.validate_required()
    except ValueError as e:
        logger.error("Configuration error: %s", str(e))

    store: RecordStore = app.state.record_store
    try:
        await store.connect()
    except StorageConnectionError as e:
        logger.error(
            "MongoDB connection failed: %s | Context: %s", e.message, e.context
        )

    logger.info("Listening on http://%s:%d", settings.backend_host, settings.backend_port)

    yield

    # ── Shutdown ──────────────────────────────────────────────────────────
    logger.info("DocRelay Backend shutting down...")
    await store.close()
    logger.info("Shutdown complete.")


# ══════════════════════════════════════════════════════════════════════════
# Exception Handlers
# ══════════════════════════════════════════════════════════════════════════

def register_exception_handlers(app: FastAPI) -> None:
    """
    Map application exceptions to HTTP responses.

        StorageOperationError → 500 text/plain "<action> failed: <message>"
        Exception (fallback)  → 500 text/plain
    """

    @app.exception_handler(StorageOperationError)
    async def handle_storage_error(request: Request, exc: StorageOperationError):
        rid = request_id_var.get("")
        logger.error("[%s] %s | Context: %s", rid, exc.response_text, exc.context)
        return PlainTextResponse(exc.response_text, status_code=500)

    @app.exception_handler(Exception)
    async def handle_unexpected_error(request: Request, exc: Exception):
        rid = request_id_var.get("")
        logger.error("[%s] Unexpected error: %s", rid, str(exc), exc_info=True)
        return PlainTextResponse("Internal Server Error", status_code=500)


# ══════════════════════════════════════════════════════════════════════════
# Application Factory
# ══════════════════════════════════════════════════════════════════════════

def create_app(record_store: Optional[RecordStore] = None) -> FastAPI:
    """
    Create and configure the FastAPI application.

    Args:
        record_store: Storage handle to inject. Defaults to a RecordStore
                      built from the global settings; tests pass a fake.
    """
    app = FastAPI(
        title="DocRelay API",
        description="Thin HTTP relay in front of a MongoDB collection.",
        version=__version__,
        lifespan=lifespan,
    )
    app.state.record_store = record_store if record_store is not None else RecordStore(settings)

    # Last added runs first: RequestID → Logging → route
    app.add_middleware(RequestLoggingMiddleware)
    app.add_middleware(RequestIDMiddleware)

    register_exception_handlers(app)

    app.include_router(records.router)
    app.include_router(health.router)

    return app


# uvicorn expects `docrelay.main:app` to be importable
app = create_app()
