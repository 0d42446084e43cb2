"""
Trainer API Backend: FastAPI Application Factory
=================================================

What:  Creates and configures the FastAPI application instance.
Why:   Centralizes logging setup, lifecycle, middleware, exception handlers
       and route mounting in one place.
How:   Factory pattern: create_app() returns a configured FastAPI instance.
Who:   Run by uvicorn (`uvicorn app.main:app` or `python -m app`).

Application Architecture:
    ┌─────────────────────────────────────────────────────┐
    │                   FastAPI App                       │
    │                                                     │
    │  Middleware:   Request ID → Logging → GZip → CORS   │
    │                                                     │
    │  Routes:       GET /trainers   GET /trainer/{name}  │
    │                POST /trainer   DELETE /trainers     │
    │                GET /health                          │
    │                                                     │
    │  Exceptions:   binding→400  not found→400  DB→502   │
    └─────────────────────────────────────────────────────┘

Lifecycle:
    Startup (any failure aborts the process):
    1. Initialize logging
    2. Load the credential file
    3. Connect to MongoDB and ping
    4. Build the TrainerRepository on app.state

    Shutdown:
    1. Close the MongoDB client
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

from app import __version__
from app.config import load_credential, settings
from app.database import close_mongo, connect_to_mongo, get_trainer_collection
from app.exceptions import (
    DatabaseError,
    NotFoundError,
    TrainerAPIError,
    ValidationError,
)
from app.middleware.logging import RequestLoggingMiddleware
from app.middleware.request_id import RequestIDMiddleware, request_id_var
from app.repositories.trainer_repository import TrainerRepository
from app.routes import health, trainers

logger = logging.getLogger(__name__)


# ══════════════════════════════════════════════════════════════════════════
# Logging Configuration
# ══════════════════════════════════════════════════════════════════════════

def setup_logging() -> None:
    """
    Configure logging for the entire application.

    Format: %(asctime)s [%(levelname)s] %(name)s: %(message)s
    Called once at the start of the lifespan, before anything logs.
    """
    logging.basicConfig(
        level=getattr(logging, settings.log_level, logging.INFO),
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%Y-%m-%dT%H:%M:%S",
        handlers=[
            logging.StreamHandler(sys.stdout),  # Docker captures stdout
        ],
        force=True,
    )

    # Our access middleware replaces uvicorn's access log
    logging.getLogger("uvicorn.access").setLevel(logging.WARNING)
    logging.getLogger("pymongo").setLevel(logging.WARNING)


# ══════════════════════════════════════════════════════════════════════════
# Application Lifespan (Startup & Shutdown)
# ══════════════════════════════════════════════════════════════════════════

@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """
    Connect to MongoDB on startup and disconnect on shutdown.

    Startup errors are logged and re-raised. Uvicorn then reports
    "Application startup failed" and exits: there is no degraded mode
    without a database.
    """
    # ── Startup ───────────────────────────────────────────────────────────
    setup_logging()
    logger.info("Trainer API starting up...")

    try:
        credential = await load_credential(settings.credentials_file)
        client = await connect_to_mongo(credential, settings.mongo_scheme)
    except TrainerAPIError as e:
        logger.critical("Startup failed: %s", e.message)
        raise

    collection = get_trainer_collection(
        client, settings.mongo_database, settings.mongo_collection
    )
    app.state.trainer_repository = TrainerRepository(collection)
    logger.info(
        "Serving collection %s.%s", settings.mongo_database, settings.mongo_collection
    )

    yield

    # ── Shutdown ──────────────────────────────────────────────────────────
    logger.info("Trainer API shutting down...")
    app.state.trainer_repository = None
    await close_mongo(client)
    logger.info("Shutdown complete.")


# ══════════════════════════════════════════════════════════════════════════
# Exception Handlers
# ══════════════════════════════════════════════════════════════════════════

def _envelope(status_code: int, message: str) -> JSONResponse:
    """Error body shared by every handler: {"code": <status>, "message": <text>}."""
    return JSONResponse(
        status_code=status_code,
        content={"code": status_code, "message": message},
    )


def register_exception_handlers(app: FastAPI) -> None:
    """
    Register global exception handlers for consistent error envelopes.

    Handler table:
        RequestValidationError → 400 "binding json error"
        ValidationError        → 400
        NotFoundError          → 400
        DatabaseError          → 502 "[MongoBD] <driver message>"
        TrainerAPIError (base) → 500
        Exception (fallback)   → 500, stack trace logged server-side only
    """

    @app.exception_handler(RequestValidationError)
    async def handle_binding_error(request: Request, exc: RequestValidationError):
        """Body could not be bound to a Trainer; no field-level detail is returned."""
        rid = request_id_var.get("")
        logger.warning("[%s] Binding error on %s: %d error(s)", rid, request.url.path, len(exc.errors()))
        return _envelope(400, ValidationError().message)

    @app.exception_handler(ValidationError)
    async def handle_validation_error(request: Request, exc: ValidationError):
        rid = request_id_var.get("")
        logger.warning("[%s] Validation error: %s", rid, exc.message)
        return _envelope(400, exc.message)

    @app.exception_handler(NotFoundError)
    async def handle_not_found(request: Request, exc: NotFoundError):
        rid = request_id_var.get("")
        logger.info("[%s] No %s named %r", rid, exc.resource, exc.key)
        return _envelope(400, exc.message)

    @app.exception_handler(DatabaseError)
    async def handle_database_error(request: Request, exc: DatabaseError):
        """MongoDB failed: the driver message goes to the client, context to the log."""
        rid = request_id_var.get("")
        logger.error("[%s] Database error: %s | Context: %s", rid, exc.message, exc.context)
        return _envelope(502, exc.message)

    @app.exception_handler(TrainerAPIError)
    async def handle_app_error(request: Request, exc: TrainerAPIError):
        rid = request_id_var.get("")
        logger.error("[%s] Application error: %s | Context: %s", rid, exc.message, exc.context)
        return _envelope(500, exc.message)

    @app.exception_handler(Exception)
    async def handle_unexpected_error(request: Request, exc: Exception):
        """Catch-all: generic message to the client, full stack trace to the log."""
        rid = request_id_var.get("")
        logger.error("[%s] Unexpected error: %s", rid, str(exc), exc_info=True)
        return _envelope(500, "An unexpected error occurred")


# ══════════════════════════════════════════════════════════════════════════
# Application Factory
# ══════════════════════════════════════════════════════════════════════════

def create_app() -> FastAPI:
    """
    Create and configure the FastAPI application.

    No I/O happens here: the database connection is opened by the lifespan,
    so importing the module (as the tests do) is side-effect free.
    """
    app = FastAPI(
        title="Pokémon Trainer API",
        description="CRUD service for Pokémon trainers stored in MongoDB.",
        version=__version__,
        docs_url="/docs",
        redoc_url="/redoc",
        openapi_url="/openapi.json",
        lifespan=lifespan,
    )
    app.state.trainer_repository = None

    # Middleware executes in REVERSE order of addition:
    # RequestID → Logging → GZip → CORS
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins_list,
        allow_methods=["GET", "POST", "DELETE"],
        allow_headers=["*"],
        expose_headers=["X-Request-ID"],
    )
    app.add_middleware(GZipMiddleware, minimum_size=500)
    app.add_middleware(RequestLoggingMiddleware)
    app.add_middleware(RequestIDMiddleware)

    register_exception_handlers(app)

    app.include_router(trainers.router)
    app.include_router(health.router)

    return app


# uvicorn expects `app.main:app` to be importable
app = create_app()
