"""
User Records Service — FastAPI Application Factory
===================================================

What:  Creates and configures the FastAPI application instance.
How:   Factory pattern: create_app() returns a configured FastAPI instance.
Who:   Called by uvicorn (uvicorn userservice.main:app) or the `userservice`
       console script, which binds BACKEND_HOST:BACKEND_PORT.

Application Architecture:
    ┌─────────────────────────────────────────────────────┐
    │                   FastAPI App                       │
    │                                                     │
    │  Middleware Chain:                                  │
    │  ┌──────────┐ ┌─────────────────┐                   │
    │  │ Req ID   │→│  Logging        │                   │
    │  └──────────┘ └─────────────────┘                   │
    │                                                     │
    │  Routes:                                            │
    │  ┌──────────────────────────────┐ ┌──────────────┐  │
    │  │ POST/GET /users              │ │ GET /health  │  │
    │  │ GET/PUT/DELETE /users/{id}   │ └──────────────┘  │
    │  └──────────────────────────────┘                   │
    │                                                     │
    │  Exception Handlers (empty bodies):                 │
    │  ┌──────────────────────────────────────────────┐   │
    │  │ BAD_REQUEST→400 │ NOT_FOUND→404 │ SERVER→500 │   │
    │  └──────────────────────────────────────────────┘   │
    └─────────────────────────────────────────────────────┘

Lifecycle:
    Startup:
    1. Initialize logging
    2. Validate configuration (missing MONGO_DB aborts startup)
    3. Create the shared MongoDB client and database handle
    Shutdown:
    1. Close the client (all pooled connections)
"""

import logging
import sys
from contextlib import asynccontextmanager
from typing import AsyncGenerator

import uvicorn
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from starlette.responses import Response

from userservice import __version__
from userservice.config import settings
from userservice.database import close_client, create_client
from userservice.exceptions import ErrorKind, UserServiceError
from userservice.middleware.logging import RequestLoggingMiddleware
from userservice.middleware.request_id import RequestIDMiddleware, request_id_var
from userservice.routes import health, users

logger = logging.getLogger(__name__)


# ══════════════════════════════════════════════════════════════════════════
# Logging Configuration
# ══════════════════════════════════════════════════════════════════════════

def setup_logging() -> None:
    """
    Configure logging for the entire application.

    Format: %(asctime)s [%(levelname)s] %(name)s: %(message)s
    Called once during app startup, before anything else logs.
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
    logging.getLogger("httpx").setLevel(logging.WARNING)


# ══════════════════════════════════════════════════════════════════════════
# Application Lifespan (Startup & Shutdown)
# ══════════════════════════════════════════════════════════════════════════

@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """
    Manage application lifecycle: startup and shutdown procedures.

    Unlike optional settings, a missing connection string cannot be served
    around: the ValueError propagates and the server never starts.
    """
    # ── Startup ───────────────────────────────────────────────────────────
    setup_logging()
    logger.info("User records service starting up...")

    try:
        settings.validate_required()
    except ValueError as e:
        logger.critical("Configuration error: %s", str(e))
        raise

    client = create_client(settings.mongo_db)
    app.state.mongo_client = client
    app.state.database = client[settings.mongo_database]
    logger.info(
        "Using database '%s', collection '%s'",
        settings.mongo_database,
        settings.users_collection,
    )
    logger.info("Server ready at http://%s:%d", settings.backend_host, settings.backend_port)

    yield

    # ── Shutdown ──────────────────────────────────────────────────────────
    logger.info("User records service shutting down...")
    await close_client(client)
    logger.info("Shutdown complete.")


# ══════════════════════════════════════════════════════════════════════════
# Exception Handlers
# ══════════════════════════════════════════════════════════════════════════

def register_exception_handlers(app: FastAPI) -> None:
    """
    Register global exception handlers.

    Every failure becomes a status with an empty body; the status comes from
    the exception's ErrorKind (exceptions.STATUS_BY_KIND). Details are
    logged server-side only.
    """

    @app.exception_handler(UserServiceError)
    async def handle_service_error(request: Request, exc: UserServiceError):
        rid = request_id_var.get("")
        if exc.kind is ErrorKind.SERVER_ERROR:
            logger.error("[%s] %s | Context: %s", rid, exc.message, exc.context)
        else:
            logger.info("[%s] %s: %s", rid, exc.kind.value, exc.message)
        return Response(status_code=exc.status_code)

    @app.exception_handler(RequestValidationError)
    async def handle_request_validation(request: Request, exc: RequestValidationError):
        """Undecodable body (not a JSON object, wrong field types) → 400."""
        rid = request_id_var.get("")
        locations = [".".join(str(part) for part in err["loc"]) for err in exc.errors()]
        logger.info("[%s] Malformed request at %s", rid, locations)
        return Response(status_code=ErrorKind.BAD_REQUEST.status_code)

    @app.exception_handler(Exception)
    async def handle_unexpected_error(request: Request, exc: Exception):
        """Catch-all for truly unexpected errors; stack trace is logged only."""
        rid = request_id_var.get("")
        logger.error("[%s] Unexpected error: %s", rid, str(exc), exc_info=True)
        return Response(status_code=ErrorKind.SERVER_ERROR.status_code)


# ══════════════════════════════════════════════════════════════════════════
# Application Factory
# ══════════════════════════════════════════════════════════════════════════

def create_app() -> FastAPI:
    """
    Create and configure the FastAPI application.

    Returns: Fully configured FastAPI instance ready to receive requests.
    Tests build fresh instances and override get_database to swap the store.
    """
    app = FastAPI(
        title="User Records API",
        description="Create, read, update and delete user records stored in MongoDB.",
        version=__version__,
        lifespan=lifespan,
    )

    # Middleware executes in REVERSE order of addition:
    # RequestID runs first so the logging middleware sees the ID
    app.add_middleware(RequestLoggingMiddleware)
    app.add_middleware(RequestIDMiddleware)

    register_exception_handlers(app)

    app.include_router(users.router)
    app.include_router(health.router)

    return app


# uvicorn expects `userservice.main:app` to be importable
app = create_app()


def run() -> None:
    """Console entry point: serve the app on BACKEND_HOST:BACKEND_PORT."""
    uvicorn.run(
        "userservice.main:app",
        host=settings.backend_host,
        port=settings.backend_port,
        log_level=settings.log_level.lower(),
    )


if __name__ == "__main__":
    run()
