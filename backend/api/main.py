"""
Graph API Backend — FastAPI Application Factory
================================================

What:  Creates and configures the FastAPI application instance.
How:   `create_app()` returns a configured FastAPI instance; `main()` runs it
       under uvicorn on HOST:PORT.
Who:   uvicorn (`uvicorn api.main:app`), the `graph-api` console script, tests.

Application Architecture:
    ┌─────────────────────────────────────────────────────┐
    │                   FastAPI App                       │
    │                                                     │
    │  Middleware Chain:                                  │
    │  Req ID → Logging → Sec. headers → CORS → Errors    │
    │                                                     │
    │  Routes:                                            │
    │   GET /   GET /health   GET /db/status              │
    │   GET /api/users   GET /api/users/{id}              │
    │                                                     │
    │  Exception Handlers:                                │
    │   ValidationError→400 │ DatabaseError→500 │ *→500   │
    │                                                     │
    │  app.state.graph_db: GraphDatabase (one per app)    │
    └─────────────────────────────────────────────────────┘

Lifecycle:
    Startup:
    1. Configure logging
    2. Open the embedded database and run the liveness check
       (failure is logged as CRITICAL and aborts startup)
    3. Log the listening address

    Shutdown:
    1. Close the database connection
"""

import logging
import sys
from contextlib import asynccontextmanager
from typing import AsyncGenerator, Optional

import uvicorn
from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from api import __version__
from api.config import Settings, settings as default_settings
from api.exceptions import DatabaseError, ValidationError
from api.graph import GraphDatabase
from api.logger import setup_logging
from api.middleware.errors import ErrorHandlingMiddleware, server_error_response
from api.middleware.logging import RequestLoggingMiddleware
from api.middleware.request_id import RequestIDMiddleware, request_id_var
from api.middleware.security_headers import SecurityHeadersMiddleware
from api.routes import root, users

logger = logging.getLogger(__name__)


# ══════════════════════════════════════════════════════════════════════════
# Application Lifespan (Startup & Shutdown)
# ══════════════════════════════════════════════════════════════════════════

@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """
    Open the database before serving traffic and close it afterwards.

    A failing liveness check is re-raised after logging, which makes uvicorn
    abort startup and exit with a non-zero status.
    """
    settings: Settings = app.state.settings
    graph_db: GraphDatabase = app.state.graph_db

    setup_logging(settings)

    try:
        graph_db.ensure_schema()
    except Exception:
        logger.critical("Failed to start server", exc_info=True)
        raise

    logger.info("Server is running on port %d", settings.port)
    logger.info("Database connected at %s", graph_db.path)

    yield

    logger.info("Shutting down...")
    graph_db.close()
    logger.info("Shutdown complete.")


# ══════════════════════════════════════════════════════════════════════════
# Exception Handlers
# ══════════════════════════════════════════════════════════════════════════

def register_exception_handlers(app: FastAPI) -> None:
    """
    Map exception types to HTTP responses.

        ValidationError → 400 {"error": message}
        DatabaseError   → 500 {"message": "Internal Server Error"}
        Exception       → 500 {"message": "Internal Server Error"}

    500 bodies include `"error": str(exc)` only when NODE_ENV=development.
    Unexpected errors raised by route handlers are answered by
    ErrorHandlingMiddleware; the `Exception` handler covers failures in the
    middleware chain itself.
    """

    @app.exception_handler(ValidationError)
    async def handle_validation_error(request: Request, exc: ValidationError):
        logger.warning("[%s] Validation error: %s", request_id_var.get(""), exc.message)
        return JSONResponse(status_code=400, content={"error": exc.message})

    @app.exception_handler(DatabaseError)
    async def handle_database_error(request: Request, exc: DatabaseError):
        return server_error_response(request, exc, "Database error")

    @app.exception_handler(Exception)
    async def handle_unexpected_error(request: Request, exc: Exception):
        return server_error_response(request, exc, "Internal server error")


# ══════════════════════════════════════════════════════════════════════════
# Application Factory
# ══════════════════════════════════════════════════════════════════════════

def create_app(
    settings: Optional[Settings] = None,
    graph_db: Optional[GraphDatabase] = None,
) -> FastAPI:
    """
    Create and configure the FastAPI application.

    Args:
        settings:  Configuration; defaults to the environment-derived
                   module-level settings.
        graph_db:  Database owner; defaults to a new `GraphDatabase` at
                   `settings.kuzu_db_path`. Nothing is opened here.
    """
    settings = settings or default_settings

    app = FastAPI(
        title="Graph API",
        description="HTTP API scaffold backed by an embedded KuzuDB graph database.",
        version=__version__,
        lifespan=lifespan,
    )
    app.state.settings = settings
    app.state.graph_db = graph_db or GraphDatabase(settings.database_path)

    # ── Register Middleware ───────────────────────────────────────────────
    # Last added runs first: RequestID → Logging → SecurityHeaders → CORS → Errors.
    app.add_middleware(ErrorHandlingMiddleware)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins_list,
        allow_methods=["*"],
        allow_headers=["*"],
        expose_headers=["X-Request-ID"],
    )
    app.add_middleware(SecurityHeadersMiddleware)
    app.add_middleware(RequestLoggingMiddleware)
    app.add_middleware(RequestIDMiddleware)

    # ── Register Exception Handlers ───────────────────────────────────────
    register_exception_handlers(app)

    # ── Register Routes ───────────────────────────────────────────────────
    app.include_router(root.router)
    app.include_router(users.router)

    return app


app = create_app()


def main() -> None:
    """Console entry point: serve `app` with uvicorn on HOST:PORT."""
    setup_logging(default_settings)
    try:
        uvicorn.run(
            app,
            host=default_settings.host,
            port=default_settings.port,
            log_level=default_settings.log_level.lower(),
            log_config=None,
        )
    except Exception:
        logger.critical("Failed to start server", exc_info=True)
        sys.exit(1)


if __name__ == "__main__":
    main()
