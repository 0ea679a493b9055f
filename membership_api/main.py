"""
Membership API - FastAPI Application Factory
============================================

What:  Creates and configures the FastAPI application instance.
How:   create_app() returns a configured FastAPI instance; the module-level
       `app` is what uvicorn serves (uvicorn membership_api.main:app).

Application Architecture:
    ┌─────────────────────────────────────────────────────┐
    │                   FastAPI App                       │
    │                                                     │
    │  Middleware Chain:                                  │
    │  ┌──────────────┐ ┌──────────┐ ┌──────┐ ┌────────┐  │
    │  │  Req ID      │→│ Logging  │→│ GZip │→│ CORS   │  │
    │  └──────────────┘ └──────────┘ └──────┘ └────────┘  │
    │                                                     │
    │  Routes:                                            │
    │  ┌──────────────┐ ┌──────────┐ ┌─────────────────┐  │
    │  │ /members     │ │ /courses │ │ GET / , /health │  │
    │  └──────────────┘ └──────────┘ └─────────────────┘  │
    │                                                     │
    │  Exception Handlers:                                │
    │  ┌──────────────────────────────────────────────┐   │
    │  │ Validation→400 │ NotFound→404 │ Database→500 │   │
    │  └──────────────────────────────────────────────┘   │
    └─────────────────────────────────────────────────────┘

Lifecycle:
    Startup:
    1. Initialize logging
    2. Validate configuration (problems are logged, not fatal)
    3. Build the engine and session factory, store them on app.state
    4. Create missing tables when DB_CREATE_TABLES is set

    Shutdown:
    1. Dispose the engine (close all pooled connections)
"""

import logging
import sys
from contextlib import asynccontextmanager
from typing import AsyncGenerator, Optional

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.middleware.gzip import GZipMiddleware
from fastapi.responses import JSONResponse

from membership_api import __version__
from membership_api.config import Settings, settings
from membership_api.database import (
    create_engine,
    create_session_factory,
    create_tables,
    dispose_engine,
)
from membership_api.exceptions import (
    DatabaseError,
    MembershipAPIError,
    NotFoundError,
    ValidationError,
)
from membership_api.middleware.logging import RequestLoggingMiddleware
from membership_api.middleware.request_id import RequestIDMiddleware, request_id_var
from membership_api.routes import courses, health, members

logger = logging.getLogger(__name__)


# ══════════════════════════════════════════════════════════════════════════
# Logging Configuration
# ══════════════════════════════════════════════════════════════════════════

def setup_logging(level: str = "INFO") -> None:
    """
    Configure the root logger once at startup.

    Format: 2024-06-27T10:15:02 [INFO] membership_api.repositories.base: Getting member ...
    """
    logging.basicConfig(
        level=getattr(logging, level, logging.INFO),
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%Y-%m-%dT%H:%M:%S",
        handlers=[logging.StreamHandler(sys.stdout)],
        force=True,
    )

    # Our own access log replaces uvicorn's
    logging.getLogger("uvicorn.access").setLevel(logging.WARNING)
    logging.getLogger("sqlalchemy.engine").setLevel(logging.WARNING)


# ══════════════════════════════════════════════════════════════════════════
# Application Lifespan (Startup & Shutdown)
# ══════════════════════════════════════════════════════════════════════════

@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """
    Build the store handle on startup and release it on shutdown.

    An engine already present on app.state (tests) is used as-is and left
    open on shutdown.
    """
    app_settings: Settings = app.state.settings

    # ── Startup ───────────────────────────────────────────────────────────
    setup_logging(app_settings.log_level)
    logger.info("Membership API %s starting up...", __version__)

    try:
        app_settings.validate_required_for_production()
    except ValueError as e:
        logger.warning("Configuration warning: %s", str(e))

    owns_engine = getattr(app.state, "engine", None) is None
    if owns_engine:
        app.state.engine = create_engine(app_settings)
        app.state.session_factory = create_session_factory(app.state.engine)

    if app_settings.db_create_tables:
        await create_tables(app.state.engine)

    logger.info("Server ready at http://%s:%d", app_settings.backend_host, app_settings.backend_port)

    yield

    # ── Shutdown ──────────────────────────────────────────────────────────
    logger.info("Membership API shutting down...")
    if owns_engine:
        await dispose_engine(app.state.engine)
    logger.info("Shutdown complete.")


# ══════════════════════════════════════════════════════════════════════════
# Exception Handlers
# ══════════════════════════════════════════════════════════════════════════

def register_exception_handlers(app: FastAPI) -> None:
    """
    Map exception types to HTTP status codes and error bodies.

    Handler hierarchy:
        ValidationError / RequestValidationError → 400
        NotFoundError                            → 404
        DatabaseError                            → 500 (generic message)
        MembershipAPIError (base)                → 500
        Exception (fallback)                     → 500

    Driver errors, SQL and stack traces are logged, never returned.
    """

    def error_body(error: str, message: str, **extra) -> dict:
        return {"error": error, "message": message, **extra, "request_id": request_id_var.get("")}

    @app.exception_handler(ValidationError)
    async def handle_validation_error(request: Request, exc: ValidationError):
        logger.warning("[%s] Validation error: %s %s", request_id_var.get(""), exc.message, exc.errors)
        return JSONResponse(
            status_code=400,
            content=error_body("validation_error", exc.message, details=exc.errors),
        )

    @app.exception_handler(RequestValidationError)
    async def handle_request_validation_error(request: Request, exc: RequestValidationError):
        """Body/query type errors: 400 in the same shape as ValidationError."""
        details = [
            {"loc": list(err.get("loc", ())), "msg": err.get("msg", ""), "type": err.get("type", "")}
            for err in exc.errors()
        ]
        logger.warning("[%s] Request validation error: %s", request_id_var.get(""), details)
        return JSONResponse(
            status_code=400,
            content=error_body("validation_error", "Request validation failed", details=details),
        )

    @app.exception_handler(NotFoundError)
    async def handle_not_found(request: Request, exc: NotFoundError):
        return JSONResponse(
            status_code=404,
            content=error_body("not_found", exc.message),
        )

    @app.exception_handler(DatabaseError)
    async def handle_database_error(request: Request, exc: DatabaseError):
        logger.error("[%s] Database error: %s | Context: %s", request_id_var.get(""), exc.message, exc.context)
        return JSONResponse(
            status_code=500,
            content=error_body("server_error", exc.message),
        )

    @app.exception_handler(MembershipAPIError)
    async def handle_app_error(request: Request, exc: MembershipAPIError):
        logger.error("[%s] Application error: %s | Context: %s", request_id_var.get(""), exc.message, exc.context)
        return JSONResponse(
            status_code=500,
            content=error_body("server_error", exc.message),
        )

    @app.exception_handler(Exception)
    async def handle_unexpected_error(request: Request, exc: Exception):
        logger.error("[%s] Unexpected error: %s", request_id_var.get(""), str(exc), exc_info=True)
        return JSONResponse(
            status_code=500,
            content=error_body(
                "internal_server_error",
                "An unexpected error occurred. Please try again later.",
            ),
        )


# ══════════════════════════════════════════════════════════════════════════
# Application Factory
# ══════════════════════════════════════════════════════════════════════════

def create_app(app_settings: Optional[Settings] = None) -> FastAPI:
    """
    Create and configure the FastAPI application.

    Args:
        app_settings: Settings to build the app with; defaults to the
            environment-loaded singleton.
    """
    app_settings = app_settings or settings

    app = FastAPI(
        title="Membership API",
        description="Members and courses of the club: create, read, update, delete and search.",
        version=__version__,
        docs_url="/docs",
        redoc_url="/redoc",
        openapi_url="/openapi.json",
        lifespan=lifespan,
    )
    app.state.settings = app_settings

    # ── Register Middleware ───────────────────────────────────────────────
    # Last added runs first: RequestID → Logging → GZip → CORS
    app.add_middleware(
        CORSMiddleware,
        allow_origins=app_settings.cors_origins_list,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
        expose_headers=["X-Request-ID"],
    )
    app.add_middleware(GZipMiddleware, minimum_size=500)
    app.add_middleware(RequestLoggingMiddleware)
    app.add_middleware(RequestIDMiddleware)

    # ── Register Exception Handlers ───────────────────────────────────────
    register_exception_handlers(app)

    # ── Register Routes ───────────────────────────────────────────────────
    app.include_router(health.router)
    app.include_router(members.router)
    app.include_router(courses.router)

    return app


app = create_app()
