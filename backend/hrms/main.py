"""
HRMS Employee Service — FastAPI Application Factory
====================================================

What:  Builds the FastAPI app: lifespan, middleware, exception handlers, routes.
Who:   uvicorn imports `hrms.main:app`; the `hrms` console script calls `run()`.

Application Layout:
    ┌─────────────────────────────────────────────────────┐
    │                   FastAPI App                       │
    │  Middleware:  Request ID → Access Log               │
    │  Routes:      /employee, /employee/{id}, /health    │
    │  Exception handlers (text/plain bodies):            │
    │    ValidationError / NoDocumentsError → 400         │
    │    NotFoundError → 404 │ DatabaseError → 500        │
    └─────────────────────────────────────────────────────┘

Lifecycle:
    Startup:
    1. Configure logging
    2. Validate configuration (missing connection string aborts startup)
    3. Connect, ping the primary, select the database (failure aborts startup)
    4. Publish the handle on app.state.mongo

    Shutdown:
    1. Close the Mongo client
"""

import logging
import sys
from contextlib import asynccontextmanager
from typing import Any, AsyncGenerator, Dict, List

import uvicorn
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import PlainTextResponse

from hrms import __version__
from hrms.config import BACKEND_HOST, BACKEND_PORT, settings
from hrms.database import connect
from hrms.exceptions import (
    DatabaseError,
    NoDocumentsError,
    NotFoundError,
    ValidationError,
)
from hrms.middleware.logging import RequestLoggingMiddleware
from hrms.middleware.request_id import (
    REQUEST_ID_HEADER,
    RequestIDMiddleware,
    request_id_var,
)
from hrms.routes import employees, health

logger = logging.getLogger(__name__)


# ══════════════════════════════════════════════════════════════════════════
# Logging Configuration
# ══════════════════════════════════════════════════════════════════════════

def setup_logging() -> None:
    """
    Configure the root logger once at startup.

    Format: %(asctime)s [%(levelname)s] %(name)s: %(message)s, to stdout
    (containers collect stdout).
    """
    logging.basicConfig(
        level=getattr(logging, settings.log_level, logging.INFO),
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%Y-%m-%dT%H:%M:%S",
        handlers=[logging.StreamHandler(sys.stdout)],
        force=True,
    )

    # Our access log replaces uvicorn's; the driver logs every heartbeat at DEBUG
    logging.getLogger("uvicorn.access").setLevel(logging.WARNING)
    logging.getLogger("pymongo").setLevel(logging.WARNING)
    logging.getLogger("httpcore").setLevel(logging.WARNING)
    logging.getLogger("httpx").setLevel(logging.WARNING)


# ══════════════════════════════════════════════════════════════════════════
# Application Lifespan
# ══════════════════════════════════════════════════════════════════════════

@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """
    Startup and shutdown.

    Every startup failure is re-raised: uvicorn reports "Application startup
    failed" and exits, so the process never serves requests without a database.
    """
    setup_logging()
    logger.info("HRMS Employee Service %s starting up...", __version__)

    try:
        settings.validate_required()
    except ValueError as e:
        logger.critical("Configuration error: %s", str(e))
        raise

    try:
        app.state.mongo = await connect(settings.mongodb_connection_string)
    except Exception as e:
        logger.critical("unable to connect to the database %s", str(e))
        raise

    logger.info("Server ready at http://%s:%d", BACKEND_HOST, BACKEND_PORT)

    yield

    logger.info("HRMS Employee Service shutting down...")
    await app.state.mongo.close()
    logger.info("Shutdown complete.")


# ══════════════════════════════════════════════════════════════════════════
# Exception Handlers
# ══════════════════════════════════════════════════════════════════════════

def format_validation_errors(errors: List[Dict[str, Any]]) -> str:
    """
    Flatten FastAPI's body validation errors into one line of text.

    JSON syntax errors keep the decoder's message ("JSON decode error:
    Expecting value"); coercion errors are prefixed with the field path.
    """
    parts = []
    for error in errors:
        if error.get("type") == "json_invalid":
            detail = (error.get("ctx") or {}).get("error")
            parts.append(f"{error['msg']}: {detail}" if detail else error["msg"])
            continue
        loc = ".".join(str(item) for item in error.get("loc", ()))
        parts.append(f"{loc}: {error['msg']}" if loc else error["msg"])
    return "; ".join(parts) or "Bad Request"


def register_exception_handlers(app: FastAPI) -> None:
    """
    Map application exceptions to status codes.

    Handler hierarchy:
        RequestValidationError → 400 (FastAPI's default would be 422)
        ValidationError        → 400
        NoDocumentsError       → 400
        NotFoundError          → 404
        DatabaseError          → 500 (driver text in the body)
        Exception              → 500 (generic body, traceback logged)

    Bodies are plain text: the message itself, nothing wrapped around it.
    """

    @app.exception_handler(RequestValidationError)
    async def handle_request_validation_error(request: Request, exc: RequestValidationError):
        """Body was not JSON, or could not be coerced into an employee."""
        message = format_validation_errors(exc.errors())
        logger.warning("[%s] Bad request body: %s", request_id_var.get(""), message)
        return PlainTextResponse(message, status_code=400)

    @app.exception_handler(ValidationError)
    async def handle_validation_error(request: Request, exc: ValidationError):
        logger.warning("[%s] Validation error: %s", request_id_var.get(""), exc.message)
        return PlainTextResponse(exc.message, status_code=400)

    @app.exception_handler(NoDocumentsError)
    async def handle_no_documents(request: Request, exc: NoDocumentsError):
        return PlainTextResponse(exc.message, status_code=400)

    @app.exception_handler(NotFoundError)
    async def handle_not_found(request: Request, exc: NotFoundError):
        return PlainTextResponse(exc.message, status_code=404)

    @app.exception_handler(DatabaseError)
    async def handle_database_error(request: Request, exc: DatabaseError):
        rid = request_id_var.get("")
        logger.error("[%s] Database error: %s | Context: %s", rid, exc.message, exc.context)
        return PlainTextResponse(exc.message, status_code=500)

    @app.exception_handler(Exception)
    async def handle_unexpected_error(request: Request, exc: Exception):
        """
        Served by Starlette's ServerErrorMiddleware, outside RequestIDMiddleware,
        so the correlation header is set here.
        """
        rid = getattr(request.state, "request_id", "") or request_id_var.get("")
        logger.error("[%s] Unexpected error: %s", rid, str(exc), exc_info=True)
        return PlainTextResponse(
            "Internal Server Error",
            status_code=500,
            headers={REQUEST_ID_HEADER: rid} if rid else None,
        )


# ══════════════════════════════════════════════════════════════════════════
# Application Factory
# ══════════════════════════════════════════════════════════════════════════

def create_app() -> FastAPI:
    """
    Create and configure the FastAPI application.

    Tests build the app through this factory and override
    `get_employee_collection`, so the lifespan (and MongoDB) is never needed.
    """
    app = FastAPI(
        title="HRMS Employee API",
        description="CRUD over employee records stored in MongoDB.",
        version=__version__,
        lifespan=lifespan,
    )

    # Last added runs first: RequestID → Logging
    app.add_middleware(RequestLoggingMiddleware)
    app.add_middleware(RequestIDMiddleware)

    register_exception_handlers(app)

    app.include_router(employees.router)
    app.include_router(health.router)

    return app


app = create_app()


def run() -> None:
    """Console entry point: serve on the fixed port."""
    uvicorn.run("hrms.main:app", host=BACKEND_HOST, port=BACKEND_PORT)


if __name__ == "__main__":
    run()
