from contextlib import asynccontextmanager
from typing import Any, AsyncGenerator

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from roster import __version__
from roster.app.api.students import router as students_router
from roster.app.core.config import settings
from roster.app.core.logging import get_logger, setup_logging
from roster.app.db.async_session import close_async_engine
from roster.app.db.init_db import create_all_tables, verify_connection
from roster.app.exceptions import MalformedInputError, RosterException
from roster.app.middleware.request_id import RequestIdMiddleware, get_request_id


def _describe_validation_error(exc: RequestValidationError) -> str:
    errors = exc.errors()
    if not errors:
        return "Invalid JSON data"
    first = errors[0]
    location = ".".join(str(part) for part in first.get("loc", ()) if part != "body")
    message = first.get("msg", "invalid value")
    return f"{location}: {message}" if location else message


def create_app() -> FastAPI:
    """Create and configure the FastAPI application.

    Returns:
        Configured FastAPI application instance
    """
    setup_logging()
    logger = get_logger(__name__)

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
        """Application lifespan context manager.

        Verifies the database on startup, creates missing tables and
        releases the connection pool on shutdown.
        """
        if not await verify_connection():
            logger.error("Database connection failed!")
            raise RuntimeError("Cannot connect to database")

        if settings.db_create_tables:
            await create_all_tables()

        logger.info(
            "Application startup complete",
            extra={
                "debug_mode": settings.debug,
                "operation_timeout_seconds": settings.operation_timeout_seconds,
            },
        )

        yield

        await close_async_engine()
        logger.info("Application shutdown complete")

    app = FastAPI(
        title="Roster",
        description="Student records kept consistent across class and grade level collections",
        version=__version__,
        lifespan=lifespan,
    )

    # Order matters: last added = first executed
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["GET", "POST", "PUT", "DELETE", "OPTIONS"],
        allow_headers=["*"],
        expose_headers=["X-Request-ID"],
        max_age=600,
    )
    app.add_middleware(RequestIdMiddleware)

    app.include_router(students_router)

    @app.get("/health")
    async def health() -> dict[str, Any]:
        """Health check endpoint with database status."""
        if await verify_connection():
            return {"status": "ok", "components": {"database": {"status": "ok"}}}
        return {
            "status": "degraded",
            "components": {"database": {"status": "error"}},
        }

    @app.exception_handler(RosterException)
    async def roster_exception_handler(request: Request, exc: RosterException) -> JSONResponse:
        """Map coordinator error kinds to their HTTP status codes."""
        content = exc.to_response()
        content["request_id"] = get_request_id(request)
        if exc.status_code >= 500:
            logger.error(f"{request.method} {request.url.path} failed: {exc.message}")
        return JSONResponse(status_code=exc.status_code, content=content)

    @app.exception_handler(RequestValidationError)
    async def validation_error_handler(
        request: Request, exc: RequestValidationError
    ) -> JSONResponse:
        """Report unparseable or incomplete request bodies as 400."""
        error = MalformedInputError(_describe_validation_error(exc))
        content = error.to_response()
        content["request_id"] = get_request_id(request)
        return JSONResponse(status_code=error.status_code, content=content)

    @app.exception_handler(Exception)
    async def global_exception_handler(request: Request, exc: Exception) -> JSONResponse:
        """Global exception handler for unhandled exceptions.

        The traceback is logged server-side and never returned to the client.
        """
        request_id = get_request_id(request)
        logger.exception(
            f"Unhandled exception [request_id={request_id}]",
            extra={
                "request_id": request_id,
                "exception_type": type(exc).__name__,
                "exception_message": str(exc),
            },
        )

        if settings.debug:
            return JSONResponse(
                status_code=500,
                content={
                    "error": "internal_error",
                    "message": str(exc),
                    "exception_type": type(exc).__name__,
                    "request_id": request_id,
                },
            )

        return JSONResponse(
            status_code=500,
            content={
                "error": "internal_error",
                "message": "Internal server error",
                "request_id": request_id,
            },
        )

    return app


# Create the application instance
app = create_app()
