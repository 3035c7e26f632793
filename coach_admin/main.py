"""
FastAPI application entry point.

This module creates and configures the FastAPI application.
Using an application factory pattern (create_app function) because:
- Easier to test with different configurations
- Explicit about initialization order

For local development:
    uvicorn coach_admin.main:app --reload --port 3001

Or, honouring PORT/HOST from the environment:
    python -m coach_admin.main
"""

import logging
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from . import __version__
from .api.routes import coaches, health
from .config.settings import Settings, get_settings

# Configure logging
logging.basicConfig(
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    level=logging.INFO,
)

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Application lifespan manager.

    Reports configuration problems on startup. They are logged rather
    than fatal; /health/ready reports them too.
    """
    settings = get_settings()

    logger.info(
        "Coach Admin API starting",
        extra={
            "version": __version__,
            "storage": "memory" if settings.storage_mock_mode else settings.data_file,
        }
    )

    problems = settings.validate_configuration()
    if problems:
        logger.error(
            "Invalid configuration",
            extra={"problems": problems}
        )

    yield

    logger.info("Coach Admin API shutting down")


def _describe_validation_error(exc: RequestValidationError) -> str:
    errors = exc.errors()
    if not errors:
        return "Invalid request body"

    first = errors[0]
    location = [str(part) for part in first.get("loc", ()) if part != "body"]
    if first.get("type") == "json_invalid" or not location:
        return "Request body must be valid JSON"
    return f"Invalid value for {'.'.join(location)}: {first.get('msg', 'invalid')}"


def create_app(settings: Optional[Settings] = None) -> FastAPI:
    """
    Application factory.

    Creates and configures the FastAPI application. Tests may pass their
    own Settings; routes still resolve settings through get_settings, so
    override that dependency as well when it matters.
    """
    settings = settings or get_settings()

    logging.getLogger().setLevel(settings.log_level_value)

    app = FastAPI(
        title=settings.api_title,
        version=__version__,
        description="""
        Admin API for coach records.

        ## Endpoints

        - `GET /coaches` - list every coach
        - `GET /coaches/{id}` - fetch one coach
        - `POST /coaches` - create a coach (name, email, category, rating, status)
        - `PUT /coaches/{id}` - update any subset of those fields
        - `DELETE /coaches/{id}` - remove a coach

        Emails are unique across coaches. Ratings run from 1 to 5.
        Status is `active` or `inactive`.
        """,
        docs_url="/docs",
        redoc_url="/redoc",
        lifespan=lifespan,
    )

    # CORS middleware
    # Configure allowed origins via CORS_ORIGINS environment variable
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins_list,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # Include routers
    app.include_router(
        health.router,
        prefix="/health",
        tags=["Health"],
    )

    app.include_router(
        coaches.router,
        prefix="/coaches",
        tags=["Coaches"],
    )

    # Root endpoint
    @app.get("/", include_in_schema=False)
    async def root():
        """Root endpoint - point at docs."""
        return {
            "message": "Coach Admin API",
            "version": __version__,
            "docs": "/docs",
            "health": "/health",
        }

    @app.exception_handler(RequestValidationError)
    async def validation_exception_handler(request: Request, exc: RequestValidationError):
        """
        Report malformed bodies as 400, like every other invalid input.

        FastAPI's default is 422; clients of this API only distinguish
        400 and 404.
        """
        detail = _describe_validation_error(exc)

        logger.warning(
            "Rejected malformed request",
            extra={
                "path": request.url.path,
                "method": request.method,
                "reason": detail,
            }
        )

        return JSONResponse(status_code=400, content={"detail": detail})

    # Global exception handler
    @app.exception_handler(Exception)
    async def global_exception_handler(request: Request, exc: Exception):
        """
        Catch-all exception handler.

        Prevents stack traces from leaking to clients. We log the full
        error server-side but return a generic message.
        """
        logger.error(
            "Unhandled exception",
            extra={
                "path": request.url.path,
                "method": request.method,
                "error": str(exc),
            },
            exc_info=exc,
        )

        return JSONResponse(
            status_code=500,
            content={"detail": "Internal server error"}
        )

    logger.info(
        "FastAPI application created",
        extra={
            "title": settings.api_title,
            "version": __version__,
        }
    )

    return app


# Create the application instance
# This is what uvicorn imports
app = create_app()


if __name__ == "__main__":
    import uvicorn

    settings = get_settings()

    uvicorn.run(
        "coach_admin.main:app",
        host=settings.host,
        port=settings.port,
        log_level=settings.log_level.lower(),
    )
