"""FastAPI application entry point."""

import logging
from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse, Response

from storyweave.api.dev import router as dev_router
from storyweave.api.v1.router import router as api_router
from storyweave.config import get_settings
from storyweave.errors import StoryWeaveError, ValidationError
from storyweave.infrastructure.database import check_connection

# Configure logging
logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger(__name__)

settings = get_settings()


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Application lifespan handler for startup/shutdown."""
    from storyweave.api.dependencies import get_search_provider

    logger.info("Starting StoryWeave application...")
    logger.info(f"Environment: {settings.environment}")
    logger.info(
        f"Research: extractor={settings.query_extractor}, provider={settings.search_provider}"
    )
    for name in settings.missing_credentials():
        logger.warning(f"{name} is not configured; dependent endpoints will return 500")

    yield

    # Shutdown: release upstream HTTP sessions
    await get_search_provider().close()
    logger.info("Shutting down StoryWeave application...")


def _validation_message(exc: RequestValidationError) -> str:
    """Summarize the first request validation problem."""
    errors = exc.errors()
    if not errors:
        return "Invalid request body"
    first = errors[0]
    location = ".".join(str(part) for part in first.get("loc", ()) if part != "body")
    return f"Invalid request: {location or 'body'}: {first.get('msg', 'invalid value')}"


def create_app() -> FastAPI:
    """Create and configure the FastAPI application."""
    docs_kwargs = {}
    if settings.is_production:
        docs_kwargs = {"docs_url": None, "redoc_url": None, "openapi_url": None}

    app = FastAPI(
        title="StoryWeave",
        description="Collaborative story writing with AI continuations, feedback and research",
        version="0.1.0",
        lifespan=lifespan,
        **docs_kwargs,
    )

    # Registered before CORS so that CORS wraps it and decorates the 500 too
    @app.middleware("http")
    async def handle_unexpected_error(request: Request, call_next) -> Response:
        """Catch-all so no failure escapes without a JSON body."""
        try:
            return await call_next(request)
        except Exception as exc:
            logger.error(f"Unhandled error in {request.url.path}: {exc}", exc_info=exc)
            return JSONResponse({"error": "An error occurred"}, status_code=500)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_allow_origins,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.exception_handler(StoryWeaveError)
    async def handle_storyweave_error(request: Request, exc: StoryWeaveError) -> JSONResponse:
        """Return classified failures as JSON errors."""
        logger.error(f"{request.url.path} failed: {exc.classification}: {exc.message}")
        return JSONResponse(exc.to_dict(), status_code=exc.status_code)

    @app.exception_handler(RequestValidationError)
    async def handle_request_validation(
        request: Request, exc: RequestValidationError
    ) -> JSONResponse:
        """Report malformed bodies as 400 instead of 422."""
        error = ValidationError(_validation_message(exc))
        return JSONResponse(error.to_dict(), status_code=error.status_code)

    # Include routers
    app.include_router(api_router)

    # Dev-only router (guarded internally)
    if not settings.is_production:
        app.include_router(dev_router)

    @app.get("/health")
    async def health_check() -> JSONResponse:
        """Lightweight health check with DB connectivity test."""
        if await check_connection():
            return JSONResponse({"status": "healthy", "database": "connected"})
        return JSONResponse(
            {"status": "unhealthy", "database": "disconnected"},
            status_code=503,
        )

    return app


# Create app instance
app = create_app()
