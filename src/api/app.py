"""
FastAPI application factory.
"""

import time
import uuid
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from src.api.dependencies import reset_dependencies
from src.api.middleware.timeout import ExtractionTimeoutMiddleware
from src.api.routes import extract, health
from src.config.settings import get_settings
from src.ingestion.text_loader import AcquisitionError, UnsupportedFileTypeError
from src.observability.logging import bind_context, clear_context, get_logger

logger = get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan handler."""
    logger.info("Extraction API starting up")
    yield
    logger.info("Extraction API shutting down")
    reset_dependencies()


def create_app() -> FastAPI:
    """
    Create and configure the FastAPI application.

    Returns:
        Configured FastAPI application
    """
    settings = get_settings()

    openapi_tags = [
        {"name": "health", "description": "Service health checks"},
        {"name": "extract", "description": "Almanac upload and event extraction"},
    ]

    app = FastAPI(
        title="Almanac Events API",
        description="""
API for extracting dated calendar events from academic almanac documents.

Upload a PDF or text file to `POST /extract`; the response lists events
(date, title, type, section, confidence) de-duplicated and sorted by date.

## Authentication

Requires `X-API-KEY` header when `API_KEYS` is configured.
        """,
        version="0.1.0",
        docs_url="/docs",
        redoc_url="/redoc",
        lifespan=lifespan,
        openapi_tags=openapi_tags,
    )

    # Add CORS middleware (origins from CORS_ORIGINS env var, comma-separated)
    cors_origins = [o.strip() for o in settings.cors_origins.split(",") if o.strip()]
    app.add_middleware(
        CORSMiddleware,
        allow_origins=cors_origins,
        allow_credentials=settings.cors_allow_credentials,
        allow_methods=["GET", "POST", "OPTIONS"],
        allow_headers=["*"],
    )

    # Extraction deadline (added before the logging middleware so the
    # timeout wraps the whole upload)
    if settings.extraction_timeout_seconds > 0:
        app.add_middleware(
            ExtractionTimeoutMiddleware,
            timeout_seconds=settings.extraction_timeout_seconds,
        )

    # Request logging and correlation ID middleware
    @app.middleware("http")
    async def log_requests(request: Request, call_next):
        request_id = (
            request.headers.get("X-Request-ID")
            or request.headers.get("X-Correlation-ID")
            or str(uuid.uuid4())
        )

        bind_context(request_id=request_id)

        start_time = time.perf_counter()
        try:
            response = await call_next(request)
            duration = time.perf_counter() - start_time

            response.headers["X-Request-ID"] = request_id

            logger.info(
                "HTTP request",
                method=request.method,
                path=request.url.path,
                status_code=response.status_code,
                duration_ms=round(duration * 1000, 2),
            )
            return response
        finally:
            clear_context()

    @app.exception_handler(AcquisitionError)
    async def acquisition_exception_handler(request: Request, exc: AcquisitionError):
        logger.warning("Text acquisition failed", source=exc.source, error=str(exc))
        status_code = 415 if isinstance(exc, UnsupportedFileTypeError) else 422
        return JSONResponse(
            status_code=status_code,
            content={
                "detail": f"Failed to extract content: {exc}",
                "error_type": "acquisition",
            },
        )

    # Exception handler
    @app.exception_handler(Exception)
    async def global_exception_handler(request: Request, exc: Exception):
        logger.error(f"Unhandled exception: {exc}", exc_info=True)
        return JSONResponse(
            status_code=500,
            content={"detail": "Internal server error", "error_type": "internal"},
        )

    # Include routers
    app.include_router(health.router, tags=["health"])
    app.include_router(extract.router, tags=["extract"])

    # Root endpoint
    @app.get("/", include_in_schema=False)
    async def root():
        return {
            "service": "Almanac Events API",
            "version": "0.1.0",
            "docs": "/docs",
        }

    return app
