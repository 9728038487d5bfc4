"""
Deadline for document extraction requests.

The extract route runs the core in a worker thread, so the event loop stays
free to stop waiting once the deadline passes. Only upload routes are
guarded; health and liveness checks are never timed. An expired request
is answered with 504 and counted as a document with status "timeout".
"""

import asyncio

from fastapi import Request
from fastapi.responses import JSONResponse
from starlette.middleware.base import BaseHTTPMiddleware

from src.observability.logging import get_logger
from src.observability.metrics import MetricsCollector, get_metrics

logger = get_logger(__name__)

# (method, path) pairs that run an extraction
EXTRACTION_ROUTES = frozenset({("POST", "/extract")})


def declared_upload_size(request: Request) -> int | None:
    """Body size announced by the client, if any."""
    value = request.headers.get("content-length", "")
    return int(value) if value.isdigit() else None


class ExtractionTimeoutMiddleware(BaseHTTPMiddleware):
    """Abort extraction requests that run past the configured deadline."""

    def __init__(
        self,
        app,
        timeout_seconds: float = 60.0,
        routes: frozenset[tuple[str, str]] = EXTRACTION_ROUTES,
        metrics: MetricsCollector | None = None,
    ):
        super().__init__(app)
        self.timeout_seconds = timeout_seconds
        self.routes = routes
        self._metrics = metrics

    def is_guarded(self, request: Request) -> bool:
        path = request.url.path.rstrip("/") or "/"
        return (request.method, path) in self.routes

    async def dispatch(self, request: Request, call_next):
        if not self.is_guarded(request):
            return await call_next(request)

        try:
            async with asyncio.timeout(self.timeout_seconds):
                return await call_next(request)
        except TimeoutError:
            upload_bytes = declared_upload_size(request)
            logger.warning(
                "Extraction timed out",
                path=request.url.path,
                upload_bytes=upload_bytes,
                timeout_seconds=self.timeout_seconds,
            )
            (self._metrics or get_metrics()).record_document("timeout")
            return JSONResponse(
                status_code=504,
                content={
                    "detail": (
                        f"Extraction did not finish within {self.timeout_seconds:g} seconds"
                    ),
                    "error_type": "timeout",
                    "timeout_seconds": self.timeout_seconds,
                    "upload_bytes": upload_bytes,
                },
            )
