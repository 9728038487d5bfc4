"""Tests for the extraction deadline middleware."""

import asyncio
from unittest.mock import MagicMock

from fastapi import FastAPI
from fastapi.testclient import TestClient

from src.api.middleware.timeout import ExtractionTimeoutMiddleware
from src.observability.metrics import MetricsCollector


def _create_test_app(timeout: float, delay: float, metrics=None) -> FastAPI:
    """Minimal app whose routes all sleep for `delay` seconds."""
    app = FastAPI()
    app.add_middleware(ExtractionTimeoutMiddleware, timeout_seconds=timeout, metrics=metrics)

    @app.post("/extract")
    async def extract():
        await asyncio.sleep(delay)
        return {"status": "ok"}

    @app.get("/health")
    async def health():
        await asyncio.sleep(delay)
        return {"status": "healthy"}

    @app.get("/extract/test")
    async def extract_test():
        await asyncio.sleep(delay)
        return {"message": "Extract route is working"}

    return app


class TestExtractionTimeoutMiddleware:
    """Tests for ExtractionTimeoutMiddleware behavior."""

    def test_fast_extraction_succeeds(self):
        client = TestClient(_create_test_app(timeout=5.0, delay=0))
        response = client.post("/extract")
        assert response.status_code == 200
        assert response.json() == {"status": "ok"}

    def test_slow_extraction_returns_504(self):
        metrics = MagicMock(spec=MetricsCollector)
        client = TestClient(_create_test_app(timeout=0.1, delay=10, metrics=metrics))

        response = client.post("/extract", files={"file": ("a.txt", b"x" * 50, "text/plain")})

        assert response.status_code == 504
        data = response.json()
        assert data["detail"] == "Extraction did not finish within 0.1 seconds"
        assert data["error_type"] == "timeout"
        assert data["timeout_seconds"] == 0.1
        assert data["upload_bytes"] > 50
        metrics.record_document.assert_called_once_with("timeout")

    def test_health_is_not_timed(self):
        client = TestClient(_create_test_app(timeout=0.1, delay=0.3))
        assert client.get("/health").status_code == 200

    def test_liveness_route_is_not_timed(self):
        client = TestClient(_create_test_app(timeout=0.1, delay=0.3))
        assert client.get("/extract/test").status_code == 200

    def test_trailing_slash_is_guarded(self):
        app = FastAPI()
        middleware = ExtractionTimeoutMiddleware(app, timeout_seconds=1.0)
        request = MagicMock(method="POST")
        request.url.path = "/extract/"
        assert middleware.is_guarded(request)
        request.method = "GET"
        assert not middleware.is_guarded(request)
