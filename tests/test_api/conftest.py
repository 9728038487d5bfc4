"""Shared fixtures for API tests."""

from unittest.mock import MagicMock

import pytest
from fastapi.testclient import TestClient

from src.api.app import create_app
from src.api.auth import verify_api_key
from src.api.dependencies import get_extraction_service
from src.event_extraction.extractor import EventExtractor
from src.ingestion.text_loader import TextLoader
from src.services.extraction_service import ExtractionService


@pytest.fixture
def extraction_service(test_settings, event_writer, metrics):
    """Real extraction pipeline writing into a temp directory."""
    return ExtractionService(
        extractor=EventExtractor(),
        writer=event_writer,
        settings=test_settings.model_copy(update={"save_outputs": True}),
        metrics=metrics,
    )


@pytest.fixture
def mock_service():
    """ExtractionService stand-in with a real loader for type checks."""
    service = MagicMock(spec=ExtractionService)
    service.loader = TextLoader()
    return service


def _client(service):
    app = create_app()
    app.dependency_overrides[verify_api_key] = lambda: "test-key"
    app.dependency_overrides[get_extraction_service] = lambda: service
    return app


@pytest.fixture
def client(extraction_service):
    """FastAPI TestClient backed by the real pipeline."""
    app = _client(extraction_service)
    with TestClient(app) as c:
        yield c
    app.dependency_overrides.clear()


@pytest.fixture
def mock_client(mock_service):
    """FastAPI TestClient backed by a mocked service."""
    app = _client(mock_service)
    with TestClient(app) as c:
        yield c
    app.dependency_overrides.clear()
