"""
Dependency injection for FastAPI endpoints.
"""

from src.event_extraction.extractor import EventExtractor
from src.services.extraction_service import ExtractionService

# Global service instance (initialized on first request)
_extraction_service: ExtractionService | None = None


def get_extraction_service() -> ExtractionService:
    """
    Get extraction service instance.

    The extractor holds no per-document state, so one instance is shared
    by all requests.
    """
    global _extraction_service

    if _extraction_service is None:
        _extraction_service = ExtractionService(extractor=EventExtractor())

    return _extraction_service


def reset_dependencies() -> None:
    """Drop cached service instances (used on shutdown and in tests)."""
    global _extraction_service
    _extraction_service = None
