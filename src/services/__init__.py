"""Services that orchestrate acquisition, extraction and persistence."""

from src.services.extraction_service import ExtractionResult, ExtractionService

__all__ = ["ExtractionResult", "ExtractionService"]
