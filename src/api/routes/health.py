"""
Health check endpoint.
"""

import os
from pathlib import Path

from fastapi import APIRouter

from src.api.models import HealthResponse
from src.config.settings import get_settings
from src.event_extraction.config import EventExtractionConfig

router = APIRouter()


def _is_writable(directory: Path) -> bool:
    """Check the directory, or its nearest existing parent, is writable."""
    for candidate in (directory, *directory.resolve().parents):
        if candidate.exists():
            return os.access(candidate, os.W_OK)
    return False


@router.get("/health", response_model=HealthResponse)
async def health_check() -> HealthResponse:
    """Report service status and whether output files can be written."""
    settings = get_settings()
    config = EventExtractionConfig()
    writable = _is_writable(Path(settings.output_dir))

    return HealthResponse(
        status="healthy" if writable or not settings.save_outputs else "degraded",
        version=config.extractor_version,
        strategy=config.strategy,
        output_dir_writable=writable,
    )
