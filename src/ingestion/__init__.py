"""Text acquisition - loaders, raw document schema and acquisition errors."""

from src.ingestion.schemas import RawDocument
from src.ingestion.text_loader import (
    AcquisitionError,
    InsufficientTextError,
    TextLoader,
    UnsupportedFileTypeError,
)

__all__ = [
    "AcquisitionError",
    "InsufficientTextError",
    "RawDocument",
    "TextLoader",
    "UnsupportedFileTypeError",
]
