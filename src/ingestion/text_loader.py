"""
Text acquisition for uploaded almanac documents.

Reads PDF files through pypdf and plain text files as UTF-8. When pypdf
cannot parse a PDF, printable characters are scraped from the raw bytes
as a last resort. The extraction core only ever sees the resulting text.
"""

import io
import logging
import re
from pathlib import Path

from pypdf import PdfReader

from src.ingestion.schemas import RawDocument

logger = logging.getLogger(__name__)

SUPPORTED_EXTENSIONS = {".pdf", ".txt"}

_CONTROL_CHARS = re.compile(r"[\x00-\x08\x0b\x0c\x0e-\x1f\x7f]")
_LONG_REPEAT = re.compile(r"(.)\1{10,}")


class AcquisitionError(Exception):
    """Raised when a source document cannot be read or yields no text."""

    def __init__(self, message: str, source: str | None = None):
        super().__init__(message)
        self.source = source


class InsufficientTextError(AcquisitionError):
    """
    Raised when extracted text is shorter than the usable minimum.

    A soft failure: callers treat it as empty input rather than a crash.
    """

    def __init__(self, message: str, source: str | None = None, document: RawDocument | None = None):
        super().__init__(message, source)
        self.document = document


class UnsupportedFileTypeError(AcquisitionError):
    """Raised for file types the loader does not handle."""


def extract_printable_text(data: bytes) -> str:
    """
    Scrape readable characters out of a binary buffer.

    Keeps printable ASCII, tabs, newlines and Latin-1 letters, then drops
    control characters and collapses long runs of one repeated character.
    """
    kept = bytes(
        b for b in data
        if 32 <= b <= 126 or b in (9, 10, 13) or 160 <= b <= 255
    ).decode("latin-1")
    kept = _CONTROL_CHARS.sub("", kept)
    kept = _LONG_REPEAT.sub(r"\1", kept)
    return kept.strip()


class TextLoader:
    """
    Loads raw text and page count from PDF or text sources.

    Args:
        min_text_length: Texts shorter than this raise InsufficientTextError.
        allowed_extensions: File extensions accepted (default .pdf, .txt).
    """

    def __init__(
        self,
        min_text_length: int = 100,
        allowed_extensions: set[str] | None = None,
    ) -> None:
        self.min_text_length = min_text_length
        self.allowed_extensions = allowed_extensions or SUPPORTED_EXTENSIONS

    def is_supported(self, filename: str) -> bool:
        return Path(filename).suffix.lower() in self.allowed_extensions

    def load(self, path: str | Path) -> RawDocument:
        """
        Load a document from disk.

        Raises:
            AcquisitionError: The file is missing or unreadable.
            UnsupportedFileTypeError: The extension is not accepted.
            InsufficientTextError: Too little text could be extracted.
        """
        path = Path(path)
        if not path.is_file():
            raise AcquisitionError(f"File not found: {path}", source=str(path))
        try:
            data = path.read_bytes()
        except OSError as e:
            raise AcquisitionError(f"Failed to read {path}: {e}", source=str(path)) from e
        return self.load_bytes(data, path.name)

    def load_bytes(self, data: bytes, filename: str) -> RawDocument:
        """Load a document from an in-memory buffer (e.g. an upload)."""
        if not self.is_supported(filename):
            raise UnsupportedFileTypeError(
                f"Unsupported file type: {Path(filename).suffix or filename}",
                source=filename,
            )

        if Path(filename).suffix.lower() == ".pdf":
            document = self._read_pdf(data, filename)
        else:
            document = RawDocument(
                text=data.decode("utf-8", errors="replace"),
                page_count=1,
                source=filename,
                extraction_method="text",
                file_size=len(data),
            )

        logger.info(
            "Text acquired from %s: %d pages, %d chars (%s)",
            filename,
            document.page_count,
            document.text_length,
            document.extraction_method,
        )

        if len(document.text.strip()) < self.min_text_length:
            raise InsufficientTextError(
                f"No meaningful text could be extracted from {filename} "
                f"({document.text_length} chars)",
                source=filename,
                document=document,
            )
        return document

    def _read_pdf(self, data: bytes, filename: str) -> RawDocument:
        try:
            reader = PdfReader(io.BytesIO(data))
            pages = [page.extract_text() or "" for page in reader.pages]
            return RawDocument(
                text="\n".join(pages),
                page_count=max(1, len(pages)),
                source=filename,
                extraction_method="pypdf",
                file_size=len(data),
            )
        except Exception as e:
            logger.warning("PDF parsing failed for %s, scraping raw buffer: %s", filename, e)

        return RawDocument(
            text=extract_printable_text(data),
            page_count=1,
            source=filename,
            extraction_method="buffer",
            file_size=len(data),
        )
