"""
Extraction service.

Orchestrates one extraction request end to end:
- Text acquisition (PDF / text file / upload buffer)
- Event extraction and reduction
- Persistence of JSON, CSV and raw text outputs

Acquisition failures propagate; too-short text, and failures to write an
individual output file, are reported in the result instead.
"""

import time
from collections import Counter
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

from src.config.settings import Settings, get_settings
from src.event_extraction.extractor import EventExtractor
from src.event_extraction.schemas import EventSet
from src.ingestion.schemas import RawDocument
from src.ingestion.text_loader import AcquisitionError, InsufficientTextError, TextLoader
from src.observability.logging import bind_context, clear_context, get_logger
from src.observability.metrics import MetricsCollector, get_metrics
from src.storage.event_writer import EventFileWriter, SaveResult

logger = get_logger(__name__)


@dataclass
class ExtractionResult:
    """
    Result of processing one document.

    Attributes:
        event_set: Extracted, de-duplicated, date-ordered events.
        source_name: Original file name.
        page_count: Pages in the source document.
        raw_text: Acquired text.
        metadata: Extraction method, sizes and counts.
        saved_files: Persistence result per output format.
    """

    event_set: EventSet
    source_name: str
    page_count: int = 1
    raw_text: str = ""
    metadata: dict[str, Any] = field(default_factory=dict)
    saved_files: dict[str, SaveResult] = field(default_factory=dict)

    @property
    def total_events(self) -> int:
        return len(self.event_set)


class ExtractionService:
    """
    Runs acquisition, extraction and persistence for single documents.

    Usage:
        service = ExtractionService()
        result = service.process_file("almanac_2025.pdf")
        print(result.total_events)
    """

    def __init__(
        self,
        extractor: EventExtractor | None = None,
        loader: TextLoader | None = None,
        writer: EventFileWriter | None = None,
        settings: Settings | None = None,
        metrics: MetricsCollector | None = None,
    ) -> None:
        self._settings = settings or get_settings()
        self._extractor = extractor or EventExtractor()
        self._loader = loader or TextLoader(
            min_text_length=self._settings.min_text_length,
            allowed_extensions=self._settings.allowed_extension_set,
        )
        self._writer = writer or EventFileWriter(self._settings.output_dir)
        self._metrics = metrics or get_metrics()

    @property
    def loader(self) -> TextLoader:
        return self._loader

    def process_file(
        self,
        path: str | Path,
        source_name: str | None = None,
        save: bool | None = None,
    ) -> ExtractionResult:
        """Load a document from disk and extract its events."""
        source_name = source_name or Path(path).name
        return self._process(lambda: self._loader.load(path), source_name, save)

    def process_upload(
        self,
        data: bytes,
        filename: str,
        save: bool | None = None,
    ) -> ExtractionResult:
        """Extract events from an uploaded file buffer."""
        return self._process(lambda: self._loader.load_bytes(data, filename), filename, save)

    def process_text(
        self,
        text: str | None,
        source_name: str = "text",
        save: bool | None = None,
    ) -> ExtractionResult:
        """Extract events from text that was acquired elsewhere."""

        def acquire() -> RawDocument:
            document = RawDocument(text=text or "", source=source_name)
            if len(document.text.strip()) < self._loader.min_text_length:
                raise InsufficientTextError(
                    f"Text too short to extract events ({document.text_length} chars)",
                    source=source_name,
                    document=document,
                )
            return document

        return self._process(acquire, source_name, save)

    def _process(self, acquire, source_name: str, save: bool | None) -> ExtractionResult:
        bind_context(source_file=source_name)
        try:
            return self._run(acquire, source_name, save)
        finally:
            clear_context("source_file")

    def _run(self, acquire, source_name: str, save: bool | None) -> ExtractionResult:
        start = time.perf_counter()
        try:
            document = acquire()
        except InsufficientTextError as e:
            logger.warning("Insufficient text, returning no events", error=str(e))
            self._metrics.record_document("insufficient_text")
            partial = e.document
            return ExtractionResult(
                event_set=EventSet(),
                source_name=source_name,
                page_count=partial.page_count if partial else 1,
                raw_text=partial.text if partial else "",
                metadata={"warning": str(e), "events_found": 0},
            )
        except AcquisitionError as e:
            logger.error("Text acquisition failed", error=str(e))
            self._metrics.record_acquisition_error(type(e).__name__)
            self._metrics.record_document("error")
            raise
        self._metrics.record_stage_latency("acquisition", time.perf_counter() - start)

        start = time.perf_counter()
        event_set = self._extractor.extract(document.text)
        self._metrics.record_stage_latency("extraction", time.perf_counter() - start)
        self._metrics.record_events(Counter(e.type for e in event_set))
        self._metrics.record_document("success")

        result = ExtractionResult(
            event_set=event_set,
            source_name=source_name,
            page_count=document.page_count,
            raw_text=document.text,
            metadata={
                "extraction_method": document.extraction_method,
                "file_size": document.file_size,
                "text_length": document.text_length,
                "events_found": len(event_set),
                "extractor_version": self._extractor.config.extractor_version,
            },
        )
        logger.info("Events extracted", total_events=len(event_set), pages=document.page_count)

        should_save = self._settings.save_outputs if save is None else save
        if should_save:
            result.saved_files = self.save(result)
        return result

    def save(self, result: ExtractionResult) -> dict[str, SaveResult]:
        """Write JSON, CSV and raw text outputs; never raises."""
        start = time.perf_counter()
        saved = {
            "json": self._writer.save_json(result.event_set, result.source_name),
            "csv": self._writer.save_csv(result.event_set, result.source_name),
            "raw_text": self._writer.save_raw_text(result.raw_text, result.source_name),
        }
        for fmt, outcome in saved.items():
            self._metrics.record_save(fmt, outcome.success)
        self._metrics.record_stage_latency("persistence", time.perf_counter() - start)
        return saved
