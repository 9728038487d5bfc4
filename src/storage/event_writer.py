"""
File persistence for extracted events.

Writes an EventSet as a JSON document and as a flattened CSV, plus the
acquired raw text, into an output directory. Every write returns a
SaveResult instead of raising, so one failed format never blocks the
extraction response.
"""

import csv
import json
import logging
from dataclasses import dataclass
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Callable

from src.event_extraction.schemas import EventSet

logger = logging.getLogger(__name__)

CSV_HEADERS = ["Date", "Title", "Type", "Description", "Section"]


@dataclass(frozen=True)
class SaveResult:
    """
    Outcome of writing one output file.

    Attributes:
        success: Whether the file was written.
        file_path: Absolute path of the written file.
        file_name: Base name of the written file.
        error: Error message when success is False.
    """

    success: bool
    file_path: str | None = None
    file_name: str | None = None
    error: str | None = None

    def to_dict(self) -> dict[str, Any]:
        if self.success:
            return {
                "success": True,
                "file_path": self.file_path,
                "file_name": self.file_name,
            }
        return {"success": False, "error": self.error}


def _utc_now() -> datetime:
    """Return current UTC time with timezone info."""
    return datetime.now(timezone.utc)


class EventFileWriter:
    """
    Writes extraction results to JSON, CSV and text files.

    File names follow <stem>_events_<timestamp>.json|csv and
    <stem>_raw_text_<timestamp>.txt, where stem comes from the original
    upload name.

    Args:
        output_dir: Directory to write into (created on first write).
        clock: Time source for timestamps.
    """

    def __init__(
        self,
        output_dir: str | Path = "extracted-events",
        clock: Callable[[], datetime] = _utc_now,
    ) -> None:
        self.output_dir = Path(output_dir)
        self._clock = clock

    def save_json(self, event_set: EventSet, source_name: str) -> SaveResult:
        """Write {extracted_at, source_file, total_events, events, event_types}."""
        now = self._clock()
        payload = {
            "extracted_at": now.isoformat(),
            "source_file": source_name,
            **event_set.to_dict(),
        }
        return self._write(
            source_name,
            "events",
            ".json",
            now,
            lambda handle: json.dump(payload, handle, indent=2, ensure_ascii=False),
        )

    def save_csv(self, event_set: EventSet, source_name: str) -> SaveResult:
        """Write one row per event; every field quoted, quotes doubled."""

        def write_rows(handle) -> None:
            writer = csv.writer(handle, quoting=csv.QUOTE_ALL)
            writer.writerow(CSV_HEADERS)
            for event in event_set:
                writer.writerow([
                    event.date or "",
                    event.title,
                    event.type,
                    event.description,
                    event.section,
                ])

        return self._write(source_name, "events", ".csv", self._clock(), write_rows)

    def save_raw_text(self, raw_text: str | None, source_name: str) -> SaveResult:
        return self._write(
            source_name,
            "raw_text",
            ".txt",
            self._clock(),
            lambda handle: handle.write(raw_text or "No text extracted"),
        )

    def _write(
        self,
        source_name: str,
        kind: str,
        suffix: str,
        now: datetime,
        write: Callable[[Any], None],
    ) -> SaveResult:
        timestamp = now.strftime("%Y-%m-%dT%H-%M-%S-%fZ")
        file_name = f"{Path(source_name).stem or 'document'}_{kind}_{timestamp}{suffix}"
        file_path = self.output_dir / file_name

        try:
            self.output_dir.mkdir(parents=True, exist_ok=True)
            with open(file_path, "w", newline="", encoding="utf-8") as handle:
                write(handle)
        except (OSError, TypeError, ValueError) as e:
            logger.error("Failed to save %s: %s", file_name, e)
            return SaveResult(success=False, error=str(e))

        logger.info("Saved %s", file_path)
        return SaveResult(
            success=True,
            file_path=str(file_path.resolve()),
            file_name=file_name,
        )
