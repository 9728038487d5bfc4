"""Interchangeable segmentation strategies behind one extraction interface.

- LineStrategy: line-by-line scan for documents with reliable line breaks.
- BlockStrategy: date-anchored blocks for column-extracted PDF text.
- DatedEntryStrategy: "DATE: description" entries in generic documents.
"""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod

from src.event_extraction.builder import EventBuilder, clean_description
from src.event_extraction.classifier import LineClassifier, segment_lines, split_blocks
from src.event_extraction.normalizer import DateNormalizer
from src.event_extraction.patterns import (
    BLOCK_DATE_EVENT,
    BLOCK_KEYWORD_EVENT,
    DATED_ENTRY_RULES,
)
from src.event_extraction.schemas import EventCandidate

logger = logging.getLogger(__name__)

BLOCK_EVENT_CONFIDENCE = 0.8
BLOCK_KEYWORD_CONFIDENCE = 0.7
MIN_BLOCK_DESCRIPTION = 4


def _line_number(text: str, offset: int) -> int:
    """1-based line number of a character offset."""
    return text.count("\n", 0, offset) + 1


class ExtractionStrategy(ABC):
    """Produces raw event candidates from document text."""

    name: str = "base"

    @abstractmethod
    def candidates(self, text: str) -> list[EventCandidate]:
        """Return candidates in encounter order (not yet de-duplicated)."""


class LineStrategy(ExtractionStrategy):
    """Scans lines, threading section and date context from line to line."""

    name = "lines"

    def __init__(self, classifier: LineClassifier, builder: EventBuilder):
        self._classifier = classifier
        self._builder = builder

    def candidates(self, text: str) -> list[EventCandidate]:
        lines = segment_lines(text)
        events: list[EventCandidate] = []
        for context, classification in self._classifier.scan(lines):
            event = self._builder.build_from_line(classification, context, lines)
            if event is not None:
                events.append(event)
        return events


class BlockStrategy(ExtractionStrategy):
    """
    Splits text before weekday and "day month year" tokens.

    Each block is matched against a combined date+description pattern
    ("event", fixed confidence 0.8), falling back to a keyword-anchored
    pattern with a date elsewhere in the block ("calendar_entry", 0.7).
    """

    name = "blocks"

    def __init__(self, normalizer: DateNormalizer, builder: EventBuilder):
        self._normalizer = normalizer
        self._builder = builder

    def candidates(self, text: str) -> list[EventCandidate]:
        blocks = split_blocks(text)
        summaries = [clean_description(block) for _, block in blocks]
        events: list[EventCandidate] = []

        for index, (offset, block) in enumerate(blocks):
            trimmed = block.strip()
            line_number = _line_number(text, offset + (len(block) - len(block.lstrip())))
            context = self._builder.capture_context(summaries, index)

            event = self._from_date_event(trimmed, line_number, context)
            if event is None and BLOCK_DATE_EVENT.search(trimmed) is None:
                event = self._from_keyword(trimmed, line_number, context)
            if event is not None:
                events.append(event)

        return events

    def _from_date_event(
        self, block: str, line_number: int, context: str
    ) -> EventCandidate | None:
        m = BLOCK_DATE_EVENT.search(block)
        if not m:
            return None

        day = m.group("day") or "1"
        raw_date = f"{day} {m.group('month')} {m.group('year')}"
        canonical = self._normalizer.normalize(raw_date)
        description = clean_description(m.group("description"))
        if canonical is None or len(description) < MIN_BLOCK_DESCRIPTION:
            return None

        return self._builder.build_fixed(
            description=description,
            event_date=canonical,
            original_date=raw_date,
            event_type="event",
            confidence=BLOCK_EVENT_CONFIDENCE,
            source_line_number=line_number,
            context=context,
        )

    def _from_keyword(
        self, block: str, line_number: int, context: str
    ) -> EventCandidate | None:
        m = BLOCK_KEYWORD_EVENT.search(block)
        if not m or not m.group("description").strip():
            return None

        found = self._normalizer.find(block)
        if found is None or not found.resolved:
            return None

        return self._builder.build_fixed(
            description=m.group("description"),
            event_date=found.canonical,
            original_date=found.raw,
            event_type="calendar_entry",
            confidence=BLOCK_KEYWORD_CONFIDENCE,
            source_line_number=line_number,
            title=m.group("keyword"),
            context=context,
        )


class DatedEntryStrategy(ExtractionStrategy):
    """
    Finds "DATE: description" entries anywhere in the text.

    Intended for generic (non-almanac) documents, so slash dates are read
    month-first by default and the generic confidence profile applies.
    """

    name = "entries"

    def __init__(self, normalizer: DateNormalizer, builder: EventBuilder):
        self._normalizer = normalizer
        self._builder = builder

    def candidates(self, text: str) -> list[EventCandidate]:
        events: list[EventCandidate] = []
        for pattern in DATED_ENTRY_RULES:
            for m in pattern.finditer(text):
                raw_date = m.group(1).strip()
                canonical = self._normalizer.normalize(raw_date)
                event = self._builder.build_scored(
                    description=m.group(2),
                    event_date=canonical or raw_date,
                    original_date=raw_date,
                    source_line_number=_line_number(text, m.start()),
                    context=m.group(0).strip(),
                )
                if event is not None:
                    events.append(event)
        return events
