"""Line segmentation and classification for almanac text.

Splits raw document text into lines (or date-anchored blocks when line
breaks are unreliable) and classifies each line as a section header, a
date-bearing line and/or an event line. Parse state is an immutable
LineContext folded over the line sequence.
"""

from __future__ import annotations

import re
from collections.abc import Iterator
from dataclasses import dataclass

from src.event_extraction.normalizer import DateMatch, DateNormalizer
from src.event_extraction.patterns import BLOCK_BOUNDARY, DEFAULT_RULES, RuleSet
from src.event_extraction.schemas import LineContext

_LINE_BREAK = re.compile(r"\r\n|\r|\n")


@dataclass(frozen=True)
class LineClassification:
    """
    Classification of a single line.

    Attributes:
        line: The stripped line text.
        index: 0-based position in the segmented line list.
        is_section_header: Line is a structural label.
        date: Date found on the line (resolved or raw), if any.
        is_event_line: Line looks like it describes an event.
        has_keyword: Line contains academic-process vocabulary.
    """

    line: str
    index: int
    is_section_header: bool = False
    date: DateMatch | None = None
    is_event_line: bool = False
    has_keyword: bool = False

    @property
    def is_date_bearing(self) -> bool:
        return self.date is not None

    @property
    def is_strong(self) -> bool:
        """A keyword or a date on the line itself, not just an activity verb."""
        return self.has_keyword or self.date is not None


def segment_lines(text: str) -> list[str]:
    """Split text into stripped, non-empty lines."""
    if not text:
        return []
    return [line.strip() for line in _LINE_BREAK.split(text) if line.strip()]


def split_blocks(text: str) -> list[tuple[int, str]]:
    """
    Split text before each weekday name or "day month year" token.

    Used for column-extracted PDF text that lacks reliable line breaks.

    Returns:
        (start_offset, block_text) pairs for non-blank blocks.
    """
    if not text:
        return []
    cuts = sorted({0, *(m.start() for m in BLOCK_BOUNDARY.finditer(text))})
    cuts.append(len(text))
    blocks: list[tuple[int, str]] = []
    for start, end in zip(cuts, cuts[1:]):
        chunk = text[start:end]
        if chunk.strip():
            blocks.append((start, chunk))
    return blocks


def has_reliable_line_breaks(text: str, max_avg_line_length: int) -> bool:
    """Check whether text is split into reasonably short lines."""
    lines = segment_lines(text)
    if not lines:
        return False
    average = sum(len(line) for line in lines) / len(lines)
    return average <= max_avg_line_length


class LineClassifier:
    """
    Classifies almanac lines using keyword and date heuristics.

    Deliberately permissive: false positives are filtered later by
    confidence scoring, not here.

    Usage:
        classifier = LineClassifier()
        for context, item in classifier.scan(segment_lines(text)):
            ...
    """

    def __init__(
        self,
        normalizer: DateNormalizer | None = None,
        rules: RuleSet = DEFAULT_RULES,
    ):
        self._normalizer = normalizer or DateNormalizer()
        self._rules = rules

    def is_section_header(self, line: str) -> bool:
        """
        A structural phrase, or a short all-capitals line of at most 5 words.

        Lines carrying a recognized date are never headers.
        """
        if self._normalizer.has_date(line):
            return False
        if any(rule.matches(line) for rule in self._rules.sections):
            return True
        return len(line) < 50 and line.isupper() and len(line.split()) <= 5

    def find_date(self, line: str) -> DateMatch | None:
        """Locate a recognized date, falling back to a raw date label."""
        return self._normalizer.find(line) or self._normalizer.find_label(line)

    def is_event_line(self, line: str, date: DateMatch | None = None) -> bool:
        if date is not None or self._rules.has_keyword(line):
            return True
        return any(rule.matches(line) for rule in self._rules.activities)

    def step(
        self, context: LineContext, line: str, index: int
    ) -> tuple[LineContext, LineClassification]:
        """
        Classify one line and return the updated parse state.

        Header lines update the section and are not classified further.
        A resolved date becomes the current date; an unresolved one leaves
        the current date unchanged.
        """
        if self.is_section_header(line):
            return (
                context.with_section(line),
                LineClassification(line=line, index=index, is_section_header=True),
            )

        date = self.find_date(line)
        if date is not None and date.resolved:
            context = context.with_date(date.canonical)

        classification = LineClassification(
            line=line,
            index=index,
            date=date,
            is_event_line=self.is_event_line(line, date),
            has_keyword=self._rules.has_keyword(line),
        )
        return context, classification

    def scan(self, lines: list[str]) -> Iterator[tuple[LineContext, LineClassification]]:
        """Fold step() over the lines, starting from an empty context."""
        context = LineContext()
        for index, line in enumerate(lines):
            context, classification = self.step(context, line, index)
            yield context, classification
