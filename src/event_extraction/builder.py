"""Event candidate construction.

Turns a classified line (or a date-anchored block) plus the current parse
context into an EventCandidate: cleaned description, derived title,
category, confidence and a small window of neighbouring lines.
"""

from __future__ import annotations

import re
from collections.abc import Sequence

from src.event_extraction.classifier import LineClassification
from src.event_extraction.patterns import DEFAULT_RULES, RuleSet
from src.event_extraction.schemas import EventCandidate, LineContext, is_canonical_date
from src.event_extraction.scoring import ConfidenceScorer

_WHITESPACE = re.compile(r"\s+")
_LEADING_LABEL = re.compile(r"^(?:date|time|event)\s*:\s*", re.IGNORECASE)
_TRAILING_LABEL = re.compile(r"\s+(?:date|time|event)$", re.IGNORECASE)
_EDGE_PUNCTUATION = re.compile(r"^[-–—:\s]+|[-–—:\s]+$")

MAX_TITLE_WORDS = 6
MAX_TITLE_KEYWORDS = 4


def clean_description(text: str | None) -> str:
    """
    Normalize a raw line into a description.

    Collapses whitespace, strips edge colons/dashes and a leading or
    trailing "date"/"time"/"event" label, and capitalizes the first letter.
    """
    if not text:
        return ""
    cleaned = _WHITESPACE.sub(" ", text).strip()
    cleaned = _LEADING_LABEL.sub("", cleaned)
    cleaned = _TRAILING_LABEL.sub("", cleaned)
    cleaned = _EDGE_PUNCTUATION.sub("", cleaned).strip()
    if cleaned and cleaned[0].islower():
        cleaned = cleaned[0].upper() + cleaned[1:]
    return cleaned


class EventBuilder:
    """
    Builds EventCandidate records from classified text.

    Args:
        rules: Keyword and category tables.
        scorer: Confidence scorer for keyword-derived candidates.
        context_window: Lines captured on each side of the event line.
    """

    def __init__(
        self,
        rules: RuleSet = DEFAULT_RULES,
        scorer: ConfidenceScorer | None = None,
        context_window: int = 2,
    ):
        self._rules = rules
        self._scorer = scorer or ConfidenceScorer()
        self._context_window = context_window

    def derive_title(self, description: str) -> str:
        """
        Short descriptions are their own title; longer ones are reduced to
        up to 4 academic keywords, or the first 6 words plus an ellipsis.
        """
        words = description.split(" ")
        if len(words) <= MAX_TITLE_WORDS:
            return description

        key_terms = [w for w in words if self._rules.is_keyword_token(w)]
        if key_terms:
            return " ".join(key_terms[:MAX_TITLE_KEYWORDS])

        return " ".join(words[:MAX_TITLE_WORDS]) + "..."

    def classify_type(self, description: str) -> str:
        return self._rules.categorize(description)

    def capture_context(self, items: Sequence[str], index: int) -> str:
        """Join up to context_window items on either side of index."""
        start = max(0, index - self._context_window)
        end = min(len(items), index + self._context_window + 1)
        return " | ".join(items[start:end])

    def build_from_line(
        self,
        classification: LineClassification,
        context: LineContext,
        lines: Sequence[str],
    ) -> EventCandidate | None:
        """
        Build a candidate from a classified line.

        The line's own date wins over the inherited one, except for a loose
        label such as "Sometime in May", which is only used when nothing is
        inherited. An unresolved date keeps its raw token. Lines with no date
        at all are only kept when they carry academic vocabulary.
        """
        if classification.is_section_header or not classification.is_event_line:
            return None

        description = clean_description(classification.line)
        if not description:
            return None

        found = classification.date
        if found is not None and found.shape == "label" and context.current_date is not None:
            # a loose label never overrides a date carried from earlier lines
            found = None
        if found is not None:
            event_date = found.canonical or found.raw
            original_date = found.raw
        elif context.current_date is not None:
            event_date = context.current_date
            original_date = None
        elif classification.is_strong:
            event_date = None
            original_date = None
        else:
            return None

        event_type = self.classify_type(description)
        confidence = self._scorer.score(
            description,
            original_date,
            event_type,
            date_resolved=is_canonical_date(event_date),
        )

        return EventCandidate(
            title=self.derive_title(description),
            description=description,
            date=event_date,
            type=event_type,
            confidence=confidence,
            source_line_number=classification.index + 1,
            section=context.section,
            context=self.capture_context(lines, classification.index),
            original_date=original_date,
        )

    def build_fixed(
        self,
        description: str,
        event_date: str,
        original_date: str,
        event_type: str,
        confidence: float,
        source_line_number: int,
        title: str | None = None,
        context: str = "",
    ) -> EventCandidate | None:
        """Build a candidate with a fixed type and confidence (block path)."""
        description = clean_description(description)
        if not description:
            return None
        title = clean_description(title) if title else self.derive_title(description)
        return EventCandidate(
            title=title or description,
            description=description,
            date=event_date,
            type=event_type,
            confidence=confidence,
            source_line_number=source_line_number,
            context=context,
            original_date=original_date,
        )

    def build_scored(
        self,
        description: str,
        event_date: str | None,
        original_date: str | None,
        source_line_number: int,
        context: str = "",
    ) -> EventCandidate | None:
        """Build a keyword-categorized, scored candidate outside a line scan."""
        description = clean_description(description)
        if not description:
            return None
        event_type = self.classify_type(description)
        return EventCandidate(
            title=self.derive_title(description),
            description=description,
            date=event_date,
            type=event_type,
            confidence=self._scorer.score(
                description,
                original_date,
                event_type,
                date_resolved=is_canonical_date(event_date),
            ),
            source_line_number=source_line_number,
            context=context,
            original_date=original_date,
        )
