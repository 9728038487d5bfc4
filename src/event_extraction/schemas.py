"""Schema definitions for extracted calendar events.

Provides the EventType literals, the EventCandidate record produced by the
builder, the immutable EventSet returned to callers and the LineContext
state threaded through line scanning.
"""

import re
from dataclasses import dataclass, field, replace
from typing import Any, Literal

EventType = Literal[
    "Registration",
    "Examination",
    "Academic",
    "Holiday",
    "Graduation",
    "Deadline",
    "Orientation",
    "General",
    "event",
    "calendar_entry",
]

VALID_EVENT_TYPES: set[str] = {
    "Registration",
    "Examination",
    "Academic",
    "Holiday",
    "Graduation",
    "Deadline",
    "Orientation",
    "General",
    "event",
    "calendar_entry",
}

_CANONICAL_DATE = re.compile(r"^\d{4}-\d{2}-\d{2}$")


def is_canonical_date(value: str | None) -> bool:
    """Check whether a value is a YYYY-MM-DD string."""
    return bool(value) and _CANONICAL_DATE.match(value) is not None


@dataclass(frozen=True)
class LineContext:
    """
    Parse state carried from one line to the next.

    Attributes:
        section: Most recent section header seen, or empty.
        current_date: Last successfully normalized date, or None.
    """

    section: str = ""
    current_date: str | None = None

    def with_section(self, section: str) -> "LineContext":
        return replace(self, section=section)

    def with_date(self, current_date: str) -> "LineContext":
        return replace(self, current_date=current_date)


@dataclass(frozen=True)
class EventCandidate:
    """
    A calendar event extracted from document text.

    Attributes:
        title: Short human-readable title derived from the description.
        description: Cleaned source line or block text.
        date: Canonical YYYY-MM-DD date, the raw date token when it could
            not be normalized, or None when no date was found at all.
        type: Event category (see EventType).
        confidence: Heuristic extraction confidence (0.0-1.0).
        source_line_number: 1-based line number of the triggering text.
        section: Most recent section header, or empty.
        context: Neighbouring lines, for human inspection only.
        original_date: Raw date substring as it appeared in the text.
    """

    title: str
    description: str
    date: str | None
    type: str
    confidence: float
    source_line_number: int
    section: str = ""
    context: str = ""
    original_date: str | None = None

    @property
    def has_canonical_date(self) -> bool:
        """True when the date field holds a normalized YYYY-MM-DD value."""
        return is_canonical_date(self.date)

    @property
    def dedup_key(self) -> str:
        """Uniqueness key: normalized date plus lower-cased title."""
        return f"{self.date or ''}|{self.title.strip().lower()}"

    def to_dict(self) -> dict[str, Any]:
        """Convert event to dictionary for JSON serialization."""
        return {
            "title": self.title,
            "description": self.description,
            "date": self.date,
            "type": self.type,
            "section": self.section,
            "confidence": self.confidence,
            "context": self.context,
            "source_line_number": self.source_line_number,
            "original_date": self.original_date,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "EventCandidate":
        """
        Create EventCandidate from dictionary.

        Args:
            data: Dictionary with event fields.

        Returns:
            EventCandidate instance.
        """
        return cls(
            title=data["title"],
            description=data["description"],
            date=data.get("date"),
            type=data.get("type", "General"),
            confidence=data.get("confidence", 0.5),
            source_line_number=data.get("source_line_number", 1),
            section=data.get("section", ""),
            context=data.get("context", ""),
            original_date=data.get("original_date"),
        )


@dataclass(frozen=True)
class EventSet:
    """
    Ordered, de-duplicated events from a single extraction call.

    Attributes:
        events: Events sorted by date, unresolved dates last.
    """

    events: tuple[EventCandidate, ...] = field(default_factory=tuple)

    def __len__(self) -> int:
        return len(self.events)

    def __iter__(self):
        return iter(self.events)

    def __bool__(self) -> bool:
        return bool(self.events)

    def group_by_type(self) -> dict[str, list[EventCandidate]]:
        """Partition events by type, keeping the global order in each group."""
        grouped: dict[str, list[EventCandidate]] = {}
        for event in self.events:
            grouped.setdefault(event.type, []).append(event)
        return grouped

    def to_dict(self) -> dict[str, Any]:
        """Convert the set to a JSON-serializable dictionary."""
        return {
            "total_events": len(self.events),
            "events": [e.to_dict() for e in self.events],
            "event_types": {
                event_type: [e.to_dict() for e in events]
                for event_type, events in self.group_by_type().items()
            },
        }
