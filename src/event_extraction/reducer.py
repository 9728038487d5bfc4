"""Deduplication, ordering and grouping of event candidates."""

from __future__ import annotations

import logging
from collections.abc import Iterable

from src.event_extraction.schemas import EventCandidate, EventSet

logger = logging.getLogger(__name__)


def deduplicate(events: Iterable[EventCandidate]) -> list[EventCandidate]:
    """Keep the first event for each (date, lower-cased title) key."""
    seen: set[str] = set()
    unique: list[EventCandidate] = []
    for event in events:
        key = event.dedup_key
        if key in seen:
            continue
        seen.add(key)
        unique.append(event)
    return unique


def sort_by_date(events: Iterable[EventCandidate]) -> list[EventCandidate]:
    """
    Sort ascending by canonical date.

    Events without a canonical date go last, in encounter order.
    """
    return sorted(
        events,
        key=lambda e: (0, e.date) if e.has_canonical_date else (1, ""),
    )


class EventSetReducer:
    """
    Reduces raw candidates to the final EventSet.

    Args:
        min_confidence: Candidates scoring below this are dropped.
        max_events: Keep at most this many events after sorting.
    """

    def __init__(self, min_confidence: float = 0.0, max_events: int | None = None):
        self.min_confidence = min_confidence
        self.max_events = max_events

    def reduce(self, candidates: Iterable[EventCandidate]) -> EventSet:
        kept = [c for c in candidates if c.confidence >= self.min_confidence]
        unique = deduplicate(kept)
        ordered = sort_by_date(unique)

        if self.max_events is not None and len(ordered) > self.max_events:
            logger.debug("Truncating %d events to %d", len(ordered), self.max_events)
            ordered = ordered[: self.max_events]

        return EventSet(events=tuple(ordered))
