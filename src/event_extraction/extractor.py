"""Extraction entry point: raw text in, EventSet out.

Picks a segmentation strategy from the observed text quality (or from
configuration), runs it, and reduces the candidates into a de-duplicated,
date-ordered EventSet.
"""

from __future__ import annotations

import logging

from src.event_extraction.builder import EventBuilder
from src.event_extraction.classifier import LineClassifier, has_reliable_line_breaks
from src.event_extraction.config import EventExtractionConfig
from src.event_extraction.normalizer import DateNormalizer
from src.event_extraction.patterns import DEFAULT_RULES, RuleSet
from src.event_extraction.reducer import EventSetReducer
from src.event_extraction.schemas import EventCandidate, EventSet
from src.event_extraction.scoring import GENERIC_PROFILE, ConfidenceScorer
from src.event_extraction.strategies import (
    BlockStrategy,
    DatedEntryStrategy,
    ExtractionStrategy,
    LineStrategy,
)

logger = logging.getLogger(__name__)


class EventExtractor:
    """
    Heuristic calendar event extractor for almanac text.

    Stateless between calls: each extract() builds its own parse state, so
    one instance can be shared across threads.

    Usage:
        extractor = EventExtractor()
        event_set = extractor.extract(text)
    """

    def __init__(
        self,
        config: EventExtractionConfig | None = None,
        rules: RuleSet = DEFAULT_RULES,
    ):
        self._config = config or EventExtractionConfig()

        calendar_normalizer = DateNormalizer(self._config.slash_date_order)
        builder = EventBuilder(
            rules=rules,
            scorer=ConfidenceScorer.for_profile(self._config.confidence_profile),
            context_window=self._config.context_window,
        )
        generic_builder = EventBuilder(
            rules=rules,
            scorer=ConfidenceScorer(GENERIC_PROFILE),
            context_window=self._config.context_window,
        )

        strategies: list[ExtractionStrategy] = [
            LineStrategy(LineClassifier(calendar_normalizer, rules), builder),
            BlockStrategy(calendar_normalizer, builder),
            DatedEntryStrategy(DateNormalizer("mdy"), generic_builder),
        ]
        self._strategies = {s.name: s for s in strategies}
        self._reducer = EventSetReducer(
            min_confidence=self._config.min_confidence,
            max_events=self._config.max_events_per_doc,
        )

    @property
    def config(self) -> EventExtractionConfig:
        return self._config

    def select_strategies(self, text: str, strategy: str | None = None) -> list[str]:
        """
        Resolve the configured strategy into the names to run.

        "auto" uses lines when the text has reliable line breaks and
        blocks otherwise; "merged" runs both.
        """
        strategy = strategy or self._config.strategy
        if strategy == "auto":
            if has_reliable_line_breaks(text, self._config.max_avg_line_length):
                return ["lines"]
            return ["blocks"]
        if strategy == "merged":
            return ["lines", "blocks"]
        return [strategy]

    def extract(self, text: str | None, strategy: str | None = None) -> EventSet:
        """
        Extract calendar events from raw document text.

        Args:
            text: Raw text. Empty or missing text yields an empty EventSet.
            strategy: Optional strategy name overriding the configuration.

        Returns:
            De-duplicated EventSet sorted by date.
        """
        if not text or not text.strip():
            return EventSet()

        names = self.select_strategies(text, strategy)
        candidates: list[EventCandidate] = []
        for name in names:
            if name not in self._strategies:
                raise ValueError(f"Unknown extraction strategy: {name!r}")
            found = self._strategies[name].candidates(text)
            logger.debug("Strategy %s produced %d candidates", name, len(found))
            candidates.extend(found)

        event_set = self._reducer.reduce(candidates)
        logger.info(
            "Extracted %d events (%d candidates) using %s",
            len(event_set),
            len(candidates),
            "+".join(names),
        )
        return event_set
