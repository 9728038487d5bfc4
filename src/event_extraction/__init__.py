"""
Calendar event extraction for academic almanac text.

This module provides the heuristic extraction-and-normalization core:
line segmentation, section/date detection, multi-format date parsing,
event-line classification, confidence scoring, deduplication and ordering.

Components:
- EventExtractionConfig: Configuration for the extractor
- EventExtractor: Raw text in, EventSet out
- EventCandidate / EventSet: Extracted records and the final ordered set
- DateNormalizer: Date substring to YYYY-MM-DD normalizer
- LineClassifier: Section header / date / event line heuristics
"""

from src.event_extraction.classifier import LineClassifier
from src.event_extraction.config import EventExtractionConfig
from src.event_extraction.extractor import EventExtractor
from src.event_extraction.normalizer import DateNormalizer
from src.event_extraction.schemas import EventCandidate, EventSet, EventType, LineContext

__all__ = [
    "DateNormalizer",
    "EventCandidate",
    "EventExtractionConfig",
    "EventExtractor",
    "EventSet",
    "EventType",
    "LineClassifier",
    "LineContext",
]
