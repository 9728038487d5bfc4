"""Shared fixtures for event extraction tests."""

import pytest

from src.event_extraction.builder import EventBuilder
from src.event_extraction.classifier import LineClassifier
from src.event_extraction.config import EventExtractionConfig
from src.event_extraction.extractor import EventExtractor
from src.event_extraction.normalizer import DateNormalizer


@pytest.fixture
def event_config():
    """Default event extraction config."""
    return EventExtractionConfig()


@pytest.fixture
def extractor(event_config):
    """EventExtractor with default config."""
    return EventExtractor(config=event_config)


@pytest.fixture
def normalizer():
    """Day-first normalizer used for almanac text."""
    return DateNormalizer()


@pytest.fixture
def classifier(normalizer):
    return LineClassifier(normalizer)


@pytest.fixture
def builder():
    """EventBuilder with the almanac confidence profile."""
    return EventBuilder(context_window=1)
