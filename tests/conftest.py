"""Pytest fixtures for almanac-events tests."""

from datetime import datetime, timezone
from unittest.mock import MagicMock

import pytest

from src.config.settings import Settings
from src.observability.metrics import MetricsCollector
from src.storage.event_writer import EventFileWriter

ALMANAC_TEXT = """UNIVERSITY OF DAR ES SALAAM
ALMANAC 2025/2026

FIRST SEMESTER
1st September 2025 - Registration Begins
15th September 2025 - Orientation Week for First Year Students
22nd September 2025 - Teaching Begins
Mid Semester Test
20th October 2025: Mid Semester Tests

EXAMINATION PERIOD
8th December 2025 - University Examinations Begin

CHRISTMAS HOLIDAY
25th December 2025 - Christmas Day
"""


@pytest.fixture
def test_settings(tmp_path) -> Settings:
    """Settings configured for testing."""
    return Settings(
        environment="development",
        log_level="DEBUG",
        output_dir=str(tmp_path / "out"),
        save_outputs=False,
        min_text_length=100,
    )


@pytest.fixture
def almanac_text() -> str:
    """A small line-oriented academic almanac."""
    return ALMANAC_TEXT


@pytest.fixture
def column_text() -> str:
    """Almanac text as extracted from a multi-column PDF: no line breaks."""
    return (
        "Monday 1st September 2025 Registration of new students "
        "Tuesday 2nd September 2025 Orientation week begins for first years "
        "Friday 12th December 2025 End of first semester examinations "
        "Results Release 15/01/2026"
    )


@pytest.fixture
def metrics() -> MagicMock:
    """Metrics collector stand-in; records calls without a registry."""
    return MagicMock(spec=MetricsCollector)


@pytest.fixture
def fixed_clock():
    """Clock returning a fixed UTC instant."""
    instant = datetime(2025, 9, 1, 12, 0, 0, tzinfo=timezone.utc)
    return lambda: instant


@pytest.fixture
def event_writer(tmp_path, fixed_clock) -> EventFileWriter:
    """Writer targeting a per-test output directory."""
    return EventFileWriter(tmp_path / "out", clock=fixed_clock)
