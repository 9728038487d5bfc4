"""Configuration for the event extraction core.

Uses Pydantic settings for environment-based configuration,
following the same pattern as other service configs in the project.
"""

from typing import Literal

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class EventExtractionConfig(BaseSettings):
    """
    Configuration for the Event Extraction core.

    All settings can be overridden via environment variables with EVENTS_ prefix.
    Example: EVENTS_SLASH_DATE_ORDER=mdy

    Attributes:
        extractor_version: Version string for extractor provenance tracking.
        strategy: Segmentation strategy ("auto" picks lines or blocks).
        slash_date_order: How to read ambiguous D/D/YYYY dates.
        confidence_profile: Which confidence rule set to score with.
        min_confidence: Minimum confidence threshold for event inclusion.
        max_events_per_doc: Maximum events to keep for a single document.
        context_window: Neighbouring lines captured on each side of an event.
        max_avg_line_length: Above this average, line breaks are unreliable.
    """

    model_config = SettingsConfigDict(
        env_prefix="EVENTS_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    extractor_version: str = Field(
        default="1.0.0",
        description="Version string for extractor provenance tracking.",
    )
    strategy: Literal["auto", "lines", "blocks", "entries", "merged"] = Field(
        default="auto",
        description="Segmentation strategy used by EventExtractor.",
    )
    slash_date_order: Literal["dmy", "mdy"] = Field(
        default="dmy",
        description="Day/month order for numeric slash dates in calendar text.",
    )
    confidence_profile: Literal["almanac", "generic"] = Field(
        default="almanac",
        description="Confidence rule set for line-based candidates.",
    )
    min_confidence: float = Field(
        default=0.0,
        ge=0.0,
        le=1.0,
        description="Minimum confidence score for event inclusion.",
    )
    max_events_per_doc: int = Field(
        default=500,
        ge=1,
        le=5000,
        description="Maximum events to keep from a single document.",
    )
    context_window: int = Field(
        default=2,
        ge=0,
        le=10,
        description="Lines of context captured before and after an event line.",
    )
    max_avg_line_length: int = Field(
        default=160,
        ge=20,
        description="Average line length above which blocks are used instead of lines.",
    )
