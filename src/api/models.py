"""
Request and response models for the extraction API.
"""

from pydantic import BaseModel, Field


class ErrorResponse(BaseModel):
    """Response model for errors."""

    detail: str = Field(
        ...,
        description="Error message",
    )
    error_type: str = Field(
        default="error",
        description="Error type",
    )


class HealthResponse(BaseModel):
    """Response model for health check."""

    status: str = Field(..., description="Overall service status")
    version: str = Field(..., description="Extractor version")
    strategy: str = Field(..., description="Configured extraction strategy")
    output_dir_writable: bool = Field(
        default=False,
        description="Whether the output directory can be written to",
    )


class EventItem(BaseModel):
    """A single extracted calendar event."""

    title: str
    description: str
    date: str | None = Field(
        default=None,
        description="YYYY-MM-DD, or the raw date text when it could not be parsed",
    )
    type: str = Field(..., description="Event category")
    section: str = Field(default="", description="Most recent section header")
    confidence: float = Field(..., ge=0.0, le=1.0)
    context: str = Field(default="", description="Neighbouring lines")
    source_line_number: int = Field(..., ge=1)
    original_date: str | None = None


class UploadedFileInfo(BaseModel):
    """Metadata about the processed upload."""

    original_name: str
    size: int
    mimetype: str | None = None
    fieldname: str | None = None


class ExtractionPayload(BaseModel):
    """Extraction output for one document."""

    total_pages: int
    total_events: int
    events: list[EventItem]
    event_types: dict[str, list[EventItem]] = Field(default_factory=dict)
    metadata: dict = Field(default_factory=dict)


class SavedFile(BaseModel):
    """Persistence outcome for one output format."""

    success: bool
    file_path: str | None = None
    file_name: str | None = None
    error: str | None = None


class ExtractResponse(BaseModel):
    """Response model for POST /extract."""

    message: str
    file: UploadedFileInfo
    extraction: ExtractionPayload
    saved_files: dict[str, SavedFile] = Field(default_factory=dict)
