"""
Raw document schema handed from text acquisition to the extraction core.
"""

from typing import Literal

from pydantic import BaseModel, Field

ExtractionMethod = Literal["pypdf", "buffer", "text"]


class RawDocument(BaseModel):
    """
    Text acquired from a source document.

    Ephemeral: created per extraction call and never stored by the core.
    """

    text: str = Field(..., description="Full document text, pages joined by newlines")
    page_count: int = Field(default=1, ge=1, description="Number of pages in the source")
    source: str = Field(default="", description="Original file name or path")
    extraction_method: ExtractionMethod = Field(
        default="text",
        description="How the text was obtained",
    )
    file_size: int | None = Field(default=None, ge=0, description="Source size in bytes")

    @property
    def text_length(self) -> int:
        return len(self.text)
