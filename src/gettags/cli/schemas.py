"""Pydantic schemas for JSON output validation.

Every --json document printed by the CLI is built from one of these models,
so the structure stays the same across commands and None values can be
left out of the output.

Commands using Pydantic validation:
- show: ShowSuccessResponse | FieldResponse | ErrorResponse
- cover: CoverSuccessResponse | ErrorResponse
"""

from typing import Dict, List, Literal, Optional

from pydantic import BaseModel, Field


# ============================================================================
# Base Response Models
# ============================================================================


class ErrorResponse(BaseModel):
    """Standard error response for all commands.

    Attributes:
        status: Always "error" for error responses
        error: Machine-readable error code (e.g., "truncated", "unsupported")
        message: Human-readable error message
        path: File the error refers to, if any
    """

    status: Literal["error"] = "error"
    error: str = Field(
        description="Machine-readable error code",
        examples=["read_failed", "truncated", "out_of_memory", "unsupported", "no_cover"],
    )
    message: str = Field(description="Human-readable error description")
    path: Optional[str] = Field(default=None, description="File the error refers to")


# ============================================================================
# Show Command Responses
# ============================================================================


class TagItem(BaseModel):
    """One tag as stored in the file.

    Attributes:
        id: Format-specific tag name (TIT2, ARTIST, nam, ...)
        value: Text value, or None for binary tags
        binary: True if the value is not text
    """

    id: str = Field(description="Format-specific tag name")
    value: Optional[str] = Field(default=None, description="Text value")
    binary: bool = Field(default=False, description="True for binary tags")


class ShowSuccessResponse(BaseModel):
    """All tags of one file.

    Attributes:
        status: Always "success"
        path: File that was read
        format: Container the tags were found in
        version: Tag version, when the format has one (ID3v2)
        tags: Tags in file order
        cover: MIME type of the front cover, if there is one
        common: Common field values, when a summary was requested
    """

    status: Literal["success"] = "success"
    path: str = Field(description="File that was read")
    format: str = Field(description="Container format", examples=["id3v2", "flac", "ogg", "mp4"])
    version: Optional[str] = Field(default=None, description="Tag version")
    tags: List[TagItem] = Field(default_factory=list, description="Tags in file order")
    cover: Optional[str] = Field(default=None, description="Front cover MIME type")
    common: Optional[Dict[str, Optional[str]]] = Field(
        default=None, description="Common field values"
    )


class FieldResponse(BaseModel):
    """One field looked up in one file.

    Attributes:
        status: "success" if the field was found, otherwise "missing"
        path: File that was read
        field: Common field name or exact tag id that was looked up
        value: Text of the field, if found
    """

    status: Literal["success", "missing"]
    path: str = Field(description="File that was read")
    field: str = Field(description="Field name or tag id")
    value: Optional[str] = Field(default=None, description="Field text")


# ============================================================================
# Cover Command Response
# ============================================================================


class CoverSuccessResponse(BaseModel):
    """Response when a cover image was written.

    Attributes:
        status: Always "success"
        source: Audio file the cover came from
        destination: Image file written
        mime: Image MIME type
        size: Image size in bytes
    """

    status: Literal["success"] = "success"
    source: str = Field(description="Audio file the cover came from")
    destination: str = Field(description="Image file written")
    mime: str = Field(description="Image MIME type")
    size: int = Field(ge=0, description="Image size in bytes")
