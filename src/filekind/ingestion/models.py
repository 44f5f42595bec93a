"""Ingestion data models."""

from __future__ import annotations

from datetime import datetime
from pathlib import Path
from typing import Dict, List, Optional

from pydantic import BaseModel, Field


class PendingFile(BaseModel):
    """A file discovered on disk that has not been inspected yet.

    Attributes:
        path: Location of the file.
        size_bytes: Size reported by the filesystem.
        modified_at: Last modification time in UTC.
        oversized: Whether the file exceeds the upload size cap.
        exceeds_content_limit: Whether the file is too large to read for
            content inspection.
    """

    path: Path
    size_bytes: int
    modified_at: Optional[datetime] = None
    oversized: bool = False
    exceeds_content_limit: bool = False


class FileDescriptor(BaseModel):
    """Name, declared media type, and optional text of a file to classify.

    Attributes:
        name: Filename including its extension, if any.
        media_type: Declared content type; empty when unknown.
        path: Location on disk when the file came from ingestion.
        size_bytes: File size when known.
        content: Decoded text, populated only for files that need content
            inspection.
        metadata: Extra string metadata gathered during ingestion.
    """

    name: str
    media_type: str = ""
    path: Optional[Path] = None
    size_bytes: Optional[int] = None
    content: Optional[str] = None
    metadata: Dict[str, str] = Field(default_factory=dict)


class IngestionResult(BaseModel):
    """Aggregated output of an ingestion run."""

    processed: List[FileDescriptor] = Field(default_factory=list)
    skipped: List[Path] = Field(default_factory=list)
    errors: List[str] = Field(default_factory=list)


__all__ = ["PendingFile", "FileDescriptor", "IngestionResult"]
