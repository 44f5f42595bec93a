"""Ingestion pipeline package."""

from .models import FileDescriptor, IngestionResult, PendingFile
from .pipeline import IngestionPipeline

__all__ = ["FileDescriptor", "IngestionPipeline", "IngestionResult", "PendingFile"]
