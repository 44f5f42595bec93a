"""Storage plan data models."""

from __future__ import annotations

from enum import Enum
from pathlib import Path
from typing import List, Optional

from pydantic import BaseModel, Field


class StorageTarget(str, Enum):
    """Backend a classified file is routed to."""

    SQL_TABLE = "sql_table"
    DOCUMENT = "document"
    OBJECT = "object"


class StorageOperation(BaseModel):
    """Where a single upload would be stored.

    Attributes:
        name: Original filename.
        label: Final classification label.
        target: Storage backend selected for the label.
        folder_path: Suggested folder within the object store.
        destination: Folder path joined with the sanitized filename.
        source: Local path when the file came from ingestion.
        size: Human-readable file size when known.
    """

    name: str
    label: str
    target: StorageTarget
    folder_path: str
    destination: str
    source: Optional[Path] = None
    size: Optional[str] = None


class StoragePlan(BaseModel):
    """Aggregated routing plan for a batch of uploads."""

    operations: List[StorageOperation] = Field(default_factory=list)
    quarantined: List[str] = Field(default_factory=list)
    notes: List[str] = Field(default_factory=list)

    def counts(self) -> dict[str, int]:
        """Return the number of operations per storage target."""
        totals = {target.value: 0 for target in StorageTarget}
        for operation in self.operations:
            totals[operation.target.value] += 1
        return totals


__all__ = ["StorageTarget", "StorageOperation", "StoragePlan"]
