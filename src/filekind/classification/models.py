"""Classification data models."""

from __future__ import annotations

from enum import Enum
from typing import List, Optional

from pydantic import BaseModel, Field

from filekind.ingestion.models import FileDescriptor


class Category(str, Enum):
    """Coarse file-kind label derived from a filename and media type."""

    IMAGE = "Image"
    VIDEO = "Video"
    AUDIO = "Audio"
    DOCUMENT = "Document"
    ARCHIVE = "Archive"
    TEXT = "Text"
    CODE = "Code"
    JSON = "JSON"
    SQL = "SQL"
    GENERAL = "General"


class JSONShape(str, Enum):
    """Inferred structure of a JSON payload."""

    SQL = "SQLJSON"
    NOSQL = "NoSQLJSON"
    CORRUPTED = "CorruptedJSON"


class ClassificationRequest(BaseModel):
    """Input to the classification engine.

    Attributes:
        descriptor: File descriptor to classify.
    """

    descriptor: FileDescriptor


class ClassificationDecision(BaseModel):
    """Result of classifying a single file.

    Attributes:
        category: Category assigned from the name and media type.
        json_shape: Shape of the JSON payload when the category is JSON and
            content was inspected.
        notes: Remarks collected while classifying (skipped parses and so on).
        reasoning: Human-readable summary of the rule that matched.
    """

    category: Category
    json_shape: Optional[JSONShape] = None
    notes: List[str] = Field(default_factory=list)
    reasoning: Optional[str] = None

    @property
    def label(self) -> str:
        """Return the most specific label available for the file."""
        if self.json_shape is not None:
            return self.json_shape.value
        return self.category.value


class ClassificationBatch(BaseModel):
    """Aggregated classification results.

    Attributes:
        decisions: Decisions aligned with the submitted requests; ``None`` marks
            a request that failed.
        errors: Error messages collected during classification.
    """

    decisions: List[Optional[ClassificationDecision]] = Field(default_factory=list)
    errors: List[str] = Field(default_factory=list)


__all__ = [
    "Category",
    "JSONShape",
    "ClassificationRequest",
    "ClassificationDecision",
    "ClassificationBatch",
]
