"""Classification package."""

from .category import classify_category
from .engine import ClassificationEngine, requires_content
from .json_shape import classify_json_shape
from .models import (
    Category,
    ClassificationBatch,
    ClassificationDecision,
    ClassificationRequest,
    JSONShape,
)

__all__ = [
    "Category",
    "ClassificationBatch",
    "ClassificationDecision",
    "ClassificationEngine",
    "ClassificationRequest",
    "JSONShape",
    "classify_category",
    "classify_json_shape",
    "requires_content",
]
