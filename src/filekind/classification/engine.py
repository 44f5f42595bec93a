"""Classification engine composing category and JSON shape detection.

The engine runs the category classifier first. Only files categorised as
JSON have their text inspected, and the resulting shape becomes the final
label. Both classifiers are total, so the engine never has to recover from a
classifier failure; errors collected in a batch come from malformed requests.
"""

from __future__ import annotations

import logging
from typing import Iterable, Optional

from .category import classify_category, extension_of
from .json_shape import classify_json_shape
from .models import (
    Category,
    ClassificationBatch,
    ClassificationDecision,
    ClassificationRequest,
)

LOGGER = logging.getLogger(__name__)


def requires_content(name: str, media_type: str) -> bool:
    """Return True when classifying the file needs its decoded text."""
    return classify_category(name, media_type) is Category.JSON


class ClassificationEngine:
    """Classify uploaded files into categories and JSON shapes.

    Args:
        max_json_bytes: Largest JSON payload, in UTF-8 bytes, that will be
            parsed. ``None`` disables the guard.
    """

    def __init__(self, max_json_bytes: Optional[int] = None) -> None:
        self.max_json_bytes = max_json_bytes

    def classify_file(
        self,
        name: str,
        media_type: str,
        content: Optional[str] = None,
    ) -> ClassificationDecision:
        """Classify a single file.

        Args:
            name: Filename of the upload.
            media_type: Declared media type; may be empty.
            content: Decoded text of the file, consulted only for JSON files.

        Returns:
            ClassificationDecision: Category plus JSON shape when available.
        """
        category = classify_category(name, media_type)
        ext = extension_of(name) or "<none>"
        decision = ClassificationDecision(
            category=category,
            reasoning=f"category={category.value} from media_type={media_type or '<empty>'} ext={ext}",
        )
        if category is not Category.JSON:
            return decision

        if content is None:
            decision.notes.append("JSON content unavailable; shape not inspected.")
            return decision

        if self.max_json_bytes is not None:
            size = len(content.encode("utf-8", errors="replace"))
            if size > self.max_json_bytes:
                LOGGER.info("Skipping JSON shape detection for %s (%d bytes).", name, size)
                decision.notes.append(
                    f"JSON content exceeds {self.max_json_bytes} bytes; shape not inspected."
                )
                return decision

        decision.json_shape = classify_json_shape(content)
        decision.reasoning = f"{decision.reasoning} shape={decision.json_shape.value}"
        LOGGER.debug("Classified %s as %s", name, decision.label)
        return decision

    def classify(self, requests: Iterable[ClassificationRequest]) -> ClassificationBatch:
        """Classify each request, collecting per-request failures.

        Args:
            requests: Iterable of classification requests to evaluate.

        Returns:
            ClassificationBatch: Decisions aligned with ``requests`` and errors.
        """
        batch = ClassificationBatch()
        for request in requests:
            descriptor = request.descriptor
            try:
                decision = self.classify_file(
                    descriptor.name,
                    descriptor.media_type,
                    descriptor.content,
                )
            except Exception as exc:  # pragma: no cover - defensive safeguard
                LOGGER.warning("Classification failed for %s: %s", descriptor.name, exc)
                batch.decisions.append(None)
                batch.errors.append(f"{descriptor.path or descriptor.name}: {exc}")
                continue
            batch.decisions.append(decision)
        return batch
