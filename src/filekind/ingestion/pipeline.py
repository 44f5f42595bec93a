"""High-level ingestion pipeline orchestration."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Callable, Iterable, Optional

from filekind.config.models import ProcessingOptions

from .detectors import TypeDetector
from .discovery import DirectoryScanner
from .extractors import ContentReader
from .models import FileDescriptor, IngestionResult

LOGGER = logging.getLogger(__name__)

ContentPredicate = Callable[[str, str], bool]


class IngestionPipeline:
    """Coordinate discovery, detection, and content reads to produce descriptors.

    Text content is only read for files accepted by ``wants_content``, which
    receives the filename and detected media type.
    """

    def __init__(
        self,
        scanner: DirectoryScanner,
        detector: TypeDetector,
        reader: ContentReader,
        processing: ProcessingOptions,
        wants_content: Optional[ContentPredicate] = None,
    ) -> None:
        self.scanner = scanner
        self.detector = detector
        self.reader = reader
        self.processing = processing
        self.wants_content = wants_content

    def run(self, roots: Iterable[Path]) -> IngestionResult:
        """Process one or more roots and return aggregated results."""
        result = IngestionResult()
        content_limit = self.processing.max_json_kb * 1024

        for root in roots:
            for pending in self.scanner.scan(root.expanduser()):
                if pending.oversized:
                    LOGGER.debug("Skipping oversized file %s", pending.path)
                    result.skipped.append(pending.path)
                    continue

                name = pending.path.name
                media_type = self.detector.detect(pending.path)
                metadata: dict[str, str] = {}
                if pending.modified_at is not None:
                    metadata["modified_at"] = pending.modified_at.isoformat()

                content = None
                wants = self.wants_content is not None and self.wants_content(name, media_type)
                if wants and not pending.exceeds_content_limit:
                    try:
                        content = self.reader.read_text(pending.path, limit=content_limit)
                    except OSError as exc:
                        result.errors.append(f"{pending.path}: {exc}")
                        continue
                if wants and content is None:
                    metadata["content_skipped"] = f"larger than {content_limit} bytes"

                result.processed.append(
                    FileDescriptor(
                        name=name,
                        media_type=media_type,
                        path=pending.path,
                        size_bytes=pending.size_bytes,
                        content=content,
                        metadata=metadata,
                    )
                )

        return result
