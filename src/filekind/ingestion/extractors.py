"""Content extraction helpers."""

from __future__ import annotations

from pathlib import Path
from typing import Optional


class ContentReader:
    """Decode file bytes into text for content-aware classification."""

    def read_text(self, path: Path, limit: int | None = None) -> Optional[str]:
        """Return the decoded contents of ``path``.

        Args:
            path: File to read.
            limit: Maximum number of bytes accepted. Larger files are not read.

        Returns:
            Optional[str]: Decoded text, or None when the file exceeds ``limit``.

        Raises:
            OSError: If the file cannot be read.
        """
        if limit is not None and path.stat().st_size > limit:
            return None
        return path.read_bytes().decode("utf-8", errors="replace")


__all__ = ["ContentReader"]
