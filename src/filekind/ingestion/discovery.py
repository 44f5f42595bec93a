"""Discovery of upload candidates on the local filesystem."""

from __future__ import annotations

import os
from datetime import datetime, timezone
from pathlib import Path
from typing import Iterator

from .models import PendingFile


class DirectoryScanner:
    """Walk upload roots and describe each file found.

    Hidden directories are pruned during the walk rather than filtered
    afterwards. Each file is flagged against two limits: ``max_size_bytes``
    marks it as too large to upload at all, ``max_content_bytes`` marks it as
    too large to read for content inspection.
    """

    def __init__(
        self,
        *,
        recursive: bool,
        include_hidden: bool,
        follow_symlinks: bool,
        max_size_bytes: int | None,
        max_content_bytes: int | None = None,
    ) -> None:
        self.recursive = recursive
        self.include_hidden = include_hidden
        self.follow_symlinks = follow_symlinks
        self.max_size_bytes = max_size_bytes
        self.max_content_bytes = max_content_bytes

    def scan(self, root: Path) -> Iterator[PendingFile]:
        """Yield upload candidates under ``root`` in path order.

        A file root is yielded on its own, regardless of the hidden filter.
        """
        root = root.expanduser()
        if root.is_file():
            pending = self._describe(root)
            if pending is not None:
                yield pending
            return
        if not root.is_dir():
            return

        for dirpath, dirnames, filenames in os.walk(root, followlinks=self.follow_symlinks):
            if self.recursive:
                dirnames[:] = sorted(name for name in dirnames if self._visible(name))
            else:
                dirnames[:] = []
            for filename in sorted(filenames):
                if not self._visible(filename):
                    continue
                pending = self._describe(Path(dirpath) / filename)
                if pending is not None:
                    yield pending

    def _visible(self, name: str) -> bool:
        return self.include_hidden or not name.startswith(".")

    def _describe(self, path: Path) -> PendingFile | None:
        if path.is_symlink() and not self.follow_symlinks:
            return None
        try:
            stat = path.stat()
        except OSError:
            return None
        size = stat.st_size
        return PendingFile(
            path=path,
            size_bytes=size,
            modified_at=datetime.fromtimestamp(stat.st_mtime, tz=timezone.utc),
            oversized=self.max_size_bytes is not None and size > self.max_size_bytes,
            exceeds_content_limit=(
                self.max_content_bytes is not None and size > self.max_content_bytes
            ),
        )
