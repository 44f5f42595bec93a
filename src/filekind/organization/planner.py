"""Planner that routes classified uploads to storage backends."""

from __future__ import annotations

import re
import time
from typing import Callable, Iterable, Optional, Sequence

from filekind.classification.models import Category, ClassificationDecision, JSONShape
from filekind.ingestion.models import FileDescriptor

from .models import StorageOperation, StoragePlan, StorageTarget

KeywordRule = tuple[tuple[str, ...], str]

_IMAGE_NAME_RULES: Sequence[KeywordRule] = (
    (("photo", "pic", "picture"), "photos"),
    (("screenshot", "screen"), "screenshots"),
    (("logo", "brand"), "logos"),
    (("diagram", "chart", "graph"), "diagrams"),
    (("avatar", "profile", "user"), "avatars"),
)
_IMAGE_TAG_RULES: Sequence[KeywordRule] = (
    (("photo",), "photos"),
    (("screenshot",), "screenshots"),
    (("logo",), "logos"),
    (("diagram",), "diagrams"),
)
_VIDEO_NAME_RULES: Sequence[KeywordRule] = (
    (("tutorial", "guide", "howto"), "tutorials"),
    (("presentation", "demo"), "presentations"),
    (("interview", "talk"), "interviews"),
    (("music", "song", "audio"), "music"),
)
_AUDIO_NAME_RULES: Sequence[KeywordRule] = (
    (("music", "song"), "music"),
    (("podcast", "talk"), "podcasts"),
    (("interview",), "interviews"),
    (("sound", "effect"), "sounds"),
)
_DOCUMENT_NAME_RULES: Sequence[KeywordRule] = (
    (("resume", "cv"), "resumes"),
    (("report", "analysis"), "reports"),
    (("manual", "guide"), "manuals"),
    (("invoice", "bill"), "invoices"),
)
_TEXT_NAME_RULES: Sequence[KeywordRule] = (
    (("readme", "doc"), "docs"),
    (("note", "todo"), "notes"),
    (("script", "code"), "scripts"),
)
# Matched as substrings of the media type; "javascript" must precede "java".
_MEDIA_SUBSTRING_FOLDERS: Sequence[KeywordRule] = (
    (("javascript", "typescript"), "code/javascript"),
    (("python",), "code/python"),
    (("java",), "code/java"),
    (("html",), "web/html"),
    (("css",), "web/css"),
    (("zip", "rar", "7z"), "archives"),
)

_SIZE_UNITS = ("Bytes", "KB", "MB", "GB")
_UNSAFE_NAME_CHARS = re.compile(r"[^a-zA-Z0-9.-]")


def _match(haystack: str, rules: Sequence[KeywordRule]) -> Optional[str]:
    for keywords, folder in rules:
        if any(keyword in haystack for keyword in keywords):
            return folder
    return None


def _match_tags(tags: set[str], rules: Sequence[KeywordRule]) -> Optional[str]:
    for keywords, folder in rules:
        if tags.intersection(keywords):
            return folder
    return None


def _nested(base: str, sub: Optional[str]) -> str:
    return f"{base}/{sub}" if sub else base


def suggest_folder_path(
    media_type: str,
    name: str,
    tags: Iterable[str] = (),
    *,
    base_path: str = "media/",
) -> str:
    """Suggest a storage folder from the media type, filename keywords, and tags.

    Returns:
        str: Folder path ending in ``/`` and rooted at ``base_path``.
    """
    media = media_type.lower()
    lowered = name.lower()
    tag_set = {tag.lower() for tag in tags}

    if media.startswith("image/"):
        sub = _match(lowered, _IMAGE_NAME_RULES) or _match_tags(tag_set, _IMAGE_TAG_RULES)
        folder = _nested("images", sub)
    elif media.startswith("video/"):
        folder = _nested("videos", _match(lowered, _VIDEO_NAME_RULES))
    elif media.startswith("audio/"):
        folder = _nested("audio", _match(lowered, _AUDIO_NAME_RULES))
    elif media == "application/pdf" or "document" in media:
        folder = _nested("documents", _match(lowered, _DOCUMENT_NAME_RULES))
    elif media == "application/json":
        if tag_set & {"users", "contacts"}:
            folder = "data/json/users"
        elif tag_set & {"settings", "config"}:
            folder = "data/json/config"
        elif {"array", "records"} <= tag_set:
            folder = "data/json/records"
        else:
            folder = "data/json"
    elif media in {"text/plain", "text/markdown"}:
        folder = _nested("documents/text", _match(lowered, _TEXT_NAME_RULES))
    else:
        folder = _match(media, _MEDIA_SUBSTRING_FOLDERS) or "other"

    return f"{base_path.rstrip('/')}/{folder}/" if base_path else f"{folder}/"


def sanitize_name(name: str) -> str:
    """Replace characters outside ``[a-zA-Z0-9.-]`` with underscores."""
    return _UNSAFE_NAME_CHARS.sub("_", name)


def format_file_size(size_bytes: int) -> str:
    """Format a byte count such as ``1536`` as ``1.5 KB``."""
    if size_bytes <= 0:
        return "0 Bytes"
    index = 0
    while size_bytes >= 1024 ** (index + 1) and index < len(_SIZE_UNITS) - 1:
        index += 1
    value = round(size_bytes / 1024**index, 2)
    return f"{value:g} {_SIZE_UNITS[index]}"


def storage_target_for(decision: ClassificationDecision) -> Optional[StorageTarget]:
    """Return the backend for a decision, or None when the file is unusable."""
    if decision.json_shape is JSONShape.CORRUPTED:
        return None
    if decision.json_shape is JSONShape.SQL or decision.category is Category.SQL:
        return StorageTarget.SQL_TABLE
    if decision.json_shape is JSONShape.NOSQL:
        return StorageTarget.DOCUMENT
    return StorageTarget.OBJECT


class StoragePlanner:
    """Derive storage plans from descriptors and classification decisions."""

    def __init__(
        self,
        *,
        base_path: str = "media/",
        timestamp_names: bool = False,
        clock: Callable[[], float] = time.time,
    ) -> None:
        self.base_path = base_path
        self.timestamp_names = timestamp_names
        self._clock = clock

    def build_plan(
        self,
        descriptors: Iterable[FileDescriptor],
        decisions: Iterable[ClassificationDecision | None],
    ) -> StoragePlan:
        """Produce a storage plan aligned with ``descriptors``.

        Args:
            descriptors: Files that were classified.
            decisions: Classification decisions in the same order; ``None``
                entries are skipped.

        Returns:
            StoragePlan: One operation per routable file plus quarantine notes.
        """
        plan = StoragePlan()
        for descriptor, decision in zip(descriptors, decisions, strict=False):
            if decision is None:
                continue

            target = storage_target_for(decision)
            if target is None:
                plan.quarantined.append(descriptor.name)
                plan.notes.append(f"{descriptor.name}: corrupted JSON; not routed.")
                continue
            plan.notes.extend(f"{descriptor.name}: {note}" for note in decision.notes)

            folder = suggest_folder_path(
                descriptor.media_type,
                descriptor.name,
                base_path=self.base_path,
            )
            filename = sanitize_name(descriptor.name)
            if self.timestamp_names:
                filename = f"{int(self._clock() * 1000)}_{filename}"

            plan.operations.append(
                StorageOperation(
                    name=descriptor.name,
                    label=decision.label,
                    target=target,
                    folder_path=folder,
                    destination=f"{folder}{filename}",
                    source=descriptor.path,
                    size=(
                        format_file_size(descriptor.size_bytes)
                        if descriptor.size_bytes is not None
                        else None
                    ),
                )
            )
        return plan


__all__ = [
    "StoragePlanner",
    "format_file_size",
    "sanitize_name",
    "storage_target_for",
    "suggest_folder_path",
]
