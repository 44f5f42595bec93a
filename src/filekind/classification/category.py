"""Category detection from filenames and declared media types."""

from __future__ import annotations

from typing import Callable, Tuple

from .models import Category

IMAGE_EXTENSIONS = frozenset({"png", "jpg", "jpeg", "gif", "svg", "webp"})
VIDEO_EXTENSIONS = frozenset({"mp4", "mkv", "mov", "avi"})
AUDIO_EXTENSIONS = frozenset({"mp3", "wav", "aac", "flac"})
ARCHIVE_EXTENSIONS = frozenset({"zip", "rar", "7z", "tar", "gz"})
TEXT_EXTENSIONS = frozenset({"txt", "md", "csv", "log"})
CODE_EXTENSIONS = frozenset({"html", "css", "js", "ts", "jsx", "tsx", "json", "sql"})

Rule = Tuple[Callable[[str, str], bool], Callable[[str], Category]]


def extension_of(name: str) -> str:
    """Return the lower-cased text after the final ``.`` in ``name``."""
    if "." not in name:
        return ""
    return name.rsplit(".", 1)[1].lower()


def _code_category(ext: str) -> Category:
    if ext == "json":
        return Category.JSON
    if ext == "sql":
        return Category.SQL
    return Category.CODE


# Evaluated in order; earlier rules shadow later ones.
_RULES: tuple[Rule, ...] = (
    (
        lambda media, ext: media.startswith("image/") or ext in IMAGE_EXTENSIONS,
        lambda _: Category.IMAGE,
    ),
    (
        lambda media, ext: media.startswith("video/") or ext in VIDEO_EXTENSIONS,
        lambda _: Category.VIDEO,
    ),
    (
        lambda media, ext: media.startswith("audio/") or ext in AUDIO_EXTENSIONS,
        lambda _: Category.AUDIO,
    ),
    (lambda _, ext: ext == "pdf", lambda _: Category.DOCUMENT),
    (lambda _, ext: ext in ARCHIVE_EXTENSIONS, lambda _: Category.ARCHIVE),
    (lambda _, ext: ext in TEXT_EXTENSIONS, lambda _: Category.TEXT),
    (lambda _, ext: ext in CODE_EXTENSIONS, _code_category),
)


def classify_category(name: str, media_type: str) -> Category:
    """Map a filename and declared media type to a coarse category.

    Args:
        name: Filename, possibly empty or without an extension.
        media_type: Declared media type such as ``image/png``; may be empty.

    Returns:
        Category: First matching category, or ``Category.GENERAL``.
    """
    media = media_type or ""
    ext = extension_of(name or "")
    for predicate, label in _RULES:
        if predicate(media, ext):
            return label(ext)
    return Category.GENERAL


__all__ = ["classify_category", "extension_of"]
