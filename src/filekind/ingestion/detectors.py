"""Media type detection from filename extensions."""

from __future__ import annotations

from pathlib import Path

DEFAULT_MEDIA_TYPE = "application/octet-stream"

EXTENSION_MEDIA_TYPES = {
    "pdf": "application/pdf",
    "doc": "application/msword",
    "docx": "application/vnd.openxmlformats-officedocument.wordprocessingml.document",
    "xls": "application/vnd.ms-excel",
    "xlsx": "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet",
    "ppt": "application/vnd.ms-powerpoint",
    "pptx": "application/vnd.openxmlformats-officedocument.presentationml.presentation",
    "txt": "text/plain",
    "md": "text/markdown",
    "csv": "text/csv",
    "json": "application/json",
    "xml": "application/xml",
    "sql": "application/sql",
    "html": "text/html",
    "css": "text/css",
    "js": "application/javascript",
    "ts": "application/typescript",
    "py": "text/x-python",
    "java": "text/x-java-source",
    "mp3": "audio/mpeg",
    "wav": "audio/wav",
    "m4a": "audio/mp4",
    "ogg": "audio/ogg",
    "flac": "audio/flac",
    "aac": "audio/aac",
    "mp4": "video/mp4",
    "avi": "video/avi",
    "mov": "video/quicktime",
    "wmv": "video/x-ms-wmv",
    "mkv": "video/x-matroska",
    "zip": "application/zip",
    "rar": "application/x-rar-compressed",
    "7z": "application/x-7z-compressed",
    "gz": "application/gzip",
    "tar": "application/x-tar",
    "png": "image/png",
    "jpg": "image/jpeg",
    "jpeg": "image/jpeg",
    "gif": "image/gif",
    "webp": "image/webp",
    "svg": "image/svg+xml",
}


def media_type_for_name(name: str) -> str:
    """Return the media type registered for the extension of ``name``."""
    ext = name.lower().rsplit(".", 1)[-1] if "." in name else ""
    return EXTENSION_MEDIA_TYPES.get(ext, DEFAULT_MEDIA_TYPE)


class TypeDetector:
    """Identify the declared media type of a file on disk."""

    def detect(self, path: Path) -> str:
        """Return the media type for ``path`` based on its extension."""
        return media_type_for_name(path.name)


__all__ = ["DEFAULT_MEDIA_TYPE", "EXTENSION_MEDIA_TYPES", "TypeDetector", "media_type_for_name"]
