"""Storage routing package."""

from .models import StorageOperation, StoragePlan, StorageTarget
from .planner import StoragePlanner, format_file_size, sanitize_name, suggest_folder_path

__all__ = [
    "StorageOperation",
    "StoragePlan",
    "StoragePlanner",
    "StorageTarget",
    "format_file_size",
    "sanitize_name",
    "suggest_folder_path",
]
