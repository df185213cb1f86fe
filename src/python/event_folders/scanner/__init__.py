"""Scanner module for discovering event folders and resolving their dates."""

from event_folders.scanner.dates import DateResolver
from event_folders.scanner.directory import (
    collect_files,
    creation_time,
    list_subdirectories,
    scan_folder,
)
from event_folders.scanner.exif import MetadataCache, read_date_taken

__all__ = [
    "DateResolver",
    "MetadataCache",
    "collect_files",
    "creation_time",
    "list_subdirectories",
    "read_date_taken",
    "scan_folder",
]
