"""
EventFolders - date-prefix and tag media-event folders.

This package renames the folders of a flat media collection so they sort
chronologically and say what they are.

Core Concepts:
- FolderRecord: One event folder and every file below it
- ResolvedDate: The oldest date among those files
- NamingRule: The category and year a folder is tagged with

Usage:
    from event_folders import organize_directory
    from pathlib import Path

    result = organize_directory(Path("/photos/events"), dry_run=True)
    print(result)
"""

from event_folders.__version__ import __version__
from event_folders.exceptions import (
    ConfigError,
    DateParseError,
    EventFoldersError,
    MetadataServiceError,
    NoDateAvailable,
    NoDateResolvable,
)
from event_folders.models import (
    BracketStyle,
    Category,
    DateSource,
    FileRecord,
    FolderRecord,
    NamingRule,
    ResolvedDate,
)
from event_folders.naming import classify, compose_date_prefix_name, compose_tag_name, extract_prefix
from event_folders.organizer import (
    FolderOrganizer,
    Pipeline,
    RenameDecision,
    decide_date_prefix,
    decide_keyword_tag,
    organize_directory,
)
from event_folders.scanner import DateResolver, MetadataCache, scan_folder
from event_folders.utils import parse_localized_date

__all__ = [
    "__version__",
    # Errors
    "ConfigError",
    "DateParseError",
    "EventFoldersError",
    "MetadataServiceError",
    "NoDateAvailable",
    "NoDateResolvable",
    # Models
    "BracketStyle",
    "Category",
    "DateSource",
    "FileRecord",
    "FolderRecord",
    "NamingRule",
    "ResolvedDate",
    # Scanner
    "DateResolver",
    "MetadataCache",
    "scan_folder",
    # Naming
    "classify",
    "compose_date_prefix_name",
    "compose_tag_name",
    "extract_prefix",
    # Organizer
    "FolderOrganizer",
    "Pipeline",
    "RenameDecision",
    "decide_date_prefix",
    "decide_keyword_tag",
    "organize_directory",
    "parse_localized_date",
]
