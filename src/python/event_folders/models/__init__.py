"""Data models for event-folders."""

from event_folders.models.enums import BracketStyle, Category, DateSource, YearSource
from event_folders.models.folder import (
    FileRecord,
    FolderRecord,
    NamingRule,
    PrefixMatch,
    ResolvedDate,
)

__all__ = [
    "BracketStyle",
    "Category",
    "DateSource",
    "FileRecord",
    "FolderRecord",
    "NamingRule",
    "PrefixMatch",
    "ResolvedDate",
    "YearSource",
]
