"""
Folder, file and naming models.

A FolderRecord is one media-event directory under the scanned root. Its
files are only inspected to find the oldest date; the folder name is the
only thing that is ever changed.

These models are built fresh on every scan pass and never persisted.
"""

from dataclasses import dataclass, field
from datetime import datetime
from pathlib import Path
from typing import List, Optional

from event_folders.models.enums import Category, DateSource, YearSource


@dataclass
class FileRecord:
    """
    A single file inside an event folder.

    Attributes:
        path: Absolute path to the file
        created_at: File system creation time (always present)
        date_taken: Embedded date taken, set only when it was read and parsed
    """
    path: Path
    created_at: datetime
    date_taken: Optional[datetime] = None


@dataclass(frozen=True)
class ResolvedDate:
    """
    The representative date of a folder.

    Attributes:
        value: The full timestamp that won
        source: Whether it came from embedded metadata or the creation time
    """
    value: datetime
    source: DateSource

    @property
    def year(self) -> int:
        return self.value.year

    @property
    def month(self) -> int:
        return self.value.month

    @property
    def prefix(self) -> str:
        """The date as it appears in a folder prefix, e.g. "2019-11"."""
        return f"{self.year:04d}-{self.month:02d}"


@dataclass(frozen=True)
class PrefixMatch:
    """
    A leading "YYYY-MM - " segment found in a folder name.

    Attributes:
        year: Year captured from the prefix
        month: Month captured from the prefix
        prefix: The prefix exactly as written, trailing whitespace included
        remainder: The rest of the name after the prefix
    """
    year: int
    month: int
    prefix: str
    remainder: str


@dataclass(frozen=True)
class NamingRule:
    """
    The outcome of classifying a folder name.

    Attributes:
        category: Which tag to apply
        year: The year written into the tag
        year_source: Which signal the year came from
        base_name: Cleaned event name, only used for birthdays
    """
    category: Category
    year: int
    year_source: YearSource = YearSource.NAME
    base_name: str = ""


@dataclass
class FolderRecord:
    """
    A directory being evaluated for renaming.

    Attributes:
        path: Absolute path to the folder
        name: Current folder name; defaults to the last path component
        files: Every file below the folder, hidden ones included
        earliest_date: Oldest resolved file date, filled in by DateResolver
        existing_prefix: "YYYY-MM - " prefix already present in the name
        existing_tag: Category tag already present in the name
        unreadable_files: Files that were found but could not be stat'ed
    """
    path: Path
    name: str = ""
    files: List[FileRecord] = field(default_factory=list)
    earliest_date: Optional[ResolvedDate] = None
    existing_prefix: Optional[PrefixMatch] = None
    existing_tag: Optional[str] = None
    unreadable_files: List[Path] = field(default_factory=list)

    def __post_init__(self):
        if not self.name:
            self.name = self.path.name

    @property
    def is_empty(self) -> bool:
        """True when the folder holds no files at all."""
        return not self.files and not self.unreadable_files
