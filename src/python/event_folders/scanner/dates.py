"""
Resolve the representative date of an event folder.

Every file contributes one date: its embedded date taken when that can be
read and parsed, otherwise its creation time. The folder's date is the
oldest of them.
"""

import logging
from typing import Iterable

from event_folders.exceptions import (
    DateParseError,
    MetadataUnavailable,
    NoDateAvailable,
    NoDateResolvable,
)
from event_folders.models.enums import DateSource
from event_folders.models.folder import FileRecord, FolderRecord, ResolvedDate
from event_folders.scanner.exif import MetadataCache
from event_folders.utils import DEFAULT_LOCALE, parse_localized_date, strip_bidi_marks

logger = logging.getLogger(__name__)


class DateResolver:
    """
    Find the oldest date among a folder's files.

    Attributes:
        cache: Run-scoped metadata cache the date-taken text is read through
        locale: Fixed locale the date-taken text is parsed under
        log_parse_failures: Log every unparsable date-taken string (preview
            runs) instead of falling back silently (live runs)
    """

    def __init__(
        self,
        cache: MetadataCache,
        locale: str = DEFAULT_LOCALE,
        log_parse_failures: bool = False,
    ):
        self.cache = cache
        self.locale = locale
        self.log_parse_failures = log_parse_failures

    def resolve(self, folder: FolderRecord) -> ResolvedDate:
        """
        Resolve and store the earliest date of a folder.

        Args:
            folder: Folder to resolve; its earliest_date is set on success

        Returns:
            The oldest ResolvedDate among the folder's files

        Raises:
            NoDateAvailable: If the folder holds no files
            NoDateResolvable: If files exist but none produced a date
            MetadataServiceError: If the metadata cache is unusable
        """
        if folder.earliest_date is not None:
            return folder.earliest_date

        if not folder.files and folder.unreadable_files:
            logger.warning(
                "No date could be resolved for %s (%d unreadable files)",
                folder.name, len(folder.unreadable_files),
            )
            raise NoDateResolvable(f"No date could be resolved for {folder.path}")

        folder.earliest_date = self.resolve_files(folder.files)
        return folder.earliest_date

    def resolve_files(self, files: Iterable[FileRecord]) -> ResolvedDate:
        """
        Return the oldest date among files.

        Raises:
            NoDateAvailable: If files is empty
        """
        earliest = None
        for file in files:
            resolved = self.resolve_file(file)
            if earliest is None or resolved.value < earliest.value:
                earliest = resolved

        if earliest is None:
            raise NoDateAvailable("No files to resolve a date from")
        return earliest

    def resolve_file(self, file: FileRecord) -> ResolvedDate:
        """
        Resolve the date of a single file.

        The embedded date taken wins when present and parsable; any other
        outcome falls back to the creation time.
        """
        try:
            file.date_taken = self._date_taken(file)
        except MetadataUnavailable:
            return ResolvedDate(file.created_at, DateSource.CREATION_TIME)
        except DateParseError as e:
            if self.log_parse_failures:
                logger.warning(
                    "Unparsable date taken %r in %s (%s); using creation time %s",
                    e.raw_text, file.path, e.locale, file.created_at,
                )
            return ResolvedDate(file.created_at, DateSource.CREATION_TIME)

        return ResolvedDate(file.date_taken, DateSource.EMBEDDED_METADATA)

    def _date_taken(self, file: FileRecord):
        text = self.cache.read(file.path)
        if text is None or not strip_bidi_marks(text).strip():
            raise MetadataUnavailable(f"No date taken in {file.path}")
        return parse_localized_date(text, self.locale)
