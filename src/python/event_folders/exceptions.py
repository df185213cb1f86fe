"""
Exceptions raised while resolving dates and naming event folders.
"""

from typing import Optional


class EventFoldersError(Exception):
    """Base class for all event-folders errors."""


class ConfigError(EventFoldersError):
    """Raised when configuration data cannot be processed."""


class MetadataUnavailable(EventFoldersError):
    """Raised when a file carries no usable date-taken tag."""


class DateParseError(EventFoldersError, ValueError):
    """
    Raised when date-taken text cannot be parsed under the configured locale.

    Attributes:
        raw_text: The offending text exactly as read from the metadata
        locale: The locale the text was parsed under
    """

    def __init__(self, raw_text: str, locale: str, message: Optional[str] = None):
        self.raw_text = raw_text
        self.locale = locale
        super().__init__(message or f"Cannot parse {raw_text!r} as a {locale} date")


class NoDateAvailable(EventFoldersError):
    """Raised when a folder has no files to take a date from."""


class NoDateResolvable(NoDateAvailable):
    """Raised when a folder has files but none of them yielded a date."""


class MetadataServiceError(EventFoldersError):
    """Raised when the metadata reader itself is unusable for the whole run."""
