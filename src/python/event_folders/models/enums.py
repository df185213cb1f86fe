"""Enumerations for event-folders models."""

from enum import Enum


class DateSource(Enum):
    """
    Where a resolved date came from.

    - EMBEDDED_METADATA: The file's date-taken tag
    - CREATION_TIME: The file system creation timestamp
    """
    EMBEDDED_METADATA = "embedded-metadata"
    CREATION_TIME = "creation-time"


class Category(Enum):
    """
    Event category a folder is tagged with.

    The value is the literal written into the folder name.
    """
    CHRISTMAS = "Christmas"
    EASTER = "Easter"
    BIRTHDAY = "BIRTHDAY"


class YearSource(Enum):
    """Which signal supplied the year of a naming rule, strongest first."""
    NAME = "name"
    PREFIX = "prefix"
    FILES = "files"


class BracketStyle(Enum):
    """
    Bracket convention for category tags.

    - SQUARE: "[Christmas 2015]", used when renames are applied
    - ROUND: "(Christmas 2015)", used by preview runs
    """
    SQUARE = "square"
    ROUND = "round"

    @property
    def opening(self) -> str:
        """The opening bracket character."""
        return "[" if self is BracketStyle.SQUARE else "("

    @property
    def closing(self) -> str:
        """The closing bracket character."""
        return "]" if self is BracketStyle.SQUARE else ")"

    def wrap(self, text: str) -> str:
        """Wrap text in this style's brackets."""
        return f"{self.opening}{text}{self.closing}"
