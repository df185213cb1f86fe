"""
Folder-name pattern detection.

Pure functions over a folder name: nothing in here touches the file system.

Recognized patterns:
1. Date prefix: "2019-11 - Trip" (the "YYYY-MM - " segment)
2. Category tag: "[Christmas 2015]", "(Easter 2021)", "[BIRTHDAY 2016]"
3. Standalone year: "Party 2015", "2015 Party"
4. Copy suffix: "Graduation (2)"
"""

import re
from typing import Optional

from event_folders.models.folder import PrefixMatch

# Any name starting with "YYYY-MM" counts as already dated
DATE_PREFIX = re.compile(r"^\d{4}-\d{2}")

# The full "YYYY-MM - " prefix, captured verbatim with its whitespace
PREFIX = re.compile(r"^(\d{4})-(\d{2})\s*-\s*")

# Four digits not glued to another letter or digit; underscores separate
YEAR = re.compile(r"(?<![^\W_])(\d{4})(?![^\W_])")

CATEGORY_TAG = re.compile(
    r"[\[(](?:Christmas|Easter|BIRTHDAY) \d{4}[\])]", re.IGNORECASE
)

CHRISTMAS = re.compile(r"Christmass?")
EASTER = re.compile(r"Pasxa|Easter")

TRAILING_YEAR = re.compile(r"\s*(?<![^\W_])\d{4}\s*$")
TRAILING_COPY_NUMBER = re.compile(r"\s*\(\d+\)\s*$")


def has_date_prefix(name: str) -> bool:
    """
    Check if a folder name already starts with "YYYY-MM".

    Examples:
        >>> has_date_prefix("2021-06 - Trip")
        True
        >>> has_date_prefix("Trip 2021-06")
        False
    """
    return DATE_PREFIX.match(name) is not None


def extract_prefix(name: str) -> Optional[PrefixMatch]:
    """
    Split a leading "YYYY-MM - " prefix off a folder name.

    Args:
        name: Folder name

    Returns:
        PrefixMatch with the captured year, month, the prefix exactly as
        written and the remainder; None if the name has no such prefix

    Examples:
        >>> extract_prefix("2016-08 - Family Gathering").remainder
        'Family Gathering'
        >>> extract_prefix("2016-08 -Family").prefix
        '2016-08 -'
        >>> extract_prefix("Family Gathering") is None
        True
    """
    match = PREFIX.match(name)
    if match is None:
        return None
    return PrefixMatch(
        year=int(match.group(1)),
        month=int(match.group(2)),
        prefix=match.group(0),
        remainder=name[match.end():],
    )


def find_year(text: str) -> Optional[int]:
    """
    Find the first standalone four-digit year in a piece of text.

    No plausibility check is made: "Party 3015" yields 3015.

    Examples:
        >>> find_year("Christmas Party 2015")
        2015
        >>> find_year("Room 12345") is None
        True
    """
    match = YEAR.search(text)
    return int(match.group(1)) if match else None


def find_category_tag(name: str) -> Optional[str]:
    """Return the category tag already present in a name, in either bracket style."""
    match = CATEGORY_TAG.search(name)
    return match.group(0) if match else None


def has_category_tag(name: str) -> bool:
    """
    Check if a folder name already carries a category tag.

    Examples:
        >>> has_category_tag("2021-06 - [Easter 2021]")
        True
        >>> has_category_tag("2021-06 - (BIRTHDAY 2021) - Anna")
        True
        >>> has_category_tag("2021-06 - Easter")
        False
    """
    return find_category_tag(name) is not None


def is_christmas(text: str) -> bool:
    """Case-sensitive match on "Christmas" or the common "Christmass"."""
    return CHRISTMAS.search(text) is not None


def is_easter(text: str) -> bool:
    """Case-sensitive match on "Easter" or the transliterated Greek "Pasxa"."""
    return EASTER.search(text) is not None


def clean_base_name(text: str) -> str:
    """
    Strip trailing years and copy numbers from an event name.

    Both suffixes are removed in any order and any number of times.

    Examples:
        >>> clean_base_name("Graduation 2012 (2)")
        'Graduation'
        >>> clean_base_name("Anna (3) 2019")
        'Anna'
        >>> clean_base_name("Anna 2019 party")
        'Anna 2019 party'
    """
    cleaned = text.strip()
    while True:
        stripped = TRAILING_COPY_NUMBER.sub("", cleaned)
        stripped = TRAILING_YEAR.sub("", stripped).strip()
        if stripped == cleaned:
            return cleaned
        cleaned = stripped
