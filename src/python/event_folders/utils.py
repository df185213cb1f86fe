"""
Utility functions for event-folders.

Date-taken text arrives in whatever display format the metadata reader
produced, often decorated with invisible bidirectional marks. Everything in
here is locale-explicit: the caller names the locale, the process-wide
``LC_TIME`` setting is never consulted.
"""

import logging
import re
import sys
from dataclasses import dataclass
from datetime import datetime
from pathlib import Path
from typing import Dict, Optional, Tuple, Union

from event_folders.exceptions import DateParseError

logger = logging.getLogger(__name__)

# LRM, RLM, ALM, the embedding/override controls, the isolates and the BOM
BIDI_MARKS = re.compile("[\u200e\u200f\u061c\u202a-\u202e\u2066-\u2069\ufeff]")

# EXIF stores "YYYY:MM:DD HH:MM:SS" regardless of the camera's language
EXIF_DATETIME_FORMAT = "%Y:%m:%d %H:%M:%S"

TIME_FORMATS = ("%H:%M:%S", "%H:%M")


@dataclass(frozen=True)
class LocaleProfile:
    """
    How one locale writes dates.

    Attributes:
        name: Locale identifier (e.g. "en-US")
        date_formats: strptime patterns for the date part, numeric fields only
        am_markers: Spellings of the ante meridiem marker
        pm_markers: Spellings of the post meridiem marker
        separators: Strings allowed between the date and the time
    """
    name: str
    date_formats: Tuple[str, ...]
    am_markers: Tuple[str, ...] = ("AM", "A.M.")
    pm_markers: Tuple[str, ...] = ("PM", "P.M.")
    separators: Tuple[str, ...] = (" ",)


LOCALES: Dict[str, LocaleProfile] = {
    "en-US": LocaleProfile("en-US", ("%m/%d/%Y", "%m/%d/%y")),
    "en-GB": LocaleProfile("en-GB", ("%d/%m/%Y", "%d/%m/%y")),
    "el-GR": LocaleProfile(
        "el-GR",
        ("%d/%m/%Y", "%d/%m/%y"),
        am_markers=("π.μ.", "πμ"),
        pm_markers=("μ.μ.", "μμ"),
    ),
    "de-DE": LocaleProfile("de-DE", ("%d.%m.%Y", "%d.%m.%y")),
    "fr-FR": LocaleProfile("fr-FR", ("%d/%m/%Y", "%d/%m/%y")),
    "ISO": LocaleProfile("ISO", ("%Y-%m-%d",), separators=(" ", "T")),
}

DEFAULT_LOCALE = "en-US"


def strip_bidi_marks(text: str) -> str:
    """
    Remove bidirectional control characters from a string.

    Windows-style metadata readers wrap every numeric field in LTR/RTL
    marks, which makes otherwise valid dates fail to parse.

    Args:
        text: Raw text

    Returns:
        The text without any bidi control characters

    Examples:
        >>> strip_bidi_marks("\\u200e5/\\u200e3/\\u200e2019")
        '5/3/2019'
    """
    return BIDI_MARKS.sub("", text)


def get_locale_profile(locale: str) -> LocaleProfile:
    """
    Look up the date profile for a locale name.

    Args:
        locale: Locale identifier, matched case-insensitively

    Returns:
        The matching LocaleProfile

    Raises:
        ValueError: If the locale is not supported
    """
    for name, profile in LOCALES.items():
        if name.lower() == locale.lower():
            return profile
    raise ValueError(
        f"Unsupported locale {locale!r}; expected one of {', '.join(LOCALES)}"
    )


def _normalize_whitespace(text: str) -> str:
    # Shell readers emit NBSP / narrow NBSP before the meridiem marker
    return " ".join(text.replace("\u00a0", " ").replace("\u202f", " ").split())


def _split_meridiem(text: str, profile: LocaleProfile) -> Tuple[str, Optional[bool]]:
    """Split a trailing AM/PM marker off the text; returns (rest, is_pm)."""
    folded = text.casefold()
    for markers, is_pm in ((profile.pm_markers, True), (profile.am_markers, False)):
        for marker in markers:
            if folded.endswith(marker.casefold()):
                return text[: -len(marker)].rstrip(), is_pm
    return text, None


def parse_localized_date(text: str, locale: str = DEFAULT_LOCALE) -> datetime:
    """
    Parse date-taken text under an explicit locale.

    The EXIF form ``YYYY:MM:DD HH:MM:SS`` is accepted under every locale.
    Otherwise the text must be a date in one of the locale's numeric
    formats, optionally followed by a time (24-hour, or 12-hour with the
    locale's AM/PM marker).

    Args:
        text: Date text, possibly containing bidi marks
        locale: Locale identifier from LOCALES

    Returns:
        The parsed (naive) datetime

    Raises:
        DateParseError: If the text matches none of the locale's formats
        ValueError: If the locale is not supported

    Examples:
        >>> parse_localized_date("2019:05:03 10:15:00")
        datetime.datetime(2019, 5, 3, 10, 15)
        >>> parse_localized_date("03/05/2019 10:15 PM", "en-GB")
        datetime.datetime(2019, 5, 3, 22, 15)
    """
    profile = get_locale_profile(locale)
    cleaned = _normalize_whitespace(strip_bidi_marks(text))
    if not cleaned:
        raise DateParseError(text, profile.name, "Empty date text")

    try:
        return datetime.strptime(cleaned, EXIF_DATETIME_FORMAT)
    except ValueError:
        pass

    body, is_pm = _split_meridiem(cleaned, profile)

    candidates = []
    for date_format in profile.date_formats:
        if is_pm is None:
            candidates.append(date_format)
        for separator in profile.separators:
            for time_format in TIME_FORMATS:
                candidates.append(f"{date_format}{separator}{time_format}")

    for pattern in candidates:
        try:
            parsed = datetime.strptime(body, pattern)
        except ValueError:
            continue

        if is_pm is None:
            return parsed
        if not 1 <= parsed.hour <= 12:
            raise DateParseError(
                text, profile.name, f"Hour {parsed.hour} is not valid with an AM/PM marker"
            )
        return parsed.replace(hour=parsed.hour % 12 + (12 if is_pm else 0))

    raise DateParseError(text, profile.name)


def setup_logging(
    level: Union[str, int] = logging.INFO,
    log_file: Optional[Union[str, Path]] = None,
) -> None:
    """
    Configure the root logger with a console handler and an optional file.

    Args:
        level: Logging level name or number
        log_file: Optional path of a log file to append to
    """
    if isinstance(level, str):
        level = getattr(logging, level.upper())

    formatter = logging.Formatter("%(asctime)s - %(name)s - %(levelname)s - %(message)s")

    root_logger = logging.getLogger()
    root_logger.setLevel(level)

    # Remove existing handlers to avoid duplicates
    for handler in root_logger.handlers[:]:
        root_logger.removeHandler(handler)

    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setFormatter(formatter)
    root_logger.addHandler(console_handler)

    if log_file:
        log_path = Path(log_file)
        log_path.parent.mkdir(parents=True, exist_ok=True)
        file_handler = logging.FileHandler(log_path, encoding="utf-8")
        file_handler.setFormatter(formatter)
        root_logger.addHandler(file_handler)
