"""
Date-taken extraction for media files.

This module reads the raw "date taken" text from a file:
- RAW and HEIC/HEIF files: Uses exifread library
- Standard formats (JPEG, PNG, TIFF, WebP): Uses Pillow/PIL library

The text is returned as-is; turning it into a datetime is the job of
``parse_localized_date`` so that locale handling lives in one place.

Reads go through a MetadataCache scoped to one run. The cache is keyed by
containing directory, so a folder's files share one entry and everything is
released when the run ends.
"""

import logging
from pathlib import Path
from typing import Callable, Dict, Iterable, Optional, Tuple

from event_folders.exceptions import MetadataServiceError

logger = logging.getLogger(__name__)

# EXIF tag ids
DATE_TIME_ORIGINAL = 36867
DATE_TIME_DIGITIZED = 36868
DATE_TIME = 306

DATE_TAKEN_TAG = DATE_TIME_ORIGINAL

# Tried after the requested tag, in this order
FALLBACK_TAGS = (DATE_TIME, DATE_TIME_DIGITIZED)

# Tag names as exifread reports them (without the IFD prefix)
TAG_NAMES = {
    DATE_TIME_ORIGINAL: "DateTimeOriginal",
    DATE_TIME_DIGITIZED: "DateTimeDigitized",
    DATE_TIME: "DateTime",
}

PILLOW_EXTENSIONS = {".jpg", ".jpeg", ".png", ".tif", ".tiff", ".webp"}
EXIFREAD_EXTENSIONS = {
    ".cr2", ".cr3", ".nef", ".arw", ".dng", ".raf", ".orf", ".rw2",
    ".heic", ".heif",
}

# Pillow keeps DateTimeOriginal/Digitized in the Exif sub-IFD
EXIF_IFD_POINTER = 0x8769

DateTakenReader = Callable[[Path, int], Optional[str]]


def check_backends() -> None:
    """
    Make sure the metadata libraries can be imported.

    Raises:
        MetadataServiceError: If Pillow or exifread is missing
    """
    try:
        import exifread  # noqa: F401
        from PIL import Image  # noqa: F401
    except ImportError as e:
        raise MetadataServiceError(
            f"Metadata reader unavailable ({e}). Install with: pip install Pillow exifread"
        ) from e


def read_date_taken(file_path: Path, tag: int = DATE_TAKEN_TAG) -> Optional[str]:
    """
    Read the raw date-taken text of a file.

    Returns None for files that are empty, not images, or carry no date tag.
    Per-file failures (corrupt or truncated files) are logged and also
    return None.

    Args:
        file_path: Path to the media file
        tag: EXIF tag id to read first; DateTime and DateTimeDigitized follow

    Returns:
        The tag text, or None if no date tag is present

    Example:
        >>> read_date_taken(Path("/photos/IMG_1234.jpg"))
        '2019:11:01 14:03:22'
    """
    if not file_path.is_file():
        logger.warning("File not found or not a file: %s", file_path)
        return None

    if file_path.stat().st_size == 0:
        logger.debug("File is empty (0 bytes): %s", file_path)
        return None

    extension = file_path.suffix.lower()
    tags = _tag_order(tag)

    if extension in EXIFREAD_EXTENSIONS:
        return _read_with_exifread(file_path, tags)
    if extension in PILLOW_EXTENSIONS:
        return _read_with_pillow(file_path, tags)

    logger.debug("No date-taken support for %s", file_path.name)
    return None


def _tag_order(tag: int) -> Tuple[int, ...]:
    return (tag,) + tuple(t for t in FALLBACK_TAGS if t != tag)


def _read_with_exifread(file_path: Path, tags: Iterable[int]) -> Optional[str]:
    """
    Read date tags using exifread.

    This method works with RAW and HEIC files that Pillow cannot read.
    """
    import exifread

    try:
        with open(file_path, "rb") as f:
            exif_tags = exifread.process_file(f, details=False)
    except Exception as e:
        logger.warning("exifread failed to read %s: %s", file_path, e)
        return None

    if not exif_tags:
        logger.debug("No EXIF data found in %s", file_path)
        return None

    for tag in tags:
        name = TAG_NAMES.get(tag)
        if name is None:
            continue
        for key in (f"EXIF {name}", f"Image {name}"):
            value = _clean_string(exif_tags.get(key))
            if value:
                return value

    return None


def _read_with_pillow(file_path: Path, tags: Iterable[int]) -> Optional[str]:
    """Read date tags using Pillow/PIL."""
    from PIL import Image

    try:
        with Image.open(file_path) as img:
            exif_data = img.getexif()
            if not exif_data:
                logger.debug("No EXIF data found in %s", file_path)
                return None
            sub_ifd = exif_data.get_ifd(EXIF_IFD_POINTER)
            for tag in tags:
                value = _clean_string(sub_ifd.get(tag) or exif_data.get(tag))
                if value:
                    return value
    except Exception as e:
        logger.warning("Pillow failed to read %s: %s", file_path, e)
        return None

    return None


def _clean_string(value) -> Optional[str]:
    """
    Normalize a tag value to a stripped string.

    Works with plain strings, bytes and exifread tag objects.
    """
    if value is None:
        return None

    if isinstance(value, bytes):
        value = value.decode("utf-8", errors="replace")

    value = str(value).strip().rstrip("\x00").strip()
    return value or None


class MetadataCache:
    """
    Run-scoped cache of date-taken text, keyed by containing directory.

    Use as a context manager so the cache is released even when a run
    aborts part-way:

        >>> with MetadataCache() as cache:
        ...     text = cache.read(Path("/events/Trip/IMG_1.jpg"))

    Attributes:
        tag: EXIF tag id passed to the reader
    """

    def __init__(
        self,
        reader: Optional[DateTakenReader] = None,
        tag: int = DATE_TAKEN_TAG,
    ):
        self._reader = reader
        self.tag = tag
        self._directories: Dict[Path, Dict[str, Optional[str]]] = {}
        self._closed = False

    def __enter__(self) -> "MetadataCache":
        self.open()
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()

    @property
    def closed(self) -> bool:
        return self._closed

    @property
    def directory_count(self) -> int:
        """Number of directories with cached entries."""
        return len(self._directories)

    def open(self) -> None:
        """
        Prepare the cache for a run.

        Raises:
            MetadataServiceError: If the default reader's libraries are missing
        """
        if self._reader is None:
            check_backends()
            self._reader = read_date_taken
        self._closed = False

    def read(self, file_path: Path) -> Optional[str]:
        """
        Return the date-taken text of a file, reading it at most once per run.

        Raises:
            MetadataServiceError: If the cache has been closed
        """
        if self._closed:
            raise MetadataServiceError("Metadata cache used after it was closed")
        if self._reader is None:
            self.open()

        entries = self._directories.setdefault(file_path.parent, {})
        if file_path.name not in entries:
            entries[file_path.name] = self._reader(file_path, self.tag)
        return entries[file_path.name]

    def close(self) -> None:
        """Drop every cached directory."""
        if self._directories:
            logger.debug("Releasing metadata cache for %d directories", len(self._directories))
        self._directories.clear()
        self._closed = True
