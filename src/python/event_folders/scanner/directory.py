"""
Directory scanning for event folders.

The immediate children of the root directory are the units of work. Each
child is scanned recursively, hidden files included, so that every file can
contribute a date.
"""

import logging
import os
import sys
from datetime import datetime
from pathlib import Path
from typing import List, Optional

from event_folders.models.folder import FileRecord, FolderRecord
from event_folders.naming.patterns import extract_prefix, find_category_tag

logger = logging.getLogger(__name__)


def creation_time(file_path: Path) -> datetime:
    """
    Get the file system creation time of a file.

    Uses st_birthtime where the platform records it. Windows reports
    creation in st_ctime; elsewhere st_ctime is the inode change time, so
    the earlier of st_ctime and st_mtime is the best approximation.

    Args:
        file_path: Path to the file

    Returns:
        Naive local datetime of the creation time

    Raises:
        OSError: If the file cannot be stat'ed
    """
    stats = file_path.stat()
    birthtime = getattr(stats, "st_birthtime", None)
    if birthtime:
        timestamp = birthtime
    elif sys.platform.startswith("win"):
        timestamp = stats.st_ctime
    else:
        timestamp = min(stats.st_ctime, stats.st_mtime)
    return datetime.fromtimestamp(timestamp)


def list_subdirectories(directory: Path) -> List[Path]:
    """
    List the immediate subdirectories of a directory.

    Args:
        directory: Root directory holding the event folders

    Returns:
        List of subdirectory paths, sorted alphabetically

    Raises:
        FileNotFoundError: If the directory does not exist
        NotADirectoryError: If the path is not a directory
    """
    if not directory.exists():
        raise FileNotFoundError(f"Directory not found: {directory}")

    if not directory.is_dir():
        raise NotADirectoryError(f"Not a directory: {directory}")

    return sorted(item for item in directory.iterdir() if item.is_dir())


def collect_files(directory: Path) -> List[Path]:
    """
    Collect every file below a directory, hidden files included.

    Args:
        directory: Directory to walk

    Returns:
        File paths in a stable (sorted) order
    """
    files = []
    for root, _dirs, names in os.walk(directory):
        for name in names:
            path = Path(root) / name
            if path.is_file():
                files.append(path)
    return sorted(files)


def scan_folder(directory: Path, name: Optional[str] = None) -> FolderRecord:
    """
    Build a FolderRecord for one event folder.

    Files whose creation time cannot be read are left out with a warning.
    Embedded dates are not read here; DateResolver does that on demand.

    Args:
        directory: The event folder
        name: Name to evaluate instead of the directory's own, used by
            preview runs to see the name an earlier pass would have given it

    Returns:
        FolderRecord with files, existing prefix and existing tag filled in
    """
    records = []
    unreadable = []
    for path in collect_files(directory):
        try:
            records.append(FileRecord(path=path, created_at=creation_time(path)))
        except OSError as e:
            logger.warning("Could not read creation time of %s: %s", path, e)
            unreadable.append(path)

    name = name or directory.name
    return FolderRecord(
        path=directory,
        name=name,
        files=records,
        existing_prefix=extract_prefix(name),
        existing_tag=find_category_tag(name),
        unreadable_files=unreadable,
    )
