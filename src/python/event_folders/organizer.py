"""
Module for deciding and applying event-folder renames.

Two passes run strictly one after the other over the immediate children of
a root directory:

1. Date prefix: "Trip" -> "2019-11 - Trip", using the oldest file date.
2. Keyword tag: "2015-12 - Christmas Party 2015" -> "2015-12 - [Christmas 2015]".

Both passes only look at the current name to decide whether a folder was
already handled, so re-running them is a no-op.
"""

import logging
import re
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import Any, Dict, Iterable, List, Optional, Sequence, Tuple

import pandas as pd

from event_folders.config import (
    get_bracket_style,
    get_date_taken_tag,
    get_locale,
    get_log_parse_failures,
    get_require_prefix,
    load_config,
)
from event_folders.exceptions import NoDateAvailable, NoDateResolvable
from event_folders.models.enums import BracketStyle
from event_folders.models.folder import FolderRecord
from event_folders.naming.classifier import classify
from event_folders.naming.composer import compose_date_prefix_name, compose_tag_name
from event_folders.naming.patterns import extract_prefix, has_category_tag, has_date_prefix
from event_folders.scanner.dates import DateResolver
from event_folders.scanner.directory import list_subdirectories, scan_folder
from event_folders.scanner.exif import DateTakenReader, MetadataCache

logger = logging.getLogger(__name__)

# Characters no folder name may contain on Windows, plus control characters
INVALID_NAME_CHARACTERS = re.compile(r'[<>:"/\\|?*\x00-\x1f]')


class Pipeline(Enum):
    """The two renaming passes, in the order they run."""
    DATE_PREFIX = "date-prefix"
    KEYWORD = "keyword"


@dataclass
class RenameDecision:
    """
    What should happen to one folder.

    Attributes:
        folder: Path of the folder on disk
        current_name: Name the decision was made from
        new_name: Proposed name, None when the folder is skipped
        reason: Why the folder is skipped, or how the name was derived
        pipeline: Pass that produced the decision
    """
    folder: Path
    current_name: str
    new_name: Optional[str] = None
    reason: str = ""
    pipeline: Pipeline = Pipeline.DATE_PREFIX

    @property
    def should_rename(self) -> bool:
        """True when the decision should be executed."""
        return self.new_name is not None and self.new_name != self.current_name

    @property
    def effective_name(self) -> str:
        """The name the folder has after this decision is applied."""
        return self.new_name if self.should_rename else self.current_name

    def to_dict(self) -> Dict[str, Any]:
        return {
            "folder": str(self.folder),
            "pipeline": self.pipeline.value,
            "current_name": self.current_name,
            "new_name": self.new_name,
            "should_rename": self.should_rename,
            "reason": self.reason,
        }


def _skip(folder: FolderRecord, reason: str, pipeline: Pipeline) -> RenameDecision:
    return RenameDecision(folder.path, folder.name, None, reason, pipeline)


def decide_date_prefix(folder: FolderRecord, resolver: DateResolver) -> RenameDecision:
    """
    Decide the date-prefix rename of a folder.

    Args:
        folder: Scanned folder
        resolver: Resolver for the folder's oldest file date

    Returns:
        RenameDecision; skipped when the name already starts with "YYYY-MM"

    Raises:
        NoDateAvailable: If the folder holds no files
        NoDateResolvable: If no file produced a date
    """
    if has_date_prefix(folder.name):
        return _skip(folder, "already dated", Pipeline.DATE_PREFIX)

    resolved = resolver.resolve(folder)
    new_name = compose_date_prefix_name(resolved, folder.name)
    if new_name == folder.name:
        return _skip(folder, "unchanged", Pipeline.DATE_PREFIX)

    return RenameDecision(
        folder=folder.path,
        current_name=folder.name,
        new_name=new_name,
        reason=f"oldest file {resolved.value:%Y-%m-%d} ({resolved.source.value})",
        pipeline=Pipeline.DATE_PREFIX,
    )


def decide_keyword_tag(
    folder: FolderRecord,
    resolver: Optional[DateResolver] = None,
    style: BracketStyle = BracketStyle.SQUARE,
    require_prefix: bool = True,
) -> RenameDecision:
    """
    Decide the category-tag rename of a folder.

    Args:
        folder: Scanned folder
        resolver: Resolver used only when neither the name nor its prefix
            carries a year
        style: Bracket convention for the tag
        require_prefix: Leave folders without a "YYYY-MM - " prefix alone;
            when False the whole name is classified

    Returns:
        RenameDecision; skipped when already tagged or lacking a prefix

    Raises:
        NoDateAvailable: If the year has to come from files and there are none
    """
    if has_category_tag(folder.name):
        return _skip(folder, "already tagged", Pipeline.KEYWORD)

    prefix = extract_prefix(folder.name)
    if prefix is None and require_prefix:
        return _skip(folder, "no date prefix", Pipeline.KEYWORD)

    def fallback_year() -> Optional[int]:
        if resolver is None:
            return None
        return resolver.resolve(folder).year

    if prefix is not None:
        rule = classify(prefix.remainder, prefix.year, fallback_year)
        new_name = compose_tag_name(prefix.prefix, rule, style)
    else:
        rule = classify(folder.name, None, fallback_year)
        new_name = compose_tag_name(None, rule, style)

    if new_name == folder.name:
        return _skip(folder, "unchanged", Pipeline.KEYWORD)

    return RenameDecision(
        folder=folder.path,
        current_name=folder.name,
        new_name=new_name,
        reason=f"{rule.category.value.lower()}, year from {rule.year_source.value}",
        pipeline=Pipeline.KEYWORD,
    )


@dataclass
class RenameOutcome:
    """
    Result of a rename attempt.

    Attributes:
        success: Whether the folder was renamed
        destination: Target path of the rename
        reason: Why the rename failed
    """
    success: bool
    destination: Path
    reason: Optional[str] = None


class FolderRenamer:
    """Rename folders in place. Failures are reported, never retried."""

    def rename(self, path: Path, new_name: str) -> RenameOutcome:
        """
        Rename a folder within its parent directory.

        Args:
            path: Folder to rename
            new_name: New last path component

        Returns:
            RenameOutcome describing success or the failure reason
        """
        # Validate before with_name(), which raises on separators and empty names
        invalid = sorted(set(INVALID_NAME_CHARACTERS.findall(new_name)))
        if not new_name or invalid or new_name.rstrip(" .") != new_name:
            return RenameOutcome(
                False, path, f"invalid characters in name {new_name!r}: {''.join(invalid)}"
            )

        destination = path.with_name(new_name)
        if destination.exists() and not _same_entry(path, destination):
            return RenameOutcome(False, destination, f"name collision: {destination} already exists")

        try:
            path.rename(destination)
        except OSError as e:
            return RenameOutcome(False, destination, str(e))

        return RenameOutcome(True, destination)


def _same_entry(path: Path, other: Path) -> bool:
    # Case-only renames on case-insensitive file systems
    try:
        return path.samefile(other)
    except OSError:
        return False


@dataclass
class OrganizationResult:
    """
    Track results of a renaming run.

    Attributes:
        folders_processed: Distinct event folders found below the root
        passes_run: Number of passes run over them
        folders_renamed: Renames applied (or planned), counted per pass
        folders_skipped: Decisions that left a folder alone, counted per pass
        errors: (path, message) pairs of folders that failed
        decisions: Every decision of every pass
    """
    folders_processed: int = 0
    passes_run: int = 0
    folders_renamed: int = 0
    folders_skipped: int = 0
    errors: List[Tuple[Path, str]] = field(default_factory=list)
    decisions: List[RenameDecision] = field(default_factory=list)

    def add_error(self, folder: Path, error: str):
        self.errors.append((folder, error))

    def __str__(self):
        return (
            f"Processed {self.folders_processed} folders in {self.passes_run} passes. "
            f"Renames: {self.folders_renamed}. "
            f"Skipped: {self.folders_skipped}. "
            f"Errors: {len(self.errors)}"
        )


def decisions_to_dataframe(decisions: Iterable[RenameDecision]) -> pd.DataFrame:
    """
    Convert rename decisions to a pandas DataFrame.

    Args:
        decisions: Decisions from one or more passes

    Returns:
        DataFrame with one row per decision
    """
    columns = ["folder", "pipeline", "current_name", "new_name", "should_rename", "reason"]
    data = [decision.to_dict() for decision in decisions]
    if not data:
        return pd.DataFrame(columns=columns)
    return pd.DataFrame(data, columns=columns)


class FolderOrganizer:
    """
    Run the renaming passes over the event folders of a root directory.

    Attributes:
        resolver: Shared date resolver for the run
        style: Bracket convention of the keyword pass
        require_prefix: Whether the keyword pass needs a date prefix
        dry_run: Only compute and log decisions
        renamer: Rename collaborator used when not a dry run
    """

    def __init__(
        self,
        resolver: DateResolver,
        style: BracketStyle = BracketStyle.SQUARE,
        require_prefix: bool = True,
        dry_run: bool = True,
        renamer: Optional[FolderRenamer] = None,
    ):
        self.resolver = resolver
        self.style = style
        self.require_prefix = require_prefix
        self.dry_run = dry_run
        self.renamer = renamer or FolderRenamer()

    def decide(self, pipeline: Pipeline, folder: FolderRecord) -> RenameDecision:
        if pipeline is Pipeline.DATE_PREFIX:
            return decide_date_prefix(folder, self.resolver)
        return decide_keyword_tag(folder, self.resolver, self.style, self.require_prefix)

    def run(
        self,
        root: Path,
        pipelines: Sequence[Pipeline] = (Pipeline.DATE_PREFIX, Pipeline.KEYWORD),
    ) -> OrganizationResult:
        """
        Run the given passes, in order, over every child folder of root.

        In a dry run later passes see the names earlier passes would have
        produced.

        Raises:
            FileNotFoundError: If root does not exist
            MetadataServiceError: If the metadata reader becomes unusable
        """
        result = OrganizationResult()
        folders = list_subdirectories(root)
        planned: Dict[Path, str] = {}
        result.folders_processed = len(folders)

        logger.info("Found %d folders in %s", len(folders), root)

        for pipeline in pipelines:
            logger.info("Running %s pass", pipeline.value)
            result.passes_run += 1
            for path in folders:
                decision = self.process_folder(pipeline, path, planned.get(path), result)
                if decision is not None and decision.should_rename and self.dry_run:
                    planned[path] = decision.new_name

            # Live renames moved folders on disk; rescan for the next pass
            if not self.dry_run:
                folders = list_subdirectories(root)

        return result

    def process_folder(
        self,
        pipeline: Pipeline,
        path: Path,
        name: Optional[str],
        result: OrganizationResult,
    ) -> Optional[RenameDecision]:
        """
        Decide and, unless dry-running, apply one folder's rename.

        Returns:
            The decision, or None if the folder was skipped on an error
        """

        try:
            folder = scan_folder(path, name)
            decision = self.decide(pipeline, folder)
        except NoDateResolvable as e:
            result.folders_skipped += 1
            result.decisions.append(
                RenameDecision(path, name or path.name, None, "no date resolvable", pipeline)
            )
            logger.debug("%s", e)
            return None
        except NoDateAvailable:
            result.folders_skipped += 1
            result.decisions.append(
                RenameDecision(path, name or path.name, None, "empty folder", pipeline)
            )
            logger.debug("Skipping empty folder %s", path)
            return None
        except OSError as e:
            logger.error("Failed to scan %s: %s", path, e)
            result.add_error(path, str(e))
            return None

        result.decisions.append(decision)

        if not decision.should_rename:
            result.folders_skipped += 1
            logger.debug("Skip %s: %s", decision.current_name, decision.reason)
            return decision

        if self.dry_run:
            logger.info("[DRY RUN] Rename: %s -> %s", decision.current_name, decision.new_name)
            result.folders_renamed += 1
            return decision

        outcome = self.renamer.rename(path, decision.new_name)
        if outcome.success:
            logger.info("Renamed: %s -> %s", decision.current_name, decision.new_name)
            result.folders_renamed += 1
        else:
            logger.error("Failed to rename %s: %s", path, outcome.reason)
            result.add_error(path, outcome.reason)
        return decision


def organize_directory(
    root: Path,
    config_path: Optional[Path] = None,
    dry_run: bool = True,
    pipelines: Sequence[Pipeline] = (Pipeline.DATE_PREFIX, Pipeline.KEYWORD),
    config: Optional[Dict[str, Any]] = None,
    reader: Optional[DateTakenReader] = None,
    renamer: Optional[FolderRenamer] = None,
) -> OrganizationResult:
    """
    Date-prefix and tag the event folders directly below root.

    Args:
        root: Directory whose immediate subdirectories are the event folders
        config_path: Path to config file (ignored when config is given)
        dry_run: If True, only log the renames
        pipelines: Passes to run, in order
        config: Already loaded configuration
        reader: Date-taken reader replacing the Pillow/exifread one
        renamer: Rename collaborator replacing FolderRenamer

    Returns:
        OrganizationResult with counts, errors and every decision

    Raises:
        ConfigError: If the configuration is invalid
        FileNotFoundError: If root or an explicit config file is missing
        MetadataServiceError: If the metadata reader is unavailable
    """
    if config is None:
        config = load_config(config_path)

    locale = get_locale(config)
    style = get_bracket_style(config, dry_run)

    with MetadataCache(reader, tag=get_date_taken_tag(config)) as cache:
        resolver = DateResolver(
            cache,
            locale=locale,
            log_parse_failures=get_log_parse_failures(config, dry_run),
        )
        organizer = FolderOrganizer(
            resolver,
            style=style,
            require_prefix=get_require_prefix(config),
            dry_run=dry_run,
            renamer=renamer,
        )
        result = organizer.run(root, pipelines)

    logger.info("%s", result)
    return result
