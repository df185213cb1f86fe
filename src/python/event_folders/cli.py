"""
Command-line entry point for renaming event folders.

Usage:
    event-folders /path/to/events [--execute] [--pipeline all] [--config config.yaml]
"""

import argparse
import logging
import sys
from pathlib import Path
from typing import List, Optional

from event_folders.config import get_logging_config, load_config
from event_folders.exceptions import EventFoldersError
from event_folders.organizer import Pipeline, decisions_to_dataframe, organize_directory
from event_folders.utils import LOCALES, get_locale_profile, setup_logging

logger = logging.getLogger(__name__)

PIPELINE_CHOICES = {
    "date-prefix": (Pipeline.DATE_PREFIX,),
    "keyword": (Pipeline.KEYWORD,),
    "all": (Pipeline.DATE_PREFIX, Pipeline.KEYWORD),
}


def locale_name(value: str) -> str:
    """Canonicalize a --locale value, matching names case-insensitively."""
    try:
        return get_locale_profile(value).name
    except ValueError as e:
        raise argparse.ArgumentTypeError(str(e)) from e


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="event-folders",
        description="Prefix event folders with their oldest date and tag them by event type.",
    )
    parser.add_argument(
        "root",
        type=Path,
        help="Directory whose immediate subfolders are the event folders"
    )
    parser.add_argument(
        "--execute",
        action="store_true",
        help="Actually rename folders (default is a preview)"
    )
    parser.add_argument(
        "--pipeline",
        choices=sorted(PIPELINE_CHOICES),
        default="all",
        help="Which pass to run; 'all' runs the date prefix pass, then the keyword pass"
    )
    parser.add_argument(
        "--config",
        type=Path,
        help="Path to configuration file"
    )
    parser.add_argument(
        "--locale",
        type=locale_name,
        metavar="{" + ",".join(LOCALES) + "}",
        help="Locale of the date-taken text, case-insensitive (overrides the config file)"
    )
    parser.add_argument(
        "--report",
        type=Path,
        help="Write every decision to this CSV file"
    )
    parser.add_argument(
        "-v", "--verbose",
        action="store_true",
        help="Enable verbose logging"
    )
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    dry_run = not args.execute

    try:
        config = load_config(args.config)
        logging_config = get_logging_config(config)
    except (EventFoldersError, FileNotFoundError) as e:
        print(f"Configuration error: {e}")
        return 2

    if args.locale:
        config["locale"] = args.locale

    setup_logging("DEBUG" if args.verbose else logging_config["level"], logging_config["file"])

    if not args.root.is_dir():
        print(f"Error: Root directory '{args.root}' does not exist.")
        return 2

    print(f"Starting rename of folders in '{args.root}'...")
    if dry_run:
        print("DRY RUN: No folders will be renamed. Use --execute to proceed.")

    try:
        result = organize_directory(
            args.root,
            dry_run=dry_run,
            pipelines=PIPELINE_CHOICES[args.pipeline],
            config=config,
        )
    except (EventFoldersError, OSError) as e:
        logger.exception("Run aborted")
        print(f"\nCritical Error: {e}")
        return 2

    print("\nRename Complete:")
    print(result)

    if args.report:
        decisions_to_dataframe(result.decisions).to_csv(args.report, index=False)
        print(f"Report written to {args.report}")

    if result.errors:
        print("\nErrors encountered:")
        for path, error in result.errors:
            print(f"  {path}: {error}")
        return 1

    return 0


if __name__ == "__main__":
    sys.exit(main())
