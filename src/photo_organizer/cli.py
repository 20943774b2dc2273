# ABOUTME: CLI entry point for the photo organizer tool using argparse.
# ABOUTME: Provides commands for organizing photos by capture date and undoing a previous run.

import argparse
import logging
import sys
from pathlib import Path

from photo_organizer.photo_organizer import PhotoOrganizer
from photo_organizer.stats import format_summary
from photo_organizer.utils.backup import load_manifest, undo_operations
from photo_organizer.utils.config import (
    OrganizeConfig,
    load_settings,
    validate_source,
)
from photo_organizer.utils.errors import ConfigError, ManifestError, SourceDirectoryError

logger = logging.getLogger("photo_organizer")


def build_parser() -> argparse.ArgumentParser:
    """Build the argparse parser with all subcommands."""
    # Common arguments shared across all subcommands
    common_parser = argparse.ArgumentParser(add_help=False)
    common_parser.add_argument(
        "--verbose", "-v",
        action="store_true",
        help="Enable verbose logging output.",
    )
    common_parser.add_argument(
        "--config", "-c",
        type=str,
        default=None,
        help="Path to config file (default: ~/.photo_organizer.yml).",
    )
    common_parser.add_argument(
        "--log-file",
        type=str,
        default=None,
        help="Path to log file for persistent logging output.",
    )

    parser = argparse.ArgumentParser(
        prog="photo-organizer",
        description="Sort photos into folders named after their capture date.",
        parents=[common_parser],
    )

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    # organize
    organize_parser = subparsers.add_parser(
        "organize", help="Organize photos by capture date.", parents=[common_parser],
    )
    organize_parser.add_argument(
        "source",
        nargs="?",
        default=".",
        help="Source directory with photos (default: current directory).",
    )
    organize_parser.add_argument(
        "--output", "-o",
        type=str,
        default=None,
        help="Output directory (default: <source>/organized).",
    )
    organize_parser.add_argument(
        "--format", "-f",
        dest="date_format",
        type=str,
        default=None,
        help="strftime pattern for date directories (default: %%Y-%%m-%%d).",
    )
    organize_parser.add_argument(
        "--move", "-m",
        action="store_true",
        default=None,
        help="Move files instead of copying them.",
    )
    organize_parser.add_argument(
        "--dry-run", "-d",
        action="store_true",
        help="Show what would be done without touching any file.",
    )
    organize_parser.add_argument(
        "--no-recursive",
        dest="recursive",
        action="store_false",
        default=None,
        help="Do not descend into subdirectories.",
    )
    organize_parser.add_argument(
        "--quiet", "-q",
        action="store_true",
        default=None,
        help="Only print the final summary.",
    )

    # undo
    undo_parser = subparsers.add_parser(
        "undo", help="Undo a previous organize run.", parents=[common_parser],
    )
    undo_parser.add_argument(
        "manifest",
        help="Path to the manifest JSON file written by the organize run.",
    )

    return parser


def build_config(args: argparse.Namespace, settings: dict) -> OrganizeConfig:
    """Combine config file settings with command line flags; flags win when given."""
    source = validate_source(Path(args.source))
    values = dict(settings)
    for key in ("output", "date_format", "move", "recursive", "quiet"):
        value = getattr(args, key, None)
        if value is not None:
            values[key] = value
    values["source"] = source
    values["dry_run"] = args.dry_run
    return OrganizeConfig.from_dict(values)


def _undo(manifest_arg: str) -> int:
    manifest_path = Path(manifest_arg)
    if not manifest_path.exists():
        logger.error("Manifest file not found: %s", manifest_path)
        return 1
    try:
        manifest = load_manifest(manifest_path)
    except ManifestError as e:
        logger.error("%s", e)
        return 1
    results = undo_operations(manifest)
    logger.info(
        "Undo complete: %d restored, %d copies removed, %d failed",
        results["restored"],
        results["removed"],
        results["failed"],
    )
    return 0 if results["failed"] == 0 else 1


def main() -> int:
    """Main CLI entry point. Returns exit code."""
    parser = build_parser()
    args = parser.parse_args()

    # Set up logging
    level = logging.DEBUG if getattr(args, "verbose", False) else logging.INFO
    logging.basicConfig(
        level=level,
        format="%(levelname)s: %(message)s",
    )
    if level > logging.DEBUG:
        logging.getLogger("exifread").setLevel(logging.ERROR)

    # Add file logging if requested
    log_file = getattr(args, "log_file", None)
    if log_file:
        file_handler = logging.FileHandler(log_file)
        file_handler.setLevel(level)
        file_handler.setFormatter(logging.Formatter("%(asctime)s %(levelname)s: %(message)s"))
        logging.getLogger().addHandler(file_handler)

    if not args.command:
        parser.print_help()
        return 1

    if args.command == "undo":
        return _undo(args.manifest)

    # Load config
    config_path = Path(args.config) if args.config else Path.home() / ".photo_organizer.yml"
    try:
        settings = load_settings(config_path)
        config = build_config(args, settings)
    except (ConfigError, SourceDirectoryError) as e:
        logger.error("%s", e)
        return 1

    if not config.quiet:
        if config.dry_run:
            logger.info("Dry run: no files will be changed")
        logger.info("Source: %s", config.source)
        logger.info("Output: %s", config.output)
        logger.info(
            "Mode: %s | Date format: %s | Recursive: %s",
            "move" if config.move else "copy",
            config.date_format,
            "yes" if config.recursive else "no",
        )

    organizer = PhotoOrganizer(config)
    photos = organizer.scan()
    if not photos:
        logger.info("No supported photo files found.")
        return 0
    if not config.quiet:
        logger.info("Found %d photos", len(photos))

    report = organizer.run(photos)

    for line in format_summary(report, include_dates=not config.quiet).splitlines():
        logger.info(line)

    return 0


if __name__ == "__main__":
    sys.exit(main())
