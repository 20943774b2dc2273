# ABOUTME: Main photo organizer that sorts photos into date-named directories.
# ABOUTME: Extracts capture dates, relocates each file and folds the outcomes into run statistics.

import logging
from collections.abc import Iterable
from datetime import datetime
from pathlib import Path

from tqdm import tqdm

from photo_organizer.metadata.capture_date import extract_capture_date
from photo_organizer.scanner import collect_photos
from photo_organizer.stats import RunReport, Statistics
from photo_organizer.utils.backup import (
    MANIFEST_NAME,
    BackupManifest,
    append_to_manifest,
    create_backup_entry,
    save_manifest,
)
from photo_organizer.utils.config import UNSORTED_DIR, OrganizeConfig
from photo_organizer.utils.destination import resolve_destination
from photo_organizer.utils.errors import (
    ManifestError,
    PhotoOrganizerError,
    SourceRemovalError,
)
from photo_organizer.utils.relocator import RelocationOutcome, Relocator

logger = logging.getLogger(__name__)


class PhotoOrganizer:
    """Sorts photos into ``<output>/<formatted capture date>/`` or ``<output>/unsorted/``."""

    def __init__(self, config: OrganizeConfig):
        self.config = config
        self.manifest_path = config.output / MANIFEST_NAME

    def scan(self) -> list[Path]:
        """Return the candidate photos of the configured source directory."""
        return collect_photos(
            self.config.source,
            recursive=self.config.recursive,
            exclude=self.config.output,
        )

    def run(self, candidates: Iterable[Path] | None = None) -> RunReport:
        """Organize candidates in the given order and return the run statistics.

        A failure on one file is logged and counted; the batch always runs to the end.
        """
        if candidates is None:
            candidates = self.scan()

        stats = Statistics()
        manifest = BackupManifest()
        relocator = Relocator(move=self.config.move, dry_run=self.config.dry_run)

        action = "Previewing" if self.config.dry_run else "Organizing"
        for photo in tqdm(candidates, desc=action, unit="file", disable=self.config.quiet):
            try:
                self._organize_one(Path(photo), relocator, stats, manifest)
            except (OSError, PhotoOrganizerError, ValueError) as e:
                stats.record_error(photo, e)
                logger.error("Failed to process %s: %s", photo, e)

        if manifest.entries:
            self._record_manifest(manifest)

        return stats.report()

    def _record_manifest(self, manifest: BackupManifest) -> None:
        """Append the run's entries to the manifest without ever losing them.

        If the existing manifest is unreadable it is left alone and the run's entries
        go to a new timestamped file next to it.
        """
        try:
            append_to_manifest(manifest, self.manifest_path)
            return
        except ManifestError as e:
            stamp = datetime.now().strftime("%Y%m%dT%H%M%S")
            fallback = resolve_destination(
                self.manifest_path.parent, f"{self.manifest_path.stem}-{stamp}.json"
            )
            logger.error("%s; writing this run's entries to %s", e, fallback)
        except OSError as e:
            logger.error("Could not write manifest %s: %s", self.manifest_path, e)
            return

        try:
            save_manifest(manifest, fallback)
        except OSError as e:
            logger.error("Could not write manifest %s: %s", fallback, e)

    def _organize_one(
        self,
        photo: Path,
        relocator: Relocator,
        stats: Statistics,
        manifest: BackupManifest,
    ) -> None:
        capture_date = extract_capture_date(photo)

        if capture_date is not None:
            subdir = capture_date.strftime(self.config.date_format)
        else:
            subdir = UNSORTED_DIR

        try:
            result = relocator.relocate(photo, self.config.output / subdir)
        except SourceRemovalError as e:
            # The copy is complete, so record it for undo before reporting the failure.
            manifest.add(create_backup_entry(e.source, e.destination, "copy"))
            raise

        if result.outcome is RelocationOutcome.SKIPPED:
            stats.record_skipped()
            logger.debug("Skipped %s: %s already exists", photo, result.destination)
            return

        if capture_date is not None:
            stats.record_organized(capture_date.date().isoformat())
            date_info = capture_date.strftime("%Y-%m-%d %H:%M:%S")
        else:
            stats.record_unsorted()
            date_info = "no date"

        verb = "move" if result.outcome is RelocationOutcome.MOVED else "copy"
        if result.simulated:
            if not self.config.quiet:
                logger.info(
                    "[DRY RUN] Would %s: %s -> %s [%s]",
                    verb, photo, result.destination, date_info,
                )
            return

        manifest.add(create_backup_entry(photo, result.destination, verb))
        if not self.config.quiet:
            label = "Moved" if verb == "move" else "Copied"
            logger.info("%s: %s -> %s [%s]", label, photo, result.destination, date_info)
