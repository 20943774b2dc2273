# ABOUTME: Copies or moves a single file into a target directory without overwriting.
# ABOUTME: Moves try an atomic rename first and fall back to copy-then-delete.

import logging
import os
import shutil
from dataclasses import dataclass
from enum import Enum
from pathlib import Path

from photo_organizer.utils.destination import resolve_destination
from photo_organizer.utils.errors import (
    CopyError,
    DestinationDirectoryError,
    MissingFileNameError,
    SourceRemovalError,
)

logger = logging.getLogger(__name__)

# Filesystems such as FAT store modification times with two-second resolution.
MTIME_TOLERANCE_SECONDS = 2.0


class RelocationOutcome(Enum):
    MOVED = "moved"
    COPIED = "copied"
    SKIPPED = "skipped"


@dataclass(frozen=True)
class RelocationResult:
    source: Path
    destination: Path
    outcome: RelocationOutcome
    simulated: bool = False


def _same_file_signature(src_stat: os.stat_result, dst_stat: os.stat_result) -> bool:
    """Check whether dst_stat belongs to the source itself or to a copy of it."""
    if (src_stat.st_dev, src_stat.st_ino) == (dst_stat.st_dev, dst_stat.st_ino):
        return True
    return (
        src_stat.st_size == dst_stat.st_size
        and abs(src_stat.st_mtime - dst_stat.st_mtime) <= MTIME_TOLERANCE_SECONDS
    )


class Relocator:
    """Places files into target directories by copying or moving them.

    In dry-run mode every decision is computed but nothing on disk changes. The
    destinations handed out during a dry run are remembered, together with the
    status of the file that would land there, so that suffixes and skips match
    what a real run would produce.
    """

    def __init__(self, move: bool = False, dry_run: bool = False):
        self.move = move
        self.dry_run = dry_run
        self._reserved: dict[Path, os.stat_result] = {}

    @property
    def outcome(self) -> RelocationOutcome:
        return RelocationOutcome.MOVED if self.move else RelocationOutcome.COPIED

    def relocate(
        self, source: Path, target_dir: Path, file_name: str | None = None
    ) -> RelocationResult:
        """Copy or move source into target_dir.

        Raises:
            RelocationError: If the file cannot be placed. The source is only ever
                removed after its copy is complete.
        """
        name = file_name if file_name is not None else source.name
        if not name:
            raise MissingFileNameError(f"No file name in source path: {source}")

        existing = target_dir / name
        try:
            if self._is_previous_copy(source, existing):
                return RelocationResult(source, existing, RelocationOutcome.SKIPPED, self.dry_run)
        except OSError as exc:
            raise CopyError(f"Cannot read {source}: {exc}") from exc

        destination = resolve_destination(target_dir, name, reserved=self._reserved)
        if destination.exists():
            return RelocationResult(source, destination, RelocationOutcome.SKIPPED, self.dry_run)

        if self.dry_run:
            self._reserved[destination] = source.stat()
            return RelocationResult(source, destination, self.outcome, simulated=True)

        try:
            target_dir.mkdir(parents=True, exist_ok=True)
        except OSError as exc:
            raise DestinationDirectoryError(
                f"Cannot create directory {target_dir}: {exc}"
            ) from exc

        if self.move:
            self._move(source, destination)
        else:
            self._copy(source, destination)

        return RelocationResult(source, destination, self.outcome)

    def _is_previous_copy(self, source: Path, candidate: Path) -> bool:
        """Check whether candidate is the source itself or a copy left by an earlier placement."""
        dst_stat = self._reserved.get(candidate)
        if dst_stat is None:
            if not candidate.is_file():
                return False
            dst_stat = candidate.stat()
        return _same_file_signature(source.stat(), dst_stat)

    def _copy(self, source: Path, destination: Path) -> None:
        try:
            shutil.copy2(source, destination)
        except OSError as exc:
            self._discard_partial(destination)
            raise CopyError(f"Cannot copy {source} -> {destination}: {exc}") from exc

    def _move(self, source: Path, destination: Path) -> None:
        try:
            source.rename(destination)
            return
        except OSError as exc:
            logger.debug("Rename of %s failed (%s), copying instead", source, exc)

        self._copy(source, destination)
        try:
            source.unlink()
        except OSError as exc:
            raise SourceRemovalError(source, destination, str(exc)) from exc

    @staticmethod
    def _discard_partial(destination: Path) -> None:
        try:
            destination.unlink(missing_ok=True)
        except OSError as exc:
            logger.warning("Could not remove partial copy %s: %s", destination, exc)
