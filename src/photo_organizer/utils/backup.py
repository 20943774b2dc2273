# ABOUTME: Manifest of copy/move operations performed by the photo organizer, with undo.
# ABOUTME: Records each relocation in a JSON file and reverts them without overwriting anything.

import json
import logging
import shutil
from dataclasses import dataclass, field
from datetime import datetime, timezone
from pathlib import Path

from photo_organizer.utils.errors import ManifestError

logger = logging.getLogger(__name__)

MANIFEST_NAME = ".photo_organizer_manifest.json"


def create_backup_entry(source: Path, destination: Path, operation: str) -> dict:
    """Create a manifest entry for a single copy or move."""
    return {
        "source": str(source),
        "destination": str(destination),
        "operation": operation,
        "timestamp": datetime.now(timezone.utc).isoformat(),
    }


@dataclass
class BackupManifest:
    """Tracks all copies and moves for potential undo."""

    entries: list = field(default_factory=list)

    def add(self, entry: dict) -> None:
        self.entries.append(entry)

    def extend(self, other: "BackupManifest") -> None:
        self.entries.extend(other.entries)


def save_manifest(manifest: BackupManifest, path: Path) -> None:
    """Persist the manifest to a JSON file."""
    path.parent.mkdir(parents=True, exist_ok=True)
    with open(path, "w") as f:
        json.dump({"entries": manifest.entries}, f, indent=2)


def load_manifest(path: Path) -> BackupManifest:
    """Load a manifest from a JSON file.

    Raises:
        ManifestError: If the file exists but does not hold a valid manifest.
    """
    if not path.exists():
        return BackupManifest()

    with open(path, "r") as f:
        try:
            data = json.load(f)
        except (json.JSONDecodeError, UnicodeDecodeError) as e:
            raise ManifestError(f"Manifest {path} is not valid JSON: {e}") from e

    entries = data.get("entries", []) if isinstance(data, dict) else None
    if not isinstance(entries, list) or not all(
        isinstance(entry, dict) and "source" in entry and "destination" in entry
        for entry in entries
    ):
        raise ManifestError(f"Manifest {path} does not contain a list of entries")

    manifest = BackupManifest()
    manifest.entries = entries
    return manifest


def append_to_manifest(manifest: BackupManifest, path: Path) -> None:
    """Add the entries of a run to the manifest stored at path."""
    combined = load_manifest(path)
    combined.extend(manifest)
    save_manifest(combined, path)


def _undo_move(src: Path, dst: Path) -> bool:
    if src.exists():
        logger.warning("Cannot undo move: %s already exists", src)
        return False
    src.parent.mkdir(parents=True, exist_ok=True)
    shutil.move(str(dst), str(src))
    logger.info("Restored: %s -> %s", dst, src)
    return True


def _undo_copy(src: Path, dst: Path) -> bool:
    if not src.exists():
        logger.warning("Keeping %s: original %s no longer exists", dst, src)
        return False
    dst.unlink()
    logger.info("Removed copy: %s", dst)
    return True


def undo_operations(manifest: BackupManifest) -> dict:
    """Undo all operations recorded in the manifest, newest first.

    Moves are reverted by moving the file back; copies by deleting the copy while
    the original still exists. Existing files are never overwritten.

    Returns a dict with 'restored', 'removed' and 'failed' counts.
    """
    restored = 0
    removed = 0
    failed = 0

    for entry in reversed(manifest.entries):
        src = Path(entry["source"])
        dst = Path(entry["destination"])
        operation = entry.get("operation", "move")

        if not dst.exists():
            logger.warning("Cannot undo: destination %s no longer exists", dst)
            failed += 1
            continue

        try:
            if operation == "copy":
                if _undo_copy(src, dst):
                    removed += 1
                    continue
            elif _undo_move(src, dst):
                restored += 1
                continue
        except OSError as e:
            logger.error("Failed to undo %s: %s", dst, e)

        failed += 1

    return {"restored": restored, "removed": removed, "failed": failed}
