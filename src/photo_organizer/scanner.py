# ABOUTME: Finds candidate photo files under a source directory.
# ABOUTME: Returns supported image files in sorted order so repeated runs are deterministic.

import logging
from pathlib import Path

logger = logging.getLogger(__name__)

SUPPORTED_EXTENSIONS = frozenset({
    ".jpg", ".jpeg", ".png", ".tiff", ".tif", ".heic", ".heif",
    ".cr2", ".nef", ".arw", ".dng", ".orf", ".rw2", ".pef", ".srw",
})


def is_supported_image(path: Path) -> bool:
    """Check if a file has a recognized photo extension."""
    return path.suffix.lower() in SUPPORTED_EXTENSIONS


def _is_within(path: Path, directory: Path) -> bool:
    try:
        path.relative_to(directory)
    except ValueError:
        return False
    return True


def collect_photos(
    source_dir: Path, recursive: bool = True, exclude: Path | None = None
) -> list[Path]:
    """Return all supported photos in source_dir, sorted by full path.

    Files inside ``exclude`` (typically the output directory) are left out.
    """
    if not source_dir.is_dir():
        return []

    entries = source_dir.rglob("*") if recursive else source_dir.iterdir()
    excluded = exclude.resolve() if exclude is not None else None

    photos = []
    for entry in entries:
        if not entry.is_file() or not is_supported_image(entry):
            continue
        if excluded is not None and _is_within(entry.resolve(), excluded):
            continue
        photos.append(entry)

    photos.sort()
    logger.debug("Found %d photos in %s", len(photos), source_dir)
    return photos
