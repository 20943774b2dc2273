# ABOUTME: Extracts the capture timestamp of a photo from its EXIF metadata.
# ABOUTME: Queries primary-image date tags in priority order; no usable date yields None.

import logging
from datetime import datetime
from pathlib import Path

import exifread

from photo_organizer.metadata.date_parser import parse_exif_date

logger = logging.getLogger(__name__)

# exifread keys: "EXIF ..." is the Exif sub-IFD and "Image ..." is IFD0, both belonging
# to the primary image. "Thumbnail ..." tags (IFD1) are never consulted.
DATE_TAGS = (
    "EXIF DateTimeOriginal",
    "EXIF DateTimeDigitized",
    "Image DateTime",
)


def _read_tags(fh, photo_path: Path) -> dict:
    """Return the EXIF tags of an open file, or an empty dict if the container is unreadable."""
    try:
        return exifread.process_file(fh, details=False) or {}
    except Exception as exc:
        # exifread has no common base exception for malformed containers
        logger.debug("No readable metadata in %s: %s", photo_path, exc)
        return {}


def extract_capture_date(photo_path: Path) -> datetime | None:
    """Return the capture date of a photo, or None if no date tag can be parsed.

    Raises:
        OSError: If the file cannot be opened.
    """
    with open(photo_path, "rb") as fh:
        tags = _read_tags(fh, photo_path)

    for key in DATE_TAGS:
        tag = tags.get(key)
        if tag is None:
            continue
        parsed = parse_exif_date(str(tag))
        if parsed is not None:
            return parsed
        logger.debug("Unparseable %s in %s: %r", key, photo_path, str(tag))

    return None
