# ABOUTME: Computes a non-colliding destination path for a file inside a directory.
# ABOUTME: Appends _1, _2, ... to the stem and falls back to a timestamp suffix.

import logging
import time
from collections.abc import Container
from pathlib import Path

logger = logging.getLogger(__name__)

MAX_SUFFIX_ATTEMPTS = 9999


def _taken(path: Path, reserved: Container) -> bool:
    return path in reserved or path.exists()


def resolve_destination(
    directory: Path, file_name: str, reserved: Container = ()
) -> Path:
    """Return a path in directory for file_name that does not exist yet.

    Paths in ``reserved`` count as taken even if they are not on disk. The result is
    only guaranteed free at the moment of the call.
    """
    target = directory / file_name
    if not _taken(target, reserved):
        return target

    name = Path(file_name)
    stem, suffix = name.stem, name.suffix

    for counter in range(1, MAX_SUFFIX_ATTEMPTS + 1):
        candidate = directory / f"{stem}_{counter}{suffix}"
        if not _taken(candidate, reserved):
            return candidate

    fallback = directory / f"{file_name}_{int(time.time())}"
    logger.warning(
        "Exhausted %d suffixes for %s, using %s", MAX_SUFFIX_ATTEMPTS, target, fallback.name
    )
    return fallback
