# ABOUTME: Exception hierarchy for the photo organizer.
# ABOUTME: Separates fatal startup errors from per-file relocation failures.

from pathlib import Path


class PhotoOrganizerError(Exception):
    """Base error for the project."""


class ConfigError(PhotoOrganizerError):
    pass


class SourceDirectoryError(PhotoOrganizerError):
    pass


class RelocationError(PhotoOrganizerError):
    """A single file could not be copied or moved."""


class MissingFileNameError(RelocationError):
    pass


class DestinationDirectoryError(RelocationError):
    pass


class CopyError(RelocationError):
    pass


class SourceRemovalError(RelocationError):
    """The fallback copy succeeded but the source could not be deleted.

    Both files now exist on disk; the duplicate needs operator attention.
    """

    def __init__(self, source: Path, destination: Path, reason: str = ""):
        self.source = source
        self.destination = destination
        message = f"copied to {destination} but could not delete source {source}"
        if reason:
            message = f"{message}: {reason}"
        super().__init__(message)


class ManifestError(PhotoOrganizerError):
    """The manifest file exists but is not a valid manifest."""
