# ABOUTME: Configuration management for the photo organizer.
# ABOUTME: Loads/saves YAML settings, provides defaults, and validates the source directory.

from dataclasses import dataclass, fields
from pathlib import Path
from typing import Optional

import yaml

from photo_organizer.utils.errors import ConfigError, SourceDirectoryError

DEFAULT_DATE_FORMAT = "%Y-%m-%d"
DEFAULT_OUTPUT_NAME = "organized"
UNSORTED_DIR = "unsorted"

# Settings that may come from the YAML file; everything else is per invocation.
DEFAULT_SETTINGS = {
    "output": None,
    "date_format": DEFAULT_DATE_FORMAT,
    "move": False,
    "recursive": True,
    "quiet": False,
}


@dataclass
class OrganizeConfig:
    """Holds the options of one organize run."""

    source: Path
    output: Optional[Path] = None
    date_format: str = DEFAULT_DATE_FORMAT
    move: bool = False
    dry_run: bool = False
    recursive: bool = True
    quiet: bool = False

    def __post_init__(self):
        self.source = Path(self.source)
        if self.output is None:
            self.output = self.source / DEFAULT_OUTPUT_NAME
        else:
            self.output = Path(self.output).expanduser()

    @classmethod
    def from_dict(cls, data: dict) -> "OrganizeConfig":
        known = {f.name for f in fields(cls)}
        unknown = set(data) - known
        if unknown:
            raise ConfigError(f"Unknown setting(s): {', '.join(sorted(unknown))}")
        values = {key: value for key, value in data.items() if value is not None}
        if "source" not in values:
            raise ConfigError("A source directory is required")
        return cls(**values)


def validate_source(source: Path) -> Path:
    """Resolve the source directory and check that it exists and is a directory."""
    resolved = Path(source).expanduser().resolve()
    if not resolved.exists():
        raise SourceDirectoryError(f"Source directory not found: {resolved}")
    if not resolved.is_dir():
        raise SourceDirectoryError(f"Source path is not a directory: {resolved}")
    return resolved


def load_settings(config_path: Path) -> dict:
    """Load settings from a YAML file, merged over the defaults."""
    settings = dict(DEFAULT_SETTINGS)

    if not config_path.exists():
        return settings

    try:
        with open(config_path, "r") as f:
            user_data = yaml.safe_load(f) or {}
    except (OSError, yaml.YAMLError) as e:
        raise ConfigError(f"Cannot read config file {config_path}: {e}") from e

    if not isinstance(user_data, dict):
        raise ConfigError(f"Config file {config_path} must contain a mapping")

    unknown = set(user_data) - set(DEFAULT_SETTINGS)
    if unknown:
        raise ConfigError(
            f"Unknown setting(s) in {config_path}: {', '.join(sorted(unknown))}"
        )

    settings.update(user_data)
    return settings
