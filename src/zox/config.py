"""Configuration and settings."""

from pathlib import Path

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from zox.models import MatchMode

HISTORY_FILENAME = ".z"


class HomeDirectoryError(RuntimeError):
    """The user's home directory could not be determined."""


class Settings(BaseSettings):
    """Application settings with environment variable support."""

    model_config = SettingsConfigDict(
        env_prefix="ZOX_",
        env_file=".env",
        extra="ignore",
    )

    # Storage settings
    data_file: Path | None = None  # Defaults to ~/.z

    # Aging settings
    max_total_rank: float = 9000.0
    decay_factor: float = Field(default=0.99, gt=0, le=1)
    min_rank: float = 1.0

    # Paths never recorded, in addition to the home directory
    exclude_dirs: list[str] = Field(default_factory=list)

    match_mode: MatchMode = MatchMode.ORDERED

    debug: bool = False


def get_settings() -> Settings:
    """Build settings from the environment."""
    return Settings()


def discover_home() -> Path:
    """Return the current user's home directory.

    Raises:
        HomeDirectoryError: If no home directory can be determined.
    """
    try:
        return Path.home()
    except (RuntimeError, KeyError) as e:
        raise HomeDirectoryError("cannot determine home directory") from e


def resolve_data_file(settings: Settings, home: Path | None) -> Path:
    """Get the history file location.

    Args:
        settings: Application settings.
        home: The user's home directory, or None if unknown.

    Returns:
        The configured data file, or ``~/.z``.

    Raises:
        HomeDirectoryError: If no data file is configured and home is unknown.
    """
    if settings.data_file is not None:
        return settings.data_file
    if home is None:
        raise HomeDirectoryError("cannot locate history file without a home directory")
    return home / HISTORY_FILENAME
