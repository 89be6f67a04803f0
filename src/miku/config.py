"""Configuration management for miku."""

import logging
from pathlib import Path
from typing import Any

import platformdirs
import yaml
from pydantic import Field, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from miku.config_io import APP_NAME

logger = logging.getLogger(__name__)

# Explicit YAML config path chosen on the command line (overrides the search)
_config_file: Path | None = None


def default_data_dir() -> Path:
    """Per-user application data directory (e.g. ~/.local/share/miku)."""
    return Path(platformdirs.user_data_dir(APP_NAME, appauthor=False))


def _load_yaml_config() -> dict[str, Any]:
    """Load YAML config file if it exists."""
    if _config_file is not None:
        if not _config_file.exists():
            raise FileNotFoundError(f"Config file not found: {_config_file}")
        config_paths = [_config_file]
    else:
        config_paths = [
            Path("miku.yaml"),
            Path("miku.yml"),
            Path.home() / ".config" / "miku" / "config.yaml",
            Path.home() / ".config" / "miku" / "config.yml",
        ]

    for path in config_paths:
        if path.exists():
            logger.debug(f"Loading config from {path}")
            with open(path) as f:
                return yaml.safe_load(f) or {}

    return {}


class Settings(BaseSettings):
    """Application settings loaded from YAML + environment variables."""

    model_config = SettingsConfigDict(
        env_prefix="MIKU_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # Where workspace_config.json, settings.json and recent_files.json live
    data_dir: Path = Field(default_factory=default_data_dir)

    log_level: str = "INFO"

    # Capacity of the most-recent-first lists
    recent_workspaces_limit: int = Field(default=10, ge=1)
    recent_files_limit: int = Field(default=10, ge=1)

    def log_config(self) -> None:
        """Log the effective configuration."""
        logger.info(f"Data directory: {self.data_dir}")
        logger.info(
            f"Recent limits: workspaces={self.recent_workspaces_limit}, "
            f"files={self.recent_files_limit}"
        )

    @model_validator(mode="before")
    @classmethod
    def load_yaml_config(cls, values: dict[str, Any]) -> dict[str, Any]:
        """Load YAML config and merge with env vars.

        Priority: Environment Variables > YAML Config > Defaults
        """
        yaml_config = _load_yaml_config()

        for key, val in yaml_config.items():
            if val is not None and key not in values:
                values[key] = val

        return values

    @model_validator(mode="after")
    def expand_paths(self) -> "Settings":
        """Expand ~ in paths to the user's home directory."""
        self.data_dir = Path(self.data_dir).expanduser().resolve()
        return self


# Global settings instance
settings = Settings()


def get_settings(config_file: str | None = None) -> Settings:
    """Get the current settings instance.

    Args:
        config_file: Optional YAML file to load instead of the default locations

    Returns:
        The settings, reloaded when a config file is given

    Raises:
        FileNotFoundError: If config_file does not exist
    """
    global _config_file
    if config_file is not None:
        _config_file = Path(config_file).expanduser()
        return reload_settings()
    return settings


def reload_settings() -> Settings:
    """Reload settings (useful after environment changes)."""
    global settings
    settings = Settings()
    return settings
