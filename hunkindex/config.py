"""Configuration management for hunkindex.

Handles user-level settings stored in ~/.hunkindex/config.yaml:
- preview_lines: Lines shown per uncovered portion
- preview_width: Maximum characters per preview line
- snippet_lines: Changed lines shown per hunk in listings
"""

from pathlib import Path
from typing import Any, Dict, Optional

import yaml
from pydantic import BaseModel, Field, ValidationError


class ConfigError(Exception):
    """Raised when there's an error with configuration."""
    pass


_CONFIG_DIR = Path.home() / ".hunkindex"


class ReviewSettings(BaseModel):
    """Settings for hunk listings and coverage reports."""

    preview_lines: int = Field(default=2, ge=1)
    preview_width: int = Field(default=80, ge=10)
    snippet_lines: int = Field(default=5, ge=1)


def get_config_dir() -> Path:
    """Get the hunkindex configuration directory.

    Returns:
        Path to ~/.hunkindex/
    """
    return _CONFIG_DIR


def get_config_file_path() -> Path:
    """Get path to config.yaml file.

    Returns:
        Path to ~/.hunkindex/config.yaml
    """
    return get_config_dir() / "config.yaml"


def load_config(path: Optional[Path] = None) -> Dict[str, Any]:
    """Load raw configuration from a YAML file.

    Args:
        path: Config file to read (default: ~/.hunkindex/config.yaml)

    Returns:
        Dictionary with configuration values. Empty dict if file doesn't exist.
    """
    config_file = path or get_config_file_path()

    if not config_file.exists():
        return {}

    try:
        with open(config_file, "r") as f:
            config = yaml.safe_load(f) or {}
    except (OSError, yaml.YAMLError) as e:
        raise ConfigError(f"Failed to load config from {config_file}: {e}")

    if not isinstance(config, dict):
        raise ConfigError(f"Config file {config_file} must contain a mapping")
    return config


def load_settings(path: Optional[Path] = None) -> ReviewSettings:
    """Load review settings, falling back to defaults for missing keys.

    Args:
        path: Config file to read (default: ~/.hunkindex/config.yaml)

    Returns:
        Validated ReviewSettings
    """
    config = load_config(path)
    try:
        return ReviewSettings(**config)
    except ValidationError as e:
        raise ConfigError(f"Invalid configuration: {e}")
