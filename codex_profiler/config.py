"""
Settings management for codex-profiler.

Uses Pydantic for type-safe settings with optional YAML file support. The
profile store itself is JSON (see core/store.py); these settings only decide
where it lives and what a dispatch launches.
"""

import os
from pathlib import Path

import yaml
from pydantic import BaseModel, Field, ValidationError, field_validator

from codex_profiler.exceptions import ConfigError


DEFAULT_CONFIG_DIR = Path.home() / ".codex-profiler"
SETTINGS_ENV_VAR = "CODEX_PROFILER_SETTINGS"
LOG_LEVEL_ENV_VAR = "CODEX_PROFILER_LOG_LEVEL"

_LOG_LEVELS = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}


def _one_line(exc: Exception) -> str:
    return " ".join(str(exc).split())


class Settings(BaseModel):
    """Main settings model for codex-profiler."""

    config_dir: Path = DEFAULT_CONFIG_DIR
    config_filename: str = "config.json"
    program: str = Field(default="codex", description="Executable run for platform profiles")
    api_key_env: str = Field(
        default="CODEX_API_KEY",
        description="Environment variable carrying the profile API key",
    )
    web_url: str = "https://chat.openai.com"
    log_level: str = "WARNING"

    @field_validator("config_dir")
    @classmethod
    def _expand_dir(cls, value: Path) -> Path:
        return Path(value).expanduser()

    @field_validator("program", "api_key_env", "config_filename")
    @classmethod
    def _require_value(cls, value: str) -> str:
        normalized = value.strip()
        if not normalized:
            raise ValueError("must be a non-empty string")
        return normalized

    @field_validator("log_level")
    @classmethod
    def _normalize_level(cls, value: str) -> str:
        normalized = (value or "WARNING").upper()
        if normalized not in _LOG_LEVELS:
            return "WARNING"
        return normalized

    @property
    def config_path(self) -> Path:
        """Location of the JSON profile store."""
        return self.config_dir / self.config_filename

    @classmethod
    def load(cls, path: Path | str) -> "Settings":
        """Load settings from a YAML file.

        Args:
            path: Path to the YAML settings file.

        Returns:
            Loaded Settings instance.

        Raises:
            FileNotFoundError: If the settings file doesn't exist.
            ConfigError: If the settings file is invalid.
        """
        path = Path(path)
        if not path.exists():
            raise FileNotFoundError(f"Settings file not found: {path}")

        try:
            with open(path, "r", encoding="utf-8") as f:
                raw_data = yaml.safe_load(f) or {}
        except (OSError, yaml.YAMLError) as exc:
            raise ConfigError(f"Unable to read settings file {path}: {_one_line(exc)}") from exc

        if not isinstance(raw_data, dict):
            raise ConfigError(f"Settings file {path} must contain a mapping")

        try:
            return cls.model_validate(raw_data)
        except ValidationError as exc:
            raise ConfigError(f"Invalid settings in {path}: {_one_line(exc)}") from exc


# Global settings singleton
_settings: Settings | None = None


def get_settings() -> Settings:
    """Get the global settings instance.

    Returns:
        The loaded Settings instance.

    Raises:
        RuntimeError: If settings haven't been loaded yet.
    """
    if _settings is None:
        raise RuntimeError("Settings not loaded. Call load_settings() first.")
    return _settings


def default_settings_path() -> Path:
    """Settings file location, honouring CODEX_PROFILER_SETTINGS."""
    override = os.environ.get(SETTINGS_ENV_VAR)
    if override:
        return Path(override).expanduser()
    return DEFAULT_CONFIG_DIR / "settings.yaml"


def load_settings(path: Path | str | None = None) -> Settings:
    """Load settings from file or create defaults.

    Args:
        path: Path to the settings file. If None, uses default_settings_path().

    Returns:
        The loaded Settings instance.
    """
    global _settings

    path = Path(path) if path is not None else default_settings_path()

    if path.exists():
        _settings = Settings.load(path)
    else:
        _settings = Settings()

    level_override = os.environ.get(LOG_LEVEL_ENV_VAR)
    if level_override:
        _settings = Settings.model_validate(
            {**_settings.model_dump(), "log_level": level_override}
        )

    return _settings
