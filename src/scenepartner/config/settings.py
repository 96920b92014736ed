"""ScenePartner configuration settings."""

from __future__ import annotations

import json
import os
import tomllib
from pathlib import Path
from typing import Any

import yaml
from pydantic import Field, field_validator, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from scenepartner.exceptions import ConfigurationError, check_config_keys


class ScenePartnerSettings(BaseSettings):
    """ScenePartner configuration settings.

    Settings are loaded with the following precedence (highest to lowest):
    1. CLI arguments (when provided via command flags)
    2. Config file values (YAML, TOML, or JSON), later files override earlier
    3. Environment variables (prefixed with SCENEPARTNER_)
       Example: export SCENEPARTNER_SILENCE_THRESHOLD_MS=2000
    4. .env file in the current directory
    5. Default values (defined in field declarations below)
    """

    model_config = SettingsConfigDict(
        env_prefix="SCENEPARTNER_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # Debug settings
    debug: bool = Field(
        default=False,
        description="Enable debug mode",
    )

    # Logging settings
    log_level: str = Field(
        default="WARNING",
        description="Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)",
        pattern="^(?i)(DEBUG|INFO|WARNING|ERROR|CRITICAL)$",
    )
    log_format: str = Field(
        default="console",
        description="Log output format (console, json, structured)",
        pattern="^(?i)(console|json|structured)$",
    )
    log_file: Path | None = Field(
        default=None,
        description="Optional log file path",
    )

    # Parser settings
    character_cue_max_length: int = Field(
        default=40,
        description="Longest line, in characters, still treated as a character cue",
        ge=1,
    )
    character_cue_max_words: int = Field(
        default=4,
        description="Most words a character cue may contain",
        ge=1,
    )
    title_scan_lines: int = Field(
        default=20,
        description="Number of leading lines searched for the script title",
        ge=1,
    )
    text_lines_per_page: int = Field(
        default=55,
        description="Lines per page used to estimate page count of plain text",
        ge=1,
    )

    # Context window settings
    context_lookback: int = Field(
        default=8,
        description="Elements kept before the cursor in the context window",
        ge=0,
    )
    context_lookahead: int = Field(
        default=20,
        description="Elements kept from the cursor onward in the context window",
        ge=1,
    )

    # Session progression settings
    auto_advance: bool = Field(
        default=True,
        description="Advance the cursor automatically after user silence",
    )
    silence_threshold_ms: int = Field(
        default=1500,
        description="Silence after user speech that counts as the end of a line",
        ge=0,
    )
    hold_threshold_ms: int = Field(
        default=5000,
        description="Silence after which a hold-position affordance is offered",
        ge=0,
    )
    post_speech_delay_ms: int = Field(
        default=500,
        description="Delay between the end of AI speech and the next advance",
        ge=0,
    )

    @field_validator("log_file", mode="before")
    @classmethod
    def expand_path(cls, v: Any) -> Path | None:
        """Expand environment variables and user home in the log file path."""
        if v is None:
            return None
        if isinstance(v, str):
            expanded = os.path.expandvars(v)
            return Path(expanded).expanduser().resolve()
        if isinstance(v, Path):
            return v.resolve()
        raise ValueError(
            f"Path fields must be string or Path. Got {type(v).__name__}: {v!r}"
        )

    @field_validator("log_level", mode="before")
    @classmethod
    def normalize_log_level(cls, v: Any) -> str:
        """Normalize log level to uppercase for case-insensitive handling."""
        if isinstance(v, str):
            return v.upper()
        raise ValueError(f"log_level must be a string, got {type(v).__name__}")

    @field_validator("log_format", mode="before")
    @classmethod
    def normalize_log_format(cls, v: Any) -> str:
        """Normalize log format to lowercase for case-insensitive handling."""
        if isinstance(v, str):
            return v.lower()
        raise ValueError(f"log_format must be a string, got {type(v).__name__}")

    @model_validator(mode="after")
    def check_thresholds(self) -> ScenePartnerSettings:
        """Ensure the hold threshold never fires before the silence threshold."""
        if self.hold_threshold_ms < self.silence_threshold_ms:
            raise ValueError(
                "hold_threshold_ms must be greater than or equal to "
                "silence_threshold_ms"
            )
        return self

    @classmethod
    def from_env(cls) -> ScenePartnerSettings:
        """Create settings from environment variables."""
        return cls()

    @classmethod
    def from_file(cls, config_path: Path | str) -> ScenePartnerSettings:
        """Load settings from a configuration file.

        Args:
            config_path: Path to configuration file (YAML, TOML, or JSON).

        Returns:
            Settings loaded from the file.

        Raises:
            ConfigurationError: If file format is not supported.
            FileNotFoundError: If config file doesn't exist.
        """
        config_path = Path(config_path)
        if not config_path.exists():
            raise FileNotFoundError(f"Configuration file not found: {config_path}")

        suffix = config_path.suffix.lower()

        if suffix in {".yml", ".yaml"}:
            with config_path.open(encoding="utf-8") as f:
                data = yaml.safe_load(f) or {}
        elif suffix == ".toml":
            with config_path.open("rb") as f:
                data = tomllib.load(f)
        elif suffix == ".json":
            with config_path.open(encoding="utf-8") as f:
                data = json.load(f)
        else:
            raise ConfigurationError(
                message=f"Unsupported configuration file format: {suffix}",
                hint="Use one of the supported formats: .yml, .yaml, .toml, or .json",
                details={
                    "file": str(config_path),
                    "detected_format": suffix,
                    "supported_formats": [".yml", ".yaml", ".toml", ".json"],
                },
            )

        check_config_keys(data)

        return cls(**data)

    @classmethod
    def from_multiple_sources(
        cls,
        config_files: list[Path | str] | None = None,
        cli_args: dict[str, Any] | None = None,
    ) -> ScenePartnerSettings:
        """Load settings with proper precedence from multiple sources.

        Args:
            config_files: Config files to load (later files override earlier).
            cli_args: Dictionary of CLI arguments, None values are ignored.

        Returns:
            Merged settings from all sources.
        """
        data: dict[str, Any] = {}

        for config_file in config_files or []:
            try:
                file_settings = cls.from_file(config_file)
            except FileNotFoundError:
                from scenepartner.config.logging import get_logger as _get_logger

                _get_logger("scenepartner.config.settings").warning(
                    "Configuration file not found, using defaults",
                    config_file=str(config_file),
                )
                continue
            data.update(file_settings.model_dump(exclude_unset=True))

        if cli_args:
            data.update({k: v for k, v in cli_args.items() if v is not None})

        return cls(**data)


# Global settings instance
_settings: ScenePartnerSettings | None = None


def _get_config_paths() -> list[Path | str]:
    """Get list of existing config files, in override order."""
    potential_paths = [
        Path.home() / ".config" / "scenepartner" / "config.yaml",
        Path.home() / ".config" / "scenepartner" / "config.toml",
        Path.cwd() / "scenepartner.yaml",
        Path.cwd() / "scenepartner.toml",
        Path.cwd() / "scenepartner.json",
    ]

    existing_paths: list[Path | str] = []
    for path in potential_paths:
        try:
            if path.is_file():
                existing_paths.append(path)
        except OSError:
            continue
    return existing_paths


def get_settings() -> ScenePartnerSettings:
    """Get the global settings instance.

    Returns:
        Global ScenePartnerSettings instance.
    """
    global _settings
    if _settings is None:
        config_paths = _get_config_paths()
        if config_paths:
            _settings = ScenePartnerSettings.from_multiple_sources(
                config_files=config_paths
            )
        else:
            _settings = ScenePartnerSettings.from_env()
    return _settings


def set_settings(settings: ScenePartnerSettings) -> None:
    """Set the global settings instance.

    Args:
        settings: Settings instance to use globally.
    """
    global _settings
    _settings = settings


def reset_settings() -> None:
    """Reset the global settings instance.

    Forces recreation of settings on next call to get_settings(),
    useful for tests that modify environment variables.
    """
    global _settings
    _settings = None


def get_settings_for_cli(
    config_file: Path | None = None,
    cli_overrides: dict[str, Any] | None = None,
) -> ScenePartnerSettings:
    """Get settings for CLI commands with consistent precedence.

    Args:
        config_file: Optional specific config file to load.
        cli_overrides: Dictionary of CLI argument overrides.

    Returns:
        ScenePartnerSettings instance with all sources merged.

    Raises:
        FileNotFoundError: If config_file is specified but doesn't exist.
    """
    if config_file:
        if not config_file.exists():
            raise FileNotFoundError(f"Config file not found: {config_file}")
        return ScenePartnerSettings.from_multiple_sources(
            config_files=[config_file],
            cli_args=cli_overrides,
        )

    settings = get_settings()
    filtered = {k: v for k, v in (cli_overrides or {}).items() if v is not None}
    if filtered:
        data = settings.model_dump()
        data.update(filtered)
        settings = ScenePartnerSettings(**data)
    return settings
