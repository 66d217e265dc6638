"""Configuration management for memtree."""

import logging
from pathlib import Path
from typing import Any, Literal

import yaml
from pydantic import Field, field_validator, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

logger = logging.getLogger(__name__)

DEFAULT_CONFIG_PATHS = [
    Path("memtree.yaml"),
    Path("memtree.yml"),
    Path.home() / ".config" / "memtree" / "config.yaml",
    Path.home() / ".config" / "memtree" / "config.yml",
]

# Explicit config file for the next Settings() construction (set by get_settings)
_config_file: Path | None = None


def _load_yaml_config(config_file: Path | None = None) -> dict[str, Any]:
    """Load YAML config file if it exists.

    Args:
        config_file: Explicit config path. When given, default locations are skipped.
    """
    config_paths = [config_file] if config_file else DEFAULT_CONFIG_PATHS

    for path in config_paths:
        if path.exists():
            logger.debug(f"Loading config from {path}")
            with open(path) as f:
                return yaml.safe_load(f) or {}

    return {}


class Settings(BaseSettings):
    """Application settings loaded from YAML + environment variables."""

    model_config = SettingsConfigDict(
        env_prefix="MEMTREE_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = "INFO"

    # Guard every store operation with a store-wide lock
    thread_safe: bool = True

    # YAML document loaded into the store at server start
    seed_file: Path | None = None

    tree_max_depth: int = Field(default=3, ge=0)
    output_format: Literal["text", "json"] = "text"

    @field_validator("log_level", mode="before")
    @classmethod
    def upper_log_level(cls, value: Any) -> Any:
        return value.upper() if isinstance(value, str) else value

    @model_validator(mode="before")
    @classmethod
    def load_yaml_config(cls, values: dict[str, Any]) -> dict[str, Any]:
        """Load YAML config and merge with env vars.

        Priority: Environment Variables > YAML Config > Defaults
        """
        yaml_config = _load_yaml_config(_config_file)

        for key, val in yaml_config.items():
            # Env vars and init kwargs are already in values and take precedence
            if val is not None and key not in values:
                values[key] = val

        return values

    @model_validator(mode="after")
    def expand_paths(self) -> "Settings":
        """Expand ~ in paths to the user's home directory."""
        if self.seed_file is not None:
            self.seed_file = Path(self.seed_file).expanduser()
        return self


# Global settings instance (lazily created)
settings: Settings | None = None


def get_settings(config_file: str | Path | None = None) -> Settings:
    """Get the current settings instance.

    Args:
        config_file: Optional YAML config path. Forces a reload from that file.

    Raises:
        FileNotFoundError: If config_file is given but does not exist
    """
    global settings, _config_file

    if config_file is not None:
        path = Path(config_file).expanduser()
        if not path.exists():
            raise FileNotFoundError(f"Config file not found: {path}")
        _config_file = path
        settings = Settings()
    elif settings is None:
        settings = Settings()

    return settings


def reload_settings() -> Settings:
    """Reload settings (useful after environment changes)."""
    global settings
    settings = Settings()
    return settings
