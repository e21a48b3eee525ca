import os
from pathlib import Path
from typing import Optional

import toml
from pydantic import BaseModel, Field, ValidationError, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from ..exceptions import ConfigurationError


class RunConfig(BaseModel):
    """Options of a single invocation, built from the command line."""

    file: Path
    dry_run: bool = False
    no_backup: bool = False
    verbose: bool = False

    @field_validator('file')
    @classmethod
    def validate_file(cls, v: Path) -> Path:
        if not (v.exists() and os.access(v, os.R_OK | os.W_OK)):
            raise ConfigurationError(f"Location {v} is not accessible", code="target")
        return v.resolve()

    @property
    def need_backup(self) -> bool:
        return not self.dry_run and not self.no_backup


class ProcessingConfig(BaseModel):
    """File traversal and backup settings."""

    backup_suffix: str = "~"
    extensions: list[str] = Field(default_factory=lambda: ["mp3"])
    max_workers: int = 4

    @field_validator('backup_suffix')
    @classmethod
    def validate_backup_suffix(cls, v: str) -> str:
        if not v:
            raise ConfigurationError("backup_suffix cannot be empty")
        return v

    @field_validator('extensions')
    @classmethod
    def validate_extensions(cls, v: list[str]) -> list[str]:
        extensions = [ext.lower().lstrip('.') for ext in v if ext.strip('. ')]
        if not extensions:
            raise ConfigurationError("At least one media extension is required")
        return extensions

    @field_validator('max_workers')
    @classmethod
    def validate_max_workers(cls, v: int) -> int:
        if v < 1:
            raise ConfigurationError("max_workers must be positive")
        if v > 64:
            raise ConfigurationError("max_workers too high (max 64)")
        return v


class LoggingConfig(BaseModel):
    level: str = "INFO"
    format: str = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
    file_path: Optional[str] = None
    max_bytes: int = 10485760
    backup_count: int = 5

    @field_validator('level')
    @classmethod
    def validate_level(cls, v: str) -> str:
        level = v.upper()
        if level not in ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"):
            raise ConfigurationError(f"Unknown log level: {v}")
        return level


class Config(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=".env",
        env_prefix="TAGFIX_",
        env_nested_delimiter="__",
        extra="ignore",
    )

    processing: ProcessingConfig = Field(default_factory=ProcessingConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)

    @classmethod
    def from_toml(cls, path: str | Path) -> "Config":
        path = Path(path)
        if not path.exists():
            raise FileNotFoundError(f"Config file not found: {path}")

        with open(path, "r") as f:
            data = toml.load(f)

        return cls(**data)


_config: Optional[Config] = None


def load_config(path: Optional[str | Path] = None) -> Config:
    """Load and cache the configuration.

    Only the default `tagfix.toml` may be missing; a path given as an
    argument or through TAGFIX_CONFIG has to exist.
    """
    global _config
    if _config is None:
        explicit = path is not None or "TAGFIX_CONFIG" in os.environ
        if path is None:
            path = os.environ.get("TAGFIX_CONFIG", "tagfix.toml")

        config_path = Path(path)
        if explicit and not config_path.exists():
            raise ConfigurationError(f"Config file not found: {config_path}", code="config")

        try:
            if config_path.exists():
                _config = Config.from_toml(config_path)
            else:
                _config = Config()
        except toml.TomlDecodeError as e:
            raise ConfigurationError(f"Malformed config file {config_path}: {e}", code="config") from e
        except ValidationError as e:
            raise ConfigurationError(f"Invalid configuration: {e}", code="config") from e

    return _config


def get_config() -> Config:
    if _config is None:
        return load_config()
    return _config


def reset_config() -> None:
    global _config
    _config = None
