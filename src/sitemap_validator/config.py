"""Configuration management for sitemap-validator using Pydantic models."""

import json
from enum import Enum
from pathlib import Path
from urllib.parse import urlsplit

from pydantic import BaseModel, ConfigDict, Field, field_validator

CONFIG_FILE_NAME = ".sitemap-validator.json"
DEFAULT_BASE_URL = "https://www.tiket.com"


class ReportFormat(str, Enum):
    """Report output formats."""
    TABLE = "table"
    JSON = "json"
    MARKDOWN = "markdown"


class LogLevel(str, Enum):
    """Logging levels."""
    ERROR = "error"
    WARN = "warn"
    INFO = "info"
    DEBUG = "debug"


class ValidatorConfig(BaseModel):
    """Rule engine configuration section."""
    base_url: str = Field(alias="baseUrl", default=DEFAULT_BASE_URL)
    parent_path: str | None = Field(alias="parentPath", default=None)

    @field_validator("base_url")
    @classmethod
    def validate_base_url(cls, v):
        """Base URL must be an absolute http(s) URL; trailing slashes are dropped."""
        parts = urlsplit(v)
        if parts.scheme not in ("http", "https") or not parts.netloc:
            raise ValueError(f"base_url must be an absolute http(s) URL, got: {v}")
        return v.rstrip("/")

    model_config = ConfigDict(populate_by_name=True, frozen=True)


class OutputConfig(BaseModel):
    """Output configuration section."""
    format: ReportFormat = ReportFormat.TABLE

    model_config = ConfigDict(use_enum_values=True)


class LoggingConfig(BaseModel):
    """Logging configuration section."""
    level: LogLevel = LogLevel.WARN

    model_config = ConfigDict(use_enum_values=True)


class SitemapValidatorConfig(BaseModel):
    """Complete sitemap-validator configuration model."""
    validator: ValidatorConfig = Field(default_factory=ValidatorConfig)
    output: OutputConfig = Field(default_factory=OutputConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)

    model_config = ConfigDict(extra="forbid")


def load_config(config_path: str | Path | None = None) -> SitemapValidatorConfig:
    """Build the validator settings from a JSON file, or return the defaults.

    An explicit ``config_path`` that does not exist is not an error: the
    built-in defaults (production base URL, no parent path) are used, the
    same as when no ``.sitemap-validator.json`` is found. Keys may use the
    camelCase names (``validator.baseUrl``) or the field names.

    Raises:
        ValueError: The file is not valid JSON, or a value such as a base URL
            without an http(s) scheme fails validation
    """
    if config_path is None:
        config_path = find_config_file()
    else:
        config_path = Path(config_path)

    if config_path and config_path.exists():
        try:
            with open(config_path, encoding="utf-8") as f:
                config_data = json.load(f)
            return SitemapValidatorConfig(**config_data)
        except json.JSONDecodeError as e:
            raise ValueError(f"Invalid JSON in config file {config_path}: {e}")
        except Exception as e:
            raise ValueError(f"Failed to load config from {config_path}: {e}")
    else:
        return create_default_config()


def find_config_file(start_dir: Path | None = None) -> Path | None:
    """Return the nearest .sitemap-validator.json, checking ``start_dir``
    (the working directory by default) and then each parent up to the
    filesystem root."""
    if start_dir is None:
        start_dir = Path.cwd()

    current = Path(start_dir).resolve()

    while True:
        config_file = current / CONFIG_FILE_NAME
        if config_file.exists():
            return config_file

        parent = current.parent
        if parent == current:  # Reached root directory
            break
        current = parent

    return None


def create_default_config() -> SitemapValidatorConfig:
    """Create default configuration."""
    return SitemapValidatorConfig()
