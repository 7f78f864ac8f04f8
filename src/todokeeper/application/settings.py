"""
Settings Loader
===============

Loads and validates the YAML configuration profile for todokeeper.

Responsibilities:
- Validate settings against Pydantic schema on load
- Provide sensible defaults when no settings file exists
- Report unreadable or invalid files as ``ConfigError``

Example profile::

    persistence:
      type: file
      path: .todokeeper/store.json
      tasks_key: tasks
      filter_key: filter
    logging:
      level: WARNING
"""

from __future__ import annotations

from enum import Enum
from pathlib import Path

import structlog
import yaml
from pydantic import BaseModel, ConfigDict, Field, ValidationInfo, field_validator
from pydantic import ValidationError as PydanticValidationError

from todokeeper.core.domain.errors import ConfigError

logger = structlog.get_logger(__name__)

# Searched, in order, when no explicit settings path is given.
DEFAULT_SETTINGS_FILES: tuple[str, ...] = ("todokeeper.yaml", "configs/todokeeper.yaml")

_LOG_LEVELS = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}


class PersistenceType(str, Enum):
    """Backing medium for the key-value store."""

    FILE = "file"
    MEMORY = "memory"


class PersistenceSettings(BaseModel):
    """Schema for the ``persistence`` section."""

    model_config = ConfigDict(extra="forbid")

    type: PersistenceType = Field(
        PersistenceType.FILE,
        description="Key-value medium: 'file' or 'memory'",
    )
    path: Path = Field(
        Path(".todokeeper/store.json"),
        description="JSON store file used when type is 'file'",
    )
    tasks_key: str = Field("tasks", min_length=1, description="Key holding the task list")
    filter_key: str = Field("filter", min_length=1, description="Key holding the filter token")

    @field_validator("filter_key")
    @classmethod
    def validate_distinct_keys(cls, value: str, info: ValidationInfo) -> str:
        if value == info.data.get("tasks_key"):
            raise ValueError("filter_key must differ from tasks_key")
        return value


class LoggingSettings(BaseModel):
    """Schema for the ``logging`` section."""

    model_config = ConfigDict(extra="forbid")

    level: str = Field("WARNING", description="Minimum log level")

    @field_validator("level")
    @classmethod
    def validate_level(cls, value: str) -> str:
        level = value.upper()
        if level not in _LOG_LEVELS:
            raise ValueError(f"level must be one of {sorted(_LOG_LEVELS)}")
        return level


class Settings(BaseModel):
    """Top-level todokeeper settings."""

    model_config = ConfigDict(extra="forbid")

    persistence: PersistenceSettings = Field(default_factory=PersistenceSettings)
    logging: LoggingSettings = Field(default_factory=LoggingSettings)


def load_settings(path: str | Path | None = None, *, search_dir: Path | None = None) -> Settings:
    """
    Load settings from a YAML file.

    Search order when ``path`` is None: ``DEFAULT_SETTINGS_FILES`` relative
    to ``search_dir`` (current directory by default). If none exists, the
    built-in defaults are returned.

    Args:
        path: Explicit settings file. Must exist when given.
        search_dir: Directory used to resolve the default file names.

    Returns:
        Validated Settings.

    Raises:
        ConfigError: If an explicit file is missing, the YAML is invalid, or
            the content violates the schema.
    """
    if path is None:
        base = search_dir or Path.cwd()
        for name in DEFAULT_SETTINGS_FILES:
            candidate = base / name
            if candidate.exists():
                return _load_file(candidate)
        logger.debug("settings_defaults_used", search_dir=str(base))
        return Settings()

    settings_path = Path(path)
    if not settings_path.exists():
        raise ConfigError(
            f"Settings file not found: {settings_path}", details={"path": str(settings_path)}
        )
    return _load_file(settings_path)


def _load_file(settings_path: Path) -> Settings:
    try:
        with open(settings_path, encoding="utf-8") as f:
            raw = yaml.safe_load(f)
    except (OSError, yaml.YAMLError) as e:
        raise ConfigError(
            f"Cannot read settings file: {settings_path}",
            details={"path": str(settings_path), "error": str(e)},
        ) from e

    if raw is None:
        raw = {}
    if not isinstance(raw, dict):
        raise ConfigError(
            f"Settings file must contain a mapping: {settings_path}",
            details={"path": str(settings_path), "found": type(raw).__name__},
        )

    try:
        settings = Settings.model_validate(raw)
    except PydanticValidationError as e:
        raise ConfigError(
            f"Invalid settings in {settings_path}",
            details={
                "path": str(settings_path),
                "errors": [
                    {"loc": ".".join(str(part) for part in err["loc"]), "msg": err["msg"]}
                    for err in e.errors()
                ],
            },
        ) from e

    logger.debug("settings_loaded", path=str(settings_path))
    return settings
