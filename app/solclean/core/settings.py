"""Persisted cleanup settings.

This module provides the settings model and I/O functions for solclean.
Settings live in ~/.config/solclean/settings.toml and are split into
three tables:

- [rules]: DeletionRuleSet flags
- [cleanup]: settle delay, marker suffix, native clean command, external root
- [workspace]: project file patterns
"""

import logging
import os
import tomllib
from pathlib import Path
from tempfile import NamedTemporaryFile
from typing import Annotated, Any

import tomli_w
from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from solclean.cleanup.deleter import DEFAULT_MARKER_SUFFIX
from solclean.cleanup.rules import DeletionRuleSet
from solclean.core.paths import get_default_external_root, get_settings_path

logger = logging.getLogger(__name__)

DEFAULT_SETTLE_DELAY = 5.0
DEFAULT_CLEAN_COMMAND: tuple[str, ...] = ("dotnet", "clean")
DEFAULT_PROJECT_PATTERNS: tuple[str, ...] = (
    "*.csproj",
    "*.vbproj",
    "*.fsproj",
    "*.vcxproj",
    "*.sqlproj",
)


class CleanupOptions(BaseModel):
    """Options of the two-pass cleanup run.

    Attributes:
        settle_delay_seconds: Wait between the first and second pass.
        marker_suffix: Files ending with this suffix are never deleted.
        native_clean_command: Command run as the host's default clean.
        external_root: Folder holding the external Logs/TraceLogFiles
            folders. None uses ~/Documents/IISExpress.
    """

    model_config = ConfigDict(extra="forbid")

    settle_delay_seconds: Annotated[
        float,
        Field(ge=0, le=300, description="Seconds between the two passes (0-300)"),
    ] = DEFAULT_SETTLE_DELAY
    marker_suffix: Annotated[
        str,
        Field(min_length=1, description="Suffix of files that are never deleted"),
    ] = DEFAULT_MARKER_SUFFIX
    native_clean_command: Annotated[
        list[str],
        Field(description="Command executed as the default clean"),
    ] = list(DEFAULT_CLEAN_COMMAND)
    external_root: Annotated[
        Path | None,
        Field(description="Root of the external log folders"),
    ] = None

    @field_validator("external_root", mode="after")
    @classmethod
    def expand_user(cls, v: Path | None) -> Path | None:
        """Expand a leading ~ in the external root."""
        return v.expanduser() if v is not None else None

    @property
    def effective_external_root(self) -> Path:
        """Get the configured external root or the default one."""
        if self.external_root is not None:
            return self.external_root
        return get_default_external_root()


class WorkspaceOptions(BaseModel):
    """Options of the directory workspace provider.

    Attributes:
        project_patterns: Glob patterns identifying project files.
    """

    model_config = ConfigDict(extra="forbid")

    project_patterns: Annotated[
        list[str],
        Field(min_length=1, description="Glob patterns of project files"),
    ] = list(DEFAULT_PROJECT_PATTERNS)


class Settings(BaseModel):
    """Complete solclean settings file."""

    model_config = ConfigDict(extra="forbid")

    rules: DeletionRuleSet = Field(default_factory=DeletionRuleSet)
    cleanup: CleanupOptions = Field(default_factory=CleanupOptions)
    workspace: WorkspaceOptions = Field(default_factory=WorkspaceOptions)


class SettingsError(Exception):
    """Base exception for settings errors."""


class SettingsNotFoundError(SettingsError):
    """Raised when the settings file is not found."""


class SettingsParseError(SettingsError):
    """Raised when the settings file cannot be parsed."""


def load_settings(path: Path | None = None) -> Settings:
    """Load settings from a TOML file.

    Args:
        path: Path to the settings file. If None, uses the default path.

    Returns:
        Validated Settings object.

    Raises:
        SettingsNotFoundError: If the settings file doesn't exist.
        SettingsParseError: If the TOML syntax is invalid.
        SettingsError: If the content doesn't match the schema.
    """
    settings_path = path or get_settings_path()

    if not settings_path.exists():
        raise SettingsNotFoundError(f"Settings not found: {settings_path}")

    try:
        with open(settings_path, "rb") as f:
            data = tomllib.load(f)
    except tomllib.TOMLDecodeError as e:
        raise SettingsParseError(f"Invalid TOML syntax: {e}") from e
    except OSError as e:
        raise SettingsError(f"Failed to read settings: {e}") from e

    try:
        return Settings.model_validate(data)
    except (ValueError, ValidationError) as e:
        raise SettingsError(f"Invalid settings content: {e}") from e


def save_settings(settings: Settings, path: Path | None = None) -> Path:
    """Save settings to a TOML file.

    The file is written atomically by first writing to a temporary file
    and then using os.replace() for atomic rename.

    Args:
        settings: The Settings object to save.
        path: Path to save to. If None, uses the default path.

    Returns:
        Path where the settings were saved.

    Raises:
        SettingsError: If the file cannot be written.
    """
    settings_path = path or get_settings_path()

    data = settings_to_dict(settings)

    tmp_path: Path | None = None
    try:
        settings_path.parent.mkdir(parents=True, exist_ok=True)
        with NamedTemporaryFile(
            mode="wb",
            dir=settings_path.parent,
            delete=False,
            suffix=".tmp",
        ) as f:
            tmp_path = Path(f.name)
            tomli_w.dump(data, f)
        os.replace(str(tmp_path), str(settings_path))
    except OSError as e:
        if tmp_path is not None and tmp_path.exists():
            tmp_path.unlink()
        raise SettingsError(f"Failed to write settings: {e}") from e

    return settings_path


def settings_to_dict(settings: Settings) -> dict[str, Any]:
    """Convert Settings to a dictionary for TOML serialization.

    TOML has no null, so an unset external root is omitted.
    """
    data = settings.model_dump(mode="json")
    if data["cleanup"].get("external_root") is None:
        data["cleanup"].pop("external_root", None)
    return data


def set_setting(settings: Settings, key: str, value: str) -> Settings:
    """Return a copy of settings with one dotted key changed.

    Values are given as strings (as typed on the command line) and
    validated by the models, so "true"/"false" become booleans and
    numbers are coerced. List options take comma-separated values.

    Args:
        settings: Current settings.
        key: Dotted key such as "rules.delete_test_results_folder".
        value: New value as a string.

    Returns:
        New validated Settings instance.

    Raises:
        SettingsError: If the key is unknown or the value is invalid.
    """
    section, _, field = key.partition(".")
    data = settings.model_dump()

    if section not in data or not field or field not in data[section]:
        raise SettingsError(f"Unknown setting: {key}")

    current = data[section][field]
    if isinstance(current, list):
        data[section][field] = [part.strip() for part in value.split(",") if part.strip()]
    else:
        data[section][field] = value

    try:
        return Settings.model_validate(data)
    except ValidationError as e:
        raise SettingsError(f"Invalid value for {key}: {e}") from e


class TomlSettingsStore:
    """SettingsStore backed by the settings file.

    The file is re-read on every snapshot so edits made while the
    application runs take effect on the next pass. A missing file
    yields defaults.

    Args:
        path: Settings file path. If None, uses the default path.
    """

    def __init__(self, path: Path | None = None) -> None:
        self._path = path

    @property
    def path(self) -> Path:
        return self._path or get_settings_path()

    def load(self) -> Settings:
        """Load the full settings, falling back to defaults if absent.

        Raises:
            SettingsError: If the file exists but is invalid.
        """
        try:
            return load_settings(self.path)
        except SettingsNotFoundError:
            logger.debug("No settings file at %s, using defaults", self.path)
            return Settings()

    def snapshot(self) -> DeletionRuleSet:
        """Get the current deletion rules."""
        return self.load().rules
