"""Cleaner configuration and settings.

This module provides the configuration model and I/O functions for
fclean. The configuration names the project signature (manifest file
and source folder), the cleanup tools and the build artifact paths
measured for freed bytes.

Configuration is stored in ~/.config/fclean/config.toml
"""

import logging
import os
import tomllib
from pathlib import Path, PurePosixPath
from tempfile import NamedTemporaryFile
from typing import Annotated

import tomli_w
from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from fclean.core.notifier import Notifier
from fclean.core.paths import get_config_path
from fclean.runner.artifacts import DEFAULT_ARTIFACT_PATHS
from fclean.runner.runner import DEFAULT_ALTERNATE_TOOL, DEFAULT_PRIMARY_TOOL, CommandRunner
from fclean.scanner.validator import (
    DEFAULT_MANIFEST_NAME,
    DEFAULT_SOURCE_DIR_NAME,
    ProjectValidator,
)

logger = logging.getLogger(__name__)


class CleanerConfig(BaseModel):
    """Configuration for project discovery and cleanup.

    Attributes:
        manifest_name: File that marks a project directory.
        source_dir_name: Directory that must sit next to the manifest.
        primary_tool: Cleanup executable.
        alternate_tool: Version-manager wrapper used with ``--fvm``.
        artifact_paths: Project-relative paths measured for freed bytes.
        measure_freed_bytes: Measure freed bytes by default.
    """

    model_config = ConfigDict(extra="forbid", frozen=True)

    manifest_name: Annotated[
        str,
        Field(min_length=1, description="Manifest file name"),
    ] = DEFAULT_MANIFEST_NAME
    source_dir_name: Annotated[
        str,
        Field(min_length=1, description="Source directory name"),
    ] = DEFAULT_SOURCE_DIR_NAME
    primary_tool: Annotated[
        str,
        Field(min_length=1, description="Cleanup executable"),
    ] = DEFAULT_PRIMARY_TOOL
    alternate_tool: Annotated[
        str,
        Field(min_length=1, description="Alternate runner executable"),
    ] = DEFAULT_ALTERNATE_TOOL
    artifact_paths: Annotated[
        tuple[str, ...],
        Field(description="Build artifact paths relative to the project"),
    ] = DEFAULT_ARTIFACT_PATHS
    measure_freed_bytes: bool = True

    @field_validator("manifest_name", "source_dir_name")
    @classmethod
    def validate_entry_name(cls, v: str) -> str:
        """Ensure project signature entries are plain names."""
        if "/" in v or "\\" in v or v in (".", ".."):
            msg = f"must be a plain file or directory name, got '{v}'"
            raise ValueError(msg)
        return v

    @field_validator("artifact_paths")
    @classmethod
    def validate_artifact_paths(cls, v: tuple[str, ...]) -> tuple[str, ...]:
        """Ensure artifact paths stay inside the project directory."""
        for entry in v:
            parts = PurePosixPath(entry).parts
            if not entry or entry.startswith("/") or ".." in parts:
                msg = f"artifact path must be relative and inside the project: '{entry}'"
                raise ValueError(msg)
        return v

    def create_validator(self) -> ProjectValidator:
        """Build a ProjectValidator for this configuration."""
        return ProjectValidator(
            manifest_name=self.manifest_name,
            source_dir_name=self.source_dir_name,
        )

    def create_runner(self, notifier: Notifier | None = None) -> CommandRunner:
        """Build a CommandRunner for this configuration."""
        return CommandRunner(
            primary_tool=self.primary_tool,
            alternate_tool=self.alternate_tool,
            artifact_paths=self.artifact_paths,
            notifier=notifier,
        )


class ConfigError(Exception):
    """Base exception for configuration errors."""


class ConfigParseError(ConfigError):
    """Raised when the config file cannot be parsed."""


class ConfigValidationError(ConfigError):
    """Raised when config content is invalid."""


def load_config(path: Path | None = None) -> CleanerConfig:
    """Load configuration from a TOML file.

    A missing file is not an error: the defaults are returned.

    Args:
        path: Path to the config file. If None, uses the default config path.

    Returns:
        Validated CleanerConfig object.

    Raises:
        ConfigParseError: If the TOML syntax is invalid.
        ConfigValidationError: If the content doesn't match the schema.
        ConfigError: If the file cannot be read.
    """
    config_path = path or get_config_path()

    if not config_path.exists():
        logger.debug("No config file at %s, using defaults", config_path)
        return CleanerConfig()

    try:
        with open(config_path, "rb") as f:
            data = tomllib.load(f)
    except tomllib.TOMLDecodeError as e:
        raise ConfigParseError(f"Invalid TOML syntax in {config_path}: {e}") from e
    except OSError as e:
        raise ConfigError(f"Failed to read config {config_path}: {e}") from e

    try:
        return CleanerConfig.model_validate(data)
    except ValidationError as e:
        raise ConfigValidationError(f"Invalid config content in {config_path}: {e}") from e


def save_config(config: CleanerConfig, path: Path | None = None) -> Path:
    """Save configuration to a TOML file.

    The file is written atomically by first writing to a temporary file
    and then using os.replace() for atomic rename.

    Args:
        config: The CleanerConfig object to save.
        path: Path to save the config. If None, uses the default config path.

    Returns:
        Path where the config was saved.

    Raises:
        ConfigError: If the file cannot be written.
    """
    config_path = path or get_config_path()
    data = config_to_dict(config)

    tmp_path: Path | None = None
    try:
        config_path.parent.mkdir(parents=True, exist_ok=True)
        with NamedTemporaryFile(
            mode="wb",
            dir=config_path.parent,
            delete=False,
            suffix=".tmp",
        ) as f:
            tmp_path = Path(f.name)
            tomli_w.dump(data, f)
        # os.replace() is atomic on POSIX
        os.replace(str(tmp_path), str(config_path))
    except OSError as e:
        if tmp_path is not None and tmp_path.exists():
            tmp_path.unlink()
        raise ConfigError(f"Failed to write config {config_path}: {e}") from e

    return config_path


def config_to_dict(config: CleanerConfig) -> dict[str, object]:
    """Convert CleanerConfig to a dictionary for TOML serialization.

    Args:
        config: The CleanerConfig to convert.

    Returns:
        Dictionary ready for TOML serialization.
    """
    data = config.model_dump()
    data["artifact_paths"] = list(config.artifact_paths)
    return data
