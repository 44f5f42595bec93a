"""Configuration models describing filekind settings."""

from __future__ import annotations

from typing import Literal

from pydantic import BaseModel, ConfigDict, Field, field_validator


class FilekindBaseModel(BaseModel):
    """Shared configuration for filekind settings models."""

    model_config = ConfigDict(extra="forbid")


class ProcessingOptions(FilekindBaseModel):
    """Options governing file discovery and content reads.

    Attributes:
        recurse_directories: Whether to recurse into subdirectories.
        process_hidden_files: Whether hidden files should be included.
        follow_symlinks: Whether to follow symbolic links.
        max_file_size_mb: Files larger than this are skipped entirely.
        max_json_kb: Largest JSON payload whose shape is inspected.
    """

    recurse_directories: bool = False
    process_hidden_files: bool = False
    follow_symlinks: bool = False
    max_file_size_mb: int = Field(default=100, ge=1)
    max_json_kb: int = Field(default=10_240, ge=1)


class OrganizationOptions(FilekindBaseModel):
    """Settings for storage routing plans.

    Attributes:
        base_path: Prefix for every suggested storage folder.
        timestamp_names: Whether destinations are prefixed with a millisecond
            timestamp to keep uploads unique.
    """

    base_path: str = "media/"
    timestamp_names: bool = False


class LoggingSettings(FilekindBaseModel):
    """Runtime logging configuration."""

    level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = "WARNING"

    @field_validator("level", mode="before")
    @classmethod
    def _upper_level(cls, value: object) -> object:
        return value.upper() if isinstance(value, str) else value


class CLIOptions(FilekindBaseModel):
    """CLI presentation defaults.

    Attributes:
        quiet_default: Whether commands suppress non-error output by default.
        summary_default: Whether commands only print summary lines by default.
    """

    quiet_default: bool = False
    summary_default: bool = False


class FilekindConfig(FilekindBaseModel):
    """Top-level configuration for filekind."""

    processing: ProcessingOptions = Field(default_factory=ProcessingOptions)
    organization: OrganizationOptions = Field(default_factory=OrganizationOptions)
    logging: LoggingSettings = Field(default_factory=LoggingSettings)
    cli: CLIOptions = Field(default_factory=CLIOptions)


__all__ = [
    "FilekindBaseModel",
    "ProcessingOptions",
    "OrganizationOptions",
    "LoggingSettings",
    "CLIOptions",
    "FilekindConfig",
]
