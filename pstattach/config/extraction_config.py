"""Configuration models for attachment extraction."""

import logging
from typing import Literal

from pydantic import BaseModel, Field, field_validator

# Block size used internally by PST files
DEFAULT_BUFFER_SIZE = 8176


class ExtractionSettings(BaseModel):
    """Settings controlling traversal, naming and copying."""

    buffer_size: int = DEFAULT_BUFFER_SIZE
    name_separator: str = "_"
    # "parent" keeps the historical behaviour of testing the folder being
    # left rather than the child about to be entered.
    folder_filter_target: Literal["parent", "child"] = "parent"
    render_first_attachment_name: bool = False

    @field_validator("buffer_size")
    def validate_buffer_size(cls, v: int) -> int:
        if v < 1:
            raise ValueError("buffer_size must be positive")
        return v


class LoggingConfig(BaseModel):
    """Log output settings."""

    level: str = "INFO"
    json_output: bool = False

    @field_validator("level")
    def validate_level(cls, v: str) -> str:
        level = v.upper()
        if not isinstance(logging.getLevelName(level), int):
            raise ValueError(f"Unknown log level: {v}")
        return level


class AppConfig(BaseModel):
    """Main application configuration."""

    schema_version: str = "1.0"
    extraction: ExtractionSettings = Field(default_factory=ExtractionSettings)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)

    @field_validator("schema_version")
    def validate_schema_version(cls, v: str) -> str:
        if not v:
            raise ValueError("schema_version is required")
        return v
