"""Pydantic models for vendorpatch configuration validation."""

import codecs
from typing import Literal

from pydantic import BaseModel, ConfigDict, Field, field_validator

from vendorpatch.core.constants import DEFAULT_STRIP

LogLevel = Literal["DEBUG", "INFO", "WARNING", "ERROR"]


class PatchConfig(BaseModel):
    """How patch files are applied.

    Example in config.json:
        "patch": {
            "strip": 1,
            "trailing": "keep"
        }
    """

    model_config = ConfigDict(extra="forbid")

    strip: int = Field(default=DEFAULT_STRIP, ge=0)
    """Leading path components dropped from relative header paths (-pN)."""

    trailing: Literal["keep", "drop"] = "keep"
    """What to do with old-file lines after the last hunk: keep them, or drop them."""

    encoding: str = "utf-8"
    """Text encoding of patch files and patched files."""

    create_parents: bool = True
    """Create missing parent directories of the destination path."""

    @field_validator("encoding")
    @classmethod
    def validate_encoding(cls, v: str) -> str:
        """Reject encodings Python does not know."""
        try:
            codecs.lookup(v)
        except LookupError as e:
            raise ValueError(f"unknown encoding: {v!r}") from e
        return v


class LoggingConfig(BaseModel):
    """Logging output settings."""

    model_config = ConfigDict(extra="forbid")

    level: LogLevel = "WARNING"
    file: str | None = None
    """Optional log file; relative paths are taken from the working directory."""

    @field_validator("level", mode="before")
    @classmethod
    def normalize_level(cls, v: object) -> object:
        """Accept level names in any case."""
        return v.upper() if isinstance(v, str) else v


class Config(BaseModel):
    """Root configuration model."""

    model_config = ConfigDict(extra="forbid")

    patch: PatchConfig = PatchConfig()
    logging: LoggingConfig = LoggingConfig()
