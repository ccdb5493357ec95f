"""Configuration loading and validation."""

from vendorpatch.config.loader import load_config
from vendorpatch.config.schema import Config, LoggingConfig, PatchConfig

__all__ = [
    "Config",
    "LoggingConfig",
    "PatchConfig",
    "load_config",
]
