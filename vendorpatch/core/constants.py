"""Core constants and paths for vendorpatch.

Single source of truth for global paths and fixed conventions.
"""

from pathlib import Path

VENDORPATCH_DIR_NAME = ".vendorpatch"

# Environment variable overriding the configured log level
LOG_LEVEL_ENV = "VENDORPATCH_LOG"

# "-p1": drop the synthetic top-level directory diff tools put in header paths
DEFAULT_STRIP = 1

# Header path diff tools use for the missing side of a create or delete
DEV_NULL = "/dev/null"


def get_vendorpatch_dir() -> Path:
    """Get ~/.vendorpatch (global config directory)."""
    return Path.home() / VENDORPATCH_DIR_NAME


def get_default_config_path() -> Path:
    """Get global config file path."""
    return get_vendorpatch_dir() / "config.json"


def get_project_config_path(project_root: Path) -> Path:
    """Get the project-local config file path."""
    return project_root / VENDORPATCH_DIR_NAME / "config.json"
