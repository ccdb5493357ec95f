"""Configuration loading with fail-fast behavior and layered merging.

Two layers are merged, later overriding earlier:
1. Global user config (~/.vendorpatch/config.json)
2. Project config (<project_root>/.vendorpatch/config.json)

An explicit config path replaces both layers.
"""

import logging
from pathlib import Path
from typing import Any

from pydantic import ValidationError

from vendorpatch.config.layers import merge_layers, read_layer
from vendorpatch.config.schema import Config
from vendorpatch.core.constants import get_default_config_path, get_project_config_path
from vendorpatch.core.errors import ConfigError, LoadError

logger = logging.getLogger(__name__)


def load_config(path: Path | None = None, project_root: Path | None = None) -> Config:
    """Load the effective configuration.

    Args:
        path: Explicit config file. Must exist; no other layer is read.
        project_root: Project whose ``.vendorpatch/config.json`` is the
            second layer. Skipped if None.

    Returns:
        Validated Config. Defaults apply when no layer exists.

    Raises:
        ConfigError: If a layer cannot be read or parsed, or the merged
            result fails validation.
    """
    if path is not None:
        return _load_explicit(path)

    candidates = [get_default_config_path()]
    if project_root is not None:
        candidates.append(get_project_config_path(project_root))

    merged: dict[str, Any] = {}
    sources: list[Path] = []
    for candidate in candidates:
        try:
            layer = read_layer(candidate)
        except LoadError as e:
            raise ConfigError(e.message) from e
        if layer is None:
            continue
        merged = merge_layers(merged, layer)
        sources.append(candidate)

    if not sources:
        logger.debug("No config layers found, using defaults")
        return Config()

    logger.info("Config loaded from: %s", ", ".join(str(p) for p in sources))
    try:
        return Config.model_validate(merged)
    except ValidationError as e:
        names = ", ".join(str(p) for p in sources)
        raise ConfigError(f"Config validation failed (merged from {names}): {e}") from e


def _load_explicit(path: Path) -> Config:
    try:
        layer = read_layer(path, required=True)
    except LoadError as e:
        raise ConfigError(e.message) from e

    try:
        return Config.model_validate(layer)
    except ValidationError as e:
        raise ConfigError(f"Config validation failed for {path}: {e}") from e
