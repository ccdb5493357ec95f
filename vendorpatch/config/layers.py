"""Reading and merging JSON config layers.

A layer is one ``config.json`` file holding a (possibly partial) Config as a
JSON object. Layers are merged section by section before validation, so a
project layer can change ``patch.strip`` without restating ``patch.trailing``.
"""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any

from vendorpatch.core.errors import LoadError

logger = logging.getLogger(__name__)


def read_layer(path: Path, *, required: bool = False) -> dict[str, Any] | None:
    """Read one config layer.

    An empty (or whitespace-only) file is an empty layer. A UTF-8 BOM is
    accepted.

    Args:
        path: The layer's ``config.json``.
        required: Raise instead of returning None when the file is absent.

    Returns:
        The layer's top-level object, or None for an absent optional layer.

    Raises:
        LoadError: If a required layer is missing, or a present one cannot be
            read, is not valid JSON, or is not a JSON object.
    """
    if not path.is_file():
        if required:
            raise LoadError(f"Config file not found: {path}")
        logger.debug("No config layer at %s", path)
        return None

    try:
        raw = path.read_text(encoding="utf-8-sig")
    except OSError as e:
        raise LoadError(f"Cannot read config file {path}: {e}") from e

    if not raw.strip():
        return {}

    try:
        data = json.loads(raw)
    except json.JSONDecodeError as e:
        raise LoadError(f"Invalid JSON in config file {path}: {e}") from e

    if not isinstance(data, dict):
        raise LoadError(
            f"Config file {path} must hold a JSON object, not {type(data).__name__}"
        )

    logger.debug("Read config layer %s", path)
    return data


def merge_layers(lower: dict[str, Any], upper: dict[str, Any]) -> dict[str, Any]:
    """Overlay ``upper`` on ``lower`` and return a new dict.

    Nested objects merge key by key; any other value in ``upper`` (lists
    included) replaces the one in ``lower``. Neither input is modified.
    """
    merged = dict(lower)
    for key, value in upper.items():
        below = merged.get(key)
        if isinstance(below, dict) and isinstance(value, dict):
            merged[key] = merge_layers(below, value)
        else:
            merged[key] = value
    return merged
