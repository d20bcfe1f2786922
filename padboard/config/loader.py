"""Configuration loading with layered merging.

Without an explicit path the loader merges two layers:
1. Global user config (~/.padboard/config.json)
2. Project local config (<cwd>/.padboard/config.json)

A config file holds sections ("clipboard", "storage") of plain settings. A
later layer overrides individual settings of a section and leaves the rest
of that section alone. Missing layer files are fine; with no files at all
the pydantic defaults apply.
"""

import json
import logging
from pathlib import Path
from typing import Any

from pydantic import ValidationError

from padboard.config.schema import Config
from padboard.core.constants import PADBOARD_DIR_NAME, get_default_config_path
from padboard.core.errors import ConfigError

logger = logging.getLogger(__name__)


def load_config(path: Path | None = None, cwd: Path | None = None) -> Config:
    """Load configuration from file with layered merging.

    Args:
        path: Explicit config file path. If provided, skips layered loading.
        cwd: Working directory for the local layer. Defaults to Path.cwd().

    Returns:
        Validated Config object.

    Raises:
        ConfigError: If a config file can't be read, isn't a JSON object, or
            the (merged) config fails validation.
    """
    if path is not None:
        data = _read_layer(path, required=True) or {}
        return _validate(data, str(path))

    effective_cwd = cwd or Path.cwd()
    layers = [get_default_config_path(), effective_cwd / PADBOARD_DIR_NAME / "config.json"]
    if layers[0].resolve() == layers[1].resolve():
        # cwd is the home directory
        layers.pop()

    merged: dict[str, Any] = {}
    loaded_from: list[Path] = []
    for layer in layers:
        data = _read_layer(layer, required=False)
        if data:
            merged = _overlay(merged, data)
            loaded_from.append(layer)

    if not loaded_from:
        logger.debug("No config files found, using defaults")
        return Config()

    logger.info("Config loaded from: %s", [str(p) for p in loaded_from])
    return _validate(merged, "merged from " + ", ".join(str(p) for p in loaded_from))


def _read_layer(path: Path, required: bool) -> dict[str, Any] | None:
    """Parse one config file.

    Returns None for a missing optional layer and {} for a blank file.
    """
    if not path.is_file():
        if required:
            raise ConfigError(f"Config file not found: {path}")
        logger.debug("Config layer not present: %s", path)
        return None

    try:
        # utf-8-sig tolerates a BOM written by Windows editors
        content = path.read_text(encoding="utf-8-sig").strip()
    except OSError as e:
        raise ConfigError(f"Failed to read config file {path}: {e}") from e
    if not content:
        return {}

    try:
        data = json.loads(content)
    except json.JSONDecodeError as e:
        raise ConfigError(f"Invalid JSON in config file {path}: {e}") from e
    if not isinstance(data, dict):
        raise ConfigError(f"Config file {path} must hold a JSON object, got {type(data).__name__}")
    return data


def _overlay(base: dict[str, Any], layer: dict[str, Any]) -> dict[str, Any]:
    """Apply one layer on top of the merged sections.

    Settings inside a section are replaced one by one; list values such as
    known_schemas are replaced whole, so `[]` clears an inherited list.
    Anything that is not a section mapping replaces the earlier value.
    """
    merged = dict(base)
    for section, values in layer.items():
        earlier = merged.get(section)
        if isinstance(earlier, dict) and isinstance(values, dict):
            merged[section] = {**earlier, **values}
        else:
            merged[section] = values
    return merged


def _validate(data: dict[str, Any], source: str) -> Config:
    try:
        return Config.model_validate(data)
    except ValidationError as e:
        raise ConfigError(f"Config validation failed ({source}): {e}") from e
