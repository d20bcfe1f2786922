"""Core constants and paths for padboard.

Single source of truth for global paths. Modules import from here instead of
hardcoding paths like `Path.home() / ".padboard"`.
"""

from pathlib import Path

PADBOARD_DIR_NAME = ".padboard"


def get_padboard_dir() -> Path:
    """Get ~/.padboard (global config directory)."""
    return Path.home() / PADBOARD_DIR_NAME


def get_default_config_path() -> Path:
    """Get default config file path."""
    return get_padboard_dir() / "config.json"


def get_default_db_path() -> Path:
    """Get the default persistent clipboard database path."""
    return get_padboard_dir() / "clipboard.db"
