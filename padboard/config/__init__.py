"""Configuration loading and validation."""

from padboard.config.loader import load_config
from padboard.config.schema import ClipboardConfig, Config, StorageConfig

__all__ = ["Config", "ClipboardConfig", "StorageConfig", "load_config"]
