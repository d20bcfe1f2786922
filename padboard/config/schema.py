"""Pydantic models for padboard configuration validation."""

from pathlib import Path

from pydantic import BaseModel, ConfigDict, Field, field_validator

from padboard.clipboard.types import MAX_NUMBERED_PADS
from padboard.core.constants import get_default_db_path


class ClipboardConfig(BaseModel):
    """Configuration for the clipboard pads.

    Example in config.json:
        "clipboard": {
            "number_of_pads": 5,
            "persistent": true,
            "known_schemas": ["pages", "tt_content"]
        }
    """

    model_config = ConfigDict(extra="forbid")

    number_of_pads: int = Field(
        default=3,
        ge=0,
        description="Numbered pads besides the default pad (clamped to 20)",
    )
    persistent: bool = Field(
        default=False,
        description="Keep the clipboard across sessions instead of per session",
    )
    lock_to_normal: bool = Field(
        default=False,
        description="Operate on the default pad only; pad switches are ignored",
    )
    known_schemas: list[str] = Field(
        default_factory=list,
        description="Record schemas accepted by the CLI registry (empty = all)",
    )

    @field_validator("number_of_pads")
    @classmethod
    def clamp_number_of_pads(cls, v: int) -> int:
        """Clamp pad count to the supported range."""
        return min(v, MAX_NUMBERED_PADS)


class StorageConfig(BaseModel):
    """Where persistent clipboards are kept."""

    model_config = ConfigDict(extra="forbid")

    db_path: str | None = None
    """SQLite database path. None means ~/.padboard/clipboard.db."""

    def resolved_db_path(self) -> Path:
        """Return the database path with ~ expanded."""
        if self.db_path is None:
            return get_default_db_path()
        return Path(self.db_path).expanduser()


class Config(BaseModel):
    """Root configuration model."""

    model_config = ConfigDict(extra="forbid")

    clipboard: ClipboardConfig = ClipboardConfig()
    storage: StorageConfig = StorageConfig()
