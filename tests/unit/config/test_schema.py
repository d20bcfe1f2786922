"""Tests for the pydantic config models."""

from pathlib import Path

import pytest
from pydantic import ValidationError

from padboard.config.schema import ClipboardConfig, Config, StorageConfig


class TestClipboardConfig:
    def test_defaults(self) -> None:
        config = ClipboardConfig()
        assert config.number_of_pads == 3
        assert config.persistent is False
        assert config.lock_to_normal is False
        assert config.known_schemas == []

    def test_pad_count_clamped_to_twenty(self) -> None:
        assert ClipboardConfig(number_of_pads=50).number_of_pads == 20

    def test_negative_pad_count_rejected(self) -> None:
        with pytest.raises(ValidationError):
            ClipboardConfig(number_of_pads=-1)

    def test_unknown_keys_rejected(self) -> None:
        with pytest.raises(ValidationError, match="extra"):
            ClipboardConfig.model_validate({"numberOfPads": 4})


class TestStorageConfig:
    def test_default_db_path_under_home(self) -> None:
        path = StorageConfig().resolved_db_path()
        assert path == Path.home() / ".padboard" / "clipboard.db"

    def test_user_expanded(self) -> None:
        path = StorageConfig(db_path="~/clips.db").resolved_db_path()
        assert path == Path.home() / "clips.db"


class TestConfig:
    def test_nested_validation(self) -> None:
        config = Config.model_validate(
            {"clipboard": {"persistent": True}, "storage": {"db_path": "/var/cb.db"}}
        )
        assert config.clipboard.persistent is True
        assert config.storage.resolved_db_path() == Path("/var/cb.db")

    def test_unknown_section_rejected(self) -> None:
        with pytest.raises(ValidationError):
            Config.model_validate({"clipboards": {}})
