"""Tests for ConfigManager."""

from __future__ import annotations

import json
import stat

import pydantic
import pytest

from todofocus.config import Config, ConfigManager, get_config_manager


@pytest.fixture()
def manager():
    return ConfigManager("test")


def test_defaults(manager):
    config = manager.config
    assert config.owner_id == "local"
    assert config.storage.backend == "sqlite"
    assert config.timer.default_minutes == 25
    assert config.timer.presets == [5, 15, 30, 60]
    assert config.notifications.enabled is True


def test_config_file_lives_in_config_dir(manager, tmp_path):
    assert manager.config_file == tmp_path / "test.json"


def test_set_persists_with_private_mode(manager):
    manager.set("storage.backend", "rest")

    data = json.loads(manager.config_file.read_text())
    assert data["storage"]["backend"] == "rest"
    assert stat.S_IMODE(manager.config_file.stat().st_mode) == 0o600
    assert ConfigManager("test").get("storage.backend") == "rest"


def test_set_validates(manager):
    with pytest.raises(pydantic.ValidationError):
        manager.set("timer.default_minutes", 0)
    assert manager.get("timer.default_minutes") == 25


def test_get_unknown_key(manager):
    assert manager.get("storage.nope") is None
    assert manager.get("owner_id.deeper") is None


def test_reset_single_key(manager):
    manager.set("owner_id", "me")
    manager.set("timer.default_minutes", 50)

    manager.reset("timer.default_minutes")

    assert manager.get("timer.default_minutes") == 25
    assert manager.get("owner_id") == "me"


def test_reset_all(manager):
    manager.set("owner_id", "me")
    manager.reset()
    assert manager.config == Config()


def test_corrupted_file_falls_back_to_defaults(manager):
    manager.config_file.write_text("{not json")
    assert manager.load_config() == Config()


def test_invalid_values_fall_back_to_defaults(manager):
    manager.config_file.write_text(json.dumps({"storage": {"backend": "ftp"}}))
    assert manager.load_config() == Config()


def test_global_manager_is_cached_per_profile():
    default = get_config_manager()
    assert get_config_manager() is default
    assert get_config_manager("work") is not default
