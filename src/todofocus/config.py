"""Configuration management for todofocus."""

import json
from pathlib import Path
from typing import Any, Literal, Optional

from platformdirs import user_config_dir
from pydantic import BaseModel, Field, ValidationError


class StorageConfig(BaseModel):
    """Storage backend configuration."""

    backend: Literal["sqlite", "rest"] = Field(default="sqlite")
    db_path: Optional[str] = Field(default=None)


class APIConfig(BaseModel):
    """Remote store (PostgREST) configuration."""

    endpoint: str = Field(default="http://localhost:54321/rest/v1")
    api_key: Optional[str] = Field(default=None)
    timeout: int = Field(default=30)


class TimerConfig(BaseModel):
    """Countdown timer configuration."""

    default_minutes: int = Field(default=25, ge=1, le=999)
    presets: list[int] = Field(default_factory=lambda: [5, 15, 30, 60])


class NotificationConfig(BaseModel):
    """Desktop/console notification configuration."""

    enabled: bool = Field(default=True)


class Config(BaseModel):
    """Main configuration."""

    owner_id: str = Field(default="local")
    storage: StorageConfig = Field(default_factory=StorageConfig)
    api: APIConfig = Field(default_factory=APIConfig)
    timer: TimerConfig = Field(default_factory=TimerConfig)
    notifications: NotificationConfig = Field(default_factory=NotificationConfig)


class ConfigManager:
    """Manages todofocus configuration."""

    def __init__(self, profile: str = "default"):
        self.profile = profile
        self.config_dir = Path(user_config_dir("todofocus"))
        self.config_file = self.config_dir / f"{profile}.json"

        # Ensure directory exists
        self.config_dir.mkdir(parents=True, exist_ok=True)

        self._config: Optional[Config] = None

    @property
    def config(self) -> Config:
        """Get the current configuration."""
        if self._config is None:
            self._config = self.load_config()
        return self._config

    def load_config(self) -> Config:
        """Load configuration from file."""
        if self.config_file.exists():
            try:
                with open(self.config_file, "r") as f:
                    data = json.load(f)
                return Config(**data)
            except (json.JSONDecodeError, TypeError, ValidationError):
                # If config is corrupted, return default
                return Config()
        return Config()

    def save_config(self, config: Optional[Config] = None) -> None:
        """Save configuration to file."""
        if config is None:
            config = self.config

        with open(self.config_file, "w") as f:
            json.dump(config.model_dump(), f, indent=2)

        # API keys live in here
        self.config_file.chmod(0o600)

    def get(self, key: str) -> Any:
        """Get a configuration value by dot-separated key."""
        return self.get_from_config(self.config, key)

    def set(self, key: str, value: Any) -> None:
        """Set a configuration value by dot-separated key."""
        keys = key.split(".")
        config_dict = self.config.model_dump()

        # Navigate to the nested dictionary
        current = config_dict
        for k in keys[:-1]:
            if k not in current:
                current[k] = {}
            current = current[k]

        current[keys[-1]] = value

        # Reload config from the modified dictionary (validates the value)
        self._config = Config(**config_dict)
        self.save_config()

    def reset(self, key: Optional[str] = None) -> None:
        """Reset configuration to defaults."""
        if key is None:
            self._config = Config()
        else:
            self.set(key, self.get_from_config(Config(), key))
        self.save_config()

    def get_from_config(self, config: Config, key: str) -> Any:
        """Get value from a config object using dot notation."""
        keys = key.split(".")
        value: Any = config
        for k in keys:
            if isinstance(value, BaseModel):
                value = getattr(value, k, None)
            else:
                return None
        return value


# Global config manager instance
_config_manager: Optional[ConfigManager] = None


def get_config_manager(profile: str = "default") -> ConfigManager:
    """Get or create the global config manager."""
    global _config_manager
    if _config_manager is None or _config_manager.profile != profile:
        _config_manager = ConfigManager(profile)
    return _config_manager
