"""Configuration management for the worship-planner CLI.

Handles loading, saving, and validating TOML configuration stored in:
- macOS: ~/.config/worship-planner/config.toml
- Linux: ~/.config/worship-planner/config.toml (XDG_CONFIG_HOME)
- Windows: %APPDATA%\\worship-planner\\config.toml
"""

import os
import sys
from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional

import tomllib
import tomli_w


@dataclass
class PlannerConfig:
    """Configuration for worship-planner.

    Attributes:
        data_path: JSON data snapshot exported by the church database
        weeks_ahead: Weekly checkpoints scanned when generating reminders
        active_window_days: Days ahead shown as active notifications
        default_assignee: User ID new reminders are assigned to (empty means
            the first musical director in the data)
        random_seed: Seed for setlist song selection (None for a fresh draw)
        log_dir: Directory for the log file
        log_level: Logging level name
    """

    # Data snapshot
    data_path: Path = field(default_factory=lambda: get_config_dir() / "data.json")

    # Scheduler
    weeks_ahead: int = 4
    active_window_days: int = 7
    default_assignee: str = ""

    # Setlist generation
    random_seed: Optional[int] = None

    # Logging
    log_dir: Path = field(default_factory=lambda: get_config_dir() / "logs")
    log_level: str = "INFO"

    @classmethod
    def load(cls, path: Optional[Path] = None) -> "PlannerConfig":
        """Load configuration from TOML file.

        Args:
            path: Path to config file (defaults to standard location)

        Returns:
            PlannerConfig instance with loaded values

        Raises:
            FileNotFoundError: If config file doesn't exist
        """
        if path is None:
            path = get_config_path()

        if not path.exists():
            raise FileNotFoundError(f"Config file not found: {path}")

        with open(path, "rb") as f:
            data = tomllib.load(f)

        config = cls()

        if "data" in data:
            data_path = data["data"].get("path")
            if data_path:
                config.data_path = Path(data_path)

        if "scheduler" in data:
            scheduler = data["scheduler"]
            config.weeks_ahead = scheduler.get("weeks_ahead", config.weeks_ahead)
            config.active_window_days = scheduler.get(
                "active_window_days", config.active_window_days
            )
            config.default_assignee = scheduler.get("default_assignee", config.default_assignee)

        if "setlist" in data:
            config.random_seed = data["setlist"].get("random_seed", config.random_seed)

        if "logging" in data:
            log_dir = data["logging"].get("dir")
            if log_dir:
                config.log_dir = Path(log_dir)
            config.log_level = data["logging"].get("level", config.log_level)

        # Environment variables take precedence
        env_data_path = os.environ.get("WP_DATA_PATH")
        if env_data_path:
            config.data_path = Path(env_data_path)

        env_log_level = os.environ.get("WP_LOG_LEVEL")
        if env_log_level:
            config.log_level = env_log_level

        return config

    def save(self, path: Optional[Path] = None) -> None:
        """Save configuration to TOML file.

        Args:
            path: Path to save config (defaults to standard location)
        """
        if path is None:
            path = get_config_path()

        path.parent.mkdir(parents=True, exist_ok=True)

        setlist = {}
        # TOML has no null
        if self.random_seed is not None:
            setlist["random_seed"] = self.random_seed

        data = {
            "data": {"path": str(self.data_path)},
            "scheduler": {
                "weeks_ahead": self.weeks_ahead,
                "active_window_days": self.active_window_days,
                "default_assignee": self.default_assignee,
            },
            "setlist": setlist,
            "logging": {"dir": str(self.log_dir), "level": self.log_level},
        }

        with open(path, "wb") as f:
            tomli_w.dump(data, f)

    def get(self, key: str, default: Optional[str] = None) -> Optional[str]:
        """Get a configuration value by key.

        Args:
            key: Configuration attribute name (e.g., "weeks_ahead")
            default: Default value if key not found

        Returns:
            Configuration value or default
        """
        if not hasattr(self, key):
            return default

        value = getattr(self, key)
        if isinstance(value, Path):
            return str(value)
        return value

    def set(self, key: str, value: str) -> None:
        """Set a configuration value by key, preserving its type.

        Args:
            key: Configuration attribute name
            value: Configuration value as text

        Raises:
            ValueError: If the key is unknown or the value has the wrong type
        """
        if not hasattr(self, key):
            raise ValueError(f"Invalid config key: {key}")

        current = getattr(self, key)
        if key == "random_seed":
            new_value = None if value.lower() in ("", "none") else int(value)
        elif isinstance(current, bool):
            new_value = value.lower() in ("true", "1", "yes")
        elif isinstance(current, int):
            new_value = int(value)
        elif isinstance(current, Path):
            new_value = Path(value)
        else:
            new_value = value

        setattr(self, key, new_value)


def get_config_dir() -> Path:
    """Get the platform-specific config directory.

    Returns:
        Path to the config directory for worship-planner.
    """
    if sys.platform == "darwin" or sys.platform == "linux":
        xdg_config = os.environ.get("XDG_CONFIG_HOME")
        if xdg_config:
            return Path(xdg_config) / "worship-planner"
        return Path.home() / ".config" / "worship-planner"
    elif sys.platform == "win32":
        appdata = os.environ.get("APPDATA")
        if appdata:
            return Path(appdata) / "worship-planner"
        return Path.home() / "AppData" / "Roaming" / "worship-planner"
    else:
        return Path.home() / ".config" / "worship-planner"


def get_config_path() -> Path:
    """Get the path to the config.toml file.

    Returns:
        Path to config.toml
    """
    return get_config_dir() / "config.toml"


def ensure_config_exists(path: Optional[Path] = None) -> PlannerConfig:
    """Load the config file, creating a default one if needed.

    Args:
        path: Path to config file (defaults to standard location)

    Returns:
        PlannerConfig instance
    """
    if path is None:
        path = get_config_path()

    if path.exists():
        try:
            return PlannerConfig.load(path)
        except tomllib.TOMLDecodeError:
            # Corrupted config is replaced with defaults
            pass

    config = PlannerConfig()
    config.save(path)
    return config
