"""Tests for worship-planner configuration management."""

from pathlib import Path

import pytest

from worship_planner.config import (
    PlannerConfig,
    ensure_config_exists,
    get_config_dir,
    get_config_path,
)


@pytest.fixture(autouse=True)
def clear_env(monkeypatch):
    """Keep host environment overrides out of config tests."""
    monkeypatch.delenv("WP_DATA_PATH", raising=False)
    monkeypatch.delenv("WP_LOG_LEVEL", raising=False)


class TestPlannerConfig:
    """Tests for PlannerConfig class."""

    def test_default_values(self):
        """Test that default config values are set correctly."""
        config = PlannerConfig()

        assert config.weeks_ahead == 4
        assert config.active_window_days == 7
        assert config.default_assignee == ""
        assert config.random_seed is None
        assert config.log_level == "INFO"
        assert config.data_path.name == "data.json"

    def test_load_from_file(self, tmp_path):
        """Test loading config from TOML file."""
        config_file = tmp_path / "config.toml"
        config_file.write_text(
            """
[data]
path = "/srv/church/data.json"

[scheduler]
weeks_ahead = 6
active_window_days = 10
default_assignee = "user_md"

[setlist]
random_seed = 42

[logging]
dir = "/var/log/planner"
level = "DEBUG"
"""
        )

        config = PlannerConfig.load(config_file)

        assert config.data_path == Path("/srv/church/data.json")
        assert config.weeks_ahead == 6
        assert config.active_window_days == 10
        assert config.default_assignee == "user_md"
        assert config.random_seed == 42
        assert config.log_dir == Path("/var/log/planner")
        assert config.log_level == "DEBUG"

    def test_load_partial_file(self, tmp_path):
        """Test missing sections keep defaults."""
        config_file = tmp_path / "config.toml"
        config_file.write_text("[scheduler]\nweeks_ahead = 2\n")

        config = PlannerConfig.load(config_file)

        assert config.weeks_ahead == 2
        assert config.active_window_days == 7
        assert config.random_seed is None

    def test_load_missing_file(self, tmp_path):
        """Test that loading missing file raises FileNotFoundError."""
        with pytest.raises(FileNotFoundError):
            PlannerConfig.load(tmp_path / "nonexistent.toml")

    def test_env_override(self, tmp_path, monkeypatch):
        """Test that environment variables override file config."""
        config_file = tmp_path / "config.toml"
        config_file.write_text('[data]\npath = "/from/file.json"\n\n[logging]\nlevel = "INFO"\n')

        monkeypatch.setenv("WP_DATA_PATH", "/from/env.json")
        monkeypatch.setenv("WP_LOG_LEVEL", "WARNING")

        config = PlannerConfig.load(config_file)

        assert config.data_path == Path("/from/env.json")
        assert config.log_level == "WARNING"

    def test_save_and_load(self, tmp_path):
        """Test saving and loading config preserves values."""
        config = PlannerConfig()
        config.weeks_ahead = 8
        config.default_assignee = "user_lead"
        config.random_seed = 3

        config_file = tmp_path / "config.toml"
        config.save(config_file)

        loaded = PlannerConfig.load(config_file)

        assert loaded.weeks_ahead == 8
        assert loaded.default_assignee == "user_lead"
        assert loaded.random_seed == 3

    def test_save_without_seed(self, tmp_path):
        """Test an unset seed stays unset after a round trip."""
        config_file = tmp_path / "config.toml"
        PlannerConfig().save(config_file)

        assert PlannerConfig.load(config_file).random_seed is None

    def test_get_config_value(self):
        """Test getting config values."""
        config = PlannerConfig()
        config.data_path = Path("/tmp/data.json")

        assert config.get("data_path") == "/tmp/data.json"
        assert config.get("weeks_ahead") == 4
        assert config.get("nonexistent") is None
        assert config.get("nonexistent", "default") == "default"

    def test_set_preserves_types(self):
        """Test that set converts text to the field's type."""
        config = PlannerConfig()

        config.set("weeks_ahead", "6")
        config.set("data_path", "/tmp/other.json")
        config.set("default_assignee", "user_md")

        assert config.weeks_ahead == 6
        assert config.data_path == Path("/tmp/other.json")
        assert config.default_assignee == "user_md"

    def test_set_random_seed(self):
        """Test the seed can be set and cleared."""
        config = PlannerConfig()

        config.set("random_seed", "11")
        assert config.random_seed == 11

        config.set("random_seed", "none")
        assert config.random_seed is None

    def test_set_invalid_key(self):
        """Test that setting invalid key raises ValueError."""
        config = PlannerConfig()

        with pytest.raises(ValueError):
            config.set("nonexistent", "value")

    def test_set_invalid_int(self):
        """Test that a non-numeric integer value raises ValueError."""
        config = PlannerConfig()

        with pytest.raises(ValueError):
            config.set("weeks_ahead", "many")


class TestConfigPaths:
    """Tests for config path functions."""

    def test_get_config_dir_returns_path(self):
        """Test that get_config_dir returns a Path."""
        config_dir = get_config_dir()
        assert isinstance(config_dir, Path)
        assert "worship-planner" in str(config_dir).lower()

    def test_get_config_path_returns_toml(self):
        """Test that get_config_path returns path to config.toml."""
        config_path = get_config_path()
        assert isinstance(config_path, Path)
        assert config_path.name == "config.toml"


class TestEnsureConfigExists:
    """Tests for ensure_config_exists function."""

    def test_creates_default_config(self, tmp_path):
        """Test that missing config is created with defaults."""
        config_file = tmp_path / "nested" / "config.toml"

        config = ensure_config_exists(config_file)

        assert isinstance(config, PlannerConfig)
        assert config_file.exists()

    def test_loads_existing_config(self, tmp_path):
        """Test that existing config is loaded."""
        config_file = tmp_path / "config.toml"
        config_file.write_text("[scheduler]\nweeks_ahead = 9\n")

        config = ensure_config_exists(config_file)

        assert config.weeks_ahead == 9

    def test_replaces_corrupted_config(self, tmp_path):
        """Test that unparseable config is replaced with defaults."""
        config_file = tmp_path / "config.toml"
        config_file.write_text("this is [not toml")

        config = ensure_config_exists(config_file)

        assert config.weeks_ahead == 4
        assert PlannerConfig.load(config_file).weeks_ahead == 4
