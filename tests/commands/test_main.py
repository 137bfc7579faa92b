"""Tests for the top-level CLI and config command."""

from pathlib import Path
from unittest.mock import patch

from typer.testing import CliRunner

from worship_planner.config import PlannerConfig
from worship_planner.main import app

runner = CliRunner()


class TestMainApp:
    """Tests for the main app."""

    def test_version(self):
        """Test --version output."""
        result = runner.invoke(app, ["--version"])

        assert result.exit_code == 0
        assert "worship-planner version" in result.output

    def test_help_lists_groups(self):
        """Test help shows every command group."""
        result = runner.invoke(app, ["--help"])

        assert result.exit_code == 0
        for group in ("keys", "setlist", "schedule", "songs", "config"):
            assert group in result.output


class TestConfigCommand:
    """Tests for 'config' command."""

    def test_show_creates_config(self, tmp_path):
        """Test show creates a default config file."""
        config_path = tmp_path / "config.toml"

        result = runner.invoke(app, ["config", "show", "--config", str(config_path)])

        assert result.exit_code == 0
        assert "Weeks Ahead" in result.output
        assert config_path.exists()

    def test_set(self, tmp_path):
        """Test set writes the value."""
        config_path = tmp_path / "config.toml"

        result = runner.invoke(app, ["config", "set", "weeks_ahead", "6", "--config", str(config_path)])

        assert result.exit_code == 0
        assert PlannerConfig.load(config_path).weeks_ahead == 6

    def test_set_invalid_key(self, tmp_path):
        """Test unknown keys fail."""
        result = runner.invoke(
            app, ["config", "set", "nope", "1", "--config", str(tmp_path / "config.toml")]
        )

        assert result.exit_code == 1
        assert "Invalid config key" in result.output

    def test_set_missing_value(self, tmp_path):
        """Test set without a value fails."""
        result = runner.invoke(app, ["config", "set", "weeks_ahead", "--config", str(tmp_path / "c.toml")])

        assert result.exit_code == 1
        assert "Usage" in result.output

    def test_path(self):
        """Test path prints the config location."""
        config_path = Path("cfg") / "config.toml"

        result = runner.invoke(app, ["config", "path", "--config", str(config_path)])

        assert result.exit_code == 0
        assert "config.toml" in result.output

    def test_path_default_location(self):
        """Test path falls back to the standard config location."""
        with patch("worship_planner.main.get_config_path") as mock_path:
            mock_path.return_value = Path("/etc/wp/default.toml")
            result = runner.invoke(app, ["config", "path"])

        assert result.exit_code == 0
        assert "default.toml" in result.output

    def test_unknown_action(self):
        """Test unknown actions fail."""
        result = runner.invoke(app, ["config", "frobnicate"])

        assert result.exit_code == 1
        assert "Unknown action" in result.output
