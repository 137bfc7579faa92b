"""Tests for logging configuration."""

import logging

from worship_planner.logging_config import LOG_FILENAME, _rotate_log_if_needed, setup_logging


class TestRotateLog:
    """Tests for startup log rotation."""

    def test_missing_file(self, tmp_path):
        """Test nothing happens without a log file."""
        _rotate_log_if_needed(tmp_path / "app.log")

        assert list(tmp_path.iterdir()) == []

    def test_small_file_kept(self, tmp_path):
        """Test files under the limit are not rotated."""
        log_file = tmp_path / "app.log"
        log_file.write_text("short")

        _rotate_log_if_needed(log_file, max_bytes=100)

        assert log_file.read_text() == "short"
        assert not (tmp_path / "app.log.1").exists()

    def test_rotates_and_shifts_backups(self, tmp_path):
        """Test backups shift up and the oldest is dropped."""
        log_file = tmp_path / "app.log"
        log_file.write_text("current")
        (tmp_path / "app.log.1").write_text("one")
        (tmp_path / "app.log.2").write_text("two")

        _rotate_log_if_needed(log_file, max_bytes=1, backup_count=2)

        assert not log_file.exists()
        assert (tmp_path / "app.log.1").read_text() == "current"
        assert (tmp_path / "app.log.2").read_text() == "one"
        assert not (tmp_path / "app.log.3").exists()


class TestSetupLogging:
    """Tests for setup_logging."""

    def test_writes_to_file(self, tmp_path):
        """Test log records land in the log directory."""
        log_dir = tmp_path / "logs"

        logger = setup_logging(log_dir, "debug")
        logging.getLogger("worship_planner.services.setlist").debug("picked songs")
        for handler in logger.handlers:
            handler.flush()

        content = (log_dir / LOG_FILENAME).read_text()
        assert logger.level == logging.DEBUG
        assert "Logging to" in content
        assert "picked songs" in content

    def test_repeated_setup_keeps_one_handler(self, tmp_path):
        """Test calling setup twice does not duplicate handlers."""
        setup_logging(tmp_path)
        logger = setup_logging(tmp_path)

        assert len(logger.handlers) == 1
