"""Tests for the exception hierarchy and logging setup."""

import logging
from pathlib import Path

from craftlog_lewitt.exceptions import (
    ConfigFileError,
    ConfigurationError,
    CraftlogError,
    InputError,
    InvalidConfigError,
    LogFileError,
    RenderError,
    SurfaceError,
)
from craftlog_lewitt.logging_config import get_logger, setup_logging


class TestHierarchy:
    def test_subclasses(self):
        assert issubclass(InvalidConfigError, ConfigurationError)
        assert issubclass(ConfigFileError, ConfigurationError)
        assert issubclass(LogFileError, InputError)
        assert issubclass(SurfaceError, RenderError)
        for cls in (ConfigurationError, InputError, RenderError):
            assert issubclass(cls, CraftlogError)

    def test_details_in_str(self):
        error = LogFileError(Path("log.jsonl"), "file not found")
        assert str(error) == "Cannot read log: log.jsonl (path=log.jsonl, reason=file not found)"
        assert error.details["reason"] == "file not found"

    def test_surface_error_output(self):
        error = SurfaceError("svg", "disk full", output="out.svg")
        assert error.details == {"surface": "svg", "reason": "disk full", "output": "out.svg"}

    def test_plain_message(self):
        assert str(CraftlogError("boom")) == "boom"


class TestLogging:
    def test_get_logger_prefix(self):
        assert get_logger("tiles").name == "craftlog_lewitt.tiles"
        assert get_logger("craftlog_lewitt.merge").name == "craftlog_lewitt.merge"
        assert get_logger().name == "craftlog_lewitt"

    def test_levels(self, tmp_path):
        assert setup_logging(verbose=True).level == logging.DEBUG
        assert setup_logging(quiet=True).level == logging.ERROR
        assert setup_logging().level == logging.WARNING

    def test_log_file(self, tmp_path):
        log_file = tmp_path / "run.log"
        setup_logging(log_file=str(log_file))
        get_logger("test").warning("written to file")
        for handler in logging.getLogger().handlers:
            handler.flush()
        assert "written to file" in log_file.read_text()
        setup_logging()
