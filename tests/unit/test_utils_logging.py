"""Tests for utils logging module."""

from pathlib import Path
import sys
import logging

ROOT = Path(__file__).resolve().parents[2]
SRC = ROOT / "src"
if str(SRC) not in sys.path:
    sys.path.insert(0, str(SRC))

from trfhos.utils.logging import (
    CONSOLE_FORMAT,
    DEFAULT_FORMAT,
    LogTemplates,
    get_logger,
    level_from_verbosity,
    setup_logging,
)


class TestLoggingUtilities:
    """Test cases for logging utilities."""

    def test_format_constants(self):
        assert "%(asctime)s" in DEFAULT_FORMAT
        assert "%(name)s" in DEFAULT_FORMAT
        assert "%(levelname)s" in CONSOLE_FORMAT
        assert "%(message)s" in CONSOLE_FORMAT

    def test_get_logger_namespaced(self):
        assert get_logger("pipeline").name == "trfhos.pipeline"
        assert get_logger("HosMatcher").name == "trfhos.HosMatcher"
        assert get_logger("same") is get_logger("same")

    def test_level_from_verbosity(self):
        assert level_from_verbosity(0) == logging.WARNING
        assert level_from_verbosity(1) == logging.INFO
        assert level_from_verbosity(2) == logging.DEBUG
        assert level_from_verbosity(5) == logging.DEBUG
        assert level_from_verbosity(0, default=logging.ERROR) == logging.ERROR

    def test_setup_logging_console_only(self):
        setup_logging(level=logging.INFO)
        app_logger = logging.getLogger("trfhos")
        assert app_logger.level == logging.INFO
        assert len(app_logger.handlers) == 1
        assert isinstance(app_logger.handlers[0], logging.StreamHandler)
        assert app_logger.propagate is False
        assert logging.getLogger().level == logging.WARNING

    def test_setup_logging_idempotent(self):
        setup_logging(level=logging.INFO)
        setup_logging(level=logging.DEBUG)
        assert len(logging.getLogger("trfhos").handlers) == 1

    def test_setup_logging_with_file(self, tmp_path):
        log_file = tmp_path / "logs" / "run.log"
        setup_logging(level=logging.WARNING, log_file=log_file)
        app_logger = logging.getLogger("trfhos")
        assert len(app_logger.handlers) == 2
        assert app_logger.level == logging.DEBUG

        get_logger("test").debug("debug detail")
        for handler in app_logger.handlers:
            handler.flush()
        assert "debug detail" in log_file.read_text()

    def test_log_templates_format(self):
        msg = LogTemplates.SCAN_STATS.format(sequences=1200, repeats=3, skipped=0)
        assert "1,200 sequences" in msg
