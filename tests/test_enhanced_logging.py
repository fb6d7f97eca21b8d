"""Tests for Rich logging setup and log mode selection."""

import io
import logging
import os
from unittest.mock import patch

from rich.console import Console
from rich.logging import RichHandler

from hamqtt.adapters.io.enhanced_logging import (
    LoggerManager,
    LogMode,
    MinimalModeFilter,
    setup_enhanced_logging,
)


class TestSetup:
    def test_single_rich_handler(self):
        console = Console(file=io.StringIO())
        setup_enhanced_logging(console)
        setup_enhanced_logging(console)

        handlers = [h for h in logging.getLogger().handlers if isinstance(h, RichHandler)]
        assert len(handlers) == 1

    def test_returns_main_logger(self):
        logger = setup_enhanced_logging(Console(file=io.StringIO()))
        assert logger.name == "hamqtt.main"


class TestLogLevels:
    """quiet > verbose > minimal mode > configured default."""

    def test_default_is_info(self):
        assert LoggerManager.set_log_mode(LogMode.CLASSIC) == logging.INFO

    def test_configured_default(self):
        level = LoggerManager.set_log_mode(LogMode.CLASSIC, default_level=logging.ERROR)
        assert level == logging.ERROR
        assert logging.getLogger().level == logging.ERROR

    def test_minimal_mode_is_warning(self):
        assert LoggerManager.set_log_mode(LogMode.MINIMAL) == logging.WARNING

    def test_verbose_beats_minimal(self):
        assert LoggerManager.set_log_mode(LogMode.MINIMAL, verbose=True) == logging.DEBUG

    def test_quiet_beats_verbose(self):
        level = LoggerManager.set_log_mode(LogMode.CLASSIC, verbose=True, quiet=True)
        assert level == logging.WARNING

    def test_quiet_from_environment(self):
        with patch.dict(os.environ, {"HAMQTT_QUIET": "true"}):
            assert LoggerManager.set_log_mode(LogMode.CLASSIC) == logging.WARNING

    def test_suppress_library_logs(self):
        LoggerManager.suppress_library_logs(["hamqtt.tests.noisy"])
        assert logging.getLogger("hamqtt.tests.noisy").level == logging.WARNING

    def test_suppress_skipped_when_verbose(self):
        logging.getLogger("hamqtt.tests.chatty").setLevel(logging.NOTSET)
        LoggerManager.suppress_library_logs(["hamqtt.tests.chatty"], verbose=True)
        assert logging.getLogger("hamqtt.tests.chatty").level == logging.NOTSET


class TestMinimalMode:
    """Test message sanitizing for CI logs."""

    def test_strips_markup_and_emoji(self):
        LoggerManager.log_mode = LogMode.MINIMAL
        message = LoggerManager._prepare_message("✅ [success]Exported[/] [bold]2[/bold]  messages")
        assert message == "Exported 2 messages"

    def test_keeps_non_latin_text(self):
        LoggerManager.log_mode = LogMode.MINIMAL
        assert LoggerManager._prepare_message("温度 °C") == "温度 °C"

    def test_classic_mode_leaves_markup(self):
        LoggerManager.log_mode = LogMode.CLASSIC
        assert LoggerManager._prepare_message("[success]x[/]") == "[success]x[/]"

    def test_filter_rewrites_record(self):
        LoggerManager.log_mode = LogMode.MINIMAL
        record = logging.LogRecord(
            "hamqtt", logging.WARNING, __file__, 1, "[warning]%s[/]", ("careful",), None
        )
        assert MinimalModeFilter().filter(record)
        assert record.getMessage() == "careful"
