"""
Logging setup with Rich integration.

This module provides:
- A single RichHandler installed on the root logger
- Classic and minimal log modes (minimal strips markup for CI logs)
- Level selection from --verbose / --quiet / HAMQTT_QUIET
"""

import logging
import os
import re
import threading
from enum import Enum

from rich.console import Console
from rich.logging import RichHandler

from .rich_cli import HAMQTT_THEME


_EMOJI = re.compile("[\u2600-\u27bf\U0001f300-\U0001faff\ufe0f]")


class LogMode(str, Enum):
    """Logging output modes."""

    CLASSIC = "classic"
    MINIMAL = "minimal"


class MinimalModeFilter(logging.Filter):
    """Sanitizes records while the manager is in minimal mode."""

    def filter(self, record: logging.LogRecord) -> bool:
        if LoggerManager.log_mode == LogMode.MINIMAL:
            record.msg = LoggerManager._prepare_message(record.getMessage())
            record.args = None
        return True


class LoggerManager:
    """Manager for configuring the root logger once per process."""

    _console: Console | None = None
    log_mode: LogMode = LogMode.CLASSIC
    _setup_complete: bool = False
    _setup_lock: threading.Lock = threading.Lock()

    @classmethod
    def setup_global_logging(
        cls, console: Console | None = None, level: int = logging.INFO
    ) -> None:
        """Set up global logging configuration with thread safety."""
        with cls._setup_lock:
            if cls._setup_complete:
                return

            cls._console = console or Console(theme=HAMQTT_THEME)
            root_logger = logging.getLogger()

            # Replace foreign RichHandlers, keep other handlers (e.g. pytest's caplog)
            for handler in list(root_logger.handlers):
                if isinstance(handler, RichHandler):
                    root_logger.removeHandler(handler)

            rich_handler = RichHandler(
                console=cls._console,
                show_time=True,
                show_path=False,
                markup=False,
                rich_tracebacks=True,
            )
            rich_handler.setFormatter(logging.Formatter(fmt="%(message)s"))
            rich_handler.addFilter(MinimalModeFilter())

            root_logger.addHandler(rich_handler)
            root_logger.setLevel(level)
            cls._setup_complete = True

    @classmethod
    def set_log_mode(
        cls,
        mode: LogMode,
        verbose: bool = False,
        quiet: bool = False,
        default_level: int | None = None,
    ) -> int:
        """Configure log mode and root level appropriately; returns the level."""
        cls.log_mode = mode
        # quiet > verbose > minimal mode > configured default
        if quiet or os.getenv("HAMQTT_QUIET", "").lower() in {"1", "true", "yes"}:
            level = logging.WARNING
        elif verbose:
            level = logging.DEBUG
        elif mode == LogMode.MINIMAL:
            level = logging.WARNING
        elif default_level is not None:
            level = default_level
        else:
            level = logging.INFO

        logging.getLogger().setLevel(level)
        return level

    @staticmethod
    def suppress_library_logs(modules: list[str], verbose: bool = False) -> None:
        """Keep chatty third-party loggers at WARNING unless running verbose."""
        if verbose:
            return
        for name in modules:
            logging.getLogger(name).setLevel(logging.WARNING)

    @staticmethod
    def _strip_rich_tags(message: str) -> str:
        """Remove Rich markup tags like [primary]...[/] from a message."""
        return re.sub(r"\[/\]|\[/?[a-z#@][^\[\]]*\]", "", message)

    @classmethod
    def _prepare_message(cls, message: str) -> str:
        """Prepare message for logging based on current log mode."""
        if message is None:
            return ""
        if cls.log_mode == LogMode.MINIMAL:
            msg = cls._strip_rich_tags(str(message))
            # Drop emoji and other non-text symbols
            msg = _EMOJI.sub("", msg)
            return re.sub(r"\s+", " ", msg).strip()
        return str(message)

    @classmethod
    def reset(cls) -> None:
        """Forget previous setup; used by tests that install their own console."""
        with cls._setup_lock:
            cls._setup_complete = False
            cls._console = None
            cls.log_mode = LogMode.CLASSIC


def setup_enhanced_logging(
    console: Console | None = None, level: int = logging.INFO
) -> logging.Logger:
    """Set up the logging system and return the CLI's main logger."""
    LoggerManager.setup_global_logging(console, level)
    logger = logging.getLogger("hamqtt.main")
    logger.propagate = True
    return logger
