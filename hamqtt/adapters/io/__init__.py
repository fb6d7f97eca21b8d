"""I/O adapters: logging, console rendering and discovery export."""

from .enhanced_logging import LoggerManager, LogMode, setup_enhanced_logging
from .rich_cli import HAMQTT_THEME, RichCliComponents, UIStyle, get_theme
from .writer_discovery import DiscoveryWriterAdapter, DiscoveryWriterError

__all__ = [
    "DiscoveryWriterAdapter",
    "DiscoveryWriterError",
    "HAMQTT_THEME",
    "LogMode",
    "LoggerManager",
    "RichCliComponents",
    "UIStyle",
    "get_theme",
    "setup_enhanced_logging",
]
