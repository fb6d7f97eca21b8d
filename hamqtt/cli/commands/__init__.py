"""CLI command implementations."""

from .config import init_config
from .discovery import add_discovery_commands, check, export, render

__all__ = ["add_discovery_commands", "check", "export", "init_config", "render"]
