"""Main CLI entry point for hamqtt."""

import logging
import os
import sys
from pathlib import Path

import click
from rich.console import Console

from ..adapters.io.enhanced_logging import (
    LoggerManager,
    LogMode,
    setup_enhanced_logging,
)
from ..adapters.io.rich_cli import RichCliComponents, UIStyle, get_theme
from ..config.loader import ConfigLoader, ConfigurationError
from ..config.models import HAMqttConfig
from .commands.config import init_config
from .commands.discovery import add_discovery_commands


def detect_ui_style(ui_flag: str | None) -> UIStyle:
    """Detect appropriate UI style based on flag, environment, and TTY status."""
    # Priority 1: Explicit --ui flag
    if ui_flag:
        return UIStyle.MINIMAL if ui_flag.lower() == "minimal" else UIStyle.CLASSIC

    # Priority 2: Environment variable
    env_ui = os.getenv("HAMQTT_UI")
    if env_ui and env_ui.lower() in ("minimal", "classic"):
        return UIStyle(env_ui.lower())

    # Priority 3: Auto-detect based on environment
    if os.getenv("CI") == "true" or not sys.stdout.isatty():
        return UIStyle.MINIMAL

    return UIStyle.CLASSIC


class ClickContext:
    """Context object for Click commands."""

    def __init__(self) -> None:
        self.config: HAMqttConfig | None = None
        self.config_path: Path | None = None
        self.rich_cli: RichCliComponents | None = None  # Will be initialized in app()
        self.ui_style: UIStyle = UIStyle.CLASSIC
        self.verbose: bool = False
        self.quiet: bool = False
        self.dry_run: bool = False


# Commands that must work before any configuration exists
SKIP_CONFIG_COMMANDS = {"init-config"}


@click.group()
@click.option(
    "--config",
    "-c",
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
    help="Path to configuration file (TOML or YAML)",
)
@click.option("--verbose", "-v", is_flag=True, help="Enable verbose output")
@click.option(
    "--quiet",
    "-q",
    is_flag=True,
    help="Reduce output: set log level to WARNING and hide INFO",
)
@click.option(
    "--dry-run", "--dry", is_flag=True, help="Preview operations without writing files"
)
@click.option(
    "--ui",
    type=click.Choice(["minimal", "classic"], case_sensitive=False),
    help="UI style: 'minimal' for CI/non-TTY, 'classic' for interactive (auto-detected by default)",
)
@click.pass_context
def app(
    ctx: click.Context,
    config: Path | None,
    verbose: bool,
    quiet: bool,
    dry_run: bool,
    ui: str | None,
) -> None:
    """hamqtt - Home Assistant MQTT discovery payload toolkit."""
    ctx.ensure_object(ClickContext)
    ctx.obj.verbose = verbose
    ctx.obj.quiet = quiet
    ctx.obj.dry_run = dry_run
    ctx.obj.config_path = config
    ctx.obj.ui_style = detect_ui_style(ui)

    theme = get_theme(ctx.obj.ui_style)
    ctx.obj.rich_cli = RichCliComponents(Console(theme=theme))

    # Logs go to stderr so rendered payloads on stdout stay machine-readable
    logger = setup_enhanced_logging(Console(theme=theme, stderr=True))
    log_mode = LogMode.MINIMAL if ctx.obj.ui_style == UIStyle.MINIMAL else LogMode.CLASSIC
    LoggerManager.set_log_mode(log_mode, verbose=verbose, quiet=quiet)
    if verbose and not quiet:
        logger.debug("Debug mode enabled - verbose logging active")

    if ctx.invoked_subcommand in SKIP_CONFIG_COMMANDS:
        return

    try:
        loader = ConfigLoader(config)
        ctx.obj.config = loader.load_config()
    except ConfigurationError as e:
        suggestions = [
            "Check if the configuration file exists and is readable",
            "Verify the configuration file format (TOML or YAML)",
            "Run 'hamqtt init-config' to create a new configuration file",
        ]
        ctx.obj.rich_cli.display_error_with_suggestions(
            f"Configuration error: {e}", suggestions, "Configuration Failed"
        )
        logger.error(f"Configuration initialization failed: {e}")
        sys.exit(1)

    if ui is None and ctx.obj.config.logging.mode == "minimal":
        log_mode = LogMode.MINIMAL
    LoggerManager.set_log_mode(
        log_mode,
        verbose=verbose,
        quiet=quiet,
        default_level=logging.getLevelName(ctx.obj.config.logging.level),
    )
    LoggerManager.suppress_library_logs(
        ctx.obj.config.logging.suppress_modules, verbose=verbose
    )


app.add_command(init_config)
add_discovery_commands(app)


def main() -> None:
    """Console script entry point."""
    app(obj=ClickContext())


if __name__ == "__main__":
    main()
