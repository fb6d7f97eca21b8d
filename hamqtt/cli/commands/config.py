"""Configuration commands."""

import sys
from pathlib import Path

import click

from ...config.loader import ConfigLoader, ConfigurationError


@click.command("init-config")
@click.argument(
    "path", type=click.Path(path_type=Path), default=".hamqtt.toml", required=False
)
@click.option("--force", is_flag=True, help="Overwrite an existing file")
@click.pass_context
def init_config(ctx: click.Context, path: Path, force: bool) -> None:
    """Create a starter TOML configuration at PATH."""
    if ctx.obj.dry_run:
        click.echo(f"would write {path}")
        return
    try:
        created = ConfigLoader().create_sample_toml_config(path, overwrite=force)
    except ConfigurationError as e:
        ctx.obj.rich_cli.display_error_with_suggestions(
            str(e), ["Pass --force to overwrite the existing file"], "Init Failed"
        )
        sys.exit(1)
    click.echo(f"Created {created}")
