"""Discovery commands: render, check and export."""

import json
import sys
from pathlib import Path

import click

from ...adapters.io.writer_discovery import DiscoveryWriterAdapter, DiscoveryWriterError
from ...application.discovery_usecase import DiscoveryError, DiscoveryUseCase


def _fail(ctx: click.Context, message: str, suggestions: list[str], title: str) -> None:
    ctx.obj.rich_cli.display_error_with_suggestions(message, suggestions, title)
    sys.exit(1)


@click.command("render")
@click.argument("names", nargs=-1)
@click.option(
    "--format",
    "fmt",
    type=click.Choice(["json", "table", "pretty"]),
    default="json",
    show_default=True,
    help="'json' prints machine-readable records, 'table' a summary, 'pretty' each payload",
)
@click.pass_context
def render(ctx: click.Context, names: tuple[str, ...], fmt: str) -> None:
    """Print the discovery messages for the configured entities.

    NAMES restricts output to entities with those object ids.
    """
    usecase = DiscoveryUseCase(ctx.obj.config)
    try:
        messages = usecase.build_messages(list(names) or None)
    except DiscoveryError as e:
        _fail(ctx, str(e), ["Run 'hamqtt render' without names to list all entities"], "Render Failed")
        return

    if fmt == "json":
        click.echo(
            json.dumps(
                [message.as_record() for message in messages],
                indent=2,
                ensure_ascii=False,
            )
        )
    elif fmt == "table":
        ctx.obj.rich_cli.display_messages_table(messages)
    else:
        for message in messages:
            ctx.obj.rich_cli.display_message_json(message)


@click.command("check")
@click.option(
    "--format",
    "fmt",
    type=click.Choice(["table", "json"]),
    default="table",
    show_default=True,
)
@click.option(
    "--strict", is_flag=True, help="Treat warnings as errors for the exit code"
)
@click.pass_context
def check(ctx: click.Context, fmt: str, strict: bool) -> None:
    """Check that entity topics match the device's topics exactly.

    Exits with status 1 when errors are found.
    """
    report = DiscoveryUseCase(ctx.obj.config).check()
    failed = not report.ok or (strict and bool(report.warnings))

    if fmt == "json":
        click.echo(
            json.dumps(
                {
                    "ok": not failed,
                    "checked_topics": report.checked_topics,
                    "issues": report.as_rows(),
                },
                indent=2,
                ensure_ascii=False,
            )
        )
    else:
        ctx.obj.rich_cli.display_report(report.as_rows(), not failed)

    if failed:
        sys.exit(1)


@click.command("export")
@click.argument("output", type=click.Path(path_type=Path), required=False)
@click.option(
    "--format",
    "fmt",
    type=click.Choice(["files", "jsonl"]),
    default=None,
    help="Output layout (defaults to output.format from the configuration)",
)
@click.option("--name", "names", multiple=True, help="Only export these object ids")
@click.pass_context
def export(
    ctx: click.Context, output: Path | None, fmt: str | None, names: tuple[str, ...]
) -> None:
    """Write discovery messages to OUTPUT for publishing with any MQTT client."""
    config = ctx.obj.config
    output = output or Path(config.output.directory)
    fmt = fmt or config.output.format

    writer = DiscoveryWriterAdapter(dry_run=ctx.obj.dry_run, indent=config.output.indent)
    usecase = DiscoveryUseCase(config, writer=writer)
    try:
        paths = usecase.export(output, fmt, list(names) or None)
    except (DiscoveryError, DiscoveryWriterError) as e:
        _fail(
            ctx,
            str(e),
            ["Check that the output location is writable", "Run 'hamqtt check' first"],
            "Export Failed",
        )
        return

    prefix = "would write" if ctx.obj.dry_run else "wrote"
    for path in paths:
        click.echo(f"{prefix} {path}")


def add_discovery_commands(app: click.Group) -> None:
    app.add_command(render)
    app.add_command(check)
    app.add_command(export)
