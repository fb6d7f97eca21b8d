"""
Rich console components for the hamqtt CLI.

Tables for discovery messages and topic reports, and the error panel shown
when a command fails.
"""

from enum import Enum
from typing import Any

from rich.console import Console
from rich.markup import escape
from rich.panel import Panel
from rich.syntax import Syntax
from rich.table import Table
from rich.theme import Theme

from ...domain.base import DiscoveryMessage


class UIStyle(str, Enum):
    """UI style options for controlling visual complexity and theming."""

    MINIMAL = "minimal"
    CLASSIC = "classic"


HAMQTT_THEME = Theme(
    {
        "primary": "bold cyan",
        "success": "green",
        "warning": "yellow",
        "error": "bold red",
        "muted": "dim",
        "topic": "magenta",
        "border": "cyan",
    }
)

# Restricted palette for CI logs and non-TTY output
MINIMAL_THEME = Theme(
    {
        "primary": "bold",
        "success": "default",
        "warning": "default",
        "error": "bold",
        "muted": "dim",
        "topic": "default",
        "border": "dim",
    }
)


def get_theme(style: UIStyle) -> Theme:
    return MINIMAL_THEME if style == UIStyle.MINIMAL else HAMQTT_THEME


class RichCliComponents:
    """Renders hamqtt results on a Rich console."""

    def __init__(self, console: Console | None = None) -> None:
        self.console = console or Console(theme=HAMQTT_THEME)

    def display_messages_table(self, messages: list[DiscoveryMessage]) -> None:
        """One row per discovery message with its most useful payload keys."""
        table = Table(title="Discovery messages", border_style="border")
        table.add_column("Topic", style="topic")
        table.add_column("Name")
        table.add_column("Command topic")
        table.add_column("State topic")
        table.add_column("Retain", justify="center")

        for message in messages:
            payload = message.payload
            table.add_row(
                escape(message.topic),
                escape(str(payload.get("name", ""))),
                escape(str(payload.get("cmd_t", ""))),
                escape(str(payload.get("stat_t", ""))),
                "yes" if message.retain else "no",
            )
        self.console.print(table)

    def display_message_json(self, message: DiscoveryMessage) -> None:
        self.console.print(f"[primary]{escape(message.topic)}[/]")
        self.console.print(Syntax(message.payload_json(indent=2), "json"))

    def display_report(self, rows: list[dict[str, Any]], ok: bool) -> None:
        """Render topic check findings; ``rows`` come from ``TopicReport.as_rows``."""
        if not rows:
            self.console.print("[success]All topics line up.[/]")
            return

        table = Table(title="Topic check", border_style="border")
        table.add_column("Severity")
        table.add_column("Entity")
        table.add_column("Role")
        table.add_column("Topic", style="topic")
        table.add_column("Problem")
        for row in rows:
            style = "error" if row["severity"] == "error" else "warning"
            table.add_row(
                f"[{style}]{row['severity']}[/]",
                escape(row["entity"]),
                escape(row["role"]),
                escape(row["topic"]),
                escape(row["message"]),
            )
        self.console.print(table)
        if ok:
            self.console.print("[success]No errors.[/]")

    def display_error_with_suggestions(
        self, error_message: str, suggestions: list[str], title: str = "Error"
    ) -> None:
        """Display error with helpful suggestions."""
        error_content = [f"[error]{escape(error_message)}[/]"]

        if suggestions:
            error_content.append("")
            error_content.append("[warning]suggestions:[/]")
            for suggestion in suggestions:
                error_content.append(f"  {escape(suggestion)}")

        panel = Panel(
            "\n".join(error_content),
            title=f"[error]{title.lower()}[/]",
            border_style="border",
            padding=(1, 1),
        )
        self.console.print(panel)
