"""
Discovery writer port interface.

This module defines the interface for persisting discovery messages so
that any MQTT publisher (mosquitto_pub, a firmware build step, a bridge)
can send them.
"""

from pathlib import Path
from typing import Literal

from typing_extensions import Protocol

from ..domain.base import DiscoveryMessage

OutputFormat = Literal["files", "jsonl"]


class DiscoveryWriterPort(Protocol):
    """
    Interface for writing discovery messages.

    Implementations decide the on-disk layout for each output format but
    must never write outside the requested output location.
    """

    def write_messages(
        self,
        messages: list[DiscoveryMessage],
        output: Path,
        output_format: OutputFormat = "files",
    ) -> list[Path]:
        """
        Write discovery messages.

        Args:
            messages: Messages to write, in publish order
            output: Output directory ('files') or file ('jsonl')
            output_format: Layout of the written messages

        Returns:
            Paths that were (or, in dry-run mode, would be) written

        Raises:
            DiscoveryWriterError: If writing fails
        """
        ...
