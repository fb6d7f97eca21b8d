"""
Writer adapter that exports discovery messages to disk.

Two layouts are supported:

- ``files``: one JSON document per message at ``<output>/<topic>.json``, so
  ``homeassistant/number/volume/config`` lands in
  ``<output>/homeassistant/number/volume/config.json``.
- ``jsonl``: a single file with one ``{"topic", "payload", "retain", "qos"}``
  record per line, in publish order.
"""

import json
import logging
from pathlib import Path

from ...domain.base import DiscoveryMessage
from ...domain.errors import HAMqttError
from ...ports.writer_port import OutputFormat


class DiscoveryWriterError(HAMqttError):
    """Exception raised when discovery messages cannot be written."""

    pass


class DiscoveryWriterAdapter:
    """
    Writer adapter implementing the DiscoveryWriterPort interface.

    Supports dry-run mode, in which target paths are computed and returned
    but nothing touches the filesystem.
    """

    def __init__(self, dry_run: bool = False, indent: int | None = 2) -> None:
        """
        Initialize the discovery writer.

        Args:
            dry_run: Whether to skip actual writing
            indent: JSON indentation for the 'files' layout
        """
        self.dry_run = dry_run
        self.indent = indent
        self.logger = logging.getLogger(__name__)

    def write_messages(
        self,
        messages: list[DiscoveryMessage],
        output: Path,
        output_format: OutputFormat = "files",
    ) -> list[Path]:
        if output_format == "files":
            return self._write_files(messages, Path(output))
        if output_format == "jsonl":
            return [self._write_jsonl(messages, Path(output))]
        raise DiscoveryWriterError(f"Unsupported output format: {output_format}")

    def target_path(self, output: Path, topic: str) -> Path:
        """Path a message with ``topic`` is written to under ``output``.

        Raises:
            DiscoveryWriterError: If the topic would escape the output directory
        """
        levels = topic.split("/")
        if any(level in ("", ".", "..") for level in levels):
            raise DiscoveryWriterError(
                f"Topic {topic!r} cannot be mapped to a file path"
            )
        path = output.joinpath(*levels[:-1], f"{levels[-1]}.json")
        try:
            path.resolve().relative_to(output.resolve())
        except ValueError as e:
            raise DiscoveryWriterError(
                f"Topic {topic!r} resolves outside {output}"
            ) from e
        return path

    def _write_files(self, messages: list[DiscoveryMessage], output: Path) -> list[Path]:
        written: list[Path] = []
        seen: set[Path] = set()
        for message in messages:
            path = self.target_path(output, message.topic)
            if path in seen:
                raise DiscoveryWriterError(
                    f"Two messages share the topic {message.topic!r}"
                )
            seen.add(path)

            if self.dry_run:
                self.logger.info(f"[dry-run] would write {path}")
            else:
                try:
                    path.parent.mkdir(parents=True, exist_ok=True)
                    path.write_text(
                        message.payload_json(indent=self.indent) + "\n",
                        encoding="utf-8",
                    )
                except OSError as e:
                    raise DiscoveryWriterError(f"Failed to write {path}: {e}") from e
                self.logger.debug(f"Wrote {path}")
            written.append(path)
        return written

    def _write_jsonl(self, messages: list[DiscoveryMessage], output: Path) -> Path:
        if output.is_dir():
            output = output / "discovery.jsonl"
        if self.dry_run:
            self.logger.info(
                f"[dry-run] would write {len(messages)} messages to {output}"
            )
            return output
        lines = [
            json.dumps(message.as_record(), ensure_ascii=False, separators=(",", ":"))
            for message in messages
        ]
        try:
            output.parent.mkdir(parents=True, exist_ok=True)
            output.write_text("".join(f"{line}\n" for line in lines), encoding="utf-8")
        except OSError as e:
            raise DiscoveryWriterError(f"Failed to write {output}: {e}") from e
        self.logger.debug(f"Wrote {len(lines)} messages to {output}")
        return output
