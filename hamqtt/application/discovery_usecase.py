"""
Discovery use case.

Turns a loaded configuration into discovery messages, checks that the
topics Home Assistant will use line up with the topics the device actually
uses, and exports the messages through a writer port.

MQTT delivers a message only to subscriptions whose topic matches exactly,
so a device listening on ``living-room/volume/set/`` never sees commands
published to ``living-room/volume/set``. The check reports such mismatches
(with a hint when the difference is a near miss) instead of normalizing
anything.
"""

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Callable, Literal

from ..config.models import HAMqttConfig
from ..domain.base import DiscoveryMessage
from ..domain.cover import Cover
from ..domain.entity import DeviceDiscovery
from ..domain.errors import EntityError, HAMqttError, TopicError
from ..domain.number import Number
from ..domain.topics import (
    filter_matches,
    near_miss,
    uses_topic_base,
    validate_publish_topic,
    validate_subscribe_topic,
)
from ..ports.writer_port import DiscoveryWriterPort, OutputFormat

logger = logging.getLogger(__name__)

Severity = Literal["error", "warning"]


class DiscoveryError(HAMqttError):
    """Raised when discovery messages cannot be built or exported."""

    pass


@dataclass(frozen=True)
class TopicIssue:
    """One finding of the topic check."""

    severity: Severity
    entity: str
    role: str
    topic: str
    message: str


@dataclass
class TopicReport:
    """Result of checking every entity topic."""

    issues: list[TopicIssue] = field(default_factory=list)
    checked_topics: int = 0

    @property
    def errors(self) -> list[TopicIssue]:
        return [issue for issue in self.issues if issue.severity == "error"]

    @property
    def warnings(self) -> list[TopicIssue]:
        return [issue for issue in self.issues if issue.severity == "warning"]

    @property
    def ok(self) -> bool:
        return not self.errors

    def add(
        self, severity: Severity, entity: str, role: str, topic: str, message: str
    ) -> None:
        self.issues.append(TopicIssue(severity, entity, role, topic, message))

    def as_rows(self) -> list[dict[str, str]]:
        return [
            {
                "severity": issue.severity,
                "entity": issue.entity,
                "role": issue.role,
                "topic": issue.topic,
                "message": issue.message,
            }
            for issue in self.issues
        ]


class DiscoveryUseCase:
    """Builds, checks and exports discovery messages for a configuration."""

    def __init__(
        self,
        config: HAMqttConfig,
        writer: DiscoveryWriterPort | None = None,
    ) -> None:
        self.config = config
        self.writer = writer

    def entities(self, names: list[str] | None = None) -> list[Number | Cover]:
        """Configured entities, optionally restricted to the given object ids.

        Raises:
            DiscoveryError: If a requested name matches no entity
        """
        entities = self.config.entities
        if not names:
            return entities

        try:
            by_id = {entity.discovery_object_id(): entity for entity in entities}
        except EntityError as e:
            raise DiscoveryError(str(e)) from e
        unknown = [name for name in names if name not in by_id]
        if unknown:
            raise DiscoveryError(
                f"Unknown entities: {', '.join(unknown)} "
                f"(known: {', '.join(sorted(by_id)) or 'none'})"
            )
        return [by_id[name] for name in names]

    def build_messages(self, names: list[str] | None = None) -> list[DiscoveryMessage]:
        """One message per entity, or a single device message when device_based."""
        discovery = self.config.discovery
        entities = self.entities(names)

        try:
            if discovery.device_based:
                bundle = DeviceDiscovery(
                    node_id=discovery.node_id,
                    device=self.config.device,
                    origin=self.config.origin,
                    components=entities,
                )
                messages = [
                    bundle.discovery_message(
                        discovery.prefix, retain=discovery.retain, qos=discovery.qos
                    )
                ]
            else:
                messages = [
                    entity.discovery_message(
                        discovery.prefix,
                        discovery.node_id,
                        retain=discovery.retain,
                        qos=discovery.qos,
                    )
                    for entity in entities
                ]
        except EntityError as e:
            raise DiscoveryError(str(e)) from e

        logger.debug(f"Built {len(messages)} discovery message(s)")
        return messages

    def check(self) -> TopicReport:
        """Check entity topics against each other and against the device's topics."""
        report = TopicReport()
        subscribes = self.config.device_topics.subscribes
        publishes = self.config.device_topics.publishes
        unique_ids: dict[str, str] = {}
        discovery_topics: dict[str, str] = {}

        for entity in self.config.entities:
            label = entity.label()
            self._check_unique_id(entity, label, unique_ids, report)
            self._check_discovery_topic(entity, label, discovery_topics, report)

            for role, raw in entity.raw_topics().items():
                if uses_topic_base(raw) and not entity.topic_prefix:
                    report.add(
                        "warning",
                        label,
                        role,
                        raw,
                        "uses '~' but the entity has no topic_prefix",
                    )

            # Home Assistant publishes commands, so those must be plain topics;
            # it subscribes to state topics, which may be filters.
            for role, topic in entity.command_topics().items():
                report.checked_topics += 1
                valid = self._check_syntax(
                    label, role, topic, validate_publish_topic, report
                )
                if valid and subscribes:
                    self._check_listed(
                        label,
                        role,
                        topic,
                        subscribes,
                        "subscribes to",
                        report,
                        lambda candidate: filter_matches(candidate, topic),
                    )

            for role, topic in entity.state_topics().items():
                report.checked_topics += 1
                valid = self._check_syntax(
                    label, role, topic, validate_subscribe_topic, report
                )
                if valid and publishes:
                    self._check_listed(
                        label,
                        role,
                        topic,
                        publishes,
                        "publishes on",
                        report,
                        lambda candidate: filter_matches(topic, candidate),
                    )

        logger.info(
            f"Checked {report.checked_topics} topic(s): "
            f"{len(report.errors)} error(s), {len(report.warnings)} warning(s)"
        )
        return report

    def export(
        self,
        output: Path,
        output_format: OutputFormat = "files",
        names: list[str] | None = None,
    ) -> list[Path]:
        """Write messages through the configured writer.

        Raises:
            DiscoveryError: If no writer is configured
        """
        if self.writer is None:
            raise DiscoveryError("No writer configured for export")
        messages = self.build_messages(names)
        paths = self.writer.write_messages(messages, output, output_format)
        logger.info(f"Exported {len(messages)} discovery message(s) to {output}")
        return paths

    @staticmethod
    def _check_syntax(
        label: str,
        role: str,
        topic: str,
        validator: Callable[[str], str],
        report: TopicReport,
    ) -> bool:
        try:
            validator(topic)
        except TopicError as e:
            report.add("error", label, role, topic, str(e))
            return False
        return True

    @staticmethod
    def _check_listed(
        label: str,
        role: str,
        topic: str,
        device_topics: list[str],
        verb: str,
        report: TopicReport,
        delivered: Callable[[str], bool],
    ) -> None:
        if any(delivered(candidate) for candidate in device_topics):
            return
        message = f"device never {verb} this topic"
        for candidate in device_topics:
            hint = near_miss(candidate, topic)
            if hint:
                message += f"; closest is {candidate!r}: {hint}"
                break
        report.add("error", label, role, topic, message)

    @staticmethod
    def _check_unique_id(
        entity: Number | Cover,
        label: str,
        seen: dict[str, str],
        report: TopicReport,
    ) -> None:
        if entity.unique_id is None:
            return
        if entity.unique_id in seen:
            report.add(
                "error",
                label,
                "unique_id",
                entity.unique_id,
                f"unique_id already used by {seen[entity.unique_id]!r}",
            )
        else:
            seen[entity.unique_id] = label

    def _check_discovery_topic(
        self,
        entity: Number | Cover,
        label: str,
        seen: dict[str, str],
        report: TopicReport,
    ) -> None:
        discovery = self.config.discovery
        try:
            topic = entity.discovery_message(discovery.prefix, discovery.node_id).topic
            if discovery.device_based:
                # Components share one message, keyed by object id
                topic = f"{discovery.node_id}/{entity.discovery_object_id()}"
        except EntityError as e:
            report.add("error", label, "discovery", "", str(e))
            return
        if topic in seen:
            report.add(
                "error",
                label,
                "discovery",
                topic,
                f"discovery topic already used by {seen[topic]!r}",
            )
        else:
            seen[topic] = label
