"""
Fields and behaviour common to every discoverable entity.

Concrete platforms (number, cover) subclass :class:`BaseEntity`, add their
own fields and list which of their topics carry commands and which carry
state.
"""

import json
from typing import Any, ClassVar

from pydantic import BaseModel, ConfigDict, Field

from .common import (
    Availability,
    Device,
    DiscoveryModel,
    EntityCategory,
    Origin,
    Qos,
    prune_payload,
)
from .errors import EntityError, TopicError
from .topics import (
    DEFAULT_DISCOVERY_PREFIX,
    discovery_topic,
    expand_topic,
    slugify,
)


class DiscoveryMessage(BaseModel):
    """A retained config message announcing one entity (or device) to Home Assistant."""

    topic: str = Field(..., description="Discovery config topic")
    payload: dict[str, Any] = Field(..., description="Abbreviated discovery payload")
    retain: bool = Field(default=True, description="Publish with the retain flag")
    qos: Qos = Field(default=Qos.AT_MOST_ONCE, description="Publish QoS")

    model_config = ConfigDict(frozen=True)

    def payload_json(self, indent: int | None = None) -> str:
        """Serialize the payload, keeping key order and non-ASCII units intact."""
        separators = (",", ":") if indent is None else None
        return json.dumps(
            self.payload, indent=indent, separators=separators, ensure_ascii=False
        )

    def as_record(self) -> dict[str, Any]:
        return {
            "topic": self.topic,
            "payload": self.payload,
            "retain": self.retain,
            "qos": int(self.qos),
        }


class BaseEntity(DiscoveryModel):
    """Discovery fields shared by all entity platforms."""

    component: ClassVar[str] = ""
    COMMAND_TOPIC_FIELDS: ClassVar[tuple[str, ...]] = ()
    STATE_TOPIC_FIELDS: ClassVar[tuple[str, ...]] = ("json_attributes_topic",)

    topic_prefix: str | None = Field(
        None,
        serialization_alias="~",
        description="Replaces '~' at the start or end of any topic attribute",
    )
    origin: Origin = Field(..., serialization_alias="o")
    device: Device = Field(..., serialization_alias="dev")
    availability: Availability = Field(default_factory=Availability)
    entity_category: EntityCategory | None = Field(None, serialization_alias="ent_cat")
    icon: str | None = Field(
        None, serialization_alias="ic", description="Icon, e.g. 'mdi:home'"
    )
    json_attributes_topic: str | None = Field(None, serialization_alias="json_attr_t")
    json_attributes_template: str | None = Field(
        None, serialization_alias="json_attr_tpl"
    )
    object_id: str | None = Field(
        None,
        serialization_alias="obj_id",
        description="Used instead of name for automatic generation of entity_id",
    )
    unique_id: str | None = Field(None, serialization_alias="uniq_id")
    enabled_by_default: bool | None = Field(None, serialization_alias="en")
    name: str | None = Field(None)
    encoding: str | None = Field(None, serialization_alias="e")
    qos: Qos | None = Field(None)
    retain: bool | None = Field(None, serialization_alias="ret")
    optimistic: bool | None = Field(None, serialization_alias="opt")

    def payload(self) -> dict[str, Any]:
        data = self.model_dump(
            by_alias=True,
            mode="json",
            exclude_none=True,
            exclude={"platform", "availability"},
        )
        data.update(self.availability.payload())
        return prune_payload(data)

    def raw_topics(self) -> dict[str, str]:
        """Topic attributes as configured, before '~' expansion."""
        topics = {
            role: getattr(self, role)
            for role in (*self.COMMAND_TOPIC_FIELDS, *self.STATE_TOPIC_FIELDS)
            if getattr(self, role) is not None
        }
        for index, check in enumerate(self.availability.checks):
            topics[f"availability[{index}]"] = check.topic
        return topics

    def expanded_topics(self) -> dict[str, str]:
        """Every topic attribute, keyed by role, with '~' expanded."""
        return {
            role: expand_topic(topic, self.topic_prefix)
            for role, topic in self.raw_topics().items()
        }

    def command_topics(self) -> dict[str, str]:
        """Topics Home Assistant publishes to; the device must subscribe to them."""
        return {
            role: topic
            for role, topic in self.expanded_topics().items()
            if role in self.COMMAND_TOPIC_FIELDS
        }

    def state_topics(self) -> dict[str, str]:
        """Topics Home Assistant subscribes to; the device must publish on them."""
        return {
            role: topic
            for role, topic in self.expanded_topics().items()
            if role not in self.COMMAND_TOPIC_FIELDS
        }

    def label(self) -> str:
        return self.object_id or self.unique_id or self.name or self.component

    def discovery_object_id(self) -> str:
        """Object id used in the discovery topic."""
        if self.object_id:
            return self.object_id
        candidate = slugify(self.unique_id or self.name or "")
        if not candidate:
            raise EntityError(
                f"{self.component} entity needs an object_id, unique_id or name "
                "to be discoverable"
            )
        return candidate

    def discovery_message(
        self,
        prefix: str = DEFAULT_DISCOVERY_PREFIX,
        node_id: str | None = None,
        retain: bool = True,
        qos: Qos = Qos.AT_MOST_ONCE,
    ) -> DiscoveryMessage:
        try:
            topic = discovery_topic(
                prefix, self.component, self.discovery_object_id(), node_id
            )
        except TopicError as e:
            raise EntityError(f"Cannot announce {self.label()!r}: {e}") from e
        return DiscoveryMessage(topic=topic, payload=self.payload(), retain=retain, qos=qos)
