"""
Entity union and device-based discovery.

Home Assistant supports two discovery styles: one config message per
entity (``<prefix>/<component>/[<node_id>/]<object_id>/config``), or a
single message per device listing all of its components
(``<prefix>/device/<node_id>/config``).
"""

from typing import Annotated, Any

from pydantic import BaseModel, ConfigDict, Field, TypeAdapter

from .base import DiscoveryMessage
from .common import Device, Origin, Qos
from .cover import Cover
from .errors import EntityError, TopicError
from .number import Number
from .topics import DEFAULT_DISCOVERY_PREFIX, discovery_topic

Entity = Annotated[Number | Cover, Field(discriminator="platform")]

_entity_adapter: TypeAdapter[Number | Cover] = TypeAdapter(Entity)


def parse_entity(data: dict[str, Any]) -> Number | Cover:
    """Build an entity from a mapping carrying a ``platform`` key."""
    return _entity_adapter.validate_python(data)


class DeviceDiscovery(BaseModel):
    """All entities of one device, announced in a single discovery message."""

    node_id: str = Field(..., min_length=1, description="Device node id in the topic")
    device: Device
    origin: Origin
    components: list[Entity] = Field(default_factory=list)
    qos: Qos | None = None

    model_config = ConfigDict(frozen=True)

    def components_payload(self) -> dict[str, dict[str, Any]]:
        components: dict[str, dict[str, Any]] = {}
        for entity in self.components:
            object_id = entity.discovery_object_id()
            if object_id in components:
                raise EntityError(
                    f"Duplicate component {object_id!r} on device {self.node_id!r}"
                )
            payload = entity.payload()
            # Device and origin are shared at the top level of the message.
            payload.pop("dev", None)
            payload.pop("o", None)
            components[object_id] = {"p": entity.component, **payload}
        return components

    def payload(self) -> dict[str, Any]:
        data: dict[str, Any] = {
            "dev": self.device.payload(),
            "o": self.origin.payload(),
            "cmps": self.components_payload(),
        }
        if self.qos is not None:
            data["qos"] = int(self.qos)
        return data

    def discovery_message(
        self,
        prefix: str = DEFAULT_DISCOVERY_PREFIX,
        retain: bool = True,
        qos: Qos = Qos.AT_MOST_ONCE,
    ) -> DiscoveryMessage:
        try:
            topic = discovery_topic(prefix, "device", self.node_id)
        except TopicError as e:
            raise EntityError(f"Cannot announce device {self.node_id!r}: {e}") from e
        return DiscoveryMessage(topic=topic, payload=self.payload(), retain=retain, qos=qos)
