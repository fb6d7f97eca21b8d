"""Discovery publishing and device topic configuration models."""

from pydantic import BaseModel, ConfigDict, Field, field_validator

from ...domain.common import Qos
from ...domain.errors import TopicError
from ...domain.topics import (
    DEFAULT_DISCOVERY_PREFIX,
    validate_publish_topic,
    validate_subscribe_topic,
)


class DiscoveryConfig(BaseModel):
    """Where and how discovery messages are announced."""

    prefix: str = Field(
        default=DEFAULT_DISCOVERY_PREFIX,
        min_length=1,
        description="Discovery prefix Home Assistant listens on",
    )
    node_id: str | None = Field(
        default=None,
        description="Optional node id inserted between component and object id",
    )
    retain: bool = Field(
        default=True, description="Publish discovery messages with the retain flag"
    )
    qos: Qos = Field(default=Qos.AT_MOST_ONCE, description="QoS of discovery messages")
    device_based: bool = Field(
        default=False,
        description="Announce all entities in one device discovery message (needs node_id)",
    )

    # Environment overrides arrive as numbers when they look like one
    model_config = ConfigDict(coerce_numbers_to_str=True)

    @field_validator("prefix")
    @classmethod
    def validate_prefix(cls, v: str) -> str:
        """The prefix becomes part of a publish topic."""
        try:
            validate_publish_topic(v)
        except TopicError as e:
            raise ValueError(str(e)) from e
        if v.endswith("/"):
            raise ValueError("Discovery prefix must not end with '/'")
        return v


class DeviceTopicsConfig(BaseModel):
    """Topics the device firmware actually uses.

    When a list is non-empty, every entity topic of the matching direction
    must appear in it verbatim.
    """

    subscribes: list[str] = Field(
        default_factory=list,
        description="Topics the device subscribes to (Home Assistant publishes commands here)",
    )
    publishes: list[str] = Field(
        default_factory=list,
        description="Topics the device publishes state, position and availability on",
    )

    model_config = ConfigDict(coerce_numbers_to_str=True)

    @field_validator("subscribes")
    @classmethod
    def validate_subscribes(cls, v: list[str]) -> list[str]:
        for topic in v:
            try:
                validate_subscribe_topic(topic)
            except TopicError as e:
                raise ValueError(str(e)) from e
        return v

    @field_validator("publishes")
    @classmethod
    def validate_publishes(cls, v: list[str]) -> list[str]:
        for topic in v:
            try:
                validate_publish_topic(topic)
            except TopicError as e:
                raise ValueError(str(e)) from e
        return v
