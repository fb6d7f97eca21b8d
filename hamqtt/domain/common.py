"""
Building blocks shared by every discovery payload.

Home Assistant accepts abbreviated keys in discovery payloads
(``stat_t`` for ``state_topic`` and so on). Each field declares its
abbreviation as a serialization alias, so models can be built with the
long names and dumped with the short ones.
"""

from enum import Enum, IntEnum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator


def prune_payload(value: Any) -> Any:
    """Recursively drop ``None`` values and empty lists from a dumped payload."""
    if isinstance(value, dict):
        return {
            key: prune_payload(item)
            for key, item in value.items()
            if item is not None and item != []
        }
    if isinstance(value, list):
        return [prune_payload(item) for item in value if item is not None]
    return value


class DiscoveryModel(BaseModel):
    """Base model for anything that serializes into a discovery payload."""

    model_config = ConfigDict(
        populate_by_name=True,
        frozen=True,
        extra="forbid",
        coerce_numbers_to_str=True,
    )

    def payload(self) -> dict[str, Any]:
        """Return the abbreviated, JSON-ready representation."""
        return prune_payload(
            self.model_dump(by_alias=True, mode="json", exclude_none=True)
        )


class EntityCategory(str, Enum):
    """Category of an entity that is not a primary control or sensor."""

    CONFIG = "config"
    DIAGNOSTIC = "diagnostic"


class Qos(IntEnum):
    """MQTT quality of service levels."""

    AT_MOST_ONCE = 0
    AT_LEAST_ONCE = 1
    EXACTLY_ONCE = 2


class AvailabilityMode(str, Enum):
    """How several availability topics combine into one availability state."""

    ALL = "all"
    ANY = "any"
    LATEST = "latest"


class Origin(DiscoveryModel):
    """The application that supplies the discovered entities.

    Home Assistant logs this information to the core event log when an item
    is discovered or updated.
    """

    name: str = Field(..., min_length=1, description="Application name")
    sw_version: str | None = Field(
        None, serialization_alias="sw", description="Application version"
    )
    support_url: str | None = Field(
        None, serialization_alias="url", description="Support or homepage URL"
    )


class Device(DiscoveryModel):
    """Device registry information tying entities to one physical device."""

    name: str | None = Field(None, description="Name of the device")
    identifiers: list[str] = Field(
        default_factory=list,
        serialization_alias="ids",
        description="IDs that uniquely identify the device, e.g. a serial number",
    )
    connections: list[tuple[str, str]] = Field(
        default_factory=list,
        serialization_alias="cns",
        description="Connections as [connection_type, connection_identifier] pairs",
    )
    configuration_url: str | None = Field(None, serialization_alias="cu")
    manufacturer: str | None = Field(None, serialization_alias="mf")
    model: str | None = Field(None, serialization_alias="mdl")
    model_id: str | None = Field(None, serialization_alias="mdl_id")
    serial_number: str | None = Field(None, serialization_alias="sn")
    suggested_area: str | None = Field(None, serialization_alias="sa")
    sw_version: str | None = Field(None, serialization_alias="sw")
    hw_version: str | None = Field(None, serialization_alias="hw")
    via_device: str | None = Field(
        None, description="Identifier of a hub routing messages for this device"
    )

    model_config = ConfigDict(protected_namespaces=())

    @field_validator("identifiers", mode="before")
    @classmethod
    def wrap_single_identifier(cls, v: Any) -> Any:
        """Home Assistant accepts a bare string as a single identifier."""
        if isinstance(v, (str, int)):
            return [v]
        return v

    @model_validator(mode="after")
    def require_identity(self) -> "Device":
        """Home Assistant drops device info without an identifier or connection."""
        if not self.identifiers and not self.connections:
            raise ValueError("device needs at least one identifier or connection")
        return self


class AvailabilityCheck(DiscoveryModel):
    """One availability topic and the payloads that mark it online/offline."""

    topic: str = Field(..., min_length=1, serialization_alias="t")
    payload_available: str | None = Field(None, serialization_alias="pl_avail")
    payload_not_available: str | None = Field(
        None, serialization_alias="pl_not_avail"
    )
    value_template: str | None = Field(None, serialization_alias="val_tpl")


class Availability(DiscoveryModel):
    """
    Defines how Home Assistant decides whether an entity is available.

    Unlike the other building blocks this one is flattened into the owning
    entity payload: its keys sit next to ``stat_t`` and ``cmd_t`` rather than
    under a nested object.
    """

    mode: AvailabilityMode = Field(
        default=AvailabilityMode.ALL, serialization_alias="avty_mode"
    )
    checks: list[AvailabilityCheck] = Field(
        default_factory=list, serialization_alias="avty"
    )
    expire_after: int | None = Field(
        None,
        ge=0,
        serialization_alias="exp_aft",
        description="Seconds after which the state expires if not updated",
    )

    @classmethod
    def single_topic(cls, topic: str) -> "Availability":
        """Availability driven by a single topic with default payloads."""
        return cls(checks=[AvailabilityCheck(topic=topic)])

    @classmethod
    def topics(
        cls, *topics: str, mode: AvailabilityMode = AvailabilityMode.ALL
    ) -> "Availability":
        return cls(mode=mode, checks=[AvailabilityCheck(topic=t) for t in topics])

    def with_expire_after(self, seconds: int) -> "Availability":
        return self.model_validate({**self.model_dump(), "expire_after": seconds})

    def with_mode(self, mode: AvailabilityMode) -> "Availability":
        return self.model_copy(update={"mode": mode})

    def payload(self) -> dict[str, Any]:
        data: dict[str, Any] = {}
        if self.checks:
            data["avty_mode"] = self.mode.value
            data["avty"] = [check.payload() for check in self.checks]
        if self.expire_after is not None:
            data["exp_aft"] = self.expire_after
        return data
