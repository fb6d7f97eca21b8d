"""Main hamqtt configuration model."""

from typing import Any

from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    ValidationError,
    model_validator,
)

from ... import __version__
from ...domain.common import Availability, Device, Origin
from ...domain.cover import Cover
from ...domain.number import Number
from .discovery import DeviceTopicsConfig, DiscoveryConfig
from .ui import LoggingConfig, OutputConfig


def _default_origin() -> Origin:
    return Origin(name="hamqtt", sw_version=__version__)


class HAMqttConfig(BaseModel):
    """Main configuration model for hamqtt."""

    # Discovery publishing
    discovery: DiscoveryConfig = Field(
        default_factory=DiscoveryConfig, description="Discovery topic settings"
    )

    # Shared by every entity unless the entity overrides it
    origin: Origin = Field(
        default_factory=_default_origin,
        description="Application announced as the origin of the entities",
    )
    device: Device | None = Field(
        default=None,
        description="Device the entities belong to (needs identifiers or connections)",
    )
    availability: Availability = Field(
        default_factory=Availability,
        description="Default availability for entities that do not declare one",
    )

    # What the firmware actually does on the wire
    device_topics: DeviceTopicsConfig = Field(
        default_factory=DeviceTopicsConfig,
        description="Topics the device subscribes to and publishes on",
    )

    logging: LoggingConfig = Field(
        default_factory=LoggingConfig,
        description="Logging behavior configuration",
    )

    output: OutputConfig = Field(
        default_factory=OutputConfig,
        description="Export output configuration",
    )

    # Entity tables, e.g. [[number]] and [[cover]] in TOML
    number: list[dict[str, Any]] = Field(
        default_factory=list, description="Number entity definitions"
    )
    cover: list[dict[str, Any]] = Field(
        default_factory=list, description="Cover entity definitions"
    )

    model_config = ConfigDict(validate_assignment=True, extra="forbid")

    @model_validator(mode="after")
    def validate_entities(self) -> "HAMqttConfig":
        """Validate every entity table eagerly so bad configs fail at load time."""
        if self.discovery.device_based and not self.discovery.node_id:
            raise ValueError("discovery.device_based requires discovery.node_id")
        if self.device is None and (
            self.discovery.device_based
            or any("device" not in d for d in (*self.number, *self.cover))
        ):
            raise ValueError(
                "a [device] section with identifiers or connections is required"
            )
        self.build_entities()
        return self

    def build_entities(self) -> list[Number | Cover]:
        """Instantiate the configured entities with the shared defaults applied."""
        entities: list[Number | Cover] = []
        for entity_cls, definitions in ((Number, self.number), (Cover, self.cover)):
            for index, definition in enumerate(definitions):
                fields = {
                    "origin": self.origin,
                    "availability": self.availability,
                    **definition,
                }
                if self.device is not None:
                    fields.setdefault("device", self.device)
                try:
                    entities.append(entity_cls.model_validate(fields))
                except ValidationError as e:
                    raise ValueError(
                        f"{entity_cls.component}[{index}] is invalid: {e}"
                    ) from e
        return entities

    @property
    def entities(self) -> list[Number | Cover]:
        return self.build_entities()

    def get_nested_value(self, key: str, default=None):
        """Get configuration value using dot notation (e.g., 'discovery.prefix')."""
        keys = key.split(".")
        value = self.model_dump()

        for k in keys:
            if isinstance(value, dict) and k in value:
                value = value[k]
            else:
                return default

        return value
