"""Discovery payload models for Home Assistant MQTT entities."""

from .base import BaseEntity, DiscoveryMessage
from .common import (
    Availability,
    AvailabilityCheck,
    AvailabilityMode,
    Device,
    EntityCategory,
    Origin,
    Qos,
)
from .cover import Cover, CoverDeviceClass
from .entity import DeviceDiscovery, Entity, parse_entity
from .errors import EntityError, HAMqttError, TopicError
from .number import DisplayMode, Number, NumberDeviceClass

__all__ = [
    "Availability",
    "AvailabilityCheck",
    "AvailabilityMode",
    "BaseEntity",
    "Cover",
    "CoverDeviceClass",
    "Device",
    "DeviceDiscovery",
    "DiscoveryMessage",
    "DisplayMode",
    "Entity",
    "EntityCategory",
    "EntityError",
    "HAMqttError",
    "Number",
    "NumberDeviceClass",
    "Origin",
    "Qos",
    "TopicError",
    "parse_entity",
]
