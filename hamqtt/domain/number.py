"""
MQTT number entities.

A number entity lets Home Assistant set a value within a range. Home
Assistant publishes the chosen value on ``command_topic``; the device
subscribes to exactly that topic and reports the value back on
``state_topic``.
"""

from enum import Enum
from typing import ClassVar, Literal

from pydantic import Field, field_validator, model_validator

from .base import BaseEntity
from .units import UnitOfMeasurement

DEFAULT_MIN = 1.0
DEFAULT_MAX = 100.0
MIN_STEP = 0.001


class DisplayMode(str, Enum):
    """How the number is rendered in the UI."""

    AUTO = "auto"
    BOX = "box"
    SLIDER = "slider"


class NumberDeviceClass(str, Enum):
    """Device classes a number entity can declare."""

    APPARENT_POWER = "apparent_power"
    AQI = "aqi"
    ATMOSPHERIC_PRESSURE = "atmospheric_pressure"
    BATTERY = "battery"
    CARBON_DIOXIDE = "carbon_dioxide"
    CARBON_MONOXIDE = "carbon_monoxide"
    CURRENT = "current"
    DATA_RATE = "data_rate"
    DATA_SIZE = "data_size"
    DISTANCE = "distance"
    DURATION = "duration"
    ENERGY = "energy"
    ENERGY_STORAGE = "energy_storage"
    FREQUENCY = "frequency"
    GAS = "gas"
    HUMIDITY = "humidity"
    ILLUMINANCE = "illuminance"
    IRRADIANCE = "irradiance"
    MOISTURE = "moisture"
    MONETARY = "monetary"
    NITROGEN_DIOXIDE = "nitrogen_dioxide"
    NITROGEN_MONOXIDE = "nitrogen_monoxide"
    NITROUS_OXIDE = "nitrous_oxide"
    OZONE = "ozone"
    PH = "ph"
    PM1 = "pm1"
    PM10 = "pm10"
    PM25 = "pm25"
    POWER_FACTOR = "power_factor"
    POWER = "power"
    PRECIPITATION = "precipitation"
    PRECIPITATION_INTENSITY = "precipitation_intensity"
    PRESSURE = "pressure"
    REACTIVE_POWER = "reactive_power"
    SIGNAL_STRENGTH = "signal_strength"
    SOUND_PRESSURE = "sound_pressure"
    SPEED = "speed"
    SULPHUR_DIOXIDE = "sulphur_dioxide"
    TEMPERATURE = "temperature"
    VOLATILE_ORGANIC_COMPOUNDS = "volatile_organic_compounds"
    VOLATILE_ORGANIC_COMPOUNDS_PARTS = "volatile_organic_compounds_parts"
    VOLTAGE = "voltage"
    VOLUME = "volume"
    VOLUME_STORAGE = "volume_storage"
    WATER = "water"
    WEIGHT = "weight"
    WIND_DIRECTION = "wind_direction"
    WIND_SPEED = "wind_speed"


class Number(BaseEntity):
    """Discovery config for an MQTT ``number`` entity."""

    component: ClassVar[str] = "number"
    COMMAND_TOPIC_FIELDS: ClassVar[tuple[str, ...]] = ("command_topic",)
    STATE_TOPIC_FIELDS: ClassVar[tuple[str, ...]] = (
        "state_topic",
        "json_attributes_topic",
    )

    platform: Literal["number"] = "number"

    state_topic: str = Field(
        ...,
        min_length=1,
        serialization_alias="stat_t",
        description="Topic the device reports the current value on",
    )
    value_template: str | None = Field(None, serialization_alias="val_tpl")
    command_topic: str = Field(
        ...,
        min_length=1,
        serialization_alias="cmd_t",
        description="Topic Home Assistant publishes new values to",
    )
    command_template: str | None = Field(None, serialization_alias="cmd_tpl")
    device_class: NumberDeviceClass | None = Field(
        None, serialization_alias="dev_cla"
    )
    min: float | None = Field(None, description="Minimum value (default 1)")
    max: float | None = Field(None, description="Maximum value (default 100)")
    mode: DisplayMode | None = Field(None)
    payload_reset: str | None = Field(
        None,
        serialization_alias="pl_rst",
        description="Payload on state_topic that resets the state to unknown",
    )
    step: float | None = Field(None, description="Step value (default 1)")
    unit_of_measurement: UnitOfMeasurement | None = Field(
        None, serialization_alias="unit_of_meas"
    )

    @field_validator("step")
    @classmethod
    def validate_step(cls, v: float | None) -> float | None:
        if v is not None and v < MIN_STEP:
            raise ValueError(f"step must be at least {MIN_STEP}")
        return v

    @model_validator(mode="after")
    def validate_range(self) -> "Number":
        """Home Assistant rejects a range whose max is not above its min."""
        low = DEFAULT_MIN if self.min is None else self.min
        high = DEFAULT_MAX if self.max is None else self.max
        if high <= low:
            raise ValueError(f"max ({high}) must be greater than min ({low})")
        return self
