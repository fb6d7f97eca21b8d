"""
MQTT cover entities (blinds, roller shutters, garage doors, ...).

A cover reports its state (``open``, ``opening``, ``closed``, ``closing``,
``stopped``) on ``state_topic`` and/or its position on ``position_topic``.
Without either it runs in optimistic mode. Tilt is controlled separately
through ``tilt_command_topic`` and reported on ``tilt_status_topic``.
"""

from enum import Enum
from typing import ClassVar, Literal

from pydantic import Field, model_validator

from .base import BaseEntity


class CoverDeviceClass(str, Enum):
    AWNING = "awning"
    BLIND = "blind"
    CURTAIN = "curtain"
    DAMPER = "damper"
    DOOR = "door"
    GARAGE = "garage"
    GATE = "gate"
    SHADE = "shade"
    SHUTTER = "shutter"
    WINDOW = "window"


# (option, option it depends on)
_REQUIRED_TOGETHER = (
    ("set_position_topic", "position_topic"),
    ("value_template", "state_topic"),
    ("position_template", "position_topic"),
    ("set_position_template", "set_position_topic"),
    ("tilt_command_template", "tilt_command_topic"),
    ("tilt_status_template", "tilt_status_topic"),
)


class Cover(BaseEntity):
    """Discovery config for an MQTT ``cover`` entity."""

    component: ClassVar[str] = "cover"
    COMMAND_TOPIC_FIELDS: ClassVar[tuple[str, ...]] = (
        "command_topic",
        "set_position_topic",
        "tilt_command_topic",
    )
    STATE_TOPIC_FIELDS: ClassVar[tuple[str, ...]] = (
        "state_topic",
        "position_topic",
        "tilt_status_topic",
        "json_attributes_topic",
    )

    platform: Literal["cover"] = "cover"

    command_topic: str | None = Field(None, serialization_alias="cmd_t")
    device_class: CoverDeviceClass | None = Field(None, serialization_alias="dev_cla")

    payload_close: str | None = Field(None, serialization_alias="pl_cls")
    payload_open: str | None = Field(None, serialization_alias="pl_open")
    payload_stop: str | None = Field(None, serialization_alias="pl_stop")

    position_closed: int | None = Field(None, serialization_alias="pos_clsd")
    position_open: int | None = Field(None, serialization_alias="pos_open")
    position_template: str | None = Field(None, serialization_alias="pos_tpl")
    position_topic: str | None = Field(None, serialization_alias="pos_t")
    set_position_template: str | None = Field(None, serialization_alias="set_pos_tpl")
    set_position_topic: str | None = Field(None, serialization_alias="set_pos_t")

    state_closed: str | None = Field(None, serialization_alias="stat_clsd")
    state_closing: str | None = Field(None, serialization_alias="stat_closing")
    state_open: str | None = Field(None, serialization_alias="stat_open")
    state_opening: str | None = Field(None, serialization_alias="stat_opening")
    state_stopped: str | None = Field(None, serialization_alias="stat_stopped")
    state_topic: str | None = Field(None, serialization_alias="stat_t")

    tilt_closed_value: int | None = Field(None, serialization_alias="tilt_clsd_val")
    tilt_command_template: str | None = Field(None, serialization_alias="tilt_cmd_tpl")
    tilt_command_topic: str | None = Field(None, serialization_alias="tilt_cmd_t")
    tilt_max: int | None = Field(None)
    tilt_min: int | None = Field(None)
    tilt_opened_value: int | None = Field(None, serialization_alias="tilt_opnd_val")
    tilt_optimistic: bool | None = Field(None, serialization_alias="tilt_opt")
    tilt_status_template: str | None = Field(
        None, serialization_alias="tilt_status_tpl"
    )
    tilt_status_topic: str | None = Field(None, serialization_alias="tilt_status_t")

    value_template: str | None = Field(None, serialization_alias="val_tpl")

    @model_validator(mode="after")
    def validate_options(self) -> "Cover":
        """Templates and set-topics are useless without the topic they act on."""
        for option, dependency in _REQUIRED_TOGETHER:
            if getattr(self, option) is not None and getattr(self, dependency) is None:
                raise ValueError(f"'{option}' must be set together with '{dependency}'")
        if (
            self.position_open is not None
            and self.position_closed is not None
            and self.position_open == self.position_closed
        ):
            raise ValueError("position_open and position_closed must differ")
        return self

    def is_optimistic(self) -> bool:
        """Whether Home Assistant will assume state changes immediately."""
        if self.optimistic is not None:
            return self.optimistic
        return self.state_topic is None and self.position_topic is None
