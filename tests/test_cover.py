"""Tests for the MQTT cover discovery model."""

import pytest
from pydantic import ValidationError

from hamqtt.domain.cover import Cover, CoverDeviceClass


class TestCoverSerialization:
    """Test abbreviated payload generation."""

    def test_full_cover_payload(self, entity_base):
        cover = Cover(
            **entity_base,
            topic_prefix="living-room/blind",
            unique_id="blind-1",
            device_class=CoverDeviceClass.BLIND,
            command_topic="~/set",
            state_topic="~/state",
            value_template="{{ value_json.state }}",
            position_topic="~/position",
            set_position_topic="~/position/set",
            position_open=100,
            position_closed=0,
            payload_open="OPEN",
            payload_close="CLOSE",
            payload_stop=None,
            state_opening="opening",
            tilt_command_topic="~/tilt/set",
            tilt_status_topic="~/tilt",
            tilt_min=0,
            tilt_max=90,
        )

        payload = cover.payload()
        assert payload["~"] == "living-room/blind"
        assert payload["uniq_id"] == "blind-1"
        assert payload["dev_cla"] == "blind"
        assert payload["cmd_t"] == "~/set"
        assert payload["stat_t"] == "~/state"
        assert payload["val_tpl"] == "{{ value_json.state }}"
        assert payload["pos_t"] == "~/position"
        assert payload["set_pos_t"] == "~/position/set"
        assert payload["pos_open"] == 100
        assert payload["pos_clsd"] == 0
        assert payload["pl_open"] == "OPEN"
        assert payload["pl_cls"] == "CLOSE"
        assert payload["stat_opening"] == "opening"
        assert payload["tilt_cmd_t"] == "~/tilt/set"
        assert payload["tilt_status_t"] == "~/tilt"
        assert payload["tilt_min"] == 0
        assert payload["tilt_max"] == 90
        assert "pl_stop" not in payload

    def test_minimal_cover(self, entity_base):
        """A cover with no topics at all is valid and fully optimistic."""
        cover = Cover(**entity_base, name="Garage")
        assert cover.payload() == {
            "o": {"name": "application name"},
            "dev": {"name": "device name", "ids": ["device-id"]},
            "name": "Garage",
        }
        assert cover.is_optimistic()


class TestCoverValidation:
    """Test options that only make sense together."""

    @pytest.mark.parametrize(
        "option,dependency",
        [
            ("set_position_topic", "position_topic"),
            ("value_template", "state_topic"),
            ("position_template", "position_topic"),
            ("tilt_command_template", "tilt_command_topic"),
            ("tilt_status_template", "tilt_status_topic"),
        ],
    )
    def test_option_requires_dependency(self, entity_base, option, dependency):
        with pytest.raises(ValidationError, match=f"'{option}' must be set together"):
            Cover(**entity_base, **{option: "x"})

    def test_set_position_template_requires_set_position_topic(self, entity_base):
        with pytest.raises(ValidationError, match="set_position_template"):
            Cover(
                **entity_base,
                position_topic="pos",
                set_position_template="{{ position }}",
            )

    def test_open_and_closed_positions_must_differ(self, entity_base):
        with pytest.raises(ValidationError, match="must differ"):
            Cover(**entity_base, position_open=50, position_closed=50)

    def test_unknown_device_class_rejected(self, entity_base):
        with pytest.raises(ValidationError):
            Cover(**entity_base, device_class="trapdoor")


class TestCoverTopics:
    """Test topic role classification."""

    def test_roles(self, entity_base):
        cover = Cover(
            **entity_base,
            topic_prefix="blind",
            command_topic="~/set",
            state_topic="~/state",
            position_topic="~/position",
            set_position_topic="~/position/set",
        )

        assert cover.command_topics() == {
            "command_topic": "blind/set",
            "set_position_topic": "blind/position/set",
        }
        assert cover.state_topics() == {
            "state_topic": "blind/state",
            "position_topic": "blind/position",
        }

    def test_optimistic_flag_overrides_inference(self, entity_base):
        cover = Cover(**entity_base, state_topic="s", optimistic=True)
        assert cover.is_optimistic()

    def test_state_topic_disables_optimistic(self, entity_base):
        cover = Cover(**entity_base, state_topic="s")
        assert not cover.is_optimistic()
