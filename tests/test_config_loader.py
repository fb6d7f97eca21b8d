"""
Tests for configuration loading from TOML, YAML, environment and CLI overrides.
"""

import os
import tomllib
from pathlib import Path
from unittest.mock import patch

import pytest

from hamqtt.config.loader import ConfigLoader, ConfigurationError, load_config
from hamqtt.config.models import HAMqttConfig
from hamqtt.domain.cover import Cover
from hamqtt.domain.errors import HAMqttError
from hamqtt.domain.number import Number


TOML_CONFIG = """
[discovery]
prefix = "ha"
node_id = "living_room"

[device]
name = "Controller"
identifiers = "controller-1"

[[number]]
object_id = "volume"
state_topic = "living-room/volume"
command_topic = "living-room/volume/set"
min = 0
max = 11

[[cover]]
object_id = "blind"
command_topic = "living-room/blind/set"
"""

YAML_CONFIG = """
discovery:
  prefix: ha
device:
  name: Controller
  identifiers: controller-1
number:
  - object_id: volume
    state_topic: living-room/volume
    command_topic: living-room/volume/set
"""


class TestConfigFiles:
    """Test loading configuration files."""

    def test_load_toml(self, tmp_path):
        config_file = tmp_path / "hamqtt.toml"
        config_file.write_text(TOML_CONFIG)

        config = ConfigLoader(config_file).load_config()

        assert config.discovery.prefix == "ha"
        assert config.discovery.node_id == "living_room"
        assert config.device.identifiers == ["controller-1"]
        number, cover = config.entities
        assert isinstance(number, Number)
        assert number.max == 11
        assert number.device.name == "Controller"
        assert isinstance(cover, Cover)

    def test_load_yaml(self, tmp_path):
        config_file = tmp_path / "hamqtt.yaml"
        config_file.write_text(YAML_CONFIG)

        config = ConfigLoader(config_file).load_config()

        assert config.discovery.prefix == "ha"
        assert [e.object_id for e in config.entities] == ["volume"]

    def test_defaults_applied_to_entities(self, tmp_path):
        config_file = tmp_path / "hamqtt.toml"
        config_file.write_text(TOML_CONFIG)

        number = ConfigLoader(config_file).load_config().entities[0]

        assert number.origin.name == "hamqtt"
        assert number.origin.sw_version is not None

    def test_missing_explicit_file(self, tmp_path):
        with pytest.raises(ConfigurationError, match="does not exist"):
            ConfigLoader(tmp_path / "missing.toml").load_config()

    def test_unknown_suffix(self, tmp_path):
        config_file = tmp_path / "hamqtt.ini"
        config_file.write_text("[discovery]\n")
        with pytest.raises(ConfigurationError, match="Unknown configuration file type"):
            ConfigLoader(config_file).load_config()

    def test_invalid_toml(self, tmp_path):
        config_file = tmp_path / "hamqtt.toml"
        config_file.write_text("[discovery\nprefix = ")
        with pytest.raises(ConfigurationError, match="Invalid TOML"):
            ConfigLoader(config_file).load_config()

    def test_yaml_must_be_mapping(self, tmp_path):
        config_file = tmp_path / "hamqtt.yml"
        config_file.write_text("- just\n- a list\n")
        with pytest.raises(ConfigurationError, match="must contain a mapping"):
            ConfigLoader(config_file).load_config()

    def test_empty_file_uses_defaults(self, tmp_path):
        config_file = tmp_path / "hamqtt.toml"
        config_file.write_text("")
        config = ConfigLoader(config_file).load_config()
        assert config.discovery.prefix == "homeassistant"
        assert config.entities == []

    def test_default_file_discovered_in_cwd(self, tmp_path, monkeypatch):
        (tmp_path / ".hamqtt.toml").write_text('[discovery]\nprefix = "found"\n')
        monkeypatch.chdir(tmp_path)
        assert ConfigLoader().load_config().discovery.prefix == "found"

    def test_no_file_uses_defaults(self, tmp_path, monkeypatch):
        monkeypatch.chdir(tmp_path)
        config = ConfigLoader().load_config()
        assert config == HAMqttConfig()

    def test_config_is_cached(self, tmp_path):
        config_file = tmp_path / "hamqtt.toml"
        config_file.write_text(TOML_CONFIG)
        loader = ConfigLoader(config_file)

        first = loader.load_config()
        config_file.write_text('[discovery]\nprefix = "changed"\n')

        assert loader.load_config() is first
        assert loader.load_config(reload=True).discovery.prefix == "changed"


class TestConfigValidation:
    """Test validation errors surface as ConfigurationError."""

    def test_invalid_entity_reports_index(self, tmp_path):
        config_file = tmp_path / "hamqtt.toml"
        config_file.write_text(
            '[device]\nidentifiers = "d"\n'
            '[[number]]\nstate_topic = "s"\ncommand_topic = "c"\n'
            '[[number]]\nstate_topic = "s"\ncommand_topic = "c"\nstep = 0\n'
        )
        with pytest.raises(ConfigurationError, match=r"number\[1\] is invalid"):
            ConfigLoader(config_file).load_config()

    def test_unknown_section_rejected(self, tmp_path):
        config_file = tmp_path / "hamqtt.toml"
        config_file.write_text("[mqtt]\nhost = \"localhost\"\n")
        with pytest.raises(ConfigurationError, match="validation failed"):
            ConfigLoader(config_file).load_config()

    def test_device_based_requires_node_id(self):
        with pytest.raises(ConfigurationError, match="requires discovery.node_id"):
            ConfigLoader().validate_config({"discovery": {"device_based": True}})

    def test_entities_require_device(self):
        with pytest.raises(ConfigurationError, match=r"\[device\] section"):
            ConfigLoader().validate_config(
                {"number": [{"state_topic": "s", "command_topic": "c"}]}
            )

    def test_device_based_requires_device(self):
        with pytest.raises(ConfigurationError, match=r"\[device\] section"):
            ConfigLoader().validate_config(
                {"discovery": {"device_based": True, "node_id": "n"}}
            )

    def test_device_section_without_identity_rejected(self):
        with pytest.raises(ConfigurationError, match="at least one identifier"):
            ConfigLoader().validate_config({"device": {"name": "Controller"}})

    def test_entity_may_carry_its_own_device(self):
        ConfigLoader().validate_config(
            {
                "number": [
                    {
                        "state_topic": "s",
                        "command_topic": "c",
                        "device": {"identifiers": ["own"]},
                    }
                ]
            }
        )

    def test_prefix_trailing_slash_rejected(self):
        with pytest.raises(ConfigurationError, match="must not end with '/'"):
            ConfigLoader().validate_config({"discovery": {"prefix": "homeassistant/"}})

    def test_invalid_subscribe_filter_rejected(self):
        with pytest.raises(ConfigurationError, match="whole level"):
            ConfigLoader().validate_config(
                {"device_topics": {"subscribes": ["living-room/volume+"]}}
            )

    def test_wildcard_publish_topic_rejected(self):
        with pytest.raises(ConfigurationError, match="Wildcards"):
            ConfigLoader().validate_config(
                {"device_topics": {"publishes": ["living-room/#"]}}
            )

    def test_chained_from_validation_error(self):
        with pytest.raises(ConfigurationError) as exc_info:
            ConfigLoader().validate_config({"output": {"format": "xml"}})
        assert exc_info.value.__cause__ is not None

    def test_configuration_error_is_a_package_error(self, tmp_path):
        with pytest.raises(HAMqttError):
            ConfigLoader(tmp_path / "missing.toml").load_config()


class TestOverrides:
    """Test environment and CLI overrides."""

    def test_env_overrides_file(self, tmp_path):
        config_file = tmp_path / "hamqtt.toml"
        config_file.write_text(TOML_CONFIG)

        with patch.dict(
            os.environ,
            {"HAMQTT_DISCOVERY__PREFIX": "from-env", "HAMQTT_DISCOVERY__RETAIN": "false"},
        ):
            config = ConfigLoader(config_file).load_config()

        assert config.discovery.prefix == "from-env"
        assert config.discovery.retain is False
        assert config.discovery.node_id == "living_room"

    def test_numeric_env_values_for_string_fields(self, tmp_path):
        """Env values that look like numbers still load into string fields."""
        config_file = tmp_path / "hamqtt.toml"
        config_file.write_text(TOML_CONFIG)

        with patch.dict(
            os.environ,
            {
                "HAMQTT_DISCOVERY__NODE_ID": "42",
                "HAMQTT_DEVICE__NAME": "2024",
                "HAMQTT_OUTPUT__DIRECTORY": "7",
            },
        ):
            config = ConfigLoader(config_file).load_config()

        assert config.discovery.node_id == "42"
        assert config.device.name == "2024"
        assert config.output.directory == "7"
        assert config.entities[0].discovery_message("ha", "42").topic == (
            "ha/number/42/volume/config"
        )

    def test_numeric_entity_payloads_from_yaml(self, tmp_path):
        config_file = tmp_path / "hamqtt.yaml"
        config_file.write_text(YAML_CONFIG + "    payload_reset: 0\n")
        number = ConfigLoader(config_file).load_config().entities[0]
        assert number.payload_reset == "0"

    def test_reserved_env_keys_ignored(self, tmp_path):
        config_file = tmp_path / "hamqtt.toml"
        config_file.write_text(TOML_CONFIG)
        with patch.dict(os.environ, {"HAMQTT_QUIET": "1", "HAMQTT_UI": "minimal"}):
            config = ConfigLoader(config_file).load_config()
        assert config.discovery.prefix == "ha"

    def test_cli_overrides_env(self, tmp_path):
        config_file = tmp_path / "hamqtt.toml"
        config_file.write_text(TOML_CONFIG)

        with patch.dict(os.environ, {"HAMQTT_DISCOVERY__PREFIX": "from-env"}):
            config = ConfigLoader(config_file).load_config(
                cli_overrides={"discovery": {"prefix": "from-cli"}}
            )

        assert config.discovery.prefix == "from-cli"

    @pytest.mark.parametrize(
        "raw,expected",
        [
            ("true", True),
            ("off", False),
            ("2", 2),
            ("0.5", 0.5),
            ("a, b", ["a", "b"]),
            ("homeassistant", "homeassistant"),
        ],
    )
    def test_parse_env_value(self, raw, expected):
        assert ConfigLoader()._parse_env_value(raw) == expected

    def test_module_level_load_config(self, tmp_path):
        config_file = tmp_path / "hamqtt.toml"
        config_file.write_text(TOML_CONFIG)
        config = load_config(config_file, cli_overrides={"output": {"indent": 4}})
        assert config.output.indent == 4


class TestSampleConfig:
    """Test the starter configuration."""

    def test_sample_is_valid(self, sample_config_dict):
        ConfigLoader().validate_config(sample_config_dict)

    def test_create_sample(self, sample_config_file):
        with open(sample_config_file, "rb") as f:
            content = tomllib.load(f)
        assert content["number"][0]["object_id"] == "living_room_volume"
        config = ConfigLoader(sample_config_file).load_config()
        assert len(config.entities) == 2

    def test_refuses_to_overwrite(self, sample_config_file):
        with pytest.raises(ConfigurationError, match="already exists"):
            ConfigLoader().create_sample_toml_config(sample_config_file)

    def test_overwrite(self, sample_config_file):
        sample_config_file.write_text("garbage")
        path = ConfigLoader().create_sample_toml_config(sample_config_file, overwrite=True)
        assert isinstance(path, Path)
        assert ConfigLoader(path).load_config().discovery.prefix == "homeassistant"

    def test_summary(self, sample_config_file):
        summary = ConfigLoader(sample_config_file).get_config_summary()
        assert summary["config_file"] == str(sample_config_file)
        assert summary["entities"] == {"number": 1, "cover": 1}
        assert summary["device_based"] is False

    def test_get_nested_value(self, sample_config_file):
        config = ConfigLoader(sample_config_file).load_config()
        assert config.get_nested_value("discovery.prefix") == "homeassistant"
        assert config.get_nested_value("discovery.missing", "x") == "x"
