"""Configuration loader for hamqtt."""

import logging
import os
import tomllib
from pathlib import Path
from typing import Any

import tomli_w
import yaml
from pydantic import ValidationError

from ..domain.errors import HAMqttError
from .models import HAMqttConfig

logger = logging.getLogger(__name__)


class ConfigurationError(HAMqttError):
    """Raised when configuration loading or validation fails."""

    pass


class ConfigLoader:
    """Configuration loader that merges TOML/YAML files, environment variables, and CLI arguments."""

    DEFAULT_CONFIG_FILES = [
        ".hamqtt.toml",  # TOML files (preferred)
        ".hamqtt.yml",
        ".hamqtt.yaml",
        "hamqtt.toml",
        "hamqtt.yml",
        "hamqtt.yaml",
    ]

    ENV_PREFIX = "HAMQTT_"

    # Variables read directly by the CLI rather than merged into the model
    RESERVED_ENV_KEYS = {"HAMQTT_QUIET", "HAMQTT_UI"}

    def __init__(self, config_file: str | Path | None = None):
        """Initialize the configuration loader.

        Args:
            config_file: Path to configuration file. If None, will search for default files.
        """
        self.config_file = Path(config_file) if config_file else None
        self._config_cache: HAMqttConfig | None = None

    def load_config(
        self,
        env_overrides: dict[str, Any] | None = None,
        cli_overrides: dict[str, Any] | None = None,
        reload: bool = False,
    ) -> HAMqttConfig:
        """Load configuration from all sources.

        Args:
            env_overrides: Environment variable overrides
            cli_overrides: CLI argument overrides
            reload: Force reload even if cached

        Returns:
            Validated hamqtt configuration

        Raises:
            ConfigurationError: If configuration is invalid
        """
        if self._config_cache is not None and not reload:
            return self._config_cache

        try:
            config_dict: dict[str, Any] = {}

            # 1. Configuration file (TOML or YAML)
            file_config = self._load_config_file()
            if file_config:
                config_dict = self._deep_merge(config_dict, file_config)
                logger.debug(
                    f"Loaded configuration from {self._get_config_file_path()}"
                )

            # 2. Environment variables
            env_config = env_overrides or self._load_env_config()
            if env_config:
                config_dict = self._deep_merge(config_dict, env_config)
                logger.debug("Applied environment variable overrides")

            # 3. CLI overrides (highest priority)
            if cli_overrides:
                config_dict = self._deep_merge(config_dict, cli_overrides)
                logger.debug("Applied CLI argument overrides")

            self._config_cache = HAMqttConfig(**config_dict)
            logger.info("Configuration loaded and validated successfully")

            return self._config_cache

        except ValidationError as e:
            error_msg = f"Configuration validation failed: {e}"
            logger.error(error_msg)
            raise ConfigurationError(error_msg) from e
        except ConfigurationError:
            raise
        except Exception as e:
            error_msg = f"Failed to load configuration: {e}"
            logger.error(error_msg)
            raise ConfigurationError(error_msg) from e

    def _load_config_file(self) -> dict[str, Any] | None:
        """Load configuration from TOML or YAML file."""
        config_file = self._get_config_file_path()

        if not config_file:
            logger.debug("No configuration file found, using defaults")
            return None
        if not config_file.exists():
            raise ConfigurationError(f"Configuration file {config_file} does not exist")

        try:
            if config_file.suffix.lower() == ".toml":
                return self._load_toml_file(config_file)
            elif config_file.suffix.lower() in (".yml", ".yaml"):
                return self._load_yaml_file(config_file)
            else:
                raise ConfigurationError(
                    f"Unknown configuration file type: {config_file}"
                )

        except OSError as e:
            error_msg = f"Failed to read {config_file}: {e}"
            logger.error(error_msg)
            raise ConfigurationError(error_msg) from e

    def _load_toml_file(self, config_file: Path) -> dict[str, Any] | None:
        """Load configuration from TOML file."""
        try:
            with open(config_file, "rb") as f:
                content = tomllib.load(f)

            if not content:
                logger.warning(f"Configuration file {config_file} is empty")
                return None

            return content

        except tomllib.TOMLDecodeError as e:
            error_msg = f"Invalid TOML in {config_file}: {e}"
            logger.error(error_msg)
            raise ConfigurationError(error_msg) from e

    def _load_yaml_file(self, config_file: Path) -> dict[str, Any] | None:
        """Load configuration from YAML file."""
        try:
            with open(config_file, encoding="utf-8") as f:
                content = yaml.safe_load(f)

            if not content:
                logger.warning(f"Configuration file {config_file} is empty")
                return None

            if not isinstance(content, dict):
                raise ConfigurationError(
                    f"Configuration file {config_file} must contain a mapping"
                )

            return content

        except yaml.YAMLError as e:
            error_msg = f"Invalid YAML in {config_file}: {e}"
            logger.error(error_msg)
            raise ConfigurationError(error_msg) from e

    def _load_env_config(self) -> dict[str, Any]:
        """Load configuration from environment variables."""
        env_config: dict[str, Any] = {}

        for key, value in os.environ.items():
            if not key.startswith(self.ENV_PREFIX) or key in self.RESERVED_ENV_KEYS:
                continue
            # HAMQTT_DISCOVERY__PREFIX -> discovery.prefix
            config_key = key[len(self.ENV_PREFIX) :].lower()
            nested_keys = config_key.split("__")
            self._set_nested_value(
                env_config, nested_keys, self._parse_env_value(value)
            )

        return env_config

    def _parse_env_value(self, value: str) -> Any:
        """Parse environment variable value to appropriate Python type."""
        if value.lower() in ("true", "yes", "on"):
            return True
        elif value.lower() in ("false", "no", "off"):
            return False

        try:
            if "." not in value:
                return int(value)
            else:
                return float(value)
        except ValueError:
            pass

        # Comma-separated lists
        if "," in value:
            return [item.strip() for item in value.split(",")]

        return value

    def _set_nested_value(self, config: dict[str, Any], keys: list, value: Any) -> None:
        """Set a nested value in the configuration dictionary."""
        current = config

        for key in keys[:-1]:
            if key not in current:
                current[key] = {}
            current = current[key]

        current[keys[-1]] = value

    def _get_config_file_path(self) -> Path | None:
        """Get the path to the configuration file."""
        if self.config_file:
            return self.config_file

        for filename in self.DEFAULT_CONFIG_FILES:
            path = Path(filename)
            if path.exists():
                return path

        return None

    def _deep_merge(
        self, base: dict[str, Any], updates: dict[str, Any]
    ) -> dict[str, Any]:
        """Deeply merge updates into base dictionary."""
        result = base.copy()

        for key, value in updates.items():
            if (
                key in result
                and isinstance(result[key], dict)
                and isinstance(value, dict)
            ):
                result[key] = self._deep_merge(result[key], value)
            else:
                result[key] = value

        return result

    def create_sample_toml_config(
        self, filepath: str | Path | None = None, overwrite: bool = False
    ) -> Path:
        """Create a sample TOML configuration file.

        Args:
            filepath: Path for the config file. Defaults to .hamqtt.toml
            overwrite: Replace an existing file

        Returns:
            Path to the created configuration file

        Raises:
            ConfigurationError: If the file exists and overwrite is False
        """
        filepath = Path(filepath) if filepath is not None else Path(".hamqtt.toml")

        if filepath.exists() and not overwrite:
            raise ConfigurationError(f"{filepath} already exists")

        config_content = self._get_sample_config()
        # The sample must itself be loadable.
        self.validate_config(config_content)

        with open(filepath, "wb") as f:
            tomli_w.dump(config_content, f)

        logger.info(f"Sample TOML configuration created at {filepath}")
        return filepath

    def validate_config(self, config_dict: dict[str, Any]) -> None:
        """Validate a configuration dictionary without keeping the model.

        Raises:
            ConfigurationError: If configuration is invalid
        """
        try:
            HAMqttConfig(**config_dict)
        except ValidationError as e:
            error_msg = f"Configuration validation failed: {e}"
            raise ConfigurationError(error_msg) from e

    def get_config_summary(self) -> dict[str, Any]:
        """Get a summary of the current configuration."""
        if self._config_cache is None:
            self.load_config()

        config_path = self._get_config_file_path()
        return {
            "config_file": str(config_path) if config_path else "None",
            "discovery_prefix": self._config_cache.discovery.prefix,
            "node_id": self._config_cache.discovery.node_id,
            "device_based": self._config_cache.discovery.device_based,
            "entities": {
                "number": len(self._config_cache.number),
                "cover": len(self._config_cache.cover),
            },
        }

    def _get_sample_config(self) -> dict[str, Any]:
        """Starter configuration: one device with a number and a cover."""
        return {
            "discovery": {"prefix": "homeassistant", "retain": True},
            "device": {
                "name": "Living room controller",
                "identifiers": ["living-room-controller"],
                "manufacturer": "Example",
            },
            "availability": {
                "checks": [{"topic": "living-room/availability"}],
            },
            "device_topics": {
                "subscribes": [
                    "living-room/volume/set",
                    "living-room/blind/set",
                    "living-room/blind/position/set",
                ],
                "publishes": [
                    "living-room/availability",
                    "living-room/volume",
                    "living-room/blind/state",
                    "living-room/blind/position",
                ],
            },
            "number": [
                {
                    "object_id": "living_room_volume",
                    "unique_id": "living-room-volume",
                    "name": "Volume",
                    "topic_prefix": "living-room/volume",
                    "state_topic": "~",
                    "command_topic": "~/set",
                    "min": 0,
                    "max": 100,
                    "step": 1,
                    "mode": "slider",
                    "unit_of_measurement": "%",
                }
            ],
            "cover": [
                {
                    "object_id": "living_room_blind",
                    "unique_id": "living-room-blind",
                    "name": "Blind",
                    "device_class": "blind",
                    "topic_prefix": "living-room/blind",
                    "command_topic": "~/set",
                    "state_topic": "~/state",
                    "position_topic": "~/position",
                    "set_position_topic": "~/position/set",
                }
            ],
        }


def load_config(
    config_file: str | Path | None = None,
    env_overrides: dict[str, Any] | None = None,
    cli_overrides: dict[str, Any] | None = None,
) -> HAMqttConfig:
    """Load hamqtt configuration from all sources.

    Args:
        config_file: Path to configuration file
        env_overrides: Environment variable overrides
        cli_overrides: CLI argument overrides

    Returns:
        Validated hamqtt configuration
    """
    loader = ConfigLoader(config_file)
    return loader.load_config(env_overrides, cli_overrides)
