"""Configuration management for hamqtt."""

from .loader import ConfigLoader, ConfigurationError, load_config
from .models import HAMqttConfig

__all__ = [
    "HAMqttConfig",
    "ConfigLoader",
    "ConfigurationError",
    "load_config",
]
