"""Configuration models for hamqtt.

This package contains all configuration models organized by concern.
"""

from .discovery import DeviceTopicsConfig, DiscoveryConfig
from .main import HAMqttConfig
from .ui import LoggingConfig, OutputConfig

__all__ = [
    "HAMqttConfig",
    "DiscoveryConfig",
    "DeviceTopicsConfig",
    "LoggingConfig",
    "OutputConfig",
]
