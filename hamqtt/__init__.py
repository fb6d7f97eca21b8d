"""Home Assistant MQTT discovery payload toolkit."""

__version__ = "0.1.0"
