"""Adapters for hamqtt ports."""
