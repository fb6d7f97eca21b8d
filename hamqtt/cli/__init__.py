"""Command line interface for hamqtt."""
