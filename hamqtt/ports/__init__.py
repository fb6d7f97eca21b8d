"""Port interfaces for hamqtt adapters."""

from .writer_port import DiscoveryWriterPort

__all__ = ["DiscoveryWriterPort"]
