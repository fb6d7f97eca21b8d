"""Application use cases for hamqtt."""

from .discovery_usecase import (
    DiscoveryError,
    DiscoveryUseCase,
    TopicIssue,
    TopicReport,
)

__all__ = ["DiscoveryError", "DiscoveryUseCase", "TopicIssue", "TopicReport"]
