"""Exception hierarchy for the hamqtt domain."""


class HAMqttError(Exception):
    """Base exception for hamqtt domain errors."""

    pass


class TopicError(HAMqttError):
    """Raised when an MQTT topic is malformed for the way it is used."""

    pass


class EntityError(HAMqttError):
    """Raised when an entity cannot be turned into a discovery message."""

    pass
