"""
MQTT topic helpers.

MQTT routes a message to a subscriber only when the topic strings match
exactly: ``living-room/volume/`` and ``living-room/volume`` are two
different topics. Nothing here normalizes topics; :func:`near_miss` only
explains why two topics that look alike do not match.
"""

import re

from .errors import TopicError

TOPIC_BASE = "~"
MAX_TOPIC_BYTES = 65535
DEFAULT_DISCOVERY_PREFIX = "homeassistant"

_DISCOVERY_ID = re.compile(r"^[a-zA-Z0-9_-]+$")


def topics_match(subscriber: str, publisher: str) -> bool:
    """Return True when a subscriber on ``subscriber`` receives ``publisher``."""
    return subscriber == publisher


def has_wildcards(topic: str) -> bool:
    return "+" in topic or "#" in topic


def filter_matches(topic_filter: str, topic: str) -> bool:
    """Return True when a subscription on ``topic_filter`` receives ``topic``.

    Literal filters fall back to :func:`topics_match`. Wildcards match whole
    levels only, so ``a/+`` matches ``a/`` (an empty level) but not ``a``.
    """
    if not has_wildcards(topic_filter):
        return topics_match(topic_filter, topic)
    filter_levels = topic_filter.split("/")
    topic_levels = topic.split("/")
    for index, level in enumerate(filter_levels):
        if level == "#":
            return True
        if index >= len(topic_levels):
            return False
        if level != "+" and level != topic_levels[index]:
            return False
    return len(filter_levels) == len(topic_levels)


def near_miss(expected: str, actual: str) -> str | None:
    """Describe why two almost-identical topics differ, or None if unrelated."""
    if expected == actual:
        return None
    if expected.rstrip("/") == actual.rstrip("/"):
        return "topics differ only by a trailing '/'"
    if expected.lstrip("/") == actual.lstrip("/"):
        return "topics differ only by a leading '/'"
    if expected.strip() == actual.strip():
        return "topics differ only by surrounding whitespace"
    if expected.lower() == actual.lower():
        return "topics differ only by letter case (topics are case-sensitive)"
    return None


def expand_topic(topic: str, prefix: str | None) -> str:
    """Expand Home Assistant's ``~`` base-topic abbreviation."""
    if not prefix or not topic:
        return topic
    if topic.startswith(TOPIC_BASE):
        topic = prefix + topic[1:]
    if topic.endswith(TOPIC_BASE):
        topic = topic[:-1] + prefix
    return topic


def uses_topic_base(topic: str) -> bool:
    return topic.startswith(TOPIC_BASE) or topic.endswith(TOPIC_BASE)


def _validate_common(topic: str) -> None:
    if not topic:
        raise TopicError("Topic must not be empty")
    if "\0" in topic:
        raise TopicError(f"Topic {topic!r} contains a NUL character")
    if len(topic.encode("utf-8")) > MAX_TOPIC_BYTES:
        raise TopicError(f"Topic exceeds {MAX_TOPIC_BYTES} bytes")


def validate_publish_topic(topic: str) -> str:
    """Validate a topic that messages are published to.

    Raises:
        TopicError: If the topic is empty, too long or contains wildcards
    """
    _validate_common(topic)
    if "+" in topic or "#" in topic:
        raise TopicError(f"Wildcards are not allowed in publish topic {topic!r}")
    return topic


def validate_subscribe_topic(topic: str) -> str:
    """Validate a topic filter that a client subscribes to.

    Raises:
        TopicError: If a wildcard does not occupy a whole level, or ``#`` is
            not the last level
    """
    _validate_common(topic)
    levels = topic.split("/")
    for index, level in enumerate(levels):
        if "#" in level:
            if level != "#":
                raise TopicError(f"'#' must occupy a whole level in {topic!r}")
            if index != len(levels) - 1:
                raise TopicError(f"'#' must be the last level in {topic!r}")
        if "+" in level and level != "+":
            raise TopicError(f"'+' must occupy a whole level in {topic!r}")
    return topic


def discovery_topic(
    prefix: str,
    component: str,
    object_id: str,
    node_id: str | None = None,
) -> str:
    """Build ``<prefix>/<component>/[<node_id>/]<object_id>/config``."""
    if not prefix:
        raise TopicError("Discovery prefix must not be empty")
    for label, value in (("object_id", object_id), ("node_id", node_id)):
        if value is not None and not _DISCOVERY_ID.match(value):
            raise TopicError(
                f"Discovery {label} {value!r} may only contain "
                "letters, digits, '_' and '-'"
            )
    parts = [prefix, component]
    if node_id:
        parts.append(node_id)
    parts.extend([object_id, "config"])
    return validate_publish_topic("/".join(parts))


def slugify(value: str) -> str:
    """Turn a display name into something usable as a discovery object id."""
    slug = re.sub(r"[^a-z0-9]+", "_", value.lower()).strip("_")
    return slug
