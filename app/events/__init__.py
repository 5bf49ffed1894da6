"""
Event publishing utilities
"""

from .publisher import (
    KafkaEventPublisher,
    event_publisher,
    get_event_publisher,
    DOCUMENT_CREATED,
    DOCUMENT_UPDATED,
    DOCUMENT_DELETED,
    AUTHOR_CREATED,
    AUTHOR_UPDATED,
    AUTHOR_DELETED,
)
from .topics import build_topic, ensure_topic, declare_topic

__all__ = [
    "KafkaEventPublisher",
    "event_publisher",
    "get_event_publisher",
    "DOCUMENT_CREATED",
    "DOCUMENT_UPDATED",
    "DOCUMENT_DELETED",
    "AUTHOR_CREATED",
    "AUTHOR_UPDATED",
    "AUTHOR_DELETED",
    "build_topic",
    "ensure_topic",
    "declare_topic",
]
