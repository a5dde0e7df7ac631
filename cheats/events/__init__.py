"""Shell event hooks."""

from .shell_events import (
    InMemoryEventPublisher,
    NoOpEventPublisher,
    ShellEvent,
    ShellEventPublisher,
    ShellEventType,
    create_event_publisher,
)

__all__ = [
    "ShellEvent",
    "ShellEventType",
    "ShellEventPublisher",
    "NoOpEventPublisher",
    "InMemoryEventPublisher",
    "create_event_publisher",
]
