"""
Structured events emitted by the shell.

Hosts that want to observe registration and dispatch subscribe to these
events instead of scraping log output.
"""

"""
Copyright (c) 2025 Firefly Software Solutions Inc.

Licensed under the Apache License, Version 2.0 (the "License");
you may not use this file except in compliance with the License.
You may obtain a copy of the License at:

    http://www.apache.org/licenses/LICENSE-2.0

Unless required by applicable law or agreed to in writing, software
distributed under the License is distributed on an "AS IS" BASIS,
WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
See the License for the specific language governing permissions and
limitations under the License.
"""

import logging
from abc import ABC, abstractmethod
from collections import deque
from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Any, Callable, Deque, Dict, List, Optional

logger = logging.getLogger(__name__)


class ShellEventType(Enum):
    """Types of shell events that can be published."""

    CODE_REGISTERED = "code_registered"
    CODE_UNREGISTERED = "code_unregistered"
    CODE_INVOKED = "code_invoked"
    CODE_NOT_FOUND = "code_not_found"
    COMMENT_SKIPPED = "comment_skipped"


@dataclass
class ShellEvent:
    """Shell event data structure."""

    event_type: ShellEventType
    name: Optional[str] = None
    args: Optional[str] = None

    timestamp: datetime = field(default_factory=datetime.now)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "type": self.event_type.value,
            "name": self.name,
            "args": self.args,
            "timestamp": self.timestamp.isoformat(),
        }


class ShellEventPublisher(ABC):
    """Abstract base class for shell event publishers."""

    @abstractmethod
    def publish(self, event: ShellEvent) -> None:
        """
        Publish a shell event.

        Args:
            event: The event to publish
        """
        pass


class NoOpEventPublisher(ShellEventPublisher):
    """Publisher that drops every event."""

    def publish(self, event: ShellEvent) -> None:
        pass


class InMemoryEventPublisher(ShellEventPublisher):
    """
    In-memory event publisher with synchronous subscribers.

    Recorded events are kept in a ring buffer: once ``max_events`` events
    are held, each new one evicts the oldest. With ``max_events=None`` the
    record grows for the life of the publisher.
    """

    def __init__(self, record: bool = True, max_events: Optional[int] = None):
        if max_events is not None and max_events < 1:
            raise ValueError(f"max_events must be positive, got {max_events}")
        self.record = record
        self._event_handlers: Dict[ShellEventType, List[Callable[[ShellEvent], Any]]] = {}
        self._published_events: Deque[ShellEvent] = deque(maxlen=max_events)

    def subscribe(self, event_type: ShellEventType, handler: Callable[[ShellEvent], Any]) -> None:
        """Subscribe to events of a specific type."""
        self._event_handlers.setdefault(event_type, []).append(handler)

    def unsubscribe(self, event_type: ShellEventType, handler: Callable[[ShellEvent], Any]) -> None:
        """Remove a subscriber. Unknown handlers are ignored."""
        handlers = self._event_handlers.get(event_type, [])
        if handler in handlers:
            handlers.remove(handler)

    def publish(self, event: ShellEvent) -> None:
        if self.record:
            self._published_events.append(event)

        for handler in self._event_handlers.get(event.event_type, []):
            try:
                handler(event)
            except Exception as e:
                logger.error(f"Error in event handler for {event.event_type.value}: {e}")

    def get_published_events(self) -> List[ShellEvent]:
        """Get all published events."""
        return list(self._published_events)

    def clear_events(self) -> None:
        """Clear published events."""
        self._published_events.clear()


def create_event_publisher(provider: str = "memory", **kwargs) -> ShellEventPublisher:
    """Factory function to create event publishers."""
    if provider == "memory":
        return InMemoryEventPublisher(
            record=kwargs.get("record", True), max_events=kwargs.get("max_events")
        )
    elif provider == "noop":
        return NoOpEventPublisher()
    else:
        raise ValueError(f"Unknown event publisher provider: {provider}")
