"""Event system for decoupled communication between the About page and the stores."""

from enum import Enum
from dataclasses import dataclass
from typing import Any, Callable
import logging

logger = logging.getLogger(__name__)


class EventType(Enum):
    """Types of events that can be emitted."""

    # Bundle events
    BUNDLE_EXPORT_STARTED = "bundle_export_started"
    BUNDLE_EXPORTED = "bundle_exported"
    BUNDLE_IMPORT_STARTED = "bundle_import_started"
    BUNDLE_IMPORTED = "bundle_imported"
    BUNDLE_FAILED = "bundle_failed"

    # Store events
    SETTINGS_CHANGED = "settings_changed"
    PINNED_ITEMS_RELOADED = "pinned_items_reloaded"


@dataclass
class Event:
    """An event with type and associated data."""

    type: EventType
    data: Any = None


class EventBus:
    """Simple event bus for publish/subscribe communication."""

    def __init__(self):
        self._subscribers: dict[EventType, list[Callable[[Event], None]]] = {}

    def subscribe(self, event_type: EventType, callback: Callable[[Event], None]) -> None:
        """Subscribe to events of a specific type.

        Args:
            event_type: The type of event to subscribe to
            callback: Function to call when event is published
        """
        callbacks = self._subscribers.setdefault(event_type, [])
        if callback not in callbacks:
            callbacks.append(callback)

    def unsubscribe(self, event_type: EventType, callback: Callable[[Event], None]) -> None:
        """Unsubscribe from events of a specific type."""
        callbacks = self._subscribers.get(event_type, [])
        if callback in callbacks:
            callbacks.remove(callback)

    def publish(self, event: Event) -> None:
        """Publish an event to all subscribers.

        A failing subscriber is logged and does not stop delivery to the others.

        Args:
            event: The event to publish
        """
        for callback in list(self._subscribers.get(event.type, [])):
            try:
                callback(event)
            except Exception as e:
                logger.error(f"Error in event handler for {event.type}: {e}")

    def emit(self, event_type: EventType, data: Any = None) -> None:
        """Shortcut for publishing an event built from its parts."""
        self.publish(Event(event_type, data))
