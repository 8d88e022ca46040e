"""
Event bus for Woodland engine activity.

Lets the surrounding tutor/UI layer observe accepted and rejected actions
without the engine knowing who is listening.

Usage:
    from .event_bus import get_event_bus, EventType

    bus = get_event_bus()
    bus.on(EventType.BATTLE_RESOLVED, my_handler)

    # Emitted by the dispatcher after an executor returns
    bus.emit(EventType.BATTLE_RESOLVED, faction="eyrie", clearing_id="c5", dice=[3, 1])

    def my_handler(event: EngineEvent):
        print(f"Battle in {event.data['clearing_id']}")
"""

import logging
from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Callable

logger = logging.getLogger(__name__)


class EventType(Enum):
    """Engine events that can be published."""

    # Action pipeline
    ACTION_RESOLVED = "action.resolved"
    ACTION_REJECTED = "action.rejected"

    # Specific outcomes worth narrating
    BATTLE_RESOLVED = "battle.resolved"
    PHASE_RESOLVED = "phase.resolved"
    TURMOIL = "eyrie.turmoil"
    TURN_ADVANCED = "turn.advanced"


@dataclass
class EngineEvent:
    """
    Event payload for the event bus.

    Attributes:
        type: The event type (from EventType enum)
        data: Event-specific payload as dict
        round_number: Round in which the event occurred
        timestamp: When the event was emitted
    """

    type: EventType
    data: dict = field(default_factory=dict)
    round_number: int = 0
    timestamp: datetime = field(default_factory=datetime.now)

    def __str__(self) -> str:
        return f"[{self.type.value}] {self.data}"


EventHandler = Callable[[EngineEvent], None]


class EventBus:
    """
    Synchronous event bus.

    Listeners are called immediately on emit(), in subscription order.
    A failing listener is logged and skipped; it never aborts the action
    that triggered it.
    """

    def __init__(self, history_limit: int = 100):
        self._listeners: dict[EventType, list[EventHandler]] = {}
        self._history: list[EngineEvent] = []
        self._history_limit = history_limit

    def on(self, event_type: EventType, handler: EventHandler) -> None:
        """Subscribe to an event type."""
        if event_type not in self._listeners:
            self._listeners[event_type] = []
        if handler not in self._listeners[event_type]:
            self._listeners[event_type].append(handler)

    def off(self, event_type: EventType, handler: EventHandler) -> None:
        """Unsubscribe from an event type."""
        if event_type in self._listeners and handler in self._listeners[event_type]:
            self._listeners[event_type].remove(handler)

    def emit(self, event_type: EventType, round_number: int = 0, **data) -> EngineEvent:
        """
        Emit an event to all subscribers.

        Returns:
            The emitted EngineEvent (for chaining/testing)
        """
        event = EngineEvent(type=event_type, data=data, round_number=round_number)

        self._history.append(event)
        if len(self._history) > self._history_limit:
            self._history = self._history[-self._history_limit :]

        for handler in list(self._listeners.get(event_type, [])):
            try:
                handler(event)
            except Exception:
                logger.exception("Error in handler for %s", event_type.value)

        return event

    def clear(self) -> None:
        """Clear all listeners. Useful for testing."""
        self._listeners.clear()

    def get_history(self, event_type: EventType | None = None) -> list[EngineEvent]:
        """Recent events, optionally filtered by type."""
        if event_type is None:
            return list(self._history)
        return [e for e in self._history if e.type == event_type]

    def listener_count(self, event_type: EventType) -> int:
        return len(self._listeners.get(event_type, []))


_event_bus: EventBus | None = None


def get_event_bus() -> EventBus:
    """Global event bus instance (singleton)."""
    global _event_bus
    if _event_bus is None:
        _event_bus = EventBus()
    return _event_bus


def reset_event_bus() -> None:
    """Reset the global event bus. Useful for testing."""
    global _event_bus
    _event_bus = None
