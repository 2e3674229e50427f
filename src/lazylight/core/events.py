"""EventBus for decoupled publish/subscribe communication."""

from enum import Enum, auto
from typing import Any, Callable
from collections import defaultdict


class EventType(Enum):
    # Generate
    RIG_GENERATED = auto()       # data: count (int), requested (int), bounds (BoundingBox)
    PLANNING_SKIPPED = auto()    # data: reason (PlanStatus)

    # Delete
    RIG_TORN_DOWN = auto()       # data: removed (int)

    # Export / import
    RIG_EXPORTED = auto()        # data: path (Path), count (int)
    RIG_IMPORTED = auto()        # data: path (Path), count (int)


class EventBus:
    """Simple publish/subscribe event system."""

    def __init__(self):
        self._handlers: dict[EventType, list[Callable]] = defaultdict(list)

    def subscribe(self, event_type: EventType, handler: Callable) -> None:
        self._handlers[event_type].append(handler)

    def unsubscribe(self, event_type: EventType, handler: Callable) -> None:
        handlers = self._handlers[event_type]
        if handler in handlers:
            handlers.remove(handler)

    def publish(self, event_type: EventType, **data: Any) -> None:
        for handler in self._handlers[event_type]:
            handler(**data)

    def clear(self) -> None:
        self._handlers.clear()
