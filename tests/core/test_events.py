"""Tests for event bus."""

from lazylight.core.events import EventBus, EventType


def test_subscribe_publish():
    bus = EventBus()
    received = []
    bus.subscribe(EventType.RIG_TORN_DOWN, lambda **kw: received.append(kw))
    bus.publish(EventType.RIG_TORN_DOWN, removed=3)
    assert received == [{"removed": 3}]


def test_unsubscribe():
    bus = EventBus()
    received = []
    handler = lambda **kw: received.append(kw)
    bus.subscribe(EventType.RIG_GENERATED, handler)
    bus.unsubscribe(EventType.RIG_GENERATED, handler)
    bus.publish(EventType.RIG_GENERATED, count=1)
    assert len(received) == 0


def test_different_events_independent():
    bus = EventBus()
    received = []
    bus.subscribe(EventType.RIG_EXPORTED, lambda **kw: received.append("export"))
    bus.publish(EventType.RIG_IMPORTED, count=2)
    assert len(received) == 0


def test_clear():
    bus = EventBus()
    bus.subscribe(EventType.PLANNING_SKIPPED, lambda **kw: None)
    bus.clear()
    # Should not raise
    bus.publish(EventType.PLANNING_SKIPPED)
