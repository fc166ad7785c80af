"""Tests for EventBus and event types."""

from __future__ import annotations

import logging

import pytest

from cohort.events import EventBus, EventType, NetworkEvent

# =========================================================================
# Helpers
# =========================================================================


def _failing_handler(event: NetworkEvent) -> None:
    """Handler that always raises."""
    raise RuntimeError(f"boom on {event.network}")


# =========================================================================
# EventType / NetworkEvent
# =========================================================================


class TestEventType:
    def test_member_count(self) -> None:
        assert len(EventType) == 2

    def test_values(self) -> None:
        assert EventType.NETWORK_MODIFIED.value == "network_modified"
        assert EventType.NETWORK_DESTROYED.value == "network_destroyed"


class TestNetworkEvent:
    def test_construction(self) -> None:
        handle = object()
        ev = NetworkEvent(event_type=EventType.NETWORK_MODIFIED, network=handle)
        assert ev.event_type is EventType.NETWORK_MODIFIED
        assert ev.network is handle
        assert ev.detail is None

    def test_immutable(self) -> None:
        ev = NetworkEvent(event_type=EventType.NETWORK_DESTROYED, network="n1")
        with pytest.raises(AttributeError):
            ev.network = "n2"  # type: ignore[misc]


# =========================================================================
# EventBus Registration
# =========================================================================


class TestEventBusRegistration:
    def test_initial_handler_count(self) -> None:
        assert EventBus().handler_count == 0

    def test_register_multiple_types(self) -> None:
        bus = EventBus()
        bus.register(EventType.NETWORK_MODIFIED, _failing_handler)
        bus.register(EventType.NETWORK_DESTROYED, _failing_handler)
        assert bus.handler_count == 2

    def test_unregister_returns_true(self) -> None:
        bus = EventBus()
        bus.register(EventType.NETWORK_MODIFIED, _failing_handler)
        assert bus.unregister(EventType.NETWORK_MODIFIED, _failing_handler) is True
        assert bus.handler_count == 0

    def test_unregister_missing_returns_false(self) -> None:
        bus = EventBus()
        assert bus.unregister(EventType.NETWORK_MODIFIED, _failing_handler) is False

    def test_clear(self) -> None:
        bus = EventBus()
        bus.register(EventType.NETWORK_MODIFIED, _failing_handler)
        bus.register(EventType.NETWORK_DESTROYED, _failing_handler)
        bus.clear()
        assert bus.handler_count == 0


# =========================================================================
# EventBus Emit
# =========================================================================


class TestEventBusEmit:
    def test_multiple_handlers_called_in_order(self) -> None:
        bus = EventBus()
        order: list[int] = []
        bus.register(EventType.NETWORK_MODIFIED, lambda event: order.append(1))
        bus.register(EventType.NETWORK_MODIFIED, lambda event: order.append(2))
        bus.emit(NetworkEvent(EventType.NETWORK_MODIFIED, "n"))
        assert order == [1, 2]

    def test_type_filtering(self) -> None:
        bus = EventBus()
        modified: list[NetworkEvent] = []
        destroyed: list[NetworkEvent] = []
        bus.register(EventType.NETWORK_MODIFIED, modified.append)
        bus.register(EventType.NETWORK_DESTROYED, destroyed.append)

        bus.emit(NetworkEvent(EventType.NETWORK_DESTROYED, "n"))
        assert modified == []
        assert len(destroyed) == 1

    def test_error_isolation(self) -> None:
        bus = EventBus()
        collected: list[NetworkEvent] = []
        bus.register(EventType.NETWORK_MODIFIED, _failing_handler)
        bus.register(EventType.NETWORK_MODIFIED, collected.append)

        bus.emit(NetworkEvent(EventType.NETWORK_MODIFIED, "n"))
        assert len(collected) == 1

    def test_error_logging(self, caplog: pytest.LogCaptureFixture) -> None:
        bus = EventBus()
        bus.register(EventType.NETWORK_MODIFIED, _failing_handler)

        with caplog.at_level(logging.WARNING, logger="cohort.events"):
            bus.emit(NetworkEvent(EventType.NETWORK_MODIFIED, "net-1"))

        assert "failed" in caplog.text
        assert "network_modified" in caplog.text
        assert "net-1" in caplog.text

    def test_handler_may_unregister_itself(self) -> None:
        bus = EventBus()
        calls: list[str] = []

        def once(event: NetworkEvent) -> None:
            calls.append("once")
            bus.unregister(EventType.NETWORK_MODIFIED, once)

        bus.register(EventType.NETWORK_MODIFIED, once)
        bus.emit(NetworkEvent(EventType.NETWORK_MODIFIED, "n"))
        bus.emit(NetworkEvent(EventType.NETWORK_MODIFIED, "n"))
        assert calls == ["once"]
