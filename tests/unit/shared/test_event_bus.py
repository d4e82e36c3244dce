"""Unit tests for DomainEventBus."""

import asyncio
from typing import ClassVar

import pytest
from pydantic import ValidationError

from authhub.shared.core.event_bus import DomainEventBus, Subscription, event_name
from authhub.shared.core.exceptions import EventBusSealedError
from authhub.shared.events.base import DomainEvent


class Pinged(DomainEvent):
    event_type: ClassVar[str] = "Pinged"

    value: int = 0


class Ponged(DomainEvent):
    event_type: ClassVar[str] = "Ponged"


class TestSubscription:
    def test_event_name_accepts_class_enum_and_string(self):
        assert event_name(Pinged) == "Pinged"
        assert event_name("Pinged") == "Pinged"

    def test_constructor_accepts_subscription_pairs(self):
        async def handler(event):
            pass

        bus = DomainEventBus([Subscription.of(Pinged, handler), Subscription.of("Ponged", handler)])

        assert bus.handler_count(Pinged) == 1
        assert bus.handler_count("Ponged") == 1

    def test_subscribe_after_seal_raises(self, bus):
        bus.seal()

        with pytest.raises(EventBusSealedError):
            bus.subscribe(Pinged, lambda event: None)

    def test_seal_is_idempotent(self, bus):
        bus.seal()
        bus.seal()

        assert bus.sealed


class TestPublish:
    async def test_publish_with_no_subscribers_is_a_no_op(self, bus):
        assert bus.publish(Pinged()) == 0
        assert bus.get_stats()["published"] == 1

    async def test_publish_returns_before_handlers_run(self, bus):
        seen = []

        async def handler(event):
            seen.append(event.value)

        bus.subscribe(Pinged, handler)

        assert bus.publish(Pinged(value=1)) == 1
        assert seen == []

        await bus.drain()
        assert seen == [1]

    async def test_every_handler_receives_the_same_event(self, bus):
        received = []

        async def first(event):
            received.append(("first", event))

        def second(event):
            received.append(("second", event))

        bus.subscribe(Pinged, first)
        bus.subscribe(Pinged, second)
        event = Pinged(value=7)

        bus.publish(event)
        await bus.drain()

        assert sorted(name for name, _ in received) == ["first", "second"]
        assert all(got is event for _, got in received)

    async def test_handlers_only_receive_their_event_name(self, bus):
        pings = []
        bus.subscribe(Pinged, pings.append)

        bus.publish(Ponged())
        await bus.drain()

        assert pings == []

    async def test_failing_handler_does_not_affect_others_or_publisher(self, bus):
        delivered = []

        async def broken(event):
            raise RuntimeError("handler bug")

        async def healthy(event):
            delivered.append(event.value)

        bus.subscribe(Pinged, broken)
        bus.subscribe(Pinged, healthy)

        scheduled = bus.publish(Pinged(value=3))
        await bus.drain()

        assert scheduled == 2
        assert delivered == [3]
        stats = bus.get_stats()
        assert stats["failed"] == 1
        assert stats["dispatched"] == 1

    async def test_no_ordering_between_events(self, bus):
        finished = []
        release_first = asyncio.Event()

        async def handler(event):
            if event.value == 1:
                await release_first.wait()
            finished.append(event.value)
            if event.value == 2:
                release_first.set()

        bus.subscribe(Pinged, handler)

        bus.publish(Pinged(value=1))
        bus.publish(Pinged(value=2))
        await bus.drain()

        assert finished == [2, 1]

    async def test_drain_waits_for_handlers_scheduled_while_draining(self, bus):
        seen = []

        async def on_ping(event):
            await asyncio.sleep(0)
            bus.publish(Ponged())

        async def on_pong(event):
            seen.append("pong")

        bus.subscribe(Pinged, on_ping)
        bus.subscribe(Ponged, on_pong)

        bus.publish(Pinged())
        await bus.drain()

        assert seen == ["pong"]
        assert bus.pending == 0

    async def test_bus_keeps_no_history(self, bus):
        bus.publish(Pinged(value=1))
        late = []
        bus.subscribe(Pinged, late.append)
        await bus.drain()

        assert late == []


class TestEventMetadata:
    def test_first_event_correlates_with_itself(self):
        event = Pinged()

        assert event.metadata.correlation_id == event.event_id
        assert event.metadata.causation_id is None

    def test_child_metadata_keeps_chain(self):
        parent = Pinged()
        child = Ponged(metadata=parent.child_metadata(actor="Responder"))

        assert child.metadata.correlation_id == parent.event_id
        assert child.metadata.causation_id == parent.event_id
        assert child.metadata.actor == "Responder"

    def test_events_are_frozen(self):
        event = Pinged(value=1)

        with pytest.raises(ValidationError):
            event.value = 2
