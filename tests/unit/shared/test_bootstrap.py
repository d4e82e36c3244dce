"""Unit tests for bootstrapping event-subscribing operations."""

from enum import Enum
from typing import ClassVar

import pytest

from authhub.shared.core.bootstrap import (
    Bootstrapper,
    EventSubscriberOperation,
    collect_subscriptions,
    run_bootstrappers,
)
from authhub.shared.core.event_bus import DomainEventBus
from authhub.shared.core.exceptions import EventBusSealedError
from authhub.shared.events.base import DomainEvent


class OrderPlaced(DomainEvent):
    event_type: ClassVar[str] = "OrderPlaced"

    order_id: str


class OrderCancelled(DomainEvent):
    event_type: ClassVar[str] = "OrderCancelled"

    order_id: str


class RecordOrder(EventSubscriberOperation):
    class Output(str, Enum):
        SUCCESS = "SUCCESS"
        ERROR = "ERROR"

    subscribes_to = (OrderPlaced, OrderCancelled)

    def __init__(self, event_bus=None, fail=False):
        super().__init__(event_bus=event_bus)
        self.seen = []
        self.fail = fail

    async def run(self, event):
        if self.fail:
            raise RuntimeError("cannot record")
        self.seen.append((event.event_type, event.order_id))
        self.emit_success(event.order_id)


class TestEventSubscriberOperation:
    def test_subscriptions_cover_each_declared_event(self):
        op = RecordOrder()

        names = [s.event_type for s in op.subscriptions()]

        assert names == ["OrderPlaced", "OrderCancelled"]

    def test_satisfies_bootstrapper_protocol(self):
        assert isinstance(RecordOrder(), Bootstrapper)

    def test_bootstrap_without_bus_raises(self):
        with pytest.raises(RuntimeError):
            RecordOrder().bootstrap()

    async def test_one_delivery_per_event_after_single_bootstrap(self, bus):
        op = RecordOrder(event_bus=bus)
        op.bootstrap()

        bus.publish(OrderPlaced(order_id="o-1"))
        bus.publish(OrderCancelled(order_id="o-1"))
        await bus.drain()

        assert sorted(op.seen) == [("OrderCancelled", "o-1"), ("OrderPlaced", "o-1")]

    async def test_bootstrapping_twice_duplicates_delivery(self, bus):
        op = RecordOrder(event_bus=bus)
        op.bootstrap()
        op.bootstrap()

        bus.publish(OrderPlaced(order_id="o-2"))
        await bus.drain()

        assert op.seen == [("OrderPlaced", "o-2"), ("OrderPlaced", "o-2")]

    async def test_handler_failure_is_emitted_on_the_operation(self, bus):
        op = RecordOrder(event_bus=bus, fail=True)
        errors = []
        op.on("ERROR", errors.append)
        op.bootstrap()

        bus.publish(OrderPlaced(order_id="o-3"))
        await bus.drain()

        assert len(errors) == 1
        assert errors[0].code == "OPERATION_FAILED"
        assert bus.get_stats()["failed"] == 0


class TestRunBootstrappers:
    def test_runs_each_once_and_seals(self, bus):
        first, second = RecordOrder(event_bus=bus), RecordOrder(event_bus=bus)

        count = run_bootstrappers([first, second], bus)

        assert count == 2
        assert bus.sealed
        assert bus.handler_count(OrderPlaced) == 2
        with pytest.raises(EventBusSealedError):
            RecordOrder(event_bus=bus).bootstrap()

    async def test_collected_subscriptions_feed_bus_constructor(self):
        op = RecordOrder()
        bus = DomainEventBus(collect_subscriptions([op]))

        bus.publish(OrderPlaced(order_id="o-4"))
        await bus.drain()

        assert op.seen == [("OrderPlaced", "o-4")]
