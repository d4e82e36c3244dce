# 📄 File: authhub/shared/core/bootstrap.py
#
# 🧭 Purpose (Layman Explanation):
# Before the service starts answering requests, every part that wants to react to events
# ("when a user is created, send them an email") signs up for them here, exactly once.
#
# 🧪 Purpose (Technical Summary):
# Bootstrapper contract and the startup registration step. Event-reacting operations list
# the events they consume; the composition root either runs bootstrap() on each once and
# then seals the bus, or collects their Subscription pairs and hands them to the bus constructor.
#
# 🔗 Dependencies:
# - authhub.shared.core.operation (Operation base, guarded handlers)
# - authhub.shared.core.event_bus (DomainEventBus, Subscription)
#
# 🔄 Connected Modules / Calls From:
# - authhub.shared.core.dependencies (composition root)
# - authhub.main (lifespan startup)
# - Subscriber operations in user_management.application.operations

import logging
from typing import ClassVar, Iterable, List, Protocol, Tuple, runtime_checkable

from authhub.shared.core.event_bus import DomainEventBus, EventKey, Subscription
from authhub.shared.core.operation import Operation

logger = logging.getLogger(__name__)


@runtime_checkable
class Bootstrapper(Protocol):
    """Anything with a one-time startup hook."""

    def bootstrap(self) -> None:
        ...


class EventSubscriberOperation(Operation):
    """
    Operation that runs in reaction to domain events.

    Subclasses list the events they consume in ``subscribes_to``; each event
    is delivered to ``execute`` through a guarded handler so a failure is
    logged and emitted on this operation instead of reaching the bus.

    One instance serves every delivery for the life of the process, so
    subclasses keep no per-call state on ``self``.
    """

    subscribes_to: ClassVar[Tuple[EventKey, ...]] = ()

    def subscriptions(self) -> List[Subscription]:
        """The (event name, handler) pairs this operation needs."""
        return [Subscription.of(event_type, self.guard(self.execute)) for event_type in self.subscribes_to]

    def bootstrap(self) -> None:
        """
        Register this operation's handlers on its event bus.

        Call exactly once per process. A second call registers the handlers
        again and every event is then delivered twice.
        """
        bus = self.event_bus
        if bus is None:
            raise RuntimeError(f"{self.name} cannot bootstrap without an event bus")
        for subscription in self.subscriptions():
            bus.subscribe(subscription.event_type, subscription.handler)


def collect_subscriptions(subscribers: Iterable[EventSubscriberOperation]) -> List[Subscription]:
    """Flatten subscriber operations into the pair list accepted by DomainEventBus()."""
    pairs: List[Subscription] = []
    for subscriber in subscribers:
        pairs.extend(subscriber.subscriptions())
    return pairs


def run_bootstrappers(bootstrappers: Iterable[Bootstrapper], bus: DomainEventBus) -> int:
    """
    Run every bootstrapper once, in order, then seal the bus.

    Args:
        bootstrappers: Startup hooks, usually subscriber operations
        bus: Bus the hooks register on; sealed afterwards

    Returns:
        int: Number of bootstrappers run
    """
    count = 0
    for bootstrapper in bootstrappers:
        bootstrapper.bootstrap()
        count += 1
        logger.info(f"Bootstrapped {type(bootstrapper).__name__}")
    bus.seal()
    return count
