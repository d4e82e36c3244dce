"""
Domain event bus for the AuthHub service.
Lets one operation announce that something happened without knowing who reacts to it.
"""

import asyncio
import inspect
import logging
from dataclasses import dataclass
from enum import Enum
from typing import Any, Awaitable, Callable, Dict, Iterable, List, Mapping, Optional, Set, Tuple, Type, Union

from authhub.shared.core.exceptions import EventBusSealedError
from authhub.shared.events.base import DomainEvent

logger = logging.getLogger(__name__)

EventHandler = Callable[[DomainEvent], Union[Awaitable[None], None]]
EventKey = Union[str, Enum, Type[DomainEvent]]


def event_name(event_type: EventKey) -> str:
    """Dispatch key for an event class, an event enum member or a plain name."""
    if isinstance(event_type, type) and issubclass(event_type, DomainEvent):
        return event_type.event_type
    if isinstance(event_type, Enum):
        return str(event_type.value)
    return event_type


@dataclass(frozen=True)
class Subscription:
    """One handler registered for one event name."""
    event_type: str
    handler: EventHandler

    @classmethod
    def of(cls, event_type: EventKey, handler: EventHandler) -> "Subscription":
        return cls(event_name(event_type), handler)

    @property
    def handler_name(self) -> str:
        return getattr(self.handler, "__qualname__", repr(self.handler))

    def to_dict(self) -> Dict[str, Any]:
        return {"event_type": self.event_type, "handler": self.handler_name}


class DomainEventBus:
    """
    In-process publish/subscribe registry keyed by event name.

    Subscriptions are registered during startup (through the constructor or
    ``subscribe``) and frozen by ``seal``. ``publish`` schedules one task per
    handler in subscription order and returns without waiting for them; a
    failing handler is logged and counted, never re-raised. No event history
    is kept.
    """

    def __init__(self, subscriptions: Iterable[Subscription] = (), name: str = "domain"):
        self.name = name
        self._subscriptions: Dict[str, List[Subscription]] = {}
        self._pending: Set[asyncio.Task] = set()
        self._sealed = False
        self._stats = {
            "published": 0,
            "dispatched": 0,
            "failed": 0,
        }
        for subscription in subscriptions:
            self._register(subscription)

    # =========================================================================
    # SUBSCRIPTION PHASE
    # =========================================================================

    def _register(self, subscription: Subscription) -> None:
        if self._sealed:
            raise EventBusSealedError(subscription.event_type)
        self._subscriptions.setdefault(subscription.event_type, []).append(subscription)
        logger.info(f"Handler {subscription.handler_name} subscribed to {subscription.event_type}")

    def subscribe(self, event_type: EventKey, handler: EventHandler) -> Subscription:
        """
        Append a handler for an event name.

        Args:
            event_type: Event class, event enum member or event name
            handler: Coroutine function or plain callable taking the event

        Raises:
            EventBusSealedError: If the bootstrap phase already ended
        """
        subscription = Subscription.of(event_type, handler)
        self._register(subscription)
        return subscription

    def seal(self) -> None:
        """End the subscription phase; the registry is read-only afterwards."""
        if not self._sealed:
            self._sealed = True
            logger.info(
                f"Event bus '{self.name}' sealed with "
                f"{sum(len(subs) for subs in self._subscriptions.values())} subscriptions"
            )

    @property
    def sealed(self) -> bool:
        return self._sealed

    def subscriptions(self) -> Mapping[str, Tuple[Subscription, ...]]:
        """Snapshot of the registry."""
        return {name: tuple(subs) for name, subs in self._subscriptions.items()}

    def handler_count(self, event_type: EventKey) -> int:
        return len(self._subscriptions.get(event_name(event_type), ()))

    # =========================================================================
    # PUBLISHING
    # =========================================================================

    def publish(self, event: DomainEvent) -> int:
        """
        Schedule every handler subscribed to the event's name.

        Must be called from inside a running event loop. Handlers are
        scheduled in subscription order; the call returns before any of
        them runs.

        Returns:
            int: Number of handlers scheduled
        """
        subscriptions = list(self._subscriptions.get(event.event_type, ()))
        self._stats["published"] += 1

        if not subscriptions:
            logger.debug(f"No handlers for event type: {event.event_type}")
            return 0

        for subscription in subscriptions:
            task = asyncio.create_task(
                self._dispatch(subscription, event),
                name=f"{event.event_type}:{subscription.handler_name}",
            )
            self._pending.add(task)
            task.add_done_callback(self._pending.discard)

        logger.info(
            f"Event published: {event.event_type} - {event.event_id} "
            f"({len(subscriptions)} handlers, correlation {event.metadata.correlation_id})"
        )
        return len(subscriptions)

    async def _dispatch(self, subscription: Subscription, event: DomainEvent) -> None:
        try:
            result = subscription.handler(event)
            if inspect.isawaitable(result):
                await result
            self._stats["dispatched"] += 1
        except Exception as e:
            self._stats["failed"] += 1
            logger.error(
                f"Handler {subscription.handler_name} failed for event "
                f"{event.event_type} {event.event_id}: {e}",
                exc_info=True,
            )

    async def drain(self) -> None:
        """Wait for all scheduled handlers, including ones scheduled while draining."""
        while self._pending:
            await asyncio.gather(*list(self._pending), return_exceptions=True)

    @property
    def pending(self) -> int:
        return len(self._pending)

    def get_stats(self) -> Dict[str, Any]:
        """Get event bus statistics."""
        return {
            **self._stats,
            "pending": len(self._pending),
            "sealed": self._sealed,
            "subscription_count": sum(len(subs) for subs in self._subscriptions.values()),
            "event_types": list(self._subscriptions.keys()),
        }
