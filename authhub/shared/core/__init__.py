# 📄 File: authhub/shared/core/__init__.py
#
# 🧭 Purpose (Layman Explanation):
# The heart of the service: the common shape of every action, the error types and the
# notice board ("event bus") that lets one action trigger others.
#
# 🧪 Purpose (Technical Summary):
# Operation framework exports: typed-output Operation, OperationError, DomainEventBus and the
# bootstrap contract for event-subscribing operations.
#
# 🔗 Dependencies:
# - authhub.shared.core.operation, event_bus, bootstrap, exceptions
#
# 🔄 Connected Modules / Calls From:
# - Every user_management operation, authhub.shared.core.dependencies

"""
Core Operation Framework

- Operation: single-shot emitter with declared output channels
- OperationError: payload of every ERROR channel
- DomainEventBus: in-process publish/subscribe, sealed after bootstrap
- EventSubscriberOperation / run_bootstrappers: startup wiring
"""

from authhub.shared.core.bootstrap import (
    Bootstrapper,
    EventSubscriberOperation,
    collect_subscriptions,
    run_bootstrappers,
)
from authhub.shared.core.event_bus import DomainEventBus, Subscription
from authhub.shared.core.exceptions import (
    EventBusSealedError,
    OperationContractError,
    OperationError,
    OutputAlreadyEmittedError,
    UndeclaredChannelError,
)
from authhub.shared.core.operation import ERROR, SUCCESS, VALIDATION_ERROR, Operation, OperationOutcome

__all__ = [
    "Bootstrapper",
    "DomainEventBus",
    "ERROR",
    "EventBusSealedError",
    "EventSubscriberOperation",
    "Operation",
    "OperationContractError",
    "OperationError",
    "OperationOutcome",
    "OutputAlreadyEmittedError",
    "SUCCESS",
    "Subscription",
    "UndeclaredChannelError",
    "VALIDATION_ERROR",
    "collect_subscriptions",
    "run_bootstrappers",
]
