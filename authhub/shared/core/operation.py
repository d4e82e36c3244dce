# 📄 File: authhub/shared/core/operation.py
#
# 🧭 Purpose (Layman Explanation):
# Every thing the service can do (sign up, log in, send a verification email...) is an "operation".
# This file is the common base they all share: each operation announces in advance the possible
# results it can end with, and always finishes with exactly one of them.
#
# 🧪 Purpose (Technical Summary):
# Typed single-shot output emitter. An operation declares a closed set of output channels,
# callers attach listeners per channel, and execute() guarantees exactly one emission per call:
# escaping collaborator exceptions become an ERROR emission carrying an OperationError whose
# details is the original exception, and a run that returns silently is reported as ERROR too.
#
# 🔗 Dependencies:
# - contextvars: per-call emission tracking (safe for concurrently executing subscribers)
# - pydantic: input validation surfaced on the VALIDATION_ERROR channel
# - authhub.shared.core.exceptions (OperationError and framework contract errors)
#
# 🔄 Connected Modules / Calls From:
# - Every user_management operation (subclasses)
# - authhub.shared.core.bootstrap (event-subscribing operations)
# - Presentation layer routers (attach listeners / map outcomes to HTTP responses)

import logging
from contextvars import ContextVar
from dataclasses import dataclass
from enum import Enum
from typing import Any, Callable, ClassVar, Dict, Iterable, List, Optional, Tuple, Type, TypeVar, Union

from pydantic import BaseModel
from pydantic import ValidationError as PydanticValidationError

from authhub.shared.core.exceptions import (
    OperationContractError,
    OperationError,
    OutputAlreadyEmittedError,
    UndeclaredChannelError,
)

logger = logging.getLogger(__name__)

SUCCESS = "SUCCESS"
ERROR = "ERROR"
VALIDATION_ERROR = "VALIDATION_ERROR"

NO_OUTPUT_EMITTED = "NO_OUTPUT_EMITTED"
EVENT_HANDLER_FAILED = "EVENT_HANDLER_FAILED"

Channel = Union[str, Enum]
Listener = Callable[[Any], Any]
ModelT = TypeVar("ModelT", bound=BaseModel)


@dataclass(frozen=True)
class OperationOutcome:
    """The single output an execute() call produced."""
    channel: str
    payload: Any = None

    @property
    def ok(self) -> bool:
        return self.channel == SUCCESS

    def is_(self, channel: Channel) -> bool:
        return self.channel == _channel_name(channel)


class _Execution:
    __slots__ = ("operation", "outcome")

    def __init__(self, operation: "Operation"):
        self.operation = operation
        self.outcome: Optional[OperationOutcome] = None


_current_execution: ContextVar[Optional[_Execution]] = ContextVar("current_execution", default=None)


def _channel_name(channel: Channel) -> str:
    if isinstance(channel, Enum):
        return str(channel.value)
    return channel


class Operation:
    """
    Base class for use cases with a closed set of named outputs.

    Subclasses declare their channels in an inner ``Output`` enum (or pass
    them explicitly) and implement ``run``. Callers construct one instance
    per request, attach listeners with ``on`` and await ``execute``:

        operation = CreateUser(users, hasher, bus, logger=log)
        operation.on(CreateUser.Output.SUCCESS, lambda user: ...)
        outcome = await operation.execute(command)

    ``execute`` returns the emitted ``OperationOutcome``, so callers may
    branch on the return value instead of registering callbacks.

    Attributes:
        Output: Enum of declared channel names (``SUCCESS`` and ``ERROR`` at least)
        failure_code: OperationError code used when ``run`` raises unexpectedly
        log_payload: Include the payload in emit_success / emit_error log records
    """

    Output: ClassVar[Optional[Type[Enum]]] = None
    failure_code: ClassVar[str] = "OPERATION_FAILED"
    log_payload: ClassVar[bool] = True

    def __init__(
        self,
        channels: Optional[Union[Iterable[Channel], Type[Enum]]] = None,
        *,
        logger: Optional[Any] = None,
        event_bus: Optional[Any] = None,
    ):
        """
        Args:
            channels: Declared channel names or a str-valued Enum class;
                defaults to the class ``Output`` enum
            logger: StructuredLogger used for success / error records
            event_bus: DomainEventBus used by ``publish``
        """
        if channels is None:
            channels = type(self).Output or ()
        self._channels: Tuple[str, ...] = tuple(dict.fromkeys(_channel_name(c) for c in channels))
        self._listeners: Dict[str, List[Listener]] = {name: [] for name in self._channels}
        self._logger = logger
        self._event_bus = event_bus

    # =========================================================================
    # CHANNELS & LISTENERS
    # =========================================================================

    @property
    def name(self) -> str:
        return type(self).__name__

    @property
    def channels(self) -> Tuple[str, ...]:
        return self._channels

    @property
    def event_bus(self):
        return self._event_bus

    def declares(self, channel: Channel) -> bool:
        return _channel_name(channel) in self._listeners

    def _resolve(self, channel: Channel) -> str:
        name = _channel_name(channel)
        if name not in self._listeners:
            raise UndeclaredChannelError(self.name, name, self._channels)
        return name

    def on(self, channel: Channel, callback: Listener) -> "Operation":
        """
        Register a callback for a declared channel.

        Callbacks run synchronously, in registration order, when the
        channel is emitted. Returns the operation so calls can be chained.

        Raises:
            UndeclaredChannelError: If the channel is not declared
        """
        self._listeners[self._resolve(channel)].append(callback)
        return self

    def listener_count(self, channel: Channel) -> int:
        return len(self._listeners[self._resolve(channel)])

    # =========================================================================
    # EMISSION
    # =========================================================================

    def emit(self, channel: Channel, payload: Any = None) -> bool:
        """
        Emit a payload on a declared channel.

        Inside ``execute`` the first emission is recorded as the outcome and
        any further emission raises. A failing listener is logged and the
        remaining listeners still run.

        Returns:
            bool: True if at least one listener was registered

        Raises:
            UndeclaredChannelError: If the channel is not declared
            OutputAlreadyEmittedError: On a second emission within one execute call
        """
        return self._notify(self._record(channel, payload), payload)

    def _record(self, channel: Channel, payload: Any) -> str:
        name = self._resolve(channel)

        execution = _current_execution.get()
        if execution is not None and execution.operation is self:
            if execution.outcome is not None:
                raise OutputAlreadyEmittedError(self.name, execution.outcome.channel, name)
            execution.outcome = OperationOutcome(name, payload)
        return name

    def _notify(self, name: str, payload: Any) -> bool:
        listeners = list(self._listeners[name])
        for listener in listeners:
            try:
                listener(payload)
            except Exception:
                logger.exception(
                    f"Listener {getattr(listener, '__qualname__', listener)!s} "
                    f"for {self.name}.{name} raised"
                )
        return bool(listeners)

    def emit_success(self, payload: Any = None) -> bool:
        """Emit on ``SUCCESS`` and log an info record naming the operation."""
        name = self._record(SUCCESS, payload)
        if self._logger is not None:
            fields = {"operation": self.name, "channel": SUCCESS}
            if self.log_payload:
                fields["data"] = payload
            self._logger.info(f"Operation {self.name} succeeded", **fields)
        return self._notify(name, payload)

    def emit_error(self, error: OperationError) -> bool:
        """Emit on ``ERROR`` and log an error record with code, message and cause."""
        name = self._record(ERROR, error)
        if self._logger is not None:
            self._logger.error(
                f"Operation {self.name} failed",
                operation=self.name,
                channel=ERROR,
                error=error.to_dict() if self.log_payload else {"code": error.code},
            )
        return self._notify(name, error)

    # =========================================================================
    # EXECUTION
    # =========================================================================

    async def run(self, *args, **kwargs) -> None:
        """Perform the unit of work and emit exactly one output. Implemented by subclasses."""
        raise NotImplementedError

    async def execute(self, *args, **kwargs) -> OperationOutcome:
        """
        Run the operation and return the single output it emitted.

        Unexpected exceptions raised by ``run`` are wrapped in an
        OperationError with ``failure_code`` and emitted on ``ERROR``;
        they never propagate. Framework contract errors do propagate.

        Returns:
            OperationOutcome: Channel and payload that were emitted
        """
        execution = _Execution(self)
        token = _current_execution.set(execution)
        try:
            try:
                await self.run(*args, **kwargs)
            except OperationContractError:
                raise
            except Exception as exc:
                if execution.outcome is None:
                    self.emit_error(
                        OperationError(self.failure_code, f"{self.name} failed: {exc}", exc)
                    )
                else:
                    logger.error(
                        f"{self.name} raised after emitting {execution.outcome.channel}: {exc}",
                        exc_info=True,
                    )

            if execution.outcome is None:
                self.emit_error(
                    OperationError(NO_OUTPUT_EMITTED, f"{self.name} returned without emitting an output")
                )
        finally:
            _current_execution.reset(token)

        return execution.outcome

    # =========================================================================
    # HELPERS FOR SUBCLASSES
    # =========================================================================

    def validate_input(self, model: Type[ModelT], data: Any) -> Optional[ModelT]:
        """
        Coerce caller input into a command/query model.

        On failure emits ``VALIDATION_ERROR`` with the structured error list
        and returns None; the caller should return immediately.
        """
        if isinstance(data, model):
            return data
        try:
            if isinstance(data, BaseModel):
                data = data.model_dump()
            return model.model_validate(data)
        except PydanticValidationError as exc:
            self.emit(
                VALIDATION_ERROR,
                {
                    "message": f"Invalid {model.__name__}",
                    "errors": exc.errors(include_url=False, include_context=False, include_input=False),
                },
            )
            return None

    def publish(self, event) -> int:
        """
        Publish a domain event on the injected bus.

        Returns:
            int: Number of subscriber handlers scheduled
        """
        if self._event_bus is None:
            raise OperationContractError(f"{self.name} publishes events but has no event bus")
        return self._event_bus.publish(event)

    def guard(self, handler: Callable[[Any], Any]) -> Callable[[Any], Any]:
        """
        Wrap an event handler so that nothing it raises reaches the bus.

        A failure is logged and emitted as ``ERROR`` with code
        ``EVENT_HANDLER_FAILED`` on this operation.
        """
        async def guarded(event):
            try:
                await handler(event)
            except Exception as exc:
                logger.exception(f"{self.name} failed handling {getattr(event, 'event_type', event)!s}")
                self.emit_error(
                    OperationError(
                        EVENT_HANDLER_FAILED,
                        f"{self.name} failed handling {getattr(event, 'event_type', 'event')}: {exc}",
                        exc,
                    )
                )

        guarded.__qualname__ = f"{self.name}.guarded({getattr(handler, '__name__', 'handler')})"
        return guarded

    def __repr__(self) -> str:
        return f"<{self.name} channels={list(self._channels)}>"
