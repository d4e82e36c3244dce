# 📄 File: authhub/shared/events/base.py

# 🧭 Purpose (Layman Explanation):
# This file defines the basic building blocks for events, the little notes one part of the
# service leaves when something happens ("a user signed up") so other parts can react.

# 🧪 Purpose (Technical Summary):
# Immutable domain event base (pydantic) with event metadata used to trace a chain of
# reactions: every event has an id, a correlation id shared by the whole chain and a
# causation id pointing at the event that triggered it.

# 🔗 Dependencies:
# - pydantic: immutable event models
# - dataclasses: event metadata
# - uuid / datetime: identifiers and timestamps

# 🔄 Connected Modules / Calls From:
# Used by: authhub.shared.core.event_bus (dispatch key), user_management domain events,
# operations that publish or react to events

from dataclasses import asdict, dataclass, field, replace
from datetime import datetime, timezone
from typing import Any, ClassVar, Dict, Optional
from uuid import uuid4

from pydantic import BaseModel, ConfigDict, Field, model_validator


@dataclass(frozen=True)
class EventMetadata:
    """
    Metadata for domain events.

    ``correlation_id`` is shared by every event of one causal chain and
    defaults to the id of the first event. ``causation_id`` is the id of
    the event whose handler published this one.
    """
    correlation_id: Optional[str] = None
    causation_id: Optional[str] = None
    timestamp: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    actor: str = "system"
    context: Dict[str, Any] = field(default_factory=dict)

    def to_dict(self) -> Dict[str, Any]:
        """Convert metadata to dictionary."""
        data = asdict(self)
        data['timestamp'] = self.timestamp.isoformat()
        return data


class DomainEvent(BaseModel):
    """
    Base class for all domain events.

    Subclasses set the ``event_type`` class attribute, which is the name the
    event bus dispatches on, and declare their payload as model fields.
    Events are frozen once created.
    """

    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)

    event_type: ClassVar[str] = "DomainEvent"

    event_id: str = Field(default_factory=lambda: str(uuid4()))
    metadata: EventMetadata = Field(default_factory=EventMetadata)

    @model_validator(mode="after")
    def _default_correlation(self) -> "DomainEvent":
        if self.metadata.correlation_id is None:
            # first event of a chain correlates with itself
            object.__setattr__(
                self, "metadata", replace(self.metadata, correlation_id=self.event_id)
            )
        return self

    @property
    def name(self) -> str:
        return type(self).event_type

    def child_metadata(self, actor: Optional[str] = None, **context: Any) -> EventMetadata:
        """
        Metadata for an event published in reaction to this one.

        Keeps the correlation chain and records this event as the cause.
        """
        return EventMetadata(
            correlation_id=self.metadata.correlation_id,
            causation_id=self.event_id,
            actor=actor or self.metadata.actor,
            context={**self.metadata.context, **context},
        )

    def to_dict(self) -> Dict[str, Any]:
        """Convert event to dictionary representation."""
        return {
            'event_type': self.event_type,
            'event_id': self.event_id,
            'data': self.model_dump(mode="json", exclude={"event_id", "metadata"}),
            'metadata': self.metadata.to_dict(),
        }
