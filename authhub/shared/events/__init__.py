# 📄 File: authhub/shared/events/__init__.py
# 🧭 Purpose (Layman Explanation):
# The building blocks for the "something happened" notes passed between parts of the service.
# 🧪 Purpose (Technical Summary):
# Domain event base class and causal metadata exports.
# 🔗 Dependencies:
# authhub.shared.events.base
# 🔄 Connected Modules / Calls From:
# authhub.shared.core.event_bus, user_management domain events

from authhub.shared.events.base import DomainEvent, EventMetadata

__all__ = ["DomainEvent", "EventMetadata"]
