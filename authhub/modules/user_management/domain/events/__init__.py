# 📄 File: authhub/modules/user_management/domain/events/__init__.py
# 🧭 Purpose (Layman Explanation):
# The account "something happened" notes.
# 🧪 Purpose (Technical Summary):
# User management domain event exports.
# 🔗 Dependencies:
# authhub.shared.events.base
# 🔄 Connected Modules / Calls From:
# Publishing and subscribing operations

from authhub.modules.user_management.domain.events.user_events import (
    ForgotPassword,
    TokenCreated,
    UserCreated,
    UserDeleted,
    UserEventType,
)

__all__ = ["ForgotPassword", "TokenCreated", "UserCreated", "UserDeleted", "UserEventType"]
