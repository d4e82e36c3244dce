# 📄 File: authhub/modules/user_management/domain/models/__init__.py
# 🧭 Purpose (Layman Explanation):
# What a user and a one-time token look like.
# 🧪 Purpose (Technical Summary):
# Domain model exports.
# 🔗 Dependencies:
# pydantic
# 🔄 Connected Modules / Calls From:
# Repositories, operations, events, API schemas

from authhub.modules.user_management.domain.models.token import Token, TokenLifetimes, TokenType
from authhub.modules.user_management.domain.models.user import Gender, Page, User, UserRole, UserWithPassword

__all__ = [
    "Gender",
    "Page",
    "Token",
    "TokenLifetimes",
    "TokenType",
    "User",
    "UserRole",
    "UserWithPassword",
]
