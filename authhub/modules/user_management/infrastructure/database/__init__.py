# 📄 File: authhub/modules/user_management/infrastructure/database/__init__.py
# 🧭 Purpose (Layman Explanation):
# The database tables for accounts and tokens and the code that reads and writes them.
# 🧪 Purpose (Technical Summary):
# SQLAlchemy models and repository implementations.
# 🔗 Dependencies:
# sqlalchemy[asyncio]
# 🔄 Connected Modules / Calls From:
# authhub.shared.core.dependencies

from authhub.modules.user_management.infrastructure.database.token_repository_impl import TokenRepositoryImpl
from authhub.modules.user_management.infrastructure.database.user_repository_impl import UserRepositoryImpl

__all__ = ["TokenRepositoryImpl", "UserRepositoryImpl"]
