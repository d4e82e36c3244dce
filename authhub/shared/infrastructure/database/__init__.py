# 📄 File: authhub/shared/infrastructure/database/__init__.py
# 🧭 Purpose (Layman Explanation):
# Opens and closes the connection to the database and hands out short working sessions.
# 🧪 Purpose (Technical Summary):
# SQLAlchemy async engine and session management exports.
# 🔗 Dependencies:
# sqlalchemy[asyncio]
# 🔄 Connected Modules / Calls From:
# user_management repository implementations, authhub.shared.core.dependencies

from authhub.shared.infrastructure.database.connection import Base, DatabaseConnectionManager
from authhub.shared.infrastructure.database.session import DatabaseSessionManager

__all__ = ["Base", "DatabaseConnectionManager", "DatabaseSessionManager"]
