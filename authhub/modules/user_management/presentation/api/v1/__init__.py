# 📄 File: authhub/modules/user_management/presentation/api/v1/__init__.py
# 🧭 Purpose (Layman Explanation):
# Version 1 account and sign-in endpoints.
# 🧪 Purpose (Technical Summary):
# Router exports.
# 🔗 Dependencies:
# FastAPI
# 🔄 Connected Modules / Calls From:
# authhub.api.v1.router

from authhub.modules.user_management.presentation.api.v1.auth import auth_router
from authhub.modules.user_management.presentation.api.v1.users import users_router

__all__ = ["auth_router", "users_router"]
