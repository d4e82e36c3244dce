# 📄 File: authhub/api/v1/router.py
# 🧭 Purpose (Layman Explanation):
# The traffic director for version 1 of the API: sends account requests to the account handlers,
# sign-in requests to the sign-in handlers and health checks to the health endpoint.
# 🧪 Purpose (Technical Summary):
# API v1 router aggregation; mounted by authhub.main under API_V1_PREFIX.
# 🔗 Dependencies:
# FastAPI, authhub.api.v1.health, authhub.modules.user_management.presentation.api.v1.*
# 🔄 Connected Modules / Calls From:
# authhub.main

from fastapi import APIRouter

from authhub.api.v1.health import health_router
from authhub.modules.user_management.presentation.api.v1.auth import auth_router
from authhub.modules.user_management.presentation.api.v1.users import users_router

# Create main API v1 router
api_v1_router = APIRouter()

api_v1_router.include_router(health_router)
api_v1_router.include_router(users_router)
api_v1_router.include_router(auth_router)
