# 📄 File: authhub/modules/user_management/presentation/api/v1/users.py
# 🧭 Purpose (Layman Explanation):
# The web addresses for managing accounts: sign up, list, look up, change and remove users.
#
# 🧪 Purpose (Technical Summary):
# FastAPI user endpoints. Each handler builds a fresh operation from the container, executes it
# with the raw request data and renders the single outcome through the operation's
# ChannelResponder, so the possible responses are exactly the operation's declared channels.
# Listing and lookup need an authenticated ADMIN or USER; updates and deletions need an ADMIN.
#
# 🔗 Dependencies:
# - FastAPI router, Body, Depends
# - authhub.modules.user_management.presentation.dependencies (require_roles)
# - authhub.api.responder.ChannelResponder
# - authhub.shared.core.dependencies (Container)
#
# 🔄 Connected Modules / Calls From:
# - authhub.api.v1.router (mounted under /api/v1)

import logging
from typing import Any, Dict

from fastapi import APIRouter, Body, Depends, Request, status
from fastapi.responses import JSONResponse

from authhub.api.responder import ChannelResponder
from authhub.modules.user_management.application.operations.user import (
    CreateUser,
    DeleteUser,
    GetAllUsers,
    GetUser,
    UpdateUser,
)
from authhub.modules.user_management.domain.models.user import UserRole
from authhub.modules.user_management.presentation.api.schemas.user_schemas import (
    ErrorResponse,
    UserDeleteResponse,
    UserPageResponse,
    UserResponse,
)
from authhub.modules.user_management.presentation.dependencies import require_roles
from authhub.shared.core.dependencies import Container, get_container

logger = logging.getLogger(__name__)

users_router = APIRouter(prefix="/users", tags=["Users"])

AUTH_RESPONSES = {
    status.HTTP_401_UNAUTHORIZED: {"model": ErrorResponse, "description": "Missing, invalid or revoked access token"},
    status.HTTP_403_FORBIDDEN: {"model": ErrorResponse, "description": "Role not allowed"},
}

create_user_responder = ChannelResponder(
    CreateUser,
    {"SUCCESS": status.HTTP_201_CREATED, "USER_EXISTS": status.HTTP_409_CONFLICT},
    success_model=UserResponse,
    error_model=ErrorResponse,
)
get_users_responder = ChannelResponder(
    GetAllUsers,
    {"SUCCESS": status.HTTP_200_OK},
    success_model=UserPageResponse,
    error_model=ErrorResponse,
)
get_user_responder = ChannelResponder(
    GetUser,
    {"SUCCESS": status.HTTP_200_OK, "USER_NOT_FOUND": status.HTTP_404_NOT_FOUND},
    success_model=UserResponse,
    error_model=ErrorResponse,
)
update_user_responder = ChannelResponder(
    UpdateUser,
    {
        "SUCCESS": status.HTTP_200_OK,
        "USER_NOT_FOUND": status.HTTP_404_NOT_FOUND,
        "EMAIL_TAKEN": status.HTTP_409_CONFLICT,
        "USERNAME_TAKEN": status.HTTP_409_CONFLICT,
    },
    success_model=UserResponse,
    error_model=ErrorResponse,
)
delete_user_responder = ChannelResponder(
    DeleteUser,
    {"SUCCESS": status.HTTP_200_OK, "USER_NOT_FOUND": status.HTTP_404_NOT_FOUND},
    success_model=UserDeleteResponse,
    error_model=ErrorResponse,
)


@users_router.post(
    "",
    summary="Register new user account",
    description="Create a user; a verification email is sent once the account is stored",
    responses=create_user_responder.responses(),
)
async def create_user(
    payload: Dict[str, Any] = Body(...),
    container: Container = Depends(get_container),
) -> JSONResponse:
    outcome = await container.create_user().execute(payload)
    return create_user_responder.respond(outcome)


@users_router.get(
    "",
    summary="List users",
    description="Paginated user listing (`page`, `limit` query parameters)",
    responses={**AUTH_RESPONSES, **get_users_responder.responses()},
    dependencies=[Depends(require_roles(UserRole.ADMIN, UserRole.USER))],
)
async def list_users(request: Request, container: Container = Depends(get_container)) -> JSONResponse:
    outcome = await container.get_all_users().execute(dict(request.query_params))
    return get_users_responder.respond(outcome)


@users_router.get(
    "/{user_id}",
    summary="Get user by id",
    responses={**AUTH_RESPONSES, **get_user_responder.responses()},
    dependencies=[Depends(require_roles(UserRole.ADMIN, UserRole.USER))],
)
async def get_user(user_id: str, container: Container = Depends(get_container)) -> JSONResponse:
    outcome = await container.get_user().execute({"user_id": user_id})
    return get_user_responder.respond(outcome)


@users_router.patch(
    "/{user_id}",
    summary="Update user",
    description="Partial update; only the supplied fields change",
    responses={**AUTH_RESPONSES, **update_user_responder.responses()},
    dependencies=[Depends(require_roles(UserRole.ADMIN))],
)
async def update_user(
    user_id: str,
    payload: Dict[str, Any] = Body(...),
    container: Container = Depends(get_container),
) -> JSONResponse:
    outcome = await container.update_user().execute(user_id, payload)
    return update_user_responder.respond(outcome)


@users_router.delete(
    "/{user_id}",
    summary="Delete user",
    description="Remove a user; their tokens are removed in the background",
    responses={**AUTH_RESPONSES, **delete_user_responder.responses()},
    dependencies=[Depends(require_roles(UserRole.ADMIN))],
)
async def delete_user(user_id: str, container: Container = Depends(get_container)) -> JSONResponse:
    outcome = await container.delete_user().execute(user_id)
    return delete_user_responder.respond(outcome)
