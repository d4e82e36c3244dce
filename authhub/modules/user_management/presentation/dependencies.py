# 📄 File: authhub/modules/user_management/presentation/dependencies.py
# 🧭 Purpose (Layman Explanation):
# The door checks for account routes: make sure the caller shows a valid sign-in token that has not
# been logged out, that the account still exists, and that it has the role the route needs.
# 🧪 Purpose (Technical Summary):
# FastAPI dependencies for bearer authentication and role-based authorization. The access token is
# checked against the token blacklist, validated as an ACCESS JWT and resolved to the stored user;
# failures raise AuthenticationError (401) or AuthorizationError (403), rendered by the application's
# AuthHubException handler.
# 🔗 Dependencies:
# FastAPI (Depends, HTTPBearer), authhub.shared.core.dependencies (Container), authhub.shared.core.exceptions
# 🔄 Connected Modules / Calls From:
# authhub.modules.user_management.presentation.api.v1.users, authhub.modules.user_management.presentation.api.v1.auth

"""
User Management Module Dependencies

- get_current_user: bearer token to stored User, 401 when missing, revoked, invalid or orphaned
- require_roles: dependency factory enforcing a set of roles, 403 otherwise
"""

import logging
from typing import Callable, Optional

from fastapi import Depends
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from authhub.modules.user_management.domain.models.token import TokenType
from authhub.modules.user_management.domain.models.user import User, UserRole
from authhub.shared.core.dependencies import Container, get_container
from authhub.shared.core.exceptions import AuthenticationError, AuthorizationError

logger = logging.getLogger(__name__)

# Missing credentials are reported by get_current_user, not by the scheme
bearer_scheme = HTTPBearer(auto_error=False)


# =========================================================================
# AUTHENTICATION
# =========================================================================

async def get_current_user(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(bearer_scheme),
    container: Container = Depends(get_container),
) -> User:
    """
    Resolve the bearer access token to the stored user.

    Args:
        credentials: ``Authorization: Bearer <token>`` header, if present
        container: Application container

    Returns:
        User: The account the token was issued to

    Raises:
        AuthenticationError: If the token is missing, revoked, invalid, expired,
            not an access token, or its user no longer exists
    """
    if credentials is None or not credentials.credentials:
        raise AuthenticationError("No token provided")

    token = credentials.credentials
    if await container.blacklist.contains(token):
        logger.info("Rejected revoked access token")
        raise AuthenticationError("Token has been revoked")

    claims = container.jwt.validate(token, TokenType.ACCESS)

    user_id = claims.get("user_id")
    user = await container.users.get_by_id(user_id) if user_id else None
    if user is None:
        logger.warning(f"Access token for unknown user: {user_id}")
        raise AuthenticationError("Unauthorized access")

    return user


# =========================================================================
# AUTHORIZATION
# =========================================================================

def require_roles(*roles: UserRole) -> Callable:
    """
    Build a dependency that admits only users holding one of ``roles``.

    The role is read from the stored user, so a role change takes effect
    without waiting for the access token to expire.
    """
    allowed = frozenset(roles)

    async def role_checker(current_user: User = Depends(get_current_user)) -> User:
        if current_user.role not in allowed:
            logger.warning(f"User {current_user.id} with role {current_user.role.value} denied")
            raise AuthorizationError(
                "Insufficient permissions",
                required_roles=sorted(role.value for role in allowed),
                user_id=current_user.id,
            )
        return current_user

    return role_checker
