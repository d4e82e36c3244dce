# 📄 File: authhub/modules/user_management/presentation/api/schemas/user_schemas.py
# 🧭 Purpose (Layman Explanation):
# Describes what the account endpoints send back, so the API documentation shows real examples.
#
# 🧪 Purpose (Technical Summary):
# Pydantic response schemas for the user endpoints and the shared error envelope. Request bodies
# are validated by the application commands instead, so they arrive on VALIDATION_ERROR.
#
# 🔗 Dependencies:
# - pydantic for schema documentation
# - user domain enums
#
# 🔄 Connected Modules / Calls From:
# - authhub.modules.user_management.presentation.api.v1.users / auth (OpenAPI responses)

from datetime import date, datetime
from typing import Any, List, Optional

from pydantic import BaseModel, EmailStr, Field

from authhub.modules.user_management.domain.models.user import Gender, UserRole


class ErrorBody(BaseModel):
    code: str = Field(..., examples=["USER_NOT_FOUND"])
    message: str
    details: Optional[Any] = None
    request_id: Optional[str] = None


class ErrorResponse(BaseModel):
    """Envelope of every non-success response."""
    error: ErrorBody


class UserResponse(BaseModel):
    """Public view of a user account."""
    id: str
    name: str
    email: EmailStr
    username: str
    role: UserRole
    birth_date: Optional[date] = None
    gender: Optional[Gender] = None
    is_verified: bool
    created_at: datetime
    updated_at: datetime


class UserPageResponse(BaseModel):
    """One page of the user listing."""
    body: List[UserResponse]
    total: int
    page: int
    limit: int
    last_page: int


class UserDeleteResponse(BaseModel):
    user_id: str
    message: str = Field(..., examples=["Deletion was successful"])
