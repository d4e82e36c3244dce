# 📄 File: authhub/modules/user_management/application/queries/user_queries.py
# 🧭 Purpose (Layman Explanation):
# The questions callers can ask about accounts: "who is this user?" and "list the users, a page at a time".
#
# 🧪 Purpose (Technical Summary):
# Pydantic query models for user lookups and paginated listing.
#
# 🔗 Dependencies:
# - pydantic for query validation
#
# 🔄 Connected Modules / Calls From:
# - authhub.modules.user_management.application.operations.user (GetUser, GetAllUsers)
# - authhub.modules.user_management.presentation.api.v1.users

from typing import Optional

from pydantic import BaseModel, EmailStr, Field, model_validator


class GetUserQuery(BaseModel):
    """Find one user by id, or by email when no id is given."""

    user_id: Optional[str] = None
    email: Optional[EmailStr] = None

    @model_validator(mode="after")
    def require_identifier(self) -> "GetUserQuery":
        if not self.user_id and not self.email:
            raise ValueError("Either user_id or email is required")
        return self


class GetAllUsersQuery(BaseModel):
    """Page request for the user listing."""

    page: int = Field(default=1, ge=1, description="1-based page number")
    limit: int = Field(default=10, ge=1, le=100, description="Page size")
