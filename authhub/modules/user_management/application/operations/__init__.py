# 📄 File: authhub/modules/user_management/application/operations/__init__.py
#
# 🧭 Purpose (Layman Explanation):
# Every account action the service can perform, each with its list of possible answers.
#
# 🧪 Purpose (Technical Summary):
# Operation exports: request-driven user and auth operations plus the event-subscribing
# token and notification operations bootstrapped at startup.
#
# 🔗 Dependencies:
# - authhub.shared.core (Operation, EventSubscriberOperation)
#
# 🔄 Connected Modules / Calls From:
# - authhub.shared.core.dependencies

from authhub.modules.user_management.application.operations.auth import (
    ForgotPassword,
    LoginUser,
    LogoutUser,
    ResetPassword,
    VerifyEmail,
)
from authhub.modules.user_management.application.operations.notification import (
    SendEmailOnForgotPassword,
    SendEmailOnUserCreation,
)
from authhub.modules.user_management.application.operations.token import (
    CreateTokenOnUserCreation,
    DeleteTokensOnUserDeletion,
)
from authhub.modules.user_management.application.operations.user import (
    CreateUser,
    DeleteUser,
    GetAllUsers,
    GetUser,
    UpdateUser,
)

__all__ = [
    "CreateTokenOnUserCreation",
    "CreateUser",
    "DeleteTokensOnUserDeletion",
    "DeleteUser",
    "ForgotPassword",
    "GetAllUsers",
    "GetUser",
    "LoginUser",
    "LogoutUser",
    "ResetPassword",
    "SendEmailOnForgotPassword",
    "SendEmailOnUserCreation",
    "UpdateUser",
    "VerifyEmail",
]
