# 📄 File: authhub/shared/core/exceptions.py
# 🧭 Purpose (Layman Explanation):
# This file defines the special error types the account service uses to say what went wrong,
# both the errors shown to API clients and the value every use case reports when it fails.
# 🧪 Purpose (Technical Summary):
# Custom exception hierarchy with HTTP status codes and serialization for API responses,
# the immutable OperationError payload carried on every operation's ERROR channel, and the
# programming-error exceptions raised by the operation framework and the domain event bus.
# 🔗 Dependencies:
# FastAPI HTTPException, typing, HTTP status constants
# 🔄 Connected Modules / Calls From:
# authhub.shared.core.operation, authhub.shared.core.event_bus, authhub.main exception handlers,
# database session manager, redis token blacklist, SMTP email service, JWT token generator

from typing import Any, Dict, Optional

from fastapi import status


class AuthHubException(Exception):
    """
    Base exception class for the AuthHub service.
    All HTTP-facing and infrastructure exceptions inherit from this class.
    """

    def __init__(
        self,
        message: str,
        status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR,
        details: Optional[Dict[str, Any]] = None,
        error_code: Optional[str] = None
    ):
        self.message = message
        self.status_code = status_code
        self.details = details or {}
        self.error_code = error_code or self.__class__.__name__.upper()
        super().__init__(self.message)

    def to_dict(self) -> Dict[str, Any]:
        """Convert exception to dictionary format."""
        return {
            "error": {
                "code": self.error_code,
                "message": self.message,
                "details": self.details,
                "status_code": self.status_code
            }
        }


# =============================================================================
# AUTHENTICATION & AUTHORIZATION EXCEPTIONS
# =============================================================================

class AuthenticationError(AuthHubException):
    """
    Exception raised for authentication failures.
    Used when a token is malformed, expired or signed with another key.
    """

    def __init__(
        self,
        message: str = "Authentication failed",
        details: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(
            message=message,
            status_code=status.HTTP_401_UNAUTHORIZED,
            details=details,
            error_code="AUTHENTICATION_ERROR"
        )


class AuthorizationError(AuthHubException):
    """
    Exception raised for authorization failures.
    Used when an authenticated user lacks the role a route requires.
    """

    def __init__(
        self,
        message: str = "Insufficient permissions",
        required_roles: Optional[list] = None,
        user_id: Optional[str] = None,
        details: Optional[Dict[str, Any]] = None
    ):
        if not details:
            details = {}
        if required_roles:
            details["required_roles"] = required_roles
        if user_id:
            details["user_id"] = user_id

        super().__init__(
            message=message,
            status_code=status.HTTP_403_FORBIDDEN,
            details=details,
            error_code="AUTHORIZATION_ERROR"
        )


# =============================================================================
# DATABASE & INFRASTRUCTURE EXCEPTIONS
# =============================================================================

class DatabaseError(AuthHubException):
    """
    Exception raised for database operation failures.
    Used for connection issues, query failures, rolled back transactions.
    """

    def __init__(
        self,
        message: str = "Database error",
        operation: Optional[str] = None,
        table: Optional[str] = None,
        details: Optional[Dict[str, Any]] = None
    ):
        if not details:
            details = {}

        if operation:
            details["operation"] = operation
        if table:
            details["table"] = table

        super().__init__(
            message=message,
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            details=details,
            error_code="DATABASE_ERROR"
        )


class DuplicateResourceError(AuthHubException):
    """
    Exception raised when a unique constraint rejects a write.
    ``field`` names the column that collided (``email``, ``username``) when it is known.
    """

    def __init__(
        self,
        message: str = "Resource already exists",
        resource_type: Optional[str] = None,
        field: Optional[str] = None,
        details: Optional[Dict[str, Any]] = None
    ):
        if not details:
            details = {}
        if resource_type:
            details["resource_type"] = resource_type
        if field:
            details["field"] = field

        self.field = field
        super().__init__(
            message=message,
            status_code=status.HTTP_409_CONFLICT,
            details=details,
            error_code="DUPLICATE_RESOURCE"
        )


class CacheError(AuthHubException):
    """
    Exception raised for redis failures.
    """

    def __init__(
        self,
        message: str = "Cache error",
        operation: Optional[str] = None,
        key: Optional[str] = None,
        details: Optional[Dict[str, Any]] = None
    ):
        if not details:
            details = {}

        if operation:
            details["operation"] = operation
        if key:
            details["key"] = key

        super().__init__(
            message=message,
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            details=details,
            error_code="CACHE_ERROR"
        )


class EmailDeliveryError(AuthHubException):
    """
    Exception raised when the SMTP server refuses or drops a message.
    """

    def __init__(
        self,
        message: str = "Email delivery failed",
        recipient: Optional[str] = None,
        details: Optional[Dict[str, Any]] = None
    ):
        if not details:
            details = {}
        if recipient:
            details["recipient"] = recipient

        super().__init__(
            message=message,
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            details=details,
            error_code="EMAIL_DELIVERY_ERROR"
        )


# =============================================================================
# OPERATION FRAMEWORK
# =============================================================================

class OperationError(Exception):
    """
    Payload of every operation's ``ERROR`` channel.

    ``code`` is a stable constant naming the failure class, ``message`` is
    human-readable, ``details`` is the original cause (usually the exception
    a collaborator raised). All three are read-only.
    """

    def __init__(self, code: str, message: str, details: Any = None):
        super().__init__(message)
        self._code = code
        self._message = message
        self._details = details

    @property
    def code(self) -> str:
        return self._code

    @property
    def message(self) -> str:
        return self._message

    @property
    def details(self) -> Any:
        return self._details

    def __repr__(self) -> str:
        return f"OperationError(code={self._code!r}, message={self._message!r})"

    def to_dict(self) -> Dict[str, Any]:
        """Serialize for logs and HTTP bodies; the cause is rendered, not exposed."""
        cause = self._details
        if isinstance(cause, BaseException):
            cause = {"type": type(cause).__name__, "message": str(cause)}
        return {"code": self._code, "message": self._message, "details": cause}


class OperationContractError(RuntimeError):
    """Base class for misuse of the operation framework. Never a runtime outcome."""


class UndeclaredChannelError(OperationContractError):
    """Raised when a listener is attached to, or a payload emitted on, an undeclared channel."""

    def __init__(self, operation: str, channel: str, declared):
        self.operation = operation
        self.channel = channel
        self.declared = tuple(declared)
        super().__init__(
            f"{operation} has no output channel {channel!r}; declared: {', '.join(self.declared)}"
        )


class OutputAlreadyEmittedError(OperationContractError):
    """Raised when an operation tries to emit a second output within one execute call."""

    def __init__(self, operation: str, first: str, second: str):
        self.operation = operation
        self.first = first
        self.second = second
        super().__init__(
            f"{operation} already emitted {first!r}; refusing second emission {second!r}"
        )


class EventBusSealedError(OperationContractError):
    """Raised when a subscription is attempted after the bootstrap phase ended."""

    def __init__(self, event_type: str):
        self.event_type = event_type
        super().__init__(
            f"Cannot subscribe to {event_type!r}: subscriptions are closed after bootstrap"
        )
